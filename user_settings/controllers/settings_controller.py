import logging
from flask import request
from user_settings.schemas.settings_schema import NpsSurveyStateSchema, McpUserConfigSchema
from user_settings.services.user_service import get_user_settings, update_settings
from user_settings.utils.enums import SettingsKey
from user_settings.utils.http import ok, no_content, error, json_body, validate_schema

logger = logging.getLogger(__name__)


def update_nps_survey_handler():
    user_id = request.user_id

    state, errors = validate_schema(NpsSurveyStateSchema, json_body())
    if errors:
        logger.warning(f"Rejected nps survey state for user {user_id}: {errors}")
        return error("VALIDATION_ERROR", "Invalid nps survey state structure", 400, details=errors)

    update_settings(user_id, {SettingsKey.NPS_SURVEY.value: state})
    return no_content()


def get_mcp_config_handler():
    settings = get_user_settings(request.user_id) or {}
    mcp_config = settings.get(SettingsKey.MCP_CONFIG.value) or {}
    return ok({"jsonConfig": mcp_config.get("jsonConfig")})


def update_mcp_config_handler():
    user_id = request.user_id

    config, errors = validate_schema(McpUserConfigSchema, json_body())
    if errors:
        logger.warning(f"Rejected MCP configuration for user {user_id}: {errors}")
        return error("VALIDATION_ERROR", "Invalid MCP configuration structure", 400, details=errors)

    json_config = config["jsonConfig"]
    # An unset config clears the whole mcpConfig entry
    update_settings(user_id, {
        SettingsKey.MCP_CONFIG.value: {"jsonConfig": json_config} if json_config else None,
    })

    return ok(config)
