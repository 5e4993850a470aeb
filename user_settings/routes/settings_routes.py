from flask import Blueprint
from user_settings.utils.auth import require_auth
from user_settings.controllers.settings_controller import (
    update_nps_survey_handler,
    get_mcp_config_handler,
    update_mcp_config_handler
)

settings_bp = Blueprint("user_settings", __name__, url_prefix="/user-settings")

@settings_bp.route("/nps-survey", methods=["PATCH"])
@require_auth
def update_nps_survey():
    return update_nps_survey_handler()

@settings_bp.route("/mcp-config", methods=["GET"])
@require_auth
def get_mcp_config():
    return get_mcp_config_handler()

@settings_bp.route("/mcp-config", methods=["PATCH"])
@require_auth
def update_mcp_config():
    return update_mcp_config_handler()
