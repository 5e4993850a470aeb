from enum import Enum

class SettingsKey(str, Enum):
    NPS_SURVEY = "npsSurvey"
    MCP_CONFIG = "mcpConfig"

class NpsSurveyVariant(str, Enum):
    RESPONDED = "responded"
    WAITING_FOR_RESPONSE = "waitingForResponse"
