import json
import math
from marshmallow import Schema, fields, post_load, ValidationError, EXCLUDE
from user_settings.utils.enums import NpsSurveyVariant

# Characters removed by JavaScript's String.prototype.trim
JS_WHITESPACE = (
    "\t\n\v\f\r \u00a0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000\ufeff"
)


def is_number(value) -> bool:
    # bool is an int subclass but never a JSON number here
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    # NaN and Infinity cannot be stored in a JSON column
    return math.isfinite(value)


def _reject_constant(name):
    raise ValueError(f"Unsupported JSON constant: {name}")


class StrictNumber(fields.Field):
    """Accepts JSON numbers as-is; booleans and numeric strings are rejected."""

    default_error_messages = {"invalid": "Not a valid number."}

    def _deserialize(self, value, attr, data, **kwargs):
        if not is_number(value):
            raise self.make_error("invalid")
        return value


class JsonObjectString(fields.Field):
    """
    A string holding a JSON object.

    Surrounding whitespace is trimmed and a blank string loads as ``None``.
    The trimmed text is returned verbatim, never re-serialized.
    """

    default_error_messages = {
        "invalid": "Not a valid string.",
        "invalid_json": "Not valid JSON.",
        "not_object": "JSON value must be an object.",
    }

    def _deserialize(self, value, attr, data, **kwargs):
        if not isinstance(value, str):
            raise self.make_error("invalid")

        trimmed = value.strip(JS_WHITESPACE)
        if not trimmed:
            return None

        try:
            # Only the shape is checked; ints stay text so long literals parse
            parsed = json.loads(trimmed, parse_int=str, parse_constant=_reject_constant)
        except (ValueError, RecursionError) as exc:
            raise self.make_error("invalid_json") from exc

        if not isinstance(parsed, dict):
            raise self.make_error("not_object")

        return trimmed


class NpsSurveyStateSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    last_shown_at = StrictNumber(required=True, data_key="lastShownAt")
    responded = fields.Raw(allow_none=True)
    waiting_for_response = fields.Raw(allow_none=True, data_key="waitingForResponse")
    ignored_count = fields.Raw(allow_none=True, data_key="ignoredCount")

    @post_load
    def make_state(self, data, **kwargs):
        # responded wins over waitingForResponse
        if data.get("responded") is True:
            return {
                NpsSurveyVariant.RESPONDED.value: True,
                "lastShownAt": data["last_shown_at"],
            }

        if data.get("waiting_for_response") is True and is_number(data.get("ignored_count")):
            return {
                NpsSurveyVariant.WAITING_FOR_RESPONSE.value: True,
                "ignoredCount": data["ignored_count"],
                "lastShownAt": data["last_shown_at"],
            }

        raise ValidationError("Survey state must be either responded or waiting for a response")


class McpUserConfigSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    json_config = JsonObjectString(required=True, allow_none=True, data_key="jsonConfig")

    @post_load
    def make_config(self, data, **kwargs):
        return {"jsonConfig": data["json_config"]}
