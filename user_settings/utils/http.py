from typing import Any, Dict, Optional, Tuple, Type
from flask import request, jsonify
from marshmallow import Schema, ValidationError

def ok(payload: Dict[str, Any], status: int = 200):
    return jsonify(payload), status


def no_content(status: int = 200):
    return "", status


def error(code: str, message: str, status: int = 400, **extra):
    body: Dict[str, Any] = {"error": {"code": code, "message": message}}
    if extra:
        body["error"].update(extra)
    return jsonify(body), status

def json_body() -> Any:
    # force=True allows a missing Content-Type header; form bodies are not
    # accepted, so anything that is not JSON loads as None
    return request.get_json(force=True, silent=True)


def validate_schema(schema_cls: Type[Schema], payload: Any) -> Tuple[Optional[Any], Optional[Dict[str, Any]]]:
    """Loads ``payload`` through ``schema_cls``; returns ``(data, None)`` or ``(None, errors)``."""
    try:
        return schema_cls().load(payload), None
    except ValidationError as err:
        messages = err.messages
        if not isinstance(messages, dict):
            messages = {"_schema": messages}
        return None, messages
