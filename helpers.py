from flask import jsonify, request
from werkzeug.exceptions import BadRequest, UnsupportedMediaType
from datetime import datetime
import logging
import pytz


class ApiError(Exception):
    """
    Error raised by handlers and rendered by the app-level error handlers.
    Carries the same (statusCode, name, message) triple the client sees.
    """

    def __init__(self, status_code, name, message, data=None):
        super().__init__(message)
        self.status_code = status_code
        self.name = name
        self.message = message
        self.data = data

    def to_dict(self):
        body = {
            "statusCode": self.status_code,
            "name": self.name,
            "message": self.message,
        }
        if self.data is not None:
            body["data"] = self.data
        return body


def create_error(status_code, name, message, data=None):
    return ApiError(status_code, name, message, data)


def create_response(message, data):
    return jsonify({"message": message, "data": data})


def json_body():
    # Only a truly empty body counts as "no fields"
    if not request.get_data():
        return {}
    try:
        data = request.get_json()
    except (BadRequest, UnsupportedMediaType):
        raise create_error(400, "ValidationError", "Malformed JSON body")
    if not isinstance(data, dict):
        raise create_error(400, "ValidationError", "Request body must be a JSON object")
    return data


def parse_timestamp(value, field="timestamp"):
    """
    Accepts an ISO-8601 string or JavaScript epoch milliseconds and returns
    a naive UTC datetime (the form every DateTime column stores).
    """
    if isinstance(value, bool) or value is None:
        raise create_error(400, "ValidationError", f"Invalid {field}")

    if isinstance(value, (int, float)):
        try:
            parsed = datetime.fromtimestamp(value / 1000, tz=pytz.utc)
        except (OverflowError, OSError, ValueError):
            raise create_error(400, "ValidationError", f"Invalid {field}")
    elif isinstance(value, str):
        raw = value.strip()
        if raw.endswith("Z"):
            raw = raw[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(raw)
        except ValueError:
            raise create_error(400, "ValidationError", f"Invalid {field}")
    else:
        raise create_error(400, "ValidationError", f"Invalid {field}")

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(pytz.utc).replace(tzinfo=None)
    return parsed


def log_level(name, default="INFO"):
    """Resolve a LOG_LEVEL setting, falling back to default for unknown names."""
    level = (name or default).strip().upper()
    if isinstance(logging.getLevelName(level), int):
        return level
    return default


def format_timestamp(value):
    return value.isoformat() if value else None
