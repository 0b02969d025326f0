from flask import current_app
from itsdangerous import URLSafeTimedSerializer, BadData

TOKEN_SALT = "api-token"


def _serializer():
    return URLSafeTimedSerializer(current_app.config["SECRET_KEY"], salt=TOKEN_SALT)


def issue_token(user):
    """Sign the identity payload handed to clients. Login flows live elsewhere."""
    return _serializer().dumps({"id": user.id})


def load_payload(token):
    """
    Returns the verified payload dict, or None when the token is forged,
    expired or malformed.
    """
    try:
        payload = _serializer().loads(token, max_age=current_app.config["TOKEN_MAX_AGE"])
    except BadData:
        return None
    if not isinstance(payload, dict) or "id" not in payload:
        return None
    return payload


def bearer_token(request):
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()
