from functools import wraps
from flask import current_app
from flask_login import current_user
from helpers import create_error

def login_required(f):
    @wraps(f)
    def wrapper(*args, **kwargs):
        if not current_user.is_authenticated:
            current_app.logger.warning("Rejected unauthenticated request to %s", f.__name__)
            raise create_error(401, "Unauthenticated", "Authentication Failed")
        return f(*args, **kwargs)
    return wrapper
