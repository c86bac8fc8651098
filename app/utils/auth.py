from functools import wraps
from flask import request, g
from models import db
from models.user import UserProfile
from .responses import error
from .jwt import decode_token, TokenError


def bearer_token():
    auth = request.headers.get("Authorization", "")
    if not auth:
        return None
    return auth.split(" ", 1)[1] if auth.startswith("Bearer ") else auth


def auth_required(func):
    @wraps(func)
    def wrapper(*args, **kwargs):
        token = bearer_token()
        if not token:
            return error("Auth header missing", status=401)
        try:
            payload = decode_token(token, expected_type="access")
        except TokenError as e:
            return error(str(e), status=401)

        g.phone = payload["sub"]
        request.phone = g.phone
        user = db.session.get(UserProfile, g.phone)
        if not user:
            return error("Shopper not found, please sign in again", status=401)
        request.user = user
        return func(*args, **kwargs)

    return wrapper
