import jwt
from datetime import datetime, timedelta, timezone
from functools import wraps
from flask import request, jsonify, g, current_app

from petshop.models.user import UserRole

ALGORITHM = "HS256"


def create_access_token(data: dict, expires_in: timedelta = timedelta(hours=1)) -> str:
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + expires_in
    to_encode.update({"exp": expire, "type": "access"})
    encoded_jwt = jwt.encode(to_encode, current_app.config['JWT_SECRET_KEY'], algorithm=ALGORITHM)
    return encoded_jwt


def current_user_id() -> str:
    return g.user.get("sub")


def jwt_required(f):
    @wraps(f)
    def decorated_function(*args, **kwargs):
        auth_header = request.headers.get("Authorization")
        if not auth_header or not auth_header.startswith("Bearer "):
            return jsonify({"error_code": "UNAUTHORIZED", "message": "Authorization header is missing or invalid"}), 401

        token = auth_header.split(" ")[1]

        try:
            payload = jwt.decode(token, current_app.config['JWT_SECRET_KEY'], algorithms=[ALGORITHM])
        except jwt.ExpiredSignatureError:
            return jsonify({"error_code": "TOKEN_EXPIRED", "message": "Token has expired"}), 401
        except jwt.InvalidTokenError:
            return jsonify({"error_code": "INVALID_TOKEN", "message": "Invalid token"}), 401

        if payload.get("type") != "access" or not payload.get("sub"):
            return jsonify({"error_code": "INVALID_TOKEN", "message": "Invalid token"}), 401

        g.user = payload
        return f(*args, **kwargs)

    return decorated_function


def roles_required(*roles):
    """jwt_required 이후 토큰의 role 클레임이 허용 목록에 있는지 확인합니다."""
    def decorator(f):
        @wraps(f)
        @jwt_required
        def decorated_function(*args, **kwargs):
            if g.user.get("role") not in roles:
                return jsonify({"error_code": "FORBIDDEN", "message": "You do not have permission to perform this action"}), 403
            return f(*args, **kwargs)
        return decorated_function
    return decorator


staff_required = roles_required(UserRole.STAFF.value, UserRole.ADMIN.value)
admin_required = roles_required(UserRole.ADMIN.value)
