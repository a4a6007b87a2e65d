# app/core/security.py
from dataclasses import dataclass
from functools import wraps
from typing import Optional
from flask import jsonify
from flask_jwt_extended import get_jwt, get_jwt_identity, verify_jwt_in_request

from app.models.user import UserRole

@dataclass(frozen=True)
class CurrentUser:
    """요청을 보낸 인증 사용자. JWT identity 와 추가 클레임(username, role)으로 구성됩니다."""
    user_id: str
    username: str
    role: str

def build_claims(username: str, role: str) -> dict:
    """Access 토큰에 넣을 추가 클레임."""
    return {"username": username, "role": role}

def get_current_user() -> Optional[CurrentUser]:
    """
    현재 요청의 사용자 정보를 반환합니다. 익명 요청이면 None.
    jwt_required / jwt_required(optional=True) 로 보호된 라우트 안에서 호출해야 합니다.
    """
    user_id = get_jwt_identity()
    if not user_id:
        return None
    claims = get_jwt()
    return CurrentUser(
        user_id=user_id,
        username=claims.get("username", ""),
        role=claims.get("role", UserRole.READER.value)
    )

def roles_required(*roles: UserRole):
    """지정한 역할의 사용자만 접근할 수 있도록 라우트를 보호합니다."""
    allowed = {r.value for r in roles}

    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            verify_jwt_in_request()
            role = get_jwt().get("role")
            if role not in allowed:
                return jsonify({"error_code": "FORBIDDEN", "message": "이 작업을 수행할 권한이 없습니다."}), 403
            return f(*args, **kwargs)
        return decorated_function
    return decorator
