# app/api/auth/routes.py

import logging
import jwt
from flask import Blueprint, request, jsonify, current_app
from flask_jwt_extended import (
    create_access_token,
    create_refresh_token,
    jwt_required,
    get_jwt_identity
)
from marshmallow import ValidationError

from app.api.auth.schemas import FirebaseLoginSchema, LogoutRequestSchema, UserResponseSchema
from app.core.security import build_claims

auth_bp = Blueprint('auth_bp', __name__)

@auth_bp.route('/firebase', methods=['POST'])
def firebase_login():
    """Firebase ID 토큰을 검증하고 API 용 Access/Refresh 토큰을 발급합니다."""
    auth_service = current_app.services['auth']
    try:
        validated_data = FirebaseLoginSchema().load(request.get_json(silent=True) or {})
        decoded_token = auth_service.verify_id_token(validated_data['id_token'])
        if not decoded_token:
            return jsonify({"error_code": "INVALID_ID_TOKEN", "message": "유효하지 않은 인증 토큰입니다."}), 401

        user, is_new_user = auth_service.get_or_create_user(decoded_token)

        claims = build_claims(user.username, user.role)
        access_token = create_access_token(identity=user.user_id, additional_claims=claims)
        refresh_token = create_refresh_token(identity=user.user_id)

        return jsonify({
            "access_token": access_token,
            "refresh_token": refresh_token,
            "is_new_user": is_new_user,
            "user_info": UserResponseSchema().dump(user)
        }), 200
    except ValidationError as e:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": e.messages}), 400
    except Exception as e:
        logging.error(f"Firebase 로그인 중 예외 발생: {e}", exc_info=True)
        return jsonify({"error_code": "INTERNAL_SERVER_ERROR", "message": "서버 내부 오류가 발생했습니다."}), 500


# --- 토큰 재발급 엔드포인트 ---
@auth_bp.route('/token/refresh', methods=['POST'])
@jwt_required(refresh=True) # Refresh Token만 허용하는 데코레이터
def refresh_token():
    """유효한 Refresh Token으로 새로운 Access Token을 발급합니다. 권한 변경이 클레임에 반영됩니다."""
    auth_service = current_app.services['auth']
    current_user_id = get_jwt_identity()
    user = auth_service.get_user(current_user_id)
    if not user:
        return jsonify({"error_code": "USER_NOT_FOUND", "message": "사용자를 찾을 수 없습니다."}), 404

    new_access_token = create_access_token(
        identity=current_user_id,
        additional_claims=build_claims(user.username, user.role)
    )
    return jsonify(access_token=new_access_token), 200


@auth_bp.route('/me', methods=['GET'])
@jwt_required()
def get_me():
    auth_service = current_app.services['auth']
    user = auth_service.get_user(get_jwt_identity())
    if not user:
        return jsonify({"error_code": "USER_NOT_FOUND", "message": "사용자를 찾을 수 없습니다."}), 404
    return jsonify(UserResponseSchema().dump(user)), 200


# --- 로그아웃 엔드포인트 ---
@auth_bp.route('/logout', methods=['POST'])
def logout():
    """로그아웃. 전달받은 Access/Refresh 토큰을 무효화 목록에 추가합니다."""
    auth_service = current_app.services['auth']
    try:
        data = LogoutRequestSchema().load(request.get_json(silent=True) or {})

        # 만료된 토큰도 무효화할 수 있도록 만료 검증 없이 해독합니다.
        secret_key = current_app.config['JWT_SECRET_KEY']
        algorithm = current_app.config.get('JWT_ALGORITHM', 'HS256')
        decoded_access = jwt.decode(data['access_token'], secret_key, algorithms=[algorithm], options={"verify_exp": False})
        decoded_refresh = jwt.decode(data['refresh_token'], secret_key, algorithms=[algorithm], options={"verify_exp": False})

        auth_service.logout_user(decoded_access['jti'], decoded_access['exp'], decoded_refresh['jti'], decoded_refresh['exp'])

        return jsonify({"message": "로그아웃 되었습니다."}), 200

    except ValidationError as e:
         return jsonify({"error_code": "VALIDATION_ERROR", "details": e.messages}), 400
    except jwt.PyJWTError as e:
        logging.error(f"JWT 해독 오류 발생: {e}", exc_info=True)
        return jsonify({"error_code": "INVALID_TOKEN", "message": "유효하지 않은 토큰입니다."}), 422
    except Exception as e:
        logging.error(f"로그아웃 처리 중 오류 발생: {e}", exc_info=True)
        return jsonify({"error_code": "LOGOUT_FAILED", "message": "로그아웃 처리 중 오류가 발생했습니다."}), 500
