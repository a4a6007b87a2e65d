# app/api/auth/services.py
import logging
from datetime import datetime, timezone
from typing import Dict, Any, Tuple, Optional
from dataclasses import asdict, fields
from firebase_admin import firestore, auth as firebase_auth
from flask import Flask
from app.models.user import User, UserRole
from app.utils.datetime_utils import DateTimeUtils

AVATAR_URL_TEMPLATE = "https://api.dicebear.com/7.x/initials/svg?seed={seed}"

def _user_from_dict(data: Dict[str, Any]) -> User:
    """Firestore 문서에서 User 가 모르는 필드는 무시합니다."""
    known = {f.name for f in fields(User)}
    return User(**{k: v for k, v in data.items() if k in known})

class AuthService:
    def __init__(self):
        self.db = None
        self.users_ref = None
        self.revoked_tokens_ref = None
        self.app: Optional[Flask] = None

    def init_app(self, app: Flask, db=None):
        """앱 초기화 과정에서 호출되어 DB 연결 및 앱 컨텍스트를 설정합니다."""
        self.db = db or firestore.client()
        self.users_ref = self.db.collection('users')
        self.revoked_tokens_ref = self.db.collection('revoked_tokens')
        self.app = app

    def verify_id_token(self, id_token: str) -> Optional[Dict[str, Any]]:
        """
        Firebase Auth ID 토큰을 검증하고 디코드된 클레임을 반환합니다.
        유효하지 않거나 만료/폐기된 토큰이면 None 을 반환합니다.
        """
        try:
            return firebase_auth.verify_id_token(id_token)
        except (firebase_auth.InvalidIdTokenError, firebase_auth.ExpiredIdTokenError,
                firebase_auth.RevokedIdTokenError) as e:
            logging.warning(f"Firebase ID 토큰 검증 실패: {e}")
            return None

    def get_user(self, user_id: str) -> Optional[User]:
        doc = self.users_ref.document(user_id).get()
        if not doc.exists:
            return None
        return _user_from_dict(doc.to_dict())

    def get_or_create_user(self, decoded_token: dict) -> Tuple[User, bool]:
        """
        Firebase UID 로 사용자 프로필을 조회하고, 없으면 새로 만듭니다.
        - 신규 가입자는 모두 READER 권한으로 시작합니다.
        - username 은 이메일의 '@' 앞부분을 사용합니다.
        """
        uid = decoded_token.get('uid')
        if not uid:
            raise ValueError("Firebase token must contain 'uid'.")

        existing = self.get_user(uid)
        if existing:
            return existing, False

        email = decoded_token.get('email') or ''
        new_user = User(
            user_id=uid,
            email=email,
            username=email.split('@')[0] if email else uid,
            role=UserRole.READER.value,
            avatar_url=AVATAR_URL_TEMPLATE.format(seed=email or uid),
            is_verified=True,
            join_date=DateTimeUtils.now()
        )
        # Firestore 호환 변환 후 저장
        user_data = DateTimeUtils.for_firestore(asdict(new_user))
        self.users_ref.document(uid).set(user_data)
        logging.info(f"신규 사용자 프로필 생성 (user_id: {uid})")
        return new_user, True

    # --- Blocklist 관련 로직 ---
    def add_token_to_blocklist(self, jti: str, expires: datetime):
        """전달받은 토큰의 jti를 만료 시간과 함께 Firestore에 저장합니다."""
        token_data = DateTimeUtils.for_firestore({
            'revoked_at': DateTimeUtils.now(),
            'expires_at': expires
        })
        self.revoked_tokens_ref.document(jti).set(token_data)

    def is_token_revoked(self, jwt_payload: dict) -> bool:
        """jti를 이용해 해당 토큰이 무효화 목록에 있는지 확인합니다."""
        jti = jwt_payload['jti']
        doc = self.revoked_tokens_ref.document(jti).get()
        return doc.exists

    def logout_user(self, access_jti: str, access_exp: int, refresh_jti: str, refresh_exp: int):
        """Access 토큰과 Refresh 토큰을 모두 Blocklist에 추가합니다."""
        self.add_token_to_blocklist(access_jti, datetime.fromtimestamp(access_exp, tz=timezone.utc))
        self.add_token_to_blocklist(refresh_jti, datetime.fromtimestamp(refresh_exp, tz=timezone.utc))
        logging.info(f"사용자 로그아웃 처리 완료. JTI: {access_jti[:8]}..., {refresh_jti[:8]}...")

auth_service = AuthService()
