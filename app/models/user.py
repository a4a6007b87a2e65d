# app/models/user.py
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

class UserRole(Enum):
    """사용자 권한 등급"""
    READER = "READER"
    AUTHOR = "AUTHOR"
    ADMIN = "ADMIN"

@dataclass
class User:
    """
    Firestore 'users' 컬렉션의 문서 구조를 정의하는 데이터클래스.
    문서 ID는 Firebase Auth UID 와 동일합니다.
    """
    user_id: str
    email: str
    username: str
    role: str = UserRole.READER.value
    avatar_url: Optional[str] = None
    is_verified: bool = True
    join_date: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
