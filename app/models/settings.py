# app/models/settings.py
from dataclasses import dataclass
from typing import Optional

DEFAULT_ROTATION_INTERVAL = 15  # 초

@dataclass
class Announcement:
    """'settings/announcements' 문서의 list 배열 원소."""
    announcement_id: str
    message: str
    posted_at: int  # epoch 밀리초

@dataclass
class AnnouncementSettings:
    """공지 배너 순환 설정."""
    rotation_interval: int = DEFAULT_ROTATION_INTERVAL

@dataclass
class SocialLinks:
    """'settings/social_links' 문서 구조."""
    youtube: Optional[str] = None
    facebook: Optional[str] = None
    instagram: Optional[str] = None
