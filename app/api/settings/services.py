# app/api/settings/services.py

import logging
import uuid
from dataclasses import asdict
from typing import Optional, Dict, Any, List
from firebase_admin import firestore

from app.models.settings import Announcement, AnnouncementSettings, SocialLinks
from app.utils.datetime_utils import now_ms

def current_announcement(announcements: List[Announcement], rotation_interval: int,
                         now: int) -> Optional[Announcement]:
    """
    now(epoch 밀리초) 시점에 배너에 표시될 공지를 고릅니다.
    공지는 게시 순으로 돌아가며 rotation_interval 초마다 다음 공지로 넘어갑니다.
    """
    if not announcements:
        return None
    ordered = sorted(announcements, key=lambda a: a.posted_at)
    interval_ms = max(int(rotation_interval), 1) * 1000
    return ordered[(now // interval_ms) % len(ordered)]

class SettingsService:
    """
    사이트 설정(공지 배너, 소셜 링크)을 담당하는 서비스 클래스.
    설정은 'settings' 컬렉션의 고정 문서에 저장됩니다.
    """
    def __init__(self, db=None):
        self.db = db or firestore.client()
        self.settings_ref = self.db.collection('settings')
        self.announcements_doc = self.settings_ref.document('announcements')
        self.social_links_doc = self.settings_ref.document('social_links')

    def _read_announcements_doc(self) -> Dict[str, Any]:
        doc = self.announcements_doc.get()
        return (doc.to_dict() or {}) if doc.exists else {}

    def get_announcements(self) -> List[Announcement]:
        data = self._read_announcements_doc()
        return [Announcement(**item) for item in data.get('list') or []]

    def add_announcement(self, message: str) -> Announcement:
        """새 공지를 추가합니다. 문서가 없으면 새로 만듭니다."""
        announcement = Announcement(
            announcement_id=str(uuid.uuid4()),
            message=message,
            posted_at=now_ms()
        )
        doc = self.announcements_doc.get()
        if doc.exists:
            self.announcements_doc.update({'list': firestore.ArrayUnion([asdict(announcement)])})
        else:
            self.announcements_doc.set({'list': [asdict(announcement)]})
        logging.info(f"공지 추가 완료 (announcement_id: {announcement.announcement_id})")
        return announcement

    def delete_announcement(self, announcement_id: str) -> None:
        data = self._read_announcements_doc()
        items = data.get('list') or []
        remaining = [item for item in items if item.get('announcement_id') != announcement_id]
        if len(remaining) == len(items):
            raise ValueError(f"삭제할 공지를 찾을 수 없습니다: {announcement_id}")
        self.announcements_doc.update({'list': remaining})

    def get_announcement_settings(self) -> AnnouncementSettings:
        settings = self._read_announcements_doc().get('settings')
        if not settings:
            return AnnouncementSettings()
        return AnnouncementSettings(**settings)

    def save_announcement_settings(self, rotation_interval: int) -> AnnouncementSettings:
        settings = AnnouncementSettings(rotation_interval=rotation_interval)
        self.announcements_doc.set({'settings': asdict(settings)}, merge=True)
        return settings

    def get_current_announcement(self) -> Optional[Announcement]:
        settings = self.get_announcement_settings()
        return current_announcement(self.get_announcements(), settings.rotation_interval, now_ms())

    def get_social_links(self) -> SocialLinks:
        doc = self.social_links_doc.get()
        if not doc.exists:
            return SocialLinks()
        data = doc.to_dict() or {}
        return SocialLinks(**{k: data.get(k) for k in ('youtube', 'facebook', 'instagram')})

    def save_social_links(self, links: Dict[str, Optional[str]]) -> SocialLinks:
        """전달된 링크만 병합 저장합니다."""
        self.social_links_doc.set(links, merge=True)
        return self.get_social_links()

# 서비스 인스턴스는 app/__init__.py에서 생성 및 주입됩니다.
settings_service: Optional[SettingsService] = None
