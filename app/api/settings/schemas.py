# app/api/settings/schemas.py
from flask import current_app
from marshmallow import Schema, fields, validate, validates, ValidationError

from app.utils.datetime_utils import ms_to_iso

class AnnouncementCreateSchema(Schema):
    """POST /api/settings/announcements 요청 본문."""
    message = fields.Str(required=True)

    @validates('message')
    def validate_message(self, value, **kwargs):
        max_length = current_app.config.get('ANNOUNCEMENT_MAX_LENGTH', 200)
        if not value.strip():
            raise ValidationError("공지 내용을 입력해 주세요.")
        if len(value) > max_length:
            raise ValidationError(f"공지는 {max_length}자를 넘을 수 없습니다.")

class AnnouncementResponseSchema(Schema):
    announcement_id = fields.Str(required=True)
    message = fields.Str(required=True)
    posted_at = fields.Method("get_posted_at")

    def get_posted_at(self, obj):
        return ms_to_iso(obj.posted_at)

class AnnouncementSettingsSchema(Schema):
    """공지 순환 간격(초)."""
    rotation_interval = fields.Int(required=True, validate=validate.Range(min=1, max=3600))

class SocialLinksSchema(Schema):
    """소셜 링크. 빈 값(None)으로 링크를 지울 수 있습니다."""
    youtube = fields.URL(allow_none=True)
    facebook = fields.URL(allow_none=True)
    instagram = fields.URL(allow_none=True)
