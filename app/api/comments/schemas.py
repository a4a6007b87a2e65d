# app/api/comments/schemas.py
from flask import current_app
from marshmallow import Schema, fields, validate, validates, post_load, ValidationError

from app.models.comment import VoteType
from app.utils.datetime_utils import ms_to_iso

class CommentCreateSchema(Schema):
    """
    POST /api/stories/{story_id}/episodes/{episode_id}/comments
    댓글/답글 생성을 요청할 때의 데이터 형식을 정의하고 유효성을 검사합니다.
    """
    content = fields.Str(required=True)
    parent_id = fields.Str(load_default=None, allow_none=True)

    @validates('content')
    def validate_content(self, value, **kwargs):
        max_length = current_app.config.get('COMMENT_MAX_LENGTH', 1000)
        if not value.strip():
            raise ValidationError("댓글 내용을 입력해 주세요.")
        if len(value) > max_length:
            raise ValidationError(f"댓글은 1~{max_length}자 사이여야 합니다.")

    @post_load
    def normalize_parent_id(self, data, **kwargs):
        # 빈 문자열이나 공백뿐인 parent_id 는 최상위 댓글로 취급합니다.
        parent_id = data.get('parent_id')
        if parent_id is not None and not parent_id.strip():
            data['parent_id'] = None
        return data

class VoteRequestSchema(Schema):
    """POST .../comments/{comment_id}/vote 요청 본문."""
    vote_type = fields.Str(required=True, validate=validate.OneOf([v.value for v in VoteType]))

class CommentResponseSchema(Schema):
    """
    댓글 정보 응답을 위한 최종 JSON 형식을 정의합니다.
    트리 조회 응답에서는 depth 와 reply_ids 로 답글 관계를 표현합니다 (중첩 없음).
    """
    comment_id = fields.Str(required=True)
    episode_id = fields.Str(required=True)
    user_id = fields.Str(required=True)
    username = fields.Str(required=True)
    user_role = fields.Str(required=True)
    content = fields.Str(required=True)
    parent_id = fields.Str(allow_none=True)
    created_at = fields.Method("get_created_at")
    like_count = fields.Method("get_like_count")
    dislike_count = fields.Method("get_dislike_count")
    depth = fields.Int(dump_default=0)
    reply_ids = fields.List(fields.Str(), dump_default=[])

    # 서비스 로직에서 채워주는 응답 전용 필드
    is_liked = fields.Bool(dump_only=True, dump_default=False)
    is_disliked = fields.Bool(dump_only=True, dump_default=False)

    def get_created_at(self, obj):
        return ms_to_iso(obj['created_at'])

    def get_like_count(self, obj):
        return len(obj.get('likes') or [])

    def get_dislike_count(self, obj):
        return len(obj.get('dislikes') or [])
