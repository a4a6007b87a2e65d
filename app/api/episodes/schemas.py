# app/api/episodes/schemas.py
from marshmallow import Schema, fields

class EpisodeLikeResponseSchema(Schema):
    """에피소드 좋아요 토글 응답."""
    is_liked = fields.Bool(required=True)
    like_count = fields.Int(required=True)

class EpisodeStatsSchema(Schema):
    """에피소드 통계 응답."""
    episode_id = fields.Str(required=True)
    views = fields.Int(required=True)
    like_count = fields.Int(required=True)
    comment_count = fields.Int(required=True)
    is_liked = fields.Bool(dump_only=True, dump_default=False)
