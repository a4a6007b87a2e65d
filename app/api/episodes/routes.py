# app/api/episodes/routes.py
import logging
from flask import Blueprint, jsonify, Response, current_app
from flask_jwt_extended import jwt_required, get_jwt_identity

from app.api.episodes.schemas import EpisodeLikeResponseSchema, EpisodeStatsSchema


episodes_bp = Blueprint('episodes_bp', __name__)

@episodes_bp.route('/<string:story_id>/episodes/<string:episode_id>/like', methods=['POST'])
@jwt_required()
def toggle_episode_like(story_id: str, episode_id: str):
    """에피소드 좋아요를 누르거나 취소합니다."""
    episode_service = current_app.services['episodes']
    user_id = get_jwt_identity()
    try:
        is_liked, like_count = episode_service.toggle_like(story_id, episode_id, user_id)
        return jsonify(EpisodeLikeResponseSchema().dump({"is_liked": is_liked, "like_count": like_count})), 200
    except ValueError as e:
        return jsonify({"error_code": "RESOURCE_NOT_FOUND", "message": str(e)}), 404
    except Exception as e:
        logging.error(f"에피소드 좋아요 토글 실패 (episode_id: {episode_id}): {e}", exc_info=True)
        return jsonify({"error_code": "LIKE_TOGGLE_FAILED", "message": "좋아요 처리 중 오류가 발생했습니다."}), 500


@episodes_bp.route('/<string:story_id>/episodes/<string:episode_id>/view', methods=['POST'])
def increment_episode_view(story_id: str, episode_id: str):
    """에피소드 조회수를 1 증가시킵니다. 로그인하지 않아도 호출할 수 있습니다."""
    episode_service = current_app.services['episodes']
    try:
        views = episode_service.increment_view(story_id, episode_id)
        return jsonify({"views": views}), 200
    except ValueError as e:
        return jsonify({"error_code": "RESOURCE_NOT_FOUND", "message": str(e)}), 404
    except Exception as e:
        logging.error(f"에피소드 조회수 증가 실패 (episode_id: {episode_id}): {e}", exc_info=True)
        return jsonify({"error_code": "VIEW_COUNT_FAILED", "message": "조회수 처리 중 오류가 발생했습니다."}), 500


@episodes_bp.route('/<string:story_id>/view', methods=['POST'])
def increment_story_view(story_id: str):
    episode_service = current_app.services['episodes']
    try:
        episode_service.increment_story_view(story_id)
        return Response(status=204)
    except ValueError as e:
        return jsonify({"error_code": "RESOURCE_NOT_FOUND", "message": str(e)}), 404
    except Exception as e:
        logging.error(f"스토리 조회수 증가 실패 (story_id: {story_id}): {e}", exc_info=True)
        return jsonify({"error_code": "VIEW_COUNT_FAILED", "message": "조회수 처리 중 오류가 발생했습니다."}), 500


@episodes_bp.route('/<string:story_id>/episodes/<string:episode_id>/stats', methods=['GET'])
@jwt_required(optional=True)
def get_episode_stats(story_id: str, episode_id: str):
    """에피소드의 조회수/좋아요/댓글 수를 조회합니다."""
    episode_service = current_app.services['episodes']
    try:
        stats = episode_service.get_episode_stats(story_id, episode_id, get_jwt_identity())
        return jsonify(EpisodeStatsSchema().dump(stats)), 200
    except ValueError as e:
        return jsonify({"error_code": "RESOURCE_NOT_FOUND", "message": str(e)}), 404
    except Exception as e:
        logging.error(f"에피소드 통계 조회 실패 (episode_id: {episode_id}): {e}", exc_info=True)
        return jsonify({"error_code": "INTERNAL_SERVER_ERROR", "message": "에피소드 정보 조회 중 오류가 발생했습니다."}), 500
