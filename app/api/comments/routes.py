# app/api/comments/routes.py
import logging
from dataclasses import asdict
from flask import Blueprint, request, jsonify, current_app
from flask_jwt_extended import jwt_required
from marshmallow import ValidationError

from app.core.security import get_current_user
from app.api.comments.schemas import CommentCreateSchema, CommentResponseSchema, VoteRequestSchema
from app.api.comments.services import CommentNotFoundError, mark_viewer_votes, serialize_forest
from app.api.comments.tree import count_nodes
from app.api.comments.votes import vote_of


comments_bp = Blueprint('comments_bp', __name__)

@comments_bp.route('/<string:story_id>/episodes/<string:episode_id>/comments', methods=['GET'])
@jwt_required(optional=True)
def get_comments(story_id: str, episode_id: str):
    """
    에피소드의 댓글을 답글 트리 형태로 조회합니다.
    - comments 는 화면 표시 순서(부모 다음에 그 답글들)의 평면 목록이며, 각 항목의 depth 와 reply_ids 로 트리를 복원합니다.
    - 최상위 댓글과 각 답글 목록은 오래된 순으로 정렬됩니다.
    - 로그인한 경우 각 댓글에 is_liked / is_disliked 가 채워집니다.
    """
    comment_service = current_app.services['comments']
    user = get_current_user()
    try:
        forest = comment_service.get_comment_forest(story_id, episode_id)
        comments = serialize_forest(forest, user.user_id if user else None)
        return jsonify({
            "comments": CommentResponseSchema(many=True).dump(comments),
            "root_ids": [node.comment.comment_id for node in forest],
            "total": count_nodes(forest)
        }), 200
    except ValueError as e:
        return jsonify({"error_code": "RESOURCE_NOT_FOUND", "message": str(e)}), 404
    except Exception as e:
        logging.error(f"댓글 목록 조회 중 오류 발생 (story_id: {story_id}, episode_id: {episode_id}): {e}", exc_info=True)
        return jsonify({"error_code": "INTERNAL_SERVER_ERROR", "message": "댓글 목록 조회 중 오류가 발생했습니다."}), 500


@comments_bp.route('/<string:story_id>/episodes/<string:episode_id>/comments', methods=['POST'])
@jwt_required()
def create_comment(story_id: str, episode_id: str):
    """
    에피소드에 새 댓글을 작성합니다. parent_id 를 주면 해당 댓글의 답글이 됩니다.
    - 성공 시, 생성된 댓글 정보를 201 Created 상태 코드와 함께 반환합니다.
    """
    comment_service = current_app.services['comments']
    user = get_current_user()
    try:
        data = CommentCreateSchema().load(request.get_json(silent=True) or {})
        comment = comment_service.add_comment(story_id, episode_id, user, data['content'], data.get('parent_id'))
        payload = mark_viewer_votes(asdict(comment), user.user_id)
        return jsonify(CommentResponseSchema().dump(payload)), 201
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400
    except ValueError as e: # 스토리나 에피소드가 없는 경우
        return jsonify({"error_code": "RESOURCE_NOT_FOUND", "message": str(e)}), 404
    except Exception as e:
        logging.error(f"댓글 생성 중 오류 발생 (episode_id: {episode_id}): {e}", exc_info=True)
        return jsonify({"error_code": "COMMENT_CREATION_FAILED", "message": "댓글 생성 중 오류가 발생했습니다."}), 500


@comments_bp.route('/<string:story_id>/episodes/<string:episode_id>/comments/<string:comment_id>/vote', methods=['POST'])
@jwt_required()
def vote_comment(story_id: str, episode_id: str, comment_id: str):
    """
    댓글에 좋아요/싫어요를 누르거나 취소합니다.
    - 같은 유형을 다시 누르면 취소, 반대 유형을 누르면 전환됩니다.
    """
    comment_service = current_app.services['comments']
    user = get_current_user()
    try:
        data = VoteRequestSchema().load(request.get_json(silent=True) or {})
        comment = comment_service.toggle_comment_vote(story_id, episode_id, comment_id, user.user_id, data['vote_type'])
        payload = mark_viewer_votes(asdict(comment), user.user_id)
        response = CommentResponseSchema().dump(payload)
        my_vote = vote_of(comment, user.user_id)
        response['my_vote'] = my_vote.value if my_vote else None
        return jsonify(response), 200
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400
    except CommentNotFoundError as e:
        return jsonify({"error_code": "COMMENT_NOT_FOUND", "message": str(e)}), 404
    except ValueError as e: # 스토리나 에피소드가 없는 경우
        return jsonify({"error_code": "RESOURCE_NOT_FOUND", "message": str(e)}), 404
    except Exception as e:
        logging.error(f"댓글 투표 처리 중 오류 발생 (comment_id: {comment_id}): {e}", exc_info=True)
        return jsonify({"error_code": "VOTE_TOGGLE_FAILED", "message": "투표 처리 중 오류가 발생했습니다."}), 500
