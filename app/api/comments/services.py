# app/api/comments/services.py

import logging
import uuid
from dataclasses import asdict
from typing import Optional, List, Union

from app.core.security import CurrentUser
from app.models.comment import Comment, VoteType
from app.services.story_store import StoryStore
from app.utils.datetime_utils import now_ms
from .tree import CommentNode, build_forest, find_orphans, flatten_forest
from .votes import toggle_vote

class CommentNotFoundError(ValueError):
    """스토리/에피소드는 있지만 대상 댓글이 없을 때 발생합니다."""

def new_comment(episode_id: str, user_id: str, username: str, user_role: str,
                content: str, parent_id: Optional[str] = None) -> Comment:
    """
    새 댓글 레코드를 만듭니다. ID와 작성 시각을 부여하고 투표 목록은 비워 둡니다.
    parent_id 는 호출자가 준 값을 그대로 사용하며 존재 여부를 검사하지 않습니다.
    """
    return Comment(
        comment_id=str(uuid.uuid4()),
        episode_id=episode_id,
        user_id=user_id,
        username=username,
        user_role=user_role,
        content=content,
        created_at=now_ms(),
        parent_id=parent_id,
        likes=[],
        dislikes=[]
    )

def mark_viewer_votes(data: dict, viewer_id: Optional[str]) -> dict:
    """댓글 dict 에 요청 사용자 기준 is_liked / is_disliked 를 채웁니다."""
    data['is_liked'] = bool(viewer_id) and viewer_id in (data.get('likes') or [])
    data['is_disliked'] = bool(viewer_id) and viewer_id in (data.get('dislikes') or [])
    return data

def serialize_forest(forest: List[CommentNode], viewer_id: Optional[str]) -> List[dict]:
    """forest 를 표시 순서의 평면 목록(depth, reply_ids 포함)으로 만들고 투표 여부를 채웁니다."""
    return [mark_viewer_votes(item, viewer_id) for item in flatten_forest(forest)]

class CommentService:
    """
    댓글 관련 비즈니스 로직을 담당하는 서비스 클래스.
    - 조회 경로: Comment Store -> 트리 재구성 -> 렌더링
    - 쓰기 경로: 요청 -> 투표 토글/댓글 생성 -> Comment Store (트랜잭션 read-modify-write)
    저장소 I/O 오류는 재시도하지 않고 그대로 호출자에게 전파합니다.
    """
    def __init__(self, story_store: StoryStore):
        self.story_store = story_store

    def get_comment_forest(self, story_id: str, episode_id: str) -> List[CommentNode]:
        """에피소드 댓글을 답글 트리로 재구성합니다. 고아 댓글은 제외하고 경고 로그만 남깁니다."""
        comments = self.story_store.fetch_comments(story_id, episode_id)
        orphan_ids = find_orphans(comments)
        if orphan_ids:
            logging.warning(f"부모를 찾을 수 없는 댓글이 표시에서 제외됩니다 (episode_id: {episode_id}, comment_ids: {orphan_ids})")
        return build_forest(comments)

    def add_comment(self, story_id: str, episode_id: str, user: CurrentUser,
                    content: str, parent_id: Optional[str] = None) -> Comment:
        """새 댓글(또는 답글)을 에피소드에 추가합니다. 작성자 정보는 현재 시점 값으로 저장됩니다."""
        comment = new_comment(
            episode_id=episode_id,
            user_id=user.user_id,
            username=user.username,
            user_role=user.role,
            content=content,
            parent_id=parent_id
        )

        def _append(episode):
            episode['comments'] = list(episode.get('comments') or []) + [asdict(comment)]

        self.story_store.update_episode(story_id, episode_id, _append)
        logging.info(f"댓글 생성 완료 (episode_id: {episode_id}, comment_id: {comment.comment_id}, parent_id: {parent_id})")
        return comment

    def toggle_comment_vote(self, story_id: str, episode_id: str, comment_id: str,
                            user_id: str, vote_type: Union[VoteType, str]) -> Comment:
        """
        댓글 좋아요/싫어요를 토글합니다.
        트랜잭션 안에서 최신 댓글 레코드에 토글을 적용하므로 다른 사용자의 동시 투표가 유실되지 않습니다.
        """
        def _apply(episode):
            comments = list(episode.get('comments') or [])
            for index, data in enumerate(comments):
                if data.get('comment_id') == comment_id:
                    updated = toggle_vote(Comment.from_dict(data), user_id, vote_type)
                    comments[index] = asdict(updated)
                    episode['comments'] = comments
                    return updated
            raise CommentNotFoundError(f"투표할 댓글을 찾을 수 없습니다: {comment_id}")

        try:
            return self.story_store.update_episode(story_id, episode_id, _apply)
        except ValueError:
            raise
        except Exception as e:
            logging.error(f"댓글 투표 토글 실패 (comment_id: {comment_id}): {e}", exc_info=True)
            raise

# 서비스 인스턴스는 app/__init__.py에서 생성 및 주입됩니다.
comment_service: Optional[CommentService] = None
