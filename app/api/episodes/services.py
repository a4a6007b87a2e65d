# app/api/episodes/services.py

import logging
from typing import Optional, Dict, Any, Tuple

from app.api.comments.votes import toggle_membership
from app.services.story_store import StoryStore

class EpisodeService:
    """
    에피소드 좋아요/조회수 관련 비즈니스 로직을 담당하는 서비스 클래스.
    """
    def __init__(self, story_store: StoryStore):
        self.story_store = story_store

    def toggle_like(self, story_id: str, episode_id: str, user_id: str) -> Tuple[bool, int]:
        """에피소드 좋아요를 누르거나 취소합니다. (좋아요 여부, 좋아요 수)를 반환합니다."""
        def _apply(episode):
            likes, liked = toggle_membership(list(episode.get('likes') or []), user_id)
            episode['likes'] = likes
            return liked, len(likes)

        liked, like_count = self.story_store.update_episode(story_id, episode_id, _apply)
        logging.info(f"에피소드 좋아요 {'추가' if liked else '취소'} (episode_id: {episode_id}, user_id: {user_id})")
        return liked, like_count

    def increment_view(self, story_id: str, episode_id: str) -> int:
        """에피소드 조회수를 1 증가시키고 증가된 값을 반환합니다."""
        def _apply(episode):
            episode['views'] = (episode.get('views') or 0) + 1
            return episode['views']

        return self.story_store.update_episode(story_id, episode_id, _apply)

    def increment_story_view(self, story_id: str) -> None:
        self.story_store.increment_story_view(story_id)

    def get_episode_stats(self, story_id: str, episode_id: str, current_user_id: Optional[str]) -> Dict[str, Any]:
        """조회수, 좋아요 수, 댓글 수와 요청 사용자의 좋아요 여부를 집계합니다."""
        episode = self.story_store.get_episode(story_id, episode_id)
        likes = episode.get('likes') or []
        return {
            "episode_id": episode_id,
            "views": episode.get('views') or 0,
            "like_count": len(likes),
            "comment_count": len(episode.get('comments') or []),
            "is_liked": bool(current_user_id) and current_user_id in likes
        }

# 서비스 인스턴스는 app/__init__.py에서 생성 및 주입됩니다.
episode_service: Optional[EpisodeService] = None
