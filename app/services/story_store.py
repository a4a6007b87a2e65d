# app/services/story_store.py
import logging
from dataclasses import asdict
from typing import Any, Callable, Dict, List, Optional, Tuple, TypeVar
from firebase_admin import firestore

from app.models.comment import Comment

T = TypeVar('T')

class StoryStore:
    """
    Firestore 'stories' 컬렉션 접근을 담당하는 공용 서비스 클래스.
    에피소드는 스토리 문서의 'episodes' 배열에, 댓글은 각 에피소드의 'comments' 배열에 내장됩니다.
    부분(field-level) 업데이트 경로가 없으므로 모든 변경은 'episodes' 배열 전체를 다시 씁니다.
    """
    def __init__(self, db=None):
        self.db = db or firestore.client()
        self.stories_ref = self.db.collection('stories')

    @staticmethod
    def _locate_episode(snapshot, story_id: str, episode_id: str) -> Tuple[List[Dict[str, Any]], int]:
        """스토리 스냅샷에서 episodes 배열 사본과 대상 에피소드의 인덱스를 찾습니다."""
        if not snapshot.exists:
            raise ValueError(f"스토리를 찾을 수 없습니다: {story_id}")

        episodes = list((snapshot.to_dict() or {}).get('episodes') or [])
        for index, episode in enumerate(episodes):
            if episode.get('episode_id') == episode_id:
                return episodes, index
        raise ValueError(f"에피소드를 찾을 수 없습니다: {episode_id}")

    def get_episode(self, story_id: str, episode_id: str) -> Dict[str, Any]:
        """스토리 문서를 읽어 에피소드 dict 를 반환합니다."""
        snapshot = self.stories_ref.document(story_id).get()
        episodes, index = self._locate_episode(snapshot, story_id, episode_id)
        return episodes[index]

    def fetch_comments(self, story_id: str, episode_id: str) -> List[Comment]:
        """에피소드에 저장된 평면 댓글 목록을 현재 상태 그대로 읽어옵니다."""
        episode = self.get_episode(story_id, episode_id)
        return [Comment.from_dict(data) for data in episode.get('comments') or []]

    def persist_comments(self, story_id: str, episode_id: str, comments: List[Comment]) -> None:
        """
        에피소드의 댓글 목록을 통째로 덮어씁니다.
        버전 검사가 없으므로 동시에 쓰면 마지막 쓰기가 이깁니다. 변경 작업에는 update_episode 를 사용하세요.
        """
        story_ref = self.stories_ref.document(story_id)
        episodes, index = self._locate_episode(story_ref.get(), story_id, episode_id)
        episodes[index] = dict(episodes[index], comments=[asdict(c) for c in comments])
        story_ref.update({'episodes': episodes})

    def update_episode(self, story_id: str, episode_id: str, mutate: Callable[[Dict[str, Any]], T]) -> T:
        """
        트랜잭션 안에서 에피소드를 읽고, mutate(episode) 로 변경한 뒤 episodes 배열 전체를 씁니다.
        - 같은 문서에 대한 동시 쓰기가 있으면 Firestore 가 트랜잭션을 중단하고 함수를 다시 실행합니다.
          mutate 는 항상 그 시점의 최신 에피소드 사본을 받습니다.
        - mutate 의 반환값을 그대로 돌려줍니다. mutate 가 던진 예외는 롤백 후 그대로 전파됩니다.
        """
        transaction = self.db.transaction()

        @firestore.transactional
        def _update_in_transaction(transaction, story_id, episode_id):
            story_ref = self.stories_ref.document(story_id)
            snapshot = story_ref.get(transaction=transaction)
            episodes, index = self._locate_episode(snapshot, story_id, episode_id)

            episode = dict(episodes[index])
            result = mutate(episode)
            episodes[index] = episode
            transaction.update(story_ref, {'episodes': episodes})
            return result

        return _update_in_transaction(transaction, story_id, episode_id)

    def increment_story_view(self, story_id: str) -> None:
        """스토리 조회수를 원자적으로 1 증가시킵니다."""
        story_ref = self.stories_ref.document(story_id)
        if not story_ref.get().exists:
            raise ValueError(f"스토리를 찾을 수 없습니다: {story_id}")
        story_ref.update({'views': firestore.Increment(1)})
        logging.info(f"스토리 조회수 증가 (story_id: {story_id})")

# 서비스 인스턴스는 app/__init__.py에서 생성 및 주입됩니다.
story_store: Optional[StoryStore] = None
