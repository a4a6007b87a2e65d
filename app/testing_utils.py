# app/testing_utils.py
"""
테스트용 Firestore 대체 객체와 데이터 빌더

Firestore 대신 메모리 딕셔너리로 동작합니다. conftest.py 의 픽스처와 각 테스트 모듈에서 함께 사용합니다.
"""

import copy
from dataclasses import asdict

from firebase_admin import firestore

from app.models.comment import Comment
from app.models.story import Story, Episode


class FakeSnapshot:
    def __init__(self, doc_id, data):
        self.id = doc_id
        self._data = data

    @property
    def exists(self):
        return self._data is not None

    def to_dict(self):
        return copy.deepcopy(self._data)


class FakeDocumentRef:
    def __init__(self, collection, doc_id):
        self._collection = collection
        self.id = doc_id

    def get(self, transaction=None):
        return FakeSnapshot(self.id, self._collection.docs.get(self.id))

    def set(self, data, merge=False):
        if merge and self.id in self._collection.docs:
            self._collection.docs[self.id].update(copy.deepcopy(data))
        else:
            self._collection.docs[self.id] = copy.deepcopy(data)

    def update(self, data):
        if self.id not in self._collection.docs:
            raise KeyError(f"No document to update: {self.id}")
        doc = self._collection.docs[self.id]
        for key, value in data.items():
            if isinstance(value, firestore.Increment):
                doc[key] = doc.get(key, 0) + value.value
            elif isinstance(value, firestore.ArrayUnion):
                current = doc.get(key, [])
                doc[key] = current + [v for v in value.values if v not in current]
            else:
                doc[key] = copy.deepcopy(value)


class FakeCollection:
    def __init__(self):
        self.docs = {}

    def document(self, doc_id):
        return FakeDocumentRef(self, doc_id)


class FakeTransaction:
    def __init__(self):
        self.writes = []

    def update(self, ref, data):
        self.writes.append((ref.id, data))
        ref.update(data)

    def set(self, ref, data, merge=False):
        self.writes.append((ref.id, data))
        ref.set(data, merge=merge)


class FakeFirestore:
    def __init__(self):
        self.collections = {}
        self.transactions = []

    def collection(self, name):
        return self.collections.setdefault(name, FakeCollection())

    def transaction(self):
        transaction = FakeTransaction()
        self.transactions.append(transaction)
        return transaction



def make_comment(comment_id, parent_id=None, created_at=0, likes=None, dislikes=None,
                 episode_id="ep-1", user_id="author-1"):
    return Comment(
        comment_id=comment_id,
        episode_id=episode_id,
        user_id=user_id,
        username=user_id,
        user_role="READER",
        content=f"comment {comment_id}",
        created_at=created_at,
        parent_id=parent_id,
        likes=list(likes or []),
        dislikes=list(dislikes or []),
    )


def make_story_doc(story_id="story-1", episode_ids=("ep-1",), comments=None):
    """에피소드와 (첫 에피소드의) 댓글이 내장된 스토리 문서를 만듭니다."""
    episodes = []
    for index, episode_id in enumerate(episode_ids):
        episode = Episode(
            episode_id=episode_id,
            story_id=story_id,
            title=f"Episode {index + 1}",
            created_at=1000 + index,
            updated_at=1000 + index,
            status="published",
        )
        if index == 0 and comments:
            episode.comments = [asdict(c) for c in comments]
        episodes.append(asdict(episode))

    story = Story(
        story_id=story_id,
        author_id="writer-1",
        author_name="writer",
        title="A Serial",
        created_at=1,
        status="published",
        episodes=episodes,
    )
    return asdict(story)

