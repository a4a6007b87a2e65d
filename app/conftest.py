# app/conftest.py
"""
pytest 공용 픽스처

Firestore 대신 메모리 딕셔너리로 동작하는 테스트 더블(app/testing_utils.py)을 사용합니다.
트랜잭션 데코레이터는 그대로 통과시키도록 패치합니다.
"""

import pytest
from firebase_admin import firestore
from flask_jwt_extended import create_access_token, create_refresh_token

from app import create_app
from app.api.auth.services import AuthService
from app.api.comments.services import CommentService
from app.api.episodes.services import EpisodeService
from app.api.settings.services import SettingsService
from app.core.security import build_claims
from app.services.story_store import StoryStore
from app.testing_utils import FakeFirestore, make_story_doc


@pytest.fixture(autouse=True)
def passthrough_transactional(monkeypatch):
    monkeypatch.setattr(firestore, 'transactional', lambda f: f)


@pytest.fixture
def fake_db():
    return FakeFirestore()


@pytest.fixture
def story_store(fake_db):
    return StoryStore(db=fake_db)


@pytest.fixture
def seed_story(fake_db):
    def _seed(story_id="story-1", episode_ids=("ep-1",), comments=None):
        fake_db.collection('stories').docs[story_id] = make_story_doc(story_id, episode_ids, comments)
        return fake_db.collection('stories').docs[story_id]
    return _seed


@pytest.fixture
def app(fake_db, story_store):
    auth_service = AuthService()
    services = {
        'story_store': story_store,
        'comments': CommentService(story_store=story_store),
        'episodes': EpisodeService(story_store=story_store),
        'settings': SettingsService(db=fake_db),
        'auth': auth_service,
    }
    app = create_app('testing', services=services)
    auth_service.init_app(app, db=fake_db)
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_headers(app):
    """역할별 Access 토큰 Authorization 헤더를 만드는 헬퍼."""
    def _headers(user_id="reader-1", username="reader", role="READER"):
        with app.app_context():
            token = create_access_token(identity=user_id, additional_claims=build_claims(username, role))
        return {"Authorization": f"Bearer {token}"}
    return _headers


@pytest.fixture
def refresh_headers(app):
    def _headers(user_id="reader-1"):
        with app.app_context():
            token = create_refresh_token(identity=user_id)
        return {"Authorization": f"Bearer {token}"}
    return _headers
