# app/test_app.py
"""
애플리케이션 팩토리 테스트

사용법: python -m pytest app/test_app.py -v
"""

import firebase_admin
import pytest

from app import create_app
from app.core.config import TestingConfig

def test_unknown_route_returns_json_404(client):
    res = client.get("/api/nope")
    assert res.status_code == 404
    assert res.get_json()["error_code"] == "NOT_FOUND"

def test_wrong_method_keeps_status(client):
    res = client.delete("/api/settings/social-links")
    assert res.status_code == 405

def test_testing_config_is_loaded(app):
    assert app.config["TESTING"] is True
    assert app.config["COMMENT_MAX_LENGTH"] == 1000
    assert set(app.services) == {"story_store", "comments", "episodes", "settings", "auth"}

def test_missing_firebase_credentials_fail_fast(monkeypatch):
    monkeypatch.setattr(firebase_admin, "_apps", {})
    monkeypatch.setattr(TestingConfig, "FIREBASE_CREDENTIALS_PATH", "/nonexistent/credentials.json")
    with pytest.raises(FileNotFoundError):
        create_app("testing")
