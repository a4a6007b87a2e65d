# app/api/comments/test_routes.py
"""
댓글 API 엔드포인트 테스트

사용법: python -m pytest app/api/comments/test_routes.py -v
"""

from app.testing_utils import make_comment

BASE = "/api/stories/story-1/episodes/ep-1/comments"

def test_get_comments_returns_forest_in_display_order(client, seed_story):
    seed_story(comments=[
        make_comment("a", None, 100, likes=["u1"]),
        make_comment("b", "a", 200),
        make_comment("c", None, 50),
        make_comment("d", "zzz", 300),
    ])

    res = client.get(BASE)

    assert res.status_code == 200
    body = res.get_json()
    assert body["total"] == 3
    assert body["root_ids"] == ["c", "a"]
    assert [c["comment_id"] for c in body["comments"]] == ["c", "a", "b"]
    assert [c["depth"] for c in body["comments"]] == [0, 0, 1]
    a = body["comments"][1]
    assert a["like_count"] == 1
    assert a["dislike_count"] == 0
    assert a["is_liked"] is False
    assert a["reply_ids"] == ["b"]
    assert body["comments"][2]["parent_id"] == "a"
    assert a["created_at"] == "1970-01-01T00:00:00.100000Z"

def test_get_comments_with_very_long_reply_chain(client, seed_story):
    depth = 1200
    comments = [make_comment("n0", None, 0)]
    comments += [make_comment(f"n{i}", f"n{i - 1}", i) for i in range(1, depth)]
    seed_story(comments=comments)

    res = client.get(BASE)

    assert res.status_code == 200
    body = res.get_json()
    assert body["total"] == depth
    assert body["root_ids"] == ["n0"]
    assert len(body["comments"]) == depth
    assert body["comments"][-1]["comment_id"] == f"n{depth - 1}"
    assert body["comments"][-1]["depth"] == depth - 1
    assert body["comments"][-2]["reply_ids"] == [f"n{depth - 1}"]

def test_get_comments_marks_viewer_votes(client, seed_story, auth_headers):
    seed_story(comments=[make_comment("a", None, 1, likes=["u1"])])

    res = client.get(BASE, headers=auth_headers(user_id="u1"))

    assert res.get_json()["comments"][0]["is_liked"] is True

def test_get_comments_missing_episode(client, seed_story):
    seed_story()
    res = client.get("/api/stories/story-1/episodes/nope/comments")
    assert res.status_code == 404
    assert res.get_json()["error_code"] == "RESOURCE_NOT_FOUND"

def test_create_comment_requires_login(client, seed_story):
    seed_story()
    res = client.post(BASE, json={"content": "hi"})
    assert res.status_code == 401

def test_create_comment_and_reply(client, seed_story, auth_headers):
    seed_story()
    headers = auth_headers(user_id="u1", username="reader", role="ADMIN")

    res = client.post(BASE, json={"content": "first"}, headers=headers)
    assert res.status_code == 201
    root = res.get_json()
    assert root["username"] == "reader"
    assert root["user_role"] == "ADMIN"
    assert root["parent_id"] is None
    assert root["reply_ids"] == []

    res = client.post(BASE, json={"content": "reply", "parent_id": root["comment_id"]}, headers=headers)
    assert res.status_code == 201

    tree = client.get(BASE).get_json()
    assert tree["total"] == 2
    assert tree["comments"][0]["reply_ids"] == [tree["comments"][1]["comment_id"]]
    assert tree["comments"][1]["content"] == "reply"
    assert tree["comments"][1]["depth"] == 1

def test_create_comment_with_blank_parent_is_top_level(client, seed_story, auth_headers):
    seed_story()
    headers = auth_headers()

    res = client.post(BASE, json={"content": "hi", "parent_id": ""}, headers=headers)
    assert res.status_code == 201
    assert res.get_json()["parent_id"] is None

    res = client.post(BASE, json={"content": "again", "parent_id": "   "}, headers=headers)
    assert res.status_code == 201
    assert res.get_json()["parent_id"] is None

    tree = client.get(BASE).get_json()
    assert tree["total"] == 2
    assert [c["depth"] for c in tree["comments"]] == [0, 0]

def test_create_comment_validation(client, seed_story, auth_headers):
    seed_story()
    headers = auth_headers()

    assert client.post(BASE, json={"content": "   "}, headers=headers).status_code == 400
    assert client.post(BASE, json={}, headers=headers).status_code == 400
    res = client.post(BASE, json={"content": "x" * 1001}, headers=headers)
    assert res.status_code == 400
    assert res.get_json()["error_code"] == "VALIDATION_ERROR"

def test_vote_toggle_and_switch(client, seed_story, auth_headers):
    seed_story(comments=[make_comment("x", dislikes=["u1"])])
    headers = auth_headers(user_id="u1")

    res = client.post(f"{BASE}/x/vote", json={"vote_type": "like"}, headers=headers)
    assert res.status_code == 200
    body = res.get_json()
    assert body["like_count"] == 1
    assert body["dislike_count"] == 0
    assert body["my_vote"] == "like"
    assert body["is_liked"] is True

    res = client.post(f"{BASE}/x/vote", json={"vote_type": "like"}, headers=headers)
    body = res.get_json()
    assert body["like_count"] == 0
    assert body["my_vote"] is None

def test_vote_validation_and_missing_comment(client, seed_story, auth_headers):
    seed_story(comments=[make_comment("x")])
    headers = auth_headers()

    assert client.post(f"{BASE}/x/vote", json={"vote_type": "love"}, headers=headers).status_code == 400
    res = client.post(f"{BASE}/nope/vote", json={"vote_type": "like"}, headers=headers)
    assert res.status_code == 404
    assert res.get_json()["error_code"] == "COMMENT_NOT_FOUND"

def test_vote_on_missing_episode_or_story(client, seed_story, auth_headers):
    seed_story(comments=[make_comment("x")])
    headers = auth_headers()

    res = client.post("/api/stories/story-1/episodes/nope/comments/x/vote", json={"vote_type": "like"}, headers=headers)
    assert res.status_code == 404
    assert res.get_json()["error_code"] == "RESOURCE_NOT_FOUND"

    res = client.post("/api/stories/nope/episodes/ep-1/comments/x/vote", json={"vote_type": "like"}, headers=headers)
    assert res.status_code == 404
    assert res.get_json()["error_code"] == "RESOURCE_NOT_FOUND"

def test_vote_requires_login(client, seed_story):
    seed_story(comments=[make_comment("x")])
    assert client.post(f"{BASE}/x/vote", json={"vote_type": "like"}).status_code == 401

def test_store_error_becomes_500(app, client, seed_story, auth_headers, monkeypatch):
    seed_story(comments=[make_comment("x")])

    def _boom(*args, **kwargs):
        raise ConnectionError("firestore unavailable")

    monkeypatch.setattr(app.services['story_store'], 'update_episode', _boom)
    res = client.post(f"{BASE}/x/vote", json={"vote_type": "like"}, headers=auth_headers())
    assert res.status_code == 500
    assert res.get_json()["error_code"] == "VOTE_TOGGLE_FAILED"
