# app/api/comments/test_votes.py
"""
댓글 투표 토글 테스트

사용법: python -m pytest app/api/comments/test_votes.py -v
"""

import random

import pytest

from app.api.comments.votes import toggle_vote, toggle_membership, vote_of
from app.testing_utils import make_comment
from app.models.comment import VoteType

def test_example_scenario():
    x = make_comment("x", likes=["u1"])

    result = toggle_vote(x, "u2", VoteType.DISLIKE)
    assert (result.likes, result.dislikes) == (["u1"], ["u2"])

    result = toggle_vote(result, "u1", VoteType.DISLIKE)
    assert (result.likes, result.dislikes) == ([], ["u2", "u1"])

def test_like_then_unlike():
    c = make_comment("x")
    liked = toggle_vote(c, "u1", VoteType.LIKE)
    assert liked.likes == ["u1"]
    unliked = toggle_vote(liked, "u1", VoteType.LIKE)
    assert unliked.likes == []
    assert unliked.dislikes == []

def test_unlike_leaves_dislikes_unchanged():
    c = make_comment("x", likes=["u1"], dislikes=["u2"])
    result = toggle_vote(c, "u1", VoteType.LIKE)
    assert result.likes == []
    assert result.dislikes == ["u2"]

def test_switch_from_dislike_to_like():
    c = make_comment("x", dislikes=["u1", "u3"])
    result = toggle_vote(c, "u1", VoteType.LIKE)
    assert "u1" in result.likes
    assert "u1" not in result.dislikes
    assert result.dislikes == ["u3"]

def test_input_comment_is_not_mutated():
    c = make_comment("x", likes=["u1"])
    toggle_vote(c, "u1", VoteType.LIKE)
    toggle_vote(c, "u2", VoteType.DISLIKE)
    assert c.likes == ["u1"]
    assert c.dislikes == []

@pytest.mark.parametrize("vote_type", [VoteType.LIKE, VoteType.DISLIKE])
@pytest.mark.parametrize("likes,dislikes", [
    ([], []),
    (["u2"], ["u3"]),
])
def test_double_toggle_restores_state_without_prior_vote(vote_type, likes, dislikes):
    c = make_comment("x", likes=likes, dislikes=dislikes)
    twice = toggle_vote(toggle_vote(c, "u1", vote_type), "u1", vote_type)
    assert (twice.likes, twice.dislikes) == (likes, dislikes)

@pytest.mark.parametrize("vote_type,likes,dislikes", [
    (VoteType.LIKE, ["u2", "u1"], ["u3"]),
    (VoteType.DISLIKE, ["u3"], ["u2", "u1"]),
])
def test_double_toggle_restores_same_type_vote(vote_type, likes, dislikes):
    c = make_comment("x", likes=likes, dislikes=dislikes)
    twice = toggle_vote(toggle_vote(c, "u1", vote_type), "u1", vote_type)
    assert set(twice.likes) == set(likes)
    assert set(twice.dislikes) == set(dislikes)

def test_switch_then_toggle_again_clears_vote():
    """반대 투표로 전환한 뒤 다시 누르면 취소만 되고 이전 투표는 복구되지 않습니다."""
    c = make_comment("x", dislikes=["u1"])
    twice = toggle_vote(toggle_vote(c, "u1", VoteType.LIKE), "u1", VoteType.LIKE)
    assert twice.likes == []
    assert twice.dislikes == []

def test_mutual_exclusivity_after_random_sequence():
    rng = random.Random(42)
    users = [f"u{i}" for i in range(5)]
    c = make_comment("x")
    for _ in range(500):
        c = toggle_vote(c, rng.choice(users), rng.choice(list(VoteType)))
        assert not set(c.likes) & set(c.dislikes)
        assert len(c.likes) == len(set(c.likes))
        assert len(c.dislikes) == len(set(c.dislikes))

def test_string_vote_type_is_accepted():
    c = toggle_vote(make_comment("x"), "u1", "dislike")
    assert c.dislikes == ["u1"]

def test_unknown_vote_type_raises():
    with pytest.raises(ValueError):
        toggle_vote(make_comment("x"), "u1", "love")

def test_toggle_membership():
    assert toggle_membership([], "u1") == (["u1"], True)
    assert toggle_membership(["u1", "u2"], "u1") == (["u2"], False)

def test_vote_of():
    c = make_comment("x", likes=["u1"], dislikes=["u2"])
    assert vote_of(c, "u1") is VoteType.LIKE
    assert vote_of(c, "u2") is VoteType.DISLIKE
    assert vote_of(c, "u3") is None
