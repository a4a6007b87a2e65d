# app/api/comments/votes.py
"""
댓글 좋아요/싫어요 토글 로직. I/O 가 없는 순수 함수입니다.
"""

from dataclasses import replace
from typing import List, Tuple, Union

from app.models.comment import Comment, VoteType

def toggle_membership(ids: List[str], user_id: str) -> Tuple[List[str], bool]:
    """
    user_id 가 있으면 제거하고 없으면 끝에 추가한 새 리스트를 반환합니다.
    두 번째 값은 추가 여부입니다.
    """
    if user_id in ids:
        return [i for i in ids if i != user_id], False
    return ids + [user_id], True

def _parse_vote_type(vote_type: Union[VoteType, str]) -> VoteType:
    if isinstance(vote_type, VoteType):
        return vote_type
    try:
        return VoteType(vote_type)
    except ValueError:
        raise ValueError(f"알 수 없는 투표 유형입니다: {vote_type}")

def toggle_vote(comment: Comment, user_id: str, vote_type: Union[VoteType, str]) -> Comment:
    """
    한 댓글에 대한 사용자의 투표를 토글한 새 Comment 를 반환합니다.

    - 같은 유형으로 이미 투표했다면 취소합니다. 반대쪽 목록은 그대로 둡니다.
    - 새로 투표하면 해당 목록에 추가하고 반대쪽 목록에서는 제거합니다.
    같은 인자로 두 번 호출하면 원래 상태로 돌아갑니다.
    """
    vote_type = _parse_vote_type(vote_type)
    likes = list(comment.likes)
    dislikes = list(comment.dislikes)

    if vote_type is VoteType.LIKE:
        likes, added = toggle_membership(likes, user_id)
        if added:
            dislikes = [i for i in dislikes if i != user_id]
    else:
        dislikes, added = toggle_membership(dislikes, user_id)
        if added:
            likes = [i for i in likes if i != user_id]

    return replace(comment, likes=likes, dislikes=dislikes)

def vote_of(comment: Comment, user_id: str) -> Union[VoteType, None]:
    """사용자의 현재 투표 상태."""
    if user_id in comment.likes:
        return VoteType.LIKE
    if user_id in comment.dislikes:
        return VoteType.DISLIKE
    return None
