# app/models/comment.py
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, List, Dict, Any

class VoteType(Enum):
    """댓글 투표 유형"""
    LIKE = "like"
    DISLIKE = "dislike"

@dataclass
class Comment:
    """
    에피소드 문서의 'comments' 배열 원소 구조를 정의하는 데이터클래스.
    - user_id / username / user_role 은 작성 시점의 스냅샷이며 이후 갱신하지 않습니다.
    - parent_id 가 None 이면 최상위 댓글, 아니면 답글입니다.
    - 한 사용자 ID는 likes 와 dislikes 중 최대 한 곳에만 존재합니다.
    """
    comment_id: str
    episode_id: str
    user_id: str
    username: str
    user_role: str
    content: str
    created_at: int  # epoch 밀리초
    parent_id: Optional[str] = None
    likes: List[str] = field(default_factory=list)
    dislikes: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Comment":
        """Firestore 에서 읽은 dict 로 Comment 를 만듭니다. 선택 필드가 없어도 허용합니다."""
        return cls(
            comment_id=data['comment_id'],
            episode_id=data['episode_id'],
            user_id=data['user_id'],
            username=data.get('username', ''),
            user_role=data.get('user_role', 'READER'),
            content=data.get('content', ''),
            created_at=data.get('created_at', 0),
            parent_id=data.get('parent_id'),
            likes=list(data.get('likes') or []),
            dislikes=list(data.get('dislikes') or []),
        )
