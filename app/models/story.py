# app/models/story.py
from dataclasses import dataclass, field
from typing import List, Dict, Any

@dataclass
class Episode:
    """
    Story 문서의 'episodes' 배열 원소 구조.
    댓글은 에피소드 안에 내장되어 저장됩니다.
    """
    episode_id: str
    story_id: str
    title: str
    created_at: int
    updated_at: int
    status: str = "draft"  # 'published' | 'draft'
    views: int = 0
    likes: List[str] = field(default_factory=list)
    comments: List[Dict[str, Any]] = field(default_factory=list)

@dataclass
class Story:
    """
    Firestore 'stories' 컬렉션의 문서 구조를 정의하는 데이터클래스.
    """
    story_id: str
    author_id: str
    author_name: str
    title: str
    created_at: int
    status: str = "draft"
    classification: str = "ongoing"  # 'ongoing' | 'completed'
    views: int = 0
    episodes: List[Dict[str, Any]] = field(default_factory=list)
