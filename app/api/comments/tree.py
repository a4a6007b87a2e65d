# app/api/comments/tree.py
"""
평면(flat) 댓글 목록을 parent_id 관계에 따라 답글 트리(forest)로 재구성합니다.

- 형제 댓글은 created_at 오름차순(오래된 순)으로 정렬하고, 같은 값이면 입력 순서를 유지합니다.
- parent_id 가 목록 안의 어떤 댓글도 가리키지 않는 댓글(고아)은 결과에서 제외됩니다.
- 입력이 같으면 결과도 항상 같습니다.
"""

from collections import defaultdict
from dataclasses import dataclass, field, asdict
from typing import Dict, Iterable, List, Optional, Set

from app.models.comment import Comment

@dataclass
class CommentNode:
    """댓글 원본과 정렬된 답글 노드 목록."""
    comment: Comment
    children: List["CommentNode"] = field(default_factory=list)

def flatten_forest(forest: List[CommentNode]) -> List[dict]:
    """
    forest 를 화면 표시 순서(전위 순회)의 평면 dict 목록으로 펼칩니다.
    각 항목에는 depth(최상위 0)와 정렬된 자식 ID 목록 reply_ids 가 들어가므로,
    중첩 없이도 트리 구조를 그대로 복원할 수 있습니다.
    """
    flat: List[dict] = []
    stack = [(node, 0) for node in reversed(forest)]
    while stack:
        node, depth = stack.pop()
        flat.append(dict(
            asdict(node.comment),
            depth=depth,
            reply_ids=[child.comment.comment_id for child in node.children]
        ))
        stack.extend((child, depth + 1) for child in reversed(node.children))
    return flat

def _group_by_parent(comments: Iterable[Comment]) -> Dict[Optional[str], List[Comment]]:
    groups: Dict[Optional[str], List[Comment]] = defaultdict(list)
    for comment in comments:
        groups[comment.parent_id].append(comment)
    # sorted() 는 안정 정렬이므로 created_at 이 같으면 입력 순서가 유지됩니다.
    return {parent_id: sorted(siblings, key=lambda c: c.created_at) for parent_id, siblings in groups.items()}

def build_forest(comments: Iterable[Comment]) -> List[CommentNode]:
    """
    평면 댓글 목록으로 최상위 댓글들을 루트로 하는 forest 를 만듭니다.

    재귀 대신 명시적인 스택을 사용하므로 답글 체인이 아무리 길어도 재귀 한도에 걸리지 않습니다.
    """
    groups = _group_by_parent(comments)

    forest = [CommentNode(comment=c) for c in groups.get(None, [])]
    expanded: Set[str] = set()
    stack = list(forest)
    while stack:
        node = stack.pop()
        comment_id = node.comment.comment_id
        # ID 가 중복 저장된 문서에서도 무한 루프가 생기지 않도록 같은 ID 는 한 번만 펼칩니다.
        if comment_id in expanded:
            continue
        expanded.add(comment_id)
        node.children = [CommentNode(comment=c) for c in groups.get(comment_id, [])]
        stack.extend(node.children)
    return forest

def count_nodes(forest: List[CommentNode]) -> int:
    """forest 에 포함된 전체 노드 수."""
    total = 0
    stack = list(forest)
    while stack:
        node = stack.pop()
        total += 1
        stack.extend(node.children)
    return total

def find_orphans(comments: Iterable[Comment]) -> List[str]:
    """
    루트에서 도달할 수 없어 forest 에서 빠지는 댓글 ID 목록 (입력 순서).
    부모가 없는 답글뿐 아니라 그 답글에 달린 답글도 포함됩니다.
    """
    comments = list(comments)
    reachable: Set[str] = set()
    stack = build_forest(comments)
    while stack:
        node = stack.pop()
        reachable.add(node.comment.comment_id)
        stack.extend(node.children)
    return [c.comment_id for c in comments if c.comment_id not in reachable]
