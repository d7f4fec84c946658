"""工作组层级：从扁平记录构建森林，并解析任意节点的祖先路径（面包屑）。

本模块不访问数据库，调用方负责读取全量工作组快照后传入；
每次调用都会重新创建节点对象，输入记录不会被修改。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Sequence

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WorkgroupRecord:
    """参与层级计算的工作组字段，`status` 仅用于展示。"""

    id: int
    name: str
    parent_id: Optional[int] = None
    status: Optional[str] = None

    @classmethod
    def from_model(cls, obj: Any) -> "WorkgroupRecord":
        return cls(id=obj.id, name=obj.name, parent_id=obj.parent_id, status=getattr(obj, "status", None))

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "parent_id": self.parent_id, "status": self.status}


@dataclass
class WorkgroupNode:
    id: int
    name: str
    parent_id: Optional[int] = None
    status: Optional[str] = None
    children: List["WorkgroupNode"] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "parent_id": self.parent_id,
            "status": self.status,
            "children": [child.to_dict() for child in self.children],
        }


class CyclicAncestryError(Exception):
    """祖先链中出现环路时抛出，`cycle` 为按遍历顺序记录的环上节点 id。"""

    def __init__(self, cycle: Sequence[int]) -> None:
        self.cycle = list(cycle)
        super().__init__(f"cyclic parent chain: {' -> '.join(str(i) for i in self.cycle)}")


def _index_by_id(records: Iterable[WorkgroupRecord]) -> Dict[int, WorkgroupRecord]:
    """按 id 建立索引，重复 id 以首次出现的记录为准。"""
    index: Dict[int, WorkgroupRecord] = {}
    for record in records:
        if record.id in index:
            logger.warning("Duplicate workgroup id %s ignored (name=%r)", record.id, record.name)
            continue
        index[record.id] = record
    return index


def build_tree(records: Sequence[WorkgroupRecord]) -> List[WorkgroupNode]:
    """返回根节点列表，子节点与根节点均保持输入顺序。

    `parent_id` 为空或指向不存在的记录时，该节点作为根节点。
    子节点可以出现在父节点之前。
    """
    # 第一遍：先物化全部节点，再做链接
    nodes: Dict[int, WorkgroupNode] = {}
    ordered: List[WorkgroupNode] = []
    for record in _index_by_id(records).values():
        node = WorkgroupNode(id=record.id, name=record.name, parent_id=record.parent_id, status=record.status)
        nodes[record.id] = node
        ordered.append(node)

    # 第二遍：按输入顺序挂到父节点下
    roots: List[WorkgroupNode] = []
    for node in ordered:
        parent = nodes.get(node.parent_id) if node.parent_id is not None else None
        if parent is not None:
            parent.children.append(node)
        else:
            roots.append(node)
    return roots


def get_ancestor_path(target_id: Optional[int], records: Sequence[WorkgroupRecord]) -> List[WorkgroupRecord]:
    """返回从最顶层可解析祖先到 `target_id` 本身的记录序列。

    `target_id` 为空或不存在时返回空列表；遇到环路抛出 ``CyclicAncestryError``。
    """
    if target_id is None:
        return []

    index = _index_by_id(records)
    path: List[WorkgroupRecord] = []
    visited: List[int] = []
    current = index.get(target_id)
    while current is not None:
        if current.id in visited:
            raise CyclicAncestryError(visited[visited.index(current.id):] + [current.id])
        visited.append(current.id)
        path.insert(0, current)
        if current.parent_id is None:
            break
        current = index.get(current.parent_id)
    return path


def collect_descendant_ids(root_id: int, records: Sequence[WorkgroupRecord]) -> set[int]:
    """返回 `root_id` 的全部后代 id（不含自身），用于写入前的环路校验。"""
    children_map: Dict[Optional[int], List[int]] = {}
    for record in _index_by_id(records).values():
        children_map.setdefault(record.parent_id, []).append(record.id)

    descendants: set[int] = set()
    stack = list(children_map.get(root_id, []))
    while stack:
        node_id = stack.pop()
        if node_id in descendants or node_id == root_id:
            continue
        descendants.add(node_id)
        stack.extend(children_map.get(node_id, []))
    return descendants
