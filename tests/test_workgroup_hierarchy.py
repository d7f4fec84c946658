"""工作组层级构建与面包屑解析的单元测试。"""

import pytest

from app.packages.membership.services import workgroup_hierarchy
from app.packages.membership.services.workgroup_hierarchy import (
    CyclicAncestryError,
    WorkgroupNode,
    WorkgroupRecord,
    build_tree,
    collect_descendant_ids,
    get_ancestor_path,
)


def _records(*rows):
    return [WorkgroupRecord(id=row[0], name=row[1], parent_id=row[2]) for row in rows]


def _count(nodes):
    return sum(1 + _count(node.children) for node in nodes)


def test_build_tree_nests_child_under_root():
    records = _records((1, "Root", None), (2, "Child", 1))

    roots = build_tree(records)

    assert [node.to_dict() for node in roots] == [
        {
            "id": 1,
            "name": "Root",
            "parent_id": None,
            "status": None,
            "children": [
                {"id": 2, "name": "Child", "parent_id": 1, "status": None, "children": []},
            ],
        }
    ]


def test_build_tree_accepts_child_before_parent():
    ordered = build_tree(_records((1, "Root", None), (2, "Child", 1)))
    reversed_input = build_tree(_records((2, "Child", 1), (1, "Root", None)))

    assert [n.to_dict() for n in reversed_input] == [n.to_dict() for n in ordered]


def test_build_tree_treats_orphan_as_root():
    roots = build_tree(_records((1, "A", 99)))

    assert roots == [WorkgroupNode(id=1, name="A", parent_id=99, children=[])]


def test_build_tree_preserves_input_order():
    records = _records(
        (5, "E", 1),
        (1, "A", None),
        (3, "C", 1),
        (7, "G", None),
        (4, "D", 3),
        (2, "B", 1),
    )

    roots = build_tree(records)

    assert [root.id for root in roots] == [1, 7]
    assert [child.id for child in roots[0].children] == [5, 3, 2]
    assert [child.id for child in roots[0].children[1].children] == [4]
    assert _count(roots) == len(records)


def test_build_tree_does_not_share_nodes_between_calls():
    records = _records((1, "Root", None), (2, "Child", 1))

    first = build_tree(records)
    first[0].children.clear()
    second = build_tree(records)

    assert [child.id for child in second[0].children] == [2]
    assert records[0] == WorkgroupRecord(id=1, name="Root", parent_id=None)


def test_build_tree_keeps_first_duplicate(caplog):
    records = _records((1, "First", None), (2, "Child", 1), (1, "Second", None))

    # 应用日志器不向根日志器传播，直接挂载 caplog 的处理器
    workgroup_hierarchy.logger.addHandler(caplog.handler)
    try:
        roots = build_tree(records)
    finally:
        workgroup_hierarchy.logger.removeHandler(caplog.handler)

    assert [root.name for root in roots] == ["First"]
    assert _count(roots) == 2
    assert "Duplicate workgroup id 1" in caplog.text


def test_build_tree_empty_input():
    assert build_tree([]) == []


def test_ancestor_path_from_root_to_target():
    records = _records((1, "Root", None), (2, "Child", 1))

    path = get_ancestor_path(2, records)

    assert [record.id for record in path] == [1, 2]


def test_ancestor_path_links_each_step_to_parent():
    records = _records((4, "D", 3), (1, "A", None), (3, "C", 2), (2, "B", 1), (9, "X", 1))

    path = get_ancestor_path(4, records)

    assert [record.id for record in path] == [1, 2, 3, 4]
    for parent, child in zip(path, path[1:]):
        assert child.parent_id == parent.id
    assert path[0].parent_id is None


def test_ancestor_path_stops_at_unresolvable_parent():
    records = _records((2, "Child", 1), (3, "Grandchild", 2))

    path = get_ancestor_path(3, records)

    assert [record.id for record in path] == [2, 3]
    assert path[0].parent_id == 1


@pytest.mark.parametrize("target", [None, 42])
def test_ancestor_path_empty_for_missing_target(target):
    records = _records((1, "Root", None), (2, "Child", 1))

    assert get_ancestor_path(target, records) == []


def test_ancestor_path_empty_input():
    assert get_ancestor_path(1, []) == []


def test_ancestor_path_raises_on_cycle():
    records = _records((1, "A", 3), (2, "B", 1), (3, "C", 2), (4, "D", 3))

    with pytest.raises(CyclicAncestryError) as exc_info:
        get_ancestor_path(4, records)

    assert exc_info.value.cycle == [3, 2, 1, 3]


def test_ancestor_path_raises_on_self_parent():
    with pytest.raises(CyclicAncestryError):
        get_ancestor_path(1, _records((1, "Loop", 1)))


def test_build_tree_terminates_on_cycle():
    records = _records((1, "A", 2), (2, "B", 1), (3, "Root", None))

    roots = build_tree(records)

    assert [root.id for root in roots] == [3]


def test_collect_descendant_ids():
    records = _records((1, "A", None), (2, "B", 1), (3, "C", 2), (4, "D", None))

    assert collect_descendant_ids(1, records) == {2, 3}
    assert collect_descendant_ids(3, records) == set()
