from backoffice.modules.admin.utils.tree_util import TreeArena


def make_arena(items):
    return TreeArena(
        items,
        key=lambda item: item["id"],
        parent_key=lambda item: item["pid"],
        order_key=lambda item: item.get("order", 0),
    )


NODES = [
    {"id": 1, "pid": 0, "order": 1},
    {"id": 2, "pid": 1, "order": 2},
    {"id": 3, "pid": 1, "order": 1},
    {"id": 4, "pid": 2},
    {"id": 5, "pid": 4},
    {"id": 6, "pid": 0, "order": 0},
]


def to_dict(item, children):
    node = {"id": item["id"]}
    if children:
        node["children"] = children
    return node


def test_build_orders_siblings():
    tree = make_arena(NODES).build(to_dict)
    assert [node["id"] for node in tree] == [6, 1]
    assert [child["id"] for child in tree[1]["children"]] == [3, 2]
    assert tree[1]["children"][1]["children"][0]["children"][0]["id"] == 5


def test_descendants_and_ancestors():
    arena = make_arena(NODES)
    assert sorted(arena.descendant_ids(1)) == [2, 3, 4, 5]
    assert arena.descendant_ids(5) == []
    assert arena.ancestor_ids(5) == [4, 2, 1]
    assert arena.ancestor_ids(1) == []
    assert arena.has_children(2)
    assert not arena.has_children(3)


def test_orphans_as_roots():
    # 父节点 2 被过滤掉时，4 提升为根
    filtered = [node for node in NODES if node["id"] != 2]
    arena = make_arena(filtered)
    assert [node["id"] for node in arena.build(to_dict)] == [6, 1]
    roots = [node["id"] for node in arena.build(to_dict, orphans_as_roots=True)]
    assert roots == [6, 1, 4]


def test_child_filter_prunes_subtree():
    tree = make_arena(NODES).build(to_dict, child_filter=lambda item: item["id"] != 2)
    root = tree[1]
    assert [child["id"] for child in root["children"]] == [3]


def test_cycle_does_not_loop():
    cyclic = [{"id": 1, "pid": 2}, {"id": 2, "pid": 1}]
    arena = make_arena(cyclic)
    assert sorted(arena.descendant_ids(1)) == [2]
    assert arena.ancestor_ids(1) == [2]
    assert arena.build(to_dict) == []
