"""
树形结构工具

部门、菜单等父子表都先一次性查出扁平列表，再在内存中以 id -> 节点 的索引
组装父子关系，组树、查子孙、查祖先都只遍历一遍索引。
"""
from collections import defaultdict
from typing import Any, Callable, Dict, Iterable, List, Optional, Set


class TreeArena:
    """
    扁平列表上的父子索引

    Args:
        items: 实体列表（ORM对象或字典）
        key: 取节点ID的函数
        parent_key: 取父节点ID的函数
        order_key: 同级排序函数，缺省保持原顺序
    """

    def __init__(
        self,
        items: Iterable[Any],
        key: Callable[[Any], int],
        parent_key: Callable[[Any], int],
        order_key: Optional[Callable[[Any], Any]] = None
    ):
        self.key = key
        self.parent_key = parent_key
        self.nodes: Dict[int, Any] = {}
        self._children: Dict[int, List[int]] = defaultdict(list)

        for item in items:
            self.nodes[key(item)] = item
        for node_id, item in self.nodes.items():
            self._children[parent_key(item)].append(node_id)
        if order_key is not None:
            for child_ids in self._children.values():
                child_ids.sort(key=lambda cid: order_key(self.nodes[cid]))

    def __contains__(self, node_id: int) -> bool:
        return node_id in self.nodes

    def get(self, node_id: int) -> Optional[Any]:
        return self.nodes.get(node_id)

    def children(self, node_id: int) -> List[Any]:
        """直接子节点"""
        return [self.nodes[cid] for cid in self._children.get(node_id, [])]

    def has_children(self, node_id: int) -> bool:
        return bool(self._children.get(node_id))

    def descendants(self, node_id: int) -> List[Any]:
        """
        全部子孙节点（深度优先，不含自身）

        Args:
            node_id: 起始节点ID

        Returns:
            子孙节点列表
        """
        result = []
        visited: Set[int] = {node_id}
        stack = list(reversed(self._children.get(node_id, [])))
        while stack:
            current = stack.pop()
            if current in visited:
                continue
            visited.add(current)
            result.append(self.nodes[current])
            stack.extend(reversed(self._children.get(current, [])))
        return result

    def descendant_ids(self, node_id: int) -> List[int]:
        return [self.key(item) for item in self.descendants(node_id)]

    def ancestor_ids(self, node_id: int) -> List[int]:
        """
        祖先节点ID，从直接父节点向根方向

        父节点不在索引中时停止
        """
        result = []
        visited: Set[int] = {node_id}
        item = self.nodes.get(node_id)
        while item is not None:
            parent_id = self.parent_key(item)
            if parent_id in visited or parent_id not in self.nodes:
                break
            visited.add(parent_id)
            result.append(parent_id)
            item = self.nodes[parent_id]
        return result

    def root_ids(self, root_id: int = 0, orphans_as_roots: bool = False) -> List[int]:
        """
        根节点ID

        Args:
            root_id: 根节点的父ID
            orphans_as_roots: 父节点不在列表中的节点也视为根（用于过滤后的列表）
        """
        roots = list(self._children.get(root_id, []))
        if orphans_as_roots:
            for parent_id, child_ids in self._children.items():
                if parent_id != root_id and parent_id not in self.nodes:
                    roots.extend(child_ids)
        return roots

    def build(
        self,
        convert: Callable[[Any, List[Any]], Any],
        root_id: int = 0,
        child_filter: Optional[Callable[[Any], bool]] = None,
        orphans_as_roots: bool = False
    ) -> List[Any]:
        """
        组装树

        Args:
            convert: (实体, 已转换的子节点列表) -> 树节点
            root_id: 根节点的父ID
            child_filter: 子节点过滤条件，不满足的子节点连同其子树被剪除
            orphans_as_roots: 见 root_ids

        Returns:
            树节点列表
        """
        def build_node(node_id: int, path: Set[int]) -> Any:
            item = self.nodes[node_id]
            children = []
            for cid in self._children.get(node_id, []):
                if cid in path:
                    continue
                child = self.nodes[cid]
                if child_filter is not None and not child_filter(child):
                    continue
                children.append(build_node(cid, path | {cid}))
            return convert(item, children)

        return [build_node(rid, {rid}) for rid in self.root_ids(root_id, orphans_as_roots)]
