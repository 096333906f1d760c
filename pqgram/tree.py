"""
Labelled Tree 抽象與示範樹

任何可以提供「自身標籤」與「有序子節點」的結構都能計算 PQGram profile。
本模組定義該能力 (LabelledTree)，並提供：

- TreeNode: 簡單的有序標籤樹，用於測試與示範
- deap_to_tree_node: 將 DEAP GP Individual 轉為 TreeNode
- tree_node_to_bracket: 括號表示法輸出
"""

from abc import ABC, abstractmethod
from typing import Any, List, Optional, Sequence

from .gram import GramNode

# DEAP 是可選依賴，只在需要時導入
try:
    from deap import gp
    DEAP_AVAILABLE = True
except ImportError:
    DEAP_AVAILABLE = False
    gp = None


class LabelledTree(ABC):
    """
    有序標籤樹的唯讀介面

    實作者必須提供：
        get_label(): 以 GramNode 包裝的自身標籤
        get_children(): 直接子節點的有序序列（可為空）

    不需要明確繼承：只要類別同時定義這兩個方法，
    ``isinstance(obj, LabelledTree)`` 即為 True。
    """

    @abstractmethod
    def get_label(self) -> GramNode:
        """Return this node's label wrapped as a GramNode."""

    @abstractmethod
    def get_children(self) -> Sequence['LabelledTree']:
        """Return the ordered direct children of this node."""

    @classmethod
    def __subclasshook__(cls, subclass):
        if cls is LabelledTree:
            required = ('get_label', 'get_children')
            if all(any(name in vars(base) for base in subclass.__mro__) for name in required):
                return True
        return NotImplemented


class TreeNode(LabelledTree):
    """樹節點的統一表示"""

    def __init__(self, label: Any, children: Optional[List['TreeNode']] = None):
        """
        初始化樹節點

        Args:
            label: 節點標籤，需可排序且有預設值 (例如 str、int)
            children: 子節點列表
        """
        self.label = label
        self.children = children if children is not None else []

    def add_node(self, child: 'TreeNode') -> 'TreeNode':
        """
        加入子節點並回傳自身，方便以鏈式寫法建構巢狀樹

        Example:
            >>> TreeNode("a").add_node(TreeNode("b")).add_node(TreeNode("c"))
            {a{b}{c}}
        """
        self.children.append(child)
        return self

    def get_label(self) -> GramNode:
        return GramNode.of(self.label)

    def get_children(self) -> List['TreeNode']:
        return self.children

    def __eq__(self, other):
        if not isinstance(other, TreeNode):
            return NotImplemented
        return self.label == other.label and self.children == other.children

    def __repr__(self):
        return tree_node_to_bracket(self)


def count_nodes(root: LabelledTree) -> int:
    """計算樹的節點總數"""
    if root is None:
        return 0
    return 1 + sum(count_nodes(child) for child in root.get_children())


def deap_to_tree_node(individual) -> Optional[TreeNode]:
    """
    將 DEAP Individual 轉換為 TreeNode

    Primitive 節點使用其名稱作為標籤，Terminal 節點使用 ``str(value)``。

    Args:
        individual: DEAP Individual (PrimitiveTree)

    Returns:
        TreeNode: 轉換後的樹節點；空的 individual 回傳 None

    Raises:
        ImportError: 未安裝 DEAP
    """
    if not DEAP_AVAILABLE:
        raise ImportError("DEAP is required for this function. Install it with: pip install deap")

    if not individual:
        return None

    # PrimitiveTree 為前序排列，反向掃描時子樹會先完成並留在堆疊上
    stack = []

    for node in reversed(individual):
        if isinstance(node, gp.Primitive):
            children = []
            for _ in range(node.arity):
                if stack:
                    children.append(stack.pop())
            stack.append(TreeNode(node.name, children))

        elif isinstance(node, gp.Terminal):
            stack.append(TreeNode(str(node.value)))

    return stack[0] if stack else None


def tree_node_to_bracket(node: LabelledTree) -> str:
    """
    將樹轉換為括號表示法，例如 ``{a{b}{c}}``

    Args:
        node: 任何 LabelledTree

    Returns:
        str: 括號表示法字符串
    """
    label = node.get_label()
    text = '*' if label.is_filler else label.value
    children_str = "".join(tree_node_to_bracket(child) for child in node.get_children())
    return f"{{{text}{children_str}}}"
