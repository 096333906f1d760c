"""
Gram Types

PQGram 的基本值型別：

- GramNode: 單一節點，可能是真實標籤或填充符 (filler, 論文中記為 '*')
- Gram: 一個 (祖先 × 兄弟) 視窗的快照

兩者皆為不可變且全序 (total order)，使 profile 可以排序並以 merge-join 比較。
"""

from dataclasses import dataclass
from functools import total_ordering
from typing import Any, List, Tuple


@total_ordering
class GramNode:
    """
    Gram 中的單一節點

    PQGram 需要用 filler 標記不存在的祖先或兄弟，若直接使用 '*' 字串，
    就無法區分真實標籤 '*' 與填充符。因此以 GramNode 包裝：
    ``FILLER`` 為唯一的填充節點，``GramNode.of(value)`` 包裝真實標籤。

    排序規則：FILLER 排在所有真實標籤之前；真實標籤之間依標籤本身排序。
    """

    __slots__ = ('_value', '_is_filler')

    def __init__(self, value: Any = None, is_filler: bool = False):
        self._value = value
        self._is_filler = is_filler

    @classmethod
    def of(cls, value: Any) -> 'GramNode':
        """包裝一個真實標籤"""
        return cls(value)

    @property
    def value(self) -> Any:
        return self._value

    @property
    def is_filler(self) -> bool:
        return self._is_filler

    def resolve(self, filler_value: Any) -> Any:
        """回傳標籤值；若為 filler 則回傳 filler_value"""
        return filler_value if self._is_filler else self._value

    def _key(self) -> Tuple[int, Any]:
        return (0, None) if self._is_filler else (1, self._value)

    def __eq__(self, other):
        if not isinstance(other, GramNode):
            return NotImplemented
        if self._is_filler or other._is_filler:
            return self._is_filler == other._is_filler
        return self._value == other._value

    def __lt__(self, other):
        if not isinstance(other, GramNode):
            return NotImplemented
        if self._is_filler or other._is_filler:
            return self._is_filler and not other._is_filler
        return self._value < other._value

    def __hash__(self):
        return hash(self._key())

    def __reduce__(self):
        return (GramNode, (self._value, self._is_filler))

    def __repr__(self):
        if self._is_filler:
            return "FILLER"
        return f"GramNode({self._value!r})"


FILLER = GramNode(is_filler=True)


@dataclass(frozen=True, order=True)
class Gram:
    """
    單一 p,q-gram

    Attributes:
        ancestors: 長度 p 的祖先標籤（根在前，最後一個為目前節點）
        siblings: 長度 q 的兄弟標籤（最舊的在前）

    相等與排序皆依 (ancestors, siblings) 的字典序。
    """

    ancestors: Tuple[GramNode, ...]
    siblings: Tuple[GramNode, ...]

    @property
    def p(self) -> int:
        return len(self.ancestors)

    @property
    def q(self) -> int:
        return len(self.siblings)

    def concat(self, filler_value: Any) -> List[Any]:
        """
        將祖先與兄弟串接成長度 p+q 的扁平序列

        Args:
            filler_value: 用來取代 FILLER 的值，慣例上字串標籤使用 '*'

        Returns:
            List: 解析後的標籤序列
        """
        return [node.resolve(filler_value) for node in self.ancestors + self.siblings]

    def __repr__(self):
        return f"Gram(ancestors={list(self.ancestors)}, siblings={list(self.siblings)})"
