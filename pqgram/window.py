"""
Bounded Window

固定容量的 FIFO 視窗，滿了之後自動淘汰最舊的元素。
PQGram profile 建構時用來追蹤祖先 (p) 與兄弟 (q) 的滑動上下文。
"""

from collections import deque
from typing import Any, Iterator, Optional, Tuple


class BoundedWindow:
    """
    固定容量的滑動視窗

    行為類似 ``collections.deque(maxlen=...)``，但 ``push`` 會回傳被擠出的元素，
    並提供 ``snapshot`` 取得互不影響的內容副本。

    Attributes:
        maxlen: 視窗容量 (>= 0)

    Example:
        >>> window = BoundedWindow(3)
        >>> window.fill('*')
        >>> window.push('a')
        '*'
        >>> window.snapshot()
        ('*', '*', 'a')
    """

    __slots__ = ('_maxlen', '_items')

    def __init__(self, maxlen: int):
        """
        初始化視窗

        Args:
            maxlen: 視窗容量，0 表示永遠為空的視窗

        Raises:
            ValueError: 如果 maxlen < 0
        """
        if maxlen < 0:
            raise ValueError(f"maxlen must be >= 0, got {maxlen}")
        self._maxlen = maxlen
        self._items = deque()

    @property
    def maxlen(self) -> int:
        return self._maxlen

    def push(self, item: Any) -> Optional[Any]:
        """
        在尾端加入元素

        Args:
            item: 要加入的元素

        Returns:
            被淘汰的最舊元素；視窗未滿時回傳 None。
            maxlen 為 0 時，加入的元素會立即被淘汰並回傳。
        """
        if self._maxlen == 0:
            return item

        evicted = None
        if len(self._items) == self._maxlen:
            evicted = self._items.popleft()
        self._items.append(item)
        return evicted

    def fill(self, item: Any):
        """將 item 推入 maxlen 次，用 sentinel 填滿整個視窗"""
        for _ in range(self._maxlen):
            self.push(item)

    def snapshot(self) -> Tuple[Any, ...]:
        """
        取得目前內容（最舊的在前）

        Returns:
            Tuple: 與視窗無關聯的內容副本
        """
        return tuple(self._items)

    def copy(self) -> 'BoundedWindow':
        """建立獨立的副本，之後兩者的 push 互不影響"""
        duplicate = BoundedWindow(self._maxlen)
        duplicate._items.extend(self._items)
        return duplicate

    __copy__ = copy

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.snapshot())

    def __repr__(self):
        return f"BoundedWindow(maxlen={self._maxlen}, items={list(self._items)!r})"
