"""
PQGram Distance

以 merge-join 比較兩個已排序的 profile，並將交集量轉為距離：

    distance = 1 - 2 * intersection / (|left| + |right|)

注意事項:
    1. 分母使用兩個 profile 大小的總和，而非去重後的聯集大小。
       此行為沿用 PyGram，profile 中重複 gram 很多時結果可能超出 [0, 1]。
    2. 未提供 filler_value 時使用標籤型別的預設值（str 為 ''）。若預設值
       本身也是樹中的合法標籤，filler 與該標籤會被視為相同，比較結果可能錯誤。
       此時請提供一個不會出現在樹中的 filler_value。
"""

import logging
from typing import Any, Callable, List, Optional, Tuple

from .gram import Gram
from .profile import build_profile
from .tree import LabelledTree

logger = logging.getLogger(__name__)

# (left, right, filler_value) -> (similarity in [0, 1], ordering in {-1, 0, 1})
GramCompare = Callable[[Gram, Gram, Any], Tuple[float, int]]


def default_gram_distance(left: Gram, right: Gram, filler_value: Any) -> Tuple[float, int]:
    """
    預設的 gram 比較函數

    將兩個 gram 各自串接為扁平序列後逐一比較：完全相同回傳 ``(1.0, 0)``，
    否則回傳 ``(0.0, ordering)``，ordering 取自第一個不同的元素。
    只有相同/不同兩種結果，沒有中間值。

    Args:
        left: 左側 gram
        right: 右側 gram
        filler_value: 取代 FILLER 的值

    Returns:
        Tuple[float, int]: (相似度, 排序訊號 -1/0/1)
    """
    for l, r in zip(left.concat(filler_value), right.concat(filler_value)):
        if l == r:
            continue
        return 0.0, (-1 if l < r else 1)
    return 1.0, 0


def _infer_filler_value(left: List[Gram], right: List[Gram]) -> Any:
    """
    取 profile 中第一個真實標籤之型別的預設值

    若 profile 完全沒有真實標籤，每個扁平元素都是 filler 本身，回傳 None 即可。
    """
    labels = (node.value
              for profile in (left, right)
              for gram in profile
              for node in gram.ancestors + gram.siblings
              if not node.is_filler)
    first = next(labels, None)
    if first is None:
        return None

    filler_value = type(first)()
    if filler_value == first or any(label == filler_value for label in labels):
        logger.warning(
            f"Default filler value {filler_value!r} is also used as a tree label; "
            f"pass an explicit filler_value to avoid false matches"
        )
    return filler_value


def profile_intersection(left: List[Gram],
                         right: List[Gram],
                         filler_value: Optional[Any] = None,
                         gram_compare: GramCompare = default_gram_distance) -> float:
    """
    計算兩個已排序 profile 的交集量

    兩個游標沿著 profile 前進：排序訊號為 0 時兩者都前進，-1 時只有左側前進，
    1 時只有右側前進。每一次比較的相似度都會累加。任一側用完即停止。

    Args:
        left: 已排序的 profile
        right: 已排序的 profile
        filler_value: 取代 FILLER 的值，None 表示使用標籤型別預設值
        gram_compare: gram 比較函數

    Returns:
        float: 交集量
    """
    if filler_value is None:
        filler_value = _infer_filler_value(left, right)

    intersection = 0.0
    i, j = 0, 0
    max_i, max_j = len(left), len(right)

    while i < max_i and j < max_j:
        similarity, order = gram_compare(left[i], right[j], filler_value)
        intersection += similarity
        if order == 0:
            i += 1
            j += 1
        elif order < 0:
            i += 1
        else:
            j += 1

    return intersection


def pqgram_distance_with_fn(left: List[Gram],
                            right: List[Gram],
                            filler_value: Optional[Any] = None,
                            gram_compare: Optional[GramCompare] = None) -> float:
    """
    使用自訂 gram 比較函數計算兩個已排序 profile 的距離

    Args:
        left: 已排序的 profile
        right: 已排序的 profile
        filler_value: 取代 FILLER 的值（見模組說明的注意事項）
        gram_compare: 回傳 (相似度, 排序訊號) 的函數，None 使用 default_gram_distance

    Returns:
        float: 距離，0 表示相同，名義上位於 [0, 1]

    Raises:
        ValueError: 兩個 profile 皆為空
    """
    if gram_compare is None:
        gram_compare = default_gram_distance

    union = len(left) + len(right)
    if union == 0:
        raise ValueError("Cannot compute pq-gram distance between two empty profiles")

    intersection = profile_intersection(left, right, filler_value, gram_compare)
    distance = 1.0 - 2.0 * (intersection / union)

    logger.debug(f"pq-gram intersection={intersection}, union={union}, distance={distance:.4f}")
    return distance


def pqgram_distance(left: List[Gram], right: List[Gram], filler_value: Optional[Any] = None) -> float:
    """以 default_gram_distance 計算兩個已排序 profile 的距離"""
    return pqgram_distance_with_fn(left, right, filler_value, default_gram_distance)


# 便捷函數
def compute_pqgram_distance(tree1: LabelledTree,
                            tree2: LabelledTree,
                            p: int = 2,
                            q: int = 3,
                            filler_value: Optional[Any] = None) -> float:
    """
    計算兩棵樹的 PQGram 距離

    Args:
        tree1: 第一棵樹
        tree2: 第二棵樹
        p: 祖先視窗大小
        q: 兄弟視窗大小
        filler_value: 取代 FILLER 的值

    Returns:
        float: 距離
    """
    profile1 = build_profile(tree1, p, q, sort=True)
    profile2 = build_profile(tree2, p, q, sort=True)
    return pqgram_distance(profile1, profile2, filler_value)


def compute_pqgram_similarity(tree1: LabelledTree,
                              tree2: LabelledTree,
                              p: int = 2,
                              q: int = 3,
                              filler_value: Optional[Any] = None) -> float:
    """
    計算兩棵樹的 PQGram 相似度 (1 - 距離)

    Returns:
        float: 相似度，1 表示相同
    """
    return 1.0 - compute_pqgram_distance(tree1, tree2, p, q, filler_value)
