"""
PQGram Profile 建構

依 Augsten, Böhlen & Gamper 的 pq-gram 定義，遞迴走訪樹並在每個節點事件
產生一個 (祖先視窗, 兄弟視窗) 快照。

參考文獻:
    Augsten, N., Böhlen, M., & Gamper, J. (2005). Approximate matching of
    hierarchical data using pq-grams. VLDB 2005, 301-312.
"""

import logging
from typing import Any, List

from .gram import FILLER, Gram
from .tree import LabelledTree
from .window import BoundedWindow

logger = logging.getLogger(__name__)


def build_profile(tree: LabelledTree, p: int, q: int, sort: bool = False) -> List[Gram]:
    """
    建立一棵樹的 PQGram profile

    每個葉節點產生 1 個 gram；有 k 個子節點的節點產生 k + (q - 1) 個 gram。
    每個 gram 的祖先長度恆為 p、兄弟長度恆為 q（不足處以 FILLER 補齊）。

    Args:
        tree: 任何 LabelledTree
        p: 祖先視窗大小
        q: 兄弟視窗大小
        sort: 是否依 Gram 全序排序。比較距離前 profile 必須已排序。

    Returns:
        List[Gram]: profile（允許重複的 gram）
    """
    ancestors = BoundedWindow(p)
    ancestors.fill(FILLER)

    profile = _profile_subtree(tree, q, ancestors)
    if sort:
        profile.sort()

    logger.debug(f"Built pq-gram profile (p={p}, q={q}, sort={sort}): {len(profile)} grams")
    return profile


def _profile_subtree(node: LabelledTree, q: int, ancestors: BoundedWindow) -> List[Gram]:
    """
    遞迴產生以 node 為根的子樹的 gram

    ancestors 由呼叫端傳入的副本，這裡直接修改不會影響兄弟子樹。
    """
    ancestors.push(node.get_label())
    ancestor_state = ancestors.snapshot()

    siblings = BoundedWindow(q)
    siblings.fill(FILLER)

    children = node.get_children()
    if not children:
        return [Gram(ancestor_state, siblings.snapshot())]

    grams = []
    for child in children:
        siblings.push(child.get_label())
        grams.append(Gram(ancestor_state, siblings.snapshot()))
        grams.extend(_profile_subtree(child, q, ancestors.copy()))

    # 兄弟列表結尾滑出視窗
    for _ in range(q - 1):
        siblings.push(FILLER)
        grams.append(Gram(ancestor_state, siblings.snapshot()))

    return grams


def flatten_profile(profile: List[Gram], filler_value: Any) -> List[List[Any]]:
    """
    將 profile 中每個 gram 轉為長度 p+q 的扁平序列

    Args:
        profile: PQGram profile
        filler_value: 取代 FILLER 的值，例如 '*'

    Returns:
        List[List]: 扁平化後的 gram 列表，順序與 profile 相同
    """
    return [gram.concat(filler_value) for gram in profile]
