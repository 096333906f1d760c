"""
PQGram 距離矩陣計算

計算族群中所有個體兩兩之間的 PQGram 距離。每棵樹的 profile 只建構一次，
配對比較可選擇以 multiprocessing 並行執行。
"""

import logging
from functools import partial
from multiprocessing import Pool, cpu_count
from typing import Any, List, Optional, Tuple

import numpy as np
import pandas as pd
from tqdm import tqdm

from .config import ProfileConfig
from .distance import GramCompare, default_gram_distance, pqgram_distance_with_fn
from .gram import Gram
from .profile import build_profile
from .tree import DEAP_AVAILABLE, LabelledTree, deap_to_tree_node

if DEAP_AVAILABLE:
    from deap import gp

logger = logging.getLogger(__name__)


def _compute_distance_batch(
    pairs: List[Tuple[int, int]],
    profiles: List[List[Gram]],
    filler_value: Any = None,
    gram_compare: GramCompare = default_gram_distance
) -> List[Tuple[int, int, float]]:
    """
    計算一批配對的距離（worker 函數）

    Args:
        pairs: 配對列表 [(i, j), ...]
        profiles: 已排序的 profile 列表
        filler_value: 取代 FILLER 的值
        gram_compare: gram 比較函數，並行模式下必須可被 pickle

    Returns:
        List[Tuple[int, int, float]]: [(i, j, distance), ...]
    """
    results = []
    for i, j in pairs:
        distance = pqgram_distance_with_fn(profiles[i], profiles[j], filler_value, gram_compare)
        results.append((i, j, distance))
    return results


class ProfileDistanceMatrix:
    """
    PQGram 距離矩陣計算器

    Attributes:
        population: 族群（LabelledTree 或 DEAP PrimitiveTree 列表）
        config: ProfileConfig
        distance_matrix: 距離矩陣 (numpy array)，對角線為 0
        similarity_matrix: 相似度矩陣 (1 - distance)
        n_workers: 並行 worker 數量，1 表示循序計算
    """

    def __init__(self,
                 population: List,
                 config: Optional[ProfileConfig] = None,
                 gram_compare: Optional[GramCompare] = None,
                 n_workers: Optional[int] = 1):
        """
        初始化距離矩陣計算器

        Args:
            population: 族群列表
            config: PQGram 參數，None 使用預設值 (p=2, q=3)
            gram_compare: gram 比較函數，None 使用 default_gram_distance
            n_workers: 並行 worker 數量（None = cpu_count()）
        """
        self.population = population
        self.n = len(population)
        self.config = config if config is not None else ProfileConfig()
        self.gram_compare = gram_compare if gram_compare is not None else default_gram_distance

        if n_workers is None:
            self.n_workers = cpu_count()
        else:
            self.n_workers = max(1, min(n_workers, cpu_count()))

        self.profiles: Optional[List[List[Gram]]] = None
        self.distance_matrix: Optional[np.ndarray] = None
        self.similarity_matrix: Optional[np.ndarray] = None

    def _convert_population(self) -> List[LabelledTree]:
        """
        轉換 population 為 LabelledTree 列表

        Raises:
            TypeError: 不支援的個體型別
        """
        trees = []
        for ind in self.population:
            if isinstance(ind, LabelledTree):
                trees.append(ind)
            elif DEAP_AVAILABLE and isinstance(ind, gp.PrimitiveTree):
                trees.append(deap_to_tree_node(ind))
            else:
                raise TypeError(f"Unsupported population member type: {type(ind)}")
        return trees

    def _build_profiles(self) -> List[List[Gram]]:
        # merge-join 需要排序過的 profile，不論 config.sort
        return [build_profile(tree, self.config.p, self.config.q, sort=True)
                for tree in self._convert_population()]

    def _generate_pairs(self) -> List[Tuple[int, int]]:
        """生成所有需要計算的配對（上三角）"""
        return [(i, j) for i in range(self.n) for j in range(i + 1, self.n)]

    def _split_pairs(self, pairs: List[Tuple[int, int]]) -> List[List[Tuple[int, int]]]:
        """將配對分配到各 worker"""
        if not pairs:
            return []
        chunk_size = (len(pairs) + self.n_workers - 1) // self.n_workers
        return [pairs[i:i + chunk_size] for i in range(0, len(pairs), chunk_size)]

    def compute(self, show_progress: bool = True) -> np.ndarray:
        """
        計算距離矩陣

        Args:
            show_progress: 是否顯示進度條

        Returns:
            np.ndarray: 距離矩陣 (n x n)
        """
        self.distance_matrix = np.zeros((self.n, self.n))

        self.profiles = self._build_profiles()
        pairs = self._generate_pairs()

        logger.info(f"Computing pq-gram distances for {self.n} trees ({len(pairs)} pairs, "
                    f"p={self.config.p}, q={self.config.q}, workers={self.n_workers})")

        worker_func = partial(
            _compute_distance_batch,
            profiles=self.profiles,
            filler_value=self.config.filler_value,
            gram_compare=self.gram_compare
        )

        pbar = tqdm(total=len(pairs), desc="pq-gram distance") if show_progress else None

        if self.n_workers == 1:
            batches = (worker_func([pair]) for pair in pairs)
            self._fill(batches, pbar)
        else:
            with Pool(processes=self.n_workers) as pool:
                # imap_unordered 以便即時更新進度
                self._fill(pool.imap_unordered(worker_func, self._split_pairs(pairs)), pbar)

        if pbar is not None:
            pbar.close()

        self.similarity_matrix = 1.0 - self.distance_matrix
        logger.info(f"Distance matrix done for {self.n} trees")
        return self.distance_matrix

    def _fill(self, batches, pbar):
        for batch_results in batches:
            for i, j, distance in batch_results:
                self.distance_matrix[i][j] = distance
                self.distance_matrix[j][i] = distance
            if pbar is not None:
                pbar.update(len(batch_results))

    def _require_computed(self):
        if self.distance_matrix is None:
            raise ValueError("Distance matrix not computed yet; call compute() first")

    def _off_diagonal(self, matrix: np.ndarray) -> np.ndarray:
        mask = ~np.eye(self.n, dtype=bool)
        return matrix[mask]

    def get_distance(self, i: int, j: int) -> float:
        """獲取兩個個體之間的距離"""
        self._require_computed()
        return float(self.distance_matrix[i][j])

    def get_similarity(self, i: int, j: int) -> float:
        """獲取兩個個體之間的相似度 (1 - 距離)"""
        self._require_computed()
        return float(self.similarity_matrix[i][j])

    def get_statistics(self) -> dict:
        """
        獲取距離統計資訊（不含對角線）

        Returns:
            dict: mean / std / min / max 距離與 diversity_score
        """
        self._require_computed()
        if self.n < 2:
            raise ValueError("Statistics need at least two trees")

        distances = self._off_diagonal(self.distance_matrix)
        return {
            'mean': float(np.mean(distances)),
            'std': float(np.std(distances)),
            'min': float(np.min(distances)),
            'max': float(np.max(distances)),
            'diversity_score': float(np.mean(distances))
        }

    def _ranked_pairs(self, reverse: bool) -> List[Tuple[int, int, float]]:
        self._require_computed()
        pairs = [(i, j, float(self.distance_matrix[i][j])) for i, j in self._generate_pairs()]
        pairs.sort(key=lambda x: x[2], reverse=reverse)
        return pairs

    def get_most_similar_pairs(self, top_k: int = 10) -> List[Tuple[int, int, float]]:
        """獲取距離最小的 k 對個體 [(i, j, distance), ...]"""
        return self._ranked_pairs(reverse=False)[:top_k]

    def get_most_dissimilar_pairs(self, top_k: int = 10) -> List[Tuple[int, int, float]]:
        """獲取距離最大的 k 對個體 [(i, j, distance), ...]"""
        return self._ranked_pairs(reverse=True)[:top_k]

    def to_dataframe(self, labels: Optional[List[str]] = None) -> pd.DataFrame:
        """
        將距離矩陣轉為 DataFrame

        Args:
            labels: 行列標籤，None 使用索引

        Returns:
            pd.DataFrame: n x n 距離表
        """
        self._require_computed()
        if labels is not None and len(labels) != self.n:
            raise ValueError(f"Expected {self.n} labels, got {len(labels)}")
        index = labels if labels is not None else list(range(self.n))
        return pd.DataFrame(self.distance_matrix, index=index, columns=index)
