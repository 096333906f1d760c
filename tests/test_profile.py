"""
Unit tests for pq-gram profile construction
"""

import random
import sys
from pathlib import Path

import pytest

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from pqgram.gram import FILLER, GramNode
from pqgram.profile import build_profile, flatten_profile
from pqgram.tree import TreeNode


def build_known_tree_1() -> TreeNode:
    """{a{a{e}{b}}{b}{c}}"""
    return (TreeNode("a")
            .add_node(TreeNode("a")
                      .add_node(TreeNode("e"))
                      .add_node(TreeNode("b")))
            .add_node(TreeNode("b"))
            .add_node(TreeNode("c")))


KNOWN_PROFILE_1 = [
    ["*", "a", "*", "*", "a"],
    ["*", "a", "*", "a", "b"],
    ["*", "a", "a", "b", "c"],
    ["*", "a", "b", "c", "*"],
    ["*", "a", "c", "*", "*"],
    ["a", "a", "*", "*", "e"],
    ["a", "a", "*", "e", "b"],
    ["a", "a", "b", "*", "*"],
    ["a", "a", "e", "b", "*"],
    ["a", "b", "*", "*", "*"],
    ["a", "b", "*", "*", "*"],
    ["a", "c", "*", "*", "*"],
    ["a", "e", "*", "*", "*"],
]


def random_tree(rng: random.Random, depth: int, labels: str = "abcde") -> TreeNode:
    node = TreeNode(rng.choice(labels))
    if depth > 0:
        for _ in range(rng.randint(0, 4)):
            node.add_node(random_tree(rng, depth - 1, labels))
    return node


def expected_size(tree: TreeNode, q: int) -> int:
    k = len(tree.children)
    own = k + q - 1 if k else 1
    return own + sum(expected_size(child, q) for child in tree.children)


class TestBuildProfile:
    """Test cases for build_profile"""

    def test_known_sorted_profile(self):
        """已知樹的排序 profile"""
        profile = build_profile(build_known_tree_1(), 2, 3, sort=True)
        assert len(profile) == 13
        assert flatten_profile(profile, "*") == KNOWN_PROFILE_1

    def test_unsorted_profile_is_traversal_order(self):
        """未排序時依走訪順序輸出"""
        profile = build_profile(build_known_tree_1(), 2, 3, sort=False)
        flat = flatten_profile(profile, "*")
        assert flat[:4] == [
            ["*", "a", "*", "*", "a"],
            ["a", "a", "*", "*", "e"],
            ["a", "e", "*", "*", "*"],
            ["a", "a", "*", "e", "b"],
        ]
        assert flat[-1] == ["*", "a", "c", "*", "*"]
        assert sorted(flat) == KNOWN_PROFILE_1

    def test_single_node(self):
        """單一節點只產生一個 gram，除根標籤外皆為 filler"""
        for p, q in [(1, 1), (2, 3), (4, 2)]:
            profile = build_profile(TreeNode("r"), p, q)
            assert len(profile) == 1
            gram = profile[0]
            assert gram.ancestors == (FILLER,) * (p - 1) + (GramNode.of("r"),)
            assert gram.siblings == (FILLER,) * q

    def test_gram_shape_and_size(self):
        """每個 gram 長度為 (p, q)，profile 大小符合公式"""
        rng = random.Random(7)
        for _ in range(20):
            tree = random_tree(rng, depth=4)
            for p, q in [(1, 1), (2, 3), (3, 2), (1, 4)]:
                profile = build_profile(tree, p, q)
                assert len(profile) == expected_size(tree, q)
                assert all(gram.p == p and gram.q == q for gram in profile)

    def test_ancestor_window_is_branch_local(self):
        """兄弟子樹不會看到彼此推入的祖先"""
        tree = TreeNode("r", [
            TreeNode("x", [TreeNode("x1")]),
            TreeNode("y", [TreeNode("y1")]),
        ])
        profile = build_profile(tree, 3, 1)
        leaf_grams = [gram.concat("*")[:3] for gram in profile if gram.ancestors[-1].value in ("x1", "y1")]
        assert leaf_grams == [["r", "x", "x1"], ["r", "y", "y1"]]

    def test_deterministic(self):
        """結構相同的兩棵樹產生相同 profile"""
        assert build_profile(build_known_tree_1(), 2, 3) == build_profile(build_known_tree_1(), 2, 3)

    def test_does_not_mutate_tree(self):
        tree = build_known_tree_1()
        build_profile(tree, 2, 3, sort=True)
        assert tree == build_known_tree_1()

    def test_degenerate_windows(self):
        """p=0 或 q=0 產生空視窗，但不會出錯"""
        profile = build_profile(build_known_tree_1(), 0, 0)
        assert all(gram.ancestors == () and gram.siblings == () for gram in profile)

    def test_literal_star_label_is_not_filler(self):
        profile = build_profile(TreeNode("*"), 1, 1)
        assert profile[0].ancestors == (GramNode.of("*"),)
        assert profile[0].siblings == (FILLER,)

    def test_integer_labels(self):
        tree = TreeNode(1, [TreeNode(2), TreeNode(3)])
        flat = flatten_profile(build_profile(tree, 2, 2, sort=True), 0)
        assert flat == [
            [0, 1, 0, 2],
            [0, 1, 2, 3],
            [0, 1, 3, 0],
            [1, 2, 0, 0],
            [1, 3, 0, 0],
        ]

    def test_negative_window_size(self):
        with pytest.raises(ValueError):
            build_profile(TreeNode("a"), -1, 2)


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
