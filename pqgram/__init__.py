"""
PQGram Tree Similarity

This package approximates tree edit distance between labelled, ordered trees
with pq-grams: each tree is reduced to a profile of small (ancestor x sibling)
windows, and two trees are compared by the overlap of their profiles.

Components:
- BoundedWindow: Fixed-capacity sliding window used during traversal
- LabelledTree / TreeNode: Tree capability and a simple concrete tree
- build_profile: Build the pq-gram profile of a tree
- pqgram_distance: Distance between two sorted profiles
- ProfileDistanceMatrix: Pairwise distances for a population of trees

Usage:
    from pqgram import TreeNode, build_profile, pqgram_distance

    tree1 = TreeNode("a", [TreeNode("b"), TreeNode("c")])
    tree2 = TreeNode("a", [TreeNode("b"), TreeNode("d")])

    prof1 = build_profile(tree1, p=2, q=3, sort=True)
    prof2 = build_profile(tree2, p=2, q=3, sort=True)
    distance = pqgram_distance(prof1, prof2)
"""

__version__ = '0.1.0'

from .window import BoundedWindow
from .gram import FILLER, Gram, GramNode
from .tree import (
    LabelledTree,
    TreeNode,
    count_nodes,
    deap_to_tree_node,
    tree_node_to_bracket
)
from .profile import build_profile, flatten_profile
from .distance import (
    compute_pqgram_distance,
    compute_pqgram_similarity,
    default_gram_distance,
    pqgram_distance,
    pqgram_distance_with_fn,
    profile_intersection
)
from .config import ProfileConfig
from .matrix import ProfileDistanceMatrix

__all__ = [
    # Window
    'BoundedWindow',
    # Grams
    'FILLER',
    'Gram',
    'GramNode',
    # Trees
    'LabelledTree',
    'TreeNode',
    'count_nodes',
    'deap_to_tree_node',
    'tree_node_to_bracket',
    # Profiles
    'build_profile',
    'flatten_profile',
    # Distance
    'compute_pqgram_distance',
    'compute_pqgram_similarity',
    'default_gram_distance',
    'pqgram_distance',
    'pqgram_distance_with_fn',
    'profile_intersection',
    # Configuration
    'ProfileConfig',
    # Matrix
    'ProfileDistanceMatrix',
]
