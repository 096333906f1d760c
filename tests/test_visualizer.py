"""
Unit tests for DistanceVisualizer
"""

import sys
from pathlib import Path

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import numpy as np
import pytest

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from pqgram.visualizer import DistanceVisualizer


@pytest.fixture
def distance_matrix():
    return np.array([
        [0.0, 0.31, 1.0],
        [0.31, 0.0, 0.8],
        [1.0, 0.8, 0.0],
    ])


def test_heatmap_saved(tmp_path, distance_matrix):
    save_path = tmp_path / "heatmap.png"
    fig = DistanceVisualizer.plot_distance_heatmap(
        distance_matrix, labels=['t0', 't1', 't2'], save_path=str(save_path), show=False
    )
    assert save_path.exists()
    assert 'Mean distance' in fig.axes[0].get_title()
    plt.close(fig)


def test_distribution_saved(tmp_path, distance_matrix):
    save_path = tmp_path / "distribution.png"
    fig = DistanceVisualizer.plot_distance_distribution(
        distance_matrix, bins=5, save_path=str(save_path), show=False
    )
    assert save_path.exists()
    plt.close(fig)


def test_single_tree_heatmap():
    fig = DistanceVisualizer.plot_distance_heatmap(np.zeros((1, 1)), show=False)
    assert fig.axes[0].get_title() == 'PQ-Gram Distance Matrix'
    plt.close(fig)
