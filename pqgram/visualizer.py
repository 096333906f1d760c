"""
Distance Matrix Visualizer

Provides visualization tools for pq-gram distance matrices.
"""

from typing import List, Optional, Tuple

import matplotlib.pyplot as plt
import numpy as np


class DistanceVisualizer:
    """Visualize pairwise pq-gram distances of a population."""

    @staticmethod
    def plot_distance_heatmap(
        distance_matrix: np.ndarray,
        labels: Optional[List[str]] = None,
        title: str = 'PQ-Gram Distance Matrix',
        figsize: Tuple[int, int] = (10, 8),
        save_path: Optional[str] = None,
        show: bool = True
    ):
        """
        Plot a distance matrix as a heatmap.

        Args:
            distance_matrix: n x n matrix from ProfileDistanceMatrix.compute()
            labels: Optional tick labels, one per tree
            title: Figure title
            figsize: Figure size
            save_path: Path to save the figure
            show: Whether to display the plot

        Returns:
            The matplotlib Figure
        """
        fig, ax = plt.subplots(figsize=figsize)

        image = ax.imshow(distance_matrix, cmap='YlOrRd', vmin=0, vmax=1)
        fig.colorbar(image, ax=ax, label='Distance')

        n = distance_matrix.shape[0]
        if n > 1:
            mask = ~np.eye(n, dtype=bool)
            title += f'\nMean distance: {np.mean(distance_matrix[mask]):.4f}'
        ax.set_title(title, fontsize=13, fontweight='bold', pad=10)

        if labels is not None:
            ax.set_xticks(range(n))
            ax.set_yticks(range(n))
            ax.set_xticklabels(labels, rotation=90, fontsize=8)
            ax.set_yticklabels(labels, fontsize=8)
        ax.set_xlabel('Tree Index', fontsize=11)
        ax.set_ylabel('Tree Index', fontsize=11)

        plt.tight_layout()

        if save_path:
            plt.savefig(save_path, dpi=300, bbox_inches='tight')
        if show:
            plt.show()

        return fig

    @staticmethod
    def plot_distance_distribution(
        distance_matrix: np.ndarray,
        bins: int = 20,
        figsize: Tuple[int, int] = (10, 6),
        save_path: Optional[str] = None,
        show: bool = True
    ):
        """
        Plot the histogram of off-diagonal pairwise distances.

        Args:
            distance_matrix: n x n distance matrix
            bins: Number of histogram bins
            figsize: Figure size
            save_path: Path to save the figure
            show: Whether to display the plot

        Returns:
            The matplotlib Figure
        """
        n = distance_matrix.shape[0]
        distances = distance_matrix[np.triu_indices(n, k=1)]

        fig, ax = plt.subplots(figsize=figsize)
        ax.hist(distances, bins=bins, color='steelblue', alpha=0.8, edgecolor='white')

        if distances.size:
            mean = float(np.mean(distances))
            ax.axvline(mean, color='red', linestyle='--', linewidth=2, label=f'Mean {mean:.4f}')
            ax.legend(fontsize=9, loc='best')

        ax.set_title('PQ-Gram Distance Distribution', fontsize=13, fontweight='bold', pad=10)
        ax.set_xlabel('Distance', fontsize=11)
        ax.set_ylabel('Pairs', fontsize=11)
        ax.grid(True, alpha=0.3, linestyle='--')

        plt.tight_layout()

        if save_path:
            plt.savefig(save_path, dpi=300, bbox_inches='tight')
        if show:
            plt.show()

        return fig
