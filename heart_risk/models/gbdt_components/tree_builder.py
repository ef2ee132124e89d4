"""
Tree Builder

This module handles the recursive construction of a binary regression
tree fitted to the pseudo-residuals of one boosting round.
"""

import numpy as np

from .split_evaluator import SplitEvaluator
from .tree_node import DecisionTreeNode


class TreeBuilder:
    """
    Builds one regression tree

    Attributes:
    -----------
    max_depth : int
        Maximum depth; a node at this depth becomes a leaf
    min_samples_split : int
        Partitions smaller than this become leaves
    split_evaluator : SplitEvaluator
        Split search strategy
    """

    def __init__(self, max_depth: int = 4, min_samples_split: int = 5):
        self.max_depth = max_depth
        self.min_samples_split = min_samples_split
        self.split_evaluator = SplitEvaluator()

    def build_tree(self, X: np.ndarray, residuals: np.ndarray) -> DecisionTreeNode:
        """
        Build a tree on the full training set

        Parameters:
        -----------
        X : array-like, shape=(n_samples, n_features)
            Raw feature values
        residuals : array-like, shape=(n_samples,)
            Pseudo-residuals to fit

        Returns:
        --------
        root : DecisionTreeNode
            Root of the built tree
        """
        return self._build_tree_recursive(X, residuals, 0)

    def _build_tree_recursive(self, X: np.ndarray, residuals: np.ndarray, depth: int) -> DecisionTreeNode:
        n_samples = X.shape[0]

        if self._should_stop_splitting(n_samples, depth):
            return self._make_leaf(residuals, depth)

        best_split = self.split_evaluator.search_best_split(X, residuals)
        if best_split is None:
            return self._make_leaf(residuals, depth)

        feature_idx, threshold, information_gain = best_split
        left_mask = X[:, feature_idx] <= threshold
        right_mask = ~left_mask

        left = self._build_tree_recursive(X[left_mask], residuals[left_mask], depth + 1)
        right = self._build_tree_recursive(X[right_mask], residuals[right_mask], depth + 1)

        return DecisionTreeNode.split(
            feature_idx,
            threshold,
            left,
            right,
            depth=depth,
            n_samples=n_samples,
            information_gain=information_gain,
        )

    def _should_stop_splitting(self, n_samples: int, depth: int) -> bool:
        return depth >= self.max_depth or n_samples < self.min_samples_split

    @staticmethod
    def _make_leaf(residuals: np.ndarray, depth: int) -> DecisionTreeNode:
        # leaf value is the mean residual of the partition
        return DecisionTreeNode.leaf(float(np.mean(residuals)), depth=depth, n_samples=residuals.shape[0])
