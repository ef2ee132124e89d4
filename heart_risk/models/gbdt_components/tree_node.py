"""
Decision Tree Node Implementation

This module contains the DecisionTreeNode class. A node is a tagged
variant: either a leaf carrying a residual prediction, or a split on one
clinical feature with a left (<= threshold) and right (> threshold) child.
"""

from typing import Any, Dict, Optional

import numpy as np

from ...config import FEATURE_NAMES


class DecisionTreeNode:
    """
    Regression tree node

    Attributes:
    -----------
    is_leaf : bool
        Variant tag
    value : float or None
        Residual prediction (leaf only)
    feature_idx : int or None
        Index into FEATURE_NAMES used for the split (split only)
    threshold : float or None
        Raw, un-normalized split threshold (split only)
    left : DecisionTreeNode or None
        Child for samples with feature <= threshold
    right : DecisionTreeNode or None
        Child for samples with feature > threshold
    depth : int
        Depth of the node in its tree
    n_samples : int
        Number of training samples that reached this node
    information_gain : float
        Impurity reduction of the split (split only)
    """

    def __init__(self, depth: int = 0, n_samples: int = 0):
        self.is_leaf = False
        self.value = None
        self.feature_idx = None
        self.threshold = None
        self.left = None
        self.right = None
        self.depth = depth
        self.n_samples = n_samples
        self.information_gain = 0.0

    @classmethod
    def leaf(cls, value: float, depth: int = 0, n_samples: int = 0) -> "DecisionTreeNode":
        node = cls(depth=depth, n_samples=n_samples)
        node.is_leaf = True
        node.value = float(value)
        return node

    @classmethod
    def split(
        cls,
        feature_idx: int,
        threshold: float,
        left: "DecisionTreeNode",
        right: "DecisionTreeNode",
        depth: int = 0,
        n_samples: int = 0,
        information_gain: float = 0.0,
    ) -> "DecisionTreeNode":
        node = cls(depth=depth, n_samples=n_samples)
        node.feature_idx = int(feature_idx)
        node.threshold = float(threshold)
        node.left = left
        node.right = right
        node.information_gain = float(information_gain)
        return node

    @property
    def feature(self) -> Optional[str]:
        if self.is_leaf:
            return None
        return FEATURE_NAMES[self.feature_idx]

    def predict(self, X_normalized: np.ndarray, means: np.ndarray, stds: np.ndarray) -> np.ndarray:
        """
        Evaluate the subtree on z-score normalized samples

        The split threshold is normalized with the same statistics before
        comparing, so a sample goes left when
        normalized(value) <= normalized(threshold).

        Parameters:
        -----------
        X_normalized : array-like, shape=(n_samples, n_features)
            Normalized feature matrix
        means : array-like, shape=(n_features,)
            Training means
        stds : array-like, shape=(n_features,)
            Training standard deviations (no zeros)

        Returns:
        --------
        predictions : array-like, shape=(n_samples,)
            Leaf value reached by every sample
        """
        if self.is_leaf:
            return np.full(X_normalized.shape[0], self.value)

        normalized_threshold = (self.threshold - means[self.feature_idx]) / stds[self.feature_idx]
        mask = X_normalized[:, self.feature_idx] <= normalized_threshold

        predictions = np.empty(X_normalized.shape[0])
        if np.any(mask):
            predictions[mask] = self.left.predict(X_normalized[mask], means, stds)
        if np.any(~mask):
            predictions[~mask] = self.right.predict(X_normalized[~mask], means, stds)
        return predictions

    def get_depth(self) -> int:
        """
        Number of edges on the longest root-to-leaf path of this subtree
        """
        if self.is_leaf:
            return 0
        return 1 + max(self.left.get_depth(), self.right.get_depth())

    def count_nodes(self) -> int:
        if self.is_leaf:
            return 1
        return 1 + self.left.count_nodes() + self.right.count_nodes()

    def to_dict(self) -> Dict[str, Any]:
        """
        Nested dict form of the subtree

        Returns:
        --------
        tree : dict
            {"type": "leaf", "value": ...} or
            {"type": "split", "feature": ..., "threshold": ..., "left": ..., "right": ...}
        """
        if self.is_leaf:
            return {"type": "leaf", "value": self.value}
        return {
            "type": "split",
            "feature": self.feature,
            "threshold": self.threshold,
            "left": self.left.to_dict(),
            "right": self.right.to_dict(),
        }

    def __str__(self) -> str:
        if self.is_leaf:
            return f"Leaf(depth={self.depth}, samples={self.n_samples}, value={self.value:.4f})"
        return (
            f"Split(depth={self.depth}, samples={self.n_samples}, "
            f"feature={self.feature}, threshold={self.threshold:.4f})"
        )

    def __repr__(self) -> str:
        return self.__str__()
