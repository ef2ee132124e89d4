"""
Split Evaluator

This module scores every candidate (feature, threshold) pair of a data
partition by the reduction in mean squared deviation of the residuals.
"""

from typing import Optional, Tuple

import numpy as np


def _ordered_unique(values: np.ndarray) -> np.ndarray:
    """Distinct values in order of first occurrence."""
    unique_values, first_index = np.unique(values, return_index=True)
    return unique_values[np.argsort(first_index, kind="stable")]


class SplitEvaluator:
    """
    Exhaustive split search over observed feature values

    Candidate thresholds are exactly the values present in the partition,
    enumerated feature by feature and, within a feature, in order of first
    occurrence. A candidate replaces the current best only when its gain is
    strictly greater, so ties resolve to the earliest candidate.
    """

    def search_best_split(
        self,
        X: np.ndarray,
        residuals: np.ndarray
    ) -> Optional[Tuple[int, float, float]]:
        """
        Find the split with maximal impurity reduction

        Parameters:
        -----------
        X : array-like, shape=(n_samples, n_features)
            Raw feature values of the partition
        residuals : array-like, shape=(n_samples,)
            Pseudo-residuals of the partition

        Returns:
        --------
        best_split : tuple or None
            (feature_idx, threshold, gain), or None when no split with
            both sides non-empty has a positive gain
        """
        n_samples, n_features = X.shape
        if n_samples == 0:
            return None

        parent_loss = self._calculate_node_loss(residuals)
        best_gain = -np.inf
        best_feature = None
        best_threshold = None

        for feature_idx in range(n_features):
            feature_values = X[:, feature_idx]

            for threshold in _ordered_unique(feature_values):
                left_mask = feature_values <= threshold
                n_left = int(np.sum(left_mask))

                # empty side
                if n_left == 0 or n_left == n_samples:
                    continue

                gain = self._calculate_information_gain(parent_loss, residuals, left_mask)

                if gain > best_gain:
                    best_gain = gain
                    best_feature = feature_idx
                    best_threshold = float(threshold)

        if best_feature is None or best_gain <= 0:
            return None
        return best_feature, best_threshold, float(best_gain)

    def _calculate_information_gain(
        self,
        parent_loss: float,
        residuals: np.ndarray,
        left_mask: np.ndarray
    ) -> float:
        """
        gain = MSE(all) - (|L|/|N| * MSE(L) + |R|/|N| * MSE(R))
        """
        n_total = residuals.shape[0]
        left = residuals[left_mask]
        right = residuals[~left_mask]

        weighted_loss = (
            (left.shape[0] / n_total) * self._calculate_node_loss(left)
            + (right.shape[0] / n_total) * self._calculate_node_loss(right)
        )
        return parent_loss - weighted_loss

    @staticmethod
    def _calculate_node_loss(residuals: np.ndarray) -> float:
        """Mean squared deviation from the mean; 0 for an empty set."""
        if residuals.shape[0] == 0:
            return 0.0
        return float(np.mean((residuals - np.mean(residuals)) ** 2))
