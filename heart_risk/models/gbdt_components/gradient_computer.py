"""
Gradient Computer

This module handles the running-prediction seed and the pseudo-residual
computation of the logistic boosting loop.
"""

import numpy as np

from .data_transforms import _sigmoid


class GradientComputer:
    """
    Pseudo-residuals for binary log-loss

    Attributes:
    -----------
    initial_prediction : float
        Constant every sample's running logit starts from
    """

    def __init__(self, initial_prediction: float = 0.5):
        self.initial_prediction = initial_prediction

    def compute_initial_predictions(self, n_samples: int) -> np.ndarray:
        """
        Seed the running logit of every sample

        Returns:
        --------
        predictions : array-like, shape=(n_samples,)
        """
        return np.full(n_samples, float(self.initial_prediction))

    def compute_residuals(self, y: np.ndarray, logits: np.ndarray) -> np.ndarray:
        """
        target - sigmoid(current prediction)

        Parameters:
        -----------
        y : array-like, shape=(n_samples,)
            Binary targets
        logits : array-like, shape=(n_samples,)
            Running predictions

        Returns:
        --------
        residuals : array-like, shape=(n_samples,)
        """
        return y - _sigmoid(logits)

    @staticmethod
    def compute_logloss(y: np.ndarray, logits: np.ndarray, eps: float = 1e-15) -> float:
        """Mean binary cross-entropy of the running predictions."""
        p = np.clip(_sigmoid(logits), eps, 1 - eps)
        return float(-np.mean(y * np.log(p) + (1 - y) * np.log(1 - p)))
