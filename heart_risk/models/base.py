"""
Risk model base class module

This module provides the abstract base class of the risk models. A model
is fitted on a dataset of clinical samples carrying a binary ``target``
and returns a disease probability for each sample.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List

import numpy as np

from ..data.schema import as_records, extract_targets


class RiskModelBase(ABC):
    """
    Abstract base class for risk models

    Attributes:
    -----------
    n_estimators : int
        Number of boosting rounds (trees)
    learning_rate : float
        Contribution of every tree
    max_depth : int
        Maximum depth of every tree
    """

    def __init__(self,
                 n_estimators: int = 50,
                 learning_rate: float = 0.1,
                 max_depth: int = 4,
                 **kwargs):
        """
        Parameters:
        -----------
        n_estimators : int, default=50
            Number of boosting rounds (trees)
        learning_rate : float, default=0.1
            Contribution of every tree
        max_depth : int, default=4
            Maximum depth of every tree
        **kwargs : dict
            Additional parameters
        """
        self.n_estimators = n_estimators
        self.learning_rate = learning_rate
        self.max_depth = max_depth

        for key, value in kwargs.items():
            setattr(self, key, value)

    @abstractmethod
    def fit(self, dataset, **kwargs) -> 'RiskModelBase':
        """
        Fit the model on labelled samples

        Parameters:
        -----------
        dataset : sequence of mappings or DataFrame
            Samples with the 13 clinical features and ``target``

        Returns:
        --------
        self : RiskModelBase
            Fitted model
        """

    @abstractmethod
    def predict_proba(self, samples) -> np.ndarray:
        """
        Disease probability for every sample

        Returns:
        --------
        probabilities : array-like, shape=(n_samples,)
        """

    def evaluate(self, dataset, metrics: List[str] = ['accuracy', 'logloss', 'brier']) -> Dict[str, float]:
        """
        Evaluate the model on labelled samples

        Parameters:
        -----------
        dataset : sequence of mappings or DataFrame
            Labelled samples
        metrics : list of str, default=['accuracy', 'logloss', 'brier']
            Metrics to compute; accuracy uses a 0.5 probability threshold

        Returns:
        --------
        results : dict
            Metric name -> value
        """
        samples = as_records(dataset)
        y = extract_targets(samples)
        p = self.predict_proba(samples)

        results = {}
        for metric in metrics:
            name = metric.lower()
            if name == 'accuracy':
                results['accuracy'] = float(np.mean((p >= 0.5) == (y == 1)))
            elif name == 'logloss':
                clipped = np.clip(p, 1e-15, 1 - 1e-15)
                results['logloss'] = float(-np.mean(y * np.log(clipped) + (1 - y) * np.log(1 - clipped)))
            elif name == 'brier':
                results['brier'] = float(np.mean((p - y) ** 2))
            else:
                raise ValueError(f"Unknown metric: {metric}")

        return results

    def get_params(self) -> Dict[str, Any]:
        return {
            'n_estimators': self.n_estimators,
            'learning_rate': self.learning_rate,
            'max_depth': self.max_depth,
        }

    def set_params(self, **params) -> 'RiskModelBase':
        """
        Update model parameters

        Raises:
        -------
        ValueError
            For a parameter name the model does not have
        """
        for key, value in params.items():
            if key in self.get_params():
                setattr(self, key, value)
            else:
                raise ValueError(f"Invalid parameter: {key}")
        return self
