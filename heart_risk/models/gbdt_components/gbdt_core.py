"""
Gradient Boosting Core Module

This module contains the HeartRiskGBDT class, the trained ensemble. It
orchestrates the feature normalizer, the gradient computer and the tree
builder to fit one regression tree per boosting round against the
pseudo-residuals of a logistic link.
"""

import numbers
from typing import Any, Dict, List

import numpy as np

from ... import config
from ...data.schema import as_records, extract_targets, samples_to_matrix
from ...errors import EmptyDatasetError, InvalidSampleError, ModelNotTrainedError, TrainingDataError
from ..base import RiskModelBase
from .data_transforms import _sigmoid, compute_feature_statistics, statistics_to_arrays
from .gradient_computer import GradientComputer
from .tree_builder import TreeBuilder
from .tree_node import DecisionTreeNode


def _is_positive_integer(value) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool) and value >= 1


class HeartRiskGBDT(RiskModelBase):
    """
    Gradient boosted regression trees for binary heart-disease risk

    The ensemble is an ordered list of trees plus the learning rate and
    the feature statistics fitted on the training set. Trees are appended
    only while ``fit`` runs; afterwards the model is read-only and can be
    shared by concurrent predictors.

    Attributes:
    -----------
    trees : list of DecisionTreeNode
        One tree per boosting round
    feature_stats : dict
        Feature name -> (mean, std) of the training set
    is_trained : bool
        Set once the last round has been appended
    training_loss_history : list of float
        Training log-loss after every round
    """

    def __init__(self,
                 n_estimators: int = config.N_ROUNDS,
                 learning_rate: float = config.LEARNING_RATE,
                 max_depth: int = config.MAX_DEPTH,
                 min_samples_split: int = config.MIN_PARTITION_SIZE,
                 initial_prediction: float = config.INITIAL_PREDICTION,
                 verbose: bool = False):
        """
        Initialize HeartRiskGBDT

        Parameters:
        -----------
        n_estimators : int
            Number of boosting rounds
        learning_rate : float
            Shrinkage applied to every tree output
        max_depth : int
            Maximum depth of each tree
        min_samples_split : int
            Minimum partition size a node needs to be split
        initial_prediction : float
            Seed of every sample's running logit during training
        verbose : bool
            Print progress for every round
        """
        super().__init__(
            n_estimators=n_estimators,
            learning_rate=learning_rate,
            max_depth=max_depth
        )
        self.min_samples_split = min_samples_split
        self.initial_prediction = initial_prediction
        self.verbose = verbose
        self._validate_params()

        self.trees = []
        self.feature_stats = {}
        self.is_trained = False
        self.n_training_samples = 0
        self.training_loss_history = []

    def _validate_params(self) -> None:
        if not _is_positive_integer(self.n_estimators):
            raise ValueError(f"n_estimators must be a positive integer, got {self.n_estimators!r}")
        if (not isinstance(self.learning_rate, numbers.Real) or isinstance(self.learning_rate, bool)
                or not self.learning_rate > 0):
            raise ValueError(f"learning_rate must be positive, got {self.learning_rate!r}")
        if not _is_positive_integer(self.max_depth):
            raise ValueError(f"max_depth must be an integer >= 1, got {self.max_depth!r}")
        if not _is_positive_integer(self.min_samples_split):
            raise ValueError(f"min_samples_split must be an integer >= 1, got {self.min_samples_split!r}")

    def fit(self, dataset, **kwargs) -> 'HeartRiskGBDT':
        """
        Fit the ensemble

        Parameters:
        -----------
        dataset : sequence of mappings or DataFrame
            Training samples; each needs all 13 features and a 0/1 target

        Returns:
        --------
        self : HeartRiskGBDT
            Trained model

        Raises:
        -------
        EmptyDatasetError
            If the dataset has no samples
        TrainingDataError
            If a sample lacks a target or a feature
        """
        samples = as_records(dataset)
        if len(samples) == 0:
            raise EmptyDatasetError("cannot train on an empty dataset")

        try:
            X = samples_to_matrix(samples)
        except InvalidSampleError as exc:
            raise TrainingDataError(str(exc)) from exc
        y = extract_targets(samples)

        self.trees = []
        self.is_trained = False
        self.training_loss_history = []
        self.n_training_samples = len(samples)

        self.feature_stats = compute_feature_statistics(samples, verbose=self.verbose)
        means, stds = statistics_to_arrays(self.feature_stats)
        X_normalized = (X - means) / stds

        gradient_computer = GradientComputer(initial_prediction=self.initial_prediction)
        tree_builder = TreeBuilder(max_depth=self.max_depth, min_samples_split=self.min_samples_split)

        current_predictions = gradient_computer.compute_initial_predictions(len(samples))

        for iteration in range(self.n_estimators):
            residuals = gradient_computer.compute_residuals(y, current_predictions)

            # trees split on raw values; evaluation compares normalized ones
            tree = tree_builder.build_tree(X, residuals)
            self.trees.append(tree)

            current_predictions += self.learning_rate * tree.predict(X_normalized, means, stds)

            loss = gradient_computer.compute_logloss(y, current_predictions)
            self.training_loss_history.append(loss)
            if self.verbose:
                print(f"[round {iteration + 1:3d}/{self.n_estimators}] logloss={loss:.6f} nodes={tree.count_nodes()}")

        self.is_trained = True
        if self.verbose:
            print(f"Model trained on {len(samples)} samples with {len(self.trees)} trees.")

        return self

    def _check_trained(self) -> None:
        if not self.is_trained or len(self.trees) == 0:
            raise ModelNotTrainedError("Model has not been trained yet")

    def decision_function(self, samples) -> np.ndarray:
        """
        Ensemble logit for every sample

        logit = sum(learning_rate * tree_output) over all trees; the
        training seed is not added.

        Parameters:
        -----------
        samples : sequence of mappings or DataFrame
            Samples with all 13 features

        Returns:
        --------
        logits : array-like, shape=(n_samples,)

        Raises:
        -------
        ModelNotTrainedError
            If the model has no trees
        InvalidSampleError
            If a sample lacks a feature or has a non-numeric value
        """
        self._check_trained()
        return self._decision_matrix(samples_to_matrix(as_records(samples)))

    def _decision_matrix(self, X: np.ndarray) -> np.ndarray:
        """Ensemble logit for rows already laid out in FEATURE_NAMES order."""
        means, stds = statistics_to_arrays(self.feature_stats)
        X_normalized = (X - means) / stds

        logits = np.zeros(X.shape[0])
        for tree in self.trees:
            logits += self.learning_rate * tree.predict(X_normalized, means, stds)
        return logits

    def predict_proba(self, samples) -> np.ndarray:
        return _sigmoid(self.decision_function(samples))

    def predict_logit(self, sample) -> float:
        """Ensemble logit of a single sample."""
        return float(self.decision_function([sample])[0])

    def get_feature_importance(self) -> Dict[str, float]:
        """
        Share of total split gain per feature

        Every split node contributes gain * n_samples to its feature; the
        totals are normalized to sum to 1.

        Returns:
        --------
        importance : dict
            Feature name -> importance, in FEATURE_NAMES order
        """
        self._check_trained()

        importance = np.zeros(config.N_FEATURES)
        for tree in self.trees:
            self._accumulate_importance(tree, importance)

        total = np.sum(importance)
        if total > 0:
            importance = importance / total

        return {name: float(importance[i]) for i, name in enumerate(config.FEATURE_NAMES)}

    def _accumulate_importance(self, node: DecisionTreeNode, importance: np.ndarray) -> None:
        if node.is_leaf:
            return
        importance[node.feature_idx] += node.information_gain * node.n_samples
        self._accumulate_importance(node.left, importance)
        self._accumulate_importance(node.right, importance)

    def get_tree_dicts(self) -> List[Dict[str, Any]]:
        """Nested dict form of every tree, in boosting order."""
        return [tree.to_dict() for tree in self.trees]

    def get_params(self) -> Dict[str, Any]:
        params = super().get_params()
        params.update({
            'min_samples_split': self.min_samples_split,
            'initial_prediction': self.initial_prediction,
            'verbose': self.verbose,
        })
        return params

    def set_params(self, **params) -> 'HeartRiskGBDT':
        """
        Update model parameters

        Changing anything but ``verbose`` discards a trained ensemble; the
        model must be fitted again before it predicts.

        Raises:
        -------
        ValueError
            For an unknown parameter name or an invalid value
        """
        current = self.get_params()
        try:
            super().set_params(**params)
            self._validate_params()
        except ValueError:
            super().set_params(**current)
            raise

        changed = [k for k, v in params.items() if k != 'verbose' and current[k] != v]
        if changed and self.is_trained:
            self.trees = []
            self.feature_stats = {}
            self.is_trained = False
            self.n_training_samples = 0
            self.training_loss_history = []
        return self

    def print_training_summary(self) -> None:
        """
        Print training summary
        """
        print(f"\n=== HeartRiskGBDT Training Summary ===")
        print(f"Trained: {self.is_trained}")
        print(f"Samples: {self.n_training_samples}")
        print(f"Trees: {len(self.trees)}")
        print(f"Learning rate: {self.learning_rate}")
        print(f"Max depth: {self.max_depth}")
        print(f"Min partition size: {self.min_samples_split}")

        if self.training_loss_history:
            print(f"Final training logloss: {self.training_loss_history[-1]:.6f}")
        if self.trees:
            print(f"Average nodes per tree: {np.mean([t.count_nodes() for t in self.trees]):.2f}")
