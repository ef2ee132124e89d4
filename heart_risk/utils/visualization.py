"""
Training result visualization utilities

This module plots the training log-loss curve and the split-gain feature
importance of a trained HeartRiskGBDT.
"""

from typing import Optional

import matplotlib.pyplot as plt
import pandas as pd
import seaborn as sns

from ..models.gbdt_components.gbdt_core import HeartRiskGBDT


def plot_training_history(model: HeartRiskGBDT,
                          title: str = "Training Log-Loss",
                          save_path: Optional[str] = None) -> plt.Figure:
    """
    Plot the training log-loss after every boosting round

    Parameters:
    -----------
    model : HeartRiskGBDT
        Trained model
    title : str, default="Training Log-Loss"
        Plot title
    save_path : str, optional
        Where to save the figure

    Returns:
    --------
    fig : matplotlib Figure
    """
    if not model.training_loss_history:
        raise ValueError("Model has no training history to plot")

    rounds = range(1, len(model.training_loss_history) + 1)

    fig, ax = plt.subplots(figsize=(10, 6))
    ax.plot(rounds, model.training_loss_history, marker='o', markersize=3)
    ax.set_xlabel("Boosting round")
    ax.set_ylabel("Log-loss")
    ax.set_title(title)
    ax.grid(True, alpha=0.3)
    fig.tight_layout()

    if save_path:
        fig.savefig(save_path, dpi=300, bbox_inches='tight')

    return fig


def plot_feature_importance(model: HeartRiskGBDT,
                            title: str = "Feature Importance (split gain)",
                            save_path: Optional[str] = None) -> plt.Figure:
    """
    Horizontal bar chart of get_feature_importance()

    Parameters:
    -----------
    model : HeartRiskGBDT
        Trained model
    title : str
        Plot title
    save_path : str, optional
        Where to save the figure

    Returns:
    --------
    fig : matplotlib Figure
    """
    importance = model.get_feature_importance()
    df = pd.DataFrame({
        'feature': list(importance.keys()),
        'importance': list(importance.values()),
    }).sort_values('importance', ascending=False)

    fig, ax = plt.subplots(figsize=(10, 6))
    sns.barplot(data=df, x='importance', y='feature', color='steelblue', ax=ax)
    ax.set_title(title)
    fig.tight_layout()

    if save_path:
        fig.savefig(save_path, dpi=300, bbox_inches='tight')

    return fig
