"""
Real dataset loading module

Loads Heart.csv-style files (one row per patient, the 13 clinical columns
plus ``target``) into the list-of-samples form used for training.
"""

import os
from typing import Dict, List

import pandas as pd

from ..config import FEATURE_NAMES, TARGET_NAME
from ..errors import EmptyDatasetError, TrainingDataError


def load_heart_csv(path: str, require_target: bool = True) -> List[Dict[str, float]]:
    """
    Load a Heart.csv file

    Parameters:
    -----------
    path : str
        CSV file path
    require_target : bool, default=True
        Fail when the ``target`` column is absent

    Returns:
    --------
    samples : list of dict
        One dict per row with the schema columns; extra columns are dropped

    Raises:
    -------
    TrainingDataError
        If a schema column is missing
    EmptyDatasetError
        If the file has no rows
    """
    if not os.path.isfile(path):
        raise FileNotFoundError(f"Dataset file not found: {path}")

    df = pd.read_csv(path)
    df.columns = [str(c).strip() for c in df.columns]

    required = list(FEATURE_NAMES) + ([TARGET_NAME] if require_target else [])
    missing = [c for c in required if c not in df.columns]
    if missing:
        raise TrainingDataError(f"{path} is missing column(s): {', '.join(missing)}")
    if len(df) == 0:
        raise EmptyDatasetError(f"{path} has no rows")

    columns = [c for c in list(FEATURE_NAMES) + [TARGET_NAME] if c in df.columns]
    try:
        df = df[columns].astype(float)
    except ValueError as exc:
        raise TrainingDataError(f"{path} has non-numeric values: {exc}") from exc
    if TARGET_NAME in df.columns:
        if df[TARGET_NAME].isna().any():
            raise TrainingDataError(f"{path} has rows without a {TARGET_NAME} value")
        df[TARGET_NAME] = df[TARGET_NAME].astype(int)

    return df.to_dict("records")
