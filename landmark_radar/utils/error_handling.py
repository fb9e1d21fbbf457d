"""
Error handling utilities for the radar pipeline.

Provides helpers that keep invalid numbers out of the per-tick
computations and validate tabular input.
"""
from typing import Any, Set
import pandas as pd
import numpy as np
from landmark_radar.utils.exceptions import DataValidationError


def is_finite_number(value: Any) -> bool:
    """
    Check whether a value is a real, finite number.

    Parameters
    ----------
    value : Any
        Value to check

    Returns
    -------
    bool
        False for None, NaN, infinities, booleans and non-numeric values
    """
    if value is None or isinstance(value, bool):
        return False
    try:
        return bool(np.isfinite(float(value)))
    except (TypeError, ValueError):
        return False


def validate_columns_exist(
    df: pd.DataFrame,
    required_columns: Set[str],
    df_name: str = "DataFrame"
) -> None:
    """
    Validate that all required columns exist in DataFrame.

    Parameters
    ----------
    df : pd.DataFrame
        DataFrame to validate
    required_columns : Set[str]
        Set of required column names
    df_name : str
        Name of DataFrame for error message

    Raises
    ------
    DataValidationError
        If required columns are missing
    """
    missing_cols = required_columns - set(df.columns)
    if missing_cols:
        raise DataValidationError(
            f"{df_name} missing required columns: {sorted(missing_cols)}. "
            f"Available columns: {sorted(df.columns.tolist())}"
        )
