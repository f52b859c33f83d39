# hoeffding_tree/utils.py
import math
import numpy as np
import pandas as pd


def check_index(value, bound, what="Index"):
    """
    Validates that value is an integral index in [0, bound) and returns it as int.

    Args:
        value: The candidate index (int, numpy integer, or integral float).
        bound (int): Exclusive upper bound.
        what (str): Name used in the error message, e.g. 'Class label'.

    Raises:
        ValueError: If value is not integral or falls outside [0, bound).
    """
    if isinstance(value, (bool, np.bool_)):
        raise ValueError(f"{what} must be an integer, got {value!r}.")
    try:
        index = int(value)
    except (TypeError, ValueError, OverflowError):
        raise ValueError(f"{what} must be an integer, got {value!r}.") from None
    if index != value:
        raise ValueError(f"{what} must be an integer, got {value!r}.")
    if index < 0 or index >= bound:
        raise ValueError(f"{what} {index} out of range [0, {bound}).")
    return index


def check_finite(value, what="Value"):
    """Validates that value is a finite real number and returns it as float."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"{what} must be a real number, got {value!r}.") from None
    if not math.isfinite(number):
        raise ValueError(f"{what} must be finite, got {value!r}.")
    return number


def check_point(point, num_dimensions):
    """Converts point to a 1-D float array and checks its length."""
    try:
        point_array = np.asarray(point, dtype=float)
    except (TypeError, ValueError):
        raise ValueError("Point must contain only numeric values (categorical values must be encoded).") from None
    if point_array.ndim != 1 or point_array.shape[0] != num_dimensions:
        raise ValueError(f"Point must have {num_dimensions} dimensions, got shape {point_array.shape}.")
    return point_array


# --- Pandas DataFrame Utilities ---

def is_pandas_dataframe(data):
    """Checks if the provided data is a Pandas DataFrame."""
    return isinstance(data, pd.DataFrame)


def convert_pandas_to_list_of_dicts(dataframe):
    """
    Converts a Pandas DataFrame to a list of dictionaries.
    """
    if not is_pandas_dataframe(dataframe):
        raise TypeError("Input is not a Pandas DataFrame.")
    return dataframe.to_dict(orient='records')


def to_records(data):
    """Accepts a Pandas DataFrame or a list of dicts and returns a list of dicts."""
    if is_pandas_dataframe(data):
        return convert_pandas_to_list_of_dicts(data)
    elif isinstance(data, list):
        return data
    raise TypeError("Input data must be a Pandas DataFrame or a list of dictionaries.")
