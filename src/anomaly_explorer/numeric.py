from __future__ import annotations

import numpy as np
import pandas as pd


def _to_float_array(values: pd.Series | np.ndarray | float) -> np.ndarray:
    if isinstance(values, pd.Series):
        return pd.to_numeric(values, errors="coerce").to_numpy(dtype=float)
    return np.asarray(values, dtype=float)


def round_half_away(
    values: pd.Series | np.ndarray | float,
    decimals: int = 0,
) -> np.ndarray:
    """Round to ``decimals`` places with ties going away from zero.

    Unlike ``numpy.round`` and the builtin ``round``, 2.5 becomes 3 and -0.125
    becomes -0.13 at two decimals.
    """
    array = _to_float_array(values)
    scale = 10.0 ** int(decimals)
    return np.sign(array) * np.floor(np.abs(array) * scale + 0.5) / scale


def as_python_scalar(value: object) -> object:
    if isinstance(value, np.generic):
        return value.item()
    return value
