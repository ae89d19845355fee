"""
Array helpers shared by the distributions and the loss.
"""

import numpy as np
import scipy.sparse as sp

from ..errors import DimensionMismatch


def as_dense(x) -> np.ndarray:
    """
    Convert a prediction or target to a dense float array.

    Sparse matrices are densified; everything else goes through np.asarray.
    """
    if sp.issparse(x):
        return np.asarray(x.toarray(), dtype=np.float64)
    return np.asarray(x, dtype=np.float64)


def check_sizes(prediction: np.ndarray, target: np.ndarray) -> np.ndarray:
    """
    Check that prediction and target hold the same number of elements.

    Args:
        prediction: Dense prediction array.
        target: Dense target array.

    Returns:
        The target viewed in the prediction's shape.

    Raises:
        DimensionMismatch: If the element counts differ.
    """
    if prediction.size != target.size:
        raise DimensionMismatch(prediction.size, target.size)
    if target.shape != prediction.shape:
        target = target.reshape(prediction.shape)
    return target
