"""Utility functions for lambdaboost."""

import numpy as np


def check_target(y):
    """Validate target array."""
    y = np.asarray(y, dtype=np.float64).ravel()
    return y


def check_scores(pred):
    """Validate a per-example score vector."""
    return np.asarray(pred, dtype=np.float64).ravel()


def check_group_indices(group, n, name="scores"):
    """Ensure every index of ``group`` addresses one of ``n`` examples.

    Raises
    ------
    IndexError
        If an index lies outside ``[0, n)``.
    """
    group = np.asarray(group, dtype=np.int64).ravel()
    if len(group) == 0:
        return group
    bad = (group < 0) | (group >= n)
    if bad.any():
        idx = int(group[np.argmax(bad)])
        raise IndexError(
            f"group index {idx} is out of range for {name} of length {n}")
    return group


def group_sizes_to_indices(sizes, n_samples=None):
    """Turn group sizes, e.g. [5, 3, 7], into contiguous index arrays."""
    sizes = np.asarray(sizes, dtype=np.int64).ravel()
    if np.any(sizes < 0):
        raise ValueError(f"group sizes must be non-negative, got {sizes.tolist()}")
    total = int(sizes.sum())
    if n_samples is not None and total != n_samples:
        raise ValueError(
            f"group sizes sum to {total} but there are {n_samples} samples")
    bounds = np.concatenate([[0], np.cumsum(sizes)])
    return [np.arange(bounds[k], bounds[k + 1]) for k in range(len(sizes))]


def query_ids_to_indices(qid):
    """Group example indices by query id.

    Groups follow the order in which query ids first appear; examples keep
    their original order inside each group.
    """
    qid = np.asarray(qid).ravel()
    if len(qid) == 0:
        return []
    _, first, inverse = np.unique(qid, return_index=True, return_inverse=True)
    order = np.argsort(first, kind="stable")
    groups = []
    for label in order:
        groups.append(np.flatnonzero(inverse == label))
    return groups
