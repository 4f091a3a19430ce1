"""Log-loss primitive shared by the pairwise objectives."""

import numpy as np


def sigmoid(x):
    """Numerically stable sigmoid."""
    x = np.asarray(x, dtype=np.float64)
    return np.where(x >= 0,
                    1.0 / (1.0 + np.exp(-np.abs(x))),
                    np.exp(-np.abs(x)) / (1.0 + np.exp(-np.abs(x))))


def compute_log_loss(y, f):
    """Binary log loss of raw score ``f`` against label ``y``.

    Parameters
    ----------
    y : float or array-like
        Label in {0, 1}.
    f : float or array-like
        Raw (untransformed) score.

    Returns
    -------
    loss, grad, hess
        Loss value and its first / second derivative with respect to ``f``.
        The hessian is floored at 1e-7 like the other engine objectives.
    """
    y = np.asarray(y, dtype=np.float64)
    f = np.asarray(f, dtype=np.float64)
    p = sigmoid(f)
    # log(1 + exp(-f)) = logaddexp(0, -f), stable for large |f|
    loss = y * np.logaddexp(0.0, -f) + (1.0 - y) * np.logaddexp(0.0, f)
    grad = p - y
    hess = np.maximum(p * (1.0 - p), 1e-7)
    return loss, grad, hess
