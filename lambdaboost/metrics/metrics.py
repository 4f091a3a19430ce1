"""Ranking evaluation metrics: DCG / NDCG with a configurable discount base."""

import numpy as np


def _dcg(relevance, base):
    ranks = np.arange(len(relevance))
    return np.sum((2.0 ** relevance - 1) * np.log(base) / np.log(base + ranks))


def ndcg_at_k(y_true, y_pred, k=None, base=2.0):
    """Normalized Discounted Cumulative Gain.

    The discount at 0-based rank r is ``ln(base) / ln(base + r)``, which is the
    usual ``1 / log2(r + 2)`` for base 2. Ties in ``y_pred`` keep input order.
    """
    y_true = np.asarray(y_true, dtype=np.float64)
    y_pred = np.asarray(y_pred, dtype=np.float64)
    if k is None:
        k = len(y_true)
    k = min(k, len(y_true))

    order = np.argsort(-y_pred, kind="stable")[:k]
    dcg = _dcg(y_true[order], base)

    ideal_order = np.argsort(-y_true, kind="stable")[:k]
    idcg = _dcg(y_true[ideal_order], base)

    if idcg == 0:
        return 1.0
    return dcg / idcg


def mean_ndcg(y_true, y_pred, groups, k=None, base=2.0):
    """Mean NDCG over query groups (index arrays); empty groups are skipped."""
    y_true = np.asarray(y_true, dtype=np.float64)
    y_pred = np.asarray(y_pred, dtype=np.float64)
    ndcgs = [ndcg_at_k(y_true[g], y_pred[g], k=k, base=base)
             for g in groups if len(g) > 0]
    if not ndcgs:
        return 0.0
    return float(np.mean(ndcgs))


METRIC_REGISTRY = {
    "ndcg": ndcg_at_k,
    "mean_ndcg": mean_ndcg,
}
