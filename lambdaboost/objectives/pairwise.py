"""Generic pairwise ranking objective.

Enumerates item pairs inside each query group, weights every pair with a
function produced by ``make_pair_weight_fn`` and accumulates the gradients and
hessians of a base pairwise loss evaluated on the score difference.
"""

import numpy as np
from sklearn.utils import check_random_state

from lambdaboost.objectives.loss_math import compute_log_loss
from lambdaboost.utils import (
    check_group_indices, check_scores, check_target,
    group_sizes_to_indices, query_ids_to_indices)


def pairwise_logloss(delta_target, delta_score):
    """Log loss with label 1 on the score difference of an ordered pair."""
    return compute_log_loss(1.0, delta_score)


class PairwiseObjective:
    """Pairwise ranking objective (RankNet style).

    Parameters
    ----------
    pair_loss : callable or None
        ``pair_loss(delta_target, delta_score) -> (loss, grad, hess)``, evaluated
        on pairs oriented so that ``delta_target > 0``. Defaults to the log loss.
    pair_sampling_rate : float
        Fraction of the candidate pairs of each group that is used (1.0 = all).
    random_state : int, RandomState or None
        Seed for pair sampling.
    verbose : int
        Verbosity level.
    """

    name = "pairwise"

    def __init__(self, pair_loss=None, pair_sampling_rate=1.0,
                 random_state=None, verbose=0):
        if not 0.0 < pair_sampling_rate <= 1.0:
            raise ValueError(
                f"pair_sampling_rate must be in (0, 1], got {pair_sampling_rate}")
        self.pair_loss = pair_loss if pair_loss is not None else pairwise_logloss
        self.pair_sampling_rate = pair_sampling_rate
        self.random_state = random_state
        self.verbose = verbose
        self.groups_ = None
        self._rng = check_random_state(random_state)

    def set_group(self, group):
        """Set query group boundaries.

        Parameters
        ----------
        group : array-like
            Number of samples in each group/query, e.g. [5, 3, 7].
        """
        self.groups_ = group_sizes_to_indices(group)

    def set_query_ids(self, qid):
        """Set groups from a per-sample query id vector."""
        self.groups_ = query_ids_to_indices(qid)

    def make_pair_weight_fn(self, group, scores, targets):
        """Return ``weight(i, j)`` over group-local positions.

        The base objective weights every pair equally.
        """
        def weight(i, j):
            return np.ones(np.broadcast(i, j).shape, dtype=np.float64)
        return weight

    def init_score(self, y):
        return 0.0

    def gradient(self, y, pred):
        """Compute pairwise gradients; hessians are cached for ``hessian``."""
        y = check_target(y)
        pred = check_scores(pred)
        n = len(y)
        if len(pred) != n:
            raise ValueError(
                f"pred has {len(pred)} entries but y has {n}")
        gradients = np.zeros(n, dtype=np.float64)
        hessians = np.zeros(n, dtype=np.float64)

        n_pairs = 0
        groups = self._groups(n)
        for k, group in enumerate(groups):
            hi, lo = self._sample_pairs(group, y)
            if len(hi) == 0:
                continue
            weight_fn = self.make_pair_weight_fn(group, pred, y)
            w = np.asarray(weight_fn(hi, lo), dtype=np.float64)
            if np.any(w < 0):
                raise ValueError(
                    "pair weights must be non-negative for pairs ordered by "
                    "target; check the sign convention of the weighting function")

            gi, gj = group[hi], group[lo]
            _, g, h = self.pair_loss(y[gi] - y[gj], pred[gi] - pred[gj])
            np.add.at(gradients, gi, w * g)
            np.add.at(gradients, gj, -w * g)
            np.add.at(hessians, gi, w * h)
            np.add.at(hessians, gj, w * h)
            n_pairs += len(hi)
            if self.verbose > 1:
                print(f"[{self.name}] group={k} size={len(group)} pairs={len(hi)}")

        if self.verbose > 0:
            print(f"[{self.name}] groups={len(groups)} pairs={n_pairs}")

        self._cached_hessians = np.maximum(hessians, 1e-7)
        return gradients

    def hessian(self, y, pred):
        if hasattr(self, "_cached_hessians"):
            return self._cached_hessians
        return np.ones_like(y, dtype=np.float64)

    def loss(self, y, pred):
        """Weighted mean pair loss over every pair with differing targets."""
        y = check_target(y)
        pred = check_scores(pred)
        total = 0.0
        total_weight = 0.0
        for group in self._groups(len(y)):
            hi, lo = self._ordered_pairs(group, y)
            if len(hi) == 0:
                continue
            w = np.asarray(
                self.make_pair_weight_fn(group, pred, y)(hi, lo), dtype=np.float64)
            gi, gj = group[hi], group[lo]
            pair_loss, _, _ = self.pair_loss(y[gi] - y[gj], pred[gi] - pred[gj])
            total += float(np.sum(w * pair_loss))
            total_weight += float(np.sum(w))
        if total_weight == 0:
            return 0.0
        return total / total_weight

    def transform(self, pred):
        return pred

    def _groups(self, n):
        if self.groups_ is None:
            return [np.arange(n)]
        return [check_group_indices(g, n, name="targets") for g in self.groups_]

    @staticmethod
    def _ordered_pairs(group, y):
        """Positions (hi, lo) of every pair with y[hi] > y[lo]."""
        n = len(group)
        if n < 2:
            empty = np.empty(0, dtype=np.int64)
            return empty, empty
        i, j = np.triu_indices(n, k=1)
        t = y[group]
        keep = t[i] != t[j]
        i, j = i[keep], j[keep]
        # 高い関連度を先頭に
        swap = t[i] < t[j]
        hi = np.where(swap, j, i)
        lo = np.where(swap, i, j)
        return hi, lo

    def _sample_pairs(self, group, y):
        hi, lo = self._ordered_pairs(group, y)
        if self.pair_sampling_rate >= 1.0 or len(hi) == 0:
            return hi, lo
        n_keep = max(1, int(round(self.pair_sampling_rate * len(hi))))
        chosen = np.sort(self._rng.choice(len(hi), size=n_keep, replace=False))
        return hi[chosen], lo[chosen]
