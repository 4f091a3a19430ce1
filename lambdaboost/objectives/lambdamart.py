"""Ranking objective: LambdaMART (DCG-discount weighted pairwise logloss)."""

import numpy as np

from lambdaboost.metrics.metrics import mean_ndcg
from lambdaboost.objectives.pairwise import PairwiseObjective, pairwise_logloss
from lambdaboost.utils import check_group_indices, check_scores, check_target

DEFAULT_DCG_BASE = 2.0
NUM_PRECOMPUTED_DISCOUNTS = 100


def discount(rank, base):
    """DCG position discount ``ln(base) / ln(base + rank)``; 1.0 at rank 0."""
    return np.log(base) / np.log(base + np.asarray(rank, dtype=np.float64))


def check_dcg_base(base):
    """Reject bases for which the discount is undefined or increasing."""
    try:
        value = float(base)
    except (TypeError, ValueError):
        raise ValueError(f"dcg_base must be a number, got {base!r}") from None
    if not np.isfinite(value) or value <= 1.0:
        raise ValueError(f"dcg_base must be a finite number > 1, got {base!r}")
    return value


class DiscountTable:
    """Discount values for the top ranks, precomputed once.

    Ranks beyond the table fall back to the formula and are not cached, so
    arbitrarily long groups do not grow memory.

    Parameters
    ----------
    base : float
        DCG base, must be > 1.
    size : int
        Number of precomputed ranks.
    """

    def __init__(self, base=DEFAULT_DCG_BASE, size=NUM_PRECOMPUTED_DISCOUNTS):
        if size < 0:
            raise ValueError(f"size must be non-negative, got {size}")
        self.base = check_dcg_base(base)
        self.size = int(size)
        table = discount(np.arange(self.size), self.base)
        table.setflags(write=False)
        self.table_ = table

    def lookup(self, rank):
        """Discount for a rank (int) or an array of ranks."""
        if np.any(np.asarray(rank) < 0):
            raise ValueError(f"ranks must be non-negative, got {rank}")
        if np.ndim(rank) == 0:
            rank = int(rank)
            if rank < self.size:
                return float(self.table_[rank])
            return float(discount(rank, self.base))

        rank = np.asarray(rank, dtype=np.int64)
        out = np.empty(rank.shape, dtype=np.float64)
        cached = rank < self.size
        out[cached] = self.table_[rank[cached]]
        out[~cached] = discount(rank[~cached], self.base)
        return out

    __call__ = lookup

    def __len__(self):
        return self.size


def compute_ranks(group, scores):
    """0-based rank of each group position under descending scores.

    Ties keep their relative group order (stable sort), so equal inputs always
    give equal ranks.

    Parameters
    ----------
    group : array-like of int
        Global example indices of the group.
    scores : array-like of float
        Current prediction per example.

    Returns
    -------
    ranks : np.ndarray of int, shape (len(group),)
        ``ranks[pos]`` is the rank of ``group[pos]``.
    """
    scores = check_scores(scores)
    group = check_group_indices(group, len(scores), name="scores")
    n = len(group)
    ranking = np.argsort(-scores[group], kind="stable")
    ranks = np.empty(n, dtype=np.int64)
    ranks[ranking] = np.arange(n)
    return ranks


class LambdaMARTObjective(PairwiseObjective):
    """LambdaMART objective for learning to rank.

    Pairwise logloss where every pair is weighted by its target difference
    times the absolute difference of the DCG discounts at the pair's current
    ranks, so misorderings near the top cost more than near the bottom.

    Parameters
    ----------
    dcg_base : float or None
        Base of the discount ``ln(b)/ln(b + rank)``. Values close to 1 decay
        sharply, larger values flatten the curve. None selects 2.0.
    pair_sampling_rate, random_state, verbose
        See ``PairwiseObjective``.
    """

    name = "lambdamart"

    def __init__(self, dcg_base=None, pair_sampling_rate=1.0,
                 random_state=None, verbose=0):
        super().__init__(pair_loss=pairwise_logloss,
                         pair_sampling_rate=pair_sampling_rate,
                         random_state=random_state, verbose=verbose)
        self.dcg_base = DEFAULT_DCG_BASE if dcg_base is None else check_dcg_base(dcg_base)
        self.discount_table_ = DiscountTable(self.dcg_base)

    def make_pair_weight_fn(self, group, scores, targets):
        """Bind the group's current ranks and the targets into a pair weight.

        The returned ``weight(i, j)`` takes group-local positions in
        ``[0, len(group))`` (scalars or equal-length arrays) and returns
        ``(t[i] - t[j]) * |discount(rank[i]) - discount(rank[j])|``.
        Each call builds a fresh rank snapshot owned by the closure.
        """
        targets = check_target(targets)
        group = check_group_indices(group, len(targets), name="targets")
        ranks = compute_ranks(group, scores)
        position_discounts = self.discount_table_.lookup(ranks)
        group_targets = targets[group]
        ranks.setflags(write=False)
        n = len(group)

        def weight(i, j):
            for pos in (i, j):
                pos = np.asarray(pos)
                if np.any((pos < 0) | (pos >= n)):
                    raise IndexError(
                        f"group position out of range for a group of size {n}: {pos}")
            target_diff = group_targets[i] - group_targets[j]
            discount_diff = np.abs(position_discounts[i] - position_discounts[j])
            return target_diff * discount_diff

        weight.ranks = ranks
        return weight

    def loss(self, y, pred):
        """Negative mean NDCG across groups."""
        y = check_target(y)
        groups = self._groups(len(y))
        return -mean_ndcg(y, check_scores(pred), groups, base=self.dcg_base)
