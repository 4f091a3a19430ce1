"""lambdaboost - LambdaMART pair weighting for gradient-boosted rankers.

Pairwise ranking objectives with the boosting engine's objective interface
(init_score / gradient / hessian / loss / transform):

- PairwiseObjective: pairwise logloss over every pair of a query group
- LambdaMARTObjective: pairs weighted by DCG discount differences at the
  current ranks
"""

from lambdaboost.objectives import OBJECTIVE_REGISTRY, get_objective
from lambdaboost.objectives.pairwise import PairwiseObjective
from lambdaboost.objectives.lambdamart import (
    LambdaMARTObjective,
    DiscountTable,
    compute_ranks,
    discount,
)
from lambdaboost.config import LambdaMARTConfig, LossFuncConfig, make_loss_func
from lambdaboost.metrics.metrics import ndcg_at_k, mean_ndcg

__version__ = "0.1.0"
__all__ = [
    # 目的関数
    "PairwiseObjective",
    "LambdaMARTObjective",
    "OBJECTIVE_REGISTRY",
    "get_objective",
    # LambdaMART の構成要素
    "DiscountTable",
    "compute_ranks",
    "discount",
    # 設定
    "LambdaMARTConfig",
    "LossFuncConfig",
    "make_loss_func",
    # 評価指標
    "ndcg_at_k",
    "mean_ndcg",
]
