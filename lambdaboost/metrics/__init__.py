from lambdaboost.metrics.metrics import ndcg_at_k, mean_ndcg, METRIC_REGISTRY

__all__ = ["ndcg_at_k", "mean_ndcg", "METRIC_REGISTRY"]
