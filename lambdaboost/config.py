"""Loss function configuration block of the trainer."""

from lambdaboost.objectives import get_objective


class LambdaMARTConfig:
    """LambdaMART options.

    Parameters
    ----------
    dcg_base : float or None
        Discount base; None keeps the objective's default.
    """

    def __init__(self, dcg_base=None):
        self.dcg_base = dcg_base

    def __repr__(self):
        return f"LambdaMARTConfig(dcg_base={self.dcg_base!r})"


class LossFuncConfig:
    """Which pairwise loss to train with and how to sample its pairs."""

    _KEYS = ("loss_func", "lambdamart_config", "dcg_base",
             "pair_sampling_rate", "random_state", "verbose")

    def __init__(self, loss_func="lambdamart", lambdamart_config=None,
                 pair_sampling_rate=1.0, random_state=None, verbose=0):
        self.loss_func = loss_func
        self.lambdamart_config = lambdamart_config or LambdaMARTConfig()
        self.pair_sampling_rate = pair_sampling_rate
        self.random_state = random_state
        self.verbose = verbose

    @classmethod
    def from_dict(cls, d):
        """Build from a mapping; ``dcg_base`` may be flat or nested."""
        unknown = set(d) - set(cls._KEYS)
        if unknown:
            raise ValueError(f"Unknown loss config keys: {sorted(unknown)}")
        d = dict(d)
        lm = d.pop("lambdamart_config", None) or {}
        if isinstance(lm, LambdaMARTConfig):
            lm = {"dcg_base": lm.dcg_base}
        if "dcg_base" in d:
            lm = dict(lm, dcg_base=d.pop("dcg_base"))
        return cls(lambdamart_config=LambdaMARTConfig(**lm), **d)

    def objective_params(self):
        params = {
            "pair_sampling_rate": self.pair_sampling_rate,
            "random_state": self.random_state,
            "verbose": self.verbose,
        }
        if self.loss_func == "lambdamart":
            params["dcg_base"] = self.lambdamart_config.dcg_base
        return params


def make_loss_func(config):
    """Return the objective described by a ``LossFuncConfig`` or a mapping."""
    if not isinstance(config, LossFuncConfig):
        config = LossFuncConfig.from_dict(config)
    return get_objective(config.loss_func, **config.objective_params())
