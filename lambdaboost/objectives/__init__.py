from lambdaboost.objectives.pairwise import PairwiseObjective
from lambdaboost.objectives.lambdamart import LambdaMARTObjective

OBJECTIVE_REGISTRY = {
    "pairwise": PairwiseObjective,
    "lambdamart": LambdaMARTObjective,
}


def get_objective(name, **params):
    """Instantiate a registered objective by name."""
    try:
        cls = OBJECTIVE_REGISTRY[name]
    except KeyError:
        raise ValueError(
            f"Unknown objective {name!r}; expected one of "
            f"{sorted(OBJECTIVE_REGISTRY)}") from None
    return cls(**params)
