"""Exceptions raised for invalid equity calculation input."""


class EquityError(ValueError):
    """Base class for every error caused by a correctable input value."""


class CardError(EquityError):
    """A card token or card string could not be parsed."""


class CompositionError(EquityError):
    """Cards are duplicated, or a hand or board holds too many cards."""


class InsufficientCardsError(EquityError):
    """Not enough hands or cards to perform the requested evaluation."""


class CombinatorialOverflowError(EquityError):
    """Exhaustive enumeration was requested above the configured ceiling."""

    def __init__(self, combinations: int, limit: int):
        self.combinations = combinations
        self.limit = limit
        super().__init__(
            f"Too many combinations for exhaustive calculation: {combinations} "
            f"(limit {limit}). Use Monte Carlo simulation, raise "
            f"max_exhaustive_combinations or set force_exhaustive."
        )
