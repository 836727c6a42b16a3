"""Equity calculation results."""

from dataclasses import dataclass, field

from pokerodds.game.evaluator import HandCategory


@dataclass
class PlayerEquity:
    """
    Aggregate outcome for one player's hand.

    ties counts tied scenarios; tie_share accumulates the fraction of the
    pot won in them (1/n for an n-way tie).
    """
    hand_index: int
    equity: float = 0.0
    wins: int = 0
    ties: int = 0
    tie_share: float = 0.0
    category_counts: dict[HandCategory, int] = field(default_factory=dict)
    winning_category_counts: dict[HandCategory, float] = field(default_factory=dict)

    def running_equity(self, total: int) -> float:
        if total == 0:
            return 0.0
        return (self.wins + self.tie_share) / total

    def finalize(self, total: int) -> None:
        self.equity = self.running_equity(total)

    @property
    def most_common_category(self) -> HandCategory | None:
        if not self.category_counts:
            return None
        return max(self.category_counts, key=self.category_counts.get)


@dataclass
class EquityResult:
    """Per-player results of one calculation run."""
    player_results: list[PlayerEquity]
    total_hands: int
    elapsed_time: float  # seconds
    is_exact: bool

    @property
    def equities(self) -> list[float]:
        return [p.equity for p in self.player_results]
