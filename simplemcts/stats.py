"""Statistics kept in every node of the search tree."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class NodeStats:
    """Visit statistics and evaluator output for one position.

    ``score`` is the running total of backed-up results and ``n`` the number
    of visits; ``policy`` and ``mask`` describe the actions leading out of the
    position, and ``finished`` marks a position whose outcome is settled.
    """

    policy: list[float] = field(default_factory=list)
    mask: list[bool] = field(default_factory=list)
    score: float = 0.0
    n: int = 0
    finished: bool = False

    def value(self) -> float:
        """Mean backed-up score, or 0.0 before the first visit."""
        return self.score / self.n if self.n else 0.0

    def add_score(self, score: float) -> None:
        """Record one visit whose result was ``score``."""
        self.score += score
        self.n += 1