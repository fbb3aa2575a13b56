"""Interfaces for games and evaluators driven by the search."""

from __future__ import annotations

import copy
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any, Generic, TypeVar

S = TypeVar("S")

Evaluation = tuple[float, Sequence[float]]
"""A value estimate together with a probability for every action."""


class Game(ABC, Generic[S]):
    """A game the search can explore.

    Actions are identified by indices ``0 .. action_count - 1``. A new game is
    created in its initial position by calling the class with no arguments.
    """

    @property
    @abstractmethod
    def action_count(self) -> int:
        """Total number of actions the game defines, valid or not."""

    @abstractmethod
    def get_actions(self) -> list[bool]:
        """A mask with one entry per action, True where the action may be played now."""

    @abstractmethod
    def is_finished(self) -> bool:
        """True once the game has reached a terminal position."""

    @abstractmethod
    def play(self, action: int) -> None:
        """Apply ``action`` to this game, which must be valid."""

    @abstractmethod
    def get_state(self) -> S:
        """A lightweight, immutable description of the position for evaluators."""

    @abstractmethod
    def get_result(self) -> float | None:
        """The outcome once finished (1.0 win, 0.0 draw, -1.0 loss), else None."""

    def clone(self) -> Game[S]:
        """An independent copy of this game."""
        return copy.deepcopy(self)


class GameEvaluator(ABC, Generic[S]):
    """Estimates the value of a position and a policy over its actions."""

    @abstractmethod
    def evaluate(self, state: S) -> Evaluation:
        """Return ``(value, policy)`` for ``state``.

        ``value`` is the estimate from the point of view of the player to
        move, usually in ``[-1, 1]``; ``policy`` holds one probability per
        action.
        """


__all__: list[Any] = ["Evaluation", "Game", "GameEvaluator"]