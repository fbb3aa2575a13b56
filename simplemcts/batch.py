"""Running many searches side by side and recording their games."""

from __future__ import annotations

import math
import random
import time
from collections.abc import Callable, Iterable, Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any

from .config import MctsConfig, MctsState, SelectionFunction, default_selection_score
from .errors import InvalidEvaluationCountError, InvalidStateError
from .game import Evaluation, Game, GameEvaluator
from .mcts import Mcts
from .utils import sample

_U64_MAX = 2**64 - 1


@dataclass(frozen=True)
class MctsBatchConfig:
    """Parameters shared by every search in a batch.

    With a ``seed`` the moves sampled by the batch are reproducible; without
    one the generator is seeded from the clock.
    """

    exploration_coef: float = math.sqrt(2.0)
    selection_function: SelectionFunction = default_selection_score
    seed: int | None = None


@dataclass
class HistoryEntry:
    """One recorded position: the game before the move, its value and the policy."""

    game: Game
    value: float
    policy: list[float]


@dataclass
class _Instance:
    mcts: Mcts
    history: list[HistoryEntry] = field(default_factory=list)


class MctsBatch:
    """A set of searches played forward together, each keeping its history.

    Finished games are handed out by :meth:`next_finished` with their
    histories, whose values are rewritten to the actual outcome.
    """

    def __init__(
        self,
        game_factory: Callable[[], Game],
        config: MctsBatchConfig | None = None,
    ) -> None:
        config = config if config is not None else MctsBatchConfig()
        self._game_factory = game_factory
        self._instances: list[_Instance | None] = []
        self._count = 0
        seed = config.seed if config.seed is not None else time.time_ns() % _U64_MAX
        self._rng = random.Random(seed)
        self._state = MctsState.USABLE
        self._config = MctsConfig(
            exploration_coef=config.exploration_coef,
            selection_function=config.selection_function,
        )

    @property
    def count(self) -> int:
        """Number of instances still held by the batch."""
        return self._count

    @property
    def state(self) -> MctsState:
        """The current operating state."""
        return self._state

    @contextmanager
    def _guard(self, expected: MctsState, release: MctsState) -> Iterator[None]:
        if self._state != expected:
            raise InvalidStateError(self._state)
        self._state = MctsState.LOCKED
        try:
            yield
        except BaseException:
            self._state = expected
            raise
        self._state = release

    def _active(self) -> Iterator[_Instance]:
        return (instance for instance in self._instances if instance is not None)

    def _add(self, games: list[Game]) -> None:
        self._count += len(games)
        for slot, instance in enumerate(self._instances):
            if not games:
                return
            if instance is None:
                self._instances[slot] = _Instance(Mcts(games.pop(), self._config))
        while games:
            self._instances.append(_Instance(Mcts(games.pop(), self._config)))

    def populate(self, n: int) -> None:
        """Add ``n`` searches, each starting from a new game."""
        if n < 0:
            raise ValueError(f"cannot add a negative number of instances: {n}")
        with self._guard(MctsState.USABLE, MctsState.USABLE):
            self._add([self._game_factory() for _ in range(n)])

    def populate_from_games(self, games: Iterable[Game]) -> None:
        """Add one search for each of ``games``, filling empty slots first."""
        with self._guard(MctsState.USABLE, MctsState.USABLE):
            self._add(list(games))

    def clear(self) -> None:
        """Remove every instance."""
        with self._guard(MctsState.USABLE, MctsState.USABLE):
            self._instances.clear()
            self._count = 0

    def iterate(self, evaluator: GameEvaluator) -> None:
        """Run one full search iteration on every unfinished game."""
        with self._guard(MctsState.USABLE, MctsState.USABLE):
            for instance in self._active():
                if not instance.mcts.game.is_finished():
                    instance.mcts.iterate(evaluator)

    def start_iteration(self) -> list[Any]:
        """Select and expand in every unfinished game; return the states to evaluate."""
        with self._guard(MctsState.USABLE, MctsState.AWAITING_SIMULATION):
            return [
                instance.mcts.start_iteration()
                for instance in self._active()
                if not instance.mcts.game.is_finished()
            ]

    def apply_simulation(self, evaluations: Sequence[Evaluation]) -> None:
        """Apply evaluations in the order of :meth:`start_iteration`, then move every game.

        After backing up each evaluation, a move is sampled from the search
        result and played, and the position is recorded.
        """
        with self._guard(MctsState.AWAITING_SIMULATION, MctsState.USABLE):
            pending = list(evaluations)
            if len(pending) != self._count:
                raise InvalidEvaluationCountError(self._count, len(pending))
            for instance in reversed([i for i in self._instances if i is not None]):
                mcts = instance.mcts
                if mcts.game.is_finished():
                    continue
                game = mcts.game.clone()
                mcts.apply_simulation(pending.pop())
                value, policy = mcts.result()
                mcts.play(sample(policy, self._rng))
                instance.history.append(HistoryEntry(game, value, policy))

    def next_finished(self) -> list[list[HistoryEntry]]:
        """Collect finished games and advance every other game by one sampled move.

        Each returned history has its values replaced by the real outcome,
        alternating in sign from the last move backwards.
        """
        with self._guard(MctsState.USABLE, MctsState.USABLE):
            finished: list[list[HistoryEntry]] = []
            for slot, instance in enumerate(self._instances):
                if instance is None:
                    continue
                mcts = instance.mcts
                game = mcts.game
                if game.is_finished():
                    result = game.get_result()
                    score = -(result if result is not None else 0.0)
                    for entry in reversed(instance.history):
                        entry.value = score
                        score = -score
                    finished.append(instance.history)
                    self._instances[slot] = None
                    self._count -= 1
                else:
                    value, policy = mcts.result()
                    instance.history.append(HistoryEntry(game.clone(), value, policy))
                    mcts.play(sample(policy, self._rng))
            return finished