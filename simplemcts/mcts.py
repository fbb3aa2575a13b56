"""Monte Carlo Tree Search over a single game."""

from __future__ import annotations

import math
import sys
from collections.abc import Callable, Iterator
from contextlib import contextmanager

from .config import MctsConfig, MctsState
from .errors import (
    ActionOutOfRangeError,
    InvalidActionError,
    InvalidStateError,
    SearchAlreadyOverError,
    UnexploredActionError,
)
from .game import Evaluation, Game, GameEvaluator
from .stats import NodeStats
from .tree import Node

INFINITY = 1e300
"""Stands in for infinity in selection scores without overflowing arithmetic."""

_MIN_POSITIVE = sys.float_info.min
_MAX_FLOAT = sys.float_info.max


def _total_order_key(x: float) -> tuple[int, float]:
    """Sort key placing NaN values at the ends, as a total float order does."""
    if math.isnan(x):
        return (1 if math.copysign(1.0, x) > 0 else -1, 0.0)
    return (0, x)


class Mcts:
    """A search tree rooted at the current position of one game.

    The search can be driven in one step with :meth:`iterate`, or in two
    steps with :meth:`start_iteration` and :meth:`apply_simulation` when the
    evaluation happens elsewhere.
    """

    VICTORY_SCORE = 1.0
    DEFEAT_SCORE = -1.0
    EQUALITY_SCORE = 0.0

    def __init__(self, game: Game, config: MctsConfig | None = None) -> None:
        config = config if config is not None else MctsConfig()
        self._game = game
        self._size = game.action_count
        self._root: Node[NodeStats] | None = None
        self._coef = config.exploration_coef
        self._selection_function = config.selection_function
        self._state = MctsState.USABLE
        self._latent: tuple[Game, Node[NodeStats]] | None = None

    @property
    def game(self) -> Game:
        """The game at the root of the search."""
        return self._game

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

    def _fresh_stats(self) -> NodeStats:
        return NodeStats(policy=[1.0 / self._size] * self._size, mask=[False] * self._size)

    def _selection_score(self, node: Node[NodeStats], index: int) -> float:
        data = node.data
        child = node.child(index)
        if child is not None:
            if child.data.finished:
                return -INFINITY
            return self._selection_function(
                child.data.value(),
                data.policy[index],
                float(child.data.n),
                float(data.n),
                self._coef,
            )
        if data.mask[index] and not data.finished:
            return INFINITY * (1.0 + data.policy[index])
        return -INFINITY

    def _selection(self) -> tuple[Node[NodeStats] | None, int, Game]:
        game = self._game.clone()
        node = self._root
        if node is None:
            return None, 0, game
        while True:
            scores = [self._selection_score(node, index) for index in range(self._size)]
            index = max(
                enumerate(scores), key=lambda pair: (_total_order_key(pair[1]), pair[0])
            )[0]
            game.play(index)
            child = node.child(index)
            if child is None:
                return node, index, game
            node = child

    def _expansion(self, node: Node[NodeStats] | None, index: int) -> Node[NodeStats]:
        if node is not None:
            return node.add_child(index, self._fresh_stats())
        root = Node(self._fresh_stats(), self._size)
        self._root = root
        return root

    @staticmethod
    def _simulate(node: Node[NodeStats], game: Game, evaluate: Callable[[], Evaluation]) -> None:
        data = node.data
        result = game.get_result()
        if result is not None:
            data.add_score(-result)
            data.finished = True
            return
        value, policy = evaluate()
        data.add_score(-value)
        data.policy = list(policy)
        data.mask = list(game.get_actions())

    def _backpropagation(self, node: Node[NodeStats]) -> None:
        score = node.data.value()
        finish = node.data.finished
        current = node.parent

        while current is not None:
            score = -score
            data = current.data

            if not finish:
                data.add_score(score)
            elif score == -self.VICTORY_SCORE:
                data.score = data.n * score
                data.finished = True
            else:
                max_score = -_MAX_FLOAT
                all_finished = True
                for index, allowed in enumerate(data.mask):
                    if not allowed:
                        continue
                    child = current.child(index)
                    if child is None:
                        all_finished = False
                        break
                    max_score = max(max_score, child.data.value())
                    if not child.data.finished:
                        all_finished = False
                        break

                if all_finished:
                    data.score = data.n * -max_score
                    data.finished = True
                else:
                    data.add_score(score)
                    finish = False

            current = current.parent

    def iterate(self, evaluator: GameEvaluator) -> None:
        """Run selection, expansion, simulation and backpropagation once.

        Does nothing when the root is already settled.
        """
        with self._guard(MctsState.USABLE, MctsState.USABLE):
            if self._root is not None and self._root.data.finished:
                return
            node, index, game = self._selection()
            child = self._expansion(node, index)
            self._simulate(child, game, lambda: evaluator.evaluate(game.get_state()))
            self._backpropagation(child)

    def start_iteration(self):
        """Select and expand, returning the state that needs evaluating."""
        with self._guard(MctsState.USABLE, MctsState.AWAITING_SIMULATION):
            if self._root is not None and self._root.data.finished:
                raise SearchAlreadyOverError()
            node, index, game = self._selection()
            child = self._expansion(node, index)
            game_state = game.get_state()
            self._latent = (game, child)
        return game_state

    def apply_simulation(self, evaluation: Evaluation) -> None:
        """Finish the iteration begun by :meth:`start_iteration`."""
        with self._guard(MctsState.AWAITING_SIMULATION, MctsState.USABLE):
            assert self._latent is not None
            game, child = self._latent
            self._latent = None
            self._simulate(child, game, lambda: evaluation)
            self._backpropagation(child)

    def is_finished(self) -> bool:
        """True once the outcome of the root position is settled."""
        return self._root is not None and self._root.data.finished

    def score(self) -> float:
        """Estimated value of the root for the player who moved into it."""
        if self._root is None:
            return self.EQUALITY_SCORE
        return -self._root.data.value()

    def _statistics_from(self, root: Node[NodeStats]) -> list[float]:
        # Values in ]-1, 1[ are mapped through (1 + x) / (1 - x), which is the
        # exponential of 2·atanh(x), and then normalised as in a softmax.
        weights = []
        for index in range(self._size):
            child = root.child(index)
            if child is not None:
                value = child.data.value()
                if value != 1.0:
                    weights.append((value + 1.0) / (1.0 - value) + _MIN_POSITIVE)
                else:
                    weights.append(_MAX_FLOAT / self._size)
            elif root.data.mask[index]:
                weights.append(_MIN_POSITIVE)
            else:
                weights.append(0.0)

        total = 0.0
        for weight in weights:
            total += weight
        if total == 0.0:
            total = _MIN_POSITIVE
        return [weight / total for weight in weights]

    def statistics(self) -> list[float]:
        """Action probabilities derived from the root's children."""
        if self._root is None:
            return [1.0 / self._size] * self._size
        return self._statistics_from(self._root)

    def result(self) -> tuple[float, list[float]]:
        """The root's score together with the action probabilities."""
        if self._root is None:
            return 0.0, [1.0 / self._size] * self._size
        return -self._root.data.value(), self._statistics_from(self._root)

    def count_visits(self) -> int:
        """Number of visits recorded at the root."""
        return self._root.data.n if self._root is not None else 0

    def play(self, action: int) -> None:
        """Play ``action`` on the game and keep only the matching subtree."""
        with self._guard(MctsState.USABLE, MctsState.USABLE):
            if not 0 <= action < self._size:
                raise ActionOutOfRangeError(action, self._size)
            root = self._root
            if root is None:
                raise UnexploredActionError()
            child = root.child(action)
            if child is not None:
                child.detach()
                new_root: Node[NodeStats] | None = child
            elif root.data.mask[action]:
                new_root = None
            else:
                raise InvalidActionError(action)
            self._game.play(action)
            self._root = new_root