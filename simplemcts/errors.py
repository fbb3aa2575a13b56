"""Exceptions raised by search operations."""

from __future__ import annotations


class MctsError(Exception):
    """Base class for all search errors."""


class InvalidStateError(MctsError):
    """An operation was attempted while the searcher was in the wrong state."""

    def __init__(self, state: int) -> None:
        self.state = state
        super().__init__(f"operation not allowed in state {state}")


class InvalidEvaluationCountError(MctsError):
    """The number of evaluations supplied does not match the number expected."""

    def __init__(self, expected: int, received: int) -> None:
        self.expected = expected
        self.received = received
        super().__init__(f"expected {expected} evaluations, received {received}")


class SearchAlreadyOverError(MctsError):
    """The root already represents a finished game."""

    def __init__(self) -> None:
        super().__init__("search is already over")


class ActionOutOfRangeError(MctsError):
    """An action index lies outside the game's action range."""

    def __init__(self, action: int, action_count: int) -> None:
        self.action = action
        self.action_count = action_count
        super().__init__(f"action {action} out of range [0, {action_count})")


class InvalidActionError(MctsError):
    """The action is not allowed by the game's mask."""

    def __init__(self, action: int) -> None:
        self.action = action
        super().__init__(f"action {action} is not valid in the current state")


class UnexploredActionError(MctsError):
    """The action cannot be checked because the root has not been explored."""

    def __init__(self) -> None:
        super().__init__("root has not been explored yet")