"""Search configuration, operating states and selection functions."""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass
from enum import IntEnum

SelectionFunction = Callable[[float, float, float, float, float], float]
"""Signature: (value, policy, n_visits, parent_n_visits, exploration_coef) -> score."""


class MctsState(IntEnum):
    """Operating state of a searcher, guarding the order of calls."""

    USABLE = 0
    AWAITING_SIMULATION = 1
    LOCKED = 2


def default_selection_score(
    value: float,
    policy: float,
    n_visits: float,
    parent_n_visits: float,
    exploration_coef: float,
) -> float:
    """Value plus a policy-weighted exploration bonus that shrinks with visits."""
    return value + exploration_coef * policy * math.sqrt(parent_n_visits) / (1.0 + n_visits)


def ucb1(
    value: float,
    policy: float,
    n_visits: float,
    parent_n_visits: float,
    exploration_coef: float,
) -> float:
    """Upper Confidence Bound score, scaled by the action's policy."""
    log_parent = math.log(parent_n_visits) if parent_n_visits > 0 else -math.inf
    if n_visits == 0:
        ratio = math.nan if log_parent == 0 else math.copysign(math.inf, log_parent)
    else:
        ratio = log_parent / n_visits
    bonus = math.sqrt(ratio) if ratio >= 0 else math.nan
    return value + exploration_coef * policy * bonus


@dataclass(frozen=True)
class MctsConfig:
    """Parameters of a single search."""

    exploration_coef: float = math.sqrt(2.0)
    selection_function: SelectionFunction = default_selection_score