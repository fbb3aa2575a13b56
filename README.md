# simplemcts

A small, configurable Monte Carlo Tree Search for turn-based games with a
fixed set of numbered actions. It searches one game with
`simplemcts.mcts.Mcts`, or plays many games forward together with
`simplemcts.batch.MctsBatch`, recording histories usable as training data.
Positions are judged by an evaluator you supply, returning a value and a
policy — a hand-written heuristic or a learned model.

The package has no dependencies outside the standard library.

## Plugging in a game

Subclass `simplemcts.game.Game` and implement:

- `action_count` — a property giving the number of actions, numbered `0 .. N-1`
- `get_actions()` — one boolean per action, `True` where the action is legal now
- `is_finished()` — whether the game is over
- `play(action)` — apply a legal action in place
- `get_state()` — a lightweight snapshot handed to the evaluator
- `get_result()` — `None` while the game runs, then `1.0`, `0.0` or `-1.0`
  from the point of view of the player to move

`clone()` defaults to a deep copy; override it if your game can copy itself
more cheaply.

Then subclass `simplemcts.game.GameEvaluator` and implement
`evaluate(state)`, returning `(value, policy)`: a value for the player to
move, usually in `[-1, 1]`, and one probability per action.

A complete example, a pile of stones where each player takes one or two
and whoever takes the last stone wins:

```python
from simplemcts.game import Game, GameEvaluator


class Stones(Game):
    def __init__(self, stones=7):
        self.stones = stones

    @property
    def action_count(self):
        return 2  # action 0 takes one stone, action 1 takes two

    def get_actions(self):
        return [self.stones >= 1, self.stones >= 2]

    def is_finished(self):
        return self.stones == 0

    def play(self, action):
        self.stones -= action + 1

    def get_state(self):
        return self.stones

    def get_result(self):
        # The player to move faces an empty pile: the opponent took the last stone.
        return -1.0 if self.stones == 0 else None


class Uniform(GameEvaluator):
    def evaluate(self, state):
        return 0.0, [0.5, 0.5]
```

## Searching a single game

```python
from simplemcts.config import MctsConfig, ucb1
from simplemcts.errors import MctsError
from simplemcts.mcts import Mcts

mcts = Mcts(Stones(), MctsConfig(exploration_coef=1.5, selection_function=ucb1))
evaluator = Uniform()

for _ in range(200):
    mcts.iterate(evaluator)

score, policy = mcts.result()
best = max(range(len(policy)), key=policy.__getitem__)

try:
    mcts.play(best)  # moves the root, keeping the explored subtree
except MctsError as error:
    print("cannot play:", error)
```

`Mcts(game)` without a config uses `MctsConfig()`: an exploration
coefficient of √2 and `default_selection_score`. Both
`default_selection_score` and `ucb1` live in `simplemcts.config`; any
function taking `(value, policy, n_visits, parent_n_visits,
exploration_coef)` and returning a score may be used instead.

Other members of `Mcts`:

- `game` — the game at the root; `state` — the current `MctsState`
  (`USABLE`, `AWAITING_SIMULATION` or `LOCKED`)
- `is_finished()` — whether the root's outcome is settled; once it is,
  `iterate` does nothing
- `score()` — the root's value for the player who moved into it
- `statistics()` — action probabilities derived from the root's children
- `result()` — `(score, statistics)` in one call
- `count_visits()` — the number of visits recorded at the root

`play(action)` raises `ActionOutOfRangeError` for an index outside
`0 .. action_count-1`, `UnexploredActionError` if no iteration has run yet,
and `InvalidActionError` if the action is not legal at the root.

### Evaluating outside the search

When evaluations come from elsewhere, split each iteration in two:

```python
state = mcts.start_iteration()
mcts.apply_simulation(model_evaluate(state))
```

Calling these out of order raises `InvalidStateError`; starting an
iteration when the root is already settled raises
`SearchAlreadyOverError`.

## Self-play in batches

`MctsBatch` takes a callable that creates a new game and an optional
`MctsBatchConfig` (exploration coefficient, selection function and a
`seed` for the random generator that samples moves; without a seed it is
seeded from the clock).

```python
from simplemcts.batch import MctsBatch, MctsBatchConfig

batch = MctsBatch(Stones, MctsBatchConfig(seed=42))
batch.populate(16)

finished = []
while batch.count:
    for _ in range(100):
        batch.iterate(evaluator)
    finished.extend(batch.next_finished())
```

Each call to `next_finished()` records the current position of every
running game as a `HistoryEntry` (`game`, `value`, `policy`), plays one
move sampled from the search result, and returns the histories of the
games that had already ended, removing them from the batch. In a returned
history each entry's `value` is replaced by the final outcome, seen from
the side that moved from that position.

The batch also offers:

- `start_iteration()` — a list of states to evaluate, one per running game
- `apply_simulation(evaluations)` — applies them in the same order, then
  samples and plays a move in each game and records the position; raises
  `InvalidEvaluationCountError` if the count does not match `count`
- `populate_from_games(games)` — start searches from given positions,
  reusing emptied slots first
- `clear()` — remove every game
- `state` — the batch's `MctsState`

## Lower-level pieces

- `simplemcts.tree.Node` — a tree node with a fixed number of child slots
  and a weak parent link
- `simplemcts.stats.NodeStats` — the visit count, score total, policy,
  mask and settled flag kept in each search node
- `simplemcts.utils.sample(policy, rng)` — draws an index from a
  probability list with a `random.Random`

## Errors

All failures derive from `simplemcts.errors.MctsError`:
`InvalidStateError`, `InvalidEvaluationCountError`,
`SearchAlreadyOverError`, `ActionOutOfRangeError`,
`InvalidActionError` and `UnexploredActionError`.
`MctsBatch.populate` raises `ValueError` for a negative count.

## What it does not do

This is a library only: it has no command-line program, ships no games or
evaluators of its own, and does not save trees or histories to disk.

## Running the tests

```
pip install -e ".[test]"
pytest
```