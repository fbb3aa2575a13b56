import pytest

from simplemcts.batch import HistoryEntry, MctsBatch, MctsBatchConfig
from simplemcts.config import MctsState
from simplemcts.errors import InvalidEvaluationCountError, InvalidStateError
from simplemcts.game import Game, GameEvaluator


class GameTest(Game):
    def __init__(self):
        self.moves = []

    @property
    def action_count(self):
        return 4

    def get_actions(self):
        return [index not in self.moves for index in range(4)]

    def is_finished(self):
        return len(self.moves) == 4

    def play(self, action):
        self.moves.append(action)

    def get_state(self):
        return tuple(self.moves[i] if i < len(self.moves) else -1 for i in range(4))

    def get_result(self):
        if len(self.moves) != 4:
            return None
        rel = (self.moves[0] + self.moves[2]) - (self.moves[1] + self.moves[3])
        if rel == 0:
            return 0.0
        return 1.0 if rel > 0 else -1.0


class GameEvaluatorTest2(GameEvaluator):
    def evaluate(self, state):
        played = [value for value in state if value != -1]
        if not played:
            return 0.0, [0.1, 0.15, 0.25, 0.5]
        table = {
            0: (0.5, [0.1, 0.15, 0.25, 0.5]),
            1: (0.25, [0.1, 0.15, 0.25, 0.5]),
            2: (-0.25, [0.1, 0.15, 0.25, 0.5]),
            3: (-0.5, [0.1, 0.15, 0.25, 0.5]),
        }
        return table.get(played[-1], (0.0, [0.25, 0.25, 0.25, 0.25]))


def make_batch(seed=7):
    return MctsBatch(GameTest, MctsBatchConfig(seed=seed))


def run_until_result(batch, evaluator, iterations=1):
    rounds = 0
    result = []
    while not result:
        for _ in range(iterations):
            batch.iterate(evaluator)
        result = batch.next_finished()
        rounds += 1
    return rounds, result


def test_batch_iterate_1():
    batch = make_batch()
    batch.populate_from_games([GameTest(), GameTest()])
    rounds, result = run_until_result(batch, GameEvaluatorTest2())
    assert len(result) == 2
    assert rounds == 4 + 1


def test_batch_iterate_2():
    batch = make_batch()
    evaluator = GameEvaluatorTest2()
    b = GameTest()
    b.play(4)
    batch.populate_from_games([GameTest(), b])
    assert batch.count == 2

    rounds, result = run_until_result(batch, evaluator)
    assert len(result) == 1
    assert rounds == 3 + 1
    assert batch.count == 1

    batch.iterate(evaluator)
    result = batch.next_finished()
    assert len(result) == 1
    assert batch.count == 0


def test_batch_iterate_3():
    batch = make_batch()
    batch.populate_from_games([GameTest()])
    rounds, result = run_until_result(batch, GameEvaluatorTest2(), iterations=18)
    assert len(result) == 1
    assert rounds == 4 + 1
    first = result[0][0]
    assert isinstance(first, HistoryEntry)
    assert first.game.get_actions() == [True, True, True, True]
    assert first.value == 1.0


def test_populate_creates_new_games():
    batch = make_batch()
    batch.populate(3)
    assert batch.count == 3
    assert batch.start_iteration() == [(-1, -1, -1, -1)] * 3
    assert batch.state == MctsState.AWAITING_SIMULATION


def test_populate_negative_raises():
    batch = make_batch()
    with pytest.raises(ValueError):
        batch.populate(-1)
    assert batch.state == MctsState.USABLE


def test_clear_resets_count():
    batch = make_batch()
    batch.populate(2)
    batch.clear()
    assert batch.count == 0
    assert batch.start_iteration() == []


def test_slots_are_reused_after_finish():
    batch = make_batch()
    evaluator = GameEvaluatorTest2()
    game = GameTest()
    for move in (0, 1, 2):
        game.play(move)
    batch.populate_from_games([game])
    batch.iterate(evaluator)
    assert batch.next_finished() == []
    batch.iterate(evaluator)
    finished = batch.next_finished()
    assert len(finished) == 1
    assert len(finished[0]) == 1
    assert batch.count == 0

    batch.populate(2)
    assert batch.count == 2
    assert len(batch.start_iteration()) == 2


def test_split_iteration_plays_whole_games():
    batch = make_batch()
    evaluator = GameEvaluatorTest2()
    batch.populate(2)
    for _ in range(4):
        states = batch.start_iteration()
        assert len(states) == 2
        batch.apply_simulation([evaluator.evaluate(state) for state in states])
        assert batch.state == MctsState.USABLE

    histories = batch.next_finished()
    assert len(histories) == 2
    assert batch.count == 0
    for history in histories:
        assert len(history) == 4
        assert history[0].game.get_state() == (-1, -1, -1, -1)
        assert abs(history[-1].value) in (0.0, 1.0)
        for earlier, later in zip(history, history[1:]):
            assert earlier.value == -later.value
        for entry in history:
            assert sum(entry.policy) == pytest.approx(1.0)


def test_apply_simulation_requires_awaiting_state():
    batch = make_batch()
    batch.populate(1)
    with pytest.raises(InvalidStateError) as excinfo:
        batch.apply_simulation([(0.0, [0.25] * 4)])
    assert excinfo.value.state == MctsState.USABLE


def test_start_iteration_twice_is_rejected():
    batch = make_batch()
    batch.populate(1)
    batch.start_iteration()
    with pytest.raises(InvalidStateError) as excinfo:
        batch.start_iteration()
    assert excinfo.value.state == MctsState.AWAITING_SIMULATION


def test_wrong_evaluation_count_keeps_awaiting_state():
    batch = make_batch()
    evaluator = GameEvaluatorTest2()
    batch.populate(2)
    states = batch.start_iteration()
    with pytest.raises(InvalidEvaluationCountError) as excinfo:
        batch.apply_simulation([])
    assert excinfo.value.expected == 2
    assert excinfo.value.received == 0
    assert batch.state == MctsState.AWAITING_SIMULATION

    batch.apply_simulation([evaluator.evaluate(state) for state in states])
    assert batch.state == MctsState.USABLE


def test_seeded_batches_are_reproducible():
    evaluator = GameEvaluatorTest2()

    first = MctsBatch(GameTest, MctsBatchConfig(seed=11))
    first.populate(3)
    _, first_result = run_until_result(first, evaluator)

    second = MctsBatch(GameTest, MctsBatchConfig(seed=11))
    second.populate(3)
    _, second_result = run_until_result(second, evaluator)

    first_states = [[entry.game.get_state() for entry in history] for history in first_result]
    second_states = [[entry.game.get_state() for entry in history] for history in second_result]
    assert len(first_states) == len(second_states)
    assert first_states == second_states
    assert [[entry.value for entry in history] for history in first_result] == [
        [entry.value for entry in history] for history in second_result
    ]