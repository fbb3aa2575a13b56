import pytest

from simplemcts.errors import (
    ActionOutOfRangeError,
    InvalidActionError,
    InvalidEvaluationCountError,
    InvalidStateError,
    MctsError,
    SearchAlreadyOverError,
    UnexploredActionError,
)


def test_invalid_state_keeps_state():
    error = InvalidStateError(2)
    assert error.state == 2
    assert "2" in str(error)


def test_invalid_evaluation_count_fields():
    error = InvalidEvaluationCountError(5, 3)
    assert (error.expected, error.received) == (5, 3)
    assert "5" in str(error) and "3" in str(error)


def test_action_out_of_range_fields():
    error = ActionOutOfRangeError(7, 4)
    assert (error.action, error.action_count) == (7, 4)
    assert "7" in str(error)


def test_invalid_action_field():
    error = InvalidActionError(1)
    assert error.action == 1
    assert "1" in str(error)


@pytest.mark.parametrize(
    "error_type, args",
    [
        (InvalidStateError, (1,)),
        (InvalidEvaluationCountError, (1, 2)),
        (SearchAlreadyOverError, ()),
        (ActionOutOfRangeError, (4, 4)),
        (InvalidActionError, (0,)),
        (UnexploredActionError, ()),
    ],
)
def test_all_errors_are_mcts_errors(error_type, args):
    error = error_type(*args)
    with pytest.raises(MctsError) as info:
        raise error
    assert info.value is error
    assert str(info.value)


def test_search_already_over_message():
    error = SearchAlreadyOverError()
    assert str(error) == "search is already over"
    assert isinstance(error, MctsError)


def test_unexplored_action_message():
    assert str(UnexploredActionError()) == "root has not been explored yet"