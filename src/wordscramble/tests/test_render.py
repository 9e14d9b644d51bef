"""Tests for task views."""
from wordscramble.models.training_models import InputResult
from wordscramble.render import STATE_ACTIVE, STATE_COMPLETE, STATE_ERROR, render_result, render_stats, render_task
from wordscramble.services.training import Training


def make_training() -> Training:
    return Training(state={
        "maxErrCount": 3,
        "maxTaskCount": 2,
        "currentTaskIndex": 0,
        "tasks": [
            {"word": "sun", "randomizedWord": "nus", "wordProgress": "",
             "currentLetterIndex": 0, "currentErrCount": 0},
            {"word": "task", "randomizedWord": "ksat", "wordProgress": "",
             "currentLetterIndex": 0, "currentErrCount": 0},
        ],
    })


def test_render_active_task() -> None:
    training = make_training()
    training.handle_input("s")
    view = render_task(training)
    assert view.header == "Task 1 of 2"
    assert view.state == STATE_ACTIVE
    assert view.answer == "s"
    assert view.letters == [(0, "n"), (1, "u")]
    assert "S" in view.text
    assert "Pick the next letter" in view.text


def test_render_complete_task() -> None:
    training = make_training()
    for letter in "sun":
        training.handle_input(letter)
    view = render_task(training, 0)
    assert view.state == STATE_COMPLETE
    assert view.letters == []
    assert "S U N" in view.text


def test_render_failed_task_shows_word() -> None:
    training = make_training()
    for letter in "xyz":
        training.handle_input(letter)
    view = render_task(training, 0)
    assert view.state == STATE_ERROR
    assert view.answer == "sun"
    assert view.letters == []


def test_render_defaults_to_current_task() -> None:
    training = make_training()
    for letter in "sun":
        training.handle_input(letter)
    view = render_task(training)
    assert view.header == "Task 2 of 2"
    assert [letter for _, letter in view.letters] == list("ksat")


def test_render_after_last_task_shows_last_task() -> None:
    training = make_training()
    for letter in "suntask":
        training.handle_input(letter)
    view = render_task(training)
    assert view.header == "Task 2 of 2"
    assert view.state == STATE_COMPLETE


def test_render_stats() -> None:
    training = make_training()
    training.handle_input("x")
    for letter in "suntask":
        training.handle_input(letter)
    text = render_stats(training)
    assert "Errors: 1" in text
    assert "Tasks without errors: 1" in text
    assert '"sun"' in text


def test_render_result() -> None:
    assert "not the next letter" in render_result(InputResult(False, False, False), "x")
    assert "Out of attempts" in render_result(InputResult(False, False, True), "x")
    assert "complete" in render_result(InputResult(True, True, False), "n")
    assert render_result(InputResult(True, False, False), "s") == "👍 S"
