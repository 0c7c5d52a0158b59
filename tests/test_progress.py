"""Tests for the progress bar facade."""

import pytest

from typo3_console.exceptions import ProgressNotStartedError


@pytest.mark.parametrize(
    "call",
    [
        lambda io: io.progress_advance(),
        lambda io: io.progress_set(3),
        lambda io: io.progress_finish(),
    ],
)
def test_progress_requires_start(make_io, call):
    """Test progress operations fail before progress_start()."""
    with pytest.raises(ProgressNotStartedError):
        call(make_io())


def test_progress_advance_and_set(make_io):
    """Test advancing and setting the current step."""
    console_output = make_io()
    console_output.progress_start(10)
    bar = console_output._get_progress_bar()

    console_output.progress_advance()
    console_output.progress_advance(3)
    assert bar.current == 4

    console_output.progress_set(7)
    assert bar.current == 7
    assert bar.max_steps == 10

    console_output.progress_finish()
    assert not bar.started


def test_progress_set_beyond_maximum_raises_maximum(make_io):
    """Test the maximum grows when the current step exceeds it."""
    console_output = make_io()
    console_output.progress_start(5)
    bar = console_output._get_progress_bar()

    console_output.progress_set(8)
    assert bar.current == 8
    assert bar.max_steps == 8
    console_output.progress_finish()


def test_progress_indeterminate(make_io):
    """Test a bar without maximum counts steps until finished."""
    console_output = make_io()
    console_output.progress_start()
    bar = console_output._get_progress_bar()

    console_output.progress_advance(2)
    assert bar.max_steps is None
    assert bar.current == 2
    console_output.progress_finish()
    assert not bar.started


def test_progress_restart(make_io):
    """Test starting again resets the bar."""
    console_output = make_io()
    console_output.progress_start(3)
    console_output.progress_advance(2)
    console_output.progress_start(4)
    bar = console_output._get_progress_bar()

    assert bar.current == 0
    assert bar.max_steps == 4
    console_output.progress_finish()


def test_progress_finish_completes_bar(console):
    """Test finishing sets the bar to its maximum."""
    from typo3_console.console.progress import ProgressBar

    bar = ProgressBar(console)
    bar.start(3)
    bar.advance()
    task = bar._task()
    bar.finish()

    assert task.completed == 3
    assert task.total == 3
