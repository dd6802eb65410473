import io

import pytest

from pycrucible.spinner import DOTS9_FRAMES, Spinner, create_spinner, stop_and_persist


def test_create_spinner_runs_until_stopped():
    stream = io.StringIO()
    spinner = create_spinner("Collecting source files ...", stream)
    assert spinner.is_running
    stop_and_persist(spinner, "Source files collected")
    assert not spinner.is_running


def test_stop_and_persist_writes_final_line():
    stream = io.StringIO()
    spinner = create_spinner("Working", stream)
    stop_and_persist(spinner, "Done")
    output = stream.getvalue()
    assert output.endswith("\x1b[2K\r✔ Done\n")


def test_spinner_draws_frame_with_message():
    stream = io.StringIO()
    spinner = create_spinner("Working", stream)
    stop_and_persist(spinner, "Done")
    output = stream.getvalue()
    assert f"\r{DOTS9_FRAMES[0]} Working" in output


def test_custom_symbol():
    stream = io.StringIO()
    spinner = Spinner("Downloading", stream).start()
    spinner.stop_and_persist("✗", "Failed")
    assert stream.getvalue().endswith("✗ Failed\n")


def test_start_twice_raises():
    stream = io.StringIO()
    spinner = create_spinner("Working", stream)
    with pytest.raises(RuntimeError):
        spinner.start()
    stop_and_persist(spinner, "Done")
    assert not spinner.is_running


def test_stop_without_start_only_persists():
    stream = io.StringIO()
    spinner = Spinner("Idle", stream)
    stop_and_persist(spinner, "Finished")
    assert stream.getvalue() == "\x1b[2K\r✔ Finished\n"


def test_context_manager_persists_message():
    stream = io.StringIO()
    with Spinner("Generating", stream) as spinner:
        assert spinner.is_running
    assert stream.getvalue().endswith("✔ Generating\n")
    assert not spinner.is_running