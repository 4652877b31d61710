"""Tests for single-line progress rendering."""

import io
from datetime import timedelta
from unittest.mock import Mock

import pytest

from tickprogress.core.snapshot import ProgressSnapshot
from tickprogress.ui.progress import (
    BYTES_FORMAT,
    COLLECTION_FORMAT,
    ITERABLE_FORMAT,
    ProgressLine
)


@pytest.fixture
def stream():
    """In-memory output stream."""
    return io.StringIO()


class TestRender:
    """Test template rendering."""

    def test_collection_format(self):
        """Collection format shows bar, percent, counts and ETA."""
        snapshot = ProgressSnapshot(5, 10, timedelta(seconds=5))
        line = ProgressLine(COLLECTION_FORMAT)

        assert line.render(snapshot) == (
            "(|)   5.0s [==========----------]  50.0% (5/10) eta:   5.0s"
        )

    def test_iterable_format(self):
        """Iterable format shows spinner and elapsed time only."""
        snapshot = ProgressSnapshot(-1, 100, timedelta(seconds=2), spin_phase=2)
        assert ProgressLine(ITERABLE_FORMAT).render(snapshot) == "(-)   2.0s"

    def test_bytes_format(self):
        """Bytes format shows sizes and rate."""
        snapshot = ProgressSnapshot(1000, 2000, timedelta(seconds=4), spin_phase=1)
        rendered = ProgressLine(BYTES_FORMAT).render(snapshot)

        assert rendered.startswith("(/)   4.0s")
        assert "(  1.00kB/2.00kB @ 250.0 B/s)" in rendered

    def test_bar_style(self):
        """Configured bar characters and length are applied."""
        line = ProgressLine("[{bar}]", bar_length=4, filled="#", empty=".")
        assert line.render(ProgressSnapshot(2, 4)) == "[##..]"

    def test_fields_are_lazy(self):
        """Custom data is only created when the template asks for it."""
        creator = Mock(return_value="file.txt")
        snapshot = ProgressSnapshot(1, 2, custom_creator=creator)

        ProgressLine(COLLECTION_FORMAT).render(snapshot)
        creator.assert_not_called()

        assert ProgressLine("{custom}").render(snapshot) == "file.txt"
        creator.assert_called_once()

    def test_unknown_field(self):
        """Unknown template names raise AttributeError."""
        with pytest.raises(AttributeError):
            ProgressLine("{nope}").render(ProgressSnapshot(0, 1))


class TestOutput:
    """Test writing to a stream."""

    def test_call_rewrites_line(self, stream):
        """Each update starts with a carriage return."""
        line = ProgressLine("{current}", stream=stream)

        line(ProgressSnapshot(1, 10))
        line(ProgressSnapshot(2, 10))

        assert stream.getvalue() == "\r 1\r 2"
        assert line.updates == 2

    def test_finish(self, stream):
        """finish terminates the line."""
        line = ProgressLine("{total}", stream=stream)
        line(ProgressSnapshot(1, 10))
        line.finish()

        assert stream.getvalue() == "\r10\n"

    def test_finish_without_updates(self, stream):
        """finish writes nothing when nothing was rendered."""
        ProgressLine(stream=stream).finish()
        assert stream.getvalue() == ""
