"""Single-line terminal rendering of progress snapshots."""

from typing import Any, Dict, Optional, TextIO

import click

from tickprogress.core.snapshot import ProgressSnapshot

COLLECTION_FORMAT = "({spin}) {elapsed} [{bar}] {percent} ({current_ticks}/{total_ticks}) eta: {eta}"
ITERABLE_FORMAT = "({spin}) {elapsed}"
BYTES_FORMAT = "({spin}) {elapsed} [{bar}] {percent} ({bytes}/{total_bytes} @ {rate}) eta: {eta}"


class _SnapshotFields(dict):
    """Mapping that resolves template names lazily from a snapshot."""

    def __init__(self, snapshot: ProgressSnapshot, bar_style: Dict[str, Any]):
        super().__init__()
        self._snapshot = snapshot
        self._bar_style = bar_style

    def __missing__(self, key: str) -> Any:
        if key == "bar":
            return self._snapshot.make_bar(**self._bar_style)
        return getattr(self._snapshot, key)


class ProgressLine:
    """Renders every snapshot it receives on a single, rewritten terminal line."""

    def __init__(
        self,
        template: str = COLLECTION_FORMAT,
        bar_length: int = 20,
        filled: str = "=",
        empty: str = "-",
        undefined: str = "~",
        stream: Optional[TextIO] = None
    ):
        """Initialize progress line.

        Args:
            template: str.format template naming snapshot attributes
            bar_length: Length of the rendered bar
            filled: Bar character for completed ticks
            empty: Bar character for remaining ticks
            undefined: Bar character while progress is undefined
            stream: Output stream (default: stdout)
        """
        self.template = template
        self.bar_style = {
            "length": bar_length,
            "filled": filled,
            "empty": empty,
            "undefined": undefined,
        }
        self.stream = stream
        self.updates = 0

    def render(self, snapshot: ProgressSnapshot) -> str:
        """Format a snapshot without writing it.

        Only the fields named in the template are computed.
        """
        return self.template.format_map(_SnapshotFields(snapshot, self.bar_style))

    def __call__(self, snapshot: ProgressSnapshot) -> None:
        click.echo("\r" + self.render(snapshot), file=self.stream, nl=False)
        self.updates += 1

    def finish(self) -> None:
        """Terminate the progress line."""
        if self.updates:
            click.echo("", file=self.stream)
