"""Saved record widget: RecordItem."""

from pathlib import Path
from typing import Callable

from textual import on
from textual.app import ComposeResult
from textual.containers import Container, Horizontal
from textual.widgets import Button


class RecordItem(Container):
    """A saved marker record in the records list (load / delete)."""

    def __init__(self, record_path: Path, on_load: Callable, on_delete: Callable) -> None:
        super().__init__()
        self.record_path = record_path
        self._on_load = on_load
        self._on_delete = on_delete

    def compose(self) -> ComposeResult:
        with Horizontal(classes="record-row"):
            yield Button(self.record_path.stem, classes="record-name-btn", variant="primary")
            yield Button("x", classes="record-delete-btn", variant="error")

    @on(Button.Pressed, ".record-name-btn")
    def on_load_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        self._on_load(self.record_path)

    @on(Button.Pressed, ".record-delete-btn")
    def on_delete_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        self._on_delete(self)
