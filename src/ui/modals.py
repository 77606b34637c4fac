"""Modal dialogs for marker record management."""

from __future__ import annotations

from pathlib import Path

from textual import on
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label, Static

from records import MAPMARKER_RECORDS_DIR, MarkerFile
from ui.ids import css
import ui.ids as ids


class RecordListItem(Static):
    """A clickable record list item."""

    def __init__(self, marker_file: MarkerFile) -> None:
        super().__init__(marker_file.name)
        self.marker_file = marker_file
        self.add_class("record-list-item")

    def on_click(self) -> None:
        """Handle click - dismiss modal with this record."""
        self.screen.dismiss(self.marker_file.path)


class LoadRecordModal(ModalScreen[Path | None]):
    """Modal for loading a saved marker record."""

    BINDINGS = [("escape", "cancel", "Cancel")]

    def __init__(self, records_dir: Path = MAPMARKER_RECORDS_DIR) -> None:
        super().__init__()
        self.records_dir = records_dir

    def compose(self) -> ComposeResult:
        with Vertical(id="load-record-modal"):
            yield Label("Load Record", id=ids.MODAL_TITLE)
            with VerticalScroll(id=ids.MODAL_RECORD_LIST):
                records = MarkerFile.list_records(self.records_dir)
                if records:
                    for marker_file in records:
                        yield RecordListItem(marker_file)
                else:
                    yield Static("No saved records", id=ids.NO_RECORDS)
            with Horizontal(id=ids.MODAL_BUTTONS):
                yield Button("Cancel", id=ids.MODAL_CANCEL_BTN, variant="default")

    def action_cancel(self) -> None:
        self.dismiss(None)

    @on(Button.Pressed, css(ids.MODAL_CANCEL_BTN))
    def on_cancel(self, event: Button.Pressed) -> None:
        self.dismiss(None)


class SaveRecordModal(ModalScreen[str | None]):
    """Modal for saving the current marker as a named record."""

    BINDINGS = [("escape", "cancel", "Cancel")]

    def __init__(self, default_name: str = "") -> None:
        super().__init__()
        self.default_name = default_name

    def compose(self) -> ComposeResult:
        with Vertical(id="save-record-modal"):
            yield Label("Save Record", id=ids.MODAL_TITLE)
            yield Input(value=self.default_name, placeholder="Record name...", id=ids.RECORD_NAME_INPUT)
            with Horizontal(id=ids.MODAL_BUTTONS):
                yield Button("Cancel", id=ids.MODAL_CANCEL_BTN, variant="default")
                yield Button("Save", id=ids.MODAL_SAVE_BTN, variant="success")

    def on_mount(self) -> None:
        self.query_one(css(ids.RECORD_NAME_INPUT), Input).focus()

    def action_cancel(self) -> None:
        self.dismiss(None)

    @on(Button.Pressed, css(ids.MODAL_CANCEL_BTN))
    def on_cancel(self, event: Button.Pressed) -> None:
        self.dismiss(None)

    @on(Button.Pressed, css(ids.MODAL_SAVE_BTN))
    def on_save(self, event: Button.Pressed) -> None:
        name = self.query_one(css(ids.RECORD_NAME_INPUT), Input).value.strip()
        if name:
            self.dismiss(name)

    @on(Input.Submitted, css(ids.RECORD_NAME_INPUT))
    def on_input_submitted(self, event: Input.Submitted) -> None:
        name = event.value.strip()
        if name:
            self.dismiss(name)
