"""Record tab composition."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Vertical, VerticalScroll
from textual.widgets import Label, Static

import ui.ids as ids


def compose_record_tab(version: str) -> ComposeResult:
    """Compose the record tab content.

    Args:
        version: Application version string

    Yields:
        Textual widgets for the record tab
    """
    with Vertical(id=ids.RECORD_TAB_CONTENT):
        yield Static(f"Map Marker\nVersion {version}", id="record-header")
        yield Label("Summary", classes="section-label")
        yield Static("", id=ids.RECORD_SUMMARY)
        yield Label("Stored Values", classes="section-label")
        yield Static("", id=ids.RECORD_JSON, markup=False)
        yield Label("Saved Records", classes="section-label")
        yield VerticalScroll(id=ids.RECORDS_LIST)
