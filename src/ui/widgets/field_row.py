"""Form row widget: FieldRow."""

from textual.app import ComposeResult
from textual.containers import Container
from textual.widgets import Checkbox, Input, Label, Static

from model.ui_field import UIField


class FieldRow(Container):
    """A labelled input (or checkbox) with its explanation underneath."""

    def __init__(self, field: UIField, value: str | bool = "", placeholder: str = "") -> None:
        """Create a FieldRow from a UIField.

        Args:
            field: The UIField descriptor containing metadata
            value: Initial widget value
            placeholder: Placeholder for text inputs
        """
        super().__init__(classes="field-row")
        self.field = field
        self._value = value
        self._placeholder = placeholder

    def compose(self) -> ComposeResult:
        if self.field.type_ is bool:
            yield Checkbox(self.field.label, value=bool(self._value), id=self.field.widget_id)
        else:
            yield Label(f"{self.field.label}:", classes="field-label")
            yield Input(
                value=str(self._value),
                placeholder=self._placeholder,
                id=self.field.widget_id,
            )
        yield Static(self.field.explanation, classes="option-explanation")
