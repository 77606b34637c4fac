"""UIField descriptor for record classes with form metadata.

This module implements Python's descriptor protocol to create fields that:
1. Store record values (like regular instance attributes)
2. Carry form metadata (widget IDs, labels, explanations)
3. Normalize incoming values on assignment

The Descriptor Pattern
----------------------
A descriptor assigned to a class attribute intercepts attribute access on
instances. Class access returns the descriptor itself, so the metadata is
always reachable as ``MarkerRecord.lat.widget_id`` while
``record.lat`` returns the stored value.

UIField vs Field
----------------
- UIField: a record value that has a form widget (input/checkbox).
  Contains: type, default, widget_id, label, explanation, normalize
- Field: a data-only value (persisted, but not edited directly).
  Contains: type, default/default_factory, normalize

Usage Example
-------------
    class MarkerRecord(RecordBase):
        lat = UIField(
            type_=str,
            default="",
            widget_id="marker-lat",
            label="Latitude",
            explanation="Decimal degrees",
            normalize=normalize_coordinate_text,
        )

    record = MarkerRecord(lat="40,7128")
    record.lat                      # "40.7128"
    MarkerRecord.lat.widget_id      # "marker-lat"

Integration Points
------------------
1. FormSyncManager (controller/form_sync.py): uses widget_id to find the
   widgets a record value is shown in.
2. Record serialization (records.py): iterates the declared fields to
   serialize/deserialize records to JSON.
3. UI composition (ui/tabs/marker.py): uses label/explanation to build
   the form rows.
"""

from typing import Any, Callable


class UIField:
    """Descriptor that holds field value + form metadata.

    When accessed on the class, returns the UIField itself (with metadata).
    When accessed on an instance, returns the actual value.
    """

    def __init__(
        self,
        type_: type,
        default: Any,
        widget_id: str,
        label: str,
        explanation: str,
        *,
        normalize: Callable[[Any], Any] | None = None,
    ):
        """Create a UIField descriptor.

        Args:
            type_: The Python type of this field (bool, str, int, etc.)
            default: Default value for the field
            widget_id: The Textual widget ID this field is edited in
            label: Short label for the form row
            explanation: Explanation text shown below the widget
            normalize: Applied to every assigned value
        """
        self.type_ = type_
        self.default = default
        self.widget_id = widget_id
        self.label = label
        self.explanation = explanation
        self.normalize = normalize
        self.name: str | None = None

    def __set_name__(self, owner: type, name: str) -> None:
        """Called when the descriptor is assigned to a class attribute."""
        self.name = name
        if "_ui_fields" not in owner.__dict__:
            owner._ui_fields = {}
        owner._ui_fields[name] = self

    def __get__(self, obj: Any, owner: type | None = None) -> Any:
        if obj is None:
            return self
        return obj.__dict__.get(self.name, self.default)

    def __set__(self, obj: Any, value: Any) -> None:
        if self.normalize:
            value = self.normalize(value)
        obj.__dict__[self.name] = value


class Field:
    """Descriptor for data-only fields (no form widget, but still serialized)."""

    def __init__(
        self,
        type_: type,
        default: Any = None,
        *,
        default_factory: Callable[[], Any] | None = None,
        normalize: Callable[[Any], Any] | None = None,
    ):
        self.type_ = type_
        self.default = default
        self.default_factory = default_factory
        self.normalize = normalize
        self.name: str | None = None

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name
        if "_data_fields" not in owner.__dict__:
            owner._data_fields = {}
        owner._data_fields[name] = self

    def __get__(self, obj: Any, owner: type | None = None) -> Any:
        if obj is None:
            return self
        if self.name not in obj.__dict__:
            if self.default_factory:
                obj.__dict__[self.name] = self.default_factory()
            else:
                return self.default
        return obj.__dict__[self.name]

    def __set__(self, obj: Any, value: Any) -> None:
        if self.normalize:
            value = self.normalize(value)
        obj.__dict__[self.name] = value


class RecordBase:
    """Base class for UIField-based records."""

    _ui_fields: dict[str, UIField]
    _data_fields: dict[str, Field]

    def __init__(self, **kwargs: Any) -> None:
        """Initialize the record with optional field values (unknown names are ignored)."""
        all_fields = self.get_all_fields()
        for name, value in kwargs.items():
            if name in all_fields:
                setattr(self, name, value)

    @classmethod
    def get_ui_fields(cls) -> dict[str, UIField]:
        """Get all UIField descriptors for this class."""
        return getattr(cls, "_ui_fields", {})

    @classmethod
    def get_data_fields(cls) -> dict[str, Field]:
        """Get all data Field descriptors for this class."""
        return getattr(cls, "_data_fields", {})

    @classmethod
    def get_all_fields(cls) -> dict[str, UIField | Field]:
        """Get all fields (UI and data) for this class."""
        return {**cls.get_ui_fields(), **cls.get_data_fields()}

    def to_dict(self) -> dict[str, Any]:
        """Return the current field values keyed by field name."""
        return {name: getattr(self, name) for name in self.get_all_fields()}

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.to_dict() == other.to_dict()
