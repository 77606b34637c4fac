"""Marker record persistence for mapmarker."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable

from constants import MAX_ZOOM
from model import MapType, MarkerRecord, parse_coordinate
from model.ui_field import Field, UIField

if TYPE_CHECKING:
    from textual.app import App

log = logging.getLogger(__name__)

# Default records directory
MAPMARKER_RECORDS_DIR = Path.home() / ".config" / "mapmarker" / "markers"


class RecordValidationError(Exception):
    """Raised when record validation fails."""


def _check_type(name: str, value: Any, field: UIField | Field) -> None:
    """Reject JSON values that cannot be the declared field type."""
    if value is None:
        return
    if field.type_ is bool:
        ok = isinstance(value, bool)
    elif field.type_ is int:
        ok = isinstance(value, (int, float, str)) and not isinstance(value, bool)
    else:
        ok = isinstance(value, (str, int, float)) and not isinstance(value, bool)
    if not ok:
        raise RecordValidationError(
            f"Field '{name}' has invalid value {value!r} (expected {field.type_.__name__})"
        )


def serialize(record: MarkerRecord) -> dict[str, Any]:
    """Serialize a record to a JSON-compatible dict."""
    return record.to_dict()


def deserialize(data: Any, **overrides: Any) -> MarkerRecord:
    """Deserialize a dict into a MarkerRecord.

    Unknown keys are ignored, missing keys take the field default.

    Raises:
        RecordValidationError: If data is not an object or a value has the wrong type.
    """
    if not isinstance(data, dict):
        raise RecordValidationError(f"Record must be a JSON object, got {type(data).__name__}")
    kwargs = {}
    for name, field in MarkerRecord.get_all_fields().items():
        if name in overrides:
            kwargs[name] = overrides[name]
            continue
        if name not in data:
            continue
        value = data[name]
        _check_type(name, value, field)
        if value is not None:
            kwargs[name] = value
    return MarkerRecord(**kwargs)


def validate_record(record: MarkerRecord, record_name: str | None = None) -> list[str]:
    """Validate a MarkerRecord and return list of warnings.

    Args:
        record: The MarkerRecord to validate
        record_name: Optional record name for context in messages

    Values that cannot be used are reset so the record is safe to load.
    """
    warnings = []
    prefix = f"Record '{record_name}': " if record_name else ""

    # One coordinate without the other cannot place a marker
    if bool(record.lat) != bool(record.lng):
        warnings.append(f"{prefix}Incomplete position, clearing coordinates")
        record.lat = ""
        record.lng = ""

    lat = parse_coordinate(record.lat)
    if lat is not None and not -90 <= lat <= 90:
        warnings.append(f"{prefix}Latitude {record.lat} is outside -90..90")

    if record.zoom > MAX_ZOOM:
        warnings.append(f"{prefix}Zoom {record.zoom} is above {MAX_ZOOM}, using {MAX_ZOOM}")
        record.zoom = MAX_ZOOM

    if record.map_type not in {t.value for t in MapType}:
        warnings.append(f"{prefix}Unknown map type '{record.map_type}', using 'hybrid'")
        record.map_type = MapType.HYBRID.value

    return warnings


class MarkerFile:
    """Handles saving and loading one marker record file."""

    def __init__(self, path: Path):
        self.path = path

    @property
    def name(self) -> str:
        """Get the record name (filename without extension)."""
        return self.path.stem

    def save(self, record: MarkerRecord) -> None:
        """Save record to file."""
        data = serialize(record)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2))
        log.info(f"Saved record {self.name} to {self.path}")

    def load(self) -> tuple[MarkerRecord, list[str]]:
        """Load the record file.

        Returns:
            Tuple of (record, warnings) where warnings is a list of non-critical issues.

        Raises:
            RecordValidationError: For unreadable or critically invalid records.
        """
        try:
            data = json.loads(self.path.read_text())
        except json.JSONDecodeError as e:
            raise RecordValidationError(f"Record '{self.name}' is not valid JSON: {e}") from e
        record = deserialize(data)
        warnings = validate_record(record, record_name=self.name)
        for warning in warnings:
            log.warning(warning)
        return record, warnings

    def delete(self) -> None:
        """Delete the record file."""
        self.path.unlink()

    @classmethod
    def list_records(cls, directory: Path) -> list["MarkerFile"]:
        """List all records in a directory."""
        if not directory.exists():
            return []
        return [cls(p) for p in sorted(directory.glob("*.json"))]


def resolve_record_path(name_or_path: str, directory: Path = MAPMARKER_RECORDS_DIR) -> Path:
    """Resolve a record name ("office") or a path ("./office.json")."""
    path = Path(name_or_path).expanduser()
    if path.suffix == ".json" or path.parent != Path("."):
        return path
    return directory / f"{name_or_path}.json"


class RecordManager:
    """Manages record load/save operations for the app."""

    def __init__(
        self,
        app: App,
        get_record: Callable[[], MarkerRecord],
        on_record_loaded: Callable[[MarkerRecord], None],
        on_status: Callable[[str], None],
        records_dir: Path = MAPMARKER_RECORDS_DIR,
    ):
        """Initialize the record manager.

        Args:
            app: The Textual app instance
            get_record: Callback to snapshot the current marker
            on_record_loaded: Callback when a record is loaded (to re-initialize the marker)
            on_status: Callback to display status messages
            records_dir: Directory for record storage
        """
        self.app = app
        self._get_record = get_record
        self._on_record_loaded = on_record_loaded
        self._on_status = on_status
        self.records_dir = records_dir

    def load_record(self, record_path: Path) -> None:
        """Load a record from file."""
        marker_file = MarkerFile(record_path)
        try:
            record, warnings = marker_file.load()
        except RecordValidationError as e:
            self._on_status(f"Record invalid: {e}")
            return
        except OSError as e:
            self._on_status(f"Error loading record: {e}")
            return
        self._on_record_loaded(record)
        if warnings:
            self._on_status(f"Loaded {marker_file.name} ({len(warnings)} warning(s))")
        else:
            self._on_status(f"Loaded record: {marker_file.name}")

    def save_record(self, name: str) -> Path | None:
        """Save the current marker as a named record."""
        if not name:
            self._on_status("Enter a record name")
            return None
        marker_file = MarkerFile(self.records_dir / f"{name}.json")
        try:
            marker_file.save(self._get_record())
        except OSError as e:
            self._on_status(f"Error saving record: {e}")
            return None
        self._on_status(f"Saved record: {name}")
        return marker_file.path

    def delete_record(self, record_path: Path) -> None:
        marker_file = MarkerFile(record_path)
        try:
            marker_file.delete()
        except OSError as e:
            self._on_status(f"Error deleting record: {e}")
            return
        self._on_status(f"Deleted record: {marker_file.name}")
