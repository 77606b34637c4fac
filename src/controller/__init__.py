"""Controller layer: mediates between the map widget, form fields and geocoder.

This package contains:
- sync: MapSyncController, the state machine around MarkerState
- events: MarkerEvents hub for position/zoom/status/address events
- form_sync: FormSyncManager, the Textual form surface
"""

from controller.events import MarkerEvents
from controller.surfaces import FormSurface, MapSurface
from controller.sync import LookupRequest, MapSyncController
from controller.field_mappings import FieldMapping, FIELD_MAPPINGS
from controller.form_sync import FormSyncManager

__all__ = [
    # Core
    "LookupRequest",
    "MapSyncController",
    "MarkerEvents",
    # Surfaces
    "FormSurface",
    "MapSurface",
    "FormSyncManager",
    # Field registry
    "FieldMapping",
    "FIELD_MAPPINGS",
]
