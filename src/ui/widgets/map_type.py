"""Map style selector: MapTypeCard."""

from typing import Callable

from textual import on
from textual.app import ComposeResult
from textual.containers import Container
from textual.widgets import Button, Static

from model import MapType
from ui.ids import css
import ui.ids as ids


class MapTypeCard(Container):
    """A card cycling the map style: hybrid, roadmap, satellite, terrain."""

    MAP_TYPES = {
        MapType.HYBRID: ("Hybrid", "Imagery with graticule"),
        MapType.ROADMAP: ("Roadmap", "Graticule only"),
        MapType.SATELLITE: ("Satellite", "Imagery, no lines"),
        MapType.TERRAIN: ("Terrain", "Relief shading with graticule"),
    }
    TYPE_ORDER = [MapType.HYBRID, MapType.ROADMAP, MapType.SATELLITE, MapType.TERRAIN]

    def __init__(self, on_change: Callable[[MapType], None], map_type: MapType = MapType.HYBRID) -> None:
        super().__init__()
        self._on_change = on_change
        self._map_type = map_type

    def compose(self) -> ComposeResult:
        label, desc = self.MAP_TYPES[self._map_type]
        yield Button(label, id=ids.MAP_TYPE_BTN)
        yield Static(desc, id=ids.MAP_TYPE_DESC, classes="option-explanation")

    @property
    def map_type(self) -> MapType:
        return self._map_type

    def set_map_type(self, map_type: MapType) -> None:
        """Show a map type without reporting it as a change."""
        self._map_type = map_type
        self._update_labels()

    def _update_labels(self) -> None:
        label, desc = self.MAP_TYPES[self._map_type]
        self.query_one(css(ids.MAP_TYPE_BTN), Button).label = label
        self.query_one(css(ids.MAP_TYPE_DESC), Static).update(desc)

    @on(Button.Pressed, css(ids.MAP_TYPE_BTN))
    def on_type_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        idx = self.TYPE_ORDER.index(self._map_type)
        self._map_type = self.TYPE_ORDER[(idx + 1) % len(self.TYPE_ORDER)]
        self._update_labels()
        self._on_change(self._map_type)
