"""Shared constants for mapmarker."""

APP_NAME = "mapmarker"
MAPMARKER_VERSION = "0.3.0"

# Zoom
DEFAULT_ZOOM = 12
MIN_ZOOM = 1
MAX_ZOOM = 21  # deepest level the tile provider serves

# Web Mercator cut-off latitude
MAX_LATITUDE = 85.05112878

# Google Geocoding API
GEOCODE_ENDPOINT = "https://maps.googleapis.com/maps/api/geocode/json"
GEOCODE_HTTP_TIMEOUT = 10

# Environment variable that overrides the settings file API key
API_KEY_ENV = "MAPMARKER_API_KEY"
