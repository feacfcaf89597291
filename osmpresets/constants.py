"""
Constants for the osmpresets library.

Geometry classes, location-set normalization and scoring defaults follow the
iD editor preset format: https://github.com/ideditor/schema-builder
"""

# =============================================================================
# GEOMETRY
# =============================================================================

GEOMETRY_CLASSES = ("point", "vertex", "line", "area", "relation")

# shapely geom_type -> preset geometry class
SHAPELY_GEOMETRY_CLASSES = {
    "Point": "point",
    "MultiPoint": "point",
    "LineString": "line",
    "MultiLineString": "line",
    "LinearRing": "line",
    "Polygon": "area",
    "MultiPolygon": "area",
}

# =============================================================================
# SCORING
# =============================================================================

DEFAULT_MATCH_SCORE = 1.0
BASE_SCORE = 1.0

# area=yes is implied for closed ways, so a missing tag only earns a nudge
AREA_YES_BONUS = 0.1

WILDCARD = "*"

# =============================================================================
# LOCATIONS
# =============================================================================

# "001" is the UN M49 code for the whole world
WORLD_LOCATION = "001"

LOCATION_ALIASES = {
    "conus": "us",
}

# =============================================================================
# INDEXING
# =============================================================================

CATCH_ALL_KEY = ""
ID_SEPARATOR = "/"

# Raw preset field -> PresetFeature attribute
OPTIONAL_LIST_FIELDS = {
    "fields": "fields",
    "moreFields": "more_fields",
    "terms": "terms",
}

OPTIONAL_STRING_FIELDS = {
    "name": "name",
    "icon": "icon",
    "imageURL": "logo_url",
}

# Columns added by osmpresets.geo.classify_features
PRESET_COLUMNS = ("preset_id", "preset_name", "preset_score")
