import pytest

from osmpresets.catalog import PresetCatalog


@pytest.fixture
def raw_presets():
    """A small slice of the iD generic presets."""
    return {
        "point": {
            "name": "Point",
            "tags": {},
            "geometry": ["point", "vertex"],
            "searchable": False,
        },
        "shop": {
            "name": "Shop",
            "icon": "maki-shop",
            "tags": {"shop": "*"},
            "geometry": ["point", "area"],
            "fields": ["name", "shop", "opening_hours"],
            "terms": ["store"],
        },
        "shop/supermarket": {
            "name": "Supermarket",
            "tags": {"shop": "supermarket"},
            "geometry": ["point", "area"],
            "terms": ["grocery", "food"],
        },
        "shop/supermarket/big": {
            "tags": {"shop": "supermarket", "size": "big"},
            "geometry": ["area"],
            "searchable": False,
        },
        "amenity": {
            "name": "Amenity",
            "tags": {"amenity": "*"},
            "geometry": ["point", "vertex", "area"],
            "searchable": False,
        },
        "amenity/bench": {
            "name": "Bench",
            "icon": "temaki-bench",
            "tags": {"amenity": "bench"},
            "geometry": ["point", "vertex", "line"],
            "terms": ["seat"],
        },
        "amenity/marketplace": {
            "name": "Marketplace",
            "tags": {"amenity": "marketplace"},
            "geometry": ["point", "area"],
            "locationSet": {"include": ["001"]},
        },
        "building": {
            "name": "Building",
            "tags": {"building": "*"},
            "geometry": ["area"],
            "matchScore": 0.6,
        },
    }


@pytest.fixture
def raw_brand_presets():
    """Name-suggestion style brand presets."""
    return {
        "shop/supermarket/aldi-4f1a": {
            "name": "Aldi",
            "tags": {"brand:wikidata": "Q41171", "shop": "supermarket"},
            "addTags": {
                "brand": "Aldi",
                "brand:wikidata": "Q41171",
                "name": "Aldi",
                "shop": "supermarket",
            },
            "geometry": ["point", "area"],
            "locationSet": {"include": ["de", "conus"]},
            "imageURL": "https://example.org/aldi.png",
        },
    }


@pytest.fixture
def catalog(raw_presets, raw_brand_presets):
    return PresetCatalog(raw_presets, raw_brand_presets)
