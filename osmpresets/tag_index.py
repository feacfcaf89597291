"""
Inverted index from OSM tag key to the presets that require that key.

Only keys that are also top-level preset ids (``amenity``, ``shop``,
``highway``...) get their own bucket. Presets that reference none of them go
to the catch-all bucket under the empty key, which is scanned on every match.
"""

from collections import Counter
from types import MappingProxyType

from osmpresets.constants import CATCH_ALL_KEY, ID_SEPARATOR


def known_keys(presets):
    """Count the distinct top-level segments of the preset ids.

    >>> sorted(known_keys({"shop": ..., "shop/bakery": ..., "amenity/cafe": ...}).items())
    [('amenity', 1), ('shop', 2)]
    """
    return Counter(feature_id.split(ID_SEPARATOR, 1)[0] for feature_id in presets)


def build_tag_index(preset_maps, keys):
    """
    Build a tag-key index over one or more preset mappings.

    Parameters
    ----------
    preset_maps : iterable of Mapping[str, PresetFeature]
        Preset mappings to index, in order.
    keys : collection of str
        Known key universe; other tag keys do not get a bucket.

    Returns
    -------
    MappingProxyType
        Read-only mapping of tag key -> tuple of presets. A preset appears
        under every known key it declares, or under ``CATCH_ALL_KEY`` if it
        declares none.
    """
    buckets = {}
    for presets in preset_maps:
        for feature in presets.values():
            indexed_keys = [key for key in feature.tags if key in keys]
            if not indexed_keys:
                indexed_keys = [CATCH_ALL_KEY]
            for key in indexed_keys:
                buckets.setdefault(key, []).append(feature)
    return MappingProxyType({key: tuple(features) for key, features in buckets.items()})
