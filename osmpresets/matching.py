"""
Find the preset that best describes a mapped object.
"""

from osmpresets.constants import CATCH_ALL_KEY, GEOMETRY_CLASSES


def best_match_with_score(catalog, object_tags, geometry, include_supplemental=False):
    """
    Score every indexed candidate for an object and keep the best one.

    Parameters
    ----------
    catalog : PresetCatalog
    object_tags : Mapping[str, str] or None
        Tags of the object. None is treated as no tags.
    geometry : str
        One of ``GEOMETRY_CLASSES``. Any other value matches nothing.
    include_supplemental : bool, default False
        Also consider brand presets.

    Returns
    -------
    tuple
        (PresetFeature or None, float). The score is 0.0 when nothing matched.

    Notes
    -----
    Only the buckets of the object's own keys plus the catch-all bucket are
    scanned. A candidate replaces the current best only with a strictly higher
    score, so among equal top scores the first one scanned wins; bucket order
    is not a defined ranking and callers should not rely on which one that is.
    """
    if geometry not in GEOMETRY_CLASSES:
        return None, 0.0
    if object_tags is None:
        object_tags = {}

    index = catalog.index(include_supplemental)
    best_feature = None
    best_score = 0.0
    for key in [*object_tags, CATCH_ALL_KEY]:
        for feature in index.get(key, ()):
            score = feature.score(object_tags, geometry)
            if score > best_score:
                best_score = score
                best_feature = feature
    return best_feature, best_score


def best_match(catalog, object_tags, geometry, include_supplemental=False):
    """Return the best matching preset for an object, or None if nothing matches."""
    return best_match_with_score(catalog, object_tags, geometry, include_supplemental)[0]
