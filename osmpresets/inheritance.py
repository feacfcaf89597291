"""
Field inheritance along the preset hierarchy.

Preset ids are paths: ``shop/supermarket`` inherits from ``shop``. A preset
that does not define a field takes it from its nearest ancestor that does.
Only the generic presets take part; brand presets are never ancestors.
"""

from osmpresets.feature import parent_id


# Named projections from a preset to one of its inheritable fields.
def NAME(feature):
    return feature.name


def ICON(feature):
    return feature.icon


def FIELDS(feature):
    return feature.fields


def MORE_FIELDS(feature):
    return feature.more_fields


def REFERENCE(feature):
    return feature.reference


PROJECTIONS = {
    "name": NAME,
    "icon": ICON,
    "fields": FIELDS,
    "more_fields": MORE_FIELDS,
    "reference": REFERENCE,
}


def _resolve_projection(extract):
    if callable(extract):
        return extract
    try:
        return PROJECTIONS[extract]
    except (KeyError, TypeError):
        raise ValueError(
            f"Unknown projection {extract!r}. Pass a callable or one of {sorted(PROJECTIONS)}."
        ) from None


def inherited_value(catalog, feature_id, extract):
    """
    Walk from ``feature_id`` up its ancestors and return the first value found.

    Parameters
    ----------
    catalog : PresetCatalog
    feature_id : str or None
        Id to start from. The preset itself is checked first.
    extract : callable or str
        Projection from a preset to an optional value, or the name of one of
        the built-in projections in ``PROJECTIONS``.

    Returns
    -------
    object or None
        The first non-None projection, or None when the root is passed
        without finding one.

    Examples
    --------
    >>> inherited_value(catalog, "shop/supermarket/big", "name")  # doctest: +SKIP
    'Shop'
    """
    extract = _resolve_projection(extract)
    presets = catalog.primary
    while feature_id is not None:
        feature = presets.get(feature_id)
        if feature is not None:
            value = extract(feature)
            if value is not None:
                return value
        feature_id = parent_id(feature_id)
    return None


def summary(catalog, feature):
    """Name of the category a preset belongs to (its parent's inherited name)."""
    return inherited_value(catalog, parent_id(feature.feature_id), NAME)


def inherited_icon(catalog, feature):
    """Icon of the preset, or of its nearest ancestor that has one."""
    if feature.icon is not None:
        return feature.icon
    return inherited_value(catalog, feature.feature_id, ICON)
