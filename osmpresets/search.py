"""
Free-text search over the preset catalog.
"""


def features_matching_text(catalog, text, country=None):
    """
    Return the searchable presets whose id, name or terms contain ``text``.

    Parameters
    ----------
    catalog : PresetCatalog
    text : str or None
        Search text, matched case-insensitively as a substring. None or an
        empty string matches nothing.
    country : str, optional
        Country code. Presets restricted to other countries are dropped;
        unrestricted presets always pass.

    Returns
    -------
    list of PresetFeature
        Generic presets first, then brand presets, each in catalog order.
    """
    if not text:
        return []
    return [
        feature for feature in catalog.iter_features(include_supplemental=True)
        if feature.searchable
        and feature.is_available_in(country)
        and feature.matches_search_text(text)
    ]
