"""
Preset feature records and single-candidate scoring.

A preset describes one real-world category (e.g. ``shop/supermarket``) by the
OSM tags an object must carry, the geometries it applies to, and the metadata
used to find it in search. Records are decoded once from the raw preset
dictionaries and are read-only afterwards.
"""

from dataclasses import dataclass
from types import MappingProxyType
from collections.abc import Mapping
from typing import FrozenSet, Optional, Tuple

from osmpresets.constants import (
    AREA_YES_BONUS, BASE_SCORE, DEFAULT_MATCH_SCORE, GEOMETRY_CLASSES,
    ID_SEPARATOR, LOCATION_ALIASES, OPTIONAL_LIST_FIELDS,
    OPTIONAL_STRING_FIELDS, WILDCARD, WORLD_LOCATION
)

# =============================================================================
# DECODING HELPERS
# =============================================================================

def _string_mapping(value, feature_id, field_name):
    # Validate a str -> str mapping and return a read-only copy.
    if not isinstance(value, Mapping):
        raise TypeError(
            f"Preset '{feature_id}': field '{field_name}' must be a mapping, got {type(value).__name__}."
        )
    for key, val in value.items():
        if not isinstance(key, str) or not isinstance(val, str):
            raise TypeError(
                f"Preset '{feature_id}': field '{field_name}' must map strings to strings, "
                f"got {key!r}: {val!r}."
            )
    return MappingProxyType(dict(value))


def _string_list(value, feature_id, field_name):
    if isinstance(value, str) or not isinstance(value, (list, tuple)):
        raise TypeError(
            f"Preset '{feature_id}': field '{field_name}' must be a list of strings, got {type(value).__name__}."
        )
    if not all(isinstance(item, str) for item in value):
        raise TypeError(f"Preset '{feature_id}': field '{field_name}' must contain only strings.")
    return tuple(value)


def convert_location_set(location_set, feature_id=None):
    """Reduce a raw ``locationSet`` to the set of country codes it includes.

    Returns None when the preset is available everywhere: no ``include``
    list, or an include list containing the world code ``"001"``. Region
    aliases such as ``"conus"`` are mapped to their country code.
    """
    if location_set is None:
        return None
    if not isinstance(location_set, Mapping):
        raise TypeError(
            f"Preset '{feature_id}': field 'locationSet' must be a mapping, got {type(location_set).__name__}."
        )
    includes = location_set.get("include")
    if includes is None:
        return None
    return normalize_location_include(_string_list(includes, feature_id, "locationSet.include"))


def normalize_location_include(includes):
    """Map region aliases to country codes; None if the world code is present."""
    if includes is None:
        return None
    codes = []
    for code in includes:
        if code == WORLD_LOCATION:
            return None
        codes.append(LOCATION_ALIASES.get(code, code))
    return frozenset(codes)


def parent_id(feature_id):
    """Return the id one level up the preset hierarchy, or None at the root.

    >>> parent_id("shop/supermarket")
    'shop'
    """
    if feature_id is None or ID_SEPARATOR not in feature_id:
        return None
    return feature_id.rsplit(ID_SEPARATOR, 1)[0]


# =============================================================================
# PRESET FEATURE
# =============================================================================

@dataclass(frozen=True, eq=False)
class PresetFeature:
    """
    A single preset of the catalog.

    Attributes
    ----------
    feature_id : str
        Unique identifier, slash-delimited to encode the hierarchy (``shop/supermarket``).
    tags : Mapping[str, str]
        Tags an object must have. A key ending in ``*`` matches any object key
        with that prefix; a value of ``*`` accepts any value at half weight.
    geometry : frozenset of str
        Geometry classes the preset applies to.
    match_score : float
        Weight added per matched tag.
    add_tags_raw, remove_tags_raw : Mapping[str, str] or None
        Tags as declared by the preset; see ``add_tags`` and ``remove_tags``
        for the effective values.
    location_include : frozenset of str or None
        Country codes where the preset is offered, None for everywhere.
    name : str or None
        Display name.
    terms : tuple of str
        Extra search terms.
    searchable : bool
        Whether the preset is offered in search results.
    is_supplemental : bool
        True for brand presets from the name-suggestion dataset.
    fields, more_fields : tuple of str or None
        Editor field ids.
    icon : str or None
        Map icon name.
    logo_url : str or None
        Brand logo URL.
    reference : Mapping[str, str] or None
        Wiki reference for the preset.
    """

    feature_id: str
    tags: Mapping[str, str]
    geometry: FrozenSet[str] = frozenset()
    match_score: float = DEFAULT_MATCH_SCORE
    add_tags_raw: Optional[Mapping[str, str]] = None
    remove_tags_raw: Optional[Mapping[str, str]] = None
    location_include: Optional[FrozenSet[str]] = None
    name: Optional[str] = None
    terms: Tuple[str, ...] = ()
    searchable: bool = True
    is_supplemental: bool = False
    fields: Optional[Tuple[str, ...]] = None
    more_fields: Optional[Tuple[str, ...]] = None
    icon: Optional[str] = None
    logo_url: Optional[str] = None
    reference: Optional[Mapping[str, str]] = None

    def __post_init__(self):
        if not isinstance(self.feature_id, str) or not self.feature_id:
            raise ValueError(f"Preset id must be a non-empty string, got {self.feature_id!r}.")
        if self.tags is None:
            raise ValueError(f"Preset '{self.feature_id}' is missing required field 'tags'.")
        if isinstance(self.match_score, bool) or not isinstance(self.match_score, (int, float)):
            raise TypeError(f"Preset '{self.feature_id}': matchScore must be a number.")
        if not self.match_score > 0:
            raise ValueError(f"Preset '{self.feature_id}': matchScore must be positive, got {self.match_score}.")

        # Freeze containers so the record can be shared between threads.
        object.__setattr__(self, "tags", _string_mapping(self.tags, self.feature_id, "tags"))
        object.__setattr__(self, "geometry", frozenset(self.geometry))
        object.__setattr__(self, "match_score", float(self.match_score))
        object.__setattr__(self, "terms", tuple(self.terms))
        for attr in ("add_tags_raw", "remove_tags_raw", "reference"):
            value = getattr(self, attr)
            if value is not None:
                object.__setattr__(self, attr, _string_mapping(value, self.feature_id, attr))
        if isinstance(self.location_include, str):
            raise TypeError(f"Preset '{self.feature_id}': location_include must be a collection of codes.")
        object.__setattr__(self, "location_include", normalize_location_include(self.location_include))

        unknown = self.geometry - set(GEOMETRY_CLASSES)
        if unknown:
            raise ValueError(f"Preset '{self.feature_id}': unknown geometry {sorted(unknown)}.")

    @classmethod
    def from_dict(cls, feature_id, raw, is_supplemental=False):
        """
        Decode a raw preset dictionary (iD preset JSON layout).

        Parameters
        ----------
        feature_id : str
            Key of the preset in its source mapping.
        raw : Mapping
            Decoded preset fields. ``tags`` is mandatory; all other fields
            are optional.
        is_supplemental : bool, default False
            Mark the preset as coming from the brand dataset.

        Returns
        -------
        PresetFeature

        Raises
        ------
        ValueError
            If ``tags`` is missing or a value is out of range.
        TypeError
            If ``raw`` or one of its fields has the wrong type.
        """
        if not isinstance(raw, Mapping):
            raise TypeError(f"Preset '{feature_id}' must be a mapping, got {type(raw).__name__}.")
        if "tags" not in raw or raw["tags"] is None:
            raise ValueError(f"Preset '{feature_id}' is missing required field 'tags'.")

        kwargs = {}
        geometry = raw.get("geometry")
        if geometry is not None:
            kwargs["geometry"] = _string_list(geometry, feature_id, "geometry")

        for raw_key, attr in OPTIONAL_LIST_FIELDS.items():
            if raw.get(raw_key) is not None:
                kwargs[attr] = _string_list(raw[raw_key], feature_id, raw_key)

        for raw_key, attr in OPTIONAL_STRING_FIELDS.items():
            value = raw.get(raw_key)
            if value is not None:
                if not isinstance(value, str):
                    raise TypeError(f"Preset '{feature_id}': field '{raw_key}' must be a string.")
                kwargs[attr] = value

        searchable = raw.get("searchable", True)
        if not isinstance(searchable, bool):
            raise TypeError(f"Preset '{feature_id}': field 'searchable' must be a boolean.")

        return cls(
            feature_id=feature_id,
            tags=raw["tags"],
            match_score=DEFAULT_MATCH_SCORE if raw.get("matchScore") is None else raw["matchScore"],
            add_tags_raw=raw.get("addTags"),
            remove_tags_raw=raw.get("removeTags"),
            location_include=convert_location_set(raw.get("locationSet"), feature_id),
            reference=raw.get("reference"),
            searchable=searchable,
            is_supplemental=is_supplemental,
            **kwargs,
        )

    def __str__(self):
        return self.feature_id

    def __repr__(self):
        return f"PresetFeature({self.feature_id!r})"

    @property
    def add_tags(self):
        """Tags applied when the preset is assigned; defaults to ``tags``."""
        return self.add_tags_raw if self.add_tags_raw is not None else self.tags

    @property
    def remove_tags(self):
        """Tags removed when the preset is unassigned; defaults to ``add_tags``."""
        return self.remove_tags_raw if self.remove_tags_raw is not None else self.add_tags

    @property
    def parent_id(self):
        return parent_id(self.feature_id)

    def friendly_name(self):
        return self.name if self.name is not None else self.feature_id

    def is_available_in(self, country):
        # No filter or no restriction always passes.
        if country is None or self.location_include is None:
            return True
        return country in self.location_include

    def matches_search_text(self, text):
        """Case-insensitive substring match against id, name and terms."""
        if not text:
            return False
        needle = text.lower()
        if needle in self.feature_id.lower():
            return True
        if self.name is not None and needle in self.name.lower():
            return True
        return any(needle in term.lower() for term in self.terms)

    def score(self, object_tags, geometry):
        """
        Score how well this preset describes an object.

        Parameters
        ----------
        object_tags : Mapping[str, str] or None
            Tags of the mapped object.
        geometry : str
            Geometry class of the object, one of ``GEOMETRY_CLASSES``.

        Returns
        -------
        float
            0.0 when the preset does not apply, otherwise ``1.0`` plus
            ``match_score`` per exactly matched tag, half of it per wildcard
            value match, ``0.1`` for an implied ``area=yes``, and
            ``match_score`` per extra ``addTags`` entry the object carries.
        """
        if object_tags is None or geometry not in self.geometry:
            return 0.0

        total = BASE_SCORE
        seen = set()
        for key, expected in self.tags.items():
            seen.add(key)

            if key.endswith(WILDCARD):
                prefix = key[:-1]
                value = next((v for k, v in object_tags.items() if k.startswith(prefix)), None)
            else:
                value = object_tags.get(key)

            if value is not None:
                if value == expected:
                    total += self.match_score
                    continue
                if expected == WILDCARD:
                    total += self.match_score / 2
                    continue
            elif key == "area" and expected == "yes" and geometry == "area":
                total += AREA_YES_BONUS
                continue
            return 0.0

        # Extra addTags the object already carries make this preset more specific.
        if self.add_tags_raw is not None:
            for key, value in self.add_tags_raw.items():
                if key not in seen and object_tags.get(key) == value:
                    total += self.match_score
        return total
