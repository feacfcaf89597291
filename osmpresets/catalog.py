"""
Preset catalog: the generic presets, the brand (name-suggestion) presets, and
the two tag indexes derived from them.
"""

from collections.abc import Mapping
from dataclasses import replace
from types import MappingProxyType

from osmpresets.constants import CATCH_ALL_KEY
from osmpresets.feature import PresetFeature
from osmpresets.tag_index import build_tag_index, known_keys


def _decode_presets(raw_presets, is_supplemental):
    if raw_presets is None:
        return {}
    if not isinstance(raw_presets, Mapping):
        raise TypeError(f"Preset collection must be a mapping of id -> preset, got {type(raw_presets).__name__}.")
    presets = {}
    for feature_id, raw in raw_presets.items():
        if isinstance(raw, PresetFeature):
            if raw.feature_id != feature_id:
                raise ValueError(f"Preset stored under '{feature_id}' has id '{raw.feature_id}'.")
            if raw.is_supplemental != is_supplemental:
                raw = replace(raw, is_supplemental=is_supplemental)
            presets[feature_id] = raw
        else:
            presets[feature_id] = PresetFeature.from_dict(feature_id, raw, is_supplemental=is_supplemental)
    return presets


class PresetCatalog:
    """
    Read-only collection of presets with tag indexes for matching.

    The catalog is built in one step; any invalid preset aborts construction
    with ``ValueError`` or ``TypeError``, so a partially built catalog is never
    observable. After construction nothing is mutated and all read methods may
    be called from several threads at once.

    Parameters
    ----------
    presets : Mapping[str, dict or PresetFeature]
        Generic presets keyed by id, as decoded from ``presets.json``.
    supplemental_presets : Mapping[str, dict or PresetFeature], optional
        Brand presets keyed by id. Ids must not collide with ``presets``.

    Attributes
    ----------
    primary : Mapping[str, PresetFeature]
    supplemental : Mapping[str, PresetFeature]
    known_keys : Counter
        Top-level id segments of the generic presets; tag keys that get their
        own index bucket.
    """

    def __init__(self, presets, supplemental_presets=None):
        primary = _decode_presets(presets, is_supplemental=False)
        supplemental = _decode_presets(supplemental_presets, is_supplemental=True)

        overlap = primary.keys() & supplemental.keys()
        if overlap:
            raise ValueError(
                f"Preset ids present in both the generic and supplemental presets: {sorted(overlap)}"
            )

        keys = known_keys(primary)
        primary_index = build_tag_index([primary], keys)
        combined_index = build_tag_index([primary, supplemental], keys)

        self._primary = MappingProxyType(primary)
        self._supplemental = MappingProxyType(supplemental)
        self._known_keys = keys
        self._primary_index = primary_index
        self._combined_index = combined_index

    @property
    def primary(self):
        return self._primary

    @property
    def supplemental(self):
        return self._supplemental

    @property
    def known_keys(self):
        # Copy so callers cannot alter the universe used by the indexes.
        return self._known_keys.copy()

    def index(self, include_supplemental=False):
        """Return the tag index over generic presets, or generic plus brand presets."""
        return self._combined_index if include_supplemental else self._primary_index

    def rebuild_index(self, include_supplemental=False):
        """Build a fresh index from the current presets without replacing the stored one."""
        preset_maps = [self._primary, self._supplemental] if include_supplemental else [self._primary]
        return build_tag_index(preset_maps, self._known_keys)

    def catch_all(self, include_supplemental=False):
        return self.index(include_supplemental).get(CATCH_ALL_KEY, ())

    def feature_for_id(self, feature_id):
        """Look up a preset by id, generic presets first. Returns None if absent."""
        feature = self._primary.get(feature_id)
        if feature is None:
            feature = self._supplemental.get(feature_id)
        return feature

    def iter_features(self, include_supplemental=True):
        """Yield generic presets, then brand presets if requested."""
        yield from self._primary.values()
        if include_supplemental:
            yield from self._supplemental.values()

    def __contains__(self, feature_id):
        return feature_id in self._primary or feature_id in self._supplemental

    def __len__(self):
        return len(self._primary) + len(self._supplemental)

    def __repr__(self):
        return f"PresetCatalog({len(self._primary)} presets, {len(self._supplemental)} supplemental)"
