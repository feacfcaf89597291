"""
Preset classification for GeoDataFrames of OpenStreetMap features.

Each row is treated as one mapped object: its non-null tag columns form the
object tags and its shapely geometry decides the geometry class.
"""

import warnings

import geopandas as gpd
import numpy as np
import pandas as pd

from osmpresets.constants import PRESET_COLUMNS, SHAPELY_GEOMETRY_CLASSES
from osmpresets.matching import best_match_with_score


def geometry_class(geom, vertex=False):
    """Return the preset geometry class of a shapely geometry.

    Points become ``'vertex'`` when ``vertex`` is True (a node that is part of
    a way). Returns None for missing, empty or unsupported geometries.
    """
    if geom is None or not hasattr(geom, "geom_type") or geom.is_empty:
        return None
    geometry = SHAPELY_GEOMETRY_CLASSES.get(geom.geom_type)
    if geometry == "point" and vertex:
        return "vertex"
    return geometry


def row_tags(row, tag_columns=None, geometry_col="geometry"):
    """Collect the OSM tags of a row as a str -> str dict, skipping nulls."""
    columns = tag_columns if tag_columns is not None else [c for c in row.index if c != geometry_col]
    tags = {}
    for col in columns:
        if col not in row:
            continue
        value = row[col]
        if isinstance(value, (list, tuple, set, np.ndarray)):
            # osmnx leaves some columns as lists; presets only match scalars
            continue
        if pd.isna(value):
            continue
        tags[str(col)] = str(value)
    return tags


def _classify_row(row, catalog, include_supplemental, tag_columns, vertex_col, geometry_col):
    vertex = bool(row[vertex_col]) if vertex_col is not None and pd.notna(row[vertex_col]) else False
    geometry = geometry_class(row[geometry_col], vertex=vertex)
    if geometry is None:
        return None
    feature, score = best_match_with_score(
        catalog, row_tags(row, tag_columns, geometry_col), geometry, include_supplemental
    )
    if feature is None:
        return (None, None, np.nan)
    return (feature.feature_id, feature.friendly_name(), score)


def classify_features(gdf, catalog, include_supplemental=False, tag_columns=None, vertex_col=None):
    """
    Assign the best matching preset to every feature of a GeoDataFrame.

    Parameters
    ----------
    gdf : gpd.GeoDataFrame
        OSM features with one column per tag key (the layout returned by
        ``osmnx.features_from_bbox``).
    catalog : PresetCatalog
    include_supplemental : bool, default False
        Also match brand presets.
    tag_columns : list of str, optional
        Columns holding tags. Defaults to every column except the geometry.
    vertex_col : str, optional
        Boolean column marking points that are vertices of a way.

    Returns
    -------
    gpd.GeoDataFrame
        Copy of ``gdf`` with ``preset_id``, ``preset_name`` and
        ``preset_score`` columns. Unmatched rows hold NA / NaN.
    """
    result = gdf.copy()
    id_col, name_col, score_col = PRESET_COLUMNS
    if len(result) == 0:
        result[id_col] = pd.Series(dtype=object)
        result[name_col] = pd.Series(dtype=object)
        result[score_col] = pd.Series(dtype=float)
        return result

    if vertex_col is not None and vertex_col not in result.columns:
        raise KeyError(f"vertex_col '{vertex_col}' not found in GeoDataFrame.")
    geometry_col = result.geometry.name
    if tag_columns is not None and vertex_col is not None:
        tag_columns = [c for c in tag_columns if c != vertex_col]
    elif vertex_col is not None:
        tag_columns = [c for c in result.columns if c not in (geometry_col, vertex_col)]

    classifications = result.apply(
        lambda row: _classify_row(row, catalog, include_supplemental, tag_columns, vertex_col, geometry_col),
        axis=1,
    )

    skipped = int(classifications.isna().sum())
    if skipped:
        warnings.warn(f"{skipped} feature(s) have a missing or unsupported geometry and were not classified.")

    result[id_col] = classifications.apply(lambda x: x[0] if isinstance(x, tuple) else None)
    result[name_col] = classifications.apply(lambda x: x[1] if isinstance(x, tuple) else None)
    result[score_col] = classifications.apply(lambda x: x[2] if isinstance(x, tuple) else np.nan).astype(float)
    return result


def get_preset_summary(gdf):
    """Return a dict of preset_id counts."""
    if PRESET_COLUMNS[0] not in gdf.columns or len(gdf) == 0:
        return {}
    return gdf[PRESET_COLUMNS[0]].value_counts().to_dict()


def features_from_records(records, crs="EPSG:4326"):
    """Build a GeoDataFrame from dicts of tags plus a ``geometry`` entry."""
    return gpd.GeoDataFrame(pd.DataFrame.from_records(records), geometry="geometry", crs=crs)
