"""
Spatial overlay of two feature collections.

Pairs are found with the right collection's R-tree and then checked by
computing the actual intersection, so features that only touch never
produce a row. Polygon/polygon pairs keep the clipped polygon and require
a positive intersection area. Polygon/point pairs keep the point unchanged,
and a point lying on a polygon boundary matches every polygon it touches.
"""

import warnings

import geopandas as gpd
import numpy as np
import pandas as pd
import shapely
from shapely.ops import unary_union

from .crs import resolve_crs
from .errors import CRSMismatchError, EmptyIntersectionWarning
from .loaders import require_attributes

POINT_TYPES = ("Point", "MultiPoint")
POLYGON_TYPES = ("Polygon", "MultiPolygon")


def _drop_empty(gdf):
    geoms = gdf.geometry
    return gdf[geoms.notna() & ~geoms.is_empty]


def _repair(gdf, polygons_only=False):
    """Fix invalid geometries, e.g. self-intersecting HOLC rings, with make_valid."""
    invalid = ~gdf.geometry.is_valid
    if not invalid.any():
        return gdf

    print(f"Repairing {invalid.sum()} invalid geometries")
    repaired = gdf.geometry.copy()
    fixed = repaired[invalid].make_valid()
    if polygons_only:
        fixed = gpd.GeoSeries([_polygonal_part(g) for g in fixed], index=fixed.index, crs=fixed.crs)
    repaired[invalid] = fixed
    return _drop_empty(gdf.set_geometry(repaired))


def _polygonal_part(geom):
    """Return the area-bearing part of an intersection result, or None."""
    if geom is None or geom.is_empty:
        return None
    if geom.geom_type in POLYGON_TYPES:
        return geom

    parts = [g for g in shapely.get_parts(geom) if g.geom_type in POLYGON_TYPES]
    if not parts:
        return None
    if len(parts) == 1:
        return parts[0]
    return unary_union(parts)


def _attributes(gdf, positions):
    attrs = pd.DataFrame(gdf.drop(columns=gdf.geometry.name))
    return attrs.iloc[positions].reset_index(drop=True)


def intersection_overlay(left, right, left_name="left", right_name="right"):
    """
    Intersect every polygon in `left` with every feature of `right`.

    One row is produced per (left, right) pair with a non-empty
    intersection, ordered by the position of the left feature and then of
    the right feature. Attributes are the union of both rows; where a
    column exists on both sides the right-hand value is kept.
    """
    left_crs = resolve_crs(left, left_name)
    right_crs = resolve_crs(right, right_name)
    if left_crs != right_crs:
        raise CRSMismatchError(
            f"{left_name} ({left_crs.to_string()}) and {right_name} "
            f"({right_crs.to_string()}) must share one CRS before overlay"
        )

    left = _repair(_drop_empty(left), polygons_only=True)
    right = _repair(_drop_empty(right))

    non_polygons = ~left.geom_type.isin(POLYGON_TYPES)
    if non_polygons.any():
        raise ValueError(
            f"{left_name} must contain only polygons, found "
            f"{sorted(left.geom_type[non_polygons].unique())}"
        )

    if len(left) and len(right):
        left_pos, right_pos = right.sindex.query(left.geometry.values, predicate="intersects")
    else:
        left_pos = right_pos = np.array([], dtype=int)

    order = np.lexsort((right_pos, left_pos))
    left_pos, right_pos = left_pos[order], right_pos[order]

    left_geoms = np.asarray(left.geometry.values, dtype=object)[left_pos]
    right_geoms = np.asarray(right.geometry.values, dtype=object)[right_pos]
    is_point = right.geom_type.isin(POINT_TYPES).to_numpy()[right_pos]

    clipped = shapely.intersection(left_geoms, right_geoms)

    geoms = []
    keep = np.zeros(len(left_pos), dtype=bool)
    for i, geom in enumerate(clipped):
        if is_point[i]:
            geoms.append(right_geoms[i])
            keep[i] = True
            continue
        # Touching polygons intersect in a line or point, which has no area
        part = _polygonal_part(geom)
        if part is not None and part.area > 0:
            geoms.append(part)
            keep[i] = True

    left_attrs = _attributes(left, left_pos[keep])
    right_attrs = _attributes(right, right_pos[keep])
    left_attrs = left_attrs.drop(columns=[c for c in left_attrs.columns if c in right_attrs.columns])
    attrs = pd.concat([left_attrs, right_attrs], axis=1)

    result = gpd.GeoDataFrame(attrs, geometry=gpd.GeoSeries(geoms, crs=left_crs))

    print(f"Overlay of {left_name} with {right_name}: kept {len(result)} of "
          f"{len(left_pos)} candidate pairs")

    if len(result) == 0:
        warnings.warn(
            f"No {right_name} features intersect any {left_name} polygon",
            EmptyIntersectionWarning,
            stacklevel=2,
        )

    return result


def add_block_group_code(gdf, id_column="ID"):
    """Return a copy of `gdf` with Block_Group_Code, the last character of the block group ID."""
    require_attributes(gdf, [id_column], "block groups")
    out = gdf.copy()
    ids = out[id_column]
    out["Block_Group_Code"] = ids.astype(str).str[-1].where(ids.notna())
    return out
