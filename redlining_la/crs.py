from pyproj.exceptions import CRSError, ProjError

from .errors import UnknownCRSError


def resolve_crs(gdf, name="collection"):
    """Return the pyproj CRS of `gdf`, or raise UnknownCRSError."""
    if gdf.crs is None:
        raise UnknownCRSError(f"{name} has no coordinate reference system")
    return gdf.crs


def normalize_crs(reference, other, name="collection"):
    """
    Bring `other` into the CRS of `reference`.

    Returns a tuple (collection, reprojected). When the two already match
    `other` itself is returned with reprojected=False. Otherwise a new,
    reprojected GeoDataFrame is returned. Neither input is modified.
    """
    ref_crs = resolve_crs(reference, "reference collection")
    other_crs = resolve_crs(other, name)

    if other_crs == ref_crs:
        print(f"{name} already in {ref_crs.to_string()}")
        return other, False

    print(f"Reprojecting {name} from {other_crs.to_string()} to {ref_crs.to_string()}")
    try:
        reprojected = other.to_crs(ref_crs)
    except (CRSError, ProjError) as e:
        raise UnknownCRSError(f"Cannot transform {name} to {ref_crs.to_string()}: {e}") from e

    return reprojected, True
