import geopandas as gpd

from .config import EJSCREEN_COLUMNS
from .errors import MissingAttributeError


def require_attributes(gdf, columns, name):
    """Raise MissingAttributeError if any of `columns` is absent from `gdf`."""
    missing = [col for col in columns if col not in gdf.columns]
    if missing:
        raise MissingAttributeError(name, missing)
    return gdf


def _read(path, description, **kwargs):
    if not path.exists():
        raise FileNotFoundError(
            f"{description} not found at {path}. "
            f"Please ensure the file is in {path.parent}."
        )
    return gpd.read_file(path, **kwargs)


def read_ejscreen(path, layer=None, county="Los Angeles County"):
    """Load EJScreen block groups and keep those in one county."""
    print(f"Loading EJScreen block groups from {path}...")

    kwargs = {"layer": layer} if layer else {}
    ejscreen = _read(path, "EJScreen data", **kwargs)
    require_attributes(ejscreen, EJSCREEN_COLUMNS, "EJScreen")

    county_bg = ejscreen[ejscreen["CNTY_NAME"] == county].copy()
    if len(county_bg) == 0:
        raise ValueError(f"No EJScreen block groups found for {county}")

    print(f"Loaded {len(county_bg)} block groups in {county}")
    return county_bg


def read_redlining_zones(path):
    """Load HOLC redlining polygons."""
    print(f"Loading HOLC redlining zones from {path}...")

    zones = _read(path, "Redlining GeoJSON")
    require_attributes(zones, ["grade"], "RedliningZones")

    print(f"Loaded {len(zones)} HOLC zones")
    print(f"Zones per grade: {zones['grade'].value_counts(dropna=False).sort_index().to_dict()}")
    return zones


def read_bird_observations(path, year=None):
    """Load bird observation points, optionally restricted to a single year."""
    print(f"Loading bird observations from {path}...")

    birds = _read(path, "Bird observation shapefile")

    if year is not None:
        require_attributes(birds, ["year"], "BirdObservations")
        birds = birds[birds["year"] == year].copy()
        print(f"Kept {len(birds)} observations from {year}")
    else:
        print(f"Loaded {len(birds)} observations")

    return birds
