import matplotlib

matplotlib.use("Agg")

import geopandas as gpd
import pytest
from shapely.geometry import Point, box

# California Albers, metres
CRS = "EPSG:3310"


def make_zones(grades_and_boxes, crs=CRS):
    grades, boxes = zip(*grades_and_boxes)
    return gpd.GeoDataFrame({"grade": list(grades)}, geometry=list(boxes), crs=crs)


def grid_points(minx, miny, n, step=1.0, per_row=10):
    return [Point(minx + 0.5 + (i % per_row) * step, miny + 0.5 + (i // per_row) * step)
            for i in range(n)]


@pytest.fixture
def zones():
    """A grade C square next to a grade D square, sharing the edge x=10."""
    return make_zones([("C", box(0, 0, 10, 10)), ("D", box(10, 0, 20, 10))])


@pytest.fixture
def block_groups():
    """Two block groups fully inside the grade C square, one outside everything."""
    return gpd.GeoDataFrame(
        {
            "ID": ["060371234561", "060371234562", "060371234563"],
            "CNTY_NAME": ["Los Angeles County"] * 3,
            "LOWINCPCT": [0.25, 0.75, 0.5],
            "P_PM25": [60.0, 80.0, 10.0],
            "P_LIFEEXPPCT": [40.0, float("nan"), 5.0],
        },
        geometry=[box(1, 1, 4, 4), box(5, 5, 9, 9), box(50, 50, 60, 60)],
        crs=CRS,
    )


@pytest.fixture
def birds():
    """60 observations in the grade C square, 40 in grade D, 5 outside."""
    points = grid_points(0, 0, 60) + grid_points(10, 0, 40) + grid_points(100, 100, 5)
    return gpd.GeoDataFrame(
        {"species": ["Sayornis nigricans"] * len(points), "year": [2022] * len(points)},
        geometry=points,
        crs=CRS,
    )
