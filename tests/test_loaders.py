import pytest

from redlining_la.errors import MissingAttributeError
from redlining_la.loaders import (
    read_bird_observations,
    read_ejscreen,
    read_redlining_zones,
    require_attributes,
)


def test_read_ejscreen_keeps_one_county(tmp_path, block_groups):
    block_groups.loc[2, "CNTY_NAME"] = "Orange County"
    path = tmp_path / "ejscreen.gpkg"
    block_groups.to_file(path, driver="GPKG")

    result = read_ejscreen(path, county="Los Angeles County")

    assert list(result["ID"]) == ["060371234561", "060371234562"]
    assert result.crs.to_epsg() == 3310


def test_read_ejscreen_requires_indicator_columns(tmp_path, block_groups):
    path = tmp_path / "ejscreen.gpkg"
    block_groups.drop(columns="P_PM25").to_file(path, driver="GPKG")

    with pytest.raises(MissingAttributeError, match="P_PM25"):
        read_ejscreen(path)


def test_read_ejscreen_with_no_rows_for_county(tmp_path, block_groups):
    path = tmp_path / "ejscreen.gpkg"
    block_groups.to_file(path, driver="GPKG")

    with pytest.raises(ValueError, match="Kern County"):
        read_ejscreen(path, county="Kern County")


def test_read_redlining_zones(tmp_path, zones):
    path = tmp_path / "zones.gpkg"
    zones.to_file(path, driver="GPKG")

    result = read_redlining_zones(path)

    assert list(result["grade"]) == ["C", "D"]


def test_read_redlining_zones_requires_grade(tmp_path, zones):
    path = tmp_path / "zones.gpkg"
    zones.rename(columns={"grade": "holc_grade"}).to_file(path, driver="GPKG")

    with pytest.raises(MissingAttributeError, match="grade"):
        read_redlining_zones(path)


def test_read_bird_observations_filters_year(tmp_path, birds):
    birds.loc[:9, "year"] = 2021
    path = tmp_path / "birds.gpkg"
    birds.to_file(path, driver="GPKG")

    assert len(read_bird_observations(path)) == len(birds)
    assert len(read_bird_observations(path, year=2022)) == len(birds) - 10


def test_year_filter_requires_year_column(tmp_path, birds):
    path = tmp_path / "birds.gpkg"
    birds.drop(columns="year").to_file(path, driver="GPKG")

    with pytest.raises(MissingAttributeError, match="year"):
        read_bird_observations(path, year=2022)


def test_missing_file_names_its_directory(tmp_path):
    path = tmp_path / "elsewhere" / "nowhere.json"

    with pytest.raises(FileNotFoundError) as excinfo:
        read_redlining_zones(path)

    assert str(path.parent) in str(excinfo.value)
    assert "'data' directory" not in str(excinfo.value)


def test_require_attributes_names_every_missing_column(zones):
    with pytest.raises(MissingAttributeError) as excinfo:
        require_attributes(zones, ["grade", "ID", "CNTY_NAME"], "zones")

    assert excinfo.value.missing == ["ID", "CNTY_NAME"]
    assert "zones" in str(excinfo.value)
