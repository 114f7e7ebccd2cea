#!/usr/bin/env python3
"""
Los Angeles Redlining Legacy Analysis
Compares environmental burden and bird observation density across historical HOLC grades.
"""

import traceback
from pathlib import Path

from . import config
from .aggregate import bird_observation_table, census_block_table, condition_summary_table
from .crs import normalize_crs
from .loaders import read_bird_observations, read_ejscreen, read_redlining_zones, require_attributes
from .overlay import add_block_group_code, intersection_overlay
from .plots import (
    plot_bird_observations,
    plot_census_blocks,
    plot_condition_summary,
    plot_redlining_map,
)


def parse_bird_year(value):
    """Year to keep as an int, or None to keep every year."""
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValueError(
            f"Invalid bird observation year {value!r}; "
            "set REDLINING_BIRD_YEAR to a year or leave it empty"
        ) from None


class LosAngelesRedliningAnalysis:
    def __init__(self, data_dir=None, output_dir=None, bird_year=config.BIRD_YEAR):
        self.data_dir = Path(data_dir or config.DATA_DIR)
        self.output_dir = Path(output_dir or config.OUTPUT_DIR)
        self.bird_year = parse_bird_year(bird_year)

    def load_ejscreen(self, path=None, layer=config.EJSCREEN_LAYER):
        """Load EJScreen block groups for Los Angeles County."""
        path = Path(path) if path else self.data_dir / config.EJSCREEN_PATH
        return read_ejscreen(path, layer=layer, county=config.COUNTY_NAME)

    def load_redlining_zones(self, path=None):
        """Load Mapping Inequality HOLC zones for Los Angeles."""
        path = Path(path) if path else self.data_dir / config.REDLINING_PATH
        return read_redlining_zones(path)

    def load_bird_observations(self, path=None):
        """Load GBIF bird observations for the configured year."""
        path = Path(path) if path else self.data_dir / config.BIRDS_PATH
        return read_bird_observations(path, year=self.bird_year)

    def normalize_crs(self, ejscreen, zones, birds):
        """Bring redlining zones and bird observations into the EJScreen CRS."""
        print("Checking coordinate reference systems against EJScreen...")

        zones, zones_reprojected = normalize_crs(ejscreen, zones, "RedliningZones")
        birds, birds_reprojected = normalize_crs(ejscreen, birds, "BirdObservations")

        reprojected = {
            "RedliningZones": zones_reprojected,
            "BirdObservations": birds_reprojected,
        }
        return zones, birds, reprojected

    def join_block_groups(self, zones, ejscreen):
        """Clip block groups to HOLC zones; one row per overlapping (zone, block group)."""
        print("Intersecting HOLC zones with EJScreen block groups...")

        require_attributes(zones, ["grade"], "RedliningZones")
        ejscreen = add_block_group_code(ejscreen)
        joined = intersection_overlay(zones, ejscreen, "RedliningZones", "EJScreen")

        print(f"{joined['ID'].nunique()} of {len(ejscreen)} block groups overlap a HOLC zone")
        return joined

    def join_bird_observations(self, zones, birds):
        """Attach HOLC grades to the bird observations that fall inside a zone."""
        print("Intersecting HOLC zones with bird observations...")

        require_attributes(zones, ["grade"], "RedliningZones")
        joined = intersection_overlay(zones, birds, "RedliningZones", "BirdObservations")

        print(f"{len(joined)} of {len(birds)} bird observations fall within HOLC zones")
        return joined

    def summarize(self, block_groups_by_grade, birds_by_grade):
        """Build the census block, condition summary and bird observation tables."""
        print("\nSummarizing by HOLC grade...")

        return {
            "census_blocks": census_block_table(block_groups_by_grade),
            "conditions": condition_summary_table(block_groups_by_grade),
            "bird_observations": bird_observation_table(birds_by_grade),
        }

    def create_visualizations(self, tables, zones=None, ejscreen=None, show=False):
        """Save bar charts for each summary table, plus a map of the HOLC zones."""
        print("\nCreating visualizations...")

        self.output_dir.mkdir(parents=True, exist_ok=True)
        paths = {
            "census_blocks": self.output_dir / "census_blocks_by_grade.png",
            "conditions": self.output_dir / "conditions_by_grade.png",
            "bird_observations": self.output_dir / "bird_observations_by_grade.png",
        }

        plot_census_blocks(tables["census_blocks"], paths["census_blocks"], show=show)
        plot_condition_summary(tables["conditions"], paths["conditions"], show=show)
        plot_bird_observations(tables["bird_observations"], paths["bird_observations"], show=show)

        if zones is not None and ejscreen is not None:
            paths["map"] = self.output_dir / "holc_grades_map.png"
            plot_redlining_map(zones, ejscreen, paths["map"], show=show)

        for path in paths.values():
            print(f"  Saved {path}")
        return paths

    def generate_report(self, tables):
        """Print the summary tables and key findings, and save the tables as CSV."""
        print("\n" + "=" * 60)
        print("LOS ANGELES REDLINING LEGACY ANALYSIS REPORT")
        print("=" * 60)

        census_blocks = tables["census_blocks"]
        conditions = tables["conditions"]
        birds = tables["bird_observations"]

        print("\nCENSUS BLOCK GROUPS BY GRADE:")
        print(census_blocks.to_string(index=False))

        print("\nCONDITIONS BY GRADE:")
        print(conditions.pivot(index="Grade", columns="Conditions", values="Averages").to_string())

        print("\nBIRD OBSERVATIONS BY GRADE:")
        print(birds.to_string(index=False))

        print("\nKEY FINDINGS:")
        block_share = census_blocks.groupby("Grade")["Percent"].sum()
        if "D" in block_share.index:
            print(f"- {block_share['D']:.2f}% of block group pieces lie in grade D zones")

        bird_share = birds.set_index("Grade")["percent_observation"]
        if "D" in bird_share.index:
            print(f"- {bird_share['D']:.2f}% of bird observations fall in grade D zones")

        by_grade = conditions.set_index(["Conditions", "Grade"])["Averages"]
        for condition in conditions["Conditions"].unique():
            if (condition, "A") in by_grade.index and (condition, "D") in by_grade.index:
                a, d = by_grade[(condition, "A")], by_grade[(condition, "D")]
                print(f"- {condition}: grade D {d:.2f} vs grade A {a:.2f} ({d - a:+.2f})")

        self.output_dir.mkdir(parents=True, exist_ok=True)
        for name, table in tables.items():
            out_path = self.output_dir / f"{name}_by_grade.csv"
            table.to_csv(out_path, index=False)
            print(f"Saved {out_path}")

        return tables


def main():
    """Main analysis execution."""
    analysis = LosAngelesRedliningAnalysis()

    try:
        # Load the three source datasets
        ejscreen = analysis.load_ejscreen()
        zones = analysis.load_redlining_zones()
        birds = analysis.load_bird_observations()

        # EJScreen's CRS is the reference for every overlay
        zones, birds, _ = analysis.normalize_crs(ejscreen, zones, birds)

        # Spatial overlays
        block_groups_by_grade = analysis.join_block_groups(zones, ejscreen)
        birds_by_grade = analysis.join_bird_observations(zones, birds)

        # Aggregate, plot and report
        tables = analysis.summarize(block_groups_by_grade, birds_by_grade)
        analysis.create_visualizations(tables, zones, ejscreen)
        analysis.generate_report(tables)

        print("\nAnalysis complete!")

    except Exception as e:
        print(f"Error during analysis: {e}")
        traceback.print_exc()
        raise


if __name__ == "__main__":
    main()
