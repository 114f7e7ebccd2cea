import os
from pathlib import Path

# Configuration
DATA_DIR = Path(os.environ.get("REDLINING_DATA_DIR", "./data"))
OUTPUT_DIR = Path(os.environ.get("REDLINING_OUTPUT_DIR", "./output"))

# Input locations, relative to DATA_DIR
EJSCREEN_PATH = Path("ejscreen") / "EJSCREEN_2023_BG_StatePct_with_AS_CNMI_GU_VI.gdb"
EJSCREEN_LAYER = "EJSCREEN_StatePctiles_with_AS_CNMI_GU_VI"
REDLINING_PATH = Path("mapping-inequality") / "mapping-inequality-los-angeles.json"
BIRDS_PATH = Path("gbif-birds-LA") / "gbif-birds-LA.shp"

COUNTY_NAME = "Los Angeles County"

# Observation year to keep; an empty value keeps every year
BIRD_YEAR = os.environ.get("REDLINING_BIRD_YEAR", "2022")

# HOLC grades, A = "Best" through D = "Hazardous"
GRADES = ("A", "B", "C", "D")

HOLC_COLORS = {
    "A": "#76a865",
    "B": "#7cb5bd",
    "C": "#ffff00",
    "D": "#d9838d",
}

EJSCREEN_COLUMNS = ["ID", "CNTY_NAME", "LOWINCPCT", "P_PM25", "P_LIFEEXPPCT"]

# Indicator column -> label used in the condition summary
CONDITION_LABELS = {
    "LOWINCPCT": "% low income",
    "P_PM25": "Percentile for PM 2.5",
    "P_LIFEEXPPCT": "Percentile for low life expectancy",
}

# Fractions rescaled to percentages so every condition shares one axis
PERCENT_COLUMNS = ["LOWINCPCT"]
