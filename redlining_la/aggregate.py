"""
Grouped counts, percentages and means over overlay results, plus the
three summary tables the report and charts are built from.
"""

import pandas as pd

from .config import CONDITION_LABELS, PERCENT_COLUMNS
from .loaders import require_attributes


def _as_list(keys):
    return [keys] if isinstance(keys, str) else list(keys)


def group_count_percent(records, keys, within=None, count_name="count", percent_name="percent"):
    """
    Count records per distinct key and express each count as a percentage.

    Percentages are taken over all records unless `within` names outer
    key(s), in which case each outer group sums to 100 on its own.
    Records with a null key are left out.
    """
    keys = _as_list(keys)
    require_attributes(records, keys, "records")

    counts = (
        pd.DataFrame(records[keys])
        .groupby(keys, dropna=True, sort=True, observed=True)
        .size()
        .reset_index(name=count_name)
    )

    if within:
        totals = counts.groupby(_as_list(within))[count_name].transform("sum")
    else:
        totals = counts[count_name].sum()

    counts[percent_name] = counts[count_name] / totals * 100
    return counts


def group_mean(records, keys, columns):
    """
    Mean of each numeric column per key, skipping missing values.

    A group whose values are all missing gets NaN for that column.
    """
    keys = _as_list(keys)
    columns = _as_list(columns)
    require_attributes(records, keys + columns, "records")

    values = pd.DataFrame(records[keys + columns])
    values[columns] = values[columns].astype(float)
    return values.groupby(keys, dropna=True, sort=True, observed=True)[columns].mean().reset_index()


def wide_to_long(table, keys, columns, var_name="variable", value_name="value", labels=None):
    """Turn one row per key with N value columns into N rows per key."""
    keys = _as_list(keys)
    columns = _as_list(columns)
    require_attributes(table, keys + columns, "table")

    long = table.melt(id_vars=keys, value_vars=columns, var_name=var_name, value_name=value_name)

    # Keep conditions in column order within each key
    long[var_name] = pd.Categorical(long[var_name], categories=columns, ordered=True)
    long = long.sort_values(keys + [var_name], kind="stable").reset_index(drop=True)
    long[var_name] = long[var_name].astype(str)

    if labels:
        long[var_name] = long[var_name].map(lambda c: labels.get(c, c))
    return long


def census_block_table(block_groups_by_grade):
    """Share of block group pieces per (grade, block group code)."""
    table = group_count_percent(block_groups_by_grade, ["grade", "Block_Group_Code"])
    table = table.rename(columns={
        "grade": "Grade",
        "Block_Group_Code": "Block_group",
        "percent": "Percent",
    })
    table["Percent"] = table["Percent"].round(2)
    return table[["Grade", "Block_group", "Percent"]]


def condition_summary_table(block_groups_by_grade, labels=CONDITION_LABELS):
    """Average of each environmental-justice indicator per grade, in long form."""
    columns = list(labels)
    means = group_mean(block_groups_by_grade, "grade", columns)
    for col in PERCENT_COLUMNS:
        if col in means.columns:
            means[col] = means[col] * 100

    table = wide_to_long(means, "grade", columns, var_name="Conditions",
                         value_name="Averages", labels=labels)
    table = table.rename(columns={"grade": "Grade"})
    table["Averages"] = table["Averages"].round(2)
    return table[["Grade", "Conditions", "Averages"]]


def bird_observation_table(birds_by_grade):
    table = group_count_percent(birds_by_grade, "grade", count_name="Count",
                                percent_name="percent_observation")
    table = table.rename(columns={"grade": "Grade"})
    table["Count"] = table["Count"].astype(int)
    table["percent_observation"] = table["percent_observation"].round(2)
    return table[["Grade", "Count", "percent_observation"]]
