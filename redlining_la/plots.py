import matplotlib.pyplot as plt
import seaborn as sns

from .config import GRADES, HOLC_COLORS


def _grade_palette(grades):
    return {g: HOLC_COLORS.get(g, "lightgrey") for g in grades}


def _finish(fig, path, show):
    plt.tight_layout()
    if path:
        fig.savefig(path, dpi=300, bbox_inches="tight")
    if show:
        plt.show()
    plt.close(fig)


def plot_census_blocks(table, path=None, show=False):
    """Percent of block group pieces per block group code, one bar per grade."""
    fig, ax = plt.subplots(figsize=(10, 6))
    grades = sorted(table["Grade"].unique())
    sns.barplot(data=table, x="Block_group", y="Percent", hue="Grade",
                hue_order=grades, palette=_grade_palette(grades), ax=ax)
    ax.set_xlabel("Census block group")
    ax.set_ylabel("Percent of block groups (%)")
    ax.set_title("Census Block Groups Within HOLC Grades")
    _finish(fig, path, show)
    return fig


def plot_condition_summary(table, path=None, show=False):
    """Grouped bar chart of indicator averages, grades on the x axis."""
    fig, ax = plt.subplots(figsize=(10, 6))
    sns.barplot(data=table, x="Grade", y="Averages", hue="Conditions",
                order=[g for g in GRADES if g in set(table["Grade"])], palette="viridis", ax=ax)
    ax.set_xlabel("HOLC grade")
    ax.set_ylabel("Average (%)")
    ax.set_ylim(0, 100)
    ax.set_title("Current Environmental Conditions by HOLC Grade")
    ax.legend(title=None, loc="upper left")
    _finish(fig, path, show)
    return fig


def plot_bird_observations(table, path=None, show=False):
    fig, ax = plt.subplots(figsize=(8, 6))
    grades = list(table["Grade"])
    ax.bar(range(len(table)), table["percent_observation"],
           color=[HOLC_COLORS.get(g, "lightgrey") for g in grades], edgecolor="black")
    for i, (pct, count) in enumerate(zip(table["percent_observation"], table["Count"])):
        ax.text(i, pct, f"{count:,}", ha="center", va="bottom", fontsize=9)
    ax.set_xticks(range(len(table)))
    ax.set_xticklabels(grades)
    ax.set_xlabel("HOLC grade")
    ax.set_ylabel("Share of bird observations (%)")
    ax.set_title("Bird Observations Within HOLC Grades")
    _finish(fig, path, show)
    return fig


def plot_redlining_map(zones, block_groups, path=None, show=False):
    """HOLC zones coloured by grade on top of the county block groups."""
    fig, ax = plt.subplots(figsize=(12, 10))
    block_groups.plot(ax=ax, color="whitesmoke", edgecolor="lightgrey", linewidth=0.1)

    for grade, zones_in_grade in zones.groupby("grade"):
        zones_in_grade.plot(ax=ax, color=HOLC_COLORS.get(grade, "lightgrey"),
                            edgecolor="black", linewidth=0.2, label=grade)

    handles = [plt.Rectangle((0, 0), 1, 1, color=HOLC_COLORS[g]) for g in GRADES]
    ax.legend(handles, GRADES, title="HOLC grade", loc="lower left")

    minx, miny, maxx, maxy = zones.total_bounds
    ax.set_xlim(minx, maxx)
    ax.set_ylim(miny, maxy)
    ax.set_axis_off()
    ax.set_title("HOLC Redlining Grades in Los Angeles")
    _finish(fig, path, show)
    return fig
