"""
Los Angeles redlining, environmental burden and bird observation analysis.
Joins HOLC redlining zones with EJScreen block groups and GBIF bird sightings.
"""

__version__ = "0.1.0"
