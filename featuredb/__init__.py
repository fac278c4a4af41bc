# =============================================================================
# featuredb
# =============================================================================
# Dynamic PostGIS schema creation and transactional bulk loading for the
# feature import pipeline. See individual sub-packages for details.
# =============================================================================

"""
Feature database library.

Sub-packages:
- models: configuration, abstract mapping and table spec models
- sql: type mapping and SQL statement generation
- postgis: schema initialization, batch inserts and the database handle
"""

__version__ = "0.1.0"
