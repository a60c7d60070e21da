"""
Data Engineering Module for the Venice Listings Report

This module contains the data pipeline organized by stage:
1. load/ - Read the yearly listings snapshots and neighbourhood boundaries
2. clean/ - Tag, combine and clean both snapshots into one table
3. aggregate/ - Neighbourhood summaries and year-over-year comparisons
4. integrate/ - Property matching across years and boundary joins
5. datasets/ - Build every derived report table in one call

Usage:
    from data_engineering.clean import unify_listings
    from data_engineering.integrate import match_properties_yoy
"""

__version__ = "1.0.0"
