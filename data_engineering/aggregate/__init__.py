"""Aggregation modules"""

from .neighbourhood_summary import (
    pct_change,
    summarize_neighbourhoods,
    compare_neighbourhoods_yoy,
    summarize_neighbourhood_groups,
    describe_listings_by_year
)

__all__ = [
    'pct_change',
    'summarize_neighbourhoods',
    'compare_neighbourhoods_yoy',
    'summarize_neighbourhood_groups',
    'describe_listings_by_year'
]
