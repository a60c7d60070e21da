"""
Reusable plotting and mapping utilities for the report
"""

from .charts import (
    create_price_histogram,
    create_room_type_boxplot,
    create_group_count_chart,
    create_neighbourhood_change_chart,
    create_property_change_scatter
)

from .maps import (
    format_or_no_data,
    create_choropleth_map,
    create_median_price_map,
    create_listing_change_map
)

__all__ = [
    'create_price_histogram',
    'create_room_type_boxplot',
    'create_group_count_chart',
    'create_neighbourhood_change_chart',
    'create_property_change_scatter',
    'format_or_no_data',
    'create_choropleth_map',
    'create_median_price_map',
    'create_listing_change_map'
]
