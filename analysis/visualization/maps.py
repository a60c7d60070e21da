"""
Map visualization utilities for the Venice listings report
"""

import folium
import geopandas as gpd
import pandas as pd
from typing import Callable, Optional, Tuple

from config.settings import MAP_CENTER, MAP_ZOOM, MAP_TILES, NO_DATA_COLOR, NO_DATA_LABEL


def format_or_no_data(values: pd.Series, formatter: Callable) -> pd.Series:
    """Format values for tooltips; missing values read as 'No properties'"""
    return pd.Series(
        [NO_DATA_LABEL if pd.isna(value) else formatter(value) for value in values],
        index=values.index,
        dtype=object
    )


def _map_frame(gdf: gpd.GeoDataFrame, value_col: str, tooltip_cols: dict) -> gpd.GeoDataFrame:
    """Plain-typed copy holding only what the map serializes"""
    frame = gpd.GeoDataFrame(
        {
            'neighbourhood': gdf['neighbourhood'].astype(str),
            value_col: gdf[value_col].astype(float),
        },
        geometry=gdf.geometry,
        crs=gdf.crs
    )
    for label_col, labels in tooltip_cols.items():
        frame[label_col] = labels
    return frame


def create_choropleth_map(gdf: gpd.GeoDataFrame, value_col: str, legend_name: str,
                          formatter: Callable = str, fill_color: str = 'YlOrRd',
                          center: Optional[Tuple[float, float]] = None,
                          zoom_start: int = MAP_ZOOM) -> folium.Map:
    """
    Create a neighbourhood choropleth

    Neighbourhoods with a missing value are drawn grey and labelled
    'No properties' in the tooltip, never shaded as a zero.

    Args:
        gdf: Output of join_neighbourhood_boundaries
        value_col: Column to shade by
        legend_name: Legend caption
        formatter: Formats a present value for the tooltip
        fill_color: ColorBrewer palette name
        center: Map center (lat, lon). If None, use Venice
        zoom_start: Initial zoom level

    Returns:
        Folium map object
    """
    if center is None:
        center = MAP_CENTER

    frame = _map_frame(gdf, value_col, {
        'value_label': format_or_no_data(gdf[value_col], formatter),
    })

    m = folium.Map(location=center, zoom_start=zoom_start, tiles=MAP_TILES)

    folium.Choropleth(
        geo_data=frame.to_json(),
        data=frame,
        columns=['neighbourhood', value_col],
        key_on='feature.properties.neighbourhood',
        fill_color=fill_color,
        fill_opacity=0.7,
        line_opacity=0.4,
        nan_fill_color=NO_DATA_COLOR,
        nan_fill_opacity=0.6,
        legend_name=legend_name,
        name=legend_name,
    ).add_to(m)

    # Transparent layer carrying the tooltips
    folium.GeoJson(
        frame.to_json(),
        name='Neighbourhoods',
        style_function=lambda feature: {
            'fillOpacity': 0,
            'color': '#555555',
            'weight': 0.5,
        },
        tooltip=folium.GeoJsonTooltip(
            fields=['neighbourhood', 'value_label'],
            aliases=['Neighbourhood', legend_name],
        ),
    ).add_to(m)

    folium.LayerControl().add_to(m)

    return m


def create_median_price_map(summary_map: gpd.GeoDataFrame, year: int) -> folium.Map:
    """Median nightly price per neighbourhood for one snapshot"""
    return create_choropleth_map(
        summary_map,
        value_col='median_price',
        legend_name=f'Median nightly price {year} ($)',
        formatter=lambda value: f'${value:,.0f}',
        fill_color='YlOrRd',
    )


def create_listing_change_map(yoy_map: gpd.GeoDataFrame, base_year: int,
                              compare_year: int) -> folium.Map:
    """Relative change in listing count per neighbourhood between snapshots"""
    return create_choropleth_map(
        yoy_map,
        value_col='listing_count_pct_change',
        legend_name=f'Change in listings {base_year} → {compare_year}',
        formatter=lambda value: f'{value * 100:+.1f}%',
        fill_color='RdYlGn',
    )
