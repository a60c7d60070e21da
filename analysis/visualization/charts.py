"""
Static chart utilities for the Venice listings report

Every function takes an already-derived table and returns a matplotlib
Figure; saving is left to the caller.
"""

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import seaborn as sns
import pandas as pd
from matplotlib.ticker import PercentFormatter
from typing import Optional

from config.settings import (
    BASE_YEAR, COMPARE_YEAR, YEAR_COLORS, ROOM_TYPE_COLORS, SEABORN_STYLE
)

sns.set_style(SEABORN_STYLE)


def _year_palette(years) -> dict:
    return {year: YEAR_COLORS.get(year, '#95a5a6') for year in years}


def create_price_histogram(listings: pd.DataFrame, title: str,
                           bins: int = 60, ceiling: Optional[float] = None) -> plt.Figure:
    """
    Histogram of nightly prices, one layer per year

    Args:
        listings: Unified listings (or a filtered view of it)
        title: Chart title
        bins: Number of bins
        ceiling: Price ceiling already applied to listings, noted on the chart

    Returns:
        Matplotlib figure
    """
    fig, ax = plt.subplots(figsize=(10, 5))

    data = listings.dropna(subset=['price'])
    sns.histplot(
        data=data,
        x='price',
        hue='year',
        bins=bins,
        element='step',
        palette=_year_palette(data['year'].unique()),
        ax=ax
    )

    ax.set_title(title, fontsize=14, fontweight='bold', pad=15)
    ax.set_xlabel('Nightly price ($)', fontsize=12)
    ax.set_ylabel('Listings', fontsize=12)

    if ceiling is not None:
        ax.text(0.98, 0.95, f'Prices below ${ceiling:,.0f}',
                transform=ax.transAxes, ha='right', va='top', fontsize=10,
                bbox=dict(boxstyle='round', facecolor='wheat', alpha=0.8))

    fig.tight_layout()
    return fig


def create_room_type_boxplot(listings: pd.DataFrame) -> plt.Figure:
    """Box plot of nightly price by room type, split by year"""
    fig, ax = plt.subplots(figsize=(10, 5))

    data = listings.dropna(subset=['price'])
    sns.boxplot(
        data=data,
        x='room_type',
        y='price',
        hue='year',
        palette=_year_palette(data['year'].unique()),
        showfliers=False,
        ax=ax
    )

    ax.set_title('Nightly Price by Room Type', fontsize=14, fontweight='bold', pad=15)
    ax.set_xlabel('')
    ax.set_ylabel('Nightly price ($)', fontsize=12)
    ax.legend(title='Year')

    fig.tight_layout()
    return fig


def create_group_count_chart(group_summary: pd.DataFrame) -> plt.Figure:
    """Grouped bars of listing counts per neighbourhood group and year"""
    fig, ax = plt.subplots(figsize=(10, 5))

    data = group_summary.dropna(subset=['neighbourhood_group'])
    sns.barplot(
        data=data,
        x='neighbourhood_group',
        y='listing_count',
        hue='year',
        palette=_year_palette(data['year'].unique()),
        ax=ax
    )

    for container in ax.containers:
        ax.bar_label(container, fmt='{:,.0f}', fontsize=9)

    ax.set_title('Listings per Neighbourhood Group', fontsize=14, fontweight='bold', pad=15)
    ax.set_xlabel('')
    ax.set_ylabel('Listings', fontsize=12)
    ax.legend(title='Year')

    fig.tight_layout()
    return fig


def create_neighbourhood_change_chart(neighbourhood_yoy: pd.DataFrame,
                                      top_n: int = 20) -> plt.Figure:
    """
    Horizontal bars of the change in listing count for the largest neighbourhoods

    Neighbourhoods whose change is undefined (no base-year listings) are left out.
    """
    base_col = f'listing_count_{BASE_YEAR}'
    data = (
        neighbourhood_yoy.dropna(subset=['listing_count_pct_change'])
        .sort_values(base_col, ascending=False)
        .head(top_n)
        .sort_values('listing_count_pct_change')
    )

    changes = data['listing_count_pct_change'].astype(float)
    colors = ['#e74c3c' if value < 0 else '#2ecc71' for value in changes]

    fig, ax = plt.subplots(figsize=(10, max(4, 0.35 * len(data))))
    ax.barh(data['neighbourhood'].astype(str), changes, color=colors, alpha=0.85)
    ax.axvline(0, color='black', linewidth=0.8)
    ax.xaxis.set_major_formatter(PercentFormatter(1.0))

    ax.set_title(f'Change in Listings {BASE_YEAR} → {COMPARE_YEAR} '
                 f'(top {len(data)} neighbourhoods by {BASE_YEAR} listings)',
                 fontsize=13, fontweight='bold', pad=15)
    ax.set_xlabel('Change in listing count', fontsize=12)

    fig.tight_layout()
    return fig


def create_property_change_scatter(property_yoy: pd.DataFrame,
                                   clip: float = 1.0) -> plt.Figure:
    """
    Scatter of per-property price change against availability change

    Args:
        property_yoy: Output of match_properties_yoy
        clip: Price changes beyond ±clip are drawn at the edge

    Returns:
        Matplotlib figure
    """
    data = property_yoy.copy()
    data['price_pct_change'] = data['price_pct_change'].astype(float).clip(-clip, clip)

    fig, ax = plt.subplots(figsize=(10, 7))
    sns.scatterplot(
        data=data,
        x='availability_change',
        y='price_pct_change',
        hue='room_type',
        palette=ROOM_TYPE_COLORS,
        alpha=0.5,
        s=15,
        ax=ax
    )

    ax.axhline(0, color='black', linewidth=0.8)
    ax.axvline(0, color='black', linewidth=0.8)
    ax.xaxis.set_major_formatter(PercentFormatter(1.0))
    ax.yaxis.set_major_formatter(PercentFormatter(1.0))

    ax.set_title(f'Properties Listed in Both {BASE_YEAR} and {COMPARE_YEAR} '
                 f'(n={len(data):,})', fontsize=14, fontweight='bold', pad=15)
    ax.set_xlabel('Change in availability (share of the 90-day window)', fontsize=12)
    ax.set_ylabel('Change in nightly price', fontsize=12)
    ax.legend(title='Room type', loc='upper left', framealpha=0.9)

    fig.tight_layout()
    return fig
