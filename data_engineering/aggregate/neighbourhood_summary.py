"""
Neighbourhood Aggregation Module

Grouped summary views of the unified listings table.

Functions:
    - pct_change: Year-over-year change with explicit missing values
    - summarize_neighbourhoods: Single-year stats per neighbourhood (map level)
    - compare_neighbourhoods_yoy: Both years side by side per neighbourhood
    - summarize_neighbourhood_groups: Listing counts per region and year
    - describe_listings_by_year: Price distribution and room type mix per year

A neighbourhood with no listings in a year has no row (or a missing value)
for that year. Missing is never reported as zero.
"""

import pandas as pd

from config.settings import BASE_YEAR, COMPARE_YEAR, ENTIRE_HOME


def pct_change(new: pd.Series, old: pd.Series) -> pd.Series:
    """
    Relative change (new - old) / old

    Returns a nullable Float64 Series that is <NA> wherever old is missing or
    zero or new is missing, so no inf/NaN reaches the charts.
    """
    new_values = pd.to_numeric(new).astype('Float64')
    old_values = pd.to_numeric(old).astype('Float64')

    defined = (
        new_values.notna() & old_values.notna() & (old_values != 0)
    ).fillna(False).astype(bool)

    change = pd.Series(pd.NA, index=old_values.index, dtype='Float64')
    change[defined] = (new_values[defined] - old_values[defined]) / old_values[defined]
    return change


def summarize_neighbourhoods(unified: pd.DataFrame, year: int = BASE_YEAR) -> pd.DataFrame:
    """
    Summarize one snapshot per neighbourhood

    Args:
        unified: Unified listings table
        year: Snapshot year to summarize

    Returns:
        DataFrame with neighbourhood, neighbourhood_group, listing_count,
        median_price and entire_home_share. Only neighbourhoods with listings
        in that year appear.
    """
    listings = unified[unified['year'] == year]
    if listings.empty:
        raise ValueError(f'No listings tagged with year {year}')

    summary = (
        listings.groupby('neighbourhood', observed=True)
        .agg(
            neighbourhood_group=('neighbourhood_group', 'first'),
            listing_count=('id', 'size'),
            median_price=('price', 'median'),
            entire_home_share=('room_type', lambda s: (s == ENTIRE_HOME).mean()),
        )
        .reset_index()
        .sort_values('listing_count', ascending=False, ignore_index=True)
    )

    return summary


def compare_neighbourhoods_yoy(unified: pd.DataFrame, base_year: int = BASE_YEAR,
                               compare_year: int = COMPARE_YEAR) -> pd.DataFrame:
    """
    Compare listing counts and median prices between two snapshots

    Groups by (neighbourhood, neighbourhood_group, year), then pivots to one
    row per neighbourhood with a column per year for each metric, plus
    listing_count_pct_change and median_price_pct_change relative to base_year.
    A neighbourhood with no listings in a snapshot counts 0 there, so its count
    change is undefined without base-year listings and -100% without
    compare-year listings.

    Raises:
        ValueError: If a neighbourhood has more than one neighbourhood_group

    Returns:
        DataFrame with nullable Int64 counts and Float64 prices/changes
    """
    years = [base_year, compare_year]
    listings = unified[unified['year'].isin(years)]

    # One row per neighbourhood requires a single group label for it
    groups_per_name = listings.groupby('neighbourhood', observed=True)['neighbourhood_group'].nunique(dropna=False)
    conflicting = groups_per_name[groups_per_name > 1]
    if len(conflicting) > 0:
        raise ValueError(
            f'❌ {len(conflicting)} neighbourhood(s) carry different neighbourhood_group '
            f'labels across snapshots: {sorted(conflicting.index.astype(str))}'
        )

    grouped = (
        listings.groupby(['neighbourhood', 'neighbourhood_group', 'year'],
                         observed=True, dropna=False)
        .agg(
            listing_count=('id', 'size'),
            median_price=('price', 'median'),
        )
    )

    metrics = ['listing_count', 'median_price']
    wide = grouped.unstack('year').reindex(
        columns=pd.MultiIndex.from_product([metrics, years])
    )
    wide.columns = [f'{metric}_{year}' for metric, year in wide.columns]
    wide = wide.reset_index()

    # No rows in a snapshot means zero listings there; the median price stays missing
    for year in years:
        wide[f'listing_count_{year}'] = wide[f'listing_count_{year}'].fillna(0).astype('Int64')
        wide[f'median_price_{year}'] = wide[f'median_price_{year}'].astype('Float64')

    wide['listing_count_pct_change'] = pct_change(
        wide[f'listing_count_{compare_year}'], wide[f'listing_count_{base_year}']
    )
    wide['median_price_pct_change'] = pct_change(
        wide[f'median_price_{compare_year}'], wide[f'median_price_{base_year}']
    )

    return wide.sort_values(f'listing_count_{base_year}', ascending=False,
                            na_position='last', ignore_index=True)


def summarize_neighbourhood_groups(unified: pd.DataFrame) -> pd.DataFrame:
    """Listing count and median price per (neighbourhood_group, year), long form"""
    return (
        unified.groupby(['neighbourhood_group', 'year'], observed=True, dropna=False)
        .agg(
            listing_count=('id', 'size'),
            median_price=('price', 'median'),
        )
        .reset_index()
    )


def describe_listings_by_year(unified: pd.DataFrame) -> pd.DataFrame:
    """
    Describe each snapshot: price distribution and room type mix

    Returns:
        One row per year with listing/property counts, price statistics and a
        share_<room type> column per room type category
    """
    by_year = unified.groupby('year')

    counts = by_year.agg(
        listing_count=('id', 'size'),
        property_count=('id', 'nunique'),
    )

    prices = by_year['price'].describe().rename(columns={
        'count': 'priced_listings',
        'mean': 'mean_price',
        'std': 'price_std',
        'min': 'min_price',
        '25%': 'price_q1',
        '50%': 'median_price',
        '75%': 'price_q3',
        'max': 'max_price',
    })

    shares = by_year['room_type'].value_counts(normalize=True).unstack(fill_value=0)
    shares.columns = [f'share_{room_type}' for room_type in shares.columns]

    return counts.join(prices).join(shares).reset_index()
