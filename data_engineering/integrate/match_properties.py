"""
Property Matching Module

Matches individual properties across the two snapshots by listing id and
compares each property with itself a year later.

Only properties observed in both snapshots are kept (inner-join semantics).
Properties listed in one year only are dropped, not padded with placeholders.

Functions:
    - match_properties_yoy: Per-property price change and availability change
"""

import pandas as pd

from config.settings import (
    BASE_YEAR, COMPARE_YEAR, AVAILABILITY_COLUMN, AVAILABILITY_WINDOW_DAYS
)
from data_engineering.aggregate.neighbourhood_summary import pct_change


def match_properties_yoy(unified, base_year=BASE_YEAR, compare_year=COMPARE_YEAR,
                         window_days=AVAILABILITY_WINDOW_DAYS, verbose=True):
    """
    Compare each property's price and availability between two snapshots

    Args:
        unified: Unified listings table
        base_year: Earlier snapshot
        compare_year: Later snapshot
        window_days: Length of the availability window (availability_90 → 90)
        verbose: Print progress

    Returns:
        DataFrame keyed by id with price_<year>, availability_<year>,
        price_pct_change, availability_change (change in days / window_days)
        and the property's neighbourhood, neighbourhood_group and room_type
        as of compare_year
    """
    if verbose:
        print('\nMatching properties across snapshots...')

    years = [base_year, compare_year]
    listings = unified[unified['year'].isin(years)]

    # Median guards against a property appearing twice in one snapshot
    per_year = (
        listings.groupby(['id', 'year'])
        .agg(
            price=('price', 'median'),
            availability=(AVAILABILITY_COLUMN, 'median'),
        )
        .unstack('year')
        .reindex(columns=pd.MultiIndex.from_product([['price', 'availability'], years]))
    )
    per_year.columns = [f'{metric}_{year}' for metric, year in per_year.columns]

    per_year['price_pct_change'] = pct_change(
        per_year[f'price_{compare_year}'], per_year[f'price_{base_year}']
    )
    per_year['availability_change'] = (
        per_year[f'availability_{compare_year}'] - per_year[f'availability_{base_year}']
    ) / window_days

    matched = per_year[per_year['price_pct_change'].notna()].copy()

    # Descriptive attributes as of the later snapshot
    attributes = (
        listings[listings['year'] == compare_year]
        .drop_duplicates(subset='id', keep='last')
        .set_index('id')[['neighbourhood', 'neighbourhood_group', 'room_type']]
    )
    matched = matched.join(attributes).reset_index()

    if verbose:
        ids_base = listings.loc[listings['year'] == base_year, 'id'].nunique()
        ids_compare = listings.loc[listings['year'] == compare_year, 'id'].nunique()
        print(f'  {base_year} properties: {ids_base:,}')
        print(f'  {compare_year} properties: {ids_compare:,}')
        print(f'  ✓ Matched {len(matched):,} properties present in both snapshots')
        if len(matched) > 0:
            print(f"  Median price change: {matched['price_pct_change'].median() * 100:+.1f}%")

    return matched
