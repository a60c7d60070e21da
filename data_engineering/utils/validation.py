#!/usr/bin/env python3
"""
Structural and Data Quality Checks

Uses pandera to validate listings tables for:
- Structure (required columns present, coordinates in range)
- Unified table invariants (year tags, non-negative prices, availability window)
- Data quality reporting (duplicate properties, outlier prices, missing values)

Structural failures raise; data quality issues are only reported.

Usage:
    from data_engineering.utils.validation import validate_raw_listings, validate_unified_listings

    validate_raw_listings(listings_2019, '2019 listings')
    validate_unified_listings(unified)
"""

import pandera as pa
from pandera import Column, Check
import pandas as pd

from config.settings import (
    YEARS, AVAILABILITY_COLUMN, AVAILABILITY_WINDOW_DAYS, PRICE_OUTLIER_THRESHOLD
)


# Canonical listing columns (after alias renaming in the loader)
LISTING_COLUMNS = [
    'id',
    'neighbourhood',
    'neighbourhood_group',
    'room_type',
    'latitude',
    'longitude',
    'price',
    AVAILABILITY_COLUMN,
]


# ============================================================================
# RAW LISTINGS SCHEMA
# ============================================================================

raw_listings_schema = pa.DataFrameSchema(
    {
        'id': Column(nullable=False),
        'neighbourhood': Column(nullable=False),
        'neighbourhood_group': Column(nullable=True),
        'room_type': Column(nullable=False),
        'latitude': Column(float, Check.in_range(-90, 90), nullable=False),
        'longitude': Column(float, Check.in_range(-180, 180), nullable=False),
        # Currency-formatted text, parsed by the unifier
        'price': Column(nullable=True),
        AVAILABILITY_COLUMN: Column(
            float,
            Check.in_range(0, AVAILABILITY_WINDOW_DAYS),
            nullable=True
        ),
    },
    strict=False,  # Inside Airbnb exports carry many more columns
    coerce=True,
    description='Raw Inside Airbnb listings snapshot'
)


# ============================================================================
# UNIFIED LISTINGS SCHEMA
# ============================================================================

unified_listings_schema = pa.DataFrameSchema(
    {
        'id': Column(nullable=False),
        'year': Column(int, Check.isin(YEARS), nullable=False),
        'neighbourhood': Column(nullable=False),
        'neighbourhood_group': Column(nullable=True),
        'room_type': Column(nullable=False),
        # Null only for rows flagged with price_parse_error
        'price': Column(float, Check.greater_than_or_equal_to(0), nullable=True),
        AVAILABILITY_COLUMN: Column(
            float,
            Check.in_range(0, AVAILABILITY_WINDOW_DAYS),
            nullable=True
        ),
    },
    strict=False,
    coerce=False,
    description='Both snapshots tagged by year'
)


# ============================================================================
# VALIDATION FUNCTIONS
# ============================================================================

def validate_raw_listings(df: pd.DataFrame, label: str = 'listings') -> bool:
    """
    Validate one raw listings snapshot

    Args:
        df: Listings DataFrame (canonical column names)
        label: Name used in messages (e.g. '2019 listings')

    Returns:
        True if validation passes

    Raises:
        ValueError: If required columns are missing
        pandera.errors.SchemaErrors: If column contents are invalid
    """
    missing = [col for col in LISTING_COLUMNS if col not in df.columns]
    if missing:
        raise ValueError(
            f'❌ Missing required columns in {label}: {missing}\n'
            f'   Expected an Inside Airbnb listings export.'
        )

    try:
        raw_listings_schema.validate(df, lazy=True)
    except pa.errors.SchemaErrors as err:
        print(f'  ❌ Schema validation failed for {label}:')
        print(err.failure_cases)
        raise

    return True


def validate_unified_listings(df: pd.DataFrame, verbose: bool = True) -> bool:
    """
    Validate the unified listings table

    Args:
        df: Output of unify_listings
        verbose: Print progress

    Returns:
        True if validation passes

    Raises:
        pandera.errors.SchemaErrors: If the table breaks an invariant
    """
    try:
        unified_listings_schema.validate(df, lazy=True)
    except pa.errors.SchemaErrors as err:
        print('  ❌ Schema validation failed for unified listings:')
        print(err.failure_cases)
        raise

    if verbose:
        print('  ✓ Schema validation passed')
        check_data_quality(df)

    return True


def check_data_quality(df: pd.DataFrame, price_threshold: float = PRICE_OUTLIER_THRESHOLD):
    """
    Report data quality issues without failing

    Checks:
    - Duplicate (id, year) pairs
    - Prices at or above the outlier threshold
    - Missing availability values
    """
    dup_count = df.duplicated(subset=['id', 'year']).sum()
    if dup_count > 0:
        print(f'  ⚠️  WARNING: {dup_count} duplicate (id, year) rows found')

    outliers = (df['price'] >= price_threshold).sum()
    if outliers > 0:
        print(f'  ⚠️  {outliers:,} listings priced at or above ${price_threshold:,.0f}/night')

    if AVAILABILITY_COLUMN in df.columns:
        missing = df[AVAILABILITY_COLUMN].isna().sum()
        if missing > 0:
            print(f'  ⚠️  {missing:,} listings without {AVAILABILITY_COLUMN}')
