#!/usr/bin/env python3
"""
Build Report Tables

Runs the listings pipeline once and returns every derived table the report
needs. Each view is computed from the unified table and handed on
explicitly; no stage modifies a table built by an earlier one.

    Loader → Unifier → {Aggregator, Matcher} → Geo-joiner

Input:  data/bronze/venice/ (listings_2019.csv, listings_2020.csv, neighbourhoods.geojson)
Output: data/silver/venice/listings_unified.csv
        data/gold/venice/*.csv

Usage:
    python data_engineering/datasets/build_report_tables.py
"""

import sys
from pathlib import Path
from datetime import datetime

import pandas as pd

sys.path.append(str(Path(__file__).parent.parent.parent))
from config.paths import (
    LISTINGS_FILES, NEIGHBOURHOODS_FILE, UNIFIED_LISTINGS_FILE, GOLD_VENICE,
    ensure_directories
)
from config.settings import BASE_YEAR, COMPARE_YEAR
from data_engineering.load import load_listings, load_neighbourhood_boundaries
from data_engineering.clean import unify_listings
from data_engineering.aggregate import (
    summarize_neighbourhoods,
    compare_neighbourhoods_yoy,
    summarize_neighbourhood_groups,
    describe_listings_by_year
)
from data_engineering.integrate import match_properties_yoy, join_neighbourhood_boundaries


# Tables written to the gold layer (geo tables are rendered, not persisted)
GOLD_TABLES = [
    'descriptives',
    'group_summary',
    'neighbourhood_summary',
    'neighbourhood_yoy',
    'property_yoy',
]


def build_report_tables(listings_by_year, boundaries, base_year=BASE_YEAR,
                        compare_year=COMPARE_YEAR, price_errors='raise', verbose=True):
    """
    Build every derived table used by the report

    Args:
        listings_by_year: Dict of year → raw listings DataFrame
        boundaries: Neighbourhood boundary GeoDataFrame
        base_year: Earlier snapshot (denominator of YoY changes)
        compare_year: Later snapshot
        price_errors: 'raise' or 'flag' (see parse_price)
        verbose: Print progress

    Returns:
        Dict with unified, descriptives, group_summary, neighbourhood_summary,
        neighbourhood_yoy, property_yoy, summary_map and yoy_map
    """
    unified = unify_listings(listings_by_year, errors=price_errors, verbose=verbose)

    if verbose:
        print('\n' + '=' * 60)
        print('AGGREGATING')
        print('=' * 60)

    neighbourhood_summary = summarize_neighbourhoods(unified, year=base_year)
    neighbourhood_yoy = compare_neighbourhoods_yoy(
        unified, base_year=base_year, compare_year=compare_year
    )

    if verbose:
        print(f'  ✓ {base_year} summary: {len(neighbourhood_summary):,} neighbourhoods')
        print(f'  ✓ YoY comparison: {len(neighbourhood_yoy):,} neighbourhoods')
        no_base = neighbourhood_yoy[f'listing_count_{base_year}'].eq(0).sum()
        if no_base > 0:
            print(f'  ⚠️  {no_base} neighbourhood(s) without {base_year} listings (YoY change undefined)')

    tables = {
        'unified': unified,
        'descriptives': describe_listings_by_year(unified),
        'group_summary': summarize_neighbourhood_groups(unified),
        'neighbourhood_summary': neighbourhood_summary,
        'neighbourhood_yoy': neighbourhood_yoy,
        'property_yoy': match_properties_yoy(
            unified, base_year=base_year, compare_year=compare_year, verbose=verbose
        ),
        'summary_map': join_neighbourhood_boundaries(
            boundaries, neighbourhood_summary, verbose=verbose
        ),
        'yoy_map': join_neighbourhood_boundaries(
            boundaries, neighbourhood_yoy, verbose=verbose
        ),
    }

    return tables


def load_report_inputs(verbose=True):
    """Load both listings snapshots and the boundaries from the bronze layer"""
    listings_by_year = {
        year: load_listings(path, year=year, verbose=verbose)
        for year, path in LISTINGS_FILES.items()
    }
    boundaries = load_neighbourhood_boundaries(NEIGHBOURHOODS_FILE, verbose=verbose)
    return listings_by_year, boundaries


def save_report_tables(tables, unified_file=UNIFIED_LISTINGS_FILE, output_dir=GOLD_VENICE):
    """Write the unified table and the gold tables to CSV"""
    unified_file = Path(unified_file)
    output_dir = Path(output_dir)
    unified_file.parent.mkdir(parents=True, exist_ok=True)
    output_dir.mkdir(parents=True, exist_ok=True)

    tables['unified'].to_csv(unified_file, index=False)
    print(f'  ✓ Unified: {unified_file}')

    for name in GOLD_TABLES:
        path = output_dir / f'{name}.csv'
        tables[name].to_csv(path, index=False)
        print(f'  ✓ {name}: {path} ({len(tables[name]):,} rows)')


def main():
    print('=' * 80)
    print('VENICE LISTINGS - REPORT TABLES BUILDER')
    print('=' * 80)
    print(f'Started: {datetime.now().strftime("%Y-%m-%d %H:%M:%S")}')

    ensure_directories()

    listings_by_year, boundaries = load_report_inputs()
    tables = build_report_tables(listings_by_year, boundaries)

    print('\n' + '=' * 60)
    print('SAVING TABLES')
    print('=' * 60)
    save_report_tables(tables)

    with pd.option_context('display.width', 120, 'display.max_columns', 20):
        print('\nSnapshot descriptives:')
        print(tables['descriptives'].to_string(index=False))

    print(f'\nFinished: {datetime.now().strftime("%Y-%m-%d %H:%M:%S")}')
    return 0


if __name__ == '__main__':
    sys.exit(main())
