#!/usr/bin/env python3
"""
Data Verification Script

Checks that the listings snapshots and the neighbourhood boundaries are
present and readable before running the pipeline.

Usage:
    python scripts/verify_data.py
"""

import sys
from pathlib import Path

# Add project root to path
sys.path.append(str(Path(__file__).parent.parent))

import pandas as pd
import geopandas as gpd
from config.paths import (
    LISTINGS_FILES,
    NEIGHBOURHOODS_FILE,
    ensure_directories
)
from data_engineering.load.load_listings import COLUMN_ALIASES
from data_engineering.utils.validation import LISTING_COLUMNS


def check_file_exists(file_path, description):
    """Check if a file exists and print status"""
    if file_path.exists():
        size_mb = file_path.stat().st_size / (1024 * 1024)
        print(f'✓ {description}: {size_mb:.1f} MB')
        return True
    else:
        print(f'✗ {description}: NOT FOUND')
        print(f'  Expected: {file_path}')
        return False


def verify_listings(listings_file):
    """Verify a listings snapshot has the required columns"""
    try:
        df = pd.read_csv(listings_file, nrows=100)
        columns = {COLUMN_ALIASES.get(col, col) for col in df.columns}
        missing = [col for col in LISTING_COLUMNS if col not in columns]

        if missing:
            print(f'  ✗ Missing columns: {missing}')
            return False

        total_rows = len(pd.read_csv(listings_file, usecols=['id']))
        print(f'  ✓ Contains {total_rows:,} listings')
        print(f'  ✓ Required columns present')
        return True
    except (OSError, ValueError) as e:
        print(f'  ✗ Error reading file: {e}')
        return False


def verify_boundaries(boundaries_file):
    """Verify the boundary file has named polygons"""
    try:
        gdf = gpd.read_file(boundaries_file)

        if 'neighbourhood' not in gdf.columns:
            print(f"  ✗ Missing 'neighbourhood' property")
            return False

        print(f'  ✓ Contains {len(gdf):,} neighbourhoods')
        print(f'  ✓ Geometry type: {gdf.geometry.geom_type.mode()[0]}')
        print(f'  ✓ CRS: {gdf.crs}')
        return True
    except (OSError, ValueError) as e:
        print(f'  ✗ Error reading file: {e}')
        return False


def main():
    """Main verification function"""
    print('=' * 80)
    print('DATA VERIFICATION')
    print('=' * 80)

    print('\n1. Checking directory structure...')
    ensure_directories()
    print('  ✓ Directory structure initialized')

    print('\n2. Checking required data files...')
    print()

    all_ok = True

    print('Listings (Bronze Layer):')
    for year, listings_file in LISTINGS_FILES.items():
        if check_file_exists(listings_file, f'Inside Airbnb Venice {year}'):
            if not verify_listings(listings_file):
                all_ok = False
        else:
            all_ok = False

    print()

    print('Neighbourhood Boundaries (Bronze Layer):')
    if check_file_exists(NEIGHBOURHOODS_FILE, 'neighbourhoods.geojson'):
        if not verify_boundaries(NEIGHBOURHOODS_FILE):
            all_ok = False
    else:
        all_ok = False

    print()
    print('=' * 80)

    if all_ok:
        print('✓ ALL CHECKS PASSED')
        print()
        print('Next steps:')
        print('  1. Run pipeline: python scripts/run_pipeline.py')
        return 0
    else:
        print('✗ VERIFICATION FAILED')
        print()
        print('Download the Venice listings and neighbourhoods files from')
        print('http://insideairbnb.com/get-the-data and place them in data/bronze/venice/')
        return 1


if __name__ == '__main__':
    sys.exit(main())
