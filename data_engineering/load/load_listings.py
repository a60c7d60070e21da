"""
Listings and Boundary Loader

Reads the Inside Airbnb snapshots (one listings CSV per year) and the
neighbourhood boundary GeoJSON published alongside them.

Both Inside Airbnb column sets are accepted:
    - summary listings:  neighbourhood, neighbourhood_group
    - detailed listings: neighbourhood_cleansed, neighbourhood_group_cleansed

Functions:
    - load_listings: One year of listings, renamed to the canonical columns
    - load_neighbourhood_boundaries: Neighbourhood polygons (EPSG:4326)
"""

import pandas as pd
import geopandas as gpd
from pathlib import Path

from data_engineering.utils.validation import LISTING_COLUMNS, validate_raw_listings


# Inside Airbnb column name → canonical column name
COLUMN_ALIASES = {
    'neighbourhood_cleansed': 'neighbourhood',
    'neighbourhood_group_cleansed': 'neighbourhood_group',
}


def load_listings(listings_file, year=None, verbose=True):
    """
    Load one Inside Airbnb listings snapshot

    Args:
        listings_file: Path to listings CSV (summary or detailed)
        year: Snapshot year, used only for progress output
        verbose: Print progress

    Returns:
        DataFrame with the canonical listing columns

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If required columns are missing
    """
    listings_file = Path(listings_file)
    if not listings_file.exists():
        raise FileNotFoundError(f"Listings file not found: {listings_file}")

    label = f'{year} listings' if year is not None else 'listings'
    if verbose:
        print(f"Loading {label} from {listings_file}...")

    # price stays text here, parsing belongs to the unifier
    listings = pd.read_csv(listings_file, dtype={'price': str}, low_memory=False)

    # Detailed exports carry both the raw and the cleansed neighbourhood
    # columns; the cleansed ones win
    for alias, canonical in COLUMN_ALIASES.items():
        if alias in listings.columns:
            listings = listings.drop(columns=[canonical], errors='ignore')
    listings = listings.rename(columns=COLUMN_ALIASES)

    validate_raw_listings(listings, label)

    listings = listings[LISTING_COLUMNS].copy()

    if verbose:
        print(f"  ✓ Loaded {len(listings):,} listings")
        print(f"  ✓ Unique properties: {listings['id'].nunique():,}")

    return listings


def load_neighbourhood_boundaries(boundaries_file, verbose=True):
    """
    Load neighbourhood boundary polygons

    Args:
        boundaries_file: Path to neighbourhoods GeoJSON
        verbose: Print progress

    Returns:
        GeoDataFrame with one polygon per neighbourhood in EPSG:4326
    """
    boundaries_file = Path(boundaries_file)
    if not boundaries_file.exists():
        raise FileNotFoundError(f"Boundary file not found: {boundaries_file}")

    if verbose:
        print(f"Loading neighbourhood boundaries from {boundaries_file}...")

    boundaries = gpd.read_file(boundaries_file)

    if 'neighbourhood' not in boundaries.columns:
        raise ValueError(
            f"Boundary file has no 'neighbourhood' property: {boundaries_file}\n"
            f"   Available properties: {list(boundaries.columns)}"
        )

    if boundaries.crs is None:
        boundaries = boundaries.set_crs('EPSG:4326')
    else:
        boundaries = boundaries.to_crs('EPSG:4326')

    if verbose:
        print(f"  ✓ Loaded {len(boundaries):,} neighbourhood polygons")
        print(f"  ✓ CRS: {boundaries.crs}")

    return boundaries
