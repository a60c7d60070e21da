"""
Neighbourhood Boundary Join Module

Attaches neighbourhood-level tables to the boundary polygons for mapping.

The boundary file and the listings disagree on how the neighbourhood name is
typed (plain text in GeoJSON, categorical in the unified table), and joining
them as-is matches nothing. Both keys are coerced to the same text key
(case and whitespace normalized) before merging.

Functions:
    - join_neighbourhood_boundaries: Left join of a table onto the polygons
"""

import geopandas as gpd

from data_engineering.clean.unify_listings import name_key


class JoinMismatchError(ValueError):
    """Raised when no polygon matches any row of the joined table"""


def join_neighbourhood_boundaries(boundaries, table, on='neighbourhood', verbose=True):
    """
    Left join a neighbourhood-keyed table onto boundary polygons

    Every polygon is kept. Polygons without a matching row carry null values
    in the joined columns and has_listings == False; downstream rendering
    labels them as having no properties instead of drawing a zero.

    Args:
        boundaries: GeoDataFrame with one polygon per neighbourhood
        table: DataFrame with one row per neighbourhood (e.g. summarize_neighbourhoods)
        on: Name column present in both inputs
        verbose: Print match statistics

    Returns:
        GeoDataFrame (boundary CRS) with the table's columns added

    Raises:
        JoinMismatchError: If table has rows but none match a polygon
    """
    if verbose:
        print('\nJoining neighbourhood table onto boundaries...')

    polygons = boundaries.copy()
    polygons['_join_key'] = name_key(polygons[on])

    # Boundary file wins for shared columns (name spelling, group label)
    shared = [c for c in table.columns if c in polygons.columns and c != on]
    rows = table.drop(columns=shared + [on]).copy()
    rows['_join_key'] = name_key(table[on])
    rows['has_listings'] = True

    duplicated = rows['_join_key'].duplicated()
    if duplicated.any():
        raise ValueError(
            f'❌ Table has {duplicated.sum()} duplicate neighbourhood names after normalization'
        )

    joined = polygons.merge(rows, on='_join_key', how='left')
    joined['has_listings'] = joined['has_listings'].notna()

    matched = int(joined['has_listings'].sum())
    if len(rows) > 0 and matched == 0:
        raise JoinMismatchError(
            f'❌ None of {len(rows):,} neighbourhoods matched the {len(polygons):,} boundary polygons.\n'
            f'   Check that both sources use the same neighbourhood names.'
        )

    unmatched_rows = sorted(set(rows['_join_key'].dropna()) - set(polygons['_join_key'].dropna()))

    if verbose:
        print(f'  ✓ Matched {matched}/{len(joined)} polygons')
        if matched < len(joined):
            print(f'  {len(joined) - matched} polygon(s) without listings (shown as no data)')
        if unmatched_rows:
            print(f'  ⚠️  {len(unmatched_rows)} neighbourhood(s) missing from boundary file: {unmatched_rows}')

    joined = joined.drop(columns=['_join_key'])
    return gpd.GeoDataFrame(joined, geometry=boundaries.geometry.name, crs=boundaries.crs)
