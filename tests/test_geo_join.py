"""Tests for joining neighbourhood tables onto boundary polygons"""

import pandas as pd
import geopandas as gpd
import pytest
from shapely.geometry import box

from data_engineering.aggregate import summarize_neighbourhoods, compare_neighbourhoods_yoy
from data_engineering.integrate import JoinMismatchError, join_neighbourhood_boundaries


def test_every_polygon_kept(boundaries, unified):
    summary = summarize_neighbourhoods(unified, year=2019)
    joined = join_neighbourhood_boundaries(boundaries, summary, verbose=False)

    assert isinstance(joined, gpd.GeoDataFrame)
    assert len(joined) == len(boundaries)
    assert joined.crs == boundaries.crs
    assert joined['neighbourhood'].tolist() == boundaries['neighbourhood'].tolist()


def test_unmatched_polygons_carry_nulls(boundaries, unified):
    summary = summarize_neighbourhoods(unified, year=2019)
    joined = join_neighbourhood_boundaries(boundaries, summary, verbose=False).set_index('neighbourhood')

    for name in ['Murano', 'Burano']:
        assert not joined.loc[name, 'has_listings']
        assert pd.isna(joined.loc[name, 'listing_count'])
        assert pd.isna(joined.loc[name, 'median_price'])

    assert joined.loc['San Marco', 'has_listings']
    assert joined.loc['San Marco', 'listing_count'] == 2
    assert joined.loc['San Marco', 'median_price'] == 75.0


def test_categorical_key_matches_text_key(boundaries, unified):
    summary = summarize_neighbourhoods(unified, year=2019)
    assert isinstance(summary['neighbourhood'].dtype, pd.CategoricalDtype)
    assert not isinstance(boundaries['neighbourhood'].dtype, pd.CategoricalDtype)

    joined = join_neighbourhood_boundaries(boundaries, summary, verbose=False)
    assert joined['has_listings'].sum() == 3


def test_case_and_whitespace_differences_match(boundaries):
    table = pd.DataFrame({
        'neighbourhood': ['san marco', '  LIDO  ', 'Mestre'],
        'listing_count': [2, 1, 1],
    })
    joined = join_neighbourhood_boundaries(boundaries, table, verbose=False)
    assert joined['has_listings'].tolist() == [True, True, True, False, False]


def test_numeric_key_matches_string_key():
    polygons = gpd.GeoDataFrame(
        {'neighbourhood': ['101', '102']},
        geometry=[box(0, 0, 1, 1), box(1, 0, 2, 1)],
        crs='EPSG:4326'
    )
    table = pd.DataFrame({'neighbourhood': [101], 'listing_count': [7]})

    joined = join_neighbourhood_boundaries(polygons, table, verbose=False)
    assert joined['has_listings'].tolist() == [True, False]
    assert joined['listing_count'].iloc[0] == 7


def test_boundary_columns_win(boundaries, unified):
    yoy = compare_neighbourhoods_yoy(unified)
    joined = join_neighbourhood_boundaries(boundaries, yoy, verbose=False)

    assert joined['neighbourhood_group'].tolist() == boundaries['neighbourhood_group'].tolist()
    assert 'listing_count_pct_change' in joined.columns
    assert joined['has_listings'].sum() == 4


def test_no_match_raises(boundaries):
    table = pd.DataFrame({'neighbourhood': ['Atlantis'], 'listing_count': [1]})
    with pytest.raises(JoinMismatchError):
        join_neighbourhood_boundaries(boundaries, table, verbose=False)


def test_duplicate_names_raise(boundaries):
    table = pd.DataFrame({'neighbourhood': ['Lido', 'lido'], 'listing_count': [1, 2]})
    with pytest.raises(ValueError, match='duplicate'):
        join_neighbourhood_boundaries(boundaries, table, verbose=False)
