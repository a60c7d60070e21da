"""
Shared fixtures: two small Venice snapshots and matching boundaries

2019: San Marco (2 listings), Lido (1, priced as an outlier), Mestre (1)
2020: San Marco (1), Mestre (1), Murano (1, new)
Boundaries add Burano, which has no listings in either year.
"""

import pandas as pd
import geopandas as gpd
import pytest
from shapely.geometry import box


def _listings_frame(rows):
    """Raw listings frame from (id, neighbourhood, group, room_type, price, availability) tuples"""
    frame = pd.DataFrame(rows, columns=[
        'id', 'neighbourhood', 'neighbourhood_group', 'room_type', 'price', 'availability_90'
    ])
    frame['latitude'] = 45.43
    frame['longitude'] = 12.33
    return frame


@pytest.fixture
def make_listings():
    return _listings_frame


@pytest.fixture
def listings_2019():
    return _listings_frame([
        (1, 'San Marco', 'Isole', 'Entire home/apt', '$100.00', 10),
        (2, 'San Marco', 'Isole', 'Private room', '$50.00', 20),
        (3, 'Lido', 'Isole', 'Entire home/apt', '$1,200.00', 0),
        (4, 'Mestre', 'Terraferma', 'Private room', '$40.00', 30),
    ])


@pytest.fixture
def listings_2020():
    return _listings_frame([
        (1, 'San Marco ', 'Isole', 'entire home/apt', '$90.00', 55),
        (4, 'mestre', 'Terraferma', 'Private room', '$44.00', 30),
        (5, 'Murano', 'Isole', 'Private room', '$60.00', 45),
    ])


@pytest.fixture
def listings_by_year(listings_2019, listings_2020):
    return {2019: listings_2019, 2020: listings_2020}


@pytest.fixture
def unified(listings_by_year):
    from data_engineering.clean import unify_listings
    return unify_listings(listings_by_year, verbose=False)


@pytest.fixture
def boundaries():
    names = ['San Marco', 'Lido', 'Mestre', 'Murano', 'Burano']
    groups = ['Isole', 'Isole', 'Terraferma', 'Isole', 'Isole']
    polygons = [box(12.30 + i * 0.01, 45.40, 12.31 + i * 0.01, 45.41) for i in range(len(names))]
    return gpd.GeoDataFrame(
        {'neighbourhood': names, 'neighbourhood_group': groups},
        geometry=polygons,
        crs='EPSG:4326'
    )
