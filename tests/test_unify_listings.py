"""Tests for the unifier: year tagging, price parsing, categorical normalization"""

import numpy as np
import pandas as pd
import pytest

from data_engineering.clean import (
    PriceParseError,
    parse_price,
    format_price,
    normalize_room_type,
    normalize_names,
    name_key,
    unify_listings
)


class TestParsePrice:

    def test_strips_currency_and_thousands_separators(self):
        prices = pd.Series(['$139.00', '$1,250.00', ' $12,345.50 ', '80'])
        parsed = parse_price(prices)
        assert parsed.tolist() == [139.0, 1250.0, 12345.5, 80.0]
        assert parsed.dtype == float

    def test_format_then_parse_keeps_value(self):
        values = [0.0, 9.99, 139.0, 1000.0, 1250.5, 98765.43]
        formatted = pd.Series([format_price(v) for v in values])
        assert formatted.iloc[4] == '$1,250.50'
        np.testing.assert_allclose(parse_price(formatted), values)

    def test_unparseable_price_raises(self):
        prices = pd.Series(['$100.00', 'call host', '$50.00'])
        with pytest.raises(PriceParseError) as excinfo:
            parse_price(prices)
        assert excinfo.value.failures.index.tolist() == [1]
        assert isinstance(excinfo.value, ValueError)

    def test_missing_price_is_not_zero(self):
        prices = pd.Series(['$100.00', None, ''])
        with pytest.raises(PriceParseError):
            parse_price(prices)

        flagged = parse_price(prices, errors='flag')
        assert flagged.iloc[0] == 100.0
        assert flagged.iloc[1:].isna().all()

    def test_malformed_numbers_are_not_salvaged(self):
        prices = pd.Series(['12abc34', '$1e3', '1.139,00', 'Price: 5 (was 9)', '$1,2,3', '$139.00'])
        with pytest.raises(PriceParseError) as excinfo:
            parse_price(prices)
        assert excinfo.value.failures.index.tolist() == [0, 1, 2, 3, 4]

        flagged = parse_price(prices, errors='flag')
        assert flagged.iloc[:5].isna().all()
        assert flagged.iloc[5] == 139.0

    def test_other_currency_symbols(self):
        assert parse_price(pd.Series(['€1,139.00', '£80'])).tolist() == [1139.0, 80.0]

    def test_invalid_errors_option(self):
        with pytest.raises(ValueError):
            parse_price(pd.Series(['$1.00']), errors='ignore')


class TestNormalization:

    def test_room_type_variants_collapse(self):
        room_types = pd.Series(['Entire home/apt', 'entire home/apt ', 'PRIVATE ROOM', 'Shared  room'])
        normalized = normalize_room_type(room_types)
        assert normalized.tolist() == ['Entire home/apt', 'Entire home/apt', 'Private room', 'Shared room']
        assert list(normalized.cat.categories) == [
            'Entire home/apt', 'Private room', 'Shared room', 'Hotel room'
        ]

    def test_unknown_room_type_raises(self):
        with pytest.raises(ValueError, match='Unknown room type'):
            normalize_room_type(pd.Series(['Entire home/apt', 'Boat']))

    def test_names_collapse_onto_most_frequent_spelling(self):
        names = pd.Series(['San Marco', 'san marco', 'San  Marco ', 'Lido'])
        normalized = normalize_names(names)
        assert normalized.tolist() == ['San Marco', 'San Marco', 'San Marco', 'Lido']
        assert list(normalized.cat.categories) == ['Lido', 'San Marco']

    def test_name_key_coerces_to_text(self):
        assert name_key(pd.Series([' San  Marco', 12])).tolist() == ['san marco', '12']


class TestUnifyListings:

    def test_rows_tagged_by_source(self, listings_2019, listings_2020):
        # A stale year column in the source is ignored
        listings_2020 = listings_2020.assign(year=1999)
        unified = unify_listings({2019: listings_2019, 2020: listings_2020}, verbose=False)

        assert unified['year'].tolist() == [2019] * 4 + [2020] * 3
        assert unified.index.tolist() == list(range(7))

    def test_types_after_unification(self, unified):
        assert unified['price'].dtype == float
        assert unified['price'].tolist() == [100.0, 50.0, 1200.0, 40.0, 90.0, 44.0, 60.0]
        assert isinstance(unified['room_type'].dtype, pd.CategoricalDtype)
        assert isinstance(unified['neighbourhood'].dtype, pd.CategoricalDtype)

    def test_neighbourhood_variants_share_one_category(self, unified):
        assert list(unified['neighbourhood'].cat.categories) == [
            'Lido', 'Mestre', 'Murano', 'San Marco'
        ]
        san_marco = unified[unified['id'] == 1]
        assert san_marco['neighbourhood'].nunique() == 1
        assert (san_marco['room_type'] == 'Entire home/apt').all()

    def test_outliers_are_kept(self, unified):
        assert unified['price'].max() == 1200.0

    def test_inputs_not_modified(self, listings_by_year):
        before = {year: df.copy() for year, df in listings_by_year.items()}
        unify_listings(listings_by_year, verbose=False)
        for year, df in listings_by_year.items():
            pd.testing.assert_frame_equal(df, before[year])

    def test_parse_error_fails_the_run(self, listings_2019, listings_2020):
        listings_2020.loc[0, 'price'] = 'N/A'
        with pytest.raises(PriceParseError):
            unify_listings({2019: listings_2019, 2020: listings_2020}, verbose=False)

    def test_parse_error_can_be_flagged(self, listings_2019, listings_2020):
        listings_2020.loc[0, 'price'] = 'N/A'
        unified = unify_listings(
            {2019: listings_2019, 2020: listings_2020}, errors='flag', verbose=False
        )
        flagged = unified[unified['price_parse_error']]
        assert flagged['id'].tolist() == [1]
        assert flagged['year'].tolist() == [2020]
        assert flagged['price'].isna().all()
