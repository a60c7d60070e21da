"""Tests for neighbourhood aggregation and year-over-year comparison"""

import numpy as np
import pandas as pd
import pytest

from data_engineering.clean import unify_listings
from data_engineering.aggregate import (
    pct_change,
    summarize_neighbourhoods,
    compare_neighbourhoods_yoy,
    summarize_neighbourhood_groups,
    describe_listings_by_year
)
from data_engineering.filters import apply_price_ceiling


class TestPctChange:

    def test_regular_values(self):
        change = pct_change(pd.Series([90.0, 44.0]), pd.Series([100.0, 40.0]))
        assert change.tolist() == pytest.approx([-0.1, 0.1])

    def test_zero_or_missing_base_is_missing(self):
        new = pd.Series([5.0, 5.0, np.nan, 0.0])
        old = pd.Series([0.0, np.nan, 5.0, 5.0])
        change = pct_change(new, old)

        assert str(change.dtype) == 'Float64'
        assert change.isna().tolist() == [True, True, True, False]
        assert change.iloc[3] == -1.0
        assert not np.isinf(change.astype(float)).any()

    def test_nullable_integer_inputs(self):
        new = pd.Series([1, 3], dtype='Int64')
        old = pd.Series([pd.NA, 2], dtype='Int64')
        change = pct_change(new, old)
        assert pd.isna(change.iloc[0])
        assert change.iloc[1] == pytest.approx(0.5)


class TestSummarizeNeighbourhoods:

    def test_single_year_summary(self, unified):
        summary = summarize_neighbourhoods(unified, year=2019).set_index('neighbourhood')

        assert sorted(summary.index) == ['Lido', 'Mestre', 'San Marco']
        assert summary.loc['San Marco', 'listing_count'] == 2
        assert summary.loc['San Marco', 'median_price'] == 75.0
        assert summary.loc['San Marco', 'entire_home_share'] == 0.5
        assert summary.loc['Lido', 'entire_home_share'] == 1.0
        assert summary.loc['Mestre', 'entire_home_share'] == 0.0
        assert summary.loc['Mestre', 'neighbourhood_group'] == 'Terraferma'

    def test_neighbourhood_without_listings_is_absent(self, unified):
        summary = summarize_neighbourhoods(unified, year=2019)
        # Murano only has 2020 listings: no row, rather than a zero row
        assert 'Murano' not in summary['neighbourhood'].astype(str).tolist()

    def test_unknown_year_raises(self, unified):
        with pytest.raises(ValueError):
            summarize_neighbourhoods(unified, year=2018)

    def test_even_group_median_with_outlier(self, make_listings):
        listings_2019 = make_listings([
            (i, 'Cannaregio', 'Isole', 'Private room', price, 10)
            for i, price in enumerate(['$10', '$20', '$30', '$1,000,000'], start=1)
        ])
        listings_2020 = make_listings([
            (i, 'Cannaregio', 'Isole', 'Private room', price, 10)
            for i, price in enumerate(['$10', '$20', '$30'], start=1)
        ])
        unified = unify_listings({2019: listings_2019, 2020: listings_2020}, verbose=False)

        summary = summarize_neighbourhoods(unified, year=2019)
        assert summary['median_price'].iloc[0] == 25.0

        yoy = compare_neighbourhoods_yoy(unified)
        assert yoy['median_price_2019'].iloc[0] == 25.0
        assert yoy['median_price_2020'].iloc[0] == 20.0

        # The ceiling only changes the median when applied explicitly
        capped = apply_price_ceiling(unified, 1000, verbose=False)
        assert summarize_neighbourhoods(capped, year=2019)['median_price'].iloc[0] == 20.0


class TestCompareNeighbourhoodsYoY:

    def test_pivoted_columns(self, unified):
        yoy = compare_neighbourhoods_yoy(unified)
        assert list(yoy.columns) == [
            'neighbourhood', 'neighbourhood_group',
            'listing_count_2019', 'listing_count_2020',
            'median_price_2019', 'median_price_2020',
            'listing_count_pct_change', 'median_price_pct_change',
        ]
        assert len(yoy) == 4

    def test_changes(self, unified):
        yoy = compare_neighbourhoods_yoy(unified).set_index('neighbourhood')

        san_marco = yoy.loc['San Marco']
        assert san_marco['listing_count_2019'] == 2
        assert san_marco['listing_count_2020'] == 1
        assert san_marco['listing_count_pct_change'] == pytest.approx(-0.5)
        assert san_marco['median_price_pct_change'] == pytest.approx(0.2)

        mestre = yoy.loc['Mestre']
        assert mestre['listing_count_pct_change'] == 0.0
        assert mestre['median_price_pct_change'] == pytest.approx(0.1)

    def test_missing_base_year_is_missing_not_zero(self, unified):
        yoy = compare_neighbourhoods_yoy(unified).set_index('neighbourhood')

        murano = yoy.loc['Murano']
        assert murano['listing_count_2019'] == 0
        assert pd.isna(murano['median_price_2019'])
        assert murano['listing_count_2020'] == 1
        assert pd.isna(murano['listing_count_pct_change'])
        assert pd.isna(murano['median_price_pct_change'])

    def test_emptied_neighbourhood_loses_all_listings(self, unified):
        yoy = compare_neighbourhoods_yoy(unified).set_index('neighbourhood')

        lido = yoy.loc['Lido']
        assert lido['listing_count_2020'] == 0
        assert lido['listing_count_pct_change'] == -1.0
        # No 2020 prices to compare against
        assert pd.isna(lido['median_price_2020'])
        assert pd.isna(lido['median_price_pct_change'])

    def test_conflicting_group_labels_raise(self, make_listings):
        listings_2019 = make_listings([(1, 'Lido', 'Isole', 'Private room', '$50', 10)])
        listings_2020 = make_listings([(2, 'Lido', 'Litorale', 'Private room', '$55', 10)])
        unified = unify_listings({2019: listings_2019, 2020: listings_2020}, verbose=False)

        with pytest.raises(ValueError, match='Lido'):
            compare_neighbourhoods_yoy(unified)

    def test_no_infinite_changes(self, unified):
        yoy = compare_neighbourhoods_yoy(unified)
        for col in ['listing_count_pct_change', 'median_price_pct_change']:
            assert str(yoy[col].dtype) == 'Float64'
            assert not np.isinf(yoy[col].astype(float)).any()


class TestGroupSummaries:

    def test_neighbourhood_counts_add_up_to_group_totals(self, unified):
        groups = summarize_neighbourhood_groups(unified)
        for year in [2019, 2020]:
            per_neighbourhood = (
                unified[unified['year'] == year]
                .groupby(['neighbourhood_group', 'neighbourhood'], observed=True)
                .size()
                .groupby(level='neighbourhood_group', observed=True)
                .sum()
            )
            totals = groups[groups['year'] == year].set_index('neighbourhood_group')['listing_count']
            for group, count in per_neighbourhood.items():
                assert totals.loc[group] == count

        isole_2019 = groups[(groups['neighbourhood_group'] == 'Isole') & (groups['year'] == 2019)]
        assert isole_2019['listing_count'].iloc[0] == 3

    def test_describe_listings_by_year(self, unified):
        desc = describe_listings_by_year(unified).set_index('year')

        assert desc.loc[2019, 'listing_count'] == 4
        assert desc.loc[2020, 'property_count'] == 3
        assert desc.loc[2019, 'median_price'] == 75.0
        assert desc.loc[2019, 'max_price'] == 1200.0
        assert desc.loc[2019, 'share_Entire home/apt'] == pytest.approx(0.5)
        assert desc.loc[2020, 'share_Private room'] == pytest.approx(2 / 3)
