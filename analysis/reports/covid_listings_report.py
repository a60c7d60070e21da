#!/usr/bin/env python3
"""
Venice Short-Term Rentals Before and After COVID-19

Generates the narrative report comparing the December 2019 and December 2020
Inside Airbnb snapshots of Venice:
- Static figures (price distributions, room types, regions, neighbourhoods,
  property-level changes)
- Two interactive neighbourhood maps (standalone HTML)
- A markdown report interleaving the figures with interpretation

Outliers are handled per view: the first histogram shows every price, the
other price views apply the ceiling from config.settings explicitly.

Usage:
    python analysis/reports/covid_listings_report.py
    python analysis/reports/covid_listings_report.py --price-threshold 800
"""

import sys
import argparse
from pathlib import Path
from datetime import datetime
import warnings
warnings.filterwarnings('ignore', category=FutureWarning)

import matplotlib.pyplot as plt
import pandas as pd

PROJECT_ROOT = Path(__file__).parent.parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from config.paths import FIGURES, MAPS, REPORTS, ensure_directories
from config.settings import (
    BASE_YEAR, COMPARE_YEAR, ENTIRE_HOME, PRICE_OUTLIER_THRESHOLD, FIGURE_DPI,
    MEDIAN_PRICE_MAP, LISTING_CHANGE_MAP, REPORT_FILENAME
)
from data_engineering.clean import format_price
from data_engineering.filters import apply_price_ceiling
from data_engineering.datasets.build_report_tables import (
    build_report_tables, load_report_inputs
)
from analysis.visualization import (
    create_price_histogram,
    create_room_type_boxplot,
    create_group_count_chart,
    create_neighbourhood_change_chart,
    create_property_change_scatter,
    create_median_price_map,
    create_listing_change_map
)


def save_figure(fig, path):
    fig.savefig(path, dpi=FIGURE_DPI, bbox_inches='tight')
    plt.close(fig)
    print(f'  ✓ Saved: {path}')


def render_figures(tables, price_threshold, figures_dir=FIGURES):
    """
    Render every static figure

    Returns:
        Dict of figure key → saved path
    """
    print('\nCreating static figures...')
    figures_dir = Path(figures_dir)
    figures_dir.mkdir(parents=True, exist_ok=True)

    unified = tables['unified']
    capped = apply_price_ceiling(unified, price_threshold)

    figures = {
        'price_raw': create_price_histogram(
            unified, 'Nightly Price Distribution (all listings)'
        ),
        'price_capped': create_price_histogram(
            capped, 'Nightly Price Distribution', ceiling=price_threshold
        ),
        'room_type': create_room_type_boxplot(capped),
        'groups': create_group_count_chart(tables['group_summary']),
        'neighbourhood_change': create_neighbourhood_change_chart(tables['neighbourhood_yoy']),
        'property_change': create_property_change_scatter(tables['property_yoy']),
    }

    paths = {}
    for key, fig in figures.items():
        path = figures_dir / f'{key}.png'
        save_figure(fig, path)
        paths[key] = path
    return paths


def render_maps(tables, maps_dir=MAPS):
    """
    Render both interactive maps

    Returns:
        Dict of map key → saved path
    """
    print('\nCreating interactive maps...')
    maps_dir = Path(maps_dir)
    maps_dir.mkdir(parents=True, exist_ok=True)

    maps = {
        'median_price': (
            create_median_price_map(tables['summary_map'], BASE_YEAR),
            maps_dir / MEDIAN_PRICE_MAP
        ),
        'listing_change': (
            create_listing_change_map(tables['yoy_map'], BASE_YEAR, COMPARE_YEAR),
            maps_dir / LISTING_CHANGE_MAP
        ),
    }

    paths = {}
    for key, (m, path) in maps.items():
        m.save(str(path))
        print(f'  ✓ Saved: {path}')
        paths[key] = path
    return paths


def _pct(value):
    return 'n/a' if pd.isna(value) else f'{value * 100:+.1f}%'


def build_report_text(tables, figure_paths, map_paths, price_threshold, report_dir=REPORTS):
    """Assemble the markdown report: prose interleaved with figures and maps"""
    report_dir = Path(report_dir)

    def link(path):
        path = Path(path).resolve()
        try:
            return path.relative_to(report_dir.resolve()).as_posix()
        except ValueError:
            return '../' + path.relative_to(report_dir.resolve().parent).as_posix()

    desc = tables['descriptives'].set_index('year')
    base, comp = desc.loc[BASE_YEAR], desc.loc[COMPARE_YEAR]
    share_col = f'share_{ENTIRE_HOME}'

    unified = tables['unified']
    outliers = int((unified['price'] >= price_threshold).sum())

    yoy = tables['neighbourhood_yoy']
    defined = yoy.dropna(subset=['listing_count_pct_change'])
    undefined = len(yoy) - len(defined)
    emptied = int((defined['listing_count_pct_change'] == -1).sum())

    props = tables['property_yoy']
    summary_map = tables['summary_map']
    no_data = int((~summary_map['has_listings']).sum())

    listing_change = (comp['listing_count'] - base['listing_count']) / base['listing_count']

    sections = [
        f'# Venice Short-Term Rentals: {BASE_YEAR} vs {COMPARE_YEAR}',
        '',
        f'_Generated {datetime.now().strftime("%Y-%m-%d %H:%M")} from the Inside Airbnb '
        f'snapshots of December {BASE_YEAR} and December {COMPARE_YEAR}._',
        '',
        '## 1. The two snapshots',
        '',
        f'Venice had {int(base["listing_count"]):,} active listings in {BASE_YEAR} and '
        f'{int(comp["listing_count"]):,} a year later ({_pct(listing_change)}). '
        f'The median nightly price moved from {format_price(base["median_price"])} to '
        f'{format_price(comp["median_price"])}, and entire homes went from '
        f'{base.get(share_col, float("nan")) * 100:.1f}% to '
        f'{comp.get(share_col, float("nan")) * 100:.1f}% of the market.',
        '',
        f'![All prices]({link(figure_paths["price_raw"])})',
        '',
        f'The raw distribution is dominated by a long tail: {outliers:,} listings ask '
        f'{format_price(price_threshold)} or more per night, far above anything a '
        f'typical stay costs. The remaining price views exclude them.',
        '',
        f'![Prices below the ceiling]({link(figure_paths["price_capped"])})',
        '',
        f'![Price by room type]({link(figure_paths["room_type"])})',
        '',
        '## 2. Where the listings went',
        '',
        'Supply is split across the historic centre, the lagoon islands and the '
        'mainland. The chart compares each region across the two snapshots.',
        '',
        f'![Listings per region]({link(figure_paths["groups"])})',
        '',
        f'Across the {len(defined)} neighbourhoods with listings in {BASE_YEAR}, the median '
        f'change in listing count was {_pct(defined["listing_count_pct_change"].median())}.'
        + (f' {emptied} of them had no listings left in {COMPARE_YEAR}.' if emptied else '')
        + (f' {undefined} neighbourhood(s) had no listings in {BASE_YEAR}, so their '
           f'change is undefined rather than zero.' if undefined else ''),
        '',
        f'![Neighbourhood change]({link(figure_paths["neighbourhood_change"])})',
        '',
        f'The [median price map]({link(map_paths["median_price"])}) shows {BASE_YEAR} '
        f'prices per neighbourhood; {no_data} neighbourhood(s) with no properties are '
        f'shaded grey. The [listing change map]({link(map_paths["listing_change"])}) '
        f'shows where supply contracted most.',
        '',
        '## 3. The same properties, one year later',
        '',
        f'{len(props):,} properties appear in both snapshots. Their median price change '
        f'was {_pct(props["price_pct_change"].median())} and their availability over '
        f'the next 90 days changed by {_pct(props["availability_change"].median())} '
        f'of the window at the median.',
        '',
        f'![Property changes]({link(figure_paths["property_change"])})',
        '',
    ]

    return '\n'.join(sections)


def main():
    parser = argparse.ArgumentParser(
        description='Generate the Venice listings report',
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument(
        '--price-threshold',
        type=float,
        default=PRICE_OUTLIER_THRESHOLD,
        help=f'Price ceiling for the capped views (default: {PRICE_OUTLIER_THRESHOLD})'
    )
    args = parser.parse_args()

    print('=' * 80)
    print(f'VENICE SHORT-TERM RENTALS {BASE_YEAR} vs {COMPARE_YEAR}')
    print('=' * 80)

    ensure_directories()

    try:
        listings_by_year, boundaries = load_report_inputs()
    except (FileNotFoundError, ValueError) as e:
        print(f'\n❌ Cannot build report: {e}')
        print('   Run scripts/verify_data.py to check the input files.')
        return 1

    tables = build_report_tables(listings_by_year, boundaries)

    figure_paths = render_figures(tables, args.price_threshold)
    map_paths = render_maps(tables)

    report_path = REPORTS / REPORT_FILENAME
    report_path.write_text(
        build_report_text(tables, figure_paths, map_paths, args.price_threshold),
        encoding='utf-8'
    )
    print(f'\n  ✓ Report: {report_path}')

    print('\n✅ Report complete!')
    return 0


if __name__ == '__main__':
    sys.exit(main())
