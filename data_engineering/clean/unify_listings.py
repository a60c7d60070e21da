"""
Listings Unification Module

Combines the yearly snapshots into one listings table.

Every row is tagged with the year of the snapshot it came from (the tag comes
from the source table, never from row content). Prices are parsed from
currency strings to floats and the categorical text fields are normalized so
grouping and equality are exact.

Functions:
    - parse_price: "$1,139.00" → 1139.0, failing loudly on unparseable values
    - format_price: 1139.0 → "$1,139.00"
    - normalize_room_type: Map room types onto the fixed vocabulary
    - normalize_names: Collapse whitespace/case variants of free-text names
    - name_key: Text key used to match names across sources
    - unify_listings: Tag, concatenate and clean both snapshots
"""

import pandas as pd

from config.settings import AVAILABILITY_COLUMN
from data_engineering.utils.validation import validate_unified_listings


# Currency symbols and whitespace, removed before the number is checked
PRICE_JUNK_PATTERN = r'[$€£\s]'

# Plain number, optionally with comma thousands separators
PRICE_NUMBER_PATTERN = r'-?(\d{1,3}(,\d{3})+|\d+)(\.\d+)?'

# Normalized room type text → canonical label
ROOM_TYPE_CANONICAL = {
    'entire home/apt': 'Entire home/apt',
    'entire home': 'Entire home/apt',
    'entire place': 'Entire home/apt',
    'private room': 'Private room',
    'shared room': 'Shared room',
    'hotel room': 'Hotel room',
}

ROOM_TYPE_DTYPE = pd.CategoricalDtype(
    ['Entire home/apt', 'Private room', 'Shared room', 'Hotel room'],
    ordered=True
)


class PriceParseError(ValueError):
    """Raised when price strings do not convert to numbers"""

    def __init__(self, failures: pd.Series):
        self.failures = failures
        preview = ', '.join(f'row {idx}: {val!r}' for idx, val in failures.head(5).items())
        super().__init__(
            f'❌ {len(failures):,} price value(s) could not be parsed ({preview})'
        )


def _collapse_whitespace(series: pd.Series) -> pd.Series:
    return series.astype('string').str.strip().str.replace(r'\s+', ' ', regex=True)


def name_key(series: pd.Series) -> pd.Series:
    """Case- and whitespace-insensitive text key for name matching"""
    return _collapse_whitespace(series).str.casefold()


def parse_price(prices: pd.Series, errors: str = 'raise') -> pd.Series:
    """
    Parse currency-formatted prices to floats

    Args:
        prices: Price strings such as "$139.00" or "$1,250.00"
        errors: 'raise' to fail on any unparseable value, 'flag' to return
            NaN for those rows so the caller can mark them

    Returns:
        Series of float prices (same index)

    Raises:
        PriceParseError: If errors='raise' and any value is not a number
    """
    if errors not in ('raise', 'flag'):
        raise ValueError(f"errors must be 'raise' or 'flag', got {errors!r}")

    # Missing values stringify to 'nan'/'None' and fail the number check
    cleaned = prices.astype(str).str.replace(PRICE_JUNK_PATTERN, '', regex=True)
    valid = cleaned.str.fullmatch(PRICE_NUMBER_PATTERN)
    parsed = pd.to_numeric(
        cleaned.where(valid).str.replace(',', '', regex=False), errors='coerce'
    ).astype(float)

    failed = parsed.isna()
    if failed.any() and errors == 'raise':
        raise PriceParseError(prices[failed])

    return parsed


def format_price(value: float) -> str:
    """Format a nightly price the way Inside Airbnb exports it"""
    return f'${value:,.2f}'


def normalize_room_type(room_types: pd.Series) -> pd.Series:
    """
    Map room types onto the fixed room type vocabulary

    Raises:
        ValueError: If a room type is not in ROOM_TYPE_CANONICAL
    """
    mapped = name_key(room_types).map(ROOM_TYPE_CANONICAL)

    unknown = mapped.isna() & room_types.notna()
    if unknown.any():
        raise ValueError(
            f'❌ Unknown room type(s): {sorted(room_types[unknown].astype(str).unique())}\n'
            f'   Known room types: {list(ROOM_TYPE_DTYPE.categories)}'
        )

    return mapped.astype(object).astype(ROOM_TYPE_DTYPE)


def normalize_names(names: pd.Series) -> pd.Series:
    """
    Normalize free-text names to a categorical with one spelling per name

    Whitespace is trimmed and collapsed. Spellings that differ only by case
    collapse onto the most frequent spelling (ties broken alphabetically).
    """
    collapsed = _collapse_whitespace(names)
    keys = collapsed.str.casefold()

    spellings = (
        pd.DataFrame({'key': keys, 'spelling': collapsed})
        .dropna()
        .value_counts()
        .reset_index(name='n')
        .sort_values(['key', 'n', 'spelling'], ascending=[True, False, True])
        .drop_duplicates(subset='key')
    )
    canonical = dict(zip(spellings['key'], spellings['spelling']))

    dtype = pd.CategoricalDtype(sorted(canonical.values()))
    return keys.astype(object).map(canonical).astype(dtype)


def unify_listings(listings_by_year, errors='raise', verbose=True):
    """
    Tag each snapshot with its year and combine into one clean table

    Args:
        listings_by_year: Dict of year → listings DataFrame (canonical columns)
        errors: Price parse policy, 'raise' or 'flag' (see parse_price).
            With 'flag', a boolean price_parse_error column marks failed rows.
        verbose: Print progress

    Returns:
        New DataFrame with a year column, float prices and categorical
        room_type / neighbourhood / neighbourhood_group. Inputs are not modified.
    """
    if verbose:
        print('\n' + '=' * 60)
        print('UNIFYING LISTINGS')
        print('=' * 60)

    frames = []
    for year in sorted(listings_by_year):
        frame = listings_by_year[year].copy()
        frame['year'] = int(year)
        frames.append(frame)
        if verbose:
            print(f'  {year}: {len(frame):,} listings')

    unified = pd.concat(frames, ignore_index=True)
    columns = ['id', 'year'] + [c for c in unified.columns if c not in ('id', 'year')]
    unified = unified[columns]

    if verbose:
        print('\nParsing prices...')
    unified['price'] = parse_price(unified['price'], errors=errors)
    if errors == 'flag':
        unified['price_parse_error'] = unified['price'].isna()
        if verbose and unified['price_parse_error'].any():
            print(f"  ⚠️  {unified['price_parse_error'].sum():,} rows flagged with unparseable prices")

    unified[AVAILABILITY_COLUMN] = unified[AVAILABILITY_COLUMN].astype(float)

    if verbose:
        print('Normalizing categorical fields...')
    unified['room_type'] = normalize_room_type(unified['room_type'])
    unified['neighbourhood'] = normalize_names(unified['neighbourhood'])
    unified['neighbourhood_group'] = normalize_names(unified['neighbourhood_group'])

    validate_unified_listings(unified, verbose=verbose)

    if verbose:
        print(f'  ✓ Unified {len(unified):,} listings')
        print(f"  ✓ Neighbourhoods: {len(unified['neighbourhood'].cat.categories)}")
        print(f"  ✓ Neighbourhood groups: {list(unified['neighbourhood_group'].cat.categories)}")

    return unified
