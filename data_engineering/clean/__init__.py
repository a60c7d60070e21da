"""Data cleaning modules"""

from .unify_listings import (
    PriceParseError,
    parse_price,
    format_price,
    normalize_room_type,
    normalize_names,
    name_key,
    unify_listings
)

__all__ = [
    'PriceParseError',
    'parse_price',
    'format_price',
    'normalize_room_type',
    'normalize_names',
    'name_key',
    'unify_listings'
]
