"""Data integration modules"""

from .match_properties import match_properties_yoy
from .geo_join import (
    JoinMismatchError,
    join_neighbourhood_boundaries
)

__all__ = [
    'match_properties_yoy',
    'JoinMismatchError',
    'join_neighbourhood_boundaries'
]
