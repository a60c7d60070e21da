"""Data loading modules"""

from .load_listings import (
    load_listings,
    load_neighbourhood_boundaries
)

__all__ = [
    'load_listings',
    'load_neighbourhood_boundaries'
]
