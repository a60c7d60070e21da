"""
View-level filters

Outlier handling is a per-view decision: the unified table keeps every price,
and each chart that wants a capped view asks for one explicitly.
"""

import pandas as pd

from config.settings import PRICE_OUTLIER_THRESHOLD


def apply_price_ceiling(df: pd.DataFrame, threshold: float = PRICE_OUTLIER_THRESHOLD,
                        column: str = 'price', verbose: bool = True) -> pd.DataFrame:
    """
    Keep rows priced strictly below a ceiling

    Args:
        df: Listings (or any table with a price column)
        threshold: Exclude prices >= threshold
        column: Price column name
        verbose: Print how many rows were removed

    Returns:
        Filtered copy of df
    """
    if threshold is None or threshold <= 0:
        raise ValueError(f'Price ceiling must be positive, got {threshold!r}')

    keep = df[column] < threshold
    filtered = df[keep].copy()

    if verbose:
        removed = len(df) - len(filtered)
        print(f'  Price ceiling ${threshold:,.0f}: removed {removed:,} / {len(df):,} rows')

    return filtered
