"""
Project Path Configuration

Centralized path definitions for data and report outputs
Using Medallion Architecture: Bronze (raw) → Silver (cleaned) → Gold (report tables)
"""

from pathlib import Path

# Project root
PROJECT_ROOT = Path(__file__).parent.parent

# ==============================================================================
# MEDALLION ARCHITECTURE (Bronze / Silver / Gold)
# ==============================================================================

DATA_ROOT = PROJECT_ROOT / "data"

# Bronze Layer: Raw, immutable Inside Airbnb snapshots (as downloaded)
BRONZE = DATA_ROOT / "bronze"
BRONZE_VENICE = BRONZE / "venice"

# Silver Layer: Unified listings table (both years, cleaned)
SILVER = DATA_ROOT / "silver"
SILVER_VENICE = SILVER / "venice"

# Gold Layer: Derived report tables (summaries, YoY comparisons)
GOLD = DATA_ROOT / "gold"
GOLD_VENICE = GOLD / "venice"

# ==============================================================================
# DEFAULT FILES
# ==============================================================================

LISTINGS_2019_FILE = BRONZE_VENICE / "listings_2019.csv"
LISTINGS_2020_FILE = BRONZE_VENICE / "listings_2020.csv"
NEIGHBOURHOODS_FILE = BRONZE_VENICE / "neighbourhoods.geojson"

LISTINGS_FILES = {
    2019: LISTINGS_2019_FILE,
    2020: LISTINGS_2020_FILE,
}

UNIFIED_LISTINGS_FILE = SILVER_VENICE / "listings_unified.csv"

# ==============================================================================
# OUTPUTS
# ==============================================================================

OUTPUTS_ROOT = PROJECT_ROOT / "outputs"
MAPS = OUTPUTS_ROOT / "maps"
REPORTS = OUTPUTS_ROOT / "reports"
FIGURES = REPORTS / "figures"

# ==============================================================================
# DIRECTORY INITIALIZATION
# ==============================================================================

def ensure_directories():
    """Create all necessary directories if they don't exist"""

    data_dirs = [
        BRONZE, BRONZE_VENICE,
        SILVER, SILVER_VENICE,
        GOLD, GOLD_VENICE,
    ]

    output_dirs = [
        OUTPUTS_ROOT, MAPS, REPORTS, FIGURES
    ]

    for directory in data_dirs + output_dirs:
        directory.mkdir(parents=True, exist_ok=True)
