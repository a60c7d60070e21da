"""
Configuration for the Venice listings report
Years, thresholds, colors, and map settings
"""

# Snapshot years (Inside Airbnb scrapes, December of each year)
BASE_YEAR = 2019
COMPARE_YEAR = 2020
YEARS = [BASE_YEAR, COMPARE_YEAR]

# availability_90: days available over the next 90 days at scrape time
AVAILABILITY_COLUMN = 'availability_90'
AVAILABILITY_WINDOW_DAYS = 90

# Price outlier ceiling (USD per night), applied per view, never while parsing
PRICE_OUTLIER_THRESHOLD = 1000

ENTIRE_HOME = 'Entire home/apt'

# Year Colors (for charts)
YEAR_COLORS = {
    BASE_YEAR: '#3498db',     # Blue
    COMPARE_YEAR: '#e74c3c',  # Red
}

# Room Type Colors
ROOM_TYPE_COLORS = {
    'Entire home/apt': '#2ecc71',
    'Private room': '#f39c12',
    'Shared room': '#9b59b6',
    'Hotel room': '#34495e',
}

# Seaborn style for static figures
SEABORN_STYLE = 'whitegrid'
FIGURE_DPI = 150

# Map Settings
MAP_CENTER = [45.44, 12.33]  # Venice lagoon
MAP_ZOOM = 11
MAP_TILES = 'CartoDB positron'
NO_DATA_COLOR = '#d9d9d9'
NO_DATA_LABEL = 'No properties'

# Output filenames (maps are referenced from the report by relative path)
MEDIAN_PRICE_MAP = 'map_median_price_2019.html'
LISTING_CHANGE_MAP = 'map_listing_change.html'
REPORT_FILENAME = 'venice_covid_report.md'
