from enum import Enum

# Public Open-Meteo API (no key)
OPEN_METEO_BASE_URL = 'https://api.open-meteo.com/v1'
# Customer Open-Meteo API (used together with apikey)
OPEN_METEO_CUSTOMER_BASE_URL = 'https://customer-api.open-meteo.com/v1'
# Endpoint used when a model does not name its own
OPEN_METEO_DEFAULT_ENDPOINT = 'forecast'

# User-Agent for outbound requests
HTTP_USER_AGENT = 'wxcontours/0.3'
# Timeout of one forecast request (seconds)
HTTP_TIMEOUT_DEFAULT = 20.0

HTTP_OK = 200
HTTP_BAD_REQUEST = 400
HTTP_INTERNAL_ERROR = 500

# --- Sample grid
# Rows/columns of the coarse sample grid (enough for contours)
SAMPLE_GRID_SIZE = 12
# Padding added on each side of the bbox, as a share of its span
SAMPLE_GRID_PADDING_RATIO = 0.1
# Decimal places for lat/lon in the outbound query
SAMPLE_COORD_DECIMALS = 4
# Minimal grid size along one axis for marching squares
MIN_GRID_SIZE = 2

# Latest forecast hour accepted by the host route
MAX_FORECAST_HOUR = 384

# --- Polyline stitching
# Endpoint match tolerance (degrees, applied to lat and lon separately)
STITCH_EPSILON_DEG = 0.0001
# Minimal number of points in an emitted polyline
MIN_POINTS_FOR_LINE = 2

# --- HTTP caching hint for the host route (seconds)
CONTOUR_CACHE_MAX_AGE_S = 300

# Default settings file (TOML)
SETTINGS_PATH = 'configs/contours.toml'
# Secrets files probed in order by load_settings
SECRETS_ENV_FILES = ('.secrets.env', '.env')

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class VariableFamily(str, Enum):
    TEMPERATURE = 'temperature'
    PRESSURE = 'pressure'
    HEIGHTS = 'heights'


# Contour interval and label unit per family
CONTOUR_INTERVAL_BY_FAMILY: dict[VariableFamily, float] = {
    VariableFamily.TEMPERATURE: 2,
    VariableFamily.PRESSURE: 4,
    VariableFamily.HEIGHTS: 60,
}

CONTOUR_UNIT_BY_FAMILY: dict[VariableFamily, str] = {
    VariableFamily.TEMPERATURE: '°F',
    VariableFamily.PRESSURE: 'mb',
    VariableFamily.HEIGHTS: 'm',
}

# Substrings marking Celsius variables that are converted to Fahrenheit
CELSIUS_VARIABLE_MARKERS = ('temperature', 'dew_point', 'apparent')


def variable_family(variable: str) -> VariableFamily:
    """Family of a forecast variable; unknown variables count as temperature."""
    if 'pressure' in variable:
        return VariableFamily.PRESSURE
    if 'geopotential' in variable or 'height' in variable:
        return VariableFamily.HEIGHTS
    return VariableFamily.TEMPERATURE


# Marching squares: named masks and case groups
# Bit layout (clockwise from the top-left corner):
# b0: TL, b1: TR, b2: BR, b3: BL
MS_MASK_EMPTY = 0  # 0b0000, all below the level
MS_MASK_FULL = 15  # 0b1111, all at or above the level

# Single corners
MS_MASK_TL = 1
MS_MASK_TR = 2
MS_MASK_BR = 4
MS_MASK_BL = 8

# Two corners sharing a side
MS_MASK_TOP = 3  # TL+TR
MS_MASK_RIGHT = 6  # TR+BR
MS_MASK_BOTTOM = 12  # BL+BR
MS_MASK_LEFT = 9  # TL+BL

# Diagonal (saddle) cases
MS_MASK_TL_BR = 5
MS_MASK_TR_BL = 10

# Three corners
MS_MASK_NOT_TL = 14
MS_MASK_NOT_TR = 13
MS_MASK_NOT_BR = 11
MS_MASK_NOT_BL = 7

MS_NO_CONTOUR_CASES = {MS_MASK_EMPTY, MS_MASK_FULL}

# Complementary mask pairs and the cell edges their isoline connects
MS_CONNECT_TOP_LEFT = (MS_MASK_TL, MS_MASK_NOT_TL)  # (1, 14)
MS_CONNECT_TOP_RIGHT = (MS_MASK_TR, MS_MASK_NOT_TR)  # (2, 13)
MS_CONNECT_LEFT_RIGHT = (MS_MASK_TOP, MS_MASK_BOTTOM)  # (3, 12)
MS_CONNECT_RIGHT_BOTTOM = (MS_MASK_BR, MS_MASK_NOT_BR)  # (4, 11)
MS_AMBIGUOUS_CASES = (MS_MASK_TL_BR, MS_MASK_TR_BL)  # (5, 10)
MS_CONNECT_TOP_BOTTOM = (MS_MASK_RIGHT, MS_MASK_LEFT)  # (6, 9)
MS_CONNECT_LEFT_BOTTOM = (MS_MASK_NOT_BL, MS_MASK_BL)  # (7, 8)
