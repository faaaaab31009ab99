"""Constants for the Sensibo Split integration.

This module contains the constants used throughout the integration,
including API endpoints, configuration keys, error keys and the
temperature limits of the heater/cooler view.
"""

DOMAIN = "sensibo_split"

BASE_URL = "https://home.sensibo.com/api/v2"

DEFAULT_NAME = "Sensibo"
MANUFACTURER = "Sensibo"
MODEL = "Sensibo Sky"

SUCCESS_STATUS = "success"

REQUEST_TIMEOUT = 10.0
RETRY_TOTAL = 3
RETRY_BACKOFF_FACTOR = 0.5

DEFAULT_SCAN_INTERVAL = 30  # Seconds between entity polls
REFRESH_DELAY = 5  # Seconds to wait after a write before re-reading the device

ERROR_INVALID_AUTH = "invalid_auth"
ERROR_CANNOT_CONNECT = "cannot_connect"
ERROR_TIMEOUT = "timeout_error"
ERROR_API_ERROR = "api_error"
ERROR_UNKNOWN = "unknown_error"

# Threshold limits exposed to the heater/cooler view, in device units
COOLING_THRESHOLD_MIN = 18
COOLING_THRESHOLD_MAX = 32
HEATING_THRESHOLD_MIN = 10
HEATING_THRESHOLD_MAX = 30
THRESHOLD_STEP = 1

# Rotation speed bounds; 0 is the "no change" sentinel
ROTATION_SPEED_MIN = 1
ROTATION_SPEED_MAX = 5
DEFAULT_ROTATION_SPEED = ROTATION_SPEED_MAX
