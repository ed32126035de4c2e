"""Application-wide constants.

Dashboard sizing and display defaults are configured in config.Settings;
use get_settings() for values that can change per deployment.
"""

# Identifier prefixes
ID_PREFIX_CLIENT = "cli"
ID_PREFIX_LOAD = "load"
ID_PREFIX_TRUCK = "truck"
ID_PREFIX_TRIP = "trip"
ID_PREFIX_TRANSACTION = "txn"
ID_PREFIX_TEMPLATE = "template"
ID_PREFIX_DOCUMENT = "doc"

# Trip listing tabs
TAB_ACTIVE = "active"
TAB_COMPLETED = "completed"
TRIP_TABS = [TAB_ACTIVE, TAB_COMPLETED]

# Transaction listing filter
TYPE_FILTER_ALL = "all"

# Date formats
DATE_FORMAT_DISPLAY = "%d %b %Y"
DATETIME_FORMAT_DISPLAY = "%d %b %Y, %I:%M %p"

# Validation limits
MAX_NAME_LENGTH = 200
MAX_LOCATION_LENGTH = 255
MAX_DESCRIPTION_LENGTH = 500
MAX_TEMPLATE_NAME_LENGTH = 200
MIN_PHONE_DIGITS = 7
MAX_PHONE_DIGITS = 15

# Document payloads
DATA_URL_PREFIX = "data:"
DEFAULT_MIME_TYPE = "application/octet-stream"
