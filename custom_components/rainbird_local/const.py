"""Constants for the Rain Bird Local integration."""

DOMAIN = "rainbird_local"
VERSION = "1.0.0"
MANUFACTURER = "Rain Bird"

# Configuration
CONF_ZONES = "zones"
CONF_ENABLE_QUEUEING = "enable_queueing"
CONF_DEFAULT_IRRIGATION_TIME = "default_irrigation_time"
DEFAULT_NAME = "Rain Bird"
DEFAULT_IRRIGATION_TIME = 60  # minutes
DEFAULT_ENABLE_QUEUEING = False

# Polling
REFRESH_INTERVAL = 30  # seconds
END_OF_SESSION_GRACE = 2  # seconds after a countdown ends before polling

# Capabilities
CAP_IS_ACTIVE = "is_active"
CAP_ACTIVE_ZONE = "active_zone"
CAP_ZONE_TIME_LEFT = "zone_time_left"
CAP_RAIN_SET_POINT_REACHED = "rain_set_point_reached"

# Triggers (fired on the event bus as EVENT_RAINBIRD)
TRIGGER_TURNS_ON = "turns_on"
TRIGGER_TURNS_OFF = "turns_off"
TRIGGER_RAIN_SET_POINT_CHANGED = "rain_set_point_changed"
TRIGGER_RAIN_SET_POINT_REACHED = "rain_set_point_reached"
EVENT_RAINBIRD = f"{DOMAIN}_event"

# Conditions
CONDITION_ZONE_IS_ACTIVE = "zone_is_active"
CONDITION_RAINBIRD_IS_ACTIVE = "rainbird_is_active"

# Published values
STATE_ZONE_NONE = "None"
STATE_ZONE_UNKNOWN = "Unknown"
TIME_LEFT_NONE = "-"

# Services
SERVICE_START_ZONE = "start_zone"
ATTR_MINUTES = "minutes"
