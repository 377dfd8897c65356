"""Constants for the Salus iT600 gateway library."""

from __future__ import annotations

# ── Connection defaults ────────────────────────────────────────────
DEFAULT_PORT = 80
DEFAULT_REQUEST_TIMEOUT = 5

# ── Protocol ───────────────────────────────────────────────────────
# Fixed AES-CBC IV used by every iT600 gateway.
ENCRYPTION_IV = bytes(
    [0x88, 0xA6, 0xB0, 0x79, 0x5D, 0x85, 0xDB, 0xFC,
     0xE6, 0xE0, 0xB3, 0xE9, 0xA6, 0x29, 0x65, 0x4B]
)
KEY_PREFIX = "Salus-"

COMMAND_READ = "read"
COMMAND_WRITE = "write"

REQUEST_READALL = "readall"
REQUEST_DEVICEID = "deviceid"
REQUEST_WRITE = "write"

STATUS_SUCCESS = "success"

DEFAULT_DEVICE_NAME = "Unknown"
DEFAULT_GATEWAY_NAME = "Salus Gateway"
DEFAULT_MANUFACTURER = "SALUS"

# ── Temperature ─────────────────────────────────────────────────────
DEGREE = "°"
TEMP_CELSIUS = f"{DEGREE}C"

# ── Feature bit-flags ──────────────────────────────────────────────
SUPPORT_TARGET_TEMPERATURE = 1
SUPPORT_FAN_MODE = 8
SUPPORT_PRESET_MODE = 16

SUPPORT_OPEN = 1
SUPPORT_CLOSE = 2
SUPPORT_SET_POSITION = 4

# ── HVAC modes ─────────────────────────────────────────────────────
HVAC_MODE_OFF = "off"
HVAC_MODE_HEAT = "heat"
HVAC_MODE_COOL = "cool"
HVAC_MODE_AUTO = "auto"

# ── HVAC action states ─────────────────────────────────────────────
CURRENT_HVAC_OFF = "off"
CURRENT_HVAC_HEAT = "heating"
CURRENT_HVAC_HEAT_IDLE = "heating-idle"
CURRENT_HVAC_COOL = "cooling"
CURRENT_HVAC_COOL_IDLE = "cooling-idle"
CURRENT_HVAC_IDLE = "idle"

# ── Preset modes ───────────────────────────────────────────────────
PRESET_FOLLOW_SCHEDULE = "Follow Schedule"
PRESET_PERMANENT_HOLD = "Permanent Hold"
PRESET_TEMPORARY_HOLD = "Temporary Hold"
PRESET_ECO = "Eco"
PRESET_OFF = "Off"

# ── Fan modes ──────────────────────────────────────────────────────
FAN_MODE_AUTO = "auto"
FAN_MODE_HIGH = "high"
FAN_MODE_MEDIUM = "medium"
FAN_MODE_LOW = "low"
FAN_MODE_OFF = "off"

# ── Gateway codes ──────────────────────────────────────────────────
HOLD_TYPE_FOLLOW_SCHEDULE = 0
HOLD_TYPE_TEMPORARY = 1
HOLD_TYPE_PERMANENT = 2
HOLD_TYPE_OFF = 7
HOLD_TYPE_ECO = 10

SYSTEM_MODE_AUTO = 0
SYSTEM_MODE_COOL = 3
SYSTEM_MODE_HEAT = 4

RUNNING_STATE_IDLE = 0
RUNNING_STATE_HEATING = 33
RUNNING_STATE_COOLING = 66

FAN_CODE_AUTO = 5

# Decoder tables; encoders use the inverses.
PRESET_BY_HOLD_TYPE: dict[int, str] = {
    HOLD_TYPE_OFF: PRESET_OFF,
    HOLD_TYPE_PERMANENT: PRESET_PERMANENT_HOLD,
    HOLD_TYPE_ECO: PRESET_ECO,
    HOLD_TYPE_TEMPORARY: PRESET_TEMPORARY_HOLD,
}
HOLD_TYPE_BY_PRESET: dict[str, int] = {
    preset: hold for hold, preset in PRESET_BY_HOLD_TYPE.items()
}

FAN_MODE_BY_CODE: dict[int, str] = {
    0: FAN_MODE_OFF,
    1: FAN_MODE_LOW,
    2: FAN_MODE_MEDIUM,
    3: FAN_MODE_HIGH,
}
FAN_CODE_BY_MODE: dict[str, int] = {
    mode: code for code, mode in FAN_MODE_BY_CODE.items()
}

HVAC_MODE_BY_SYSTEM_MODE: dict[int, str] = {
    SYSTEM_MODE_HEAT: HVAC_MODE_HEAT,
    SYSTEM_MODE_COOL: HVAC_MODE_COOL,
}
SYSTEM_MODE_BY_HVAC_MODE: dict[str, int] = {
    mode: code for code, mode in HVAC_MODE_BY_SYSTEM_MODE.items()
}

# ── Standard thermostat defaults (sIT600TH) ────────────────────────
STANDARD_MIN_TEMP_X100 = 500
STANDARD_MAX_TEMP_X100 = 3500

# ── Dual-mode thermostat defaults (sTherS) ─────────────────────────
DUAL_MODE_MIN_TEMP_X100 = 500
DUAL_MODE_MAX_TEMP_X100 = 4000

# Model substring whose SunnySetpoint_x100 carries relative humidity.
HUMIDITY_MODEL_MARKER = "SQ610"

# ── Battery (0-5 scale) ────────────────────────────────────────────
BATTERY_LEVEL_MAX = 5
# Battery OEM thermostats also report the level at Status_d char 99.
BATTERY_OEM_MODELS: frozenset[str] = frozenset({"SQ610RF", "SQ610RF(WB)", "SQ610RFNH"})
STATUS_D_BATTERY_INDEX = 99

# ── Model allowlists ───────────────────────────────────────────────
BINARY_SENSOR_RELAY_MODELS: frozenset[str] = frozenset({"it600MINITRV", "it600Receiver"})
BUTTON_MODELS: frozenset[str] = frozenset({"SB600", "CSB600"})
WINDOW_SENSOR_MODELS: frozenset[str] = frozenset({"SW600", "OS600"})
MOISTURE_SENSOR_MODELS: frozenset[str] = frozenset({"WLS600"})
SMOKE_SENSOR_MODELS: frozenset[str] = frozenset({"SmokeSensor-EM"})
OUTLET_MODELS: frozenset[str] = frozenset({"SP600", "SPE600"})

MODEL_MINI_TRV = "it600MINITRV"
MODEL_RECEIVER = "it600Receiver"

# ── Device classes ─────────────────────────────────────────────────
DEVICE_CLASS_WINDOW = "window"
DEVICE_CLASS_MOISTURE = "moisture"
DEVICE_CLASS_SMOKE = "smoke"
DEVICE_CLASS_VALVE = "valve"
DEVICE_CLASS_RECEIVER = "receiver"
DEVICE_CLASS_OUTLET = "outlet"
DEVICE_CLASS_SWITCH = "switch"
DEVICE_CLASS_TEMPERATURE = "temperature"

COVER_DEVICE_CLASS_MAP: dict[str, str] = {
    "SR600": "shutter",
    "RS600": "shutter",
}

# ── Cover ──────────────────────────────────────────────────────────
COVER_POSITION_MIN = 0
COVER_POSITION_MAX = 100
MOVE_TO_LEVEL_SUFFIX = "FFFF"

SENSOR_TEMPERATURE_SUFFIX = "_temp"
