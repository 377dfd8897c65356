"""Turn detailed gateway records into typed device models.

Each ``decode_*`` function takes one record from a ``deviceid`` detail
exchange and returns a model, or ``None`` when the record does not belong
on that platform. :func:`decode_records` runs a decoder over a whole bucket
and isolates per-record failures.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any, TypeVar

from .const import (
    BATTERY_LEVEL_MAX,
    BATTERY_OEM_MODELS,
    BINARY_SENSOR_RELAY_MODELS,
    BUTTON_MODELS,
    COVER_DEVICE_CLASS_MAP,
    CURRENT_HVAC_COOL,
    CURRENT_HVAC_COOL_IDLE,
    CURRENT_HVAC_HEAT,
    CURRENT_HVAC_HEAT_IDLE,
    CURRENT_HVAC_IDLE,
    CURRENT_HVAC_OFF,
    DEFAULT_DEVICE_NAME,
    DEFAULT_GATEWAY_NAME,
    DEFAULT_MANUFACTURER,
    DEVICE_CLASS_MOISTURE,
    DEVICE_CLASS_OUTLET,
    DEVICE_CLASS_RECEIVER,
    DEVICE_CLASS_SMOKE,
    DEVICE_CLASS_SWITCH,
    DEVICE_CLASS_TEMPERATURE,
    DEVICE_CLASS_VALVE,
    DEVICE_CLASS_WINDOW,
    DUAL_MODE_MAX_TEMP_X100,
    DUAL_MODE_MIN_TEMP_X100,
    FAN_CODE_AUTO,
    FAN_MODE_AUTO,
    FAN_MODE_BY_CODE,
    FAN_MODE_HIGH,
    FAN_MODE_LOW,
    FAN_MODE_MEDIUM,
    FAN_MODE_OFF,
    HOLD_TYPE_OFF,
    HOLD_TYPE_PERMANENT,
    HUMIDITY_MODEL_MARKER,
    HVAC_MODE_AUTO,
    HVAC_MODE_BY_SYSTEM_MODE,
    HVAC_MODE_COOL,
    HVAC_MODE_HEAT,
    HVAC_MODE_OFF,
    MODEL_MINI_TRV,
    MODEL_RECEIVER,
    MOISTURE_SENSOR_MODELS,
    OUTLET_MODELS,
    PRESET_BY_HOLD_TYPE,
    PRESET_ECO,
    PRESET_FOLLOW_SCHEDULE,
    PRESET_OFF,
    PRESET_PERMANENT_HOLD,
    PRESET_TEMPORARY_HOLD,
    RUNNING_STATE_COOLING,
    RUNNING_STATE_HEATING,
    RUNNING_STATE_IDLE,
    SENSOR_TEMPERATURE_SUFFIX,
    SMOKE_SENSOR_MODELS,
    STANDARD_MAX_TEMP_X100,
    STANDARD_MIN_TEMP_X100,
    STATUS_D_BATTERY_INDEX,
    SUPPORT_CLOSE,
    SUPPORT_FAN_MODE,
    SUPPORT_OPEN,
    SUPPORT_PRESET_MODE,
    SUPPORT_SET_POSITION,
    SUPPORT_TARGET_TEMPERATURE,
    SYSTEM_MODE_HEAT,
    TEMP_CELSIUS,
    WINDOW_SENSOR_MODELS,
)
from .models import (
    BinarySensorDevice,
    ClimateDevice,
    CoverDevice,
    GatewayDevice,
    SensorDevice,
    SwitchDevice,
)

_LOGGER = logging.getLogger(__name__)

_T = TypeVar("_T")

STANDARD_HVAC_MODES = [HVAC_MODE_OFF, HVAC_MODE_HEAT, HVAC_MODE_AUTO]
STANDARD_PRESET_MODES = [PRESET_FOLLOW_SCHEDULE, PRESET_PERMANENT_HOLD, PRESET_OFF]

DUAL_MODE_HVAC_MODES = [HVAC_MODE_HEAT, HVAC_MODE_COOL, HVAC_MODE_AUTO]
DUAL_MODE_PRESET_MODES = [
    PRESET_OFF,
    PRESET_PERMANENT_HOLD,
    PRESET_ECO,
    PRESET_TEMPORARY_HOLD,
    PRESET_FOLLOW_SCHEDULE,
]
DUAL_MODE_FAN_MODES = [
    FAN_MODE_AUTO,
    FAN_MODE_HIGH,
    FAN_MODE_MEDIUM,
    FAN_MODE_LOW,
    FAN_MODE_OFF,
]


# ------------------------------------------------------------------
#  Shared fields
# ------------------------------------------------------------------


def device_name(record: dict[str, Any], fallback: str) -> str:
    """Extract human-friendly device name from gateway JSON."""
    raw = (record.get("sZDO") or {}).get("DeviceName")
    if raw is None:
        return fallback
    try:
        name = json.loads(raw)["deviceName"]
    except (json.JSONDecodeError, KeyError, TypeError):
        return fallback
    return name or fallback


def _unique_id(record: dict[str, Any]) -> str | None:
    data = record.get("data")
    if not isinstance(data, dict):
        return None
    return data.get("UniID")


def _common(record: dict[str, Any], fallback_name: str) -> dict[str, Any]:
    """Fields every device model shares."""
    return {
        "available": (record.get("sZDOInfo") or {}).get("OnlineStatus_i") == 1,
        "name": device_name(record, fallback_name),
        "data": record["data"],
        "manufacturer": (record.get("sBasicS") or {}).get(
            "ManufactureName", DEFAULT_MANUFACTURER
        ),
        "model": (record.get("DeviceL") or {}).get("ModelIdentifier_i"),
        "sw_version": (record.get("sZDO") or {}).get("FirmwareVersion"),
    }


# ------------------------------------------------------------------
#  Gateway
# ------------------------------------------------------------------


def decode_gateway(record: dict[str, Any]) -> GatewayDevice | None:
    """Gateway identity, read straight from its ``readall`` record."""
    gateway = record.get("sGateway") or {}
    unique_id = gateway.get("NetworkLANMAC")
    if not unique_id:
        return None

    model = gateway.get("ModelIdentifier")
    return GatewayDevice(
        name=model or DEFAULT_GATEWAY_NAME,
        unique_id=unique_id,
        data=record.get("data") or {},
        manufacturer=(record.get("sBasicS") or {}).get(
            "ManufactureName", DEFAULT_MANUFACTURER
        ),
        model=model,
        sw_version=(record.get("sOTA") or {}).get("OTAFirmwareVersion_d"),
    )


# ------------------------------------------------------------------
#  Climate
# ------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class StandardThermostat:
    """Readings of an ``sIT600TH`` (heat-only, single setpoint) thermostat."""

    local_temperature_x100: int
    heating_setpoint_x100: int
    min_heat_setpoint_x100: int
    max_heat_setpoint_x100: int
    hold_type: int
    running_state: int
    humidity: float | None
    battery_level: int | None


@dataclass(frozen=True, slots=True)
class DualModeThermostat:
    """Readings of an ``sTherS``/``sComm``/``sFanS`` heat-and-cool unit."""

    local_temperature_x100: int
    system_mode: int
    heating_setpoint_x100: int | None
    cooling_setpoint_x100: int | None
    min_heat_setpoint_x100: int
    max_heat_setpoint_x100: int
    min_cool_setpoint_x100: int
    max_cool_setpoint_x100: int
    hold_type: int
    running_state: int
    fan_code: int
    lock_key: int

    @property
    def is_heating(self) -> bool:
        return self.system_mode == SYSTEM_MODE_HEAT


ThermostatReading = StandardThermostat | DualModeThermostat


def reports_humidity(model: str | None) -> bool:
    """Whether SunnySetpoint_x100 holds relative humidity for this model.

    SQ610 thermostats reuse that setpoint field for their humidity sensor.
    """
    return model is not None and HUMIDITY_MODEL_MARKER in model


def _battery_level(th: dict[str, Any], model: str | None) -> int | None:
    """Battery level on the gateway's 0-5 scale, if the device has one."""
    level = th.get("BatteryLevel")
    if isinstance(level, int) and 0 <= level <= BATTERY_LEVEL_MAX:
        return level

    status_d = th.get("Status_d") or ""
    if model in BATTERY_OEM_MODELS and len(status_d) > STATUS_D_BATTERY_INDEX:
        char = status_d[STATUS_D_BATTERY_INDEX]
        if char.isdigit() and int(char) <= BATTERY_LEVEL_MAX:
            return int(char)
    return None


def read_thermostat(record: dict[str, Any]) -> ThermostatReading | None:
    """Pick the thermostat shape carried by a record, if any."""
    model = (record.get("DeviceL") or {}).get("ModelIdentifier_i")
    th = record.get("sIT600TH")
    ther = record.get("sTherS")
    scomm = record.get("sComm")
    sfans = record.get("sFanS")

    if th is not None:
        humidity: float | None = None
        if reports_humidity(model):
            sunny = th.get("SunnySetpoint_x100")
            if sunny is not None:
                humidity = float(sunny)

        return StandardThermostat(
            local_temperature_x100=th["LocalTemperature_x100"],
            heating_setpoint_x100=th["HeatingSetpoint_x100"],
            min_heat_setpoint_x100=th.get(
                "MinHeatSetpoint_x100", STANDARD_MIN_TEMP_X100
            ),
            max_heat_setpoint_x100=th.get(
                "MaxHeatSetpoint_x100", STANDARD_MAX_TEMP_X100
            ),
            hold_type=th["HoldType"],
            running_state=th["RunningState"],
            humidity=humidity,
            battery_level=_battery_level(th, model),
        )

    if ther is not None and scomm is not None and sfans is not None:
        return DualModeThermostat(
            local_temperature_x100=ther["LocalTemperature_x100"],
            system_mode=ther["SystemMode"],
            heating_setpoint_x100=ther.get("HeatingSetpoint_x100"),
            cooling_setpoint_x100=ther.get("CoolingSetpoint_x100"),
            min_heat_setpoint_x100=ther.get(
                "MinHeatSetpoint_x100", DUAL_MODE_MIN_TEMP_X100
            ),
            max_heat_setpoint_x100=ther.get(
                "MaxHeatSetpoint_x100", DUAL_MODE_MAX_TEMP_X100
            ),
            min_cool_setpoint_x100=ther.get(
                "MinCoolSetpoint_x100", DUAL_MODE_MIN_TEMP_X100
            ),
            max_cool_setpoint_x100=ther.get(
                "MaxCoolSetpoint_x100", DUAL_MODE_MAX_TEMP_X100
            ),
            hold_type=scomm["HoldType"],
            running_state=ther["RunningState"],
            fan_code=sfans.get("FanMode", FAN_CODE_AUTO),
            lock_key=(record.get("sTherUIS") or {}).get("LockKey", 0),
        )

    return None


def standard_hvac_mode(hold: int) -> str:
    if hold == HOLD_TYPE_OFF:
        return HVAC_MODE_OFF
    if hold == HOLD_TYPE_PERMANENT:
        return HVAC_MODE_HEAT
    return HVAC_MODE_AUTO


def standard_hvac_action(hold: int, running: int) -> str:
    if hold == HOLD_TYPE_OFF:
        return CURRENT_HVAC_OFF
    return CURRENT_HVAC_IDLE if running % 2 == 0 else CURRENT_HVAC_HEAT


def standard_preset(hold: int) -> str:
    if hold in (HOLD_TYPE_OFF, HOLD_TYPE_PERMANENT):
        return PRESET_BY_HOLD_TYPE[hold]
    return PRESET_FOLLOW_SCHEDULE


def dual_mode_hvac_action(hold: int, running: int, is_heating: bool) -> str:
    if hold == HOLD_TYPE_OFF:
        return CURRENT_HVAC_OFF
    if running == RUNNING_STATE_IDLE:
        return CURRENT_HVAC_IDLE
    if is_heating:
        if running == RUNNING_STATE_HEATING:
            return CURRENT_HVAC_HEAT
        return CURRENT_HVAC_HEAT_IDLE
    if running == RUNNING_STATE_COOLING:
        return CURRENT_HVAC_COOL
    return CURRENT_HVAC_COOL_IDLE


def _standard_climate(
    reading: StandardThermostat, common: dict[str, Any]
) -> ClimateDevice:
    hold = reading.hold_type
    return ClimateDevice(
        **common,
        current_temperature=reading.local_temperature_x100 / 100,
        target_temperature=reading.heating_setpoint_x100 / 100,
        max_temp=reading.max_heat_setpoint_x100 / 100,
        min_temp=reading.min_heat_setpoint_x100 / 100,
        current_humidity=reading.humidity,
        battery_level=reading.battery_level,
        hvac_mode=standard_hvac_mode(hold),
        hvac_action=standard_hvac_action(hold, reading.running_state),
        hvac_modes=list(STANDARD_HVAC_MODES),
        preset_mode=standard_preset(hold),
        preset_modes=list(STANDARD_PRESET_MODES),
        fan_mode=None,
        fan_modes=None,
        locked=None,
        supported_features=SUPPORT_TARGET_TEMPERATURE | SUPPORT_PRESET_MODE,
    )


def _dual_mode_climate(
    reading: DualModeThermostat, common: dict[str, Any]
) -> ClimateDevice:
    if reading.is_heating:
        target = reading.heating_setpoint_x100
        max_t = reading.max_heat_setpoint_x100
        min_t = reading.min_heat_setpoint_x100
    else:
        target = reading.cooling_setpoint_x100
        max_t = reading.max_cool_setpoint_x100
        min_t = reading.min_cool_setpoint_x100

    if target is None:
        raise KeyError("setpoint for the active system mode is missing")

    return ClimateDevice(
        **common,
        current_temperature=reading.local_temperature_x100 / 100,
        target_temperature=target / 100,
        max_temp=max_t / 100,
        min_temp=min_t / 100,
        current_humidity=None,
        hvac_mode=HVAC_MODE_BY_SYSTEM_MODE.get(reading.system_mode, HVAC_MODE_AUTO),
        hvac_action=dual_mode_hvac_action(
            reading.hold_type, reading.running_state, reading.is_heating
        ),
        hvac_modes=list(DUAL_MODE_HVAC_MODES),
        preset_mode=PRESET_BY_HOLD_TYPE.get(
            reading.hold_type, PRESET_FOLLOW_SCHEDULE
        ),
        preset_modes=list(DUAL_MODE_PRESET_MODES),
        fan_mode=FAN_MODE_BY_CODE.get(reading.fan_code, FAN_MODE_AUTO),
        fan_modes=list(DUAL_MODE_FAN_MODES),
        locked=reading.lock_key == 1,
        supported_features=(
            SUPPORT_TARGET_TEMPERATURE | SUPPORT_PRESET_MODE | SUPPORT_FAN_MODE
        ),
    )


def decode_climate(record: dict[str, Any]) -> ClimateDevice | None:
    unique_id = _unique_id(record)
    reading = read_thermostat(record)
    if reading is None:
        _LOGGER.debug(
            "Climate device %s has no supported thermostat group: %s",
            unique_id,
            sorted(k for k in record if not k.startswith("_")),
        )
        return None

    common = {
        **_common(record, DEFAULT_DEVICE_NAME),
        "unique_id": unique_id,
        "temperature_unit": TEMP_CELSIUS,
        "precision": 0.1,
        "device_class": DEVICE_CLASS_TEMPERATURE,
    }

    if isinstance(reading, StandardThermostat):
        return _standard_climate(reading, common)
    return _dual_mode_climate(reading, common)


# ------------------------------------------------------------------
#  Binary sensors
# ------------------------------------------------------------------


def binary_sensor_device_class(model: str | None) -> str | None:
    if model in WINDOW_SENSOR_MODELS:
        return DEVICE_CLASS_WINDOW
    if model in MOISTURE_SENSOR_MODELS:
        return DEVICE_CLASS_MOISTURE
    if model in SMOKE_SENSOR_MODELS:
        return DEVICE_CLASS_SMOKE
    if model == MODEL_MINI_TRV:
        return DEVICE_CLASS_VALVE
    if model == MODEL_RECEIVER:
        return DEVICE_CLASS_RECEIVER
    return None


def decode_binary_sensor(record: dict[str, Any]) -> BinarySensorDevice | None:
    model = (record.get("DeviceL") or {}).get("ModelIdentifier_i")
    if model in BUTTON_MODELS:
        return None  # buttons are not alarms

    if model in BINARY_SENSOR_RELAY_MODELS:
        is_on = (record.get("sIT600I") or {}).get("RelayStatus")
    else:
        is_on = (record.get("sIASZS") or {}).get("ErrorIASZSAlarmed1")

    if is_on is None:
        return None

    return BinarySensorDevice(
        **_common(record, DEFAULT_DEVICE_NAME),
        unique_id=_unique_id(record),
        is_on=is_on == 1,
        device_class=binary_sensor_device_class(model),
    )


# ------------------------------------------------------------------
#  Switches
# ------------------------------------------------------------------


def decode_switch(record: dict[str, Any]) -> SwitchDevice | None:
    if record.get("sLevelS") is not None:
        return None  # roller-shutter endpoint of a combo device

    is_on = (record.get("sOnOffS") or {}).get("OnOff")
    if is_on is None:
        return None

    # Multi-gang relays share UniID; the endpoint tells them apart.
    unique_id = f"{_unique_id(record)}_{record['data'].get('Endpoint', 0)}"
    common = _common(record, unique_id)

    return SwitchDevice(
        **common,
        unique_id=unique_id,
        is_on=is_on == 1,
        device_class=(
            DEVICE_CLASS_OUTLET
            if common["model"] in OUTLET_MODELS
            else DEVICE_CLASS_SWITCH
        ),
    )


# ------------------------------------------------------------------
#  Covers
# ------------------------------------------------------------------


def target_position(move_to_level: str | None) -> int | None:
    """Decode the target level echoed in ``MoveToLevel_f`` (e.g. ``64FFFF``)."""
    if not move_to_level or len(move_to_level) < 2:
        return None
    return int(move_to_level[:2], 16)


def decode_cover(record: dict[str, Any]) -> CoverDevice | None:
    if (record.get("sButtonS") or {}).get("Mode") == 0:
        return None  # disabled endpoint

    level = record.get("sLevelS")
    if level is None:
        return None

    current = level.get("CurrentLevel")
    target = target_position(level.get("MoveToLevel_f"))
    moving = current is not None and target is not None

    common = _common(record, DEFAULT_DEVICE_NAME)
    return CoverDevice(
        **common,
        unique_id=_unique_id(record),
        current_cover_position=current,
        is_opening=target > current if moving else None,
        is_closing=target < current if moving else None,
        is_closed=current == 0,
        supported_features=SUPPORT_OPEN | SUPPORT_CLOSE | SUPPORT_SET_POSITION,
        device_class=COVER_DEVICE_CLASS_MAP.get(common["model"]),
    )


# ------------------------------------------------------------------
#  Temperature sensors
# ------------------------------------------------------------------


def decode_sensor(record: dict[str, Any]) -> SensorDevice | None:
    temperature = (record.get("sTempS") or {}).get("MeasuredValue_x100")
    if temperature is None:
        return None

    parent_id = _unique_id(record)
    return SensorDevice(
        **_common(record, DEFAULT_DEVICE_NAME),
        unique_id=f"{parent_id}{SENSOR_TEMPERATURE_SUFFIX}",
        state=temperature / 100,
        unit_of_measurement=TEMP_CELSIUS,
        device_class=DEVICE_CLASS_TEMPERATURE,
        parent_unique_id=parent_id,
    )


# ------------------------------------------------------------------
#  Bucket runner
# ------------------------------------------------------------------


def decode_records(
    records: Iterable[dict[str, Any]],
    decoder: Callable[[dict[str, Any]], _T | None],
    label: str,
) -> dict[str, _T]:
    """Decode a bucket into a fresh dict keyed by unique id.

    A record that fails to decode is logged and skipped; it never affects
    the rest of the bucket.
    """
    local: dict[str, _T] = {}

    for record in records:
        if not isinstance(record, dict):
            _LOGGER.debug("Skipped malformed %s record: %r", label, record)
            continue
        unique_id = _unique_id(record)
        if unique_id is None:
            continue
        try:
            device = decoder(record)
        except Exception:
            _LOGGER.exception("Failed to decode %s %s", label, unique_id)
            continue
        if device is None:
            _LOGGER.debug("Skipped %s record %s", label, unique_id)
            continue
        local[device.unique_id] = device

    return local
