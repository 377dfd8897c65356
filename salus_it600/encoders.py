"""Build gateway write payloads from domain-level commands.

The encoders return the capability-group fragment of a write; the gateway
client merges it with the device's raw ``data`` blob via
:func:`build_write_request`.
"""

from __future__ import annotations

from typing import Any

from .const import (
    COVER_POSITION_MAX,
    COVER_POSITION_MIN,
    FAN_CODE_AUTO,
    FAN_CODE_BY_MODE,
    HOLD_TYPE_BY_PRESET,
    HOLD_TYPE_ECO,
    HOLD_TYPE_FOLLOW_SCHEDULE,
    HOLD_TYPE_OFF,
    HOLD_TYPE_TEMPORARY,
    HVAC_MODE_COOL,
    HVAC_MODE_OFF,
    MOVE_TO_LEVEL_SUFFIX,
    REQUEST_WRITE,
    SUPPORT_FAN_MODE,
    SYSTEM_MODE_AUTO,
    SYSTEM_MODE_BY_HVAC_MODE,
)
from .exceptions import IT600CommandError, IT600ValidationError
from .models import ClimateDevice


def build_write_request(
    data: dict[str, Any], fragment: dict[str, Any]
) -> dict[str, Any]:
    """Wrap a write fragment addressed to one device."""
    return {"requestAttr": REQUEST_WRITE, "id": [{"data": data, **fragment}]}


def round_to_half(number: float) -> float:
    """Round to nearest 0.5 (e.g. 1.01→1.0, 1.4→1.5, 1.8→2.0)."""
    return round(number * 2) / 2


def is_dual_mode(device: ClimateDevice) -> bool:
    """Heat/cool units (sTherS family) are the ones with a fan."""
    return bool(device.supported_features & SUPPORT_FAN_MODE)


# ------------------------------------------------------------------
#  Climate
# ------------------------------------------------------------------


def encode_temperature(
    device: ClimateDevice, setpoint_celsius: float
) -> dict[str, Any]:
    value = round(round_to_half(setpoint_celsius) * 100)

    if not is_dual_mode(device):
        return {"sIT600TH": {"SetHeatingSetpoint_x100": value}}
    if device.hvac_mode == HVAC_MODE_COOL:
        return {"sTherS": {"SetCoolingSetpoint_x100": value}}
    return {"sTherS": {"SetHeatingSetpoint_x100": value}}


def encode_hvac_mode(device: ClimateDevice, mode: str) -> dict[str, Any]:
    """Encode an HVAC mode change.

    Standard thermostats only know "off" and "not off": any other mode
    resumes the schedule (hold type 0) and reads back as ``auto``.
    """
    if is_dual_mode(device):
        system_mode = SYSTEM_MODE_BY_HVAC_MODE.get(mode, SYSTEM_MODE_AUTO)
        return {"sTherS": {"SetSystemMode": system_mode}}

    hold = HOLD_TYPE_OFF if mode == HVAC_MODE_OFF else HOLD_TYPE_FOLLOW_SCHEDULE
    return {"sIT600TH": {"SetHoldType": hold}}


def encode_preset(device: ClimateDevice, preset: str) -> dict[str, Any]:
    hold = HOLD_TYPE_BY_PRESET.get(preset, HOLD_TYPE_FOLLOW_SCHEDULE)

    if is_dual_mode(device):
        return {"sComm": {"SetHoldType": hold}}

    # Eco and temporary hold do not exist on standard thermostats.
    if hold in (HOLD_TYPE_ECO, HOLD_TYPE_TEMPORARY):
        hold = HOLD_TYPE_FOLLOW_SCHEDULE
    return {"sIT600TH": {"SetHoldType": hold}}


def encode_fan_mode(device: ClimateDevice, mode: str) -> dict[str, Any]:
    if not is_dual_mode(device):
        raise IT600CommandError(
            f"Climate device {device.unique_id} has no fan to control"
        )
    return {"sFanS": {"FanMode": FAN_CODE_BY_MODE.get(mode, FAN_CODE_AUTO)}}


def encode_locked(device: ClimateDevice, locked: bool) -> dict[str, Any]:
    if not is_dual_mode(device):
        raise IT600CommandError(
            f"Climate device {device.unique_id} has no key lock to control"
        )
    return {"sTherUIS": {"LockKey": 1 if locked else 0}}


# ------------------------------------------------------------------
#  Switches / covers
# ------------------------------------------------------------------


def encode_switch(is_on: bool) -> dict[str, Any]:
    return {"sOnOffS": {"SetOnOff": 1 if is_on else 0}}


def encode_cover_position(position: int) -> dict[str, Any]:
    """Encode a target position: 0 = closed, 100 = fully open."""
    if isinstance(position, float) and not position.is_integer():
        raise IT600ValidationError("position must be a whole number")
    if not COVER_POSITION_MIN <= position <= COVER_POSITION_MAX:
        raise IT600ValidationError("position must be 0-100 inclusive")
    return {
        "sLevelS": {
            "SetMoveToLevel": f"{int(position):02X}{MOVE_TO_LEVEL_SUFFIX}"
        }
    }
