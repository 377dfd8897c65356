"""Shared fixtures for Salus iT600 tests."""

from __future__ import annotations

import pytest

from salus_it600.const import (
    CURRENT_HVAC_HEAT,
    FAN_MODE_AUTO,
    FAN_MODE_HIGH,
    FAN_MODE_LOW,
    FAN_MODE_MEDIUM,
    FAN_MODE_OFF,
    HVAC_MODE_AUTO,
    HVAC_MODE_COOL,
    HVAC_MODE_HEAT,
    HVAC_MODE_OFF,
    PRESET_ECO,
    PRESET_FOLLOW_SCHEDULE,
    PRESET_OFF,
    PRESET_PERMANENT_HOLD,
    PRESET_TEMPORARY_HOLD,
    SUPPORT_CLOSE,
    SUPPORT_FAN_MODE,
    SUPPORT_OPEN,
    SUPPORT_PRESET_MODE,
    SUPPORT_SET_POSITION,
    SUPPORT_TARGET_TEMPERATURE,
)
from salus_it600.models import (
    BinarySensorDevice,
    ClimateDevice,
    CoverDevice,
    GatewayDevice,
    SensorDevice,
    SwitchDevice,
)


def _make_record(uid: str, endpoint: int = 1, **groups) -> dict:
    """Build a detailed gateway record with the usual identity groups."""
    record = {
        "data": {"UniID": uid, "Endpoint": endpoint},
        "sZDOInfo": {"OnlineStatus_i": 1},
        "sZDO": {
            "DeviceName": f'{{"deviceName": "{uid} name"}}',
            "FirmwareVersion": "1.0",
        },
        "sBasicS": {"ManufactureName": "SALUS"},
    }
    record.update(groups)
    return record


@pytest.fixture
def make_record():
    """Return a factory for detailed gateway records."""
    return _make_record


@pytest.fixture
def gateway_device() -> GatewayDevice:
    """Return a sample GatewayDevice."""
    return GatewayDevice(
        name="Salus Gateway",
        unique_id="AA:BB:CC:DD:EE:FF",
        data={"UniID": "gw001"},
        manufacturer="SALUS",
        model="SG600",
        sw_version="1.2.3",
    )


@pytest.fixture
def climate_device() -> ClimateDevice:
    """Return a sample ClimateDevice (iT600TH-style)."""
    return ClimateDevice(
        available=True,
        name="Living Room Thermostat",
        unique_id="climate_001",
        temperature_unit="°C",
        precision=0.1,
        current_temperature=21.5,
        target_temperature=22.0,
        max_temp=35.0,
        min_temp=5.0,
        current_humidity=None,
        hvac_mode=HVAC_MODE_HEAT,
        hvac_action=CURRENT_HVAC_HEAT,
        hvac_modes=[HVAC_MODE_OFF, HVAC_MODE_HEAT, HVAC_MODE_AUTO],
        preset_mode=PRESET_FOLLOW_SCHEDULE,
        preset_modes=[PRESET_FOLLOW_SCHEDULE, PRESET_PERMANENT_HOLD, PRESET_OFF],
        fan_mode=None,
        fan_modes=None,
        locked=None,
        supported_features=SUPPORT_TARGET_TEMPERATURE | SUPPORT_PRESET_MODE,
        device_class="temperature",
        data={"UniID": "climate_001", "Endpoint": 1},
        manufacturer="SALUS",
        model="iT600",
        sw_version="1.0.0",
    )


@pytest.fixture
def fc_device() -> ClimateDevice:
    """Return a sample dual-mode (FC600-style) ClimateDevice."""
    return ClimateDevice(
        available=True,
        name="FC Unit",
        unique_id="fc_001",
        temperature_unit="°C",
        precision=0.1,
        current_temperature=23.0,
        target_temperature=24.0,
        max_temp=40.0,
        min_temp=5.0,
        current_humidity=None,
        hvac_mode=HVAC_MODE_COOL,
        hvac_action=CURRENT_HVAC_HEAT,
        hvac_modes=[HVAC_MODE_HEAT, HVAC_MODE_COOL, HVAC_MODE_AUTO],
        preset_mode=PRESET_FOLLOW_SCHEDULE,
        preset_modes=[
            PRESET_OFF,
            PRESET_PERMANENT_HOLD,
            PRESET_ECO,
            PRESET_TEMPORARY_HOLD,
            PRESET_FOLLOW_SCHEDULE,
        ],
        fan_mode=FAN_MODE_AUTO,
        fan_modes=[
            FAN_MODE_AUTO,
            FAN_MODE_HIGH,
            FAN_MODE_MEDIUM,
            FAN_MODE_LOW,
            FAN_MODE_OFF,
        ],
        locked=False,
        supported_features=(
            SUPPORT_TARGET_TEMPERATURE | SUPPORT_PRESET_MODE | SUPPORT_FAN_MODE
        ),
        device_class="temperature",
        data={"UniID": "fc_001", "Endpoint": 1},
        manufacturer="SALUS",
        model="FC600",
        sw_version="2.0",
    )


@pytest.fixture
def binary_sensor_device() -> BinarySensorDevice:
    """Return a sample BinarySensorDevice."""
    return BinarySensorDevice(
        available=True,
        name="Front Door",
        unique_id="binary_001",
        is_on=False,
        device_class="window",
        data={"UniID": "binary_001", "Endpoint": 1},
        manufacturer="SALUS",
        model="SW600",
        sw_version="2.0.0",
    )


@pytest.fixture
def switch_device() -> SwitchDevice:
    """Return a sample SwitchDevice."""
    return SwitchDevice(
        available=True,
        name="Kitchen Plug",
        unique_id="switch_001_1",
        is_on=True,
        device_class="outlet",
        data={"UniID": "switch_001", "Endpoint": 1},
        manufacturer="SALUS",
        model="SP600",
        sw_version="3.0.0",
    )


@pytest.fixture
def cover_device() -> CoverDevice:
    """Return a sample CoverDevice."""
    return CoverDevice(
        available=True,
        name="Bedroom Blinds",
        unique_id="cover_001",
        current_cover_position=75,
        is_opening=None,
        is_closing=None,
        is_closed=False,
        supported_features=SUPPORT_OPEN | SUPPORT_CLOSE | SUPPORT_SET_POSITION,
        device_class=None,
        data={"UniID": "cover_001", "Endpoint": 1},
        manufacturer="SALUS",
        model="RS600",
        sw_version="4.0.0",
    )


@pytest.fixture
def sensor_device() -> SensorDevice:
    """Return a sample SensorDevice."""
    return SensorDevice(
        available=True,
        name="Office Temperature",
        unique_id="sensor_001_temp",
        state=23.4,
        unit_of_measurement="°C",
        device_class="temperature",
        data={"UniID": "sensor_001", "Endpoint": 1},
        manufacturer="SALUS",
        model="TS600",
        sw_version="5.0.0",
        parent_unique_id="sensor_001",
    )
