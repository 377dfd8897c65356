"""Local API client for the Salus iT600 universal gateway."""

from __future__ import annotations

from .exceptions import (
    IT600AuthenticationError,
    IT600CommandError,
    IT600ConnectionError,
    IT600Error,
    IT600ValidationError,
)
from .gateway import IT600Gateway
from .models import (
    BinarySensorDevice,
    ClimateDevice,
    CoverDevice,
    GatewayDevice,
    SensorDevice,
    SwitchDevice,
)

__version__ = "1.0.0"

__all__ = [
    "BinarySensorDevice",
    "ClimateDevice",
    "CoverDevice",
    "GatewayDevice",
    "IT600AuthenticationError",
    "IT600CommandError",
    "IT600ConnectionError",
    "IT600Error",
    "IT600Gateway",
    "IT600ValidationError",
    "SensorDevice",
    "SwitchDevice",
]
