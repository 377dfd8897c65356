"""Sort ``readall`` records into per-platform buckets."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any

from .const import BINARY_SENSOR_RELAY_MODELS


@dataclass(slots=True)
class DeviceBuckets:
    """Raw records grouped by the platform that decodes them."""

    gateway: list[dict[str, Any]] = field(default_factory=list)
    climate: list[dict[str, Any]] = field(default_factory=list)
    binary_sensor: list[dict[str, Any]] = field(default_factory=list)
    sensor: list[dict[str, Any]] = field(default_factory=list)
    switch: list[dict[str, Any]] = field(default_factory=list)
    cover: list[dict[str, Any]] = field(default_factory=list)


def _group(record: dict[str, Any], name: str) -> dict[str, Any]:
    """A capability group, or an empty one when absent or null."""
    group = record.get(name)
    return group if isinstance(group, dict) else {}


def is_gateway(record: dict[str, Any]) -> bool:
    return bool(_group(record, "sGateway").get("NetworkLANMAC", ""))


def is_climate(record: dict[str, Any]) -> bool:
    return "sIT600TH" in record or "sTherS" in record


def is_binary_sensor(record: dict[str, Any]) -> bool:
    if "sIASZS" in record:
        return True
    model = _group(record, "sBasicS").get("ModelIdentifier")
    return model in BINARY_SENSOR_RELAY_MODELS


def is_sensor(record: dict[str, Any]) -> bool:
    return "sTempS" in record


def is_switch(record: dict[str, Any]) -> bool:
    return "sOnOffS" in record


def is_cover(record: dict[str, Any]) -> bool:
    return "sLevelS" in record


# Checked in order; the first match owns the record.
_PREDICATES: tuple[tuple[str, Callable[[dict[str, Any]], bool]], ...] = (
    ("gateway", is_gateway),
    ("climate", is_climate),
    ("binary_sensor", is_binary_sensor),
    ("sensor", is_sensor),
    ("switch", is_switch),
    ("cover", is_cover),
)


def classify_record(record: dict[str, Any]) -> str | None:
    """Return the bucket name for one record, or None if unsupported.

    Records without a ``data`` blob cannot be addressed and are ignored.
    """
    if not isinstance(record, dict) or not isinstance(record.get("data"), dict):
        return None
    for bucket, predicate in _PREDICATES:
        if predicate(record):
            return bucket
    return None


def classify_devices(records: Iterable[dict[str, Any]]) -> DeviceBuckets:
    """Partition records so that each lands in at most one bucket."""
    buckets = DeviceBuckets()
    for record in records:
        bucket = classify_record(record)
        if bucket is not None:
            getattr(buckets, bucket).append(record)
    return buckets
