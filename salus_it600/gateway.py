"""Salus iT600 gateway API: local encrypted HTTP communication."""

from __future__ import annotations

import json
import logging
from collections.abc import Awaitable, Callable
from typing import Any

import aiohttp

from .classifier import classify_devices, is_gateway
from .const import (
    COMMAND_READ,
    COMMAND_WRITE,
    COVER_POSITION_MAX,
    COVER_POSITION_MIN,
    DEFAULT_PORT,
    DEFAULT_REQUEST_TIMEOUT,
    REQUEST_DEVICEID,
    REQUEST_READALL,
    STATUS_SUCCESS,
)
from .decoders import (
    decode_binary_sensor,
    decode_climate,
    decode_cover,
    decode_gateway,
    decode_records,
    decode_sensor,
    decode_switch,
)
from .encoders import (
    build_write_request,
    encode_cover_position,
    encode_fan_mode,
    encode_hvac_mode,
    encode_locked,
    encode_preset,
    encode_switch,
    encode_temperature,
)
from .encryptor import IT600Encryptor
from .exceptions import (
    IT600AuthenticationError,
    IT600CommandError,
    IT600ConnectionError,
)
from .models import (
    BinarySensorDevice,
    ClimateDevice,
    CoverDevice,
    GatewayDevice,
    SensorDevice,
    SwitchDevice,
)
from .serializer import RequestSerializer
from .transport import IT600Transport

_LOGGER = logging.getLogger(__name__)


class IT600Gateway:
    """Async client for the Salus iT600 universal gateway (local mode)."""

    def __init__(
        self,
        euid: str,
        host: str,
        port: int = DEFAULT_PORT,
        request_timeout: int = DEFAULT_REQUEST_TIMEOUT,
        session: aiohttp.ClientSession | None = None,
        debug: bool = False,
    ) -> None:
        self._encryptor = IT600Encryptor(euid)
        self._host = host
        self._debug = debug
        self._serializer = RequestSerializer()
        self._transport = IT600Transport(
            host=host,
            port=port,
            request_timeout=request_timeout,
            session=session,
        )

        self._gateway_device: GatewayDevice | None = None
        self._climate_devices: dict[str, ClimateDevice] = {}
        self._binary_sensor_devices: dict[str, BinarySensorDevice] = {}
        self._switch_devices: dict[str, SwitchDevice] = {}
        self._cover_devices: dict[str, CoverDevice] = {}
        self._sensor_devices: dict[str, SensorDevice] = {}
        # Covers found behind the switch bucket; merged into _cover_devices.
        self._shutter_endpoints: dict[str, CoverDevice] = {}

    # ------------------------------------------------------------------
    #  Connection
    # ------------------------------------------------------------------

    async def connect(self) -> str:
        """Connect to the gateway and return its MAC address."""
        _LOGGER.debug("Trying to connect to gateway at %s", self._host)

        try:
            all_devices = await self._make_encrypted_request(
                COMMAND_READ, {"requestAttr": REQUEST_READALL}
            )
        except IT600ConnectionError as exc:
            # The protocol has no "bad credential" answer. If the host
            # answers a plain GET, the EUID must be wrong.
            try:
                await self._transport.probe()
            except IT600ConnectionError:
                raise IT600ConnectionError(
                    "Cannot reach iT600 gateway, check host / IP address"
                ) from exc

            raise IT600AuthenticationError(
                "Gateway reachable but authentication failed, check EUID"
            ) from exc

        gateway = next(
            (
                x
                for x in all_devices.get("id") or []
                if isinstance(x, dict) and is_gateway(x)
            ),
            None,
        )

        if gateway is None:
            raise IT600CommandError(
                "Gateway response did not contain gateway information"
            )

        return gateway["sGateway"]["NetworkLANMAC"]

    # ------------------------------------------------------------------
    #  Polling
    # ------------------------------------------------------------------

    async def poll_status(self) -> None:
        """Poll every device category from the gateway.

        A failing ``readall`` propagates. A failing category is logged and
        keeps its previous snapshot; the other categories still refresh.
        Shutter endpoints found behind the switch bucket are reported as covers.
        """
        all_devices = await self._make_encrypted_request(
            COMMAND_READ, {"requestAttr": REQUEST_READALL}
        )
        buckets = classify_devices(all_devices.get("id") or [])

        refreshers: tuple[
            tuple[str, list[Any], Callable[[list[Any]], Awaitable[None]]], ...
        ] = (
            ("gateway", buckets.gateway, self._refresh_gateway_device),
            ("climate", buckets.climate, self._refresh_climate_devices),
            (
                "binary_sensor",
                buckets.binary_sensor,
                self._refresh_binary_sensor_devices,
            ),
            ("sensor", buckets.sensor, self._refresh_sensor_devices),
            ("switch", buckets.switch, self._refresh_switch_devices),
            ("cover", buckets.cover, self._refresh_cover_devices),
        )

        for label, devices, refresher in refreshers:
            try:
                await refresher(devices)
            except Exception:
                _LOGGER.exception("Failed to poll %s devices", label)

    async def _read_device_details(self, devices: list[Any]) -> list[Any]:
        """Fetch full capability data for the given readall records."""
        status = await self._make_encrypted_request(
            COMMAND_READ,
            {
                "requestAttr": REQUEST_DEVICEID,
                "id": [{"data": d["data"]} for d in devices],
            },
        )
        return status.get("id") or []

    # ------------------------------------------------------------------
    #  Per-category refresh helpers
    # ------------------------------------------------------------------

    async def _refresh_gateway_device(self, devices: list[Any]) -> None:
        # readall already carries the whole sGateway group; no detail fetch.
        gateway_device: GatewayDevice | None = None
        for ds in devices:
            try:
                gateway_device = decode_gateway(ds) or gateway_device
            except Exception:
                _LOGGER.exception("Failed to parse gateway %s", ds.get("data"))

        self._gateway_device = gateway_device
        _LOGGER.debug("Refreshed gateway device")

    async def _refresh_climate_devices(self, devices: list[Any]) -> None:
        if not devices:
            self._climate_devices = {}
            return

        details = await self._read_device_details(devices)
        self._climate_devices = decode_records(details, decode_climate, "climate")
        _LOGGER.debug(
            "Refreshed %s climate devices", len(self._climate_devices)
        )

    async def _refresh_binary_sensor_devices(self, devices: list[Any]) -> None:
        if not devices:
            self._binary_sensor_devices = {}
            return

        details = await self._read_device_details(devices)
        self._binary_sensor_devices = decode_records(
            details, decode_binary_sensor, "binary sensor"
        )
        _LOGGER.debug(
            "Refreshed %s binary sensor devices",
            len(self._binary_sensor_devices),
        )

    async def _refresh_sensor_devices(self, devices: list[Any]) -> None:
        if not devices:
            self._sensor_devices = {}
            return

        details = await self._read_device_details(devices)
        self._sensor_devices = decode_records(details, decode_sensor, "sensor")
        _LOGGER.debug("Refreshed %s sensor devices", len(self._sensor_devices))

    async def _refresh_switch_devices(self, devices: list[Any]) -> None:
        if not devices:
            self._switch_devices = {}
            self._shutter_endpoints = {}
            return

        details = await self._read_device_details(devices)
        # Shutter relays can look like plain switches in readall; only the
        # detailed record shows their sLevelS group.
        shutters = [
            ds
            for ds in details
            if isinstance(ds, dict) and ds.get("sLevelS") is not None
        ]
        self._switch_devices = decode_records(details, decode_switch, "switch")
        self._shutter_endpoints = decode_records(shutters, decode_cover, "cover")
        _LOGGER.debug(
            "Refreshed %s switch devices (%s shutter endpoints)",
            len(self._switch_devices),
            len(self._shutter_endpoints),
        )

    async def _refresh_cover_devices(self, devices: list[Any]) -> None:
        if not devices:
            self._cover_devices = dict(self._shutter_endpoints)
            return

        details = await self._read_device_details(devices)
        self._cover_devices = {
            **self._shutter_endpoints,
            **decode_records(details, decode_cover, "cover"),
        }
        _LOGGER.debug("Refreshed %s cover devices", len(self._cover_devices))

    # ------------------------------------------------------------------
    #  Getters
    # ------------------------------------------------------------------

    def get_gateway_device(self) -> GatewayDevice | None:
        return self._gateway_device

    def get_climate_devices(self) -> dict[str, ClimateDevice]:
        return self._climate_devices

    def get_climate_device(self, device_id: str) -> ClimateDevice | None:
        return self._climate_devices.get(device_id)

    def get_binary_sensor_devices(self) -> dict[str, BinarySensorDevice]:
        return self._binary_sensor_devices

    def get_binary_sensor_device(
        self, device_id: str
    ) -> BinarySensorDevice | None:
        return self._binary_sensor_devices.get(device_id)

    def get_switch_devices(self) -> dict[str, SwitchDevice]:
        return self._switch_devices

    def get_switch_device(self, device_id: str) -> SwitchDevice | None:
        return self._switch_devices.get(device_id)

    def get_cover_devices(self) -> dict[str, CoverDevice]:
        return self._cover_devices

    def get_cover_device(self, device_id: str) -> CoverDevice | None:
        return self._cover_devices.get(device_id)

    def get_sensor_devices(self) -> dict[str, SensorDevice]:
        return self._sensor_devices

    def get_sensor_device(self, device_id: str) -> SensorDevice | None:
        return self._sensor_devices.get(device_id)

    def _require_climate_device(self, device_id: str) -> ClimateDevice:
        device = self.get_climate_device(device_id)
        if device is None:
            raise IT600CommandError(f"Climate device not found: {device_id}")
        return device

    def _require_switch_device(self, device_id: str) -> SwitchDevice:
        device = self.get_switch_device(device_id)
        if device is None:
            raise IT600CommandError(f"Switch device not found: {device_id}")
        return device

    def _require_cover_device(self, device_id: str) -> CoverDevice:
        device = self.get_cover_device(device_id)
        if device is None:
            raise IT600CommandError(f"Cover device not found: {device_id}")
        return device

    async def _write(self, data: dict[str, Any], fragment: dict[str, Any]) -> None:
        await self._make_encrypted_request(
            COMMAND_WRITE, build_write_request(data, fragment)
        )

    # ------------------------------------------------------------------
    #  Commands: covers
    # ------------------------------------------------------------------

    async def set_cover_position(self, device_id: str, position: int) -> None:
        """Set cover position: 0 = closed, 100 = fully open."""
        fragment = encode_cover_position(position)
        device = self._require_cover_device(device_id)
        await self._write(device.data, fragment)

    async def open_cover(self, device_id: str) -> None:
        await self.set_cover_position(device_id, COVER_POSITION_MAX)

    async def close_cover(self, device_id: str) -> None:
        await self.set_cover_position(device_id, COVER_POSITION_MIN)

    # ------------------------------------------------------------------
    #  Commands: switches
    # ------------------------------------------------------------------

    async def turn_on_switch_device(self, device_id: str) -> None:
        device = self._require_switch_device(device_id)
        await self._write(device.data, encode_switch(True))

    async def turn_off_switch_device(self, device_id: str) -> None:
        device = self._require_switch_device(device_id)
        await self._write(device.data, encode_switch(False))

    # ------------------------------------------------------------------
    #  Commands: climate
    # ------------------------------------------------------------------

    async def set_climate_device_preset(
        self, device_id: str, preset: str
    ) -> None:
        device = self._require_climate_device(device_id)
        await self._write(device.data, encode_preset(device, preset))

    async def set_climate_device_mode(self, device_id: str, mode: str) -> None:
        device = self._require_climate_device(device_id)
        await self._write(device.data, encode_hvac_mode(device, mode))

    async def set_climate_device_fan_mode(
        self, device_id: str, mode: str
    ) -> None:
        device = self._require_climate_device(device_id)
        await self._write(device.data, encode_fan_mode(device, mode))

    async def set_climate_device_locked(
        self, device_id: str, locked: bool
    ) -> None:
        device = self._require_climate_device(device_id)
        await self._write(device.data, encode_locked(device, locked))

    async def set_climate_device_temperature(
        self, device_id: str, setpoint_celsius: float
    ) -> None:
        device = self._require_climate_device(device_id)
        await self._write(
            device.data, encode_temperature(device, setpoint_celsius)
        )

    # ------------------------------------------------------------------
    #  Encrypted exchange
    # ------------------------------------------------------------------

    async def _make_encrypted_request(
        self, command: str, request_body: dict[str, Any]
    ) -> Any:
        async with self._serializer:
            body_json = json.dumps(request_body)

            if self._debug:
                _LOGGER.debug("Gateway request: POST %s\n%s", command, body_json)

            raw = await self._transport.send(
                command, self._encryptor.encrypt(body_json)
            )

            try:
                decrypted = self._encryptor.decrypt(raw)
                if self._debug:
                    _LOGGER.debug("Gateway response:\n%s", decrypted)
                result = json.loads(decrypted)
            except ValueError as exc:
                # Bad padding, UTF-8 or JSON: wrong key, or not the gateway.
                raise IT600ConnectionError(
                    "Could not decode iT600 gateway response"
                ) from exc

            try:
                status = result.get("status")
            except Exception as exc:
                _LOGGER.error(
                    "Unexpected error: %s / %s", type(exc).__name__, exc
                )
                raise IT600CommandError(
                    "Unknown error communicating with iT600 gateway"
                ) from exc

            if status != STATUS_SUCCESS:
                _LOGGER.error("%s failed: %s", command, repr(request_body))
                raise IT600CommandError(
                    f"Gateway rejected '{command}': {repr(request_body)}"
                )

            return result

    # ------------------------------------------------------------------
    #  Session lifecycle
    # ------------------------------------------------------------------

    async def close(self) -> None:
        """Close the HTTP session if we own it."""
        await self._transport.close()

    async def __aenter__(self) -> IT600Gateway:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()
