"""Tests for readall record classification."""

from __future__ import annotations

import pytest

from salus_it600.classifier import classify_devices, classify_record


def _rec(uid: str, **groups) -> dict:
    return {"data": {"UniID": uid}, **groups}


class TestClassifyRecord:
    """Priority order of the bucket predicates."""

    @pytest.mark.parametrize(
        ("groups", "expected"),
        [
            ({"sGateway": {"NetworkLANMAC": "AA:BB"}}, "gateway"),
            ({"sIT600TH": {}}, "climate"),
            ({"sTherS": {}}, "climate"),
            ({"sIASZS": {}}, "binary_sensor"),
            (
                {"sBasicS": {"ModelIdentifier": "it600MINITRV"}},
                "binary_sensor",
            ),
            (
                {"sBasicS": {"ModelIdentifier": "it600Receiver"}},
                "binary_sensor",
            ),
            ({"sTempS": {}}, "sensor"),
            ({"sOnOffS": {}}, "switch"),
            ({"sLevelS": {}}, "cover"),
        ],
    )
    def test_single_group(self, groups, expected):
        assert classify_record(_rec("x", **groups)) == expected

    def test_gateway_beats_thermostat(self):
        record = _rec(
            "x",
            sGateway={"NetworkLANMAC": "AA:BB"},
            sIT600TH={"HoldType": 0},
        )
        assert classify_record(record) == "gateway"

    def test_empty_mac_is_not_gateway(self):
        record = _rec("x", sGateway={"NetworkLANMAC": ""}, sIT600TH={})
        assert classify_record(record) == "climate"

    def test_climate_beats_alarm(self):
        assert classify_record(_rec("x", sTherS={}, sIASZS={})) == "climate"

    def test_alarm_beats_temperature(self):
        assert classify_record(_rec("x", sIASZS={}, sTempS={})) == "binary_sensor"

    def test_temperature_beats_switch(self):
        assert classify_record(_rec("x", sTempS={}, sOnOffS={})) == "sensor"

    def test_switch_beats_cover(self):
        assert classify_record(_rec("x", sOnOffS={}, sLevelS={})) == "switch"

    def test_unknown_model_is_ignored(self):
        assert classify_record(_rec("x", sBasicS={"ModelIdentifier": "XYZ"})) is None

    def test_no_groups_is_ignored(self):
        assert classify_record(_rec("x")) is None

    def test_null_gateway_group(self):
        assert classify_record(_rec("x", sGateway=None, sTempS={})) == "sensor"

    def test_null_model_group(self):
        assert classify_record(_rec("x", sBasicS=None, sOnOffS={})) == "switch"

    @pytest.mark.parametrize(
        "record",
        [
            {"data": None, "sTempS": {}},
            {"sTempS": {}},
            None,
            "garbage",
        ],
    )
    def test_unaddressable_record_is_ignored(self, record):
        assert classify_record(record) is None


class TestClassifyDevices:
    """Partitioning a full readall list."""

    def test_each_record_in_exactly_one_bucket(self):
        records = [
            _rec("gw", sGateway={"NetworkLANMAC": "AA"}, sIT600TH={}),
            _rec("th", sIT600TH={}),
            _rec("door", sIASZS={}),
            _rec("temp", sTempS={}),
            _rec("plug", sOnOffS={}),
            _rec("blind", sLevelS={}),
            _rec("other", sZDO={}),
        ]

        buckets = classify_devices(records)

        assert [r["data"]["UniID"] for r in buckets.gateway] == ["gw"]
        assert [r["data"]["UniID"] for r in buckets.climate] == ["th"]
        assert [r["data"]["UniID"] for r in buckets.binary_sensor] == ["door"]
        assert [r["data"]["UniID"] for r in buckets.sensor] == ["temp"]
        assert [r["data"]["UniID"] for r in buckets.switch] == ["plug"]
        assert [r["data"]["UniID"] for r in buckets.cover] == ["blind"]

        total = sum(
            len(getattr(buckets, name))
            for name in (
                "gateway",
                "climate",
                "binary_sensor",
                "sensor",
                "switch",
                "cover",
            )
        )
        assert total == 6

    def test_malformed_record_does_not_stop_partition(self):
        records = [
            _rec("bad", sGateway=None),
            {"data": None, "sIT600TH": {}},
            _rec("temp", sTempS={}),
        ]

        buckets = classify_devices(records)

        assert [r["data"]["UniID"] for r in buckets.sensor] == ["temp"]
        assert buckets.gateway == []
        assert buckets.climate == []

    def test_empty_input(self):
        buckets = classify_devices([])
        assert buckets.climate == []
        assert buckets.gateway == []
