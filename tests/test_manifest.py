"""Manifest loading tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from gatesim.domain import RegionState
from gatesim.errors import ManifestError
from gatesim.manifest import load_manifest, parse_manifest


pytestmark = pytest.mark.unit

EXAMPLES = Path(__file__).resolve().parents[1] / "examples"


def test_records_are_normalized_to_first_gate() -> None:
    regions = parse_manifest(
        [
            {"id": "1", "countryCode": "DE", "name": "Germany", "scheduleDropTime": "12", "progress": 70},
            {"id": "2", "country_code": "JP", "name": "Japan"},
        ]
    )
    de, jp = regions
    assert (de.current_phase_id, de.current_gate_id, de.progress) == ("PHASE0", "PRE", 0)
    assert de.schedule_drop_time == 12
    assert de.state is RegionState.SCHEDULED
    assert jp.country_code == "JP"
    assert jp.state is RegionState.IDLE
    assert jp.schedule_drop_time is None


def test_mapping_with_regions_key_and_issue_state() -> None:
    regions = parse_manifest(
        {
            "regions": [
                {
                    "id": "1",
                    "countryCode": "DE",
                    "name": "Germany",
                    "state": "late",
                    "issueDetails": {"ticketId": "SLA-BREACH", "description": "Automated Reminder Sent"},
                }
            ]
        }
    )
    assert regions[0].state is RegionState.LATE
    assert regions[0].issue is not None
    assert regions[0].issue.ticket_id == "SLA-BREACH"


@pytest.mark.parametrize(
    "data, message",
    [
        ("nope", "list"),
        ([{"id": "1", "countryCode": "DE"}], "Missing required key 'name'"),
        ([{"id": "1", "countryCode": "DE", "name": "x", "scheduleDropTime": "soon"}], "start with an integer"),
        ([{"id": "1", "countryCode": "DE", "name": "x", "state": "BOGUS"}], "BOGUS"),
        ([{"id": "1", "countryCode": "DE", "name": "x", "state": "ERROR"}], "requires issue"),
        ([{"id": "1", "countryCode": "DE", "name": "x"}, {"id": "1", "countryCode": "FR", "name": "y"}], "Duplicate"),
    ],
)
def test_invalid_manifest_raises(data: object, message: str) -> None:
    with pytest.raises(ManifestError, match=message):
        parse_manifest(data)


def test_load_json_and_yaml_files(tmp_path: Path) -> None:
    path = tmp_path / "schedule.json"
    path.write_text(json.dumps([{"id": "9", "countryCode": "BR", "name": "Brazil", "scheduleDropTime": 4}]), encoding="utf-8")
    assert load_manifest(path)[0].schedule_drop_time == 4
    assert len(load_manifest(EXAMPLES / "demo_schedule.yaml")) == 8


def test_load_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(ManifestError, match="Cannot read"):
        load_manifest(tmp_path / "missing.json")


@pytest.mark.parametrize("raw", ["10.5", 10.5, "10h", " 10", 10])
def test_drop_time_truncates_to_leading_integer(raw: object) -> None:
    regions = parse_manifest([{"id": "1", "countryCode": "DE", "name": "Germany", "scheduleDropTime": raw}])
    assert regions[0].schedule_drop_time == 10
