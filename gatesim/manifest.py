"""Region manifest loading.

A manifest is a YAML (or JSON) document holding either a list of region
records or a mapping with a ``regions`` list. Each record needs ``id``,
``countryCode`` and ``name``. ``scheduleDropTime`` may be a number or a
string and is truncated to its leading integer. snake_case spellings of
the keys are accepted as well.
"""

from __future__ import annotations

import logging
import math
import re
from pathlib import Path
from typing import Any, Mapping

import yaml

from .config.validators import as_mapping, required
from .domain.region import IssueDetails, Region, RegionState
from .domain.topology import DEFAULT_TOPOLOGY, PipelineTopology
from .errors import ManifestError

logger = logging.getLogger(__name__)

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")

_ALIASES = {
    "country_code": "countryCode",
    "schedule_drop_time": "scheduleDropTime",
    "issue_details": "issueDetails",
    "ticket_id": "ticketId",
}


def _canonical_keys(record: Mapping[str, Any]) -> dict[str, Any]:
    return {_ALIASES.get(key, key): value for key, value in record.items()}


def _parse_hours(value: Any, key: str, context: str) -> int:
    """Integer hours with base-10 parseInt semantics: leading digits win, the rest is ignored."""
    if isinstance(value, bool):
        raise ValueError(f"{context}.{key} must be an integer, got {value!r}.")
    if isinstance(value, (int, float)):
        if not math.isfinite(value):
            raise ValueError(f"{context}.{key} must be finite, got {value!r}.")
        return int(value)
    match = _INT_PREFIX.match(str(value))
    if match is None:
        raise ValueError(f"{context}.{key} must start with an integer, got {value!r}.")
    return int(match.group(1))


def _parse_issue(raw: Any, context: str) -> IssueDetails | None:
    if raw is None:
        return None
    issue = _canonical_keys(as_mapping(raw, context))
    return IssueDetails(
        ticket_id=str(required(issue, "ticketId", context)),
        description=str(issue.get("description", "")),
    )


def parse_region_record(raw: Any, idx: int, topology: PipelineTopology = DEFAULT_TOPOLOGY) -> Region:
    """Normalize one manifest record into a Region at the first gate."""
    context = f"regions[{idx}]"
    record = _canonical_keys(as_mapping(raw, context))

    drop_raw = record.get("scheduleDropTime")
    drop = None if drop_raw in (None, "") else _parse_hours(drop_raw, "scheduleDropTime", context)

    if "state" in record:
        state = RegionState(str(record["state"]).upper())
    else:
        state = RegionState.SCHEDULED if drop is not None else RegionState.IDLE

    first = topology.first_gate
    return Region(
        id=str(required(record, "id", context)),
        country_code=str(required(record, "countryCode", context)),
        name=str(required(record, "name", context)),
        current_phase_id=first.phase_id,
        current_gate_id=first.id,
        state=state,
        progress=0,
        issue=_parse_issue(record.get("issueDetails"), f"{context}.issueDetails"),
        schedule_drop_time=drop,
    )


def parse_manifest(data: Any, topology: PipelineTopology = DEFAULT_TOPOLOGY) -> list[Region]:
    """Parse an already-decoded manifest payload."""
    try:
        if isinstance(data, Mapping):
            data = required(data, "regions", "manifest")
        if not isinstance(data, list):
            raise ValueError("manifest must be a list of region records.")

        regions = [parse_region_record(raw, idx, topology) for idx, raw in enumerate(data)]
        seen: set[str] = set()
        for region in regions:
            if region.id in seen:
                raise ValueError(f"Duplicate region id '{region.id}' in manifest.")
            seen.add(region.id)
    except (TypeError, ValueError) as exc:
        raise ManifestError(str(exc)) from exc
    return regions


def load_manifest(path: str | Path, topology: PipelineTopology = DEFAULT_TOPOLOGY) -> list[Region]:
    """Read and parse a manifest file."""
    manifest_path = Path(path)
    try:
        with manifest_path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as exc:
        raise ManifestError(f"Cannot read manifest '{manifest_path}': {exc}") from exc
    except yaml.YAMLError as exc:
        raise ManifestError(f"Manifest '{manifest_path}' is not valid YAML/JSON: {exc}") from exc

    regions = parse_manifest(data, topology)
    logger.debug("Parsed %d region records from %s", len(regions), manifest_path)
    return regions
