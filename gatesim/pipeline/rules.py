"""Per-state transition rules.

Each rule consumes draws from ``ctx.draws`` in a fixed order so a scripted
draw sequence replays a scenario exactly:

* PASSED, ERROR, AUTO_HEALING, IDLE, LATE: one float.
* SCHEDULED: nothing before the drop time (or without one), one float once
  it is due.
* PROCESSING: one float for the issue check; on an issue a second float
  picks ERROR vs AUTO_HEALING and one integer fills the ticket number;
  otherwise one integer is the progress step.
"""

from __future__ import annotations

from collections.abc import Callable

from ..domain.event_log import LogEvent, LogType
from ..domain.region import IssueDetails, Region, RegionState
from .context import RuleContext, Transition

Rule = Callable[[Region, RuleContext], Transition]

SLA_TICKET = "SLA-BREACH"
RECOVERY_TICKET = "INC-REC"


def _event(kind: LogType, message: str, region: Region, gate_id: str | None = None) -> LogEvent:
    return LogEvent(type=kind, message=message, region_code=region.country_code, gate_id=gate_id)


def passed_rule(region: Region, ctx: RuleContext) -> Transition:
    """Completed regions occasionally start a fresh cycle."""
    if ctx.draws.random() >= ctx.probabilities.restart:
        return Transition(region)
    first = ctx.topology.first_gate
    restarted = region.evolve(
        state=RegionState.PROCESSING,
        progress=0,
        current_phase_id=first.phase_id,
        current_gate_id=first.id,
        issue=None,
    )
    msg = f"{region.country_code} cycle restarted. Data ingestion initiating."
    return Transition(restarted, _event(LogType.SYSTEM, msg, region, first.id))


def error_rule(region: Region, ctx: RuleContext) -> Transition:
    if ctx.draws.random() >= ctx.probabilities.error_to_healing:
        return Transition(region)
    ticket = region.issue.ticket_id if region.issue and region.issue.ticket_id else RECOVERY_TICKET
    healing = region.evolve(
        state=RegionState.AUTO_HEALING,
        issue=IssueDetails(ticket_id=ticket, description="Automated recovery protocol initiated."),
    )
    gate = region.current_gate_id
    msg = f"{region.country_code} {gate} attempting automated recovery from critical failure..."
    return Transition(healing, _event(LogType.AUTO_HEALING, msg, region, gate))


def auto_healing_rule(region: Region, ctx: RuleContext) -> Transition:
    if ctx.draws.random() >= ctx.probabilities.healing_success:
        return Transition(region)
    gate = region.current_gate_id
    msg = f"{region.country_code} auto-healing successful. Resuming {gate} evaluation."
    return Transition(region.evolve(state=RegionState.PROCESSING, issue=None), _event(LogType.PASSED, msg, region, gate))


def idle_rule(region: Region, ctx: RuleContext) -> Transition:
    if ctx.draws.random() >= ctx.probabilities.idle_start:
        return Transition(region)
    gate = region.current_gate_id
    msg = f"{region.country_code} entering main processing queue for {gate}..."
    return Transition(region.evolve(state=RegionState.PROCESSING), _event(LogType.PROCESSING, msg, region, gate))


def scheduled_rule(region: Region, ctx: RuleContext) -> Transition:
    """Wake the region once the virtual clock reaches its drop time.

    A region without a drop time never comes due.
    """
    vt = ctx.virtual_time
    drop = region.schedule_drop_time
    if drop is None or vt < drop:
        return Transition(region)

    if ctx.draws.random() < ctx.probabilities.late_on_drop:
        late = region.evolve(
            state=RegionState.LATE,
            issue=IssueDetails(ticket_id=SLA_TICKET, description="Automated Reminder Sent"),
        )
        msg = f"[VT {vt}] {region.country_code} missed SLA drop window. Tagging as LATE. Automated Reminder Sent."
        return Transition(late, _event(LogType.LATE, msg, region))

    gate = region.current_gate_id
    msg = (
        f"[VT {vt}] {region.country_code} scheduled payload arrived at virtual hour {vt}. "
        "Entering main processing queue..."
    )
    return Transition(region.evolve(state=RegionState.PROCESSING), _event(LogType.PROCESSING, msg, region, gate))


def late_rule(region: Region, ctx: RuleContext) -> Transition:
    if ctx.draws.random() >= ctx.probabilities.late_recovery:
        return Transition(region)
    gate = region.current_gate_id
    msg = f"{region.country_code} delayed payload received. Initiating processing for {gate}..."
    return Transition(region.evolve(state=RegionState.PROCESSING, issue=None), _event(LogType.PROCESSING, msg, region, gate))


def _raise_issue(region: Region, ctx: RuleContext) -> Transition:
    gate = region.current_gate_id
    if ctx.draws.random() < ctx.probabilities.critical:
        ticket = f"INC{ctx.draws.integers(0, 999_999):06d}"
        failed = region.evolve(
            state=RegionState.ERROR,
            issue=IssueDetails(
                ticket_id=ticket,
                description=f"Rule validation failure detected by issuehandleragent at {gate}",
            ),
        )
        msg = f"{region.country_code} {gate} validation failed. System halted! Generating ticket {ticket}"
        return Transition(failed, _event(LogType.ERROR, msg, region, gate))

    ticket = f"TASK{ctx.draws.integers(0, 9_999):04d}"
    healing = region.evolve(
        state=RegionState.AUTO_HEALING,
        issue=IssueDetails(ticket_id=ticket, description="Formatting mismatch intercepted."),
    )
    msg = f"{region.country_code} {gate} detected minor anomaly. Intercepting for auto-resolution..."
    return Transition(healing, _event(LogType.AUTO_HEALING, msg, region, gate))


def processing_rule(region: Region, ctx: RuleContext) -> Transition:
    """Accumulate progress, or divert into an issue state."""
    probs = ctx.probabilities
    if ctx.draws.random() < probs.issue and region.current_gate_id not in ctx.issue_exempt_gates:
        return _raise_issue(region, ctx)

    progress = region.progress + ctx.draws.integers(probs.progress_step_min, probs.progress_step_max)
    if progress < 100:
        return Transition(region.evolve(progress=progress))

    nxt = ctx.topology.next_gate(region.current_gate_id)
    if nxt is None:
        msg = f"{region.country_code} Pipeline Complete! Final payload dispatched successfully."
        return Transition(region.evolve(state=RegionState.PASSED, progress=100), _event(LogType.PASSED, msg, region))

    advanced = region.evolve(
        state=RegionState.PROCESSING,
        progress=0,
        current_phase_id=nxt.phase_id,
        current_gate_id=nxt.id,
    )
    msg = f"{region.country_code} completed {region.current_gate_id}. Progressing to {nxt.id}."
    return Transition(advanced, _event(LogType.PASSED, msg, region, nxt.id))


def build_default_rules() -> dict[RegionState, Rule]:
    """Return default state -> rule mapping."""
    return {
        RegionState.PASSED: passed_rule,
        RegionState.ERROR: error_rule,
        RegionState.AUTO_HEALING: auto_healing_rule,
        RegionState.IDLE: idle_rule,
        RegionState.SCHEDULED: scheduled_rule,
        RegionState.LATE: late_rule,
        RegionState.PROCESSING: processing_rule,
    }
