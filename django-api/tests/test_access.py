"""Unit tests for the access resolver and the registration gate.

Run with: pytest tests/test_access.py -v
"""

import uuid
from datetime import datetime, timezone

from zones.domain import (
    Attendee,
    AttendeeId,
    AttendeeZoneAccess,
    EventId,
    EventZone,
    ZoneAccessRule,
    ZoneId,
)
from zones.domain.access import (
    ATTENDEE_BLOCKED,
    CATEGORY_GRANTED,
    CATEGORY_NOT_AUTHORIZED,
    DEFAULT_GRANTED,
    MUST_REGISTER_FIRST,
    OVERRIDE_DENIED,
    OVERRIDE_GRANTED,
    AccessContext,
    Decision,
    StageResult,
    blocked,
    category_rules,
    individual_override,
    needs_registration,
    registration_gate,
    resolve,
)

EVENT = EventId(uuid.uuid4())
REGISTERED_AT = datetime(2026, 5, 12, 9, tzinfo=timezone.utc)


def _zone(**fields) -> EventZone:
    values = {
        "id": ZoneId(uuid.uuid4()),
        "event_id": EVENT,
        "name": "Press Room",
        "zone_type": "press",
        "order_index": 0,
        "open_time": None,
        "close_time": None,
        "is_registration_zone": False,
        "requires_registration": False,
        "is_active": True,
    }
    values.update(fields)
    return EventZone(**values)


def _attendee(category: str | None = None, **fields) -> Attendee:
    values = {
        "id": AttendeeId(uuid.uuid4()),
        "event_id": EVENT,
        "code": "ABC123",
        "first_name": "Ada",
        "last_name": "Lovelace",
        "custom_fields": {"category": category} if category else {},
    }
    values.update(fields)
    return Attendee(**values)


def _context(attendee, zone, override=None, rules=()) -> AccessContext:
    return AccessContext(
        attendee=attendee, zone=zone, override=override, rules=tuple(rules)
    )


def _override(attendee, zone, allowed) -> AttendeeZoneAccess:
    return AttendeeZoneAccess(attendee_id=attendee.id, zone_id=zone.id, allowed=allowed)


def _rule(zone, category, allowed) -> ZoneAccessRule:
    return ZoneAccessRule(zone_id=zone.id, category=category, allowed=allowed)


class TestStages:
    """Each stage decides or passes on its own."""

    def test_blocked_stage_passes_unblocked(self):
        """Given an unblocked attendee, the blocked stage continues."""
        assert blocked(_context(_attendee(), _zone())) == StageResult.proceed()

    def test_override_stage_passes_without_override(self):
        """Given no override, the override stage continues."""
        result = individual_override(_context(_attendee(), _zone()))
        assert result.decision is Decision.CONTINUE

    def test_category_stage_passes_without_category(self):
        """Given an uncategorized attendee, the category stage continues."""
        zone = _zone()
        result = category_rules(
            _context(_attendee(), zone, rules=[_rule(zone, "VIP", True)])
        )
        assert result.decision is Decision.CONTINUE

    def test_category_stage_passes_without_rules(self):
        """Given a zone without rules, the category stage continues."""
        result = category_rules(_context(_attendee("Press"), _zone()))
        assert result.decision is Decision.CONTINUE

    def test_category_stage_denies_explicit_rule(self):
        """Given a matching rule with allowed=false, the category is denied."""
        zone = _zone()
        result = category_rules(
            _context(_attendee("Press"), zone, rules=[_rule(zone, "Press", False)])
        )
        assert result == StageResult.deny("Access denied for category: Press")


class TestResolve:
    """Tie-break order across the stages."""

    def test_blocked_attendee_denied_even_with_allowing_override(self):
        """Given a blocked attendee, no override or rule can grant access."""
        zone = _zone()
        attendee = _attendee("VIP", blocked=True)
        verdict = resolve(
            _context(
                attendee,
                zone,
                override=_override(attendee, zone, True),
                rules=[_rule(zone, "VIP", True)],
            )
        )

        assert not verdict.allowed
        assert verdict.reason == ATTENDEE_BLOCKED
        assert verdict.stage == "blocked"

    def test_override_deny_beats_category_allow(self):
        """Given a denying override and an allowing rule, the override wins."""
        zone = _zone()
        attendee = _attendee("VIP")
        verdict = resolve(
            _context(
                attendee,
                zone,
                override=_override(attendee, zone, False),
                rules=[_rule(zone, "VIP", True)],
            )
        )

        assert not verdict.allowed
        assert verdict.reason == OVERRIDE_DENIED

    def test_override_allow_beats_missing_category_rule(self):
        """Given an allowing override, an unmatched category does not deny."""
        zone = _zone()
        attendee = _attendee("Press")
        verdict = resolve(
            _context(
                attendee,
                zone,
                override=_override(attendee, zone, True),
                rules=[_rule(zone, "VIP", True)],
            )
        )

        assert verdict.allowed
        assert verdict.reason == OVERRIDE_GRANTED

    def test_matching_category_allowed(self):
        """Given a rule allowing the attendee's category, access is granted."""
        zone = _zone()
        verdict = resolve(
            _context(_attendee("VIP"), zone, rules=[_rule(zone, "VIP", True)])
        )

        assert verdict.allowed
        assert verdict.reason == CATEGORY_GRANTED

    def test_unmatched_category_denied_when_rules_exist(self):
        """Given rules that omit the category, access is denied."""
        zone = _zone()
        verdict = resolve(
            _context(_attendee("Press"), zone, rules=[_rule(zone, "VIP", True)])
        )

        assert not verdict.allowed
        assert verdict.reason == CATEGORY_NOT_AUTHORIZED

    def test_uncategorized_attendee_default_allowed_despite_rules(self):
        """Given an uncategorized attendee, the default stage allows."""
        zone = _zone()
        verdict = resolve(
            _context(_attendee(), zone, rules=[_rule(zone, "VIP", True)])
        )

        assert verdict.allowed
        assert verdict.reason == DEFAULT_GRANTED
        assert verdict.stage == "default"

    def test_zone_without_rules_default_allowed(self):
        """Given a zone without rules, a categorized attendee is allowed."""
        verdict = resolve(_context(_attendee("Press"), _zone()))

        assert verdict.allowed
        assert verdict.reason == DEFAULT_GRANTED

    def test_custom_stage_order_is_respected(self):
        """Given a custom stage order, the first deciding stage wins."""
        zone = _zone()
        attendee = _attendee(blocked=True)
        stages = (("override", individual_override), ("blocked", blocked))
        verdict = resolve(
            _context(attendee, zone, override=_override(attendee, zone, True)), stages
        )

        assert verdict.stage == "override"


class TestRegistrationGate:
    """Read-only registration prerequisite."""

    def test_unregistered_denied_where_registration_required(self):
        """Given a gated zone, an unregistered attendee must register first."""
        result = registration_gate(_attendee(), _zone(requires_registration=True))
        assert result == StageResult.deny(MUST_REGISTER_FIRST)

    def test_registered_passes(self):
        """Given a gated zone, a registered attendee passes."""
        attendee = _attendee(registered_at=REGISTERED_AT)
        result = registration_gate(attendee, _zone(requires_registration=True))
        assert result.decision is Decision.CONTINUE

    def test_zone_without_requirement_never_blocks(self):
        """Given a zone without the requirement, the gate always passes."""
        result = registration_gate(_attendee(), _zone())
        assert result.decision is Decision.CONTINUE

    def test_registration_zone_never_blocks(self):
        """Given a registration zone, the gate passes even when flagged."""
        zone = _zone(is_registration_zone=True, requires_registration=True)
        assert registration_gate(_attendee(), zone).decision is Decision.CONTINUE

    def test_needs_registration_only_once(self):
        """Only an unregistered attendee at a registration zone needs registering."""
        zone = _zone(is_registration_zone=True)
        registered = _attendee(registered_at=REGISTERED_AT)

        assert needs_registration(_attendee(), zone)
        assert not needs_registration(registered, zone)
        assert not needs_registration(_attendee(), _zone())
