"""Zone access resolution.

The resolver is a pure function over an AccessContext. It runs an ordered
list of named stages; each stage either decides (ALLOW / DENY) or passes
(CONTINUE). The first stage that decides wins, so the tie-break order is
exactly the order of STAGES:

1. blocked              - a blocked attendee is denied everywhere
2. individual_override  - a per-attendee, per-zone row is authoritative
3. category_rules       - zone rules matched against the attendee category
4. default              - allow
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum

from zones.domain.models import Attendee, AttendeeZoneAccess, EventZone, ZoneAccessRule

ATTENDEE_BLOCKED = "Attendee is blocked"
OVERRIDE_GRANTED = "Access granted (individual override)"
OVERRIDE_DENIED = "Access denied (individual override)"
CATEGORY_GRANTED = "Access granted by category"
CATEGORY_DENIED = "Access denied for category: {category}"
CATEGORY_NOT_AUTHORIZED = "Category not authorized for this zone"
DEFAULT_GRANTED = "Access granted (default)"
MUST_REGISTER_FIRST = "Attendee must register first"


class Decision(Enum):
    ALLOW = "allow"
    DENY = "deny"
    CONTINUE = "continue"


@dataclass(frozen=True)
class StageResult:
    decision: Decision
    reason: str = ""

    @classmethod
    def allow(cls, reason: str) -> "StageResult":
        return cls(Decision.ALLOW, reason)

    @classmethod
    def deny(cls, reason: str) -> "StageResult":
        return cls(Decision.DENY, reason)

    @classmethod
    def proceed(cls) -> "StageResult":
        return cls(Decision.CONTINUE)


@dataclass(frozen=True)
class AccessContext:
    """Everything the resolver needs, loaded up front by the caller."""

    attendee: Attendee
    zone: EventZone
    override: AttendeeZoneAccess | None = None
    rules: tuple[ZoneAccessRule, ...] = ()


@dataclass(frozen=True)
class AccessVerdict:
    allowed: bool
    reason: str
    stage: str


Stage = Callable[[AccessContext], StageResult]


def blocked(ctx: AccessContext) -> StageResult:
    if ctx.attendee.blocked:
        return StageResult.deny(ATTENDEE_BLOCKED)
    return StageResult.proceed()


def individual_override(ctx: AccessContext) -> StageResult:
    if ctx.override is None:
        return StageResult.proceed()
    if ctx.override.allowed:
        return StageResult.allow(OVERRIDE_GRANTED)
    return StageResult.deny(OVERRIDE_DENIED)


def category_rules(ctx: AccessContext) -> StageResult:
    category = ctx.attendee.category
    # An uncategorized attendee falls through to the default stage even when
    # the zone has rules.
    if category is None or not ctx.rules:
        return StageResult.proceed()
    for rule in ctx.rules:
        if rule.category == category:
            if rule.allowed:
                return StageResult.allow(CATEGORY_GRANTED)
            return StageResult.deny(CATEGORY_DENIED.format(category=category))
    return StageResult.deny(CATEGORY_NOT_AUTHORIZED)


def default(ctx: AccessContext) -> StageResult:
    return StageResult.allow(DEFAULT_GRANTED)


STAGES: tuple[tuple[str, Stage], ...] = (
    ("blocked", blocked),
    ("individual_override", individual_override),
    ("category_rules", category_rules),
    ("default", default),
)


def resolve(
    ctx: AccessContext,
    stages: Sequence[tuple[str, Stage]] = STAGES,
) -> AccessVerdict:
    """Return the verdict of the first stage that decides."""
    for name, stage in stages:
        result = stage(ctx)
        if result.decision is not Decision.CONTINUE:
            return AccessVerdict(
                allowed=result.decision is Decision.ALLOW,
                reason=result.reason,
                stage=name,
            )
    raise RuntimeError("No access stage reached a decision")


def registration_gate(attendee: Attendee, zone: EventZone) -> StageResult:
    """Read-only registration prerequisite for non-registration zones.

    Registration zones never block here: passing through one is what
    registers the attendee.
    """
    if zone.is_registration_zone or not zone.requires_registration:
        return StageResult.proceed()
    if attendee.is_registered:
        return StageResult.proceed()
    return StageResult.deny(MUST_REGISTER_FIRST)


def needs_registration(attendee: Attendee, zone: EventZone) -> bool:
    """True when an admitted check-in into zone should register the attendee."""
    return zone.is_registration_zone and not attendee.is_registered
