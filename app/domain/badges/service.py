import logging
from dataclasses import dataclass
from typing import Callable, FrozenSet, Iterable, List, Set

from app.core.utils_time import utcnow, as_utc, hours_between
from app.domain.snapshot import AgentSnapshot
from app.domain.store import RecordStore, DuplicateRecord, StoreError
from app.models.badge import Badge

log = logging.getLogger("badges")

class RuleEvaluationError(Exception): ...

Predicate = Callable[[AgentSnapshot, FrozenSet[str]], bool]

@dataclass(frozen=True)
class BadgeRule:
    badge_type: str
    name: str
    description: str
    points: int
    predicate: Predicate

REQUIRED_DOCUMENTS = ("w9", "direct_deposit", "eo_certificate", "id_verification")
READY_TO_SELL = "ready_to_sell"

# --------------------------
# Helpers sobre el snapshot
# --------------------------

def _completed(items) -> list:
    return [i for i in items if i.is_completed]

def _all_completed(items) -> bool:
    return bool(items) and all(i.is_completed for i in items)

def _find_item(items, fragment: str):
    return next((i for i in items if fragment in (i.item_key or "")), None)

def _appointed_count(snapshot: AgentSnapshot) -> int:
    return sum(1 for a in snapshot.appointments if a.appointment_status == "appointed")

# --------------------------
# Predicados (puros: solo leen el snapshot)
# --------------------------

def quick_starter(snapshot: AgentSnapshot, earned: FrozenSet[str]) -> bool:
    created = snapshot.agent.created_date
    dates = [i.completed_date for i in _completed(snapshot.checklist_items) if i.completed_date]
    if not created or not dates:
        return False
    first = min(dates, key=as_utc)
    return hours_between(first, created) <= 24

def document_master(snapshot: AgentSnapshot, earned: FrozenSet[str]) -> bool:
    uploaded = {d.document_type for d in snapshot.documents}
    return all(t in uploaded for t in REQUIRED_DOCUMENTS)

def license_verified(snapshot: AgentSnapshot, earned: FrozenSet[str]) -> bool:
    return any(l.status == "active" and l.nipr_verified for l in snapshot.licenses)

def nipr_verified(snapshot: AgentSnapshot, earned: FrozenSet[str]) -> bool:
    return snapshot.agent.nipr_status == "verified" or any(l.nipr_verified for l in snapshot.licenses)

def ahip_certified(snapshot: AgentSnapshot, earned: FrozenSet[str]) -> bool:
    item = _find_item(snapshot.checklist_items, "ahip")
    return bool(item and item.is_completed) or bool(snapshot.agent.ahip_completion_date)

def compliance_champion(snapshot: AgentSnapshot, earned: FrozenSet[str]) -> bool:
    bg = _find_item(snapshot.checklist_items, "background")
    training = _find_item(snapshot.checklist_items, "compliance_training")
    both = bool(bg and bg.is_completed and training and training.is_completed)
    return both or snapshot.agent.background_check_status == "passed"

def first_carrier(snapshot: AgentSnapshot, earned: FrozenSet[str]) -> bool:
    return _appointed_count(snapshot) >= 1

def multi_carrier(snapshot: AgentSnapshot, earned: FrozenSet[str]) -> bool:
    return _appointed_count(snapshot) >= 3

def speed_demon(snapshot: AgentSnapshot, earned: FrozenSet[str]) -> bool:
    agent = snapshot.agent
    if agent.onboarding_status != READY_TO_SELL or not _all_completed(snapshot.checklist_items):
        return False
    created = as_utc(agent.created_date)
    last = max([as_utc(i.completed_date) for i in snapshot.checklist_items if i.completed_date] + [created])
    return (last - created).total_seconds() <= 7 * 86400

def onboarding_complete(snapshot: AgentSnapshot, earned: FrozenSet[str]) -> bool:
    return snapshot.agent.onboarding_status == READY_TO_SELL and _all_completed(snapshot.checklist_items)

BADGE_RULES = (
    BadgeRule("quick_starter", "Quick Starter", "Completed first checklist item within 24 hours", 50, quick_starter),
    BadgeRule("document_master", "Document Master", "Uploaded all required documents", 100, document_master),
    BadgeRule("license_verified", "License Verified", "State license verified successfully", 75, license_verified),
    BadgeRule("nipr_verified", "NIPR Verified", "Completed NIPR verification", 100, nipr_verified),
    BadgeRule("ahip_certified", "AHIP Certified", "Completed AHIP certification", 150, ahip_certified),
    BadgeRule("compliance_champion", "Compliance Champion", "Passed background check and compliance training", 100, compliance_champion),
    BadgeRule("first_carrier", "First Carrier", "Completed first carrier appointment", 125, first_carrier),
    BadgeRule("multi_carrier", "Multi-Carrier Pro", "Appointed with 3+ carriers", 200, multi_carrier),
    BadgeRule("speed_demon", "Speed Demon", "Completed onboarding in under 7 days", 250, speed_demon),
    BadgeRule("onboarding_complete", "Onboarding Champion", "Successfully completed all onboarding steps", 500, onboarding_complete),
)

# --------------------------
# Motor
# --------------------------

def satisfied_rules(snapshot: AgentSnapshot, earned: Iterable[str] = (),
                    rules: Iterable[BadgeRule] = BADGE_RULES) -> List[BadgeRule]:
    """
    Evalúa cada regla aún no ganada. Una regla que lanza excepción se registra y se
    salta: nunca aborta la pasada completa.
    """
    earned = frozenset(earned)
    out: List[BadgeRule] = []
    for rule in rules:
        if rule.badge_type in earned:
            continue
        try:
            ok = rule.predicate(snapshot, earned)
        except Exception as e:
            err = RuleEvaluationError(f"{rule.badge_type}: {e!r}")
            log.exception("badge rule failed, skipping: %s", err)
            continue
        if ok:
            out.append(rule)
    return out

def evaluate_and_award(store: RecordStore, agent_id: int, snapshot: AgentSnapshot,
                       existing_badges: Iterable = (), now=None,
                       rules: Iterable[BadgeRule] = BADGE_RULES) -> List[Badge]:
    """
    Devuelve SOLO las insignias creadas en esta pasada. Idempotente: si otra pasada
    concurrente ya creó la misma (agent_id, badge_type), el store lo rechaza y se omite.
    """
    earned: Set[str] = {b.badge_type for b in existing_badges}
    awarded: List[Badge] = []

    for rule in satisfied_rules(snapshot, earned, rules):
        try:
            badge = store.create(Badge, {
                "agent_id": agent_id,
                "badge_type": rule.badge_type,
                "badge_name": rule.name,
                "badge_description": rule.description,
                "points": rule.points,
                "earned_date": now or utcnow(),
            })
        except DuplicateRecord:
            log.debug("badge %s already awarded to agent %s", rule.badge_type, agent_id)
            continue
        except StoreError as e:
            log.warning("badge %s for agent %s not stored: %s", rule.badge_type, agent_id, e)
            continue
        awarded.append(badge)

    if awarded:
        log.info("agent %s earned %s", agent_id, [b.badge_type for b in awarded])
    return awarded

def list_badges(store: RecordStore, agent_id: int) -> List[Badge]:
    return store.filter(Badge, {"agent_id": agent_id}, order_by="earned_date")

def total_points(badges: Iterable) -> int:
    return sum(int(b.points or 0) for b in badges)
