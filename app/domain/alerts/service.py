"""
Correlación checklist <-> alertas.

- Al completar un item se resuelven las alertas abiertas asociadas a ese item.
- Los items incompletos que superan su plazo generan una alerta de atraso, una sola
  por (agent_id, alert_type) mientras siga sin resolver (la tabla lo garantiza con un
  índice único parcial, también entre pasadas concurrentes).

Ambas direcciones son idempotentes: correr dos veces sobre el mismo estado no produce
efectos nuevos.
"""
import logging
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Dict, Iterable, List, Tuple

from app.core.utils_time import utcnow, as_utc, whole_days_between
from app.domain.checklist.template import template_by_key
from app.domain.store import RecordStore, DuplicateRecord, StoreError
from app.models.alert import Alert

log = logging.getLogger("alerts")

class AlertCreateFailure(Exception): ...
class ResolveFailure(Exception): ...

CHECKLIST_ENTITY = "checklist"
OVERDUE_SUFFIX = "_overdue"

# Completar un item resuelve además estas alertas externas (sync NIPR, vencimientos, ...)
RESOLVES_ON_COMPLETE: Dict[str, Tuple[str, ...]] = {
    # la verificación NIPR completa state_license (evento nipr_verified)
    "state_license": ("license_expiring", "license_missing", "adverse_action"),
    "ahip_certification": ("ahip_expiring",),
    "eo_certificate": ("eo_expiring",),
    "background_check": ("background_check_pending",),
    "compliance_training": ("compliance_training_due",),
    "initial_contract": ("contract_pending",),
}

@dataclass
class CorrelationResult:
    resolved: List[Alert] = field(default_factory=list)
    raised: List[Alert] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def merge(self, other: "CorrelationResult") -> "CorrelationResult":
        self.resolved.extend(other.resolved)
        self.raised.extend(other.raised)
        self.warnings.extend(other.warnings)
        return self

def overdue_alert_type(item_key: str) -> str:
    return f"{item_key}{OVERDUE_SUFFIX}"

def alert_types_for_item(item_key: str) -> Tuple[str, ...]:
    return (overdue_alert_type(item_key),) + RESOLVES_ON_COMPLETE.get(item_key, ())

def list_alerts(store: RecordStore, agent_id: int, unresolved_only: bool = False) -> List[Alert]:
    criteria = {"agent_id": agent_id}
    if unresolved_only:
        criteria["is_resolved"] = False
    return store.filter(Alert, criteria, order_by="-created_date")

def _matches_item(alert, item) -> bool:
    if alert.related_entity_type == CHECKLIST_ENTITY and alert.related_entity_id == item.id:
        return True
    return alert.alert_type in alert_types_for_item(item.item_key)

def resolve_for_item(store: RecordStore, item, existing_alerts: Iterable, now=None) -> CorrelationResult:
    result = CorrelationResult()
    now = now or utcnow()
    for alert in existing_alerts:
        if alert.is_resolved or alert.agent_id != item.agent_id or not _matches_item(alert, item):
            continue
        try:
            resolved = store.update(Alert, alert.id, {"is_resolved": True, "resolved_date": now})
        except StoreError as e:
            err = ResolveFailure(f"alert {alert.id}: {e}")
            log.warning("could not resolve alert: %s", err)
            result.warnings.append(str(err))
            continue
        result.resolved.append(resolved)
    return result

def raise_stale_alerts(store: RecordStore, agent, items: Iterable, existing_alerts: Iterable,
                       now=None) -> CorrelationResult:
    result = CorrelationResult()
    if not agent.created_date:
        return result

    now = now or utcnow()
    templates = template_by_key()
    age_days = whole_days_between(now, agent.created_date)
    open_types = {a.alert_type for a in existing_alerts if not a.is_resolved and a.agent_id == agent.id}

    pending = []
    for item in items:
        if item.is_completed:
            continue
        tpl = templates.get(item.item_key)
        if tpl is None or tpl.overdue_days is None or age_days < tpl.overdue_days:
            continue
        alert_type = overdue_alert_type(item.item_key)
        if alert_type in open_types:
            continue
        pending.append((tpl, item, alert_type))

    # las más prioritarias primero
    pending.sort(key=lambda p: p[0].priority)
    for tpl, item, alert_type in pending:
        values = {
            "agent_id": agent.id,
            "alert_type": alert_type,
            "severity": tpl.severity,
            "title": f"Onboarding Item Overdue: {item.item_name}",
            "message": f"{item.item_name} has not been completed for {age_days} days "
                       f"since agent onboarding started.",
            "is_read": False,
            "is_resolved": False,
            "due_date": (as_utc(agent.created_date) + timedelta(days=tpl.overdue_days)).date(),
            "related_entity_type": CHECKLIST_ENTITY,
            "related_entity_id": item.id,
        }
        try:
            created = store.create(Alert, values)
        except DuplicateRecord:
            # otra pasada concurrente ya la abrió
            log.debug("alert %s already open for agent %s", alert_type, agent.id)
            open_types.add(alert_type)
            continue
        except StoreError as e:
            err = AlertCreateFailure(f"{alert_type}: {e}")
            log.warning("could not raise alert: %s", err)
            result.warnings.append(str(err))
            continue
        open_types.add(alert_type)
        result.raised.append(created)
    return result

def correlate(store: RecordStore, agent, items: List, changed_item=None, now=None) -> CorrelationResult:
    """
    Pasada completa tras un cambio en el checklist (en cualquier dirección).
    Lee siempre la lista de alertas fresca del store.
    """
    now = now or utcnow()
    result = CorrelationResult()
    try:
        alerts = list_alerts(store, agent.id)
    except StoreError as e:
        log.warning("alert correlation skipped for agent %s: %s", agent.id, e)
        result.warnings.append(f"alerts unavailable: {e}")
        return result

    if changed_item is not None and changed_item.is_completed:
        result.merge(resolve_for_item(store, changed_item, alerts, now))
        resolved_ids = {a.id for a in result.resolved}
        alerts = [a for a in alerts if a.id not in resolved_ids]

    result.merge(raise_stale_alerts(store, agent, items, alerts, now))
    return result
