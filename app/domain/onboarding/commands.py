"""
Handlers de comandos del onboarding. Cada handler hace la mutación primaria (que falla
en voz alta) y luego los efectos derivados: alertas e insignias (que fallan en silencio,
se registran y se reintentan en la siguiente pasada).
"""
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from app.core.utils_time import utcnow
from app.domain.alerts.service import correlate, CorrelationResult
from app.domain.badges.service import evaluate_and_award, list_badges
from app.domain.checklist.service import initialize_checklist, toggle_item, complete_for_event, list_items
from app.domain.snapshot import assemble_snapshot
from app.domain.store import RecordStore, StoreError
from app.models.agent import Agent

log = logging.getLogger("onboarding")

@dataclass
class DerivedEffects:
    badges_awarded: List = field(default_factory=list)
    alerts_resolved: List = field(default_factory=list)
    alerts_raised: List = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def add_correlation(self, corr: CorrelationResult) -> None:
        self.alerts_resolved.extend(corr.resolved)
        self.alerts_raised.extend(corr.raised)
        self.warnings.extend(corr.warnings)

@dataclass
class ToggleResult(DerivedEffects):
    item: object = None
    transitioned: bool = False

@dataclass
class EventResult(DerivedEffects):
    event_type: str = ""
    completed_items: List = field(default_factory=list)

def initialize(store: RecordStore, agent_id: int):
    return initialize_checklist(store, agent_id)

def _award(store: RecordStore, agent_id: int, effects: DerivedEffects, now) -> None:
    try:
        snapshot = assemble_snapshot(store, agent_id)
        existing = list_badges(store, agent_id)
    except StoreError as e:
        log.warning("badge evaluation skipped for agent %s: %s", agent_id, e)
        effects.warnings.append(f"badges unavailable: {e}")
        return
    effects.badges_awarded.extend(evaluate_and_award(store, agent_id, snapshot, existing, now=now))

def _correlate(store: RecordStore, agent_id: int, changed_items, effects: DerivedEffects, now) -> None:
    try:
        agent = store.get(Agent, agent_id)
        items = list_items(store, agent_id)
    except StoreError as e:
        log.warning("alert correlation skipped for agent %s: %s", agent_id, e)
        effects.warnings.append(f"alerts unavailable: {e}")
        return
    if not changed_items:
        effects.add_correlation(correlate(store, agent, items, now=now))
        return
    for changed in changed_items:
        effects.add_correlation(correlate(store, agent, items, changed_item=changed, now=now))

def toggle(store: RecordStore, item_id: int, acting: Optional[str], now=None) -> ToggleResult:
    """
    Alterna un item. La correlación de alertas corre en AMBAS direcciones
    (completar resuelve, des-completar puede volver a levantar la alerta de atraso).
    """
    now = now or utcnow()
    item, transitioned = toggle_item(store, item_id, acting, now=now)
    result = ToggleResult(item=item, transitioned=transitioned)
    if not transitioned:
        return result

    agent_id = item.agent_id
    _correlate(store, agent_id, [item], result, now)
    _award(store, agent_id, result, now)
    return result

def apply_event(store: RecordStore, agent_id: int, event_type: str, acting: Optional[str],
                now=None) -> EventResult:
    now = now or utcnow()
    store.get(Agent, agent_id)
    completed = complete_for_event(store, event_type, agent_id, acting, now=now)
    result = EventResult(event_type=event_type, completed_items=completed)
    if completed:
        _correlate(store, agent_id, completed, result, now)
    _award(store, agent_id, result, now)
    return result

def refresh(store: RecordStore, agent_id: int, now=None) -> DerivedEffects:
    """Recalcula alertas de atraso e insignias sin mutar el checklist (al abrir el dashboard)."""
    now = now or utcnow()
    store.get(Agent, agent_id)
    effects = DerivedEffects()
    _correlate(store, agent_id, None, effects, now)
    _award(store, agent_id, effects, now)
    return effects
