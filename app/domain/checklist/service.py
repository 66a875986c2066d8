import logging
import math
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from app.core.utils_time import utcnow
from app.domain.checklist.template import load_template
from app.domain.store import RecordStore, DuplicateRecord
from app.models.agent import Agent
from app.models.checklist_item import ChecklistItem

log = logging.getLogger("checklist")

class AlreadyInitialized(Exception): ...

# Eventos externos -> items del checklist que completan automáticamente
EVENT_TO_CHECKLIST = {
    # NIPR / licencias
    "nipr_verified": ["state_license"],
    "license_active": ["state_license"],
    # Documentos subidos
    "document_w9": ["w9_form"],
    "document_direct_deposit": ["direct_deposit"],
    "document_eo_certificate": ["eo_certificate"],
    "document_id_verification": ["id_verification"],
    "document_ahip_certificate": ["ahip_certification"],
    "document_background_check": ["background_check"],
    "document_compliance_training": ["compliance_training"],
    "document_carrier_certification": ["carrier_certifications"],
    # Contratos
    "contract_active": ["initial_contract"],
    "contract_signed": ["initial_contract"],
    # Otros
    "background_passed": ["background_check"],
    "ahip_completed": ["ahip_certification"],
    "compliance_completed": ["compliance_training"],
}

DOCUMENT_EVENTS = {
    "w9": "document_w9",
    "direct_deposit": "document_direct_deposit",
    "eo_certificate": "document_eo_certificate",
    "id_verification": "document_id_verification",
    "ahip_certificate": "document_ahip_certificate",
    "background_check": "document_background_check",
    "compliance_training": "document_compliance_training",
    "carrier_certification": "document_carrier_certification",
}

@dataclass(frozen=True)
class Progress:
    completed: int
    total: int
    percent: int

def round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))

def compute_progress(items: Iterable) -> Progress:
    items = list(items)
    total = len(items)
    completed = sum(1 for i in items if i.is_completed)
    percent = round_half_up(completed / total * 100) if total else 0
    return Progress(completed=completed, total=total, percent=percent)

def progress_by_category(items: Iterable) -> Dict[str, Progress]:
    grouped: Dict[str, list] = {}
    for item in items:
        grouped.setdefault(item.category, []).append(item)
    return {cat: compute_progress(group) for cat, group in grouped.items()}

def list_items(store: RecordStore, agent_id: int) -> List[ChecklistItem]:
    return store.filter(ChecklistItem, {"agent_id": agent_id}, order_by="sort_order")

def initialize_checklist(store: RecordStore, agent_id: int) -> List[ChecklistItem]:
    """Crea el checklist completo a partir de la plantilla. Falla si ya existe."""
    store.get(Agent, agent_id)  # RecordNotFound si el agente no existe
    if store.filter(ChecklistItem, {"agent_id": agent_id}, limit=1):
        raise AlreadyInitialized(agent_id)

    records = [
        {
            "agent_id": agent_id,
            "item_key": t.key,
            "item_name": t.name,
            "category": t.category,
            "sort_order": t.order,
            "is_completed": False,
        }
        for t in load_template()
    ]
    try:
        items = store.bulk_create(ChecklistItem, records)
    except DuplicateRecord as e:
        # otro request inicializó el mismo agente entre el chequeo y el insert
        raise AlreadyInitialized(agent_id) from e
    log.info("checklist initialized for agent %s (%d items)", agent_id, len(items))
    return items

def set_item_completed(store: RecordStore, item: ChecklistItem, completed: bool, acting: Optional[str],
                       notes: Optional[str] = None, now=None) -> Tuple[ChecklistItem, bool]:
    """Lleva el item al estado pedido. Devuelve (item, hubo_transicion)."""
    if bool(item.is_completed) == completed:
        return item, False

    if completed:
        patch = {
            "is_completed": True,
            "completed_date": now or utcnow(),
            "completed_by": acting,
        }
    else:
        patch = {"is_completed": False, "completed_date": None, "completed_by": None}
    if notes is not None:
        patch["notes"] = notes

    updated = store.update(ChecklistItem, item.id, patch)
    return updated, True

def toggle_item(store: RecordStore, item_id: int, acting: Optional[str], now=None) -> Tuple[ChecklistItem, bool]:
    # lectura fresca: nunca confiar en un estado cacheado por el cliente
    item = store.get(ChecklistItem, item_id)
    return set_item_completed(store, item, not item.is_completed, acting, now=now)

def document_event_type(document_type: str) -> Optional[str]:
    return DOCUMENT_EVENTS.get(document_type)

def complete_for_event(store: RecordStore, event_type: str, agent_id: int, acting: Optional[str],
                       now=None) -> List[ChecklistItem]:
    """Completa los items asociados a un evento externo (documento verificado, sync NIPR, ...)."""
    keys = EVENT_TO_CHECKLIST.get(event_type)
    if not keys:
        return []

    note = f"Auto-completed via {event_type.replace('_', ' ')}"
    completed: List[ChecklistItem] = []
    for key in keys:
        for item in store.filter(ChecklistItem, {"agent_id": agent_id, "item_key": key}):
            updated, changed = set_item_completed(store, item, True, acting, notes=note, now=now)
            if changed:
                completed.append(updated)
    return completed
