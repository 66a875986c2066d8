from dataclasses import dataclass, field
from typing import Any, List

from app.domain.store import RecordStore
from app.models.agent import Agent
from app.models.checklist_item import ChecklistItem
from app.models.document import Document
from app.models.license import License
from app.models.carrier_appointment import CarrierAppointment
from app.models.contract import Contract

@dataclass
class AgentSnapshot:
    """Modelo de lectura (no persistido) que consumen las reglas de badges y el detector de estancamiento."""
    agent: Any
    checklist_items: List[Any] = field(default_factory=list)
    documents: List[Any] = field(default_factory=list)
    licenses: List[Any] = field(default_factory=list)
    appointments: List[Any] = field(default_factory=list)
    contracts: List[Any] = field(default_factory=list)

def assemble_snapshot(store: RecordStore, agent_id: int) -> AgentSnapshot:
    # Siempre lectura fresca: dos toggles concurrentes deben ver el último estado
    by_agent = {"agent_id": agent_id}
    return AgentSnapshot(
        agent=store.get(Agent, agent_id),
        checklist_items=store.filter(ChecklistItem, by_agent, order_by="sort_order"),
        documents=store.filter(Document, by_agent),
        licenses=store.filter(License, by_agent),
        appointments=store.filter(CarrierAppointment, by_agent),
        contracts=store.filter(Contract, by_agent),
    )
