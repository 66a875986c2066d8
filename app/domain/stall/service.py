import logging
from dataclasses import dataclass, asdict
from typing import Any, Callable, Optional

from app.core.settings import STALL_THRESHOLD_DAYS
from app.core.utils_time import utcnow, as_utc, whole_days_between
from app.domain.checklist.service import compute_progress
from app.domain.snapshot import AgentSnapshot

log = logging.getLogger("stall")

@dataclass(frozen=True)
class StallReport:
    agent_id: int
    is_stalled: bool
    days_since_progress: int
    days_since_creation: int
    progress_percent: int

    def to_dict(self) -> dict:
        return asdict(self)

# El análisis (razones, acciones sugeridas, mensaje) lo produce un colaborador externo.
StallAnalyzer = Callable[[StallReport], Any]

def last_progress_date(snapshot: AgentSnapshot):
    dates = [as_utc(i.completed_date) for i in snapshot.checklist_items if i.is_completed and i.completed_date]
    return max(dates) if dates else as_utc(snapshot.agent.created_date)

def detect_stall(snapshot: AgentSnapshot, now=None, threshold_days: int = STALL_THRESHOLD_DAYS) -> StallReport:
    """Se recalcula en cada refresco del snapshot; no se persiste como estado."""
    now = now or utcnow()
    agent = snapshot.agent
    progress = compute_progress(snapshot.checklist_items)
    since_progress = whole_days_between(now, last_progress_date(snapshot))
    since_creation = whole_days_between(now, agent.created_date)
    return StallReport(
        agent_id=agent.id,
        is_stalled=since_progress >= threshold_days and progress.percent < 100,
        days_since_progress=since_progress,
        days_since_creation=since_creation,
        progress_percent=progress.percent,
    )

def analyze_stall(report: StallReport, analyzer: Optional[StallAnalyzer]) -> Optional[Any]:
    """Entrega el reporte al analizador externo solo si el agente está estancado."""
    if not report.is_stalled or analyzer is None:
        return None
    log.info("agent %s stalled for %s days, requesting analysis", report.agent_id, report.days_since_progress)
    return analyzer(report)
