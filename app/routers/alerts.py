from fastapi import APIRouter, Depends, HTTPException
from app.deps import get_store
from app.domain.store import RecordStore, RecordNotFound
from app.domain.alerts.service import list_alerts
from app.domain.snapshot import assemble_snapshot
from app.domain.stall.service import detect_stall
from app.models.agent import Agent
from app.schemas.alert import AlertOut
from app.schemas.onboarding import StallOut

router = APIRouter(prefix="/agents", tags=["alerts"])

@router.get("/{agent_id}/alerts", response_model=list[AlertOut])
def agent_alerts(agent_id: int, unresolved_only: bool = False, store: RecordStore = Depends(get_store)):
    try:
        store.get(Agent, agent_id)
    except RecordNotFound:
        raise HTTPException(status_code=404, detail="Agent not found")
    return [AlertOut.model_validate(a) for a in list_alerts(store, agent_id, unresolved_only)]

@router.get("/{agent_id}/stall", response_model=StallOut)
def agent_stall(agent_id: int, store: RecordStore = Depends(get_store)):
    """Solo el diagnóstico numérico; el análisis en lenguaje natural lo hace otro servicio."""
    try:
        snapshot = assemble_snapshot(store, agent_id)
    except RecordNotFound:
        raise HTTPException(status_code=404, detail="Agent not found")
    return StallOut.model_validate(detect_stall(snapshot))
