from fastapi import APIRouter, Depends, HTTPException
from app.deps import get_store, get_current_identity
from app.domain.store import RecordStore, RecordNotFound
from app.domain.checklist.service import AlreadyInitialized, list_items, compute_progress, progress_by_category
from app.domain.onboarding import commands
from app.models.agent import Agent
from app.schemas.checklist import ChecklistOut, ChecklistItemOut, ProgressOut
from app.schemas.onboarding import ToggleResultOut, EventIn, EventResultOut, DerivedEffectsOut

router = APIRouter(tags=["checklist"])

def _checklist_out(items) -> ChecklistOut:
    return ChecklistOut(
        items=[ChecklistItemOut.model_validate(i) for i in items],
        progress=ProgressOut.model_validate(compute_progress(items)),
        categories={cat: ProgressOut.model_validate(p) for cat, p in progress_by_category(items).items()},
    )

@router.get("/agents/{agent_id}/checklist", response_model=ChecklistOut)
def get_checklist(agent_id: int, store: RecordStore = Depends(get_store)):
    try:
        store.get(Agent, agent_id)
    except RecordNotFound:
        raise HTTPException(status_code=404, detail="Agent not found")
    return _checklist_out(list_items(store, agent_id))

@router.post("/agents/{agent_id}/checklist", response_model=ChecklistOut, status_code=201)
def initialize_checklist(agent_id: int, store: RecordStore = Depends(get_store),
                         me: str = Depends(get_current_identity)):
    try:
        items = commands.initialize(store, agent_id)
    except RecordNotFound:
        raise HTTPException(status_code=404, detail="Agent not found")
    except AlreadyInitialized:
        raise HTTPException(status_code=409, detail="Checklist already initialized")
    return _checklist_out(items)

@router.post("/checklist/{item_id}/toggle", response_model=ToggleResultOut)
def toggle_item(item_id: int, store: RecordStore = Depends(get_store),
                me: str = Depends(get_current_identity)):
    try:
        result = commands.toggle(store, item_id, acting=me)
    except RecordNotFound:
        raise HTTPException(status_code=404, detail="Checklist item not found")
    return ToggleResultOut.model_validate(result)

@router.post("/agents/{agent_id}/events", response_model=EventResultOut)
def apply_event(agent_id: int, body: EventIn, store: RecordStore = Depends(get_store),
                me: str = Depends(get_current_identity)):
    try:
        result = commands.apply_event(store, agent_id, body.event_type, acting=me)
    except RecordNotFound:
        raise HTTPException(status_code=404, detail="Agent not found")
    return EventResultOut.model_validate(result)

@router.post("/agents/{agent_id}/refresh", response_model=DerivedEffectsOut)
def refresh(agent_id: int, store: RecordStore = Depends(get_store),
            me: str = Depends(get_current_identity)):
    try:
        effects = commands.refresh(store, agent_id)
    except RecordNotFound:
        raise HTTPException(status_code=404, detail="Agent not found")
    return DerivedEffectsOut.model_validate(effects)
