from fastapi import APIRouter, Depends, HTTPException
from app.deps import get_store
from app.domain.store import RecordStore, RecordNotFound
from app.domain.badges.service import list_badges, total_points, BADGE_RULES
from app.models.agent import Agent
from app.schemas.badge import AgentBadgesOut, BadgeOut

router = APIRouter(tags=["badges"])

@router.get("/badges/catalog")
def badge_catalog():
    return [
        {"badge_type": r.badge_type, "name": r.name, "description": r.description, "points": r.points}
        for r in BADGE_RULES
    ]

@router.get("/agents/{agent_id}/badges", response_model=AgentBadgesOut)
def agent_badges(agent_id: int, store: RecordStore = Depends(get_store)):
    try:
        store.get(Agent, agent_id)
    except RecordNotFound:
        raise HTTPException(status_code=404, detail="Agent not found")
    badges = list_badges(store, agent_id)
    return AgentBadgesOut(
        badges=[BadgeOut.model_validate(b) for b in badges],
        total_points=total_points(badges),
    )
