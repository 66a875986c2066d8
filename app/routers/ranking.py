from fastapi import APIRouter, Depends, HTTPException, Query
from app.deps import get_store
from app.domain.store import RecordStore
from app.domain.leaderboard.service import load_leaderboard, rank_of, top
from app.schemas.ranking import LeaderboardRow, RankOut

router = APIRouter(prefix="/leaderboard", tags=["leaderboard"])

@router.get("", response_model=list[LeaderboardRow])
def leaderboard(limit: int = Query(10, ge=1, le=500), store: RecordStore = Depends(get_store)):
    """
    Top N agentes por puntaje (insignias + progreso x 5). Desempate por agent_id ASC.
    """
    return [LeaderboardRow.model_validate(e) for e in top(load_leaderboard(store), limit)]

@router.get("/agents/{agent_id}", response_model=RankOut)
def agent_rank(agent_id: int, store: RecordStore = Depends(get_store)):
    entries = load_leaderboard(store)
    rank = rank_of(agent_id, entries)
    if not rank:
        raise HTTPException(status_code=404, detail="Agent not found in leaderboard")
    return RankOut(agent_id=agent_id, rank=rank, total_agents=len(entries))
