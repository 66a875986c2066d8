from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from app.domain.checklist.service import compute_progress, round_half_up
from app.domain.badges.service import total_points
from app.domain.store import RecordStore
from app.models.agent import Agent
from app.models.badge import Badge
from app.models.checklist_item import ChecklistItem

POINTS_PER_PERCENT = 5

@dataclass(frozen=True)
class LeaderboardEntry:
    agent_id: int
    agent_name: str
    badge_count: int
    badge_points: int
    progress_percent: int
    total_score: int
    rank: int = 0

def score(badges: Iterable, progress_percent: float) -> int:
    return total_points(badges) + round_half_up(progress_percent) * POINTS_PER_PERCENT

def _group(rows: Iterable) -> Dict[int, list]:
    out: Dict[int, list] = {}
    for r in rows:
        out.setdefault(r.agent_id, []).append(r)
    return out

def build_leaderboard(agents: Iterable, badges: Iterable, checklist_items: Iterable) -> List[LeaderboardEntry]:
    """
    Ranking completo (sin límite). Orden: total_score DESC, luego agent_id ASC
    como desempate estable y explícito.
    """
    badges_by_agent = _group(badges)
    items_by_agent = _group(checklist_items)

    scored = []
    for agent in agents:
        agent_badges = badges_by_agent.get(agent.id, [])
        progress = compute_progress(items_by_agent.get(agent.id, []))
        scored.append((agent, agent_badges, progress.percent, score(agent_badges, progress.percent)))

    scored.sort(key=lambda s: (-s[3], s[0].id))
    return [
        LeaderboardEntry(
            agent_id=agent.id,
            agent_name=getattr(agent, "full_name", str(agent.id)),
            badge_count=len(agent_badges),
            badge_points=total_points(agent_badges),
            progress_percent=percent,
            total_score=total,
            rank=pos,
        )
        for pos, (agent, agent_badges, percent, total) in enumerate(scored, start=1)
    ]

def rank_of(agent_id: int, entries: Iterable[LeaderboardEntry]) -> int:
    """Posición 1-based; 0 si el agente no aparece en el ranking."""
    for entry in entries:
        if entry.agent_id == agent_id:
            return entry.rank
    return 0

def top(entries: List[LeaderboardEntry], limit: Optional[int] = 10) -> List[LeaderboardEntry]:
    return entries if limit is None else entries[:limit]

def load_leaderboard(store: RecordStore) -> List[LeaderboardEntry]:
    return build_leaderboard(
        store.list(Agent),
        store.list(Badge),
        store.list(ChecklistItem),
    )
