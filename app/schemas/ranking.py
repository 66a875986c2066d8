from pydantic import BaseModel

class LeaderboardRow(BaseModel):
    rank: int
    agent_id: int
    agent_name: str
    badge_count: int
    badge_points: int
    progress_percent: int
    total_score: int

    class Config:
        from_attributes = True

class RankOut(BaseModel):
    agent_id: int
    rank: int
    total_agents: int
