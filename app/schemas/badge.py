from datetime import datetime
from typing import List
from pydantic import BaseModel

class BadgeOut(BaseModel):
    id: int
    agent_id: int
    badge_type: str
    badge_name: str
    badge_description: str
    points: int
    earned_date: datetime

    class Config:
        from_attributes = True  # pydantic v2

class AgentBadgesOut(BaseModel):
    badges: List[BadgeOut]
    total_points: int
