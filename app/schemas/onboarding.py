from typing import List
from pydantic import BaseModel

from app.schemas.alert import AlertOut
from app.schemas.badge import BadgeOut
from app.schemas.checklist import ChecklistItemOut

class DerivedEffectsOut(BaseModel):
    badges_awarded: List[BadgeOut] = []
    alerts_resolved: List[AlertOut] = []
    alerts_raised: List[AlertOut] = []
    warnings: List[str] = []

    class Config:
        from_attributes = True

class ToggleResultOut(DerivedEffectsOut):
    item: ChecklistItemOut
    transitioned: bool

class EventIn(BaseModel):
    event_type: str

class EventResultOut(DerivedEffectsOut):
    event_type: str
    completed_items: List[ChecklistItemOut] = []

class StallOut(BaseModel):
    agent_id: int
    is_stalled: bool
    days_since_progress: int
    days_since_creation: int
    progress_percent: int

    class Config:
        from_attributes = True
