from datetime import date, datetime
from typing import Optional
from pydantic import BaseModel

class AlertOut(BaseModel):
    id: int
    agent_id: int
    alert_type: str
    severity: str
    title: str
    message: str
    is_read: bool
    is_resolved: bool
    resolved_date: Optional[datetime] = None
    due_date: Optional[date] = None
    related_entity_type: Optional[str] = None
    related_entity_id: Optional[int] = None

    class Config:
        from_attributes = True  # pydantic v2
