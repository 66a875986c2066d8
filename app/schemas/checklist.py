from datetime import datetime
from typing import Dict, List, Optional
from pydantic import BaseModel

class ChecklistItemOut(BaseModel):
    id: int
    agent_id: int
    item_key: str
    item_name: str
    category: str
    sort_order: int
    is_completed: bool
    completed_date: Optional[datetime] = None
    completed_by: Optional[str] = None
    notes: Optional[str] = None

    class Config:
        from_attributes = True  # pydantic v2

class ProgressOut(BaseModel):
    completed: int
    total: int
    percent: int

    class Config:
        from_attributes = True

class ChecklistOut(BaseModel):
    items: List[ChecklistItemOut]
    progress: ProgressOut
    categories: Dict[str, ProgressOut]
