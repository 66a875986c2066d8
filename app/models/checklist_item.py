from sqlalchemy import Column, Integer, String, Boolean, DateTime, Text, ForeignKey, UniqueConstraint
from app.db import Base

CATEGORIES = ("documents", "certifications", "contracts", "compliance", "training")

class ChecklistItem(Base):
    __tablename__ = "checklist_items"
    id = Column(Integer, primary_key=True)
    agent_id = Column(Integer, ForeignKey("agents.id", ondelete="CASCADE"), index=True, nullable=False)
    item_key = Column(String(80), nullable=False)     # slug estable, p.ej. "w9_form"
    item_name = Column(String(160), nullable=False)
    category = Column(String(40), nullable=False)     # ver CATEGORIES
    sort_order = Column(Integer, nullable=False, default=0)

    is_completed = Column(Boolean, nullable=False, default=False)
    completed_date = Column(DateTime(timezone=True), nullable=True)
    completed_by = Column(String(255), nullable=True)
    notes = Column(Text, nullable=True)

    __table_args__ = (UniqueConstraint("agent_id", "item_key", name="uq_checklist_agent_item"),)
