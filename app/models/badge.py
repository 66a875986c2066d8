from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, UniqueConstraint, func
from app.db import Base

class Badge(Base):
    __tablename__ = "badges"
    id = Column(Integer, primary_key=True, index=True)
    agent_id = Column(Integer, ForeignKey("agents.id", ondelete="CASCADE"), index=True, nullable=False)
    badge_type = Column(String(80), nullable=False)
    badge_name = Column(String(120), nullable=False)
    badge_description = Column(Text, nullable=False, default="")
    points = Column(Integer, nullable=False, default=0)
    earned_date = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    # Una insignia por agente y tipo: el store es quien garantiza la unicidad
    __table_args__ = (UniqueConstraint("agent_id", "badge_type", name="uq_agent_badge"),)
