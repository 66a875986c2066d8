from sqlalchemy import Column, Integer, String, Date, ForeignKey
from app.db import Base

class Contract(Base):
    __tablename__ = "contracts"
    id = Column(Integer, primary_key=True)
    agent_id = Column(Integer, ForeignKey("agents.id", ondelete="CASCADE"), index=True, nullable=False)
    carrier_name = Column(String(160), nullable=False)
    contract_status = Column(String(40), nullable=False, default="draft")  # draft | sent | contract_signed | active
    signed_date = Column(Date, nullable=True)
