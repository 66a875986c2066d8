from sqlalchemy import Column, Integer, String, Boolean, Date, DateTime, ForeignKey
from app.db import Base

class License(Base):
    __tablename__ = "licenses"
    id = Column(Integer, primary_key=True)
    agent_id = Column(Integer, ForeignKey("agents.id", ondelete="CASCADE"), index=True, nullable=False)
    state = Column(String(2), nullable=False)
    license_number = Column(String(40), nullable=True)
    license_type = Column(String(40), nullable=True)
    status = Column(String(40), nullable=False, default="pending")   # pending | active | expired
    nipr_verified = Column(Boolean, nullable=False, default=False)
    nipr_last_check = Column(DateTime(timezone=True), nullable=True)
    expiration_date = Column(Date, nullable=True)
