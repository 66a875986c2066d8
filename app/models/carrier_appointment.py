from sqlalchemy import Column, Integer, String, Date, ForeignKey
from app.db import Base

class CarrierAppointment(Base):
    __tablename__ = "carrier_appointments"
    id = Column(Integer, primary_key=True)
    agent_id = Column(Integer, ForeignKey("agents.id", ondelete="CASCADE"), index=True, nullable=False)
    carrier_name = Column(String(160), nullable=False)
    appointment_status = Column(String(40), nullable=False, default="pending")  # pending | submitted | appointed | terminated
    effective_date = Column(Date, nullable=True)
