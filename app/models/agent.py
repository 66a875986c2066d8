from sqlalchemy import Column, Integer, String, DateTime, Date
from sqlalchemy.sql import func
from app.db import Base

class Agent(Base):
    __tablename__ = "agents"

    id = Column(Integer, primary_key=True, index=True)
    first_name = Column(String(120), nullable=False)
    last_name = Column(String(120), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    npn = Column(String(20), nullable=True, index=True)          # National Producer Number

    onboarding_status = Column(String(40), nullable=False, default="pending")  # pending | in_progress | ready_to_sell
    nipr_status = Column(String(40), nullable=True)              # pending | verified | failed
    ahip_completion_date = Column(Date, nullable=True)
    background_check_status = Column(String(40), nullable=True)  # pending | passed | failed

    created_date = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
