from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, func
from app.db import Base

class Document(Base):
    __tablename__ = "documents"
    id = Column(Integer, primary_key=True)
    agent_id = Column(Integer, ForeignKey("agents.id", ondelete="CASCADE"), index=True, nullable=False)
    document_type = Column(String(60), nullable=False)   # w9 | direct_deposit | eo_certificate | id_verification | ...
    file_name = Column(String(255), nullable=True)
    status = Column(String(40), nullable=False, default="pending")  # pending | verified | rejected
    created_date = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
