from sqlalchemy import Column, Integer, String, Text, Boolean, Date, DateTime, ForeignKey, Index, func
from app.db import Base

SEVERITIES = ("critical", "warning", "info")

class Alert(Base):
    __tablename__ = "alerts"
    id = Column(Integer, primary_key=True)
    agent_id = Column(Integer, ForeignKey("agents.id", ondelete="CASCADE"), index=True, nullable=False)
    alert_type = Column(String(80), nullable=False, index=True)
    severity = Column(String(20), nullable=False, default="warning")
    title = Column(String(255), nullable=False)
    message = Column(Text, nullable=False, default="")

    is_read = Column(Boolean, nullable=False, default=False)
    is_resolved = Column(Boolean, nullable=False, default=False)
    resolved_date = Column(DateTime(timezone=True), nullable=True)
    due_date = Column(Date, nullable=True)

    related_entity_type = Column(String(40), nullable=True)   # "checklist" | "license" | ...
    related_entity_id = Column(Integer, nullable=True)

    created_date = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

# Una sola alerta ABIERTA por (agent_id, alert_type); las resueltas no cuentan
Index(
    "uq_alerts_open_agent_type",
    Alert.agent_id, Alert.alert_type,
    unique=True,
    sqlite_where=~Alert.is_resolved,
    postgresql_where=~Alert.is_resolved,
)
