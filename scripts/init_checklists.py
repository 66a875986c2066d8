# scripts/init_checklists.py
import sys
from pathlib import Path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app.db import SessionLocal
from app.domain.store import RecordStore
from app.domain.checklist.service import AlreadyInitialized
from app.domain.onboarding import commands
from app.models.agent import Agent

def main():
    """Crea el checklist de onboarding para todos los agentes que todavía no lo tienen."""
    db = SessionLocal()
    created = 0
    try:
        store = RecordStore(db)
        for agent in store.list(Agent):
            try:
                commands.initialize(store, agent.id)
                created += 1
            except AlreadyInitialized:
                pass
        print(f"Checklists initialized: {created}")
    finally:
        db.close()

if __name__ == "__main__":
    main()
