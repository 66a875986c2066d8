import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

# Raíz del paquete app/  ->  .../app
APP_DIR = Path(__file__).resolve().parents[1]
# Raíz del repo (padre de app/)
REPO_ROOT = APP_DIR.parent

DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite:///{REPO_ROOT / 'onboarding.db'}")

CORS_ORIGINS = os.getenv("CORS_ORIGINS", "")

# === Plantilla del checklist (JSON) ===
# Se puede sobreescribir con la var de entorno CHECKLIST_TEMPLATE_PATH
CONTENT_DIR = REPO_ROOT / "content"
CHECKLIST_TEMPLATE_PATH = Path(
    os.getenv("CHECKLIST_TEMPLATE_PATH", CONTENT_DIR / "checklist_template.json")
).resolve()

# Días sin progreso para considerar un onboarding "estancado"
STALL_THRESHOLD_DAYS = int(os.getenv("STALL_THRESHOLD_DAYS", "7"))

DEV_AUTO_CREATE = os.getenv("DEV_AUTO_CREATE", "0") == "1"
