import logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.core.settings import CORS_ORIGINS, DEV_AUTO_CREATE
from app.db import Base, engine
from app.domain.store import StoreUnavailable

from app.routers import checklist as checklist_router
from app.routers import badges as badges_router
from app.routers import alerts as alerts_router
from app.routers import ranking as ranking_router

log = logging.getLogger("api")

app = FastAPI(title="Agent Onboarding API")

# ==== CORS ====
origins_list = [o.strip() for o in CORS_ORIGINS.split(",")] if CORS_ORIGINS else ["http://localhost:4200"]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

if DEV_AUTO_CREATE:
    Base.metadata.create_all(bind=engine)

# El store no respondió: la mutación primaria no se pudo confirmar
@app.exception_handler(StoreUnavailable)
def store_unavailable_handler(request: Request, exc: StoreUnavailable):
    log.error("store unavailable on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=503, content={"detail": "Record store unavailable"})

# ==== Routers ====
app.include_router(checklist_router.router)
app.include_router(badges_router.router)
app.include_router(alerts_router.router)
app.include_router(ranking_router.router)

@app.get("/health")
def health():
    return {"status": "ok"}
