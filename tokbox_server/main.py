import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tokbox_server.config import get_settings
from tokbox_server.session.routes import router as session_router

settings = get_settings()
logging.basicConfig(level=settings.log_level.upper())

app = FastAPI(title="tokbox-server sample")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(session_router, prefix="/api/session", tags=["session"])


@app.get("/health")
def health_check():
    return {"status": "ok"}
