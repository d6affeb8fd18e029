# app/main.py
import logging
from fastapi import FastAPI
from formdesk.app.core.config import settings
from formdesk.app.core.logging import setup_logging
from formdesk.db.session import engine
from formdesk.db import Base
from formdesk.db import models  # noqa: F401  registers tables on Base.metadata
from formdesk.app.routers import forms

setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.APP_NAME, debug=settings.DEBUG)

app.include_router(forms.router)


@app.on_event("startup")
async def on_startup():
    Base.metadata.create_all(bind=engine)
    logger.info("Database schema ready at %s", engine.url.render_as_string(hide_password=True))


@app.get("/health")
def health():
    return {"status": "ok"}
