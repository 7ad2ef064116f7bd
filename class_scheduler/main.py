# class_scheduler/main.py
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from class_scheduler.config import settings
from class_scheduler.database import SessionLocal, init_db
from class_scheduler.routers import schedule
from class_scheduler.utils.reschedule import ScheduleCoordinator
from class_scheduler.utils.store import SqlScheduleStore

import time
import logging
from fastapi import Request
from class_scheduler.logging_config import setup_logging


setup_logging()
logger = logging.getLogger("class_scheduler")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # create tables if missing, then build the occurrence set once
    try:
        init_db()
    except Exception:
        logger.exception("Could not create tables")
    app.state.schedule = ScheduleCoordinator(SqlScheduleStore(SessionLocal))
    await app.state.schedule.load()
    yield


app = FastAPI(title="Class Schedule Backend", version="1.0.0", lifespan=lifespan)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.time()
    try:
        response = await call_next(request)
        ms = int((time.time() - start) * 1000)
        logger.info("%s %s -> %s (%dms)", request.method, request.url.path, response.status_code, ms)
        return response
    except Exception:
        ms = int((time.time() - start) * 1000)
        logger.exception("Unhandled error %s %s (%dms)", request.method, request.url.path, ms)
        raise


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(schedule.router)

@app.get("/")
def root():
    return {"message": "Class schedule backend is running!"}
