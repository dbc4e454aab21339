from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
import structlog

from app.api.deps import get_db

router = APIRouter()
log = structlog.get_logger()


@router.get("/live")
async def live():
    return {"status": "live"}


@router.get("/ready")
def ready(db: Session = Depends(get_db)):
    try:
        db.execute(text("select 1"))
    except SQLAlchemyError as e:
        log.warning("readiness_db_error", error=str(e))
        return JSONResponse(status_code=503, content={"status": "unavailable", "database": False})
    return {"status": "ready", "database": True}
