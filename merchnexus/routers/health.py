import datetime as dt

from fastapi import APIRouter

router = APIRouter(tags=["health"])


@router.get("/health")
async def healthcheck():
    return {"status": "ok", "timestamp": dt.datetime.now(dt.timezone.utc).isoformat()}
