from fastapi import APIRouter
from sqlalchemy import text

from storefront.dependencies import T_Session

router = APIRouter(tags=["health"])


@router.get("/api/v1/health")
async def health(session: T_Session):
    """Health check endpoint; also confirms the database answers."""
    await session.execute(text("SELECT 1"))
    return {"status": "ok", "database": "ok"}
