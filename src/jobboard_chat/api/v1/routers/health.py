from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text

from jobboard_chat.infrastructure.db.session import AsyncSessionLocal

router = APIRouter(tags=["health"])


@router.get("/healthz")
async def healthz() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/readyz")
async def readyz(request: Request) -> JSONResponse:
    errors: list[str] = []

    try:
        async with AsyncSessionLocal() as session:
            await session.execute(text("SELECT 1"))
    except Exception as exc:  # noqa: BLE001
        errors.append(f"postgres: {exc}")

    # Live delivery is best-effort: report the relay, never fail on it
    relay_ok = await request.app.state.relay_publisher.ping()
    relay = "ok" if relay_ok else "unreachable"

    if errors:
        return JSONResponse(
            status_code=503,
            content={"status": "unavailable", "errors": errors, "relay": relay},
        )
    return JSONResponse(content={"status": "ready", "relay": relay})
