from fastapi import APIRouter

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check() -> dict[str, str]:
    """Liveness check. Independent of configuration and GitHub availability."""
    return {"status": "ok"}
