from fastapi import APIRouter

router = APIRouter(tags=["health"])

@router.get("/healthz")
def healthz():
    """Liveness probe endpoint."""
    return {"status": "ok"}
