from fastapi import APIRouter

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", summary="Estado del backend")
def health() -> dict[str, str]:
    return {"status": "ok", "message": "Backend is up and running"}
