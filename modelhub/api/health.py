from fastapi import APIRouter

router = APIRouter()


@router.get("/")
def root_health_check() -> dict[str, str]:
    return {"message": "Server running"}


@router.get("/health")
def health_check() -> dict[str, str]:
    return {"status": "ok"}
