# routers/health.py
from fastapi import APIRouter

router = APIRouter()

@router.get("/", summary="Health check", tags=["health"])
def root():
    return {"message": "brief intake gateway is running"}
