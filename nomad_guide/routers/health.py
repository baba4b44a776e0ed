import time
from fastapi import APIRouter

from nomad_guide import __version__
from nomad_guide.services import country_service

router = APIRouter()

_start_time = time.time()


@router.get("/health")
async def health_check():
    return {
        "status": "ok",
        "uptime_seconds": round(time.time() - _start_time),
        "version": __version__,
        "countries": len(country_service.get_all()),
    }
