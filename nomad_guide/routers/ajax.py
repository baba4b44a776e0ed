import logging
from collections.abc import Awaitable, Callable

from fastapi import APIRouter, HTTPException, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from nomad_guide.config import settings
from nomad_guide.models.ajax import AjaxRequest, AjaxResponse, send_error, send_success
from nomad_guide.services import country_service
from nomad_guide.services.capability_service import PERMISSION_DENIED, current_user_can_manage
from nomad_guide.services.nonce_service import NONCE_ACTION, verify_nonce

logger = logging.getLogger(__name__)

router = APIRouter(tags=["ajax"])

limiter = Limiter(key_func=get_remote_address, enabled=settings.rate_limit_enabled)


async def get_country_list(request: Request) -> AjaxResponse:
    if not current_user_can_manage(request):
        return send_error(PERMISSION_DENIED)

    countries = country_service.get_all()
    return send_success({
        "countries": {key: c.model_dump() for key, c in countries.items()},
    })


ACTIONS: dict[str, Callable[[Request], Awaitable[AjaxResponse]]] = {
    "ssm_dng_get_country_list": get_country_list,
}


@router.post("/ajax", response_model=AjaxResponse, name="ajax")
@limiter.limit(lambda: settings.ajax_rate_limit)
async def ajax(request: Request, req: AjaxRequest):
    handler = ACTIONS.get(req.action)
    if handler is None:
        raise HTTPException(status_code=400, detail=f"Unknown action: {req.action}")
    if not verify_nonce(req.nonce, NONCE_ACTION):
        logger.warning("Rejected %s: invalid or expired nonce", req.action)
        raise HTTPException(status_code=403, detail="Invalid or expired nonce")

    try:
        return await handler(request)
    except Exception:
        logger.exception("Ajax action %s failed", req.action)
        raise HTTPException(status_code=500, detail="Internal server error")
