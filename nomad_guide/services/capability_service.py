import hmac

from fastapi import Request

from nomad_guide.config import settings

PERMISSION_DENIED = "You do not have permission to perform this action."


def current_user_can_manage(request: Request) -> bool:
    """Callers hold the manage capability when they present the configured key.

    With no key configured every caller holds it.
    """
    if not settings.manage_api_key:
        return True
    supplied = request.headers.get("X-Api-Key", "")
    return hmac.compare_digest(supplied, settings.manage_api_key)
