from pathlib import Path

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from markupsafe import Markup

from nomad_guide.client.normalizer import normalize_countries
from nomad_guide.client.renderer import HtmlSurface, error_instructions, render_to
from nomad_guide.models.directory import DirectoryConfig
from nomad_guide.services import country_service
from nomad_guide.services.capability_service import PERMISSION_DENIED, current_user_can_manage
from nomad_guide.services.nonce_service import NONCE_ACTION, create_nonce

router = APIRouter(tags=["dashboard"])

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))


def localized_data(request: Request) -> DirectoryConfig:
    return DirectoryConfig(
        ajax_url=str(request.url_for("ajax")),
        nonce=create_nonce(NONCE_ACTION),
        can_manage=current_user_can_manage(request),
    )


@router.get("/", response_class=HTMLResponse)
async def dashboard(request: Request):
    config = localized_data(request)
    surface = HtmlSurface(config.strings.loading)
    if config.can_manage:
        raw = {key: c.model_dump() for key, c in country_service.get_all().items()}
        render_to(surface, normalize_countries(raw), config.strings)
    else:
        surface.show(error_instructions(PERMISSION_DENIED))
    return templates.TemplateResponse(
        request,
        "dashboard.html",
        {"country_list": Markup(surface.html())},
    )


@router.get("/bootstrap", response_model=DirectoryConfig)
async def bootstrap(request: Request):
    return localized_data(request)
