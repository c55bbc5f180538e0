"""
Informational pages and health check.
"""

from pathlib import Path

from fastapi import APIRouter, Request
from fastapi.templating import Jinja2Templates

TEMPLATES_DIR = Path(__file__).parent.parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

router = APIRouter(tags=["pages"])


@router.get("/", include_in_schema=False)
async def home(request: Request):
    """Landing page."""
    return templates.TemplateResponse(request, "home.html", {})


@router.get("/docs", include_in_schema=False)
async def docs(request: Request):
    """API usage documentation."""
    return templates.TemplateResponse(
        request,
        "docs.html",
        {"base_url": str(request.base_url).rstrip("/")},
    )


@router.get("/health")
async def health(request: Request):
    """Health check with asset presence."""
    return {
        "status": "ok",
        "assets": request.app.state.provisioner.status(),
    }
