"""Shared Jinja2 environment for HTML routes."""
from pathlib import Path

from fastapi.templating import Jinja2Templates

from anonchat.core.config import settings

WEB_ROOT = Path(__file__).resolve().parent
TEMPLATES_DIR = WEB_ROOT / "templates"
STATIC_DIR = WEB_ROOT / "static"

# .html templates autoescape, so sender and content are rendered as text.
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.globals.setdefault("APP_NAME", settings.APP_NAME)
templates.env.globals.setdefault("PAGE_REFRESH_SECONDS", settings.PAGE_REFRESH_SECONDS)
