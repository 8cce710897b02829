"""
Template rendering utilities
"""
from pathlib import Path

from fastapi.templating import Jinja2Templates

# punchlines/core/templates.py -> punchlines/templates/
TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
