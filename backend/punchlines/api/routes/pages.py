"""
Page routes for web interface
"""
from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from sqlalchemy.orm import Session

from punchlines.core.auth import get_current_user
from punchlines.core.database import get_db
from punchlines.core.example_prompts import pick_examples
from punchlines.core.templates import templates
from punchlines.models.user import User
from punchlines.services.joke_service import JokeService

router = APIRouter(tags=["pages"])


@router.get("/", response_class=HTMLResponse)
async def index(request: Request, user: Optional[User] = Depends(get_current_user)):
    """Prompt page with a fresh shuffle of example setups"""
    return templates.TemplateResponse(
        request,
        "index.html",
        {"examples": pick_examples(), "user": user},
    )


@router.get("/jokes", response_class=HTMLResponse)
async def saved_jokes_page(
    request: Request,
    user: Optional[User] = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """The caller's saved jokes"""
    if user is None:
        return RedirectResponse(url="/auth/login", status_code=303)
    jokes = JokeService(db).list_saved_jokes(user)
    return templates.TemplateResponse(request, "jokes.html", {"jokes": jokes, "user": user})


@router.get("/auth/login", response_class=HTMLResponse)
async def login_page(request: Request):
    """Login page"""
    return templates.TemplateResponse(request, "auth/login.html", {"mode": "login"})


@router.get("/auth/register", response_class=HTMLResponse)
async def register_page(request: Request):
    """Register page"""
    return templates.TemplateResponse(request, "auth/login.html", {"mode": "register"})
