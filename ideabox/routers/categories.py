"""Categories router — the category index and per-category idea listings."""

from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from sqlalchemy.ext.asyncio import AsyncSession

from ideabox.config import TEMPLATES_DIR
from ideabox.database import get_db
from ideabox.models.user import User
from ideabox.routers.auth import get_current_user
from ideabox.services import ideas as idea_service

router = APIRouter(prefix="/categories", tags=["categories"])
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


@router.get("", response_class=HTMLResponse)
async def list_categories(
    request: Request,
    current_user: Optional[User] = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """List every category with a link to post a new idea."""
    categories = await idea_service.list_categories(db)
    return templates.TemplateResponse(
        request,
        "categories_list.html",
        {
            "current_user": current_user,
            "categories": categories,
        },
    )


@router.get("/{category_id}", response_class=HTMLResponse)
async def category_detail(
    request: Request,
    category_id: int,
    current_user: Optional[User] = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Show a category and the current user's ideas filed under it."""
    category = await idea_service.find_category(db, category_id)
    ideas = await idea_service.list_ideas_for_owner(db, current_user, category.id)
    return templates.TemplateResponse(
        request,
        "category_detail.html",
        {
            "current_user": current_user,
            "category": category,
            "ideas": ideas,
        },
    )
