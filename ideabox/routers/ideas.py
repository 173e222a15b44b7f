"""
Ideas router — post, edit and delete ideas.

Endpoints:
    GET    /ideas                 → the current user's ideas
    GET    /ideas/new             → new idea form
    POST   /ideas                 → create
    GET    /ideas/{id}            → idea detail (owner only)
    GET    /ideas/{id}/edit       → edit form (owner only)
    POST   /ideas/{id}            → update (owner only)
    POST   /ideas/{id}/delete     → delete from an HTML form (owner only)
    DELETE /ideas/{id}            → delete (owner only)
"""

from typing import Optional

from fastapi import APIRouter, Depends, Form, HTTPException, Request, Response, status
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates
from sqlalchemy.ext.asyncio import AsyncSession

from ideabox.config import TEMPLATES_DIR
from ideabox.database import get_db
from ideabox.errors import IdeaValidationError
from ideabox.models.idea import Idea
from ideabox.models.user import User
from ideabox.routers.auth import get_current_user
from ideabox.schemas.idea import IdeaDraft
from ideabox.services import ideas as idea_service
from ideabox.services.authorization import IdeaAction, ensure_owner

router = APIRouter(prefix="/ideas", tags=["ideas"])
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

NEW_IDEA_HEADING = "Post a new idea"
EDIT_IDEA_HEADING = "Edit Existing Idea"


def _login_redirect() -> RedirectResponse:
    return RedirectResponse(url="/auth/login", status_code=status.HTTP_303_SEE_OTHER)


async def _render_form(
    request: Request,
    db: AsyncSession,
    current_user: User,
    draft: IdeaDraft,
    idea: Optional[Idea] = None,
    errors: Optional[list] = None,
):
    """Render the shared new/edit form, keeping whatever the user typed."""
    categories = await idea_service.list_categories(db)
    if idea is None:
        heading, action, submit_label = NEW_IDEA_HEADING, "/ideas", "Post Idea"
    else:
        heading, action, submit_label = EDIT_IDEA_HEADING, f"/ideas/{idea.id}", "Update"
    return templates.TemplateResponse(
        request,
        "idea_form.html",
        {
            "current_user": current_user,
            "categories": categories,
            "draft": draft,
            "idea": idea,
            "heading": heading,
            "form_action": action,
            "submit_label": submit_label,
            "errors": errors or [],
        },
    )


# ═══════════════════════════════════════════════════════════════
#  Listing & creation
# ═══════════════════════════════════════════════════════════════

@router.get("", response_class=HTMLResponse)
async def my_ideas(
    request: Request,
    current_user: Optional[User] = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """List only the ideas created by the signed-in user."""
    if not current_user:
        return _login_redirect()

    ideas = await idea_service.list_ideas_for_owner(db, current_user)
    return templates.TemplateResponse(
        request,
        "ideas_mine.html",
        {"current_user": current_user, "ideas": ideas},
    )


@router.get("/new", response_class=HTMLResponse)
async def new_idea_form(
    request: Request,
    category_id: Optional[int] = None,
    current_user: Optional[User] = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Show the idea creation form, optionally preselecting a category."""
    if not current_user:
        return _login_redirect()
    return await _render_form(request, db, current_user, IdeaDraft(category_id=category_id))


@router.post("")
async def create_idea(
    request: Request,
    description: Optional[str] = Form(None),
    category_id: Optional[str] = Form(None),
    current_user: Optional[User] = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Persist a new idea and land on its category page."""
    if not current_user:
        return _login_redirect()

    draft = IdeaDraft(description=description, category_id=category_id)
    try:
        idea = await idea_service.create_idea(db, current_user, draft)
    except IdeaValidationError as e:
        return await _render_form(request, db, current_user, draft, errors=[e.message])

    await db.commit()
    return RedirectResponse(
        url=f"/categories/{idea.category_id}?success=Idea+posted",
        status_code=status.HTTP_303_SEE_OTHER,
    )


# ═══════════════════════════════════════════════════════════════
#  Owner-only actions
# ═══════════════════════════════════════════════════════════════

@router.get("/{idea_id}", response_class=HTMLResponse)
async def idea_detail(
    request: Request,
    idea_id: int,
    current_user: Optional[User] = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    if not current_user:
        return _login_redirect()

    idea = await idea_service.find_idea(db, idea_id)
    ensure_owner(current_user, idea, IdeaAction.VIEW)
    category = await idea_service.find_category(db, idea.category_id)
    return templates.TemplateResponse(
        request,
        "idea_detail.html",
        {
            "current_user": current_user,
            "idea": idea,
            "category": category,
        },
    )


@router.get("/{idea_id}/edit", response_class=HTMLResponse)
async def edit_idea_form(
    request: Request,
    idea_id: int,
    current_user: Optional[User] = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    if not current_user:
        return _login_redirect()

    idea = await idea_service.find_idea(db, idea_id)
    ensure_owner(current_user, idea, IdeaAction.EDIT)
    draft = IdeaDraft(description=idea.description, category_id=idea.category_id)
    return await _render_form(request, db, current_user, draft, idea=idea)


@router.post("/{idea_id}")
async def update_idea(
    request: Request,
    idea_id: int,
    description: Optional[str] = Form(None),
    category_id: Optional[str] = Form(None),
    current_user: Optional[User] = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Ownership first, then validation; the idea may move to another category."""
    if not current_user:
        return _login_redirect()

    idea = await idea_service.find_idea(db, idea_id)
    ensure_owner(current_user, idea, IdeaAction.UPDATE)

    draft = IdeaDraft(description=description, category_id=category_id)
    try:
        idea = await idea_service.update_idea(db, idea, draft)
    except IdeaValidationError as e:
        return await _render_form(request, db, current_user, draft, idea=idea, errors=[e.message])

    await db.commit()
    return RedirectResponse(
        url=f"/categories/{idea.category_id}?success=Idea+updated",
        status_code=status.HTTP_303_SEE_OTHER,
    )


@router.post("/{idea_id}/delete")
async def delete_idea_form(
    idea_id: int,
    current_user: Optional[User] = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Delete via the "Delete Idea" button and go back to the category."""
    if not current_user:
        return _login_redirect()

    idea = await idea_service.find_idea(db, idea_id)
    ensure_owner(current_user, idea, IdeaAction.DELETE)
    category_id = idea.category_id

    await idea_service.delete_idea(db, idea)
    await db.commit()
    return RedirectResponse(
        url=f"/categories/{category_id}?success=Idea+deleted",
        status_code=status.HTTP_303_SEE_OTHER,
    )


@router.delete("/{idea_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_idea(
    idea_id: int,
    current_user: Optional[User] = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    if not current_user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")

    idea = await idea_service.find_idea(db, idea_id)
    ensure_owner(current_user, idea, IdeaAction.DELETE)

    await idea_service.delete_idea(db, idea)
    await db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
