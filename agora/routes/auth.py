from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from sqlalchemy.orm import Session

from agora.database import get_db
from agora.deps import templates
from agora.models.user import USER_STATUS_INVALID, User
from passlib.hash import bcrypt

router = APIRouter(tags=["auth"])


@router.get("/login", response_class=HTMLResponse)
async def login_page(request: Request):
    return templates.TemplateResponse(request, "login.html", {"user": None})


@router.post("/login")
async def login(
    request: Request,
    name: str = Form(...),
    password: str = Form(...),
    db: Session = Depends(get_db),
):
    user = db.query(User).filter(User.name == name).first()
    if (
        not user
        or user.status == USER_STATUS_INVALID
        or not user.password_hash
        or not bcrypt.verify(password, user.password_hash)
    ):
        return templates.TemplateResponse(
            request,
            "login.html",
            {"user": None, "error": "Invalid name or password"},
            status_code=401,
        )
    request.session["user_id"] = user.id
    request.session["name"] = user.name
    request.session["role"] = user.role
    return RedirectResponse("/", status_code=303)


@router.get("/logout")
async def logout(request: Request):
    request.session.clear()
    return RedirectResponse("/", status_code=303)
