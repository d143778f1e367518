# src/app/routers/pages.py
"""
Server-rendered pages and the HTML fragments the chat page swaps in.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, Form, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse, Response
from fastapi.templating import Jinja2Templates

from src.app.config import Settings, get_settings
from src.app.constants import COUNTRY_OPTIONS, DEFAULT_COUNTRY, DEFAULT_LANGUAGE, LANGUAGE_OPTIONS
from src.app.deps import (
    get_account_service,
    get_completion_proxy,
    get_recipe_service,
    get_user_repository,
    resolve_session,
)
from src.app.domain.errors import (
    CredentialUpdateError,
    InvalidProfileError,
    RecipeStoreError,
    SignupError,
    UserNotFoundError,
)
from src.app.domain.models import Authenticated, ParsedAnswer, SessionResult, User
from src.app.infra.db.base import UserRepository
from src.app.presentation.answers import parse_answer
from src.app.presentation.formatting import recipe_date
from src.app.services.account_service import AccountService
from src.app.services.completion_proxy import CompletionProxy
from src.app.services.recipe_service import RecipeService

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parents[1] / "presentation" / "templates"
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.filters["recipe_date"] = recipe_date

UPSTREAM_ERROR_TEXT = "Cheffy could not answer right now. Please try again in a moment."
PROFILE_UNAVAILABLE_TEXT = "Your profile could not be loaded right now. Please try again later."

router = APIRouter(tags=["pages"], include_in_schema=False)


def _to_login() -> RedirectResponse:
    return RedirectResponse("/login", status_code=status.HTTP_303_SEE_OTHER)


def _profile_options() -> dict:
    return {"languages": LANGUAGE_OPTIONS, "countries": COUNTRY_OPTIONS}


def _user_language(users: UserRepository, session: Authenticated) -> str:
    try:
        user = users.get_by_email(session.identity)
    except RecipeStoreError as exc:
        logger.warning("Falling back to default language: %s", exc)
        return DEFAULT_LANGUAGE
    return user.language if user else DEFAULT_LANGUAGE


def _load_profile(users: UserRepository, session: Authenticated) -> tuple[Optional[User], Optional[str]]:
    try:
        return users.get_by_email(session.identity), None
    except RecipeStoreError as exc:
        logger.warning("Profile unavailable for %s: %s", session.identity, exc)
        return None, PROFILE_UNAVAILABLE_TEXT


@router.get("/")
async def index(session: SessionResult = Depends(resolve_session)) -> Response:
    if isinstance(session, Authenticated):
        return RedirectResponse("/chat", status_code=status.HTTP_303_SEE_OTHER)
    return _to_login()


@router.get("/login", response_class=HTMLResponse)
async def login_page(request: Request):
    return templates.TemplateResponse(request, "login.html", {"error": None})


@router.post("/login")
async def login(
    request: Request,
    email: str = Form(...),
    password: str = Form(...),
    accounts: AccountService = Depends(get_account_service),
    settings: Settings = Depends(get_settings),
) -> Response:
    token = accounts.sign_in(email, password)
    if not token:
        return templates.TemplateResponse(
            request,
            "login.html",
            {"error": "Invalid email or password", "email": email},
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    response = RedirectResponse("/chat", status_code=status.HTTP_303_SEE_OTHER)
    response.set_cookie(
        settings.SESSION_COOKIE_NAME,
        token,
        max_age=settings.SESSION_MAX_AGE_SECONDS,
        httponly=True,
        secure=settings.SESSION_COOKIE_SECURE,
        samesite="lax",
    )
    return response


@router.get("/logout")
async def logout(settings: Settings = Depends(get_settings)) -> Response:
    response = _to_login()
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return response


@router.get("/signup", response_class=HTMLResponse)
async def signup_page(request: Request):
    return templates.TemplateResponse(
        request,
        "signup.html",
        {
            **_profile_options(),
            "form": {"language": DEFAULT_LANGUAGE, "country": DEFAULT_COUNTRY},
            "error": None,
            "signed_up": False,
        },
    )


@router.post("/signup", response_class=HTMLResponse)
async def signup(
    request: Request,
    fullName: str = Form(...),
    email: str = Form(...),
    password: str = Form(...),
    language: str = Form(DEFAULT_LANGUAGE),
    country: str = Form(DEFAULT_COUNTRY),
    accounts: AccountService = Depends(get_account_service),
):
    form = {"fullName": fullName, "email": email, "language": language, "country": country}
    try:
        accounts.signup(fullName, email, password, language, country)
    except (SignupError, InvalidProfileError, RecipeStoreError) as exc:
        return templates.TemplateResponse(
            request,
            "signup.html",
            {**_profile_options(), "form": form, "error": str(exc), "signed_up": False},
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    # Everything but the last word of the full name
    first_names = " ".join(fullName.split()[:-1]) or fullName
    return templates.TemplateResponse(
        request,
        "signup.html",
        {**_profile_options(), "form": form, "error": None, "signed_up": True, "first_names": first_names},
    )


@router.get("/chat", response_class=HTMLResponse)
async def chat_page(
    request: Request,
    session: SessionResult = Depends(resolve_session),
):
    if not isinstance(session, Authenticated):
        return _to_login()
    return templates.TemplateResponse(request, "chat.html", {"user": session})


@router.post("/chat/messages", response_class=HTMLResponse)
async def chat_message(
    request: Request,
    prompt: str = Form(...),
    session: SessionResult = Depends(resolve_session),
    proxy: CompletionProxy = Depends(get_completion_proxy),
    users: UserRepository = Depends(get_user_repository),
):
    if not isinstance(session, Authenticated):
        return _to_login()
    if not prompt.strip():
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    result = await proxy.handle(session, prompt, _user_language(users, session))

    if result.status_code == status.HTTP_200_OK:
        answer = parse_answer(result.body.get("json"))
    else:
        answer = ParsedAnswer(text=UPSTREAM_ERROR_TEXT, error=True)

    return templates.TemplateResponse(
        request,
        "_exchange.html",
        {"question": prompt, "answer": answer},
        headers=result.headers,
    )


@router.post("/chat/save", response_class=HTMLResponse)
async def chat_save(
    request: Request,
    title: str = Form(""),
    description: str = Form(""),
    ingredients: list[str] = Form(default=[]),
    instructions: str = Form(""),
    session: SessionResult = Depends(resolve_session),
    service: RecipeService = Depends(get_recipe_service),
):
    if not isinstance(session, Authenticated):
        return _to_login()

    try:
        service.save_recipe(
            email=session.identity,
            title=title,
            description=description,
            ingredients=ingredients,
            instructions=instructions,
        )
        saved = True
    except (UserNotFoundError, RecipeStoreError) as exc:
        logger.warning("Recipe not saved from chat: %s", exc)
        saved = False

    return templates.TemplateResponse(
        request,
        "_saved.html",
        {"saved": saved},
        status_code=status.HTTP_201_CREATED if saved else status.HTTP_200_OK,
    )


@router.get("/recipes", response_class=HTMLResponse)
async def recipes_page(
    request: Request,
    session: SessionResult = Depends(resolve_session),
    service: RecipeService = Depends(get_recipe_service),
):
    if not isinstance(session, Authenticated):
        return _to_login()

    error = None
    try:
        recipes = service.list_recipes(session.identity, newest_first=True)
    except UserNotFoundError:
        recipes = []
    except RecipeStoreError as exc:
        logger.warning("Recipes unavailable for %s: %s", session.identity, exc)
        recipes, error = [], PROFILE_UNAVAILABLE_TEXT

    return templates.TemplateResponse(
        request,
        "recipes.html",
        {"user": session, "recipes": recipes, "error": error},
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE if error else status.HTTP_200_OK,
    )


@router.get("/settings", response_class=HTMLResponse)
async def settings_page(
    request: Request,
    session: SessionResult = Depends(resolve_session),
    users: UserRepository = Depends(get_user_repository),
):
    if not isinstance(session, Authenticated):
        return _to_login()

    profile, error = _load_profile(users, session)
    return templates.TemplateResponse(
        request,
        "settings.html",
        {**_profile_options(), "user": session, "profile": profile, "message": None, "error": error},
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE if error else status.HTTP_200_OK,
    )


@router.post("/settings", response_class=HTMLResponse)
async def update_settings(
    request: Request,
    name: Optional[str] = Form(None),
    language: Optional[str] = Form(None),
    country: Optional[str] = Form(None),
    password: Optional[str] = Form(None),
    session: SessionResult = Depends(resolve_session),
    accounts: AccountService = Depends(get_account_service),
    users: UserRepository = Depends(get_user_repository),
):
    if not isinstance(session, Authenticated):
        return _to_login()

    message, error = None, None
    try:
        profile = accounts.update_settings(session, name, language, country, password)
        message = "Changes saved"
    except (InvalidProfileError, CredentialUpdateError, UserNotFoundError, RecipeStoreError) as exc:
        error = str(exc)
        profile, _ = _load_profile(users, session)

    return templates.TemplateResponse(
        request,
        "settings.html",
        {**_profile_options(), "user": session, "profile": profile, "message": message, "error": error},
        status_code=status.HTTP_400_BAD_REQUEST if error else status.HTTP_200_OK,
    )
