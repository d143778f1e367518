from __future__ import annotations

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from src.app.deps import get_account_service, get_current_user
from src.app.domain.errors import InvalidProfileError, RecipeStoreError, SignupError
from src.app.domain.models import Authenticated
from src.app.schemas.auth import CurrentUser, SignupRequest, SignupResponse
from src.app.services.account_service import AccountService

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.get("/me", response_model=CurrentUser)
async def me(user: Authenticated = Depends(get_current_user)):
    return CurrentUser(id=user.user_id, email=user.email, name=user.name)


@router.post("/signup", response_model=SignupResponse)
async def signup(
    payload: SignupRequest,
    accounts: AccountService = Depends(get_account_service),
):
    try:
        accounts.signup(
            full_name=payload.fullName,
            email=payload.email,
            password=payload.password,
            language=payload.language,
            country=payload.country,
        )
    except (SignupError, InvalidProfileError, RecipeStoreError) as exc:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"success": False, "error": str(exc)},
        )
    return SignupResponse(success=True)
