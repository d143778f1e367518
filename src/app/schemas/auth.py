from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from src.app.constants import DEFAULT_COUNTRY, DEFAULT_LANGUAGE


class SignupRequest(BaseModel):
    fullName: str = Field(..., min_length=1, max_length=120)
    email: str = Field(..., min_length=3)
    password: str = Field(..., min_length=1)
    language: str = DEFAULT_LANGUAGE
    country: str = DEFAULT_COUNTRY


class SignupResponse(BaseModel):
    success: bool
    error: Optional[str] = None


class CurrentUser(BaseModel):
    id: str
    email: Optional[str] = None
    name: Optional[str] = None
