"""
Auth API endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status

from . import dependencies, schemas, service

router = APIRouter()

TOKEN_COOKIE = "token"


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(payload: schemas.RegisterRequest) -> schemas.RegisterResponse:
    return await service.register(payload)


@router.post("/login")
async def login(payload: schemas.LoginRequest, response: Response) -> schemas.TokenResponse:
    result = await service.login(payload)
    response.set_cookie(TOKEN_COOKIE, result.token, httponly=True, secure=True)
    return result


@router.get("/verify")
async def verify(claims: dict = Depends(dependencies.get_token_claims)) -> schemas.VerifyResponse:
    return await service.authenticate(claims)
