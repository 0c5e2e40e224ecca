# api/v1/auth.py
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool
from supabase import AuthError, Client

from services.auth import bearer_token
from services.baas import get_auth_client, get_service_client
from services.db import Profile, get_session
from api.v1.schemas import AuthOut, Credentials

router = APIRouter()
_LOG = logging.getLogger(__name__)


def _auth_failed(exc: AuthError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=getattr(exc, "message", None) or str(exc),
    )


# ───────────────────────── sign-up ──────────────────────────
@router.post("/signup", response_model=AuthOut, status_code=status.HTTP_201_CREATED)
async def signup(
    body: Credentials,
    client: Client = Depends(get_auth_client),
) -> AuthOut:
    try:
        res = await run_in_threadpool(
            client.auth.sign_up, {"email": body.email, "password": body.password}
        )
    except AuthError as exc:
        raise _auth_failed(exc) from exc

    user, session = res.user, res.session
    if session is None or user is None:
        # project requires e-mail confirmation before the first session
        return AuthOut(user_id=user.id if user else None, next="confirm-email")

    _LOG.info("user %s signed up", user.id)
    return AuthOut(
        user_id=user.id,
        access_token=session.access_token,
        refresh_token=session.refresh_token,
        next="profile-setup",
    )


# ───────────────────────── sign-in ──────────────────────────
@router.post("/login", response_model=AuthOut)
async def login(
    body: Credentials,
    client: Client = Depends(get_auth_client),
    db: AsyncSession = Depends(get_session),
) -> AuthOut:
    try:
        res = await run_in_threadpool(
            client.auth.sign_in_with_password,
            {"email": body.email, "password": body.password},
        )
    except AuthError as exc:
        raise _auth_failed(exc) from exc

    if res.user is None or res.session is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Sign-in did not produce a user session. "
                   "Please check your credentials or verify your email.",
        )

    has_profile = await db.get(Profile, res.user.id) is not None
    return AuthOut(
        user_id=res.user.id,
        access_token=res.session.access_token,
        refresh_token=res.session.refresh_token,
        next="dashboard" if has_profile else "profile-setup",
    )


# ───────────────────────── sign-out ─────────────────────────
@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(
    token: str = Depends(bearer_token),
    service: Client = Depends(get_service_client),
) -> Response:
    try:
        await run_in_threadpool(service.auth.admin.sign_out, token)
    except AuthError as exc:
        raise _auth_failed(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)
