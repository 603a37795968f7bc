"""Authentication endpoints: register, login, logout and session lookup."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Response, status

from dashboard.guards.session import clear_auth_cookie, require_user, set_auth_cookie
from dashboard.logic.auth import authenticate, register_user
from dashboard.logic.tokens import create_token
from dashboard.models.auth import LoginRequest, RegisterRequest, SessionUser

router = APIRouter(prefix="/auth")
logger = logging.getLogger(__name__)


@router.post(
    "/register",
    summary="Register a dashboard user and start a session",
    operation_id="registerUser",
    status_code=status.HTTP_201_CREATED,
)
def register(payload: RegisterRequest, response: Response):
    user = register_user(payload)
    set_auth_cookie(response, create_token(user["id"], user["email"]))
    return {"success": True, "message": "User registered successfully"}


@router.post(
    "/login",
    summary="Log in with email and password",
    operation_id="loginUser",
)
def login(payload: LoginRequest, response: Response):
    user = authenticate(payload)
    set_auth_cookie(response, create_token(int(user["id"]), str(user["email"])))
    return {"success": True, "message": "Login successful"}


@router.delete(
    "/logout",
    summary="Clear the session cookie",
    operation_id="logoutUser",
)
def logout(response: Response):
    clear_auth_cookie(response)
    return {"success": True, "message": "Logout successful"}


@router.get(
    "/me",
    summary="Return the authenticated user",
    operation_id="getSessionUser",
    response_model=SessionUser,
)
def me(user: SessionUser = Depends(require_user)):
    return user
