import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException

from findmysong.api.deps import get_current_user, get_user_store
from findmysong.models.users import LoginRequest, LoginResponse, RegisterRequest, RegisterResponse, UserOut
from findmysong.services.security import (
    MAX_PASSWORD_BYTES,
    create_access_token,
    hash_password,
    verify_password,
)
from findmysong.services.user_store import UserStore

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/register", status_code=201)
async def register(request: RegisterRequest, users: UserStore = Depends(get_user_store)) -> RegisterResponse:
    name, email = request.name.strip(), request.email.strip()
    if not name or not email or not request.password:
        raise HTTPException(status_code=400, detail="Name, email and password are required")
    if len(request.password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise HTTPException(status_code=400, detail=f"Password too long (max {MAX_PASSWORD_BYTES} bytes)")

    if await users.get_by_email(email):
        raise HTTPException(status_code=400, detail="Email already registered")

    user = await users.create_user(name, email, hash_password(request.password))
    if not user:
        # Lost a race against a concurrent registration
        raise HTTPException(status_code=400, detail="Email already registered")

    logger.info("Registered user %s", user["id"])
    return RegisterResponse(message="User created", user=UserOut(**user))


@router.post("/login")
async def login(request: LoginRequest, users: UserStore = Depends(get_user_store)) -> LoginResponse:
    email = request.email.strip()
    if not email or not request.password:
        raise HTTPException(status_code=400, detail="Email and password are required")

    user = await users.get_by_email(email)
    if not user:
        logger.info("Login failed, unknown email")
        raise HTTPException(status_code=401, detail="User not found")

    if not verify_password(user["password_hash"], request.password):
        logger.info("Login failed, wrong password for user %s", user["id"])
        raise HTTPException(status_code=401, detail="Incorrect password")

    token = create_access_token(user["id"], user["email"])
    logger.info("User %s logged in", user["id"])
    return LoginResponse(message="Login successful", token=token)


@router.get("/me")
async def me(user: dict[str, Any] = Depends(get_current_user)) -> UserOut:
    return UserOut(**user)
