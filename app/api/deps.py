# app/api/deps.py
from fastapi import Request

from app.services.lock_service import LockService
from app.services.password_hasher import PasswordHasher
from app.services.token_service import TokenService


def get_lock_service(request: Request) -> LockService:
    return request.app.state.lock_service


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher
