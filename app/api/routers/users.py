from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.api.deps import get_password_hasher, get_token_service
from app.data.database import get_db
from app.services.password_hasher import PasswordHasher
from app.services.token_service import TokenService
from app.services.user_service import UserService
from app.domain.schemas import UserCreate, UserRead, LoginIn, TokenOut

router = APIRouter(tags=["auth"])


def get_service(
    db: Session = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
    token_service: TokenService = Depends(get_token_service),
) -> UserService:
    return UserService(db, hasher, token_service)


@router.post("/register", response_model=UserRead, status_code=201)
def register(payload: UserCreate, svc: UserService = Depends(get_service)):
    return svc.register(payload)


@router.post("/login", response_model=TokenOut)
def login(payload: LoginIn, svc: UserService = Depends(get_service)):
    return svc.login(payload)
