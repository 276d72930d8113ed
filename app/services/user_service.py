from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from app.data.models.user import UserModel
from app.repos.user_repo import UserRepo
from app.domain.errors import AuthError, ValidationError, ERROR_INVALID_CREDENTIALS
from app.domain.schemas import UserCreate, UserRead, LoginIn, TokenOut
from app.services.password_hasher import PasswordHasher
from app.services.token_service import TokenService
from app.utils.logging import get_logger

logger = get_logger(__name__)


class UserService:
    def __init__(self, db: Session, hasher: PasswordHasher, token_service: TokenService):
        self.repo = UserRepo(db)
        self.hasher = hasher
        self.token_service = token_service

    def register(self, payload: UserCreate) -> UserRead:
        if self.repo.get_by_username(payload.username):
            raise ValidationError("Username already taken")

        user = UserModel(
            username=payload.username,
            password_hash=self.hasher.hash(payload.password),
        )

        try:
            created = self.repo.create_user(user)
        except IntegrityError:
            #rownolegla rejestracja tego samego loginu
            self.repo.rollback()
            raise ValidationError("Username already taken")

        logger.info(f"Registered user {created.id} ({created.username})")
        return UserRead(id=created.id, username=created.username)

    def login(self, payload: LoginIn) -> TokenOut:
        user = self.repo.get_by_username(payload.username)

        if not user or not self.hasher.verify(payload.password, user.password_hash):
            logger.info(f"Failed login for {payload.username!r}")
            raise AuthError(ERROR_INVALID_CREDENTIALS)

        return TokenOut(token=self.token_service.issue(user.id))
