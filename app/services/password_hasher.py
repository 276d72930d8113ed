# app/services/password_hasher.py
import bcrypt

from app.domain.errors import ValidationError
from app.utils.settings import BCRYPT_ROUNDS

#bcrypt bierze pod uwage tylko pierwsze 72 bajty
MAX_PASSWORD_BYTES = 72


class PasswordHasher:
    def __init__(self, rounds: int | None = None):
        self.rounds = rounds or BCRYPT_ROUNDS

    def hash(self, plain: str) -> str:
        encoded = plain.encode("utf-8")
        if len(encoded) > MAX_PASSWORD_BYTES:
            raise ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
        return bcrypt.hashpw(encoded, bcrypt.gensalt(rounds=self.rounds)).decode("utf-8")

    def verify(self, plain: str, hashed: str) -> bool:
        encoded = plain.encode("utf-8")
        if len(encoded) > MAX_PASSWORD_BYTES:
            return False
        try:
            return bcrypt.checkpw(encoded, hashed.encode("utf-8"))
        except ValueError:
            # uszkodzony hash w bazie
            return False
