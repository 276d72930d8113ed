import uuid
from contextlib import contextmanager
from typing import Iterator

import redis
from app.domain.errors import Conflict, ERROR_CART_BUSY
from app.utils.retry import lock_retry, redis_retry
from app.utils.settings import CART_LOCK_ATTEMPTS, CART_LOCK_TTL_MS, REDIS_URL
from app.utils.logging import get_logger

logger = get_logger(__name__)

#LUA porownaj i usun, atomicity
_RELEASE_LUA = """
if redis.call('GET', KEYS[1]) == ARGV[1] then
    return redis.call('DEL', KEYS[1])
else
    return 0
end
"""

#redis wykonuje skrypt lua atomowo, nie mozna wcisnac sie miedzy GET a DEL
#wiec nie zwolnimy locka ktory po wygasnieciu przejal inny request


class LockService:
    """
    -serializacja read-modify-write koszyka per user (lock)
    -zwalnianie locka tylko przez wlasciciela (lua)
    -brak blokad miedzy userami, kazdy koszyk ma swoj klucz
    """

    def __init__(
        self,
        url: str | None = None,
        ttl_ms: int = CART_LOCK_TTL_MS,
        attempts: int = CART_LOCK_ATTEMPTS,
    ):
        self.redis = redis.Redis.from_url(
            url or REDIS_URL,
            decode_responses=True,
        )
        self.ttl_ms = ttl_ms
        self.attempts = attempts

    @staticmethod
    def _key(user_id: int) -> str:
        return f"cart:{user_id}:lock"

    @redis_retry()
    def acquire_cart_lock(self, user_id: int, owner: str) -> bool:
        key = self._key(user_id)
        #SET cart:1:lock "<owner>" NX PX 5000
        return bool(
            self.redis.set(
                name=key,
                value=owner,
                nx=True,  #tylko jesli klucz nie istnieje
                px=self.ttl_ms,  #wygasa sam, nawet jak proces padnie
            )
        )

    @redis_retry()
    def release_cart_lock(self, user_id: int, owner: str) -> bool:
        key = self._key(user_id)
        res = self.redis.eval(_RELEASE_LUA, 1, key, owner)
        return bool(res)

    @contextmanager
    def cart_lock(self, user_id: int) -> Iterator[None]:
        owner = uuid.uuid4().hex

        @lock_retry(self.attempts)
        def acquire() -> bool:
            return self.acquire_cart_lock(user_id, owner)

        if not acquire():
            logger.warning(f"Cart lock for user {user_id} is busy")
            raise Conflict(ERROR_CART_BUSY)

        try:
            yield
        finally:
            try:
                if not self.release_cart_lock(user_id, owner):
                    logger.warning(f"Cart lock for user {user_id} expired before release")
            except redis.RedisError as e:
                #zmiana juz zapisana, lock i tak wygasnie po ttl
                logger.warning(f"Cart lock for user {user_id} not released: {e}")
