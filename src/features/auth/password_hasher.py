"""Password hashing (Argon2 via pwdlib) and deterministic token fingerprints (HMAC)."""

import hashlib
import hmac

from fastapi.concurrency import run_in_threadpool
from pwdlib import PasswordHash
from pwdlib.exceptions import UnknownHashError
from pwdlib.hashers.argon2 import Argon2Hasher

from .config import PasswordHashCost


class PasswordHasher:
    """Randomized, self-describing Argon2id hashes for user passwords.

    Each call to ``hash`` uses a fresh salt, so two hashes of the same password
    differ; ``verify`` extracts salt and cost parameters from the stored digest.
    The async variants run the CPU-bound work in the threadpool so they never
    stall the event loop.
    """

    def __init__(self, cost: PasswordHashCost | None = None):
        cost = cost or PasswordHashCost()
        self.cost = cost
        self._password_hash = PasswordHash(
            (
                Argon2Hasher(
                    time_cost=cost.time_cost,
                    memory_cost=cost.memory_cost,
                    parallelism=cost.parallelism,
                ),
            )
        )

    def hash(self, secret: str) -> str:
        return self._password_hash.hash(secret)

    def verify(self, secret: str, digest: str) -> bool:
        """Return True when ``secret`` matches ``digest``; unknown digest formats never match."""
        try:
            return self._password_hash.verify(secret, digest)
        except UnknownHashError:
            return False

    async def hash_async(self, secret: str) -> str:
        return await run_in_threadpool(self.hash, secret)

    async def verify_async(self, secret: str, digest: str) -> bool:
        return await run_in_threadpool(self.verify, secret, digest)


class TokenFingerprinter:
    """Keyed, deterministic fingerprint of an opaque token.

    The same token always maps to the same hex digest, which allows exact-match
    lookup in the store without persisting the raw token.
    """

    def __init__(self, key: str):
        if not key:
            raise ValueError("Fingerprint key must not be empty")
        self._key = key.encode("utf-8")

    def fingerprint(self, token: str) -> str:
        return hmac.new(self._key, token.encode("utf-8"), hashlib.sha256).hexdigest()
