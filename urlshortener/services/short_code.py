"""Short code generation.

Codes are derived from a SHA-256 digest of the long URL, the attempt number,
the current time and a random nonce, rendered in base 62 and cut to
``SHORT_CODE_LENGTH`` characters. Mixing time and a nonce into the digest makes
every call produce a new candidate, which is what the collision retry loop
relies on.
"""

import hashlib
import random
import re
import time
from typing import Callable, Optional

from urlshortener.models.url import SHORT_CODE_LENGTH

BASE62_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"
BASE = len(BASE62_ALPHABET)

# 12 hex digits = 48 bits of the digest
HASH_PREFIX_HEX_DIGITS = 12
NONCE_BYTES = 4
SALT_BYTES = 16

_SHORT_CODE_RE = re.compile(rf"[0-9a-zA-Z]{{{SHORT_CODE_LENGTH}}}")


def _wall_clock_ms() -> int:
    return time.time_ns() // 1_000_000


def to_base62(number: int) -> str:
    """Encode a non-negative integer in base 62 (digits, lowercase, uppercase)."""
    if number < 0:
        raise ValueError("Only non-negative integers can be encoded")
    if number == 0:
        return BASE62_ALPHABET[0]

    digits = []
    while number > 0:
        number, remainder = divmod(number, BASE)
        digits.append(BASE62_ALPHABET[remainder])
    return "".join(reversed(digits))


def is_valid_short_code(code) -> bool:
    """Return True iff ``code`` is exactly 7 base-62 characters."""
    return isinstance(code, str) and _SHORT_CODE_RE.fullmatch(code) is not None


class ShortCodeGenerator:
    """
    Generator of candidate short codes.

    Args:
        salt: Deployment-specific salt mixed into every digest. A random one
            is generated when omitted.
        clock: Zero-argument callable returning epoch milliseconds.
        rng: ``random.Random``-compatible source for the nonce and padding.
    """

    def __init__(
        self,
        salt: Optional[str] = None,
        clock: Optional[Callable[[], int]] = None,
        rng: Optional[random.Random] = None,
    ):
        self.rng = rng or random.SystemRandom()
        self.clock = clock or _wall_clock_ms
        self.salt = salt or self.rng.randbytes(SALT_BYTES).hex()

    def generate(self, long_url: str, attempt: int = 0) -> str:
        """
        Produce a candidate code for ``long_url``.

        Args:
            long_url: URL being shortened
            attempt: Zero-based retry counter

        Returns:
            str: A 7-character base-62 code
        """
        if attempt < 0:
            raise ValueError("attempt must be >= 0")

        number = self._numeric_hash(long_url, attempt)
        return self._fit_length(to_base62(number))

    def _numeric_hash(self, long_url: str, attempt: int) -> int:
        nonce = self.rng.randbytes(NONCE_BYTES).hex()
        combined = f"{self.salt}:{long_url}-{attempt}-{self.clock()}-{nonce}"
        digest = hashlib.sha256(combined.encode("utf-8")).hexdigest()
        return int(digest[:HASH_PREFIX_HEX_DIGITS], 16)

    def _fit_length(self, code: str) -> str:
        if len(code) >= SHORT_CODE_LENGTH:
            return code[:SHORT_CODE_LENGTH]

        padding = "".join(
            self.rng.choice(BASE62_ALPHABET)
            for _ in range(SHORT_CODE_LENGTH - len(code))
        )
        return code + padding

    # Usable without an instance, e.g. ShortCodeGenerator.is_valid_short_code(code)
    is_valid_short_code = staticmethod(is_valid_short_code)
