"""Argon2id implementation of the PasswordHasher port."""

import argon2
from argon2.exceptions import InvalidHashError, VerificationError

from surprise.domain.surprise.port.password import PasswordHasher


class Argon2PasswordHasher(PasswordHasher):
    """Salted, memory-hard hashing with argon2-cffi's default parameters.

    Digests are self-describing PHC strings ($argon2id$v=19$...), so hashing
    the same plaintext twice gives different digests; only verify() compares.
    """

    def __init__(self, hasher: argon2.PasswordHasher | None = None) -> None:
        self._hasher = hasher or argon2.PasswordHasher()

    def hash(self, plaintext: str) -> str:
        return self._hasher.hash(plaintext)

    def verify(self, plaintext: str, digest: str) -> bool:
        try:
            return self._hasher.verify(digest, plaintext)
        except (VerificationError, InvalidHashError):
            return False
