from abc import abstractmethod
from typing import Protocol

from surprise.domain.shared.port import Port


class PasswordHasher(Port, Protocol):
    @abstractmethod
    def hash(self, plaintext: str) -> str: ...

    @abstractmethod
    def verify(self, plaintext: str, digest: str) -> bool:
        """True iff plaintext is the password digest was produced from. Never raises."""
        ...
