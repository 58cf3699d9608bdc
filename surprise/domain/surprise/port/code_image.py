from abc import abstractmethod
from typing import Protocol

from surprise.domain.shared.port import Port


class CodeImageGenerator(Port, Protocol):
    media_type: str

    @abstractmethod
    def encode(self, url: str) -> bytes:
        """Render a scannable raster image encoding url."""
        ...
