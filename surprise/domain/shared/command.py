"""Commands change state; each has exactly one handler."""

from abc import abstractmethod
from typing import Generic, TypeVar

from pydantic import BaseModel

from surprise.domain.shared.dataclass_meta import AutoDataclassMeta


class Command(BaseModel): ...


class Result(BaseModel): ...


C = TypeVar("C", bound=Command)
R = TypeVar("R", bound=Result)


class CommandHandler(Generic[C, R], metaclass=AutoDataclassMeta):
    @abstractmethod
    async def run(self, cmd: C) -> R: ...
