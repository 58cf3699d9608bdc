"""Queries only read; handlers never mutate state."""

from abc import abstractmethod
from typing import Generic, TypeVar

from pydantic import BaseModel

from surprise.domain.shared.dataclass_meta import AutoDataclassMeta


class Query(BaseModel): ...


class Result(BaseModel): ...


Q = TypeVar("Q", bound=Query)
R = TypeVar("R", bound=Result)


class QueryHandler(Generic[Q, R], metaclass=AutoDataclassMeta):
    @abstractmethod
    async def run(self, cmd: Q) -> R: ...
