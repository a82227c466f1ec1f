"""Query and QueryHandler base classes."""

from abc import abstractmethod
from typing import Generic, TypeVar

from pydantic import BaseModel

from cutout.domain.shared.command import Result, _HandlerMeta


class Query(BaseModel): ...


Q = TypeVar("Q", bound=Query)
R = TypeVar("R", bound=Result)


class QueryHandler(Generic[Q, R], metaclass=_HandlerMeta):
    """Base class for read-only handlers. Subclasses are automatically dataclasses."""

    @abstractmethod
    async def run(self, query: Q) -> R: ...
