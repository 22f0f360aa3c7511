from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union


T = TypeVar("T")
D = TypeVar("D")


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T

    @property
    def is_success(self) -> bool:
        return True

    @property
    def is_failure(self) -> bool:
        return False

    def value_or(self, default: D) -> T | D:
        return self.value

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Failure:
    error: Exception

    @property
    def is_success(self) -> bool:
        return False

    @property
    def is_failure(self) -> bool:
        return True

    def value_or(self, default: D) -> D:
        return default

    def unwrap(self):
        raise self.error


Result = Union[Success[T], Failure]
