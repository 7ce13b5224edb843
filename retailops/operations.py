from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Generic, Optional, TypeVar

from .errors import error_message


T = TypeVar("T")
A = TypeVar("A")

_log = logging.getLogger("retailops.operations")


@dataclass(frozen=True)
class OperationResult(Generic[T]):
    ok: bool
    data: Optional[T] = None
    error: Optional[str] = None

    @classmethod
    def success(cls, data: T) -> "OperationResult[T]":
        return cls(ok=True, data=data)

    @classmethod
    def failure(cls, error: str) -> "OperationResult[T]":
        return cls(ok=False, error=error)


def run_operation(fn: Callable[[A], T], arg: A) -> OperationResult[T]:
    try:
        return OperationResult.success(fn(arg))
    except Exception as exc:
        _log.error("operation %s failed: %s", getattr(fn, "__name__", fn), exc)
        return OperationResult.failure(error_message(exc))
