from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class FlowState(Generic[T]):
    """Result / error / loading of one asynchronous flow.

    result and error are never both set.
    """

    result: Optional[T] = None
    error: Optional[str] = None
    loading: bool = False

    def started(self) -> "FlowState[T]":
        return replace(self, result=None, error=None, loading=True)

    def succeeded(self, result: T) -> "FlowState[T]":
        return replace(self, result=result, error=None, loading=False)

    def failed(self, message: str) -> "FlowState[T]":
        return replace(self, result=None, error=str(message), loading=False)
