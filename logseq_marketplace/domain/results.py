"""
Tagged results returned by the individual pipeline steps.

A step either produced a value (``Ok``), found nothing to produce
(``Absent``, e.g. a 404 or a manifest without an icon), or broke
(``Failed``). The aggregator maps each tag to its output behaviour.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar, Union


T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Absent:
    reason: str


@dataclass(frozen=True)
class Failed:
    cause: BaseException

    def __str__(self) -> str:
        return f"{type(self.cause).__name__}: {self.cause}"


StepResult = Union[Ok[T], Absent, Failed]


def value_or_none(result: "StepResult[T]") -> Optional[T]:
    """
    Collapse a step result to its value, or None for Absent/Failed.
    """
    if isinstance(result, Ok):
        return result.value
    return None


__all__ = ["Absent", "Failed", "Ok", "StepResult", "value_or_none"]
