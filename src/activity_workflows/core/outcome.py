"""Uniform result type of a single step invocation.

Step functions signal success by returning a value and failure either by raising
or by returning a :class:`Failure`. The engine normalises both into a
:class:`Success` or :class:`Failure` before routing.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

__all__ = ["Failure", "StepOutcome", "Success"]


@dataclass(frozen=True)
class Success:
    """A step settled successfully.

    Attributes:
        value: The value the step returned.
    """

    value: Any


@dataclass(frozen=True)
class Failure:
    """A step settled with a failure.

    Return ``Failure("Timeout")`` from a step function to fail it without raising.

    Attributes:
        error: The raised exception, or the value the step failed with.

    Example:
        >>> async def fetch(input, context):
        ...     if not input:
        ...         return Failure("EmptyInput")
        ...     return input
    """

    error: Any

    def __str__(self) -> str:
        return str(self.error)


StepOutcome = Union[Success, Failure]
"""Either a :class:`Success` or a :class:`Failure`."""
