"""Typed failures raised by the mortgage engine."""

from __future__ import annotations


class CalculationError(ValueError):
    """Base class for every failure the engine reports to its callers."""


class InvalidInput(CalculationError):
    def __init__(self, errors: list[str] | str):
        if isinstance(errors, str):
            errors = [errors]
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


class NonConverging(CalculationError):
    """The scheduled payment does not cover the interest accrued in a month."""
