"""Exceptions raised before any statement reaches the driver."""

from __future__ import annotations

from typing import Any


class ParameterError(ValueError):
    """Base class for parameter binding failures."""


class MissingParameterError(ParameterError, KeyError):
    """A named token has no matching key in the supplied mapping."""

    def __init__(self, name: str, sql: str, params: Any):
        self.name = name
        self.sql = sql
        self.params = params
        super().__init__(f"Missing parameter: {name!r} for query: {sql} (params: {params!r})")

    def __str__(self) -> str:
        return self.args[0]


class InvalidParameterShapeError(ParameterError, TypeError):
    """The parameter source does not fit the statement's placeholders."""

    def __init__(self, expected: str, sql: str, actual: Any = None):
        self.expected = expected
        self.sql = sql
        self.actual = actual
        super().__init__(
            f"Invalid params ({type(actual).__name__}), expected {expected} for query: {sql}"
        )
