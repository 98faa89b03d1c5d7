"""Parameter binding: named `$token` SQL to positional `%s` SQL.

Parameter sources are resolved once at the call boundary into one of the
`ParamSource` variants. Everything downstream matches on the variant instead
of probing raw Python values again.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any, List, Optional, Sequence, Tuple, Union

from .errors import InvalidParameterShapeError, MissingParameterError

NAMED_TOKEN = re.compile(r"\$(\w+)")
PLACEHOLDER = "%s"

_PERCENT_TOKEN = re.compile(r"%%|%s")


@dataclass(frozen=True)
class NoParams:
    """No parameter source was supplied."""


@dataclass(frozen=True)
class Positional:
    """Ordered values bound to `%s` placeholders as-is."""

    values: Tuple[Any, ...] = ()


@dataclass(frozen=True)
class Named:
    """Field-name to value mapping resolved against `$name` tokens."""

    values: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Scalar:
    """A single bare value for a one-slot statement."""

    value: Any = None


ParamSource = Union[NoParams, Positional, Named, Scalar]

NO_PARAMS = NoParams()


@dataclass(frozen=True)
class QueryDescriptor:
    """Prepared SQL plus ordered values for one statement."""

    original_sql: str
    original_params: ParamSource
    sql: str
    values: Optional[Tuple[Any, ...]]
    param_names: Optional[Tuple[str, ...]] = None


def param_source(params: Any) -> ParamSource:
    """Resolve a raw Python parameter value into a `ParamSource` variant."""

    if isinstance(params, (NoParams, Positional, Named, Scalar)):
        return params
    if params is None:
        return NO_PARAMS
    if isinstance(params, Mapping):
        return Named(params)
    if isinstance(params, (list, tuple)):
        return Positional(tuple(params))
    return Scalar(params)


def is_empty(source: ParamSource) -> bool:
    """Return whether a source carries no values at all."""

    if isinstance(source, NoParams):
        return True
    if isinstance(source, (Positional, Named)):
        return not source.values
    return False


def count_placeholders(sql: str) -> int:
    """Count `%s` slots in positional SQL, ignoring `%%` escapes."""

    return sum(1 for token in _PERCENT_TOKEN.findall(sql) if token == PLACEHOLDER)


def convert_named_params(sql: str) -> Tuple[str, List[str]]:
    """Replace every `$name` with `%s`, returning SQL and names in order.

    Literal `%` characters are doubled because the driver interpolates
    `%s` placeholders with Python `%` formatting once values are bound.
    """

    names: List[str] = []

    def _replace(match: re.Match[str]) -> str:
        names.append(match.group(1))
        return PLACEHOLDER

    escaped = sql.replace("%", "%%")
    return NAMED_TOKEN.sub(_replace, escaped), names


def normalize(sql: str, params: Any = None) -> QueryDescriptor:
    """Build a `QueryDescriptor` for `sql` bound against `params`."""

    source = param_source(params)
    if NAMED_TOKEN.search(sql):
        to_sql, names = convert_named_params(sql)
        descriptor = QueryDescriptor(
            original_sql=sql,
            original_params=source,
            sql=to_sql,
            values=None,
            param_names=tuple(names),
        )
    else:
        descriptor = QueryDescriptor(
            original_sql=sql,
            original_params=source,
            sql=sql,
            values=None,
        )
    return replace(descriptor, values=_resolve(descriptor, source))


def from_template(strings: Sequence[str], values: Sequence[Any]) -> QueryDescriptor:
    """Build a positional descriptor from template parts and their values."""

    if len(strings) != len(values) + 1:
        raise InvalidParameterShapeError(
            f"{len(strings) - 1} template values", "".join(strings), tuple(values)
        )
    if values:
        parts = [part.replace("%", "%%") for part in strings]
        sql = PLACEHOLDER.join(parts)
        bound: Optional[Tuple[Any, ...]] = tuple(values)
    else:
        sql = "".join(strings)
        bound = None
    return QueryDescriptor(
        original_sql=sql,
        original_params=Positional(tuple(values)),
        sql=sql,
        values=bound,
    )


def bind(descriptor: QueryDescriptor, params: Any = None) -> Optional[Tuple[Any, ...]]:
    """Resolve the values for one execution of a prepared descriptor.

    Returns `None` for no-parameter execution. Without a source, the values
    captured when the descriptor was prepared are reused.
    """

    source = param_source(params)
    if isinstance(source, NoParams):
        return descriptor.values
    return _resolve(descriptor, source)


def _resolve(descriptor: QueryDescriptor, source: ParamSource) -> Optional[Tuple[Any, ...]]:
    if descriptor.param_names is not None:
        return _resolve_named(descriptor, source)
    return _resolve_positional(descriptor, source)


def _resolve_named(descriptor: QueryDescriptor, source: ParamSource) -> Tuple[Any, ...]:
    names = descriptor.param_names or ()
    if is_empty(source):
        return tuple(None for _ in names)
    if not isinstance(source, Named):
        raise InvalidParameterShapeError(
            "a mapping of named parameters", descriptor.original_sql, _raw(source)
        )

    values = []
    for name in names:
        if name not in source.values:
            raise MissingParameterError(name, descriptor.original_sql, source.values)
        values.append(source.values[name])
    return tuple(values)


def _resolve_positional(
    descriptor: QueryDescriptor, source: ParamSource
) -> Optional[Tuple[Any, ...]]:
    if isinstance(source, NoParams):
        return None
    if isinstance(source, Positional):
        return source.values or None

    slots = count_placeholders(descriptor.sql)
    if isinstance(source, Scalar):
        if slots == 1:
            return (source.value,)
        if slots == 0:
            return None
        raise InvalidParameterShapeError(
            f"a sequence of {slots} positional parameters",
            descriptor.original_sql,
            source.value,
        )

    if not source.values or slots == 0:
        return None
    raise InvalidParameterShapeError(
        f"a sequence of {slots} positional parameters",
        descriptor.original_sql,
        source.values,
    )


def _raw(source: ParamSource) -> Any:
    if isinstance(source, Scalar):
        return source.value
    if isinstance(source, (Positional, Named)):
        return source.values
    return None
