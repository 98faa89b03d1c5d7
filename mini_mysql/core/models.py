"""Dataclass model reflection used by schema generation and row mutations."""

from __future__ import annotations

from dataclasses import Field, fields, is_dataclass
from typing import Any, ClassVar, List, Optional, Protocol, Type


class DataclassModel(Protocol):
    """Protocol for supported dataclass model types."""

    __dataclass_fields__: ClassVar[dict[str, Any]]


def require_dataclass_model(cls: Type[Any]) -> None:
    """Validate that a class is a dataclass model."""

    if not is_dataclass(cls):
        raise TypeError(f"{cls.__name__} must be a dataclass.")


def model_type(model_or_cls: Any) -> Type[DataclassModel]:
    """Return the model class for a model class or instance."""

    cls = model_or_cls if isinstance(model_or_cls, type) else type(model_or_cls)
    require_dataclass_model(cls)
    return cls


def table_name(model_or_cls: Any) -> str:
    """Resolve table name from model class or instance.

    Uses `__table__` override when present, otherwise lowercased class name.
    """

    cls = model_or_cls if isinstance(model_or_cls, type) else type(model_or_cls)
    name = getattr(cls, "__table__", None)
    return name if isinstance(name, str) and name else cls.__name__.lower()


def model_fields(cls: Type[DataclassModel]) -> List[Field[Any]]:
    """Return dataclass fields for a model type."""

    require_dataclass_model(cls)
    return list(fields(cls))


def column_name(field: Field[Any]) -> str:
    """Return the column a field maps to (`metadata={'column': ...}`)."""

    name = field.metadata.get("column")
    return name if isinstance(name, str) and name else field.name


def pk_fields(cls: Type[DataclassModel]) -> List[Field[Any]]:
    """Return primary key fields defined with `metadata={'pk': True}`."""

    return [f for f in model_fields(cls) if f.metadata.get("pk")]


def require_pk_fields(cls: Type[DataclassModel]) -> List[Field[Any]]:
    pks = pk_fields(cls)
    if not pks:
        raise ValueError(
            f"{cls.__name__} has no PK field. Use field(metadata={{'pk': True}})."
        )
    return pks


def pk_names(cls: Type[DataclassModel]) -> List[str]:
    return [f.name for f in pk_fields(cls)]


def auto_pk_field(cls: Type[DataclassModel]) -> Optional[Field[Any]]:
    """Return auto primary key field if model has exactly one auto PK."""

    pks = pk_fields(cls)
    if len(pks) == 1 and pks[0].metadata.get("auto"):
        return pks[0]
    return None


def props_with_values(obj: Any) -> List[str]:
    """Names of the fields of `obj` whose value is not `None`."""

    return [f.name for f in model_fields(type(obj)) if getattr(obj, f.name) is not None]
