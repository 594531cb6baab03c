"""
Entity field introspection.

Resolves wire field names (``createdAt``, ``post.id``) against the entity
type a repository serves, so the composer can validate sort keys and coerce
filter values before any query runs. Pydantic models are resolved through
``model_fields`` (aliases included); dataclasses and plain annotated classes
through ``typing.get_type_hints``.
"""

from __future__ import annotations

import datetime
import enum
import types
import typing
import uuid
from dataclasses import dataclass, is_dataclass
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Union

from pydantic import BaseModel, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from .utils import infer_scalar

if TYPE_CHECKING:
    from collections.abc import Callable

_COMPARABLE_TYPES: tuple[type, ...] = (
    int,
    float,
    str,
    bytes,
    Decimal,
    datetime.date,
    datetime.time,
    datetime.timedelta,
    uuid.UUID,
)


@dataclass(frozen=True)
class ResolvedField:
    """A field path resolved on an entity type.

    Attributes:
        path: Dotted attribute path used to read the value from a row.
        annotation: The declared type of the final segment (``Any`` if untyped).
    """

    path: str
    annotation: Any


def _unwrap_optional(annotation: Any) -> Any:
    if typing.get_origin(annotation) in (Union, types.UnionType):
        args = [a for a in typing.get_args(annotation) if a is not type(None)]
        if len(args) == 1:
            return args[0]
    return annotation


def _declared_fields(entity_type: type) -> dict[str, tuple[str, Any]]:
    """Return ``{wire_name: (attribute_name, annotation)}`` for *entity_type*."""
    fields: dict[str, tuple[str, Any]] = {}
    if isinstance(entity_type, type) and issubclass(entity_type, BaseModel):
        for name, info in entity_type.model_fields.items():
            fields[name] = (name, info.annotation)
            if info.alias:
                fields[info.alias] = (name, info.annotation)
        return fields
    try:
        hints = typing.get_type_hints(entity_type)
    except (NameError, TypeError):
        hints = {}
    for name, annotation in hints.items():
        if typing.get_origin(annotation) is typing.ClassVar or name.startswith("_"):
            continue
        fields[name] = (name, annotation)
    return fields


def _is_structured(annotation: Any) -> bool:
    if typing.get_origin(annotation) is not None:
        return False
    return isinstance(annotation, type) and (
        issubclass(annotation, BaseModel) or is_dataclass(annotation)
    )


class EntityFields:
    """Field lookup and value coercion for one entity type."""

    def __init__(self, entity_type: type) -> None:
        self.entity_type = entity_type
        self._fields = _declared_fields(entity_type)
        self._adapters: dict[Any, TypeAdapter[Any]] = {}

    @property
    def entity_name(self) -> str:
        return getattr(self.entity_type, "__name__", str(self.entity_type))

    @property
    def available_fields(self) -> list[str]:
        return sorted(self._fields)

    def resolve(self, field_path: str) -> ResolvedField | None:
        """Resolve a dotted wire path; ``None`` if any segment is unknown."""
        current: Any = self.entity_type
        fields = self._fields
        attr_parts: list[str] = []
        annotation: Any = Any
        for i, part in enumerate(field_path.split(".")):
            if i > 0:
                if not _is_structured(current):
                    return None
                fields = _declared_fields(current)
            if part not in fields:
                return None
            attr_name, annotation = fields[part]
            attr_parts.append(attr_name)
            current = _unwrap_optional(annotation)
        return ResolvedField(".".join(attr_parts), annotation)

    # -- comparability ---------------------------------------------------------

    @staticmethod
    def is_comparable(annotation: Any) -> bool:
        """True if values of *annotation* can be ordered."""
        target = _unwrap_optional(annotation)
        if target is Any or typing.get_origin(target) is typing.Literal:
            return True
        if typing.get_origin(target) is not None or not isinstance(target, type):
            return False
        return issubclass(target, _COMPARABLE_TYPES) or issubclass(target, enum.Enum)

    # -- coercion --------------------------------------------------------------

    def _adapter_for(self, annotation: Any) -> TypeAdapter[Any]:
        try:
            cached = self._adapters.get(annotation)
        except TypeError:
            # unhashable annotation, build a fresh adapter
            return TypeAdapter(annotation)
        if cached is None:
            cached = TypeAdapter(annotation)
            self._adapters[annotation] = cached
        return cached

    def converter(self, resolved: ResolvedField) -> Callable[[Any], Any]:
        """
        Return a callable coercing raw request values to the field's type.

        The callable raises ``ValueError`` when the value does not fit.
        """
        annotation = resolved.annotation
        if annotation is Any:
            return infer_scalar

        adapter = self._adapter_for(annotation)

        def convert(raw: Any) -> Any:
            try:
                return adapter.validate_python(raw)
            except PydanticValidationError as exc:
                errors = exc.errors()
                msg = errors[0]["msg"] if errors else "invalid value"
                raise ValueError(msg) from exc

        return convert
