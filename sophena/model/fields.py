# ==============================================
# Field Introspection
# ==============================================
#
# PURPOSE:
#   Work out, once per entity class, how each field is stored.
#   The writer and the reader both walk the same FieldSpec list so
#   they cannot disagree about a field.
#
# FIELD KINDS:
# ------------
#   PRIMITIVE   str / int / float / bool, or a list of them
#   ENUM        an Enum member, encoded by name
#   VALUE       a value entity, embedded inline
#   REFERENCE   a root entity, stored as a Ref
#
#   `sequence` is True for List[...] hints.
#
# ==============================================

import dataclasses
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Any, List, Tuple, Type, Union, get_args, get_origin, get_type_hints

from sophena.model.base import Entity, is_root_class, is_value_class
from sophena.model.naming import naming

PRIMITIVE_TYPES = (str, int, float, bool)


class FieldKind(Enum):
    PRIMITIVE = "primitive"
    ENUM = "enum"
    VALUE = "value"
    REFERENCE = "reference"


@dataclass(frozen=True)
class FieldSpec:
    """How one attribute of an entity class maps to its document key."""
    attribute: str
    key: str
    kind: FieldKind
    target: type
    sequence: bool = False


def _strip_optional(hint: Any) -> Any:
    if get_origin(hint) is Union:
        args = [arg for arg in get_args(hint) if arg is not type(None)]
        if len(args) == 1:
            return args[0]
    return hint


def _kind_of(target: Any) -> FieldKind:
    if target in PRIMITIVE_TYPES:
        return FieldKind.PRIMITIVE
    if isinstance(target, type) and issubclass(target, Enum):
        return FieldKind.ENUM
    if is_root_class(target):
        return FieldKind.REFERENCE
    if is_value_class(target):
        return FieldKind.VALUE
    raise TypeError(f"unsupported field type: {target!r}")


def _spec_of(f: dataclasses.Field, hint: Any) -> FieldSpec:
    hint = _strip_optional(hint)
    sequence = get_origin(hint) in (list, List)
    if sequence:
        (hint,) = get_args(hint)
        hint = _strip_optional(hint)
    try:
        kind = _kind_of(hint)
    except TypeError as e:
        raise TypeError(f"field '{f.name}': {e}") from None
    key = f.metadata.get("json") or naming.to_key(f.name)
    return FieldSpec(attribute=f.name, key=key, kind=kind, target=hint, sequence=sequence)


@lru_cache(maxsize=None)
def fields_of(entity_class: Type[Entity]) -> Tuple[FieldSpec, ...]:
    """
    Describe all persisted fields of an entity class, in declaration
    order, with `id` first.

    Raises:
        TypeError: If a field has a type hint that cannot be stored
    """
    hints = get_type_hints(entity_class)
    return tuple(
        _spec_of(f, hints[f.name])
        for f in dataclasses.fields(entity_class)
    )
