# ==============================================
# Entity Taxonomy
# ==============================================
#
# PURPOSE:
#   The class hierarchy every persisted object belongs to.
#
# CLASSES:
# --------
# - Entity
#     Anything that can be stored. Has an `id`.
#     A direct subclass of Entity (not of RootEntity) is a VALUE
#     entity: it is always embedded inline in its owner's document
#     and never gets its own archive entry.
#
# - RootEntity(Entity)
#     Adds `name` and `description`. Independently addressable:
#     stored as its own document at <directory>/<id>.json and
#     referenced from other documents by a Ref.
#     Every concrete subclass must declare `model_type`; abstract
#     intermediate classes pass `abstract=True` in the class header.
#
# - BaseDataEntity(RootEntity)
#     Adds `is_protected`: reference data shipped with the
#     application. The flag is advisory, nothing here enforces it.
#
# - Ref
#     The {id, @type, name} stand-in for a root entity inside
#     another entity's document.
#
# IDENTITY:
#   Two entities are equal when they are of the same concrete class
#   and have the same id. Field values do not take part.
#
# ==============================================

from dataclasses import dataclass
from typing import Any, ClassVar, Dict, List, Optional, Type

from sophena.errors import RegistryError
from sophena.model.enums import ModelType

# Concrete root entity classes in definition order.
_concrete_roots: List[Type["RootEntity"]] = []


@dataclass(eq=False)
class Entity:
    """Base class of all persistable objects."""

    id: Optional[str] = None

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Entity):
            return NotImplemented
        return type(self) is type(other) and self.id == other.id

    def __hash__(self) -> int:
        return hash((type(self), self.id))

    @classmethod
    def type_tag(cls) -> str:
        """The informational `@type` value written into documents."""
        return cls.__name__


@dataclass(eq=False)
class RootEntity(Entity):
    """A stand-alone entity with a name and description."""

    name: Optional[str] = None
    description: Optional[str] = None

    model_type: ClassVar[Optional[ModelType]] = None
    is_abstract: ClassVar[bool] = True

    def __init_subclass__(cls, abstract: bool = False, **kwargs):
        super().__init_subclass__(**kwargs)
        cls.is_abstract = abstract
        if abstract:
            return
        if not isinstance(cls.__dict__.get("model_type"), ModelType):
            raise RegistryError(
                f"root entity class {cls.__name__} must declare its model_type"
            )
        _concrete_roots.append(cls)


@dataclass(eq=False)
class BaseDataEntity(RootEntity, abstract=True):
    """
    Reference data provided by the application. Users may read it but
    should not change it when it is protected.
    """

    is_protected: Optional[bool] = None


@dataclass(frozen=True)
class Ref:
    """Compact reference to a root entity: {id, @type, name}."""

    id: str
    type: str
    name: Optional[str] = None

    @classmethod
    def of(cls, entity: RootEntity) -> "Ref":
        return cls(id=entity.id, type=entity.type_tag(), name=entity.name)

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "@type": self.type, "name": self.name}

    @classmethod
    def from_dict(cls, data: Any) -> Optional["Ref"]:
        """
        Read a reference structure from a document.

        Returns:
            The Ref, or None if the value is not an object with a string id
        """
        if not isinstance(data, dict):
            return None
        ref_id = data.get("id")
        if not isinstance(ref_id, str) or not ref_id:
            return None
        name = data.get("name")
        return cls(
            id=ref_id,
            type=data.get("@type") or "",
            name=name if isinstance(name, str) else None,
        )


def concrete_root_classes() -> List[Type[RootEntity]]:
    """All concrete root entity classes defined so far."""
    return list(_concrete_roots)


def is_root_class(cls: Any) -> bool:
    return isinstance(cls, type) and issubclass(cls, RootEntity)


def is_value_class(cls: Any) -> bool:
    return isinstance(cls, type) and issubclass(cls, Entity) and not issubclass(cls, RootEntity)
