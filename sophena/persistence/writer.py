# ==============================================
# JsonWriter
# ==============================================
#
# PURPOSE:
#   Convert an entity, and everything it embeds or references,
#   into JSON documents. When bound to a DataPack, referenced root
#   entities are written into the pack on the way.
#
# RULES PER FIELD:
# ----------------
#   1. None / empty list        → key omitted
#   2. primitive or number list → copied verbatim
#   3. enum                     → member name
#   4. value entity (or list)   → embedded document, same rules
#   5. root entity (or list)    → {"id", "@type", "name"} reference;
#                                 if a pack is bound and does not yet
#                                 contain the entity, it is converted
#                                 and written first
#
# TERMINATION:
#   A referenced entity is only recursed into when the pack does
#   not contain it yet, and the pack never accepts a second
#   document for the same (category, id). Entities whose document
#   is still being built in this walk are tracked in _in_progress,
#   so a reference back to one of them (A → B → A) is emitted as a
#   plain reference.
#
# FAILED REFERENTS:
#   A referenced entity that cannot be stored (unregistered class,
#   unencodable field value) is logged as reference_not_saved and
#   its field is omitted. The rest of the graph is still written.
#
# ==============================================

from typing import Any, Dict, List, Optional, Set, Tuple

import structlog

from sophena.errors import DataPackError, InvalidId, RegistryError, SerializationFailed
from sophena.model.base import Entity, Ref, RootEntity
from sophena.model.enums import ModelType, encode_enum
from sophena.model.fields import FieldKind, FieldSpec, fields_of
from sophena.model.registry import DEFAULT_REGISTRY, TypeRegistry
from sophena.storage.datapack import DataPack, validate_id

log = structlog.get_logger(__name__)


class JsonWriter:
    def __init__(self, pack: Optional[DataPack] = None, registry: Optional[TypeRegistry] = None):
        """
        Args:
            pack: Target pack for referenced root entities. Without a
                pack only documents are produced, nothing is stored.
            registry: Defaults to the pack's registry
        """
        self.pack = pack
        if registry is None:
            registry = pack.registry if pack is not None else DEFAULT_REGISTRY
        self.registry = registry
        self._in_progress: Set[Tuple[ModelType, str]] = set()

    def save(self, entity: RootEntity) -> bool:
        """
        Convert a root entity and write it into the bound pack.

        Returns:
            True if the document was added, False if the pack already
            had a document with this id

        Raises:
            InvalidId: If the entity has no usable id
            RegistryError: If the entity is not a registered root entity
            DataPackError: If the writer is not bound to a pack
        """
        if self.pack is None:
            raise DataPackError("cannot save without a data pack")
        model_type = self.registry.category_of(entity)
        if model_type is None:
            raise RegistryError(f"{type(entity).__name__} is not a root entity and cannot be saved")
        key = (model_type, validate_id(entity.id))

        self._in_progress.add(key)
        try:
            document = self.to_document(entity)
        finally:
            self._in_progress.discard(key)
        return self.pack.write(model_type, document)

    def to_document(self, entity: Entity) -> Dict[str, Any]:
        """Convert an entity into a JSON-compatible dictionary."""
        document: Dict[str, Any] = {}
        if entity.id is not None:
            document["id"] = entity.id
        document["@type"] = entity.type_tag()

        for spec in fields_of(type(entity)):
            if spec.attribute == "id":
                continue
            value = getattr(entity, spec.attribute)
            if value is None:
                continue
            if spec.sequence:
                encoded = [v for v in (self._encode(spec, item) for item in value) if v is not None]
                if encoded:
                    document[spec.key] = encoded
            else:
                encoded = self._encode(spec, value)
                if encoded is not None:
                    document[spec.key] = encoded
        return document

    def _encode(self, spec: FieldSpec, value: Any) -> Any:
        if value is None:
            return None
        if spec.kind is FieldKind.PRIMITIVE:
            return value
        if spec.kind is FieldKind.ENUM:
            return encode_enum(value)
        if spec.kind is FieldKind.VALUE:
            return self.to_document(value)
        return self._reference(spec, value)

    def _reference(self, spec: FieldSpec, entity: RootEntity) -> Optional[Dict[str, Any]]:
        try:
            validate_id(entity.id)
        except InvalidId as e:
            log.warning("invalid_reference", field=spec.key, type=entity.type_tag(), error=str(e))
            return None

        ref = Ref.of(entity).to_dict()
        if self.pack is None:
            return ref

        try:
            model_type = self.registry.category_of(entity)
            key = (model_type, entity.id)
            if key in self._in_progress:
                log.debug("reference_cycle", category=model_type.name, id=entity.id)
                return ref
            if not self.pack.contains(model_type, entity.id):
                self.save(entity)
        except (RegistryError, SerializationFailed) as e:
            log.warning("reference_not_saved", field=spec.key, type=entity.type_tag(), id=entity.id, error=str(e))
            return None
        return ref


def to_json(entity: Entity, pack: Optional[DataPack] = None) -> Dict[str, Any]:
    """Document of an entity; referenced root entities go into `pack` if given."""
    return JsonWriter(pack).to_document(entity)


def save(entity: RootEntity, pack: DataPack) -> bool:
    """Write a root entity and everything it references into `pack`."""
    return JsonWriter(pack).save(entity)


def save_all(entities: List[RootEntity], pack: DataPack) -> int:
    """
    Write several root entities into one pack.

    Returns:
        Number of documents added for the given entities themselves
    """
    writer = JsonWriter(pack)
    return sum(1 for entity in entities if writer.save(entity))
