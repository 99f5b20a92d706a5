# ==============================================
# JsonReader
# ==============================================
#
# PURPOSE:
#   Turn documents back into typed entities. Reference structures
#   are resolved by loading the referenced document from the pack
#   and decoding it as well.
#
# WHAT DECIDES THE CLASS:
#   The caller's ModelType (top level) or the field's type hint
#   (nested). The "@type" key in a document is informational only
#   and is never trusted for dispatch.
#
# ABSENT FIELDS:
#   A field ends up as None (or an empty list) when
#     - its key is missing or null
#     - its value has the wrong JSON type     (invalid_field_value)
#     - its enum string is unknown            (undecodable_enum)
#     - its reference points to no document   (missing_reference)
#   None of these abort the load of the rest of the graph.
#
# CYCLES:
#   Every root document being decoded is recorded in _in_progress
#   by (category, id). Meeting a reference to one of them again
#   returns a stub holding only id and name instead of decoding the
#   same document recursively forever.
#
# SHARED REFERENCES:
#   Finished root entities are kept in _loaded for the rest of the
#   call. A document reached again along another path is neither
#   read nor decoded a second time; the same instance is reused.
#
# ==============================================

from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional, Set, Tuple, Type, Union

import structlog

from sophena.errors import InvalidId
from sophena.model.base import Entity, Ref, RootEntity
from sophena.model.enums import ModelType, decode_enum
from sophena.model.fields import FieldKind, FieldSpec, fields_of
from sophena.model.registry import DEFAULT_REGISTRY, TypeRegistry
from sophena.storage.datapack import DataPack

log = structlog.get_logger(__name__)


class JsonReader:
    def __init__(self, pack: Optional[DataPack] = None, registry: Optional[TypeRegistry] = None):
        """
        Args:
            pack: Source of referenced documents. Without a pack,
                references decode to stubs with only id and name.
            registry: Defaults to the pack's registry
        """
        self.pack = pack
        if registry is None:
            registry = pack.registry if pack is not None else DEFAULT_REGISTRY
        self.registry = registry
        self._in_progress: Set[Tuple[ModelType, str]] = set()
        self._loaded: Dict[Tuple[ModelType, str], RootEntity] = {}
        self._depth = 0

    def load(self, model_type: ModelType, entity_id: str) -> Optional[RootEntity]:
        """
        Read and decode the document stored for (model_type, entity_id).

        Returns:
            The entity, or None if the pack has no such document
        """
        if self.pack is None:
            return None
        document = self.pack.read(model_type, entity_id)
        if document is None:
            return None
        with self._call():
            return self._decode_root(model_type, entity_id, document)

    def from_document(
        self,
        target: Union[ModelType, Type[Entity]],
        document: Dict[str, Any],
    ) -> Entity:
        """
        Decode a document into an entity.

        Args:
            target: A ModelType, or the entity class to decode into
            document: The JSON document
        """
        if isinstance(target, ModelType):
            model_type = target
        elif issubclass(target, RootEntity):
            model_type = self.registry.category_of_class(target)
        else:
            with self._call():
                return self._decode(target, document)

        entity_id = document.get("id")
        with self._call():
            if not isinstance(entity_id, str):
                return self._decode(self.registry.class_of(model_type), document)
            return self._decode_root(model_type, entity_id, document)

    @contextmanager
    def _call(self) -> Iterator[None]:
        # _loaded lives as long as the outermost public call
        self._depth += 1
        try:
            yield
        finally:
            self._depth -= 1
            if self._depth == 0:
                self._loaded.clear()

    def _decode_root(self, model_type: ModelType, entity_id: str, document: Dict[str, Any]) -> RootEntity:
        key = (model_type, entity_id)
        self._in_progress.add(key)
        try:
            entity = self._decode(self.registry.class_of(model_type), document)
        finally:
            self._in_progress.discard(key)
        self._loaded[key] = entity
        return entity

    def _decode(self, entity_class: Type[Entity], document: Dict[str, Any]) -> Entity:
        values: Dict[str, Any] = {}
        for spec in fields_of(entity_class):
            raw = document.get(spec.key)
            if raw is None:
                continue
            if spec.sequence:
                if not isinstance(raw, list):
                    self._invalid(entity_class, spec, raw)
                    continue
                items = (self._decode_value(entity_class, spec, item) for item in raw)
                values[spec.attribute] = [item for item in items if item is not None]
            else:
                value = self._decode_value(entity_class, spec, raw)
                if value is not None:
                    values[spec.attribute] = value
        return entity_class(**values)

    def _decode_value(self, entity_class: Type[Entity], spec: FieldSpec, raw: Any) -> Any:
        if raw is None:
            return None
        if spec.kind is FieldKind.PRIMITIVE:
            return self._primitive(entity_class, spec, raw)
        if spec.kind is FieldKind.ENUM:
            return decode_enum(spec.target, raw)
        if spec.kind is FieldKind.VALUE:
            if not isinstance(raw, dict):
                return self._invalid(entity_class, spec, raw)
            return self._decode(spec.target, raw)
        return self._resolve(entity_class, spec, raw)

    def _primitive(self, entity_class: Type[Entity], spec: FieldSpec, raw: Any) -> Any:
        target = spec.target
        if target is bool:
            return raw if isinstance(raw, bool) else self._invalid(entity_class, spec, raw)
        if isinstance(raw, bool):
            return self._invalid(entity_class, spec, raw)
        if target is float and isinstance(raw, int):
            return float(raw)
        if isinstance(raw, target):
            return raw
        return self._invalid(entity_class, spec, raw)

    def _invalid(self, entity_class: Type[Entity], spec: FieldSpec, raw: Any) -> None:
        log.warning("invalid_field_value", entity=entity_class.__name__, field=spec.key, value=raw)
        return None

    def _resolve(self, entity_class: Type[Entity], spec: FieldSpec, raw: Any) -> Optional[RootEntity]:
        ref = Ref.from_dict(raw)
        if ref is None:
            return self._invalid(entity_class, spec, raw)

        model_type = self.registry.category_of_class(spec.target)
        target = self.registry.class_of(model_type)
        if self.pack is None:
            return target(id=ref.id, name=ref.name)

        if (model_type, ref.id) in self._in_progress:
            log.debug("reference_cycle", category=model_type.name, id=ref.id)
            return target(id=ref.id, name=ref.name)

        loaded = self._loaded.get((model_type, ref.id))
        if loaded is not None:
            return loaded

        try:
            document = self.pack.read(model_type, ref.id)
        except InvalidId as e:
            log.warning("invalid_reference", field=spec.key, error=str(e))
            return None
        if document is None:
            log.warning("missing_reference", category=model_type.name, id=ref.id, field=spec.key)
            return None
        return self._decode_root(model_type, ref.id, document)


def from_json(
    target: Union[ModelType, Type[Entity]],
    document: Dict[str, Any],
    pack: Optional[DataPack] = None,
) -> Entity:
    """Decode a document; references are loaded from `pack` if given."""
    return JsonReader(pack).from_document(target, document)


def load(model_type: ModelType, entity_id: str, pack: DataPack) -> Optional[RootEntity]:
    """Load a root entity and everything it references from `pack`."""
    return JsonReader(pack).load(model_type, entity_id)
