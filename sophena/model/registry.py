# ==============================================
# TypeRegistry
# ==============================================
#
# PURPOSE:
#   Map every root entity class to its ModelType and every
#   ModelType to its directory in a data pack, and back.
#
# WHY THIS CLASS EXISTS:
#   The category of an entity decides where its document lives.
#   The mapping must be total: a root entity class without an
#   entry would otherwise end up in some "unknown" directory
#   nobody ever reads from. So the registry is checked when it is
#   built: every ModelType exactly once, every class exactly once,
#   every directory exactly once. DEFAULT_REGISTRY is built when
#   this module is imported, so a missing entry breaks the import.
#
# CLASS: TypeRegistry
# -------------------
#   Immutable after construction.
#
#   - category_of(entity) -> ModelType | None
#       None for value entities. RegistryError for a root entity
#       whose class is not registered.
#   - category_of_class(cls) -> ModelType
#   - class_of(model_type) -> type
#   - path_of(model_type) -> str
#   - parse(text) -> ModelType
#       Accepts a directory name ("fuels") or a member name ("FUEL").
#
# ==============================================

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, Optional, Sequence, Type

from sophena.errors import RegistryError
from sophena.model.base import RootEntity, concrete_root_classes, is_root_class
from sophena.model.enums import ModelType
from sophena.model.entities import (
    Boiler,
    BufferTank,
    BuildingState,
    Consumer,
    CostSettings,
    FlueGasCleaning,
    Fuel,
    HeatRecovery,
    LoadProfile,
    Manufacturer,
    Pipe,
    Producer,
    Product,
    ProductGroup,
    Project,
    TransferStation,
    WeatherStation,
)


@dataclass(frozen=True)
class RegistryEntry:
    """One root entity class and the pack directory of its documents."""
    entity_class: Type[RootEntity]
    directory: str

    @property
    def model_type(self) -> ModelType:
        return self.entity_class.model_type


class TypeRegistry:
    def __init__(
        self,
        entries: Iterable[RegistryEntry],
        known_classes: Optional[Sequence[Type[RootEntity]]] = None,
    ):
        """
        Build and validate a registry.

        Args:
            entries: One entry per ModelType
            known_classes: Root entity classes that must all be registered

        Raises:
            RegistryError: If the mapping is not total and one-to-one
        """
        self._entries: Dict[ModelType, RegistryEntry] = {}
        self._by_class: Dict[type, ModelType] = {}
        self._by_directory: Dict[str, ModelType] = {}

        for entry in entries:
            self._add(entry)

        missing = [t.name for t in ModelType if t not in self._entries]
        if missing:
            raise RegistryError(f"no registry entry for model types: {', '.join(missing)}")

        if known_classes is not None:
            unregistered = [c.__name__ for c in known_classes if c not in self._by_class]
            if unregistered:
                raise RegistryError(
                    f"root entity classes without registry entry: {', '.join(unregistered)}"
                )

    def _add(self, entry: RegistryEntry) -> None:
        cls = entry.entity_class
        if not is_root_class(cls) or cls.is_abstract:
            raise RegistryError(f"{cls!r} is not a concrete root entity class")
        model_type = entry.model_type
        if model_type in self._entries:
            raise RegistryError(f"model type {model_type.name} is registered twice")
        if cls in self._by_class:
            raise RegistryError(f"class {cls.__name__} is registered twice")
        directory = entry.directory
        if not directory or "/" in directory:
            raise RegistryError(f"invalid directory {directory!r} for {model_type.name}")
        if directory in self._by_directory:
            raise RegistryError(f"directory {directory!r} is registered twice")

        self._entries[model_type] = entry
        self._by_class[cls] = model_type
        self._by_directory[directory] = model_type

    def category_of(self, entity: Any) -> Optional[ModelType]:
        if not isinstance(entity, RootEntity):
            return None
        return self.category_of_class(type(entity))

    def category_of_class(self, entity_class: type) -> ModelType:
        model_type = self._by_class.get(entity_class)
        if model_type is None:
            raise RegistryError(f"root entity class {entity_class.__name__} is not registered")
        return model_type

    def class_of(self, model_type: ModelType) -> Type[RootEntity]:
        return self._entries[model_type].entity_class

    def path_of(self, model_type: ModelType) -> str:
        return self._entries[model_type].directory

    def parse(self, text: str) -> ModelType:
        """
        Resolve a directory name or ModelType member name.

        Raises:
            RegistryError: If the text names no category
        """
        if text in self._by_directory:
            return self._by_directory[text]
        member = ModelType.__members__.get(text.upper())
        if member is None:
            raise RegistryError(f"unknown category: {text!r}")
        return member

    def __iter__(self) -> Iterator[RegistryEntry]:
        return iter(self._entries[t] for t in ModelType)

    def __len__(self) -> int:
        return len(self._entries)


DEFAULT_REGISTRY = TypeRegistry(
    [
        RegistryEntry(Boiler, "boilers"),
        RegistryEntry(BufferTank, "buffers"),
        RegistryEntry(BuildingState, "building_states"),
        RegistryEntry(Consumer, "consumers"),
        RegistryEntry(CostSettings, "cost_settings"),
        RegistryEntry(FlueGasCleaning, "flue_gas_cleaning"),
        RegistryEntry(Fuel, "fuels"),
        RegistryEntry(HeatRecovery, "heat_recovery"),
        RegistryEntry(LoadProfile, "load_profiles"),
        RegistryEntry(Manufacturer, "manufacturers"),
        RegistryEntry(Pipe, "pipes"),
        RegistryEntry(Producer, "producers"),
        RegistryEntry(ProductGroup, "product_groups"),
        RegistryEntry(Product, "products"),
        RegistryEntry(Project, "projects"),
        RegistryEntry(TransferStation, "transfer_stations"),
        RegistryEntry(WeatherStation, "weather_stations"),
    ],
    known_classes=concrete_root_classes(),
)
