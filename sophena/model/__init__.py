# ==============================================
# MODEL: ENTITIES, ENUMS & TYPE REGISTRY
# ==============================================
#
# This package defines what can be stored in a data pack
# and where each kind of entity lives inside it.
#
# Modules:
# --------
# - enums.py     → Enumerations and the enum codec
# - naming.py    → Attribute name → document key conversion
# - base.py      → Entity / RootEntity / BaseDataEntity / Ref
# - entities.py  → Concrete domain entities
# - fields.py    → Per-class field descriptions (FieldSpec)
# - registry.py  → TypeRegistry and DEFAULT_REGISTRY
#
# ==============================================

from .enums import (
    BuildingType,
    FuelGroup,
    ModelType,
    ProducerFunction,
    ProductType,
    WoodAmountType,
    decode_enum,
    encode_enum,
)
from .base import BaseDataEntity, Entity, Ref, RootEntity
from .entities import (
    AbstractProduct,
    Boiler,
    BufferTank,
    BuildingState,
    Consumer,
    CostSettings,
    FlueGasCleaning,
    Fuel,
    FuelConsumption,
    FuelSpec,
    HeatNet,
    HeatNetPipe,
    HeatRecovery,
    LoadProfile,
    Location,
    Manufacturer,
    Pipe,
    Producer,
    Product,
    ProductCosts,
    ProductGroup,
    Project,
    TimeInterval,
    TransferStation,
    WeatherStation,
)
from .fields import FieldKind, FieldSpec, fields_of
from .registry import DEFAULT_REGISTRY, RegistryEntry, TypeRegistry

__all__ = [
    "AbstractProduct",
    "BaseDataEntity",
    "Boiler",
    "BufferTank",
    "BuildingState",
    "BuildingType",
    "Consumer",
    "CostSettings",
    "DEFAULT_REGISTRY",
    "Entity",
    "FieldKind",
    "FieldSpec",
    "FlueGasCleaning",
    "Fuel",
    "FuelConsumption",
    "FuelGroup",
    "FuelSpec",
    "HeatNet",
    "HeatNetPipe",
    "HeatRecovery",
    "LoadProfile",
    "Location",
    "Manufacturer",
    "ModelType",
    "Pipe",
    "Producer",
    "ProducerFunction",
    "Product",
    "ProductCosts",
    "ProductGroup",
    "ProductType",
    "Project",
    "Ref",
    "RegistryEntry",
    "RootEntity",
    "TimeInterval",
    "TransferStation",
    "TypeRegistry",
    "WeatherStation",
    "WoodAmountType",
    "decode_enum",
    "encode_enum",
    "fields_of",
]
