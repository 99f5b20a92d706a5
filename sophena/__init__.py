# ==============================================
# Sophena Data Packs
# ==============================================
#
# Package Structure:
#
# sophena/
# ├── model/          # Entities, enums, field descriptions, type registry
# ├── storage/        # DataPack: the zip archive of JSON documents
# ├── persistence/    # JsonWriter / JsonReader: entity graph ⇄ documents
# ├── calc.py         # Fuel calculations
# ├── config.py       # Configuration management
# ├── errors.py       # Exception hierarchy
# ├── observability.py  # structlog setup
# └── cli.py          # Command line entry point
#
# USAGE:
# ------
#   from sophena import DataPack, ModelType, save, load
#
#   pack = DataPack()
#   save(pipe, pack)                 # also stores pipe.manufacturer
#   pack.save("project.sophena")
#
#   pack = DataPack.load("project.sophena")
#   pipe = load(ModelType.PIPE, "p1", pack)
#
# ==============================================

from .errors import (
    ConfigError,
    CorruptArchive,
    DataPackError,
    InvalidId,
    RegistryError,
    SerializationFailed,
    SophenaError,
)
from .model import DEFAULT_REGISTRY, ModelType, Ref, TypeRegistry
from .storage import DataPack
from .persistence import JsonReader, JsonWriter, from_json, load, save, save_all, to_json

__version__ = "0.1.0"

__all__ = [
    "ConfigError",
    "CorruptArchive",
    "DEFAULT_REGISTRY",
    "DataPack",
    "DataPackError",
    "InvalidId",
    "JsonReader",
    "JsonWriter",
    "ModelType",
    "Ref",
    "RegistryError",
    "SerializationFailed",
    "SophenaError",
    "TypeRegistry",
    "from_json",
    "load",
    "save",
    "save_all",
    "to_json",
]
