# ==============================================
# Errors
# ==============================================
#
# PURPOSE:
#   One exception hierarchy for everything the package raises.
#
# FATAL vs NON-FATAL:
#   Only structural problems are raised: a broken archive on open,
#   a failed save, an invalid id, a broken type registry.
#   Anomalies inside a graph walk (duplicate writes, missing
#   references, unknown enum strings) are logged and absorbed,
#   so they have no exception class here.
#
# HIERARCHY:
# ----------
#   SophenaError
#   ├── ConfigError
#   ├── RegistryError
#   └── DataPackError
#       ├── CorruptArchive
#       ├── SerializationFailed
#       └── InvalidId
#
# ==============================================


class SophenaError(Exception):
    """Base class of all errors raised by this package."""


class ConfigError(SophenaError):
    """A configuration value could not be interpreted."""


class RegistryError(SophenaError):
    """The type registry is incomplete or an entity class is not registered."""


class DataPackError(SophenaError):
    """Base class for data pack (archive store) failures."""


class CorruptArchive(DataPackError):
    """The byte stream is not a readable zip container."""


class SerializationFailed(DataPackError):
    """The in-memory archive could not be encoded or saved."""


class InvalidId(DataPackError):
    """An entity id is missing, empty or cannot be used in an archive path."""

    def __init__(self, entity_id, reason: str = "invalid id"):
        self.entity_id = entity_id
        self.reason = reason
        super().__init__(f"{reason}: {entity_id!r}")
