import io
import json
import os
import zipfile
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Union

import structlog

from sophena.config import PackConfig, get_config
from sophena.errors import CorruptArchive, DataPackError, InvalidId, SerializationFailed
from sophena.model.enums import ModelType
from sophena.model.registry import DEFAULT_REGISTRY, TypeRegistry

log = structlog.get_logger(__name__)


# ==============================================
# DataPack
# ==============================================
#
# PURPOSE:
#   A zip archive that holds one JSON document per root entity.
#   This is the lowest layer of persistence: it knows categories,
#   ids and documents, nothing about entity classes.
#
# LAYOUT:
# -------
#   <directory>/<id>.json     UTF-8 JSON, one document per entry
#   e.g. fuels/f1.json, manufacturers/m1.json
#
# AT-MOST-ONCE WRITES:
#   write() never overwrites. If an entry exists at the computed
#   path the write is skipped and logged as duplicate_write. This
#   is what stops a graph walk from writing a shared referent twice.
#
# LIFECYCLE:
#   The whole archive lives in memory as {path: bytes}. Nothing
#   touches disk until save(), which encodes the complete archive
#   first and then swaps it into place.
#
# ==============================================


def validate_id(entity_id: Any) -> str:
    """
    Check that an id can be used as an archive file name.

    Returns:
        The id

    Raises:
        InvalidId: If the id is missing, empty, not a string or contains '/'
    """
    if entity_id is None:
        raise InvalidId(entity_id, "missing id")
    if not isinstance(entity_id, str):
        raise InvalidId(entity_id, "id must be a string")
    if not entity_id.strip():
        raise InvalidId(entity_id, "empty id")
    if "/" in entity_id:
        raise InvalidId(entity_id, "id must not contain '/'")
    return entity_id


class DataPack:
    """
    In-memory zip archive mapping (ModelType, id) to a JSON document.

    Entries that are not <directory>/<id>.json (other files, nested
    folders) are kept as they are and written back on save.
    """

    def __init__(
        self,
        registry: Optional[TypeRegistry] = None,
        config: Optional[PackConfig] = None,
        entries: Optional[Dict[str, bytes]] = None,
    ):
        """
        Create an empty pack, or one holding the given raw entries.

        Args:
            registry: Category → directory mapping (default: DEFAULT_REGISTRY)
            config: Compression and JSON settings (default: from get_config())
            entries: Archive path → raw bytes
        """
        self.registry = registry or DEFAULT_REGISTRY
        self.config = config or get_config().pack
        self._entries: Dict[str, bytes] = dict(entries or {})

    # ------------------------------------------
    # Opening
    # ------------------------------------------

    @classmethod
    def open(
        cls,
        data: bytes,
        registry: Optional[TypeRegistry] = None,
        config: Optional[PackConfig] = None,
    ) -> "DataPack":
        """
        Parse a zip byte stream into a pack.

        Raises:
            CorruptArchive: If the bytes are not a readable zip container
        """
        entries: Dict[str, bytes] = {}
        try:
            with zipfile.ZipFile(io.BytesIO(data), "r") as archive:
                for info in archive.infolist():
                    if info.is_dir():
                        continue
                    entries[info.filename] = archive.read(info)
        except (zipfile.BadZipFile, zipfile.LargeZipFile, OSError, ValueError,
                EOFError, TypeError, NotImplementedError) as e:
            raise CorruptArchive(f"cannot read data pack: {e}") from e

        log.debug("pack_opened", entries=len(entries))
        return cls(registry=registry, config=config, entries=entries)

    @classmethod
    def load(
        cls,
        path: Union[str, Path],
        registry: Optional[TypeRegistry] = None,
        config: Optional[PackConfig] = None,
    ) -> "DataPack":
        """
        Read a pack file from disk.

        Raises:
            DataPackError: If the file cannot be read
            CorruptArchive: If the file is not a readable zip container
        """
        path = Path(path)
        try:
            data = path.read_bytes()
        except OSError as e:
            raise DataPackError(f"cannot read {path}: {e}") from e
        pack = cls.open(data, registry=registry, config=config)
        log.info("pack_loaded", path=str(path), entries=len(pack))
        return pack

    # ------------------------------------------
    # Queries
    # ------------------------------------------

    def _dir(self, model_type: ModelType) -> str:
        return self.registry.path_of(model_type)

    def _path(self, model_type: ModelType, entity_id: Any) -> str:
        return f"{self._dir(model_type)}/{validate_id(entity_id)}.json"

    def list_ids(self, model_type: ModelType) -> List[str]:
        """
        Ids of all documents in the category's directory.

        Order is the archive's entry order.
        """
        prefix = self._dir(model_type) + "/"
        ids = []
        for name in self._entries:
            if not name.startswith(prefix) or not name.endswith(".json"):
                continue
            entity_id = name[len(prefix):-len(".json")]
            # nested folders are not part of the category
            if entity_id and "/" not in entity_id:
                ids.append(entity_id)
        return ids

    def contains(self, model_type: ModelType, entity_id: str) -> bool:
        return self._path(model_type, entity_id) in self._entries

    def raw(self, model_type: ModelType, entity_id: str) -> Optional[bytes]:
        """The stored bytes of a document, or None."""
        return self._entries.get(self._path(model_type, entity_id))

    def read(self, model_type: ModelType, entity_id: str) -> Optional[Dict[str, Any]]:
        """
        Get the document of an entity.

        Returns:
            The parsed document, or None if there is no such entry or
            the entry is not a JSON object
        """
        raw = self.raw(model_type, entity_id)
        if raw is None:
            return None
        path = self._path(model_type, entity_id)
        try:
            document = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            log.error("corrupt_document", path=path, error=str(e))
            return None
        if not isinstance(document, dict):
            log.error("corrupt_document", path=path, error="not a JSON object")
            return None
        return document

    # ------------------------------------------
    # Writing
    # ------------------------------------------

    def write(self, model_type: ModelType, document: Dict[str, Any]) -> bool:
        """
        Add a document unless one with the same id is already stored.

        Returns:
            True if the document was added, False if it was a duplicate

        Raises:
            InvalidId: If the document has no usable `id`
            SerializationFailed: If the document cannot be encoded as JSON
        """
        path = self._path(model_type, document.get("id"))
        if path in self._entries:
            log.warning("duplicate_write", category=model_type.name, id=document["id"])
            return False

        try:
            text = json.dumps(document, ensure_ascii=False, indent=self.config.json_indent)
            data = text.encode("utf-8")
        except (TypeError, ValueError) as e:
            # UnicodeEncodeError (lone surrogates) is a ValueError
            raise SerializationFailed(f"cannot encode {path}: {e}") from e

        self._entries[path] = data
        log.debug("document_written", path=path)
        return True

    # ------------------------------------------
    # Saving
    # ------------------------------------------

    def serialize(self) -> bytes:
        """
        Encode the archive as zip bytes.

        Raises:
            SerializationFailed: If the archive cannot be encoded
        """
        buffer = io.BytesIO()
        try:
            with zipfile.ZipFile(buffer, "w", self.config.zip_compression) as archive:
                for name, data in self._entries.items():
                    archive.writestr(name, data)
        except (zipfile.LargeZipFile, OSError, ValueError, RuntimeError) as e:
            raise SerializationFailed(f"cannot encode data pack: {e}") from e
        return buffer.getvalue()

    def save(self, path: Union[str, Path]) -> None:
        """
        Write the archive to a file.

        The archive is encoded completely before the file system is
        touched and then moved over the target, so a failed save
        leaves an existing file as it was.

        Raises:
            SerializationFailed: If encoding or writing fails
        """
        path = Path(path)
        data = self.serialize()
        tmp = path.with_name(path.name + ".tmp")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_bytes(data)
            os.replace(tmp, path)
        except OSError as e:
            if tmp.exists():
                tmp.unlink()
            raise SerializationFailed(f"cannot save data pack to {path}: {e}") from e
        log.info("pack_saved", path=str(path), entries=len(self))

    # ------------------------------------------
    # Utility
    # ------------------------------------------

    def paths(self) -> Iterator[str]:
        """All archive entry paths."""
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)
