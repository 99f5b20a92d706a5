# ==============================================
# PERSISTENCE: ENTITY GRAPH ⇄ DOCUMENTS
# ==============================================
#
# This package converts entity graphs into pack documents and back,
# resolving references between root entities on the way.
#
# Modules:
# --------
# - writer.py  → JsonWriter: entity → document, saves referenced roots
# - reader.py  → JsonReader: document → entity, loads referenced roots
#
# ==============================================

from .writer import JsonWriter, save, save_all, to_json
from .reader import JsonReader, from_json, load

__all__ = [
    "JsonReader",
    "JsonWriter",
    "from_json",
    "load",
    "save",
    "save_all",
    "to_json",
]
