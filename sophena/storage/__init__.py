# ==============================================
# STORAGE: DATA PACK ARCHIVE
# ==============================================
#
# This package holds the zip-backed document store.
#
# Modules:
# --------
# - datapack.py  → DataPack: open / list ids / read / write / save
#
# ==============================================

from .datapack import DataPack, validate_id

__all__ = ["DataPack", "validate_id"]
