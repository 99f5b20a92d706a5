# ==============================================
# FieldNaming
# ==============================================
#
# PURPOSE:
#   Convert Python attribute names (snake_case) into document
#   keys (camelCase).
#
# WHY THIS CLASS EXISTS:
#   Documents in a data pack use camelCase keys ("calorificValue",
#   "isProtected") while the entity classes use snake_case
#   attributes. The conversion is done in one place so writer and
#   reader always agree on the key of a field.
#
# RULES:
# ------
#   1. snake_case    → camelCase     (calorific_value → calorificValue)
#   2. single word   → unchanged     (name → name)
#   3. digits stay attached          (co2_emissions → co2Emissions)
#
# ==============================================

from typing import Dict


class FieldNaming:
    """
    Converts attribute names to document keys.
    Keeps a cache of names that were already converted.
    """

    def __init__(self):
        self._keys: Dict[str, str] = {}

    def to_key(self, attribute: str) -> str:
        """
        Convert an attribute name to its camelCase document key.

        Args:
            attribute: snake_case attribute name (e.g., "calorific_value")

        Returns:
            camelCase key (e.g., "calorificValue")
        """
        if not attribute:
            return attribute

        if attribute in self._keys:
            return self._keys[attribute]

        head, *tail = attribute.strip("_").split("_")
        key = head + "".join(part[:1].upper() + part[1:] for part in tail if part)

        self._keys[attribute] = key
        return key


# Shared instance; conversions are pure so one cache is enough.
naming = FieldNaming()
