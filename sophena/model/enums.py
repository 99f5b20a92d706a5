# ==============================================
# Enumerations & Enum Codec
# ==============================================
#
# PURPOSE:
#   All enumerations of the model plus the codec that turns an
#   enumeration member into its document string and back.
#
# ENCODING RULE:
#   A member is written as its symbolic name, exactly as declared
#   (FuelGroup.WOOD -> "WOOD"). No aliases, no case folding.
#
# DECODING RULE:
#   decode_enum(FuelGroup, "WOOD") -> FuelGroup.WOOD
#   decode_enum(FuelGroup, "PEAT") -> None  (logged as undecodable_enum)
#   decode_enum(FuelGroup, "")     -> None
#   decode_enum(FuelGroup, None)   -> None
#   Packs can be written by an older or newer version of the model,
#   so an unknown string means "field absent", never an error and
#   never a default member.
#
# ==============================================

from enum import Enum
from typing import Any, Optional, Type, TypeVar

import structlog

log = structlog.get_logger(__name__)

E = TypeVar("E", bound=Enum)


class ModelType(Enum):
    """
    Closed enumeration of all root entity categories.

    Every member is the storage category of exactly one root entity
    class; the TypeRegistry maps it to its archive directory.
    """
    BOILER = "BOILER"
    BUFFER = "BUFFER"
    BUILDING_STATE = "BUILDING_STATE"
    CONSUMER = "CONSUMER"
    COST_SETTINGS = "COST_SETTINGS"
    FLUE_GAS_CLEANING = "FLUE_GAS_CLEANING"
    FUEL = "FUEL"
    HEAT_RECOVERY = "HEAT_RECOVERY"
    LOAD_PROFILE = "LOAD_PROFILE"
    MANUFACTURER = "MANUFACTURER"
    PIPE = "PIPE"
    PRODUCER = "PRODUCER"
    PRODUCT_GROUP = "PRODUCT_GROUP"
    PRODUCT = "PRODUCT"
    PROJECT = "PROJECT"
    TRANSFER_STATION = "TRANSFER_STATION"
    WEATHER_STATION = "WEATHER_STATION"


class ProductType(Enum):
    """Products are grouped and each group is of a specific type."""
    BIOMASS_BOILER = "BIOMASS_BOILER"
    FOSSIL_FUEL_BOILER = "FOSSIL_FUEL_BOILER"
    HEAT_PUMP = "HEAT_PUMP"
    COGENERATION_PLANT = "COGENERATION_PLANT"
    SOLAR_THERMAL_PLANT = "SOLAR_THERMAL_PLANT"
    ELECTRIC_HEAT_GENERATOR = "ELECTRIC_HEAT_GENERATOR"
    BOILER_ACCESSORIES = "BOILER_ACCESSORIES"
    HEAT_RECOVERY = "HEAT_RECOVERY"
    FLUE_GAS_CLEANING = "FLUE_GAS_CLEANING"
    BUFFER_TANK = "BUFFER_TANK"
    BOILER_HOUSE_TECHNOLOGY = "BOILER_HOUSE_TECHNOLOGY"
    BUILDING = "BUILDING"
    PIPE = "PIPE"
    HEATING_NET_TECHNOLOGY = "HEATING_NET_TECHNOLOGY"
    HEATING_NET_CONSTRUCTION = "HEATING_NET_CONSTRUCTION"
    TRANSFER_STATION = "TRANSFER_STATION"
    PLANNING = "PLANNING"


class FuelGroup(Enum):
    BIOGAS = "BIOGAS"
    NATURAL_GAS = "NATURAL_GAS"
    LIQUID_GAS = "LIQUID_GAS"
    HEATING_OIL = "HEATING_OIL"
    PELLETS = "PELLETS"
    ELECTRICITY = "ELECTRICITY"
    HOT_WATER = "HOT_WATER"
    PLANTS_OIL = "PLANTS_OIL"
    WOOD = "WOOD"


class WoodAmountType(Enum):
    """Wood amounts can be given as (dry) mass, chips or logs."""
    MASS = "MASS"
    CHIPS = "CHIPS"
    LOGS = "LOGS"


class BuildingType(Enum):
    SINGLE_FAMILY_HOUSE = "SINGLE_FAMILY_HOUSE"
    MULTI_FAMILY_HOUSE = "MULTI_FAMILY_HOUSE"
    BLOCK_OF_FLATS = "BLOCK_OF_FLATS"
    TERRACE_HOUSE = "TERRACE_HOUSE"
    TOWER_BLOCK = "TOWER_BLOCK"
    SCHOOL = "SCHOOL"
    KINDERGARDEN = "KINDERGARDEN"
    OFFICE_BUILDING = "OFFICE_BUILDING"
    HOSPITAL = "HOSPITAL"
    NURSING_HOME = "NURSING_HOME"
    HOLIDAY_HOUSE = "HOLIDAY_HOUSE"
    HOTEL = "HOTEL"
    GREENHOUSE = "GREENHOUSE"
    FERMENTER = "FERMENTER"
    OTHER = "OTHER"


class ProducerFunction(Enum):
    BASE_LOAD = "BASE_LOAD"
    PEAK_LOAD = "PEAK_LOAD"


def encode_enum(value: Any) -> Optional[str]:
    """
    Encode an enumeration member as its declared symbolic name.

    Args:
        value: An Enum member, or None

    Returns:
        The member name, or None if the value is not an enumeration member
    """
    if isinstance(value, Enum):
        return value.name
    return None


def decode_enum(enum_type: Type[E], value: Any) -> Optional[E]:
    """
    Decode a document string into a member of the given enumeration.

    Args:
        enum_type: The Enum class to decode into
        value: The raw document value

    Returns:
        The matching member, or None if the value is missing or unknown
    """
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        log.warning("undecodable_enum", enum=enum_type.__name__, value=value)
        return None
    member = enum_type.__members__.get(value)
    if member is None:
        log.warning("undecodable_enum", enum=enum_type.__name__, value=value)
    return member
