# ==============================================
# Domain Entities
# ==============================================
#
# PURPOSE:
#   The concrete entity classes of the heating network model.
#   Each one is an instance of the taxonomy in base.py; the writer
#   and reader work on them only through their type hints.
#
# HOW TO ADD A FIELD:
#   Declare it with a type hint and a default of None (or an empty
#   list). Supported hints:
#     - str, int, float, bool              → copied verbatim
#     - List[float], List[int]             → raw numeric sequence
#     - an Enum from enums.py              → encoded by name
#     - a value entity / List of them      → embedded inline
#     - a root entity / List of them       → stored as a Ref
#
# HOW TO ADD A ROOT ENTITY:
#   1. Add a member to ModelType.
#   2. Declare `model_type = ModelType.<MEMBER>` on the class.
#   3. Add one entry to DEFAULT_REGISTRY in registry.py.
#   Skipping 2 fails when the class is defined, skipping 3 fails
#   when registry.py is imported.
#
# ==============================================

from dataclasses import dataclass, field
from typing import List, Optional

from sophena.model.base import BaseDataEntity, Entity, RootEntity
from sophena.model.enums import (
    BuildingType,
    FuelGroup,
    ModelType,
    ProducerFunction,
    ProductType,
    WoodAmountType,
)


# ----------------------------------------------
# Base data
# ----------------------------------------------

@dataclass(eq=False)
class Manufacturer(BaseDataEntity):
    model_type = ModelType.MANUFACTURER

    address: Optional[str] = None
    url: Optional[str] = None


@dataclass(eq=False)
class ProductGroup(BaseDataEntity):
    model_type = ModelType.PRODUCT_GROUP

    type: Optional[ProductType] = None
    index: Optional[int] = None

    # Default usage duration of products in this group, in years.
    duration: Optional[int] = None

    # Default fractions (%) of the investment used for repair / maintenance.
    repair: Optional[float] = None
    maintenance: Optional[float] = None

    # Default hours per year used for operation.
    operation: Optional[float] = None


@dataclass(eq=False)
class Fuel(BaseDataEntity):
    model_type = ModelType.FUEL

    # Standard unit of the fuel (e.g. L, m3, kg).
    unit: Optional[str] = None

    # kWh per standard unit.
    calorific_value: Optional[float] = None

    # Only for wood fuels: kg per solid cubic meter.
    density: Optional[float] = None

    group: Optional[FuelGroup] = None

    # Gramme CO2 per kWh fuel energy.
    co2_emissions: Optional[float] = None

    primary_energy_factor: Optional[float] = None

    def is_wood(self) -> bool:
        return self.group == FuelGroup.WOOD


@dataclass(eq=False)
class BuildingState(BaseDataEntity):
    model_type = ModelType.BUILDING_STATE

    index: Optional[int] = None
    is_default: Optional[bool] = None
    type: Optional[BuildingType] = None
    heating_limit: Optional[float] = None
    antifreezing_temperature: Optional[float] = None
    water_fraction: Optional[float] = None
    load_hours: Optional[int] = None


@dataclass(eq=False)
class WeatherStation(BaseDataEntity):
    model_type = ModelType.WEATHER_STATION

    longitude: Optional[float] = None
    latitude: Optional[float] = None
    altitude: Optional[float] = None

    # Hourly temperatures of a reference year.
    data: List[float] = field(default_factory=list)


# ----------------------------------------------
# Products
# ----------------------------------------------

@dataclass(eq=False)
class AbstractProduct(BaseDataEntity, abstract=True):
    purchase_price: Optional[float] = None
    url: Optional[str] = None
    manufacturer: Optional[Manufacturer] = None
    type: Optional[ProductType] = None
    group: Optional[ProductGroup] = None


@dataclass(eq=False)
class Product(AbstractProduct):
    model_type = ModelType.PRODUCT


@dataclass(eq=False)
class Boiler(AbstractProduct):
    model_type = ModelType.BOILER

    max_power: Optional[float] = None
    min_power: Optional[float] = None
    efficiency_rate: Optional[float] = None
    is_co_gen_plant: Optional[bool] = None
    max_power_electric: Optional[float] = None
    efficiency_rate_electric: Optional[float] = None
    fuel_group: Optional[FuelGroup] = None


@dataclass(eq=False)
class BufferTank(AbstractProduct):
    model_type = ModelType.BUFFER

    volume: Optional[float] = None
    diameter: Optional[float] = None
    height: Optional[float] = None
    insulation_thickness: Optional[float] = None


@dataclass(eq=False)
class Pipe(AbstractProduct):
    model_type = ModelType.PIPE

    material: Optional[str] = None
    pipe_type: Optional[str] = None
    u_value: Optional[float] = None
    inner_diameter: Optional[float] = None
    outer_diameter: Optional[float] = None
    total_diameter: Optional[float] = None
    delivery_type: Optional[str] = None
    max_temperature: Optional[float] = None


@dataclass(eq=False)
class HeatRecovery(AbstractProduct):
    model_type = ModelType.HEAT_RECOVERY

    power: Optional[float] = None
    heat_recovery_type: Optional[str] = None
    fuel: Optional[str] = None
    producer_power: Optional[float] = None


@dataclass(eq=False)
class FlueGasCleaning(AbstractProduct):
    model_type = ModelType.FLUE_GAS_CLEANING

    max_volume_flow: Optional[float] = None
    fuel: Optional[str] = None
    max_producer_power: Optional[float] = None
    max_electricity_consumption: Optional[float] = None
    cleaning_method: Optional[str] = None
    cleaning_type: Optional[str] = None
    separation_efficiency: Optional[float] = None


@dataclass(eq=False)
class TransferStation(AbstractProduct):
    model_type = ModelType.TRANSFER_STATION

    building_type: Optional[str] = None
    output_capacity: Optional[float] = None
    station_type: Optional[str] = None
    material: Optional[str] = None
    water_heating: Optional[str] = None


# ----------------------------------------------
# Value entities
# ----------------------------------------------

@dataclass(eq=False)
class ProductCosts(Entity):
    # Purchase price of the product in EUR.
    investment: Optional[float] = None

    # Usage duration in years.
    duration: Optional[int] = None

    repair: Optional[float] = None
    maintenance: Optional[float] = None
    operation: Optional[float] = None


@dataclass(eq=False)
class TimeInterval(Entity):
    start: Optional[str] = None
    end: Optional[str] = None
    description: Optional[str] = None


@dataclass(eq=False)
class Location(Entity):
    name: Optional[str] = None
    street: Optional[str] = None
    zip_code: Optional[str] = None
    city: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None


@dataclass(eq=False)
class FuelConsumption(Entity):
    fuel: Optional[Fuel] = None
    amount: Optional[float] = None
    utilisation_rate: Optional[float] = None
    wood_amount_type: Optional[WoodAmountType] = None
    water_content: Optional[float] = None


@dataclass(eq=False)
class FuelSpec(Entity):
    fuel: Optional[Fuel] = None
    wood_amount_type: Optional[WoodAmountType] = None
    water_content: Optional[float] = None
    price_per_unit: Optional[float] = None
    tax_rate: Optional[float] = None


@dataclass(eq=False)
class HeatNetPipe(Entity):
    name: Optional[str] = None
    pipe: Optional[Pipe] = None
    length: Optional[float] = None
    price_per_meter: Optional[float] = None


@dataclass(eq=False)
class HeatNet(Entity):
    length: Optional[float] = None
    supply_temperature: Optional[float] = None
    return_temperature: Optional[float] = None
    simultaneity_factor: Optional[float] = None
    buffer_tank: Optional[BufferTank] = None
    pipes: List[HeatNetPipe] = field(default_factory=list)
    interruptions: List[TimeInterval] = field(default_factory=list)


# ----------------------------------------------
# Project data
# ----------------------------------------------

@dataclass(eq=False)
class CostSettings(RootEntity):
    model_type = ModelType.COST_SETTINGS

    hourly_wage: Optional[float] = None
    electricity_price: Optional[float] = None
    electricity_demand_share: Optional[float] = None
    interest_rate: Optional[float] = None
    interest_rate_funding: Optional[float] = None
    funding: Optional[float] = None
    insurance_share: Optional[float] = None
    other_share: Optional[float] = None
    administration_share: Optional[float] = None


@dataclass(eq=False)
class LoadProfile(RootEntity):
    model_type = ModelType.LOAD_PROFILE

    dynamic_data: List[float] = field(default_factory=list)
    static_data: List[float] = field(default_factory=list)


@dataclass(eq=False)
class Consumer(RootEntity):
    model_type = ModelType.CONSUMER

    disabled: Optional[bool] = None
    demand_based: Optional[bool] = None
    building_type: Optional[BuildingType] = None
    building_state: Optional[BuildingState] = None
    heating_load: Optional[float] = None
    water_fraction: Optional[float] = None
    load_hours: Optional[int] = None
    heating_limit: Optional[float] = None
    floor_space: Optional[float] = None
    location: Optional[Location] = None
    transfer_station: Optional[TransferStation] = None
    fuel_consumptions: List[FuelConsumption] = field(default_factory=list)
    load_profiles: List[LoadProfile] = field(default_factory=list)
    interruptions: List[TimeInterval] = field(default_factory=list)


@dataclass(eq=False)
class Producer(RootEntity):
    model_type = ModelType.PRODUCER

    disabled: Optional[bool] = None
    rank: Optional[int] = None
    function: Optional[ProducerFunction] = None
    boiler: Optional[Boiler] = None
    costs: Optional[ProductCosts] = None
    fuel_spec: Optional[FuelSpec] = None
    utilisation_rate: Optional[float] = None
    has_profile: Optional[bool] = None
    profile: Optional[LoadProfile] = None
    heat_recovery: Optional[HeatRecovery] = None
    flue_gas_cleaning: Optional[FlueGasCleaning] = None


@dataclass(eq=False)
class Project(RootEntity):
    model_type = ModelType.PROJECT

    project_duration: Optional[int] = None
    is_variant: Optional[bool] = None
    weather_station: Optional[WeatherStation] = None
    cost_settings: Optional[CostSettings] = None
    heat_net: Optional[HeatNet] = None
    producers: List[Producer] = field(default_factory=list)
    consumers: List[Consumer] = field(default_factory=list)

    # Variants of a project are projects themselves and may point back.
    variants: List["Project"] = field(default_factory=list)
