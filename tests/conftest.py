# ==============================================
# Pytest Configuration and Fixtures
# ==============================================
#
# Shared fixtures for all tests.
#
# - clean_environment (autouse): no SOPHENA_* variables leak in
#   from the shell, config singleton and structlog reset per test
# - pack_config: default PackConfig
# - pack: empty DataPack
# - make_pack: DataPack from hand-written documents
# - acme / pipe / wood_fuel: small sample entities
# - project: a graph with shared references and nested values
# ==============================================

import json

import pytest
import structlog

from sophena.config import PackConfig, reset_config
from sophena.model import (
    Boiler,
    Consumer,
    CostSettings,
    Fuel,
    FuelConsumption,
    FuelGroup,
    FuelSpec,
    HeatNet,
    HeatNetPipe,
    LoadProfile,
    Location,
    Manufacturer,
    Pipe,
    Producer,
    ProducerFunction,
    ProductCosts,
    Project,
    TimeInterval,
    WeatherStation,
    WoodAmountType,
)
from sophena.storage import DataPack


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    for name in (
        "SOPHENA_PACK_PATH",
        "SOPHENA_COMPRESSION",
        "SOPHENA_JSON_INDENT",
        "SOPHENA_LOG_LEVEL",
        "SOPHENA_LOG_FORMAT",
    ):
        monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    reset_config()
    structlog.reset_defaults()


@pytest.fixture
def pack_config() -> PackConfig:
    return PackConfig()


@pytest.fixture
def pack(pack_config) -> DataPack:
    """An empty data pack."""
    return DataPack(config=pack_config)


@pytest.fixture
def make_pack(pack_config):
    """Build a pack from {path: document} without going through the writer."""
    def _make(documents: dict) -> DataPack:
        entries = {path: json.dumps(doc).encode("utf-8") for path, doc in documents.items()}
        return DataPack(config=pack_config, entries=entries)
    return _make


@pytest.fixture
def acme() -> Manufacturer:
    return Manufacturer(id="m1", name="Acme")


@pytest.fixture
def pipe(acme) -> Pipe:
    return Pipe(id="p1", name="DN 50", manufacturer=acme)


@pytest.fixture
def wood_fuel() -> Fuel:
    return Fuel(id="f1", group=FuelGroup.WOOD, calorific_value=4.0)


@pytest.fixture
def project(acme, pipe, wood_fuel) -> Project:
    """
    A project whose producer and consumer share the same fuel, and
    whose boiler and heat net pipe share the same manufacturer.
    """
    boiler = Boiler(
        id="b1",
        name="Wood chip boiler 500 kW",
        manufacturer=acme,
        max_power=500.0,
        min_power=150.0,
        efficiency_rate=0.85,
        fuel_group=FuelGroup.WOOD,
    )
    producer = Producer(
        id="pr1",
        name="Base load",
        rank=1,
        function=ProducerFunction.BASE_LOAD,
        boiler=boiler,
        costs=ProductCosts(investment=120000.0, duration=20, repair=1.0, maintenance=1.5),
        fuel_spec=FuelSpec(fuel=wood_fuel, wood_amount_type=WoodAmountType.CHIPS, water_content=0.3),
    )
    profile = LoadProfile(id="lp1", name="School", dynamic_data=[1.0, 2.5, 3.0])
    consumer = Consumer(
        id="c1",
        name="School",
        heating_load=120.0,
        load_hours=1800,
        location=Location(street="Main St 1", city="Eichstätt", latitude=48.89, longitude=11.19),
        fuel_consumptions=[FuelConsumption(fuel=wood_fuel, amount=42.0, utilisation_rate=0.8)],
        load_profiles=[profile],
        interruptions=[TimeInterval(start="07-01", end="08-31", description="Summer")],
    )
    return Project(
        id="pj1",
        name="Heating net Eichstätt",
        project_duration=20,
        weather_station=WeatherStation(id="ws1", name="Ingolstadt", data=[-3.5, -2.0, 0.5]),
        cost_settings=CostSettings(id="cs1", name="Default costs", interest_rate=2.0),
        heat_net=HeatNet(
            length=850.0,
            supply_temperature=80.0,
            return_temperature=50.0,
            pipes=[HeatNetPipe(name="Main line", pipe=pipe, length=500.0)],
        ),
        producers=[producer],
        consumers=[consumer],
    )
