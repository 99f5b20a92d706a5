# ==============================================
# Integration: entity graph → pack file → entity graph
# ==============================================

from sophena.model import FuelGroup, ModelType, ProducerFunction, WoodAmountType
from sophena.persistence import load, save, to_json
from sophena.storage import DataPack


class TestProjectRoundTrip:
    def test_document_is_stable(self, project, pack):
        save(project, pack)
        loaded = load(ModelType.PROJECT, "pj1", pack)
        assert to_json(loaded) == to_json(project)

    def test_through_a_file(self, project, pack, pack_config, tmp_path):
        save(project, pack)
        path = tmp_path / "project.sophena"
        pack.save(path)

        loaded = load(ModelType.PROJECT, "pj1", DataPack.load(path, config=pack_config))

        assert loaded == project
        assert loaded.name == "Heating net Eichstätt"
        assert loaded.project_duration == 20
        assert loaded.weather_station.data == [-3.5, -2.0, 0.5]
        assert loaded.cost_settings.interest_rate == 2.0

        heat_net = loaded.heat_net
        assert heat_net.length == 850.0
        assert heat_net.pipes[0].pipe.manufacturer.name == "Acme"

        producer = loaded.producers[0]
        assert producer.function is ProducerFunction.BASE_LOAD
        assert producer.costs.duration == 20
        assert producer.boiler.fuel_group is FuelGroup.WOOD
        assert producer.boiler.manufacturer.id == "m1"
        assert producer.fuel_spec.fuel.group is FuelGroup.WOOD
        assert producer.fuel_spec.wood_amount_type is WoodAmountType.CHIPS

        consumer = loaded.consumers[0]
        assert consumer.location.city == "Eichstätt"
        assert consumer.fuel_consumptions[0].fuel.calorific_value == 4.0
        assert consumer.load_profiles[0].dynamic_data == [1.0, 2.5, 3.0]
        assert consumer.interruptions[0].description == "Summer"

    def test_fuel_round_trip(self, wood_fuel, pack):
        save(wood_fuel, pack)
        loaded = load(ModelType.FUEL, "f1", pack)
        assert loaded == wood_fuel
        assert loaded.group is FuelGroup.WOOD
        assert loaded.calorific_value == 4.0
        assert loaded.is_wood()
