# ==============================================
# Tests for the DataPack archive store
# ==============================================

import io
import json
import zipfile

import pytest
from structlog.testing import capture_logs

from sophena.errors import CorruptArchive, DataPackError, InvalidId, SerializationFailed
from sophena.model import ModelType
from sophena.storage import DataPack


def zip_bytes(entries: dict) -> bytes:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        for name, data in entries.items():
            archive.writestr(name, data)
    return buffer.getvalue()


class TestOpen:
    def test_empty_pack(self, pack):
        assert len(pack) == 0
        assert pack.list_ids(ModelType.FUEL) == []

    def test_garbage_is_corrupt_archive(self):
        with pytest.raises(CorruptArchive):
            DataPack.open(b"this is not a zip file")

    def test_truncated_zip_is_corrupt_archive(self):
        data = zip_bytes({"fuels/f1.json": '{"id": "f1"}'})
        with pytest.raises(CorruptArchive):
            DataPack.open(data[: len(data) // 2])

    def test_open_reads_documents(self, pack_config):
        data = zip_bytes({
            "fuels/f1.json": json.dumps({"id": "f1", "@type": "Fuel", "name": "Wood chips"}),
            "fuels/": "",
        })
        pack = DataPack.open(data, config=pack_config)
        assert pack.list_ids(ModelType.FUEL) == ["f1"]
        assert pack.read(ModelType.FUEL, "f1")["name"] == "Wood chips"

    def test_only_manufacturer_in_archive(self, pack_config):
        data = zip_bytes({"manufacturers/m1.json": json.dumps({"id": "m1", "name": "Acme"})})
        pack = DataPack.open(data, config=pack_config)
        assert pack.list_ids(ModelType.MANUFACTURER) == ["m1"]
        assert pack.read(ModelType.PIPE, "p1") is None
        assert not pack.contains(ModelType.PIPE, "p1")

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(DataPackError):
            DataPack.load(tmp_path / "missing.sophena")


class TestListIds:
    def test_returns_each_written_id_once(self, pack):
        ids = [f"f{i}" for i in range(5)]
        for entity_id in ids:
            pack.write(ModelType.FUEL, {"id": entity_id})
        pack.write(ModelType.FUEL, {"id": "f0"})
        pack.write(ModelType.MANUFACTURER, {"id": "m1"})
        assert sorted(pack.list_ids(ModelType.FUEL)) == sorted(ids)

    def test_ignores_other_entries(self, make_pack):
        pack = make_pack({
            "fuels/f1.json": {"id": "f1"},
            "fuels/archive/f2.json": {"id": "f2"},
            "fuels_old/f3.json": {"id": "f3"},
        })
        pack._entries["fuels/readme.txt"] = b"hello"
        assert pack.list_ids(ModelType.FUEL) == ["f1"]

    def test_is_restartable(self, pack):
        pack.write(ModelType.PIPE, {"id": "p1"})
        assert pack.list_ids(ModelType.PIPE) == pack.list_ids(ModelType.PIPE) == ["p1"]


class TestReadWrite:
    def test_write_then_read(self, pack):
        document = {"id": "f1", "@type": "Fuel", "calorificValue": 4.0}
        assert pack.write(ModelType.FUEL, document) is True
        assert pack.contains(ModelType.FUEL, "f1")
        assert pack.read(ModelType.FUEL, "f1") == document
        assert "fuels/f1.json" in list(pack.paths())

    def test_read_missing_is_none(self, pack):
        assert pack.read(ModelType.FUEL, "nope") is None

    def test_second_write_is_rejected(self, pack):
        pack.write(ModelType.FUEL, {"id": "f1", "name": "first"})
        before = pack.raw(ModelType.FUEL, "f1")

        with capture_logs() as logs:
            assert pack.write(ModelType.FUEL, {"id": "f1", "name": "second"}) is False

        assert pack.raw(ModelType.FUEL, "f1") == before
        assert pack.read(ModelType.FUEL, "f1")["name"] == "first"
        assert [log["event"] for log in logs] == ["duplicate_write"]
        assert logs[0]["category"] == "FUEL"

    def test_same_id_in_different_categories(self, pack):
        assert pack.write(ModelType.FUEL, {"id": "x"})
        assert pack.write(ModelType.PIPE, {"id": "x"})
        assert len(pack) == 2

    @pytest.mark.parametrize("bad_id", [None, "", "   ", "a/b", 42])
    def test_invalid_id_is_rejected_before_storing(self, pack, bad_id):
        with pytest.raises(InvalidId):
            pack.write(ModelType.FUEL, {"id": bad_id})
        assert len(pack) == 0

    def test_document_without_id_is_rejected(self, pack):
        with pytest.raises(InvalidId):
            pack.write(ModelType.FUEL, {"name": "no id"})

    def test_lookup_with_slash_in_id_is_rejected(self, pack):
        with pytest.raises(InvalidId):
            pack.contains(ModelType.FUEL, "../f1")

    def test_unencodable_document(self, pack):
        with pytest.raises(SerializationFailed):
            pack.write(ModelType.FUEL, {"id": "f1", "value": object()})
        assert not pack.contains(ModelType.FUEL, "f1")

    def test_lone_surrogate_is_unencodable(self, pack):
        with pytest.raises(SerializationFailed):
            pack.write(ModelType.FUEL, {"id": "f1", "name": "wood \ud800"})
        assert not pack.contains(ModelType.FUEL, "f1")

    def test_corrupt_entry_reads_as_none(self, pack):
        pack._entries["fuels/f1.json"] = b"{not json"
        pack._entries["fuels/f2.json"] = b"[1, 2]"
        with capture_logs() as logs:
            assert pack.read(ModelType.FUEL, "f1") is None
            assert pack.read(ModelType.FUEL, "f2") is None
        assert [log["event"] for log in logs] == ["corrupt_document", "corrupt_document"]

    def test_documents_are_utf8(self, pack):
        pack.write(ModelType.FUEL, {"id": "f1", "name": "Holzhackschnitzel Eichstätt"})
        assert "Eichstätt".encode("utf-8") in pack.raw(ModelType.FUEL, "f1")


class TestSerialize:
    def test_serialize_and_open(self, pack, pack_config):
        pack.write(ModelType.FUEL, {"id": "f1", "name": "Wood"})
        pack.write(ModelType.MANUFACTURER, {"id": "m1", "name": "Acme"})

        reopened = DataPack.open(pack.serialize(), config=pack_config)

        assert reopened.list_ids(ModelType.FUEL) == ["f1"]
        assert reopened.read(ModelType.MANUFACTURER, "m1") == {"id": "m1", "name": "Acme"}
        assert reopened.raw(ModelType.FUEL, "f1") == pack.raw(ModelType.FUEL, "f1")

    def test_keeps_foreign_entries(self, pack_config):
        data = zip_bytes({"meta/info.txt": "created by hand", "fuels/f1.json": '{"id": "f1"}'})
        reopened = DataPack.open(DataPack.open(data, config=pack_config).serialize(), config=pack_config)
        assert sorted(reopened.paths()) == ["fuels/f1.json", "meta/info.txt"]

    def test_save_and_load_file(self, pack, pack_config, tmp_path):
        pack.write(ModelType.FUEL, {"id": "f1"})
        target = tmp_path / "packs" / "test.sophena"

        pack.save(target)

        assert DataPack.load(target, config=pack_config).list_ids(ModelType.FUEL) == ["f1"]
        assert list(target.parent.iterdir()) == [target]

    def test_failed_save_keeps_previous_file(self, pack, tmp_path, monkeypatch):
        target = tmp_path / "test.sophena"
        target.write_bytes(b"previous content")
        pack.write(ModelType.FUEL, {"id": "f1"})

        def fail(src, dst):
            raise OSError("disk full")

        monkeypatch.setattr("sophena.storage.datapack.os.replace", fail)
        with pytest.raises(SerializationFailed):
            pack.save(target)

        assert target.read_bytes() == b"previous content"
        assert list(tmp_path.iterdir()) == [target]

    def test_failed_encoding_does_not_touch_file(self, pack, tmp_path, monkeypatch):
        target = tmp_path / "test.sophena"
        target.write_bytes(b"previous content")

        def fail():
            raise SerializationFailed("boom")

        monkeypatch.setattr(pack, "serialize", fail)
        with pytest.raises(SerializationFailed):
            pack.save(target)
        assert target.read_bytes() == b"previous content"

    def test_stored_compression(self, pack_config):
        pack_config.compression = "stored"
        pack = DataPack(config=pack_config)
        pack.write(ModelType.FUEL, {"id": "f1"})
        with zipfile.ZipFile(io.BytesIO(pack.serialize())) as archive:
            assert archive.getinfo("fuels/f1.json").compress_type == zipfile.ZIP_STORED

    def test_json_indent(self, pack_config):
        pack_config.json_indent = 2
        pack = DataPack(config=pack_config)
        pack.write(ModelType.FUEL, {"id": "f1", "name": "Wood"})
        assert pack.raw(ModelType.FUEL, "f1").decode("utf-8") == '{\n  "id": "f1",\n  "name": "Wood"\n}'
