from __future__ import annotations

import json

import pytest

from polyconcrete.model.io import IOManager, SnapshotFormatError
from polyconcrete.model.molds import MoldRecord, default_mold_name


def test_create_gives_unique_active_records() -> None:
    a = MoldRecord.create("Base", 120)
    b = MoldRecord.create("Base", 120)
    assert a.id != b.id
    assert a.active is True
    assert a.created_at.endswith("Z")


def test_toggled_returns_new_record() -> None:
    mold = MoldRecord.create("Base", 120)
    flipped = mold.toggled()
    assert flipped.active is False
    assert mold.active is True
    assert flipped.id == mold.id


def test_default_mold_name_is_one_based() -> None:
    assert default_mold_name(0) == "Mold #1"
    assert default_mold_name(4) == "Mold #5"


def test_from_dict_rejects_missing_volume() -> None:
    with pytest.raises(KeyError):
        MoldRecord.from_dict({"id": "a", "name": "x"})


@pytest.mark.parametrize("volume", ["100", None, True])
def test_from_dict_rejects_non_numeric_volume(volume) -> None:
    with pytest.raises(TypeError):
        MoldRecord.from_dict({"id": "a", "name": "x", "volume_ml": volume})


def test_encode_state_layout() -> None:
    mold = MoldRecord(id="a", name="Cup", volume_ml=50, active=False, created_at="2024-01-01T00:00:00.000Z")
    payload = json.loads(IOManager.encode_state([mold], "2024-02-02T00:00:00.000Z"))
    assert payload == {
        "molds": [{
            "id": "a",
            "name": "Cup",
            "volume_ml": 50,
            "active": False,
            "created_at": "2024-01-01T00:00:00.000Z",
        }],
        "last_updated": "2024-02-02T00:00:00.000Z",
    }


def test_decode_state_restores_records_in_order() -> None:
    molds = [MoldRecord.create("First", 10), MoldRecord.create("Second", 20)]
    decoded, last_updated = IOManager.decode_state(IOManager.encode_state(molds, "stamp"))
    assert decoded == molds
    assert last_updated == "stamp"


@pytest.mark.parametrize("raw", [
    "not json",
    "[]",
    "null",
    '{"molds": "nope"}',
    '{"other": []}',
    '{"molds": [{"id": "a"}]}',
    '{"molds": [42]}',
])
def test_decode_state_rejects_malformed(raw: str) -> None:
    with pytest.raises(SnapshotFormatError):
        IOManager.decode_state(raw)


def test_migrate_legacy_names_and_activates() -> None:
    raw = json.dumps({"molds": [
        {"id": "a", "volume_ml": 50},
        {"id": "b", "volume_ml": 75, "created_at": "2023-05-01T10:00:00.000Z"},
    ]})
    molds = IOManager.migrate_legacy(raw)
    assert [m.name for m in molds] == ["Mold #1", "Mold #2"]
    assert all(m.active for m in molds)
    assert [m.id for m in molds] == ["a", "b"]
    assert molds[0].created_at
    assert molds[1].created_at == "2023-05-01T10:00:00.000Z"


def test_migrate_legacy_rejects_corrupt_input() -> None:
    with pytest.raises(SnapshotFormatError):
        IOManager.migrate_legacy("{broken")
    with pytest.raises(SnapshotFormatError):
        IOManager.migrate_legacy('{"molds": ["x"]}')
