import itertools

import pytest

from barcode_engine.engine import BarcodeEngine
from barcode_engine.schemas import BarcodeSettings
from barcode_engine.store import BarcodeStore


@pytest.fixture
def results():
    counter = itertools.count(1)
    engine = BarcodeEngine(id_generator=lambda: f"r{next(counter)}")
    return [engine.generate(BarcodeSettings(content=f"ITEM{i}")) for i in range(3)]


def test_add_keeps_newest_first(results):
    store = BarcodeStore()
    for result in results:
        store.add(result)
    assert [r.id for r in store] == ["r3", "r2", "r1"]
    assert len(store) == 3


def test_extend_prepends_in_given_order(results):
    store = BarcodeStore()
    store.add(results[0])
    store.extend(results[1:])
    assert [r.id for r in store.all()] == ["r2", "r3", "r1"]


def test_extend_with_repeated_ids_keeps_last_occurrence():
    engine = BarcodeEngine(id_generator=lambda: "same")
    first = engine.generate(BarcodeSettings(content="FIRST"))
    second = engine.generate(BarcodeSettings(content="SECOND"))

    store = BarcodeStore()
    store.extend([first, second])

    assert len(store) == 1
    assert store.all() == [second]
    assert store.get("same") is second


def test_extend_replaces_existing_entries(results):
    store = BarcodeStore()
    store.extend(results)
    replacement = results[1].model_copy(update={"error": "replaced"})
    store.extend([replacement])
    assert [r.id for r in store] == ["r2", "r1", "r3"]
    assert store.get("r2") is replacement
    assert store.all()[0] is replacement


def test_get_and_remove(results):
    store = BarcodeStore()
    store.extend(results)
    assert store.get("r2") is results[1]
    assert store.remove("r2")
    assert store.get("r2") is None
    assert not store.remove("r2")
    assert [r.id for r in store] == ["r1", "r3"]


def test_re_adding_an_id_replaces_the_old_entry(results):
    store = BarcodeStore()
    store.extend(results)
    store.add(results[2])
    assert [r.id for r in store] == ["r3", "r1", "r2"]
    assert len(store) == 3


def test_clear(results):
    store = BarcodeStore()
    store.extend(results)
    assert store.clear() == 3
    assert len(store) == 0
    assert store.all() == []
