"""Tests for the inventory store."""

import json
from uuid import uuid4

import pytest

from school_meals.domain.errors import NotFoundError, StateStoreError
from school_meals.domain.inventory import FoodItem, NewFoodItem
from school_meals.services.inventory import (
    DEFAULT_INVENTORY,
    INVENTORY_KEY,
    InventoryStore,
)
from tests.conftest import FailingStateStore, RecordingStateStore


def _rice(quantity: float = 50, threshold: float = 10) -> NewFoodItem:
    return NewFoodItem(
        name="Rice",
        quantity=quantity,
        unit="kg",
        nutritional_info="Carbohydrates",
        low_stock_threshold=threshold,
    )


def _empty_store(state_store: RecordingStateStore) -> InventoryStore:
    return InventoryStore(state_store, seed=())


def test_missing_blob_seeds_defaults_without_saving() -> None:
    state_store = RecordingStateStore()

    store = InventoryStore(state_store)

    assert [item.name for item in store.list_items()] == [
        item.name for item in DEFAULT_INVENTORY
    ]
    assert state_store.saves == []


def test_existing_blob_is_loaded_without_saving() -> None:
    item_id = uuid4()
    state_store = RecordingStateStore(
        blobs={
            INVENTORY_KEY: json.dumps(
                [
                    {
                        "id": str(item_id),
                        "name": "Beans",
                        "quantity": 4,
                        "unit": "kg",
                        "nutritionalInfo": "Protein",
                        "lowStockThreshold": 5,
                    }
                ]
            )
        }
    )

    store = InventoryStore(state_store)

    item = store.get_by_id(item_id)
    assert item is not None
    assert item.name == "Beans"
    assert item.is_low_stock
    assert state_store.saves == []


def test_malformed_blob_raises() -> None:
    state_store = RecordingStateStore(blobs={INVENTORY_KEY: "not json"})

    with pytest.raises(StateStoreError):
        InventoryStore(state_store)


def test_add_assigns_fresh_id_and_persists() -> None:
    state_store = RecordingStateStore()
    store = InventoryStore(state_store)
    existing_ids = {item.id for item in store.list_items()}

    created = store.add(_rice())

    assert created.id not in existing_ids
    assert store.get_by_id(created.id) == created
    assert created.name == "Rice"
    assert created.quantity == 50
    key, blob = state_store.saves[-1]
    assert key == INVENTORY_KEY
    saved = json.loads(blob)
    assert saved[-1]["id"] == str(created.id)
    assert saved[-1]["lowStockThreshold"] == 10


def test_add_allows_duplicate_names() -> None:
    store = _empty_store(RecordingStateStore())

    first = store.add(_rice())
    second = store.add(_rice())

    assert first.id != second.id
    assert len(store.list_items()) == 2


def test_update_replaces_item() -> None:
    store = _empty_store(RecordingStateStore())
    created = store.add(_rice())

    updated = store.update(
        FoodItem(
            id=created.id,
            name="Parboiled Rice",
            quantity=12,
            unit="kg",
            nutritional_info="Carbohydrates",
            low_stock_threshold=15,
        )
    )

    assert store.get_by_id(created.id) == updated
    assert store.list_low_stock() == [updated]


def test_update_missing_item_raises() -> None:
    state_store = RecordingStateStore()
    store = _empty_store(state_store)
    created = store.add(_rice())
    store.delete(created.id)
    saves_before = len(state_store.saves)

    with pytest.raises(NotFoundError):
        store.update(created)

    assert len(state_store.saves) == saves_before


def test_delete_removes_item_and_ignores_missing() -> None:
    state_store = RecordingStateStore()
    store = _empty_store(state_store)
    created = store.add(_rice())

    store.delete(created.id)
    saves_after_delete = len(state_store.saves)
    store.delete(created.id)

    assert store.get_by_id(created.id) is None
    assert len(state_store.saves) == saves_after_delete


def test_adjust_quantity_clamps_negative_to_zero() -> None:
    store = _empty_store(RecordingStateStore())
    created = store.add(_rice())

    adjusted = store.adjust_quantity(created.id, -5)

    assert adjusted.quantity == 0
    assert store.get_by_id(created.id).quantity == 0


def test_adjust_quantity_missing_item_raises() -> None:
    store = _empty_store(RecordingStateStore())

    with pytest.raises(NotFoundError):
        store.adjust_quantity(uuid4(), 3)


def test_low_stock_boundary_scenario() -> None:
    store = _empty_store(RecordingStateStore())
    rice = store.add(_rice(quantity=50, threshold=10))

    assert store.list_low_stock() == []

    store.adjust_quantity(rice.id, -5)
    assert [item.name for item in store.list_low_stock()] == ["Rice"]

    store.adjust_quantity(rice.id, 10)
    assert store.get_by_id(rice.id).quantity == 10
    assert store.list_low_stock() == []


def test_low_stock_keeps_insertion_order() -> None:
    store = _empty_store(RecordingStateStore())
    first = store.add(_rice(quantity=1, threshold=5))
    store.add(_rice(quantity=9, threshold=5))
    third = store.add(_rice(quantity=2, threshold=50))

    assert store.list_low_stock() == [first, third]


def test_failed_save_leaves_inventory_unchanged() -> None:
    state_store = FailingStateStore()
    store = _empty_store(state_store)
    created = store.add(_rice())
    state_store.fail = True

    with pytest.raises(StateStoreError):
        store.add(_rice())
    with pytest.raises(StateStoreError):
        store.adjust_quantity(created.id, 0)

    assert store.list_items() == [created]


def test_snapshot_projects_menu_fields() -> None:
    store = _empty_store(RecordingStateStore())
    store.add(_rice(quantity=7))

    snapshot = store.snapshot()

    assert len(snapshot) == 1
    assert snapshot[0].name == "Rice"
    assert snapshot[0].quantity == 7
    assert snapshot[0].nutritional_info == "Carbohydrates"


def test_backend_load_failure_raises_state_store_error() -> None:
    class BrokenStateStore(RecordingStateStore):
        def load(self, key: str) -> str | None:
            raise OSError("connection refused")

    with pytest.raises(StateStoreError, match=INVENTORY_KEY):
        InventoryStore(BrokenStateStore())


def test_unserializable_quantity_is_not_reported_as_storage_failure() -> None:
    state_store = RecordingStateStore()
    store = _empty_store(state_store)

    with pytest.raises(ValueError, match="JSON"):
        store.add(_rice(quantity=float("inf")))

    assert store.list_items() == []
    assert state_store.saves == []
