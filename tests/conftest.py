"""Shared test fixtures."""

from dataclasses import dataclass, field

import pytest

from school_meals.config import Settings
from school_meals.containers import AppContainer
from school_meals.services.inventory import InventoryStore
from school_meals.services.menus import MenuClient, MenuService
from school_meals.services.reports import ReportService
from school_meals.services.schedule import ScheduleStore
from school_meals.services.state import InMemoryStateStore, StateStore


@dataclass
class RecordingStateStore(StateStore):
    """In-memory state store that records every save."""

    blobs: dict[str, str] = field(default_factory=dict)
    saves: list[tuple[str, str]] = field(default_factory=list)

    def load(self, key: str) -> str | None:
        return self.blobs.get(key)

    def save(self, key: str, blob: str) -> None:
        self.saves.append((key, blob))
        self.blobs[key] = blob


@dataclass
class FailingStateStore(RecordingStateStore):
    """State store whose saves fail once ``fail`` is set."""

    fail: bool = False

    def save(self, key: str, blob: str) -> None:
        if self.fail:
            raise OSError("disk full")
        super().save(key, blob)


@dataclass
class FakeMenuClient(MenuClient):
    """Fake menu client returning a fixed payload."""

    payload: dict[str, object] = field(
        default_factory=lambda: {
            "menuSuggestions": [
                {
                    "name": "Rice and beans with chicken",
                    "ingredients": ["Brown Rice", "Carioca Beans", "Chicken Breast"],
                    "nutritionalValue": "Balanced protein and complex carbs",
                }
            ],
            "reasoning": "Uses the staples with the most stock.",
        }
    )
    error: Exception | None = None
    prompts: list[str] = field(default_factory=list)

    async def generate(
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.payload


@pytest.fixture
def settings() -> Settings:
    return Settings(
        openai_api_key="openai-key",
        storage_backend="memory",
    )


@pytest.fixture
def state_store() -> RecordingStateStore:
    return RecordingStateStore()


@pytest.fixture
def inventory_store(state_store: RecordingStateStore) -> InventoryStore:
    return InventoryStore(state_store)


@pytest.fixture
def schedule_store(state_store: RecordingStateStore) -> ScheduleStore:
    return ScheduleStore(state_store)


@pytest.fixture
def menu_client() -> FakeMenuClient:
    return FakeMenuClient()


@pytest.fixture
def container(settings: Settings, menu_client: FakeMenuClient) -> AppContainer:
    state_store = InMemoryStateStore()
    inventory_store = InventoryStore(state_store)
    schedule_store = ScheduleStore(state_store)
    menu_service = MenuService(
        client=menu_client,
        model=settings.openai_model,
        reasoning_effort=settings.openai_reasoning_effort,
        store=settings.openai_store,
        timeout_seconds=settings.menu_timeout_seconds,
    )
    report_service = ReportService(inventory=inventory_store, schedule=schedule_store)

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        inventory_store=inventory_store,
        schedule_store=schedule_store,
        menu_service=menu_service,
        report_service=report_service,
        close_resources=close_resources,
    )
