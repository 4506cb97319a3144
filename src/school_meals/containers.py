"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from school_meals.adapters.json_file_state_repository import JsonFileStateStore
from school_meals.adapters.openai_menu_client import OpenAIMenuClient
from school_meals.adapters.supabase_state_repository import SupabaseStateStore
from school_meals.config import Settings
from school_meals.services.inventory import InventoryStore
from school_meals.services.menus import MenuService
from school_meals.services.reports import ReportService
from school_meals.services.schedule import ScheduleStore
from school_meals.services.state import InMemoryStateStore, StateStore


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    inventory_store: InventoryStore
    schedule_store: ScheduleStore
    menu_service: MenuService
    report_service: ReportService
    close_resources: Callable[[], Awaitable[None]]


def build_state_store(settings: Settings) -> StateStore:
    """Create the state store selected by the settings."""
    if settings.storage_backend == "supabase":
        client = create_client(settings.supabase_url, settings.supabase_service_key)
        return SupabaseStateStore(client, table_name=settings.supabase_state_table)
    if settings.storage_backend == "file":
        return JsonFileStateStore(settings.data_dir)
    return InMemoryStateStore()


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    state_store = build_state_store(resolved_settings)
    inventory_store = InventoryStore(state_store)
    schedule_store = ScheduleStore(state_store)
    openai_client = OpenAIMenuClient.create(resolved_settings.openai_api_key)
    menu_service = MenuService(
        client=openai_client,
        model=resolved_settings.openai_model,
        reasoning_effort=resolved_settings.openai_reasoning_effort,
        store=resolved_settings.openai_store,
        timeout_seconds=resolved_settings.menu_timeout_seconds,
    )
    report_service = ReportService(
        inventory=inventory_store,
        schedule=schedule_store,
    )

    async def close_resources() -> None:
        await openai_client.close()

    return AppContainer(
        settings=resolved_settings,
        inventory_store=inventory_store,
        schedule_store=schedule_store,
        menu_service=menu_service,
        report_service=report_service,
        close_resources=close_resources,
    )
