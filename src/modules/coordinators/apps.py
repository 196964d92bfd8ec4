from django.apps import AppConfig


class CoordinatorsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "modules.coordinators"
    label = "coordinators"

    def ready(self) -> None:
        from modules.coordinators.events import CoordinatorAdded, CoordinatorUpdated
        from modules.coordinators.handlers import (
            coordinator_added_handler,
            coordinator_updated_handler,
        )
        from shared.infrastructure.bus import event_bus

        event_bus.subscribe(CoordinatorAdded, coordinator_added_handler)
        event_bus.subscribe(CoordinatorUpdated, coordinator_updated_handler)
