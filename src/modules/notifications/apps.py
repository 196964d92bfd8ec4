from django.apps import AppConfig


class NotificationsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "modules.notifications"
    label = "notifications"

    def ready(self) -> None:
        from modules.notifications.center import hub
        from modules.notifications.events import NotificationBroadcast
        from shared.infrastructure.bus import event_bus

        event_bus.subscribe(NotificationBroadcast, hub)
