"""Event handlers for sales coordinator events.

Each handler broadcasts a toast to every connected dashboard session.
"""

from __future__ import annotations

import structlog

from modules.coordinators.events import CoordinatorAdded, CoordinatorUpdated
from modules.notifications.center import hub
from modules.notifications.dtos import NotificationDraft, NotificationType, SoundCue
from shared.domain.bus import IEventHandler

logger = structlog.get_logger(__name__)


class CoordinatorAddedHandler(IEventHandler[CoordinatorAdded]):
    def handle(self, event: CoordinatorAdded) -> None:
        logger.info("coordinator.added", coordinator_id=str(event.aggregate_id))
        hub.broadcast(
            NotificationDraft(
                type=NotificationType.SUCCESS,
                title="Coordinator Added",
                message=f"{event.name} has been added successfully.",
                sound=SoundCue.DING,
            ),
            origin=event.session_id,
        )


class CoordinatorUpdatedHandler(IEventHandler[CoordinatorUpdated]):
    def handle(self, event: CoordinatorUpdated) -> None:
        logger.info("coordinator.updated", coordinator_id=str(event.aggregate_id))
        hub.broadcast(
            NotificationDraft(
                type=NotificationType.SUCCESS,
                title="Coordinator Updated",
                message=f"{event.name} has been updated successfully.",
                sound=SoundCue.DING,
            ),
            origin=event.session_id,
        )


coordinator_added_handler = CoordinatorAddedHandler()
coordinator_updated_handler = CoordinatorUpdatedHandler()
