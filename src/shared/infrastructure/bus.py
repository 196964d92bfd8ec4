"""In-process event bus.

Backs both the order and coordinator lifecycle hooks and the
``notifications`` broadcast channel.  There is a single bus per process;
sessions served by another worker process never see its events.
"""

from __future__ import annotations

import threading
from typing import Dict, List, Type

import structlog

from shared.domain.bus import IEventBus, IEventHandler
from shared.domain.events import DomainEvent

logger = structlog.get_logger(__name__)


class InMemoryEventBus(IEventBus):
    """Synchronous bus keyed by the exact event class.

    Handlers run in subscription order on the publishing thread.  A
    handler failure is logged with the event's context and re-raised to
    the publisher; later handlers do not run.
    """

    def __init__(self) -> None:
        self._handlers: Dict[Type[DomainEvent], List[IEventHandler]] = {}
        self._lock = threading.Lock()

    def subscribe(self, event_class: Type[DomainEvent], handler: IEventHandler) -> None:
        with self._lock:
            handlers = self._handlers.setdefault(event_class, [])
            if handler not in handlers:
                handlers.append(handler)

    def unsubscribe(self, event_class: Type[DomainEvent], handler: IEventHandler) -> None:
        with self._lock:
            handlers = self._handlers.get(event_class, [])
            if handler in handlers:
                handlers.remove(handler)

    def publish(self, event: DomainEvent) -> None:
        with self._lock:
            handlers = list(self._handlers.get(type(event), []))
        log = logger.bind(**event.log_context())
        log.debug("bus.published", handler_count=len(handlers))
        for handler in handlers:
            try:
                handler.handle(event)
            except Exception:
                log.error("bus.handler_failed", handler=type(handler).__name__)
                raise


event_bus = InMemoryEventBus()
