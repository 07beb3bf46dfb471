# SPDX-License-Identifier: BSL-1.1
# Copyright (c) 2026 MuVeraAI Corporation

"""
Typed change notifications for the refresh-on-write contract.

Writers publish an EntityChanged event after every successful create, update
or delete of a budget, employee, allocation or expense. Anything holding
derived values (BudgetStatus, UtilizationResult) subscribes, refetches the
underlying collections and recomputes.

Delivery is synchronous and in subscription order. A handler that raises
stops delivery and the exception reaches the publisher.

Usage::

    bus = EventBus()
    subscription = bus.subscribe(on_change, entities={"allocation", "expense"})
    bus.publish(EntityChanged(entity="allocation", action="created", entity_id="a-1"))
    subscription.cancel()
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from datetime import datetime, timezone
from typing import Literal, Optional

from pydantic import BaseModel, Field

logger = logging.getLogger("budget_reconciler.events")

EntityKind = Literal["budget", "employee", "allocation", "expense"]
ChangeAction = Literal["created", "updated", "deleted"]

ENTITY_KINDS: frozenset[str] = frozenset({"budget", "employee", "allocation", "expense"})


class EntityChanged(BaseModel, frozen=True):
    """A record was written by the data layer."""

    entity: EntityKind
    action: ChangeAction
    entity_id: str = Field(..., min_length=1)
    occurred_at: datetime = Field(default_factory=lambda: datetime.now(tz=timezone.utc))


ChangeHandler = Callable[[EntityChanged], None]


class Subscription:
    """Handle returned by ``EventBus.subscribe``; call ``cancel()`` to stop delivery."""

    __slots__ = ("_bus", "handler", "entities")

    def __init__(
        self,
        bus: EventBus,
        handler: ChangeHandler,
        entities: Optional[frozenset[str]],
    ) -> None:
        self._bus: Optional[EventBus] = bus
        self.handler = handler
        self.entities = entities

    @property
    def active(self) -> bool:
        return self._bus is not None

    def accepts(self, event: EntityChanged) -> bool:
        return self.entities is None or event.entity in self.entities

    def cancel(self) -> bool:
        """
        Stop receiving events.

        Returns:
            True if the subscription was active and is now cancelled.
        """
        if self._bus is None:
            return False
        self._bus._remove(self)
        self._bus = None
        return True


class EventBus:
    """In-process publish/subscribe channel for EntityChanged events."""

    def __init__(self) -> None:
        self._subscriptions: list[Subscription] = []

    def subscribe(
        self,
        handler: ChangeHandler,
        entities: Iterable[EntityKind] | None = None,
    ) -> Subscription:
        """
        Register ``handler`` for changes to ``entities`` (all kinds when None).

        Raises:
            ValueError: If ``entities`` names an unknown entity kind.
        """
        selected: Optional[frozenset[str]] = None
        if entities is not None:
            selected = frozenset(entities)
            unknown = selected - ENTITY_KINDS
            if unknown:
                raise ValueError(
                    f"Unknown entity kinds {sorted(unknown)}; expected some of {sorted(ENTITY_KINDS)}."
                )
        subscription = Subscription(self, handler, selected)
        self._subscriptions.append(subscription)
        return subscription

    def publish(self, event: EntityChanged) -> int:
        """
        Deliver ``event`` to every matching subscriber.

        Returns:
            The number of handlers that were called.
        """
        delivered = 0
        for subscription in list(self._subscriptions):
            if not subscription.active or not subscription.accepts(event):
                continue
            try:
                subscription.handler(event)
            except Exception:
                logger.exception(
                    "change_handler_failed",
                    extra={"entity": event.entity, "action": event.action, "entity_id": event.entity_id},
                )
                raise
            delivered += 1

        logger.debug(
            "entity_changed",
            extra={
                "entity": event.entity,
                "action": event.action,
                "entity_id": event.entity_id,
                "delivered": delivered,
            },
        )
        return delivered

    @property
    def subscriber_count(self) -> int:
        return len(self._subscriptions)

    def _remove(self, subscription: Subscription) -> None:
        self._subscriptions = [s for s in self._subscriptions if s is not subscription]
