"""Persistence layer for the shop activity log."""

from __future__ import annotations

from collections.abc import Collection

from sqlalchemy import func, not_, or_
from sqlalchemy.orm import Query, Session

from shopkeep.domain.entities import (
    ActivityCategory,
    ActivityEvent,
    ActivityFilters,
    CATEGORY_RULES,
    coerce_metadata,
)
from shopkeep.infrastructure.models import ActivityEventModel
from shopkeep.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
    start_of_window,
)


class ActivityEventRepository:
    """Append and query :class:`ActivityEvent` rows.

    Every read is predicated on ``shop_id``; there is intentionally no update or
    delete helper because events are immutable once written.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, event: ActivityEvent) -> ActivityEvent:
        model = ActivityEventModel(
            shop_id=event.shop_id,
            actor_id=event.actor_id,
            action=event.action,
            entity_table=event.entity_table,
            entity_id=event.entity_id,
            payload=dict(event.metadata or {}),
            old_values=event.old_values,
            new_values=event.new_values,
            occurred_at=ensure_app_naive_datetime(
                event.occurred_at or now_in_app_timezone()
            ),
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def list_recent(
        self,
        shop_id: int,
        *,
        limit: int | None = 100,
        filters: ActivityFilters | None = None,
    ) -> list[ActivityEvent]:
        """Return the newest events of ``shop_id`` matching ``filters``."""

        query = self._shop_query(shop_id)
        if filters is not None:
            query = self._apply_filters(query, filters)
        query = self._newest_first(query)
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def count_by_actions(self, shop_id: int, actions: Collection[str]) -> int:
        return (
            self._shop_query(shop_id)
            .filter(ActivityEventModel.action.in_(list(actions)))
            .count()
        )

    def list_by_actions(
        self,
        shop_id: int,
        actions: Collection[str],
        *,
        offset: int = 0,
        limit: int | None = None,
    ) -> list[ActivityEvent]:
        query = self._newest_first(
            self._shop_query(shop_id).filter(
                ActivityEventModel.action.in_(list(actions))
            )
        )
        if offset:
            query = query.offset(offset)
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def latest_for_entity(
        self,
        shop_id: int,
        *,
        entity_id: str,
        actions: Collection[str],
    ) -> ActivityEvent | None:
        """Return the newest event about ``entity_id`` among ``actions``."""

        model = (
            self._newest_first(
                self._shop_query(shop_id)
                .filter(ActivityEventModel.entity_id == str(entity_id))
                .filter(ActivityEventModel.action.in_(list(actions)))
            )
            .limit(1)
            .one_or_none()
        )
        return self._to_entity(model) if model else None

    def _shop_query(self, shop_id: int) -> Query:
        if shop_id is None:
            raise ValueError("shop_id is required to query activity events")
        return self.session.query(ActivityEventModel).filter(
            ActivityEventModel.shop_id == shop_id
        )

    @staticmethod
    def _newest_first(query: Query) -> Query:
        return query.order_by(
            ActivityEventModel.occurred_at.desc(), ActivityEventModel.id.desc()
        )

    @staticmethod
    def _apply_filters(query: Query, filters: ActivityFilters) -> Query:
        if filters.category is not None:
            query = query.filter(category_clause(filters.category))
        if filters.exclude_category is not None:
            query = query.filter(not_(category_clause(filters.exclude_category)))
        days = filters.window.days
        if days is not None:
            since = ensure_app_naive_datetime(start_of_window(days, now=filters.now))
            query = query.filter(ActivityEventModel.occurred_at >= since)
        if filters.actor_id is not None:
            query = query.filter(ActivityEventModel.actor_id == filters.actor_id)
        return query

    @staticmethod
    def _to_entity(model: ActivityEventModel) -> ActivityEvent:
        return ActivityEvent(
            id=model.id,
            shop_id=model.shop_id,
            actor_id=model.actor_id,
            action=model.action,
            entity_table=model.entity_table,
            entity_id=model.entity_id,
            metadata=coerce_metadata(model.payload),
            occurred_at=ensure_app_timezone(model.occurred_at),
            old_values=model.old_values,
            new_values=model.new_values,
        )


def category_clause(category: ActivityCategory):
    """SQL predicate equivalent to ``matches_category`` for ``category``."""

    rule = CATEGORY_RULES[category]
    conditions = [func.coalesce(ActivityEventModel.entity_table, "").in_(rule.tables)]
    conditions.extend(
        func.lower(ActivityEventModel.action).contains(keyword)
        for keyword in rule.action_keywords
    )
    return or_(*conditions)


__all__ = ["ActivityEventRepository", "category_clause"]
