# =============================================================================
# core/services/ordering_service.py - Ordered Collections
# =============================================================================
# Experience and education entries carry an integer sort_order. Display
# order is ascending sort_order, ties broken by ascending id, so repeated
# reads are stable even when values collide or have gaps.
#
# A reorder names the complete collection: the id list must contain every
# current id exactly once. The new positions (0, 1, 2, ...) are written in
# one transaction; if any write fails nothing is committed.
#
# Two concurrent reorders are not merged: the last one to commit wins.
# =============================================================================

from __future__ import annotations

import logging
from collections import Counter
from typing import Union

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from app.exceptions import InvalidOrderSetError
from core.models.ordering import CollectionKind
from core.tables import Education, Experience

logger = logging.getLogger(__name__)

OrderedEntity = Union[Experience, Education]

_TABLES: dict[CollectionKind, type[OrderedEntity]] = {
    CollectionKind.EXPERIENCES: Experience,
    CollectionKind.EDUCATION: Education,
}


class OrderingService:
    """Read and rewrite the display order of an ordered collection."""

    @staticmethod
    def table_for(kind: CollectionKind) -> type[OrderedEntity]:
        return _TABLES[CollectionKind(kind)]

    @staticmethod
    def list_items(db: Session, kind: CollectionKind) -> list[OrderedEntity]:
        """All entries in display order."""
        table = OrderingService.table_for(kind)
        return list(db.scalars(select(table).order_by(table.sort_order.asc(), table.id.asc())))

    @staticmethod
    def next_sort_order(db: Session, kind: CollectionKind) -> int:
        """Position just after the current last entry (0 for an empty list)."""
        table = OrderingService.table_for(kind)
        current = db.scalar(select(func.max(table.sort_order)))
        return 0 if current is None else current + 1

    @staticmethod
    def reorder(db: Session, kind: CollectionKind, ids: list[int]) -> list[OrderedEntity]:
        """
        Replace the whole ordering of a collection.

        Args:
            db: Database session
            kind: Which collection
            ids: Every id of the collection, in the new display order

        Returns:
            The entries in their new order

        Raises:
            InvalidOrderSetError: ids is not a permutation of the current
                ids, or an entry vanished while the reorder was running.
                Nothing is committed in either case.
        """
        kind = CollectionKind(kind)
        table = OrderingService.table_for(kind)

        # Lock the rows so a concurrent delete waits for us (no-op on SQLite)
        existing = set(db.scalars(select(table.id).with_for_update()))
        requested = set(ids)

        duplicates = sorted(item_id for item_id, count in Counter(ids).items() if count > 1)
        missing = sorted(existing - requested)
        unknown = sorted(requested - existing)

        if duplicates or missing or unknown:
            logger.info(
                f"Rejected {kind.value} reorder: missing={missing} unknown={unknown} duplicates={duplicates}"
            )
            raise InvalidOrderSetError(kind.value, missing=missing, unknown=unknown, duplicates=duplicates)

        try:
            for position, item_id in enumerate(ids):
                result = db.execute(
                    update(table)
                    .where(table.id == item_id)
                    .values(sort_order=position)
                    .execution_options(synchronize_session=False)
                )
                if result.rowcount != 1:
                    raise InvalidOrderSetError(kind.value, missing=[item_id], unknown=[], duplicates=[])
            db.commit()
        except Exception:
            db.rollback()
            raise

        # Bulk UPDATE bypassed the identity map
        db.expire_all()
        logger.info(f"Reordered {len(ids)} {kind.value}")
        return OrderingService.list_items(db, kind)
