"""
Ordered child collections: cities within a trip, activities within a city.

Sibling `order` values form a strict total order. Appends go to the end
without renumbering; deletes leave gaps; a reorder rewrites every sibling to
0..n-1 in a single commit.
"""
import logging
from typing import List, Union

from sqlalchemy import func
from sqlalchemy.orm import Session

from globetrotter.core.errors import InvalidReorderError
from globetrotter.db.session import transaction
from globetrotter.models.activity import Activity
from globetrotter.models.city import City
from globetrotter.models.trip import Trip

logger = logging.getLogger(__name__)

OrderedChild = Union[City, Activity]

# child model -> (parent model, foreign key attribute on the child)
PARENTS = {
    City: (Trip, "trip_id"),
    Activity: (City, "city_id"),
}


def _parent_column(model):
    _, fk_name = PARENTS[model]
    return getattr(model, fk_name)


def _lock_parent(model, parent_id: int, db: Session) -> None:
    """Serialize appends under one parent; a no-op on backends without row locks."""
    parent_model, _ = PARENTS[model]
    db.query(parent_model.id).filter(parent_model.id == parent_id).with_for_update().first()


def siblings(model, parent_id: int, db: Session) -> List[OrderedChild]:
    """All children of a parent in their current order."""
    return db.query(model).filter(
        _parent_column(model) == parent_id
    ).order_by(model.order, model.id).all()


def next_order(model, parent_id: int, db: Session) -> int:
    """Order value for a new last child (0 for an empty collection)."""
    max_order = db.query(func.max(model.order)).filter(
        _parent_column(model) == parent_id
    ).scalar()
    return 0 if max_order is None else max_order + 1


def append(child: OrderedChild, db: Session) -> OrderedChild:
    """
    Place a new child after its existing siblings.

    Must run inside the caller's transaction; the child is flushed, not
    committed.
    """
    model = type(child)
    _, fk_name = PARENTS[model]
    parent_id = getattr(child, fk_name)
    _lock_parent(model, parent_id, db)
    child.order = next_order(model, parent_id, db)
    db.add(child)
    db.flush()
    return child


def reorder(model, parent_id: int, ordered_ids: List[int], db: Session) -> List[OrderedChild]:
    """
    Assign order i to the i-th id of `ordered_ids`.

    `ordered_ids` must be exactly the parent's children, each listed once.
    Anything else raises InvalidReorderError and nothing is written.
    """
    with transaction(db):
        current = db.query(model).filter(
            _parent_column(model) == parent_id
        ).with_for_update().all()
        by_id = {child.id: child for child in current}

        if len(set(ordered_ids)) != len(ordered_ids):
            logger.warning(f"Rejected reorder of {model.__name__} under {parent_id}: duplicate ids")
            raise InvalidReorderError("Reorder list contains duplicate ids")

        foreign = [child_id for child_id in ordered_ids if child_id not in by_id]
        if foreign:
            logger.warning(f"Rejected reorder of {model.__name__} under {parent_id}: foreign ids {foreign}")
            raise InvalidReorderError(
                f"{model.__name__} {foreign[0]} does not belong to parent {parent_id}"
            )

        if len(ordered_ids) != len(by_id):
            logger.warning(f"Rejected reorder of {model.__name__} under {parent_id}: incomplete list")
            raise InvalidReorderError(
                f"Reorder list has {len(ordered_ids)} ids but parent has {len(by_id)} children"
            )

        for position, child_id in enumerate(ordered_ids):
            by_id[child_id].order = position

    logger.info(f"Reordered {len(ordered_ids)} {model.__name__} rows under parent {parent_id}")
    return siblings(model, parent_id, db)


def remove(child: OrderedChild, db: Session) -> None:
    """Delete a child without renumbering the rest."""
    with transaction(db):
        db.delete(child)
