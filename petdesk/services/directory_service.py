import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from petdesk.core.errors import NotFoundError
from petdesk.database.base import writable_values
from petdesk.models.directory import Category, Customer, Supplier

logger = logging.getLogger(__name__)


def list_records(db: Session, model) -> list:
    return list(db.execute(select(model).order_by(model.id)).scalars().all())


def get_record(db: Session, model, record_id: int):
    record = db.get(model, record_id)
    if record is None:
        raise NotFoundError(model.__name__, record_id)
    return record


def create_record(db: Session, model, values: dict):
    if model is Category:
        _validate_parent(db, None, values.get("parent_id"))
    record = model(**values)
    db.add(record)
    db.commit()
    db.refresh(record)
    logger.info("%s %s created", model.__name__, record.id)
    return record


def update_record(db: Session, record, values: dict):
    values = writable_values(type(record), values)
    if isinstance(record, Category) and "parent_id" in values:
        _validate_parent(db, record.id, values["parent_id"])
    for key, value in values.items():
        setattr(record, key, value)
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
    db.refresh(record)
    return record


def delete_record(db: Session, record) -> None:
    if isinstance(record, Category):
        children = db.execute(select(Category).where(Category.parent_id == record.id)).scalars()
        for child in children:
            child.parent_id = record.parent_id
    db.delete(record)
    db.commit()
    logger.info("%s %s deleted", type(record).__name__, record.id)


def _validate_parent(db: Session, category_id, parent_id) -> None:
    if parent_id is None:
        return
    if parent_id == category_id:
        raise ValueError("A category cannot be its own parent.")
    parents = {row.id: row.parent_id for row in db.execute(select(Category.id, Category.parent_id))}
    if parent_id not in parents:
        raise NotFoundError("Category", parent_id)
    seen = set()
    cursor = parent_id
    while cursor is not None and cursor not in seen:
        if cursor == category_id:
            raise ValueError("Category {} cannot be moved under its own descendant.".format(category_id))
        seen.add(cursor)
        cursor = parents.get(cursor)


def category_tree(db: Session) -> list[dict]:
    categories = list_records(db, Category)
    known = {category.id for category in categories}
    children = {}
    for category in categories:
        parent_id = category.parent_id if category.parent_id in known else None
        children.setdefault(parent_id, []).append(category)

    def build(parent_id, level):
        nodes = []
        for category in children.get(parent_id, []):
            nodes.append(
                {
                    "id": category.id,
                    "name_ru": category.name_ru,
                    "name_uk": category.name_uk,
                    "parent_id": category.parent_id,
                    "level": level,
                    "children": build(category.id, level + 1),
                }
            )
        return nodes

    return build(None, 0)


__all__ = [
    "category_tree",
    "create_record",
    "delete_record",
    "get_record",
    "list_records",
    "update_record",
]
