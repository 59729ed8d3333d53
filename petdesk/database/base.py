from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


def writable_values(model, values: dict) -> dict:
    """Drop explicit nulls aimed at NOT NULL columns; a null there means "leave as is"."""
    columns = model.__table__.columns
    return {
        key: value
        for key, value in values.items()
        if value is not None or key not in columns or columns[key].nullable
    }


__all__ = ["Base", "writable_values"]
