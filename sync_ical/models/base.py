from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    All calendar-sync tables live in the same schema and share this metadata,
    which Alembic uses for autogeneration.
    """

    pass
