"""Timestamp columns shared by the models."""

from sqlalchemy import Column, DateTime, func


class CreatedAtMixin:
    """Insert time, for rows that are never edited in place."""

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)


class TimestampMixin(CreatedAtMixin):
    """Insert time plus last-update time."""

    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
