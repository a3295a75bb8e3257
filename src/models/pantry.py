"""Pantry item model for tracking what a household has at home."""

from sqlalchemy import CheckConstraint, Column, Date, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from src.database import Base
from src.models.mixins import TimestampMixin


class PantryItem(Base, TimestampMixin):
    """Physical good tracked by a household."""

    __tablename__ = "pantry_items"
    __table_args__ = (
        CheckConstraint(
            "completion IS NULL OR (completion >= 0 AND completion <= 100)",
            name="ck_pantry_items_completion_range",
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    household_id = Column(
        Integer, ForeignKey("households.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name = Column(String(255), nullable=False)
    brand = Column(String(255), nullable=True)
    category = Column(String(100), nullable=True)
    quantity = Column(Integer, nullable=False, default=1)
    # Percent remaining: 100 or null means unopened, 0 means used up
    completion = Column(Integer, nullable=True, default=100)
    expiry = Column(Date, nullable=True)
    purchase_date = Column(Date, nullable=True)
    location = Column(String(100), nullable=True)  # Storage area name, see services/storage_areas
    tags = Column(String(500), nullable=True)
    notes = Column(Text, nullable=True)
    barcode = Column(String(64), nullable=True, index=True)
    image = Column(String(1024), nullable=True)  # URL in the external blob store
    created_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    scanned_at = Column(DateTime(timezone=True), nullable=True)

    # Relationships
    household = relationship("Household", back_populates="pantry_items")
    creator = relationship("User")
    shopping_list_entry = relationship(
        "ShoppingListEntry",
        back_populates="item",
        uselist=False,
        cascade="all, delete-orphan",
    )
