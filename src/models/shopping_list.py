"""Shopping list entry model."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, func
from sqlalchemy.orm import relationship

from src.database import Base


class ShoppingListEntry(Base):
    """Request to repurchase a specific pantry item on the next trip."""

    __tablename__ = "shopping_list"

    id = Column(Integer, primary_key=True, index=True)
    item_id = Column(
        Integer,
        ForeignKey("pantry_items.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        index=True,
    )
    added_by = Column(Integer, ForeignKey("users.id"), nullable=False)
    added_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    # Relationships
    item = relationship("PantryItem", back_populates="shopping_list_entry")
