"""Category model for the product catalog."""

from typing import TYPE_CHECKING

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from entitygate.core.database import Base

if TYPE_CHECKING:
    from entitygate.models.product import Product


class Category(Base):
    """Catalog category.

    Attributes:
        id: Integer identity primary key
        name: Display name (e.g. 'Electronics')
        description: Free-form description
    """

    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    name: Mapped[str | None] = mapped_column(String(255), nullable=True)

    description: Mapped[str | None] = mapped_column(String(1024), nullable=True)

    products: Mapped[list["Product"]] = relationship(
        "Product",
        back_populates="category",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Category(id={self.id!r}, name={self.name!r})>"
