"""Product model for the product catalog.

Every product belongs to a category. The reference from category_id to
categories.id is a foreign key enforced by the datastore.
"""

from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from entitygate.core.database import Base

if TYPE_CHECKING:
    from entitygate.models.category import Category


class Product(Base):
    """Catalog product.

    Attributes:
        id: Integer identity primary key
        category_id: Owning category (FK to categories.id)
        name: Product name
        description: Free-form description
        price: Unit price
    """

    __tablename__ = "products"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    category_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("categories.id"),
        nullable=False,
        index=True,
    )

    name: Mapped[str | None] = mapped_column(String(255), nullable=True)

    description: Mapped[str | None] = mapped_column(String(1024), nullable=True)

    price: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False)

    category: Mapped["Category"] = relationship(
        "Category",
        back_populates="products",
    )

    def __repr__(self) -> str:
        return f"<Product(id={self.id!r}, name={self.name!r}, price={self.price!r})>"
