from decimal import Decimal
from sqlalchemy import Integer, Numeric, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

DEFAULT_DESCRIPTION = "--"

class Base(DeclarativeBase):
    pass

class Product(Base):
    __tablename__ = "products"
    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(
        String(1000), nullable=False, default=DEFAULT_DESCRIPTION, server_default=DEFAULT_DESCRIPTION
    )
    price: Mapped[Decimal] = mapped_column(Numeric(18, 2), nullable=False)
    stock: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    def __repr__(self):
        return f"<Product id={self.id} name={self.name!r} price={self.price} stock={self.stock}>"
