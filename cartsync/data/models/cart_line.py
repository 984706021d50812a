from sqlalchemy import CheckConstraint, Column, Integer, Numeric, String, Text

from cartsync.data.database import Base


class CartLineModel(Base):
    __tablename__ = "cart_lines"

    # surrogate key, niezalezny od product_id
    id = Column(Integer, primary_key=True, autoincrement=True)
    product_id = Column(Integer, nullable=False, unique=True)

    # snapshot produktu z chwili pierwszego dodania
    name = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    price = Column(Numeric(12, 2), nullable=False)
    image_ref = Column(String, nullable=False)
    category = Column(String, nullable=False)
    stock = Column(Integer, nullable=False)

    quantity = Column(Integer, nullable=False, default=1)

    __table_args__ = (CheckConstraint("quantity > 0", name="ck_cart_lines_quantity"),)
