# cartsync/repos/cart_repo.py
from decimal import Decimal

from sqlalchemy import delete, func, select, update
from sqlalchemy.orm import Session

from cartsync.data.database import upsert_insert
from cartsync.data.models.cart_line import CartLineModel


class CartRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_lines(self) -> list[CartLineModel]:
        stmt = select(CartLineModel).order_by(CartLineModel.id.asc())
        return list(self.db.execute(stmt).scalars().all())

    def get_line(self, product_id: int) -> CartLineModel | None:
        stmt = select(CartLineModel).where(CartLineModel.product_id == product_id)
        return self.db.execute(stmt).scalar_one_or_none()

    def add_quantity(self, snapshot: dict, quantity: int):
        """
        Atomowe increment-or-insert:
        INSERT ... ON CONFLICT (product_id) DO UPDATE SET quantity = quantity + excluded.quantity
        Snapshot produktu zostaje z pierwszego dodania.
        """
        stmt = upsert_insert(self.db, CartLineModel).values(**snapshot, quantity=quantity)
        stmt = stmt.on_conflict_do_update(
            index_elements=[CartLineModel.product_id],
            set_={"quantity": CartLineModel.quantity + stmt.excluded.quantity},
        )
        self.db.execute(stmt)

    def update_quantity(self, product_id: int, quantity: int) -> int:
        res = self.db.execute(
            update(CartLineModel)
            .where(CartLineModel.product_id == product_id)
            .values(quantity=quantity)
        )
        return res.rowcount

    def delete_line(self, product_id: int) -> int:
        res = self.db.execute(delete(CartLineModel).where(CartLineModel.product_id == product_id))
        return res.rowcount

    def delete_all(self) -> int:
        res = self.db.execute(delete(CartLineModel))
        return res.rowcount

    def total(self) -> Decimal:
        value = self.db.execute(
            select(func.sum(CartLineModel.price * CartLineModel.quantity))
        ).scalar()
        # SUM po pustej tabeli = NULL
        if value is None:
            return Decimal("0.00")
        return Decimal(str(value)).quantize(Decimal("0.01"))

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
