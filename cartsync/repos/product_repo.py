# cartsync/repos/product_repo.py
from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from cartsync.data.database import upsert_insert
from cartsync.data.models.product import ProductModel


class ProductRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_product(self, product_id: int) -> ProductModel | None:
        return self.db.get(ProductModel, product_id)

    def list_products(self) -> list[ProductModel]:
        stmt = select(ProductModel).order_by(ProductModel.name.asc(), ProductModel.id.asc())
        return list(self.db.execute(stmt).scalars().all())

    def upsert_product(self, values: dict) -> int:
        """Insert albo pelna podmiana wiersza o tym samym id. id 0 = autoincrement."""
        if not values.get("id"):
            values = {k: v for k, v in values.items() if k != "id"}
            product = ProductModel(**values)
            self.db.add(product)
            self.db.flush()
            return product.id

        # jeden statement, bez SELECT przed zapisem
        stmt = upsert_insert(self.db, ProductModel).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=[ProductModel.id],
            set_={key: stmt.excluded[key] for key in values if key != "id"},
        )
        self.db.execute(stmt)
        return values["id"]

    def update_product(self, values: dict) -> ProductModel | None:
        product = self.get_product(values["id"])
        if not product:
            return None

        for key, value in values.items():
            setattr(product, key, value)
        return product

    def delete_product(self, product_id: int) -> int:
        res = self.db.execute(delete(ProductModel).where(ProductModel.id == product_id))
        return res.rowcount

    def delete_all(self) -> int:
        res = self.db.execute(delete(ProductModel))
        return res.rowcount

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
