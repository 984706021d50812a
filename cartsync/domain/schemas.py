# cartsync/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict, computed_field
from typing import List, Optional
from decimal import Decimal

from cartsync.domain.images import resolve_image

DEFAULT_NAME = "Sin nombre"
DEFAULT_DESCRIPTION = "Sin descripción"
DEFAULT_CATEGORY = "General"


class Product(BaseModel):
    """Produkt z katalogu (id 0 = jeszcze nie zapisany)."""

    id: int = Field(0, ge=0)
    name: str
    description: str
    price: Decimal = Field(Decimal("0.00"), ge=0)
    image_ref: str = ""
    category: str = DEFAULT_CATEGORY
    stock: int = Field(0, ge=0)

    model_config = ConfigDict(from_attributes=True)

    @computed_field
    @property
    def has_stock(self) -> bool:
        return self.stock > 0

    @computed_field
    @property
    def image_url(self) -> str:
        return resolve_image(self.image_ref)

    def formatted_price(self) -> str:
        # $25.000 - kropka jako separator tysiecy
        return "$" + f"{int(self.price):,}".replace(",", ".")


class ProductRecord(BaseModel):
    """Rekord produktu w formacie zdalnego API (hiszpanskie klucze)."""

    id: Optional[int] = None
    name: Optional[str] = Field(None, alias="nombre")
    description: Optional[str] = Field(None, alias="descripcion")
    price: Optional[Decimal] = Field(None, alias="precio")
    image_ref: Optional[str] = Field(None, alias="imagen")
    category: Optional[str] = Field(None, alias="categoria_nombre")
    stock: Optional[int] = None

    model_config = ConfigDict(populate_by_name=True)

    def to_product(self) -> Product:
        return Product(
            id=self.id or 0,
            name=self.name if self.name is not None else DEFAULT_NAME,
            description=self.description if self.description is not None else DEFAULT_DESCRIPTION,
            price=self.price if self.price is not None else Decimal("0.00"),
            image_ref=self.image_ref or "",
            category=self.category if self.category is not None else DEFAULT_CATEGORY,
            stock=self.stock or 0,
        )

    @classmethod
    def from_product(cls, product: Product) -> "ProductRecord":
        return cls(
            id=product.id,
            name=product.name,
            description=product.description,
            price=product.price,
            image_ref=product.image_ref,
            category=product.category,
            stock=product.stock,
        )

    def to_payload(self, include_id: bool = True) -> dict:
        data = self.model_dump(by_alias=True, exclude=None if include_id else {"id"})
        if data.get("precio") is not None:
            data["precio"] = float(data["precio"])
        return data


class CartLine(BaseModel):
    """Pozycja koszyka ze snapshotem danych produktu z chwili dodania."""

    id: int
    product_id: int
    name: str
    description: str
    price: Decimal
    image_ref: str
    category: str
    stock: int
    quantity: int = Field(..., ge=1)

    model_config = ConfigDict(from_attributes=True)

    @computed_field
    @property
    def subtotal(self) -> Decimal:
        return self.price * self.quantity

    @computed_field
    @property
    def image_url(self) -> str:
        return resolve_image(self.image_ref)

    def to_product(self) -> Product:
        return Product(
            id=self.product_id,
            name=self.name,
            description=self.description,
            price=self.price,
            image_ref=self.image_ref,
            category=self.category,
            stock=self.stock,
        )


class Cart(BaseModel):
    lines: List[CartLine] = Field(default_factory=list)

    @computed_field
    @property
    def total_items(self) -> int:
        return sum(line.quantity for line in self.lines)

    @computed_field
    @property
    def total_price(self) -> Decimal:
        return sum((line.subtotal for line in self.lines), Decimal("0.00"))

    @computed_field
    @property
    def is_empty(self) -> bool:
        return not self.lines


class CatalogState(BaseModel):
    """Stan widoku katalogu: ladowanie / lista / blad."""

    is_loading: bool = False
    products: List[Product] = Field(default_factory=list)
    error: Optional[str] = None

    @computed_field
    @property
    def has_products(self) -> bool:
        return bool(self.products)

    @computed_field
    @property
    def categories(self) -> List[str]:
        return sorted({p.category for p in self.products})


# =====================================================
# HTTP
# =====================================================
class ProductIn(BaseModel):
    """Schema dla tworzenia / edycji produktu."""

    name: str = Field(..., min_length=1)
    description: str = ""
    price: Decimal = Field(Decimal("0.00"), ge=0)
    image_ref: str = ""
    category: str = DEFAULT_CATEGORY
    stock: int = Field(0, ge=0)

    def to_product(self, product_id: int = 0) -> Product:
        return Product(id=product_id, **self.model_dump())


class ProductCreatedOut(BaseModel):
    id: int


class ItemIn(BaseModel):
    """Schema dla dodawania produktu do koszyka."""

    product_id: int = Field(..., gt=0, description="ID produktu (musi być > 0)")
    quantity: int = Field(1, description="Ilość produktu")


class QuantityIn(BaseModel):
    """Nowa ilosc; <= 0 usuwa pozycje."""

    quantity: int
