#import wszystkich modeli zeby SQLAlchemy je zarejestrowal w base metadata

from cartsync.data.models.product import ProductModel
from cartsync.data.models.cart_line import CartLineModel

__all__ = ["ProductModel", "CartLineModel"]
