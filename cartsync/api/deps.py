# cartsync/api/deps.py
from fastapi import Request

from cartsync.services.cart_service import CartService
from cartsync.services.catalog_service import CatalogService
from cartsync.services.projection import CartProjection, CatalogProjection


#serwisy zbudowane raz w create_app, tu tylko wyciagamy je ze state
def get_catalog_service(request: Request) -> CatalogService:
    return request.app.state.catalog_service


def get_cart_service(request: Request) -> CartService:
    return request.app.state.cart_service


def get_cart_projection(request: Request) -> CartProjection:
    return request.app.state.cart_projection


def get_catalog_projection(request: Request) -> CatalogProjection:
    return request.app.state.catalog_projection
