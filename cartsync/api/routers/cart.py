#cartsync/api/routers/cart.py
from fastapi import APIRouter, Depends, HTTPException, Response
from fastapi.responses import StreamingResponse

from cartsync.api.deps import get_cart_projection, get_cart_service, get_catalog_service
from cartsync.domain.schemas import Cart, ItemIn, QuantityIn
from cartsync.services.cart_service import CartService
from cartsync.services.catalog_service import CatalogService
from cartsync.services.projection import CartProjection

router = APIRouter(prefix="/cart", tags=["cart"])


@router.get("/", response_model=Cart)
def get_cart(svc: CartService = Depends(get_cart_service)):
    return svc.get_summary()


@router.get("/stream")
async def stream_cart(projection: CartProjection = Depends(get_cart_projection)):
    async def lines():
        async for cart in projection.awatch():
            yield cart.model_dump_json() + "\n"

    return StreamingResponse(lines(), media_type="application/x-ndjson")


@router.post("/items", response_model=Cart)
def add_item(
    payload: ItemIn,
    svc: CartService = Depends(get_cart_service),
    catalog: CatalogService = Depends(get_catalog_service),
):
    product = catalog.get_by_id(payload.product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Producto no encontrado")

    try:
        svc.add_product(product, payload.quantity)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return svc.get_summary()


@router.put("/items/{product_id}", response_model=Cart)
def set_quantity(product_id: int, payload: QuantityIn, svc: CartService = Depends(get_cart_service)):
    svc.set_quantity(product_id, payload.quantity)
    return svc.get_summary()


@router.delete("/items/{product_id}", response_model=Cart)
def remove_item(product_id: int, svc: CartService = Depends(get_cart_service)):
    svc.remove_product(product_id)
    return svc.get_summary()


@router.delete("/", status_code=204)
def clear_cart(svc: CartService = Depends(get_cart_service)):
    svc.clear()
    return Response(status_code=204)
