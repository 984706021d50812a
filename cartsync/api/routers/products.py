#cartsync/api/routers/products.py
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from fastapi.responses import StreamingResponse

from cartsync.api.deps import get_catalog_projection, get_catalog_service
from cartsync.domain.schemas import Product, ProductCreatedOut, ProductIn
from cartsync.services.catalog_service import CatalogService
from cartsync.services.projection import CatalogProjection

router = APIRouter(prefix="/products", tags=["products"])


@router.get("/", response_model=List[Product])
def list_products(
    category: Optional[str] = Query(None),
    svc: CatalogService = Depends(get_catalog_service),
):
    if category:
        return next(svc.list_by_category(category))
    return next(svc.list_products())


@router.get("/stream")
async def stream_catalog(
    q: Optional[str] = Query(None),
    category: Optional[str] = Query(None),
    projection: CatalogProjection = Depends(get_catalog_projection),
):
    async def states():
        async for state in projection.awatch(query=q, category=category):
            yield state.model_dump_json() + "\n"

    return StreamingResponse(states(), media_type="application/x-ndjson")


@router.get("/{product_id}", response_model=Product)
def get_product(product_id: int, svc: CatalogService = Depends(get_catalog_service)):
    product = svc.get_by_id(product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Producto no encontrado")
    return product


@router.post("/", response_model=ProductCreatedOut, status_code=201)
def create_product(payload: ProductIn, svc: CatalogService = Depends(get_catalog_service)):
    return {"id": svc.create(payload.to_product())}


@router.put("/{product_id}", status_code=204)
def update_product(
    product_id: int,
    payload: ProductIn,
    svc: CatalogService = Depends(get_catalog_service),
):
    svc.update(payload.to_product(product_id))
    return Response(status_code=204)


@router.delete("/{product_id}", status_code=204)
def delete_product(product_id: int, svc: CatalogService = Depends(get_catalog_service)):
    # API albo cache - produkt nieobecny lokalnie tez da sie usunac zdalnie
    product = svc.get_by_id(product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Producto no encontrado")
    svc.delete(product)
    return Response(status_code=204)


@router.delete("/", status_code=204)
def delete_all_products(svc: CatalogService = Depends(get_catalog_service)):
    svc.delete_all()
    return Response(status_code=204)
