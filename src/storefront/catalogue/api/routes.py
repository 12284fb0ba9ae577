"""FastAPI endpoints for the product catalogue and image uploads."""

import json

from fastapi import APIRouter, Depends, File, Query, Response, UploadFile
from protean.utils.globals import current_domain

from storefront.api.schemas import PageResponse
from storefront.api.security import Principal, require_admin
from storefront.catalogue.api.schemas import (
    CreateProductRequest,
    ProductResponse,
    UpdateProductRequest,
    UploadResponse,
)
from storefront.catalogue.management import CreateProduct, DeleteProduct, UpdateProduct
from storefront.catalogue.queries import get_product, list_products, search_products
from storefront.catalogue.storage import IncomingFile, store_images

product_router = APIRouter(prefix="/api/products", tags=["products"])
upload_router = APIRouter(prefix="/api/upload", tags=["upload"])


# --- Product endpoints ---


@product_router.get("", response_model=PageResponse[ProductResponse])
async def list_all_products(
    page: int = Query(0, ge=0),
    size: int = Query(10, ge=1, le=100),
    sort: str | None = None,
) -> PageResponse[ProductResponse]:
    result = list_products(page=page, size=size, sort=sort)
    return PageResponse[ProductResponse].of(result, ProductResponse.from_product)


@product_router.get("/search", response_model=PageResponse[ProductResponse])
async def search(
    page: int = Query(0, ge=0),
    size: int = Query(10, ge=1, le=100),
    sort: str | None = None,
    category: str | None = None,
    brand: str | None = None,
    name: str | None = None,
    min_price: float | None = Query(None, ge=0),
    max_price: float | None = Query(None, ge=0),
) -> PageResponse[ProductResponse]:
    result = search_products(
        page=page,
        size=size,
        sort=sort,
        category=category,
        brand=brand,
        name=name,
        min_price=min_price,
        max_price=max_price,
    )
    return PageResponse[ProductResponse].of(result, ProductResponse.from_product)


@product_router.get("/{product_id}", response_model=ProductResponse)
async def get_product_by_id(product_id: str) -> ProductResponse:
    return ProductResponse.from_product(get_product(product_id))


@product_router.post("", status_code=201, response_model=ProductResponse)
async def create_product(body: CreateProductRequest, principal: Principal = Depends(require_admin)) -> ProductResponse:
    command = CreateProduct(
        name=body.name,
        price=body.price,
        brand=body.brand,
        category=body.category,
        short_description=body.short_description,
        detailed_description=body.detailed_description,
        views=body.views,
        sold_quantity=body.sold_quantity,
        image_urls=json.dumps(body.images),
    )
    product_id = current_domain.process(command, asynchronous=False)
    return ProductResponse.from_product(get_product(product_id))


@product_router.put("/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: str,
    body: UpdateProductRequest,
    principal: Principal = Depends(require_admin),
) -> ProductResponse:
    command = UpdateProduct(
        product_id=product_id,
        name=body.name,
        price=body.price,
        brand=body.brand,
        category=body.category,
        short_description=body.short_description,
        detailed_description=body.detailed_description,
        views=body.views,
        sold_quantity=body.sold_quantity,
        image_urls=json.dumps(body.images) if body.images is not None else None,
    )
    current_domain.process(command, asynchronous=False)
    return ProductResponse.from_product(get_product(product_id))


@product_router.delete("/{product_id}", status_code=204)
async def delete_product(product_id: str, principal: Principal = Depends(require_admin)) -> Response:
    current_domain.process(DeleteProduct(product_id=product_id), asynchronous=False)
    return Response(status_code=204)


# --- Uploads ---


@upload_router.post("/img", status_code=201, response_model=UploadResponse)
async def upload_images(
    files: list[UploadFile] | None = File(None),
    principal: Principal = Depends(require_admin),
) -> UploadResponse:
    incoming = [
        IncomingFile(filename=file.filename or "image", content_type=file.content_type, data=await file.read())
        for file in files or []
    ]
    return UploadResponse(uploaded=store_images(incoming))
