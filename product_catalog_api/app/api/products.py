"""
Product endpoints.

These routes expose the CRUD API for products under
``/api/products``.  Handlers validate the request shape, call the
``ProductService`` held on the application state and wrap the result
in the ``{"status": "success", ...}`` envelope.  Failures are raised
as :class:`~product_catalog_api.app.core.errors.AppError` and rendered
by the central error mapper; no handler builds an error response
itself.
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Query, Request, status

from product_catalog_api.app.core.errors import AppError
from product_catalog_api.app.schemas.product import (
    MessageResponse,
    ProductCreate,
    ProductListResponse,
    ProductResponse,
)
from product_catalog_api.app.services.product_service import ProductService

router = APIRouter()


def get_product_service(request: Request) -> ProductService:
    return request.app.state.product_service


def _require_id(product_id: str) -> str:
    if not product_id or not product_id.strip():
        raise AppError.bad_request("Product ID is required")
    return product_id


@router.get("", response_model=ProductListResponse)
def list_products(
    name: Optional[str] = Query(None, description="Case-insensitive substring of the product name"),
    cost: Optional[float] = Query(None, description="Unit cost bound"),
    costOp: Optional[str] = Query(None, description="gt (default), gte, lt or lte"),
    sales: Optional[float] = Query(None, description="Total sales bound"),
    salesOp: Optional[str] = Query(None, description="gt (default), gte, lt or lte"),
    page: Optional[str] = Query(None, description="Accepted for compatibility; not applied"),
    limit: Optional[str] = Query(None, description="Accepted for compatibility; not applied"),
    service: ProductService = Depends(get_product_service),
) -> Dict[str, Any]:
    """List products.

    - **name** — search by name; takes priority over the numeric filters.
    - **cost**/**costOp**, **sales**/**salesOp** — filter by unit cost
      and/or total sales.
    - Without any of these, every product is returned.
    """
    if name:
        data = service.search_by_name(name)
    elif cost is not None or sales is not None:
        try:
            data = service.filter_by_cost_and_sales(
                cost=cost, cost_op=costOp, sales=sales, sales_op=salesOp
            )
        except ValueError as e:
            raise AppError.bad_request(str(e)) from e
    else:
        data = service.get_all()

    return {"status": "success", "dataCount": len(data), "data": data}


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
def add_product(
    product_in: ProductCreate,
    service: ProductService = Depends(get_product_service),
) -> Dict[str, Any]:
    """Create a product.  All six fields are required."""
    if not product_in.name:
        raise AppError.bad_request("All fields are required")

    product = service.create(**product_in.model_dump())
    if not product:
        raise AppError.bad_request(
            "Failed to create product, please check that product does not already exist"
        )
    return {"status": "success", "data": product}


@router.get("/{product_id}", response_model=ProductResponse)
def get_product(
    product_id: str,
    service: ProductService = Depends(get_product_service),
) -> Dict[str, Any]:
    """Retrieve a single product.  Returns 404 if it does not exist."""
    product = service.get_by_id(_require_id(product_id))
    if product is None:
        raise AppError.not_found("Product not found")
    return {"status": "success", "data": product}


@router.put("/{product_id}", response_model=ProductResponse)
def update_product(
    product_id: str,
    updates: Optional[Dict[str, Any]] = Body(None),
    service: ProductService = Depends(get_product_service),
) -> Dict[str, Any]:
    """Merge the request body into an existing product.

    Fields are not validated; any key in the body replaces or extends
    the stored product, except ``id``.
    """
    product = service.update_by_id(_require_id(product_id), updates or {})
    if product is None:
        raise AppError.bad_request("Failed to update product")
    return {"status": "success", "data": product}


@router.delete("/{product_id}", response_model=MessageResponse)
def delete_product(
    product_id: str,
    service: ProductService = Depends(get_product_service),
) -> Dict[str, Any]:
    """Delete a product."""
    if not service.delete_by_id(_require_id(product_id)):
        raise AppError.bad_request("Failed to delete product")
    return {"status": "success", "data": {"message": "Product deleted successfully"}}
