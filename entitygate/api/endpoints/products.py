"""Products API endpoints.

Provides CRUD operations for catalog products:
- GET /api/products - List all products
- POST /api/products - Create a new product
- GET /api/products/{product_id} - Get a product by ID
- PUT /api/products/{product_id} - Replace a product
- DELETE /api/products/{product_id} - Delete a product
"""

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from entitygate.api.responses import (
    entity_alert_headers,
    error_response,
    get_request_id,
)
from entitygate.core.database import get_session
from entitygate.core.logging import get_logger
from entitygate.repositories.base import ConstraintViolationError, EntityNotFoundError
from entitygate.schemas.product import ProductCreate, ProductResponse, ProductUpdate
from entitygate.services.catalog import ProductService

logger = get_logger(__name__)

router = APIRouter()

ENTITY_NAME = "product"


def _not_found(request: Request, e: EntityNotFoundError) -> JSONResponse:
    logger.warning(
        "Product not found",
        extra={"request_id": get_request_id(request), "product_id": e.entity_id},
    )
    return error_response(request, status.HTTP_404_NOT_FOUND, "NOT_FOUND", str(e))


def _constraint_violation(
    request: Request, e: ConstraintViolationError
) -> JSONResponse:
    logger.warning(
        "Product constraint violation",
        extra={
            "request_id": get_request_id(request),
            "operation": e.operation,
            "error_message": e.message,
        },
    )
    return error_response(
        request,
        status.HTTP_400_BAD_REQUEST,
        "CONSTRAINT_VIOLATION",
        str(e),
    )


@router.get(
    "",
    response_model=list[ProductResponse],
    summary="List all products",
)
async def list_products(
    session: AsyncSession = Depends(get_session),
) -> list[ProductResponse]:
    """List all products."""
    products = await ProductService(session).list_products()
    return [ProductResponse.model_validate(p) for p in products]


@router.post(
    "",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a product",
)
async def create_product(
    request: Request,
    response: Response,
    data: ProductCreate,
    session: AsyncSession = Depends(get_session),
) -> ProductResponse | JSONResponse:
    """Create a new product."""
    logger.debug(
        "Create product request",
        extra={
            "request_id": get_request_id(request),
            "category_id": data.category_id,
            "product_name": data.name,
        },
    )

    try:
        product = await ProductService(session).create_product(data)
    except ConstraintViolationError as e:
        return _constraint_violation(request, e)

    response.headers["Location"] = f"/api/products/{product.id}"
    response.headers.update(entity_alert_headers(ENTITY_NAME, "created", product.id))
    return ProductResponse.model_validate(product)


@router.get(
    "/{product_id}",
    response_model=ProductResponse,
    summary="Get a product",
)
async def get_product(
    request: Request,
    product_id: int,
    session: AsyncSession = Depends(get_session),
) -> ProductResponse | JSONResponse:
    """Get a product by ID."""
    try:
        product = await ProductService(session).get_product(product_id)
    except EntityNotFoundError as e:
        return _not_found(request, e)
    return ProductResponse.model_validate(product)


@router.put(
    "/{product_id}",
    response_model=ProductResponse,
    summary="Replace a product",
)
async def update_product(
    request: Request,
    response: Response,
    product_id: int,
    data: ProductUpdate,
    session: AsyncSession = Depends(get_session),
) -> ProductResponse | JSONResponse:
    """Replace every field of an existing product."""
    logger.debug(
        "Update product request",
        extra={"request_id": get_request_id(request), "product_id": product_id},
    )

    try:
        product = await ProductService(session).update_product(product_id, data)
    except EntityNotFoundError as e:
        return _not_found(request, e)
    except ConstraintViolationError as e:
        return _constraint_violation(request, e)

    response.headers.update(entity_alert_headers(ENTITY_NAME, "updated", product_id))
    return ProductResponse.model_validate(product)


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a product",
)
async def delete_product(
    request: Request,
    product_id: int,
    session: AsyncSession = Depends(get_session),
) -> Response:
    """Delete a product."""
    try:
        await ProductService(session).delete_product(product_id)
    except EntityNotFoundError as e:
        return _not_found(request, e)
    return Response(
        status_code=status.HTTP_204_NO_CONTENT,
        headers=entity_alert_headers(ENTITY_NAME, "deleted", product_id),
    )
