"""Categories API endpoints.

Categories are seeded with the schema and only change through an explicit
update:
- GET /api/categories - List all categories
- GET /api/categories/{category_id} - Get a category by ID
- PUT /api/categories/{category_id} - Replace a category's fields
- GET /api/categories/{category_id}/products - List the products of a category
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
from entitygate.repositories.base import EntityNotFoundError
from entitygate.schemas.category import CategoryResponse, CategoryUpdate
from entitygate.schemas.product import ProductResponse
from entitygate.services.catalog import CategoryService, ProductService

logger = get_logger(__name__)

router = APIRouter()


def _not_found(request: Request, e: EntityNotFoundError) -> JSONResponse:
    logger.warning(
        "Category not found",
        extra={"request_id": get_request_id(request), "category_id": e.entity_id},
    )
    return error_response(request, status.HTTP_404_NOT_FOUND, "NOT_FOUND", str(e))


@router.get(
    "",
    response_model=list[CategoryResponse],
    summary="List all categories",
)
async def list_categories(
    session: AsyncSession = Depends(get_session),
) -> list[CategoryResponse]:
    """List all categories."""
    categories = await CategoryService(session).list_categories()
    return [CategoryResponse.model_validate(c) for c in categories]


@router.get(
    "/{category_id}",
    response_model=CategoryResponse,
    summary="Get a category",
)
async def get_category(
    request: Request,
    category_id: int,
    session: AsyncSession = Depends(get_session),
) -> CategoryResponse | JSONResponse:
    """Get a category by ID."""
    try:
        category = await CategoryService(session).get_category(category_id)
    except EntityNotFoundError as e:
        return _not_found(request, e)
    return CategoryResponse.model_validate(category)


@router.put(
    "/{category_id}",
    response_model=CategoryResponse,
    summary="Update a category",
)
async def update_category(
    request: Request,
    response: Response,
    category_id: int,
    data: CategoryUpdate,
    session: AsyncSession = Depends(get_session),
) -> CategoryResponse | JSONResponse:
    """Replace a category's name and description."""
    logger.debug(
        "Update category request",
        extra={"request_id": get_request_id(request), "category_id": category_id},
    )

    try:
        category = await CategoryService(session).update_category(category_id, data)
    except EntityNotFoundError as e:
        return _not_found(request, e)

    response.headers.update(entity_alert_headers("category", "updated", category_id))
    return CategoryResponse.model_validate(category)


@router.get(
    "/{category_id}/products",
    response_model=list[ProductResponse],
    summary="List products in a category",
)
async def list_category_products(
    request: Request,
    category_id: int,
    session: AsyncSession = Depends(get_session),
) -> list[ProductResponse] | JSONResponse:
    """List the products of one category."""
    try:
        products = await ProductService(session).list_products_for_category(
            category_id
        )
    except EntityNotFoundError as e:
        return _not_found(request, e)
    return [ProductResponse.model_validate(p) for p in products]
