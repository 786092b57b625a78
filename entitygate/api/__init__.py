"""API router and endpoint organization."""

from fastapi import APIRouter

from entitygate.api.endpoints import categories, products, solutions

router = APIRouter(prefix="/api")

router.include_router(solutions.router, prefix="/solutions", tags=["Solutions"])
router.include_router(products.router, prefix="/products", tags=["Products"])
router.include_router(categories.router, prefix="/categories", tags=["Categories"])
