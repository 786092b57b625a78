"""Services layer - Business logic and orchestration.

Services coordinate between the API layer and repositories. They contain
no direct database access - that's delegated to repositories.
"""

from entitygate.services.catalog import CategoryService, ProductService
from entitygate.services.solution import (
    SolutionService,
    SolutionServiceError,
    SolutionValidationError,
)

__all__ = [
    "CategoryService",
    "ProductService",
    "SolutionService",
    "SolutionServiceError",
    "SolutionValidationError",
]
