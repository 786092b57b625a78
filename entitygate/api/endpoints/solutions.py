"""Solutions API endpoints.

REST resource for managing solutions attached to bugs:
- POST /api/solutions - Create a new solution (body must not carry an id)
- PUT /api/solutions - Update a solution (body must carry an id)
- GET /api/solutions - List all solutions
- GET /api/solutions/{solution_id} - Get a solution by ID
- DELETE /api/solutions/{solution_id} - Delete a solution (idempotent)
- GET /api/solutions/bug/{bug_id} - List the solutions of one bug
"""

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from entitygate.api.responses import (
    entity_alert_headers,
    error_response,
    failure_alert_headers,
    get_request_id,
)
from entitygate.core.database import get_session
from entitygate.core.logging import get_logger
from entitygate.repositories.base import EntityNotFoundError
from entitygate.schemas.solution import SolutionPayload, SolutionResponse
from entitygate.services.solution import SolutionService, SolutionValidationError

logger = get_logger(__name__)

router = APIRouter()

ENTITY_NAME = "solution"

NOT_FOUND_RESPONSE = {
    404: {
        "description": "Solution not found",
        "content": {
            "application/json": {
                "example": {
                    "error": "Solution not found: <id>",
                    "code": "NOT_FOUND",
                    "request_id": "<request_id>",
                }
            }
        },
    }
}


def _bad_request(request: Request, e: SolutionValidationError) -> JSONResponse:
    logger.warning(
        "Solution validation error",
        extra={
            "request_id": get_request_id(request),
            "field": e.field,
            "value": e.value,
            "reason": e.reason,
        },
    )
    return error_response(
        request,
        status.HTTP_400_BAD_REQUEST,
        "BAD_REQUEST",
        e.message,
        headers=failure_alert_headers(ENTITY_NAME, e.reason),
        reason=e.reason,
        entity=ENTITY_NAME,
    )


def _not_found(request: Request, e: EntityNotFoundError) -> JSONResponse:
    logger.warning(
        "Solution not found",
        extra={"request_id": get_request_id(request), "solution_id": e.entity_id},
    )
    return error_response(request, status.HTTP_404_NOT_FOUND, "NOT_FOUND", str(e))


@router.post(
    "",
    response_model=SolutionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a solution",
    description="Create a new solution. The body must not carry an id.",
)
async def create_solution(
    request: Request,
    response: Response,
    data: SolutionPayload,
    session: AsyncSession = Depends(get_session),
) -> SolutionResponse | JSONResponse:
    """Create a new solution."""
    logger.debug(
        "REST request to save Solution",
        extra={"request_id": get_request_id(request), "bug_id": data.bug_id},
    )

    service = SolutionService(session)
    try:
        solution = await service.create_solution(data)
    except SolutionValidationError as e:
        return _bad_request(request, e)

    response.headers["Location"] = f"/api/solutions/{solution.id}"
    response.headers.update(entity_alert_headers(ENTITY_NAME, "created", solution.id))
    return SolutionResponse.model_validate(solution)


@router.put(
    "",
    response_model=SolutionResponse,
    summary="Update a solution",
    description="Replace an existing solution. The body must carry its id.",
    responses=NOT_FOUND_RESPONSE,
)
async def update_solution(
    request: Request,
    response: Response,
    data: SolutionPayload,
    session: AsyncSession = Depends(get_session),
) -> SolutionResponse | JSONResponse:
    """Update an existing solution."""
    logger.debug(
        "REST request to update Solution",
        extra={"request_id": get_request_id(request), "solution_id": data.id},
    )

    service = SolutionService(session)
    try:
        solution = await service.update_solution(data)
    except SolutionValidationError as e:
        return _bad_request(request, e)
    except EntityNotFoundError as e:
        return _not_found(request, e)

    response.headers.update(entity_alert_headers(ENTITY_NAME, "updated", solution.id))
    return SolutionResponse.model_validate(solution)


@router.get(
    "",
    response_model=list[SolutionResponse],
    summary="List all solutions",
)
async def list_solutions(
    request: Request,
    session: AsyncSession = Depends(get_session),
) -> list[SolutionResponse]:
    """List all solutions."""
    logger.debug(
        "REST request to get all Solutions",
        extra={"request_id": get_request_id(request)},
    )

    solutions = await SolutionService(session).list_solutions()
    return [SolutionResponse.model_validate(s) for s in solutions]


@router.get(
    "/bug/{bug_id}",
    response_model=list[SolutionResponse],
    summary="List solutions for a bug",
)
async def list_solutions_for_bug(
    request: Request,
    bug_id: int,
    session: AsyncSession = Depends(get_session),
) -> list[SolutionResponse]:
    """List all solutions attached to a bug."""
    logger.debug(
        "REST request to get all Solutions for bug",
        extra={"request_id": get_request_id(request), "bug_id": bug_id},
    )

    solutions = await SolutionService(session).list_solutions_for_bug(bug_id)
    return [SolutionResponse.model_validate(s) for s in solutions]


@router.get(
    "/{solution_id}",
    response_model=SolutionResponse,
    summary="Get a solution",
    responses=NOT_FOUND_RESPONSE,
)
async def get_solution(
    request: Request,
    solution_id: int,
    session: AsyncSession = Depends(get_session),
) -> SolutionResponse | JSONResponse:
    """Get a solution by ID."""
    logger.debug(
        "REST request to get Solution",
        extra={"request_id": get_request_id(request), "solution_id": solution_id},
    )

    try:
        solution = await SolutionService(session).get_solution(solution_id)
    except EntityNotFoundError as e:
        return _not_found(request, e)
    return SolutionResponse.model_validate(solution)


@router.delete(
    "/{solution_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a solution",
    description="Delete a solution. Deleting an absent id also returns 204.",
)
async def delete_solution(
    request: Request,
    solution_id: int,
    session: AsyncSession = Depends(get_session),
) -> Response:
    """Delete a solution."""
    logger.debug(
        "REST request to delete Solution",
        extra={"request_id": get_request_id(request), "solution_id": solution_id},
    )

    await SolutionService(session).delete_solution(solution_id)
    return Response(
        status_code=status.HTTP_204_NO_CONTENT,
        headers=entity_alert_headers(ENTITY_NAME, "deleted", solution_id),
    )
