"""
Error Handling Route
Translates exceptions raised by API handlers into JSON error responses in one
place instead of per-endpoint try/except blocks.
"""

from typing import Callable

from fastapi import HTTPException, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.routing import APIRoute

from src.utils.exceptions import NotFoundError
from src.utils.logger import setup_logger

logger = setup_logger()


def failure_message(summary: str) -> str:
    """'Retrieve expenses' -> 'Failed to retrieve expenses'"""
    if not summary:
        return "Failed to process request"
    return f"Failed to {summary[0].lower()}{summary[1:]}"


class ApiErrorRoute(APIRoute):
    """
    APIRoute that maps handler exceptions to responses

    - NotFoundError -> 404 {"error": "<Entity> not found"}
    - any other exception -> 500 {"error": "Failed to <summary>", "details": str(exc)}

    HTTPException and request validation errors keep FastAPI's handling.
    """

    def get_route_handler(self) -> Callable:
        original_route_handler = super().get_route_handler()
        operation = failure_message(self.summary)

        async def error_mapping_route_handler(request: Request) -> Response:
            try:
                return await original_route_handler(request)
            except (HTTPException, RequestValidationError):
                raise
            except NotFoundError as e:
                logger.info(f"{request.method} {request.url.path}: {e}")
                return JSONResponse(
                    status_code=status.HTTP_404_NOT_FOUND,
                    content={"error": str(e)}
                )
            except Exception as e:
                logger.exception(f"{operation} ({request.method} {request.url.path})")
                return JSONResponse(
                    status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                    content={"error": operation, "details": str(e)}
                )

        return error_mapping_route_handler
