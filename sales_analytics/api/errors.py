from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from sales_analytics.core.config import settings
from sales_analytics.core.logger import get_logger
from sales_analytics.domain import AnalyticsError, ErrorKind
from sales_analytics.schemas.responses import ErrorDetail, ErrorResponse

logger = get_logger("api.errors")


def _envelope(status_code: int, code: str, message: str, details=None) -> JSONResponse:
    body = ErrorResponse(error=ErrorDetail(code=code, message=message, details=details))
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(by_alias=True, exclude_none=True),
    )


def _validation_details(errors) -> list[dict]:
    details = []
    for err in errors:
        loc = [str(part) for part in err.get("loc", ()) if part not in ("query", "body")]
        details.append({"field": ".".join(loc) or "query", "message": err.get("msg", "")})
    return details


async def analytics_error_handler(request: Request, exc: AnalyticsError) -> JSONResponse:
    logger.info(
        "request_rejected",
        extra={"path": request.url.path, "kind": exc.kind.value, "error": exc.message},
    )
    match exc.kind:
        case ErrorKind.VALIDATION | ErrorKind.INVALID_DATE_RANGE:
            return _envelope(
                status.HTTP_400_BAD_REQUEST, "VALIDATION_ERROR", exc.message, exc.details
            )
        case ErrorKind.INVALID_GRANULARITY:
            return _envelope(
                status.HTTP_400_BAD_REQUEST,
                "INVALID_AGGREGATION_LEVEL",
                exc.message,
                exc.details,
            )
        case ErrorKind.INVALID_EVENT | ErrorKind.INVALID_AGGREGATE:
            return _envelope(
                status.HTTP_500_INTERNAL_SERVER_ERROR, exc.kind.name, exc.message
            )


async def request_validation_handler(
    request: Request, exc: RequestValidationError | ValidationError
) -> JSONResponse:
    details = _validation_details(exc.errors())
    logger.info(
        "request_validation_failed",
        extra={"path": request.url.path, "details": details},
    )
    return _envelope(
        status.HTTP_400_BAD_REQUEST,
        "VALIDATION_ERROR",
        "Invalid query parameters",
        details,
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "unhandled_error",
        extra={"path": request.url.path, "error_type": type(exc).__name__, "error": str(exc)},
        exc_info=exc,
    )
    message = (
        "An unexpected error occurred"
        if settings.app_environment == "production"
        else str(exc)
    )
    return _envelope(status.HTTP_500_INTERNAL_SERVER_ERROR, "INTERNAL_SERVER_ERROR", message)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AnalyticsError, analytics_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, request_validation_handler)  # type: ignore[arg-type]
    app.add_exception_handler(ValidationError, request_validation_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_error_handler)
