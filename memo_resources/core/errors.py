from fastapi import Request, status
from fastapi.responses import JSONResponse


class ServiceError(Exception):
    code = "unknown"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InternalError(ServiceError):
    code = "internal"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class NotFoundError(ServiceError):
    code = "not_found"
    status_code = status.HTTP_404_NOT_FOUND


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"code": exc.code, "message": exc.message}
    )
