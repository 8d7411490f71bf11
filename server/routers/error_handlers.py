from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from shared.helper.errors import NotFoundError, TransportError


async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content={"detail": str(exc)})


async def transport_error_handler(request: Request, exc: TransportError) -> JSONResponse:
    # upstream failures are reported as bad gateway, the CMS body is not forwarded
    return JSONResponse(
        status_code=502,
        content={"detail": f"CMS request failed with status {exc.status_code}"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(TransportError, transport_error_handler)
