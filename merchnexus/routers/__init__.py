import pkgutil
import importlib
from fastapi import FastAPI, APIRouter, Request, status
from fastapi.responses import JSONResponse

from merchnexus.errors import MerchNexusError, NotFound, StoreUnavailable, ValidationError

ERROR_STATUS = (
    (ValidationError, 422),
    (NotFound, 404),
    (StoreUnavailable, 503),
)


def register_routers(app: FastAPI):
    package = importlib.import_module(__name__)

    for _, module_name, is_pkg in pkgutil.iter_modules(package.__path__):
        if is_pkg:
            continue

        module = importlib.import_module(f"{__name__}.{module_name}")
        router = getattr(module, "router", None)

        if not isinstance(router, APIRouter):
            continue

        app.include_router(router)


async def handle_service_error(_request: Request, exc: MerchNexusError) -> JSONResponse:
    for error_type, status_code in ERROR_STATUS:
        if isinstance(exc, error_type):
            break
    else:
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


def register_exception_handlers(app: FastAPI):
    app.add_exception_handler(MerchNexusError, handle_service_error)
