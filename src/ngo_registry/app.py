# src/ngo_registry/app.py
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.ngo_registry.utils.database import Base, engine
from src.ngo_registry.utils.error_handler import custom_exception_handler
from src.ngo_registry.utils.errors import ZoneError
from src.ngo_registry.middleware.security_headers import security_headers_middleware
from src.ngo_registry.models.ngo import NgoInfo, InterventionZone  # noqa: F401  (register tables)

from src.ngo_registry.routes.zones_api import router as zones_router
from src.ngo_registry.routes.ngos_api import router as ngos_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    # tables are created if missing; schema migrations are handled outside the app
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    await engine.dispose()


def create_app(with_lifespan: bool = True) -> FastAPI:
    app = FastAPI(title="ngo-registry", version="1.0", lifespan=lifespan if with_lifespan else None)

    # ----------------------------------------------------------
    # SECURITY HEADERS
    # ----------------------------------------------------------
    app.middleware("http")(security_headers_middleware)

    # ----------------------------------------------------------
    # CUSTOM ERROR HANDLERS
    # ----------------------------------------------------------
    # 1) Starlette HTTPException (routing 404 and the ones raised in routes)
    app.add_exception_handler(StarletteHTTPException, custom_exception_handler)
    # 2) Request body / query validation
    app.add_exception_handler(RequestValidationError, custom_exception_handler)
    # 3) Intervention-zone errors
    app.add_exception_handler(ZoneError, custom_exception_handler)
    # 4) Anything else
    app.add_exception_handler(Exception, custom_exception_handler)

    # ----------------------------------------------------------
    # ROUTERS
    # ----------------------------------------------------------
    app.include_router(zones_router)
    app.include_router(ngos_router)
    return app


app = create_app()
