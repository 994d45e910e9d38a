from importlib import metadata

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from ltabus.api.v1 import health, transit
from ltabus.core import errors
from ltabus.core.config import get_settings
from ltabus.core.logging import setup_logging
from ltabus.core.middleware import RequestIdMiddleware

setup_logging()
settings = get_settings()

try:
    app_version = metadata.version("ltabus")
except metadata.PackageNotFoundError:
    app_version = "0.1.0"

app = FastAPI(title=settings.api_title, version=app_version)

app.add_middleware(RequestIdMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(transit.router)

app.add_exception_handler(errors.DataMallError, errors.datamall_exception_handler)
app.add_exception_handler(StarletteHTTPException, errors.http_exception_handler)
app.add_exception_handler(RequestValidationError, errors.validation_exception_handler)
app.add_exception_handler(Exception, errors.unhandled_exception_handler)
