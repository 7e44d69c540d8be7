from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from marketplace.core import get_settings, limiter
from marketplace.errors import (
    MarketplaceError,
    ValidationError,
    PermissionDenied,
    NotFoundError,
    DuplicateReviewError,
    SearchFailed,
    SaveFailed,
    ReviewFailed,
)
from marketplace.routers import ROUTERS

_ERROR_STATUS = {
    ValidationError: 400,
    PermissionDenied: 403,
    NotFoundError: 404,
    DuplicateReviewError: 409,
    SearchFailed: 503,
    SaveFailed: 503,
    ReviewFailed: 503,
}


def status_for_error(exc: MarketplaceError) -> int:
    for error_type, status_code in _ERROR_STATUS.items():
        if isinstance(exc, error_type):
            return status_code
    return 500


async def marketplace_error_handler(_request: Request, exc: MarketplaceError) -> JSONResponse:
    return JSONResponse(
        status_code=status_for_error(exc),
        content={"detail": exc.message, "error": type(exc).__name__},
    )


@asynccontextmanager
async def lifespan(_app: FastAPI):
    yield


app = FastAPI(
    title="Service Marketplace API",
    description="Find verified local service providers by pincode and category.",
    version="0.1.0",
    lifespan=lifespan,
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_exception_handler(MarketplaceError, marketplace_error_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

for router in ROUTERS:
    app.include_router(router)


@app.get("/health")
async def health():
    return {"status": "ok"}
