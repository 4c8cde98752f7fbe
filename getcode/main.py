"""
GetCode backend.

Serves the single-page UI and the /api routes that forward prompts to the
code generation service and code to the execution service.
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from loguru import logger as l
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.status import HTTP_400_BAD_REQUEST, HTTP_500_INTERNAL_SERVER_ERROR

from getcode import meta_config
from getcode.fastapis import router
from getcode.utils.aiohttp_client_session_mixin import AioHttpClientSessionClassVarMixin


@asynccontextmanager
async def lifespan(app: FastAPI):
    l.info(f"Generation models: {', '.join(meta_config.GENERATION_MODELS) or '(none)'}")
    if meta_config.get_generation_api_key() is None:
        l.warning(f"{meta_config.GENERATION_API_KEY_ENV} is not set, /api/generate will fail until it is.")
    await AioHttpClientSessionClassVarMixin.initialize_http_session()
    yield
    l.info("Shutting down. Closing upstream HTTP session...")
    await AioHttpClientSessionClassVarMixin.close_http_session()


app = FastAPI(title="GetCode", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=meta_config.CORS_ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error_response(status_code: int, message: str, headers: dict | None = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


@app.exception_handler(StarletteHTTPException)
async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _error_response(exc.status_code, str(exc.detail), getattr(exc, 'headers', None))


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies, blank prompts and unknown languages are all 400s."""
    messages = []
    for error in exc.errors():
        message = str(error.get('msg', 'Invalid value')).removeprefix('Value error, ')
        field = error.get('loc', ())[-1] if error.get('loc') else None
        if field is not None and field != 'body':
            message = f"{field}: {message}"
        messages.append(message)
    l.debug(f"Rejected {request.method} {request.url.path}: {messages}")
    return _error_response(HTTP_400_BAD_REQUEST, "; ".join(messages) or "Invalid request")


@app.exception_handler(Exception)
async def handle_unexpected_exceptions(request: Request, exc: Exception) -> JSONResponse:
    """
    Catches all unhandled exceptions to prevent sensitive information leakage.
    """
    l.exception(
        f"An unhandled exception occurred for request: {request.method} {request.url.path}"
    )
    return _error_response(HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error. Please try again later.")


app.include_router(router)
app.mount("/static", StaticFiles(directory=meta_config.STATIC_DIR), name="static")


@app.get("/", include_in_schema=False)
async def index() -> FileResponse:
    return FileResponse(meta_config.STATIC_DIR / "index.html")


def run() -> None:
    """Console entry point: serves the app with uvicorn."""
    import uvicorn

    uvicorn.run("getcode.main:app", host=meta_config.HOST, port=meta_config.PORT)
