# clickbeard/main.py

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import settings
from .db import init_db
from .errors import ClickBeardError
from .routers import appointments_routes, auth_routes, barbers_routes, specialties_routes

# Configure logging
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("ClickBeard API starting up...")
    init_db()
    logger.info("Database tables ready")
    yield
    logger.info("ClickBeard API shutting down")


app = FastAPI(title="ClickBeard API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ClickBeardError)
async def clickbeard_error_handler(request: Request, exc: ClickBeardError):
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message}, headers=headers)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    message = exc.detail
    if exc.status_code == 404 and message == "Not Found":
        message = "Rota não encontrada"
    return JSONResponse(status_code=exc.status_code, content={"error": message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if any(err.get("type") == "missing" for err in errors):
        message = "Todos os campos são obrigatórios"
    else:
        message = "Dados inválidos"
    return JSONResponse(status_code=400, content={"error": message})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Algo deu errado!"})


app.include_router(auth_routes.router, prefix=settings.api_prefix)
app.include_router(barbers_routes.router, prefix=settings.api_prefix)
app.include_router(specialties_routes.router, prefix=settings.api_prefix)
app.include_router(appointments_routes.router, prefix=settings.api_prefix)


@app.get(f"{settings.api_prefix}/health")
def health_check():
    return {
        "status": "OK",
        "message": "ClickBeard API is running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
