from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from app.routers import products, invoices
from app.config import settings
from app.exceptions import InvoicingError
import logging
import sys

# Configure logging
logging.basicConfig(
    level=settings.log_level.upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stdout)
    ]
)

logger = logging.getLogger(__name__)

# Log startup information
logger.info("="*60)
logger.info(f"Starting {settings.app_name}")
logger.info("="*60)
logger.info(f"Owner header: {settings.owner_header}")
logger.info(f"Invoice products scoped to owner: {settings.scope_invoice_products_to_owner}")
logger.info("="*60)

# Tables are managed by Alembic migrations (alembic upgrade head)

app = FastAPI(
    title=settings.app_name,
    description="API for managing a product catalog and invoices",
    version="1.0.0"
)


def parse_cors_origins(origins_str: str) -> list:
    """Parse CORS origins string into a list, skipping blanks."""
    return [origin.strip() for origin in origins_str.split(",") if origin.strip()]


all_origins = parse_cors_origins(settings.cors_origins)

app.add_middleware(
    CORSMiddleware,
    allow_origins=all_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["*"],
)

# Include routers
app.include_router(products.router)
app.include_router(invoices.router)


@app.get("/")
def root():
    return {"message": settings.app_name, "version": "1.0.0"}


@app.get("/health")
def health_check():
    return {"status": "healthy"}


@app.exception_handler(InvoicingError)
async def invoicing_error_handler(request: Request, exc: InvoicingError):
    """Domain errors carry their own status code and a caller-safe message"""
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies and path ids are input errors (400), not 422"""
    return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})


# Exception handler to ensure CORS headers are always sent
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Log unexpected failures with context; the caller only gets a generic message"""
    logger.error(f"Unhandled exception on {request.method} {request.url.path}: {str(exc)}", exc_info=True)

    origin = request.headers.get("origin")
    headers = {}
    if origin and origin in all_origins:
        headers = {
            "Access-Control-Allow-Origin": origin,
            "Access-Control-Allow-Credentials": "true",
        }

    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"},
        headers=headers
    )
