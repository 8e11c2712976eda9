from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from starlette.exceptions import HTTPException as StarletteHTTPException
from app.core.config import settings
from app.core.exceptions import StoreError, ValidationError
from app.core.logging import setup_logging, RequestLoggingMiddleware
from app.db.session import create_db_and_tables
from app.services.cart_store import MemoryCartStore

# Import models to ensure they are registered with SQLModel metadata
from app.models.user import User
from app.models.product import Product
from app.models.order import Order, OrderItem
from app.models.cart import CartSession

SERVICE_NAME = "sticker-store"

logger = setup_logging(SERVICE_NAME, settings.LOG_LEVEL)

@asynccontextmanager
async def lifespan(app: FastAPI):
    create_db_and_tables()
    logger.info("Database ready", extra={"cart_store": settings.CART_STORE})
    yield

app = FastAPI(
    title=settings.PROJECT_NAME,
    version="1.0.0",
    lifespan=lifespan,
    description="API for the Dev Sticker Store"
)

# Used when CART_STORE=memory
app.state.cart_store = MemoryCartStore(max_sessions=settings.MEMORY_CART_MAX_SESSIONS)

@app.exception_handler(StoreError)
async def store_error_handler(request: Request, exc: StoreError):
    content = {"success": False, "error": exc.message}
    if isinstance(exc, ValidationError):
        content["errors"] = exc.errors
    logger.warning(exc.message, extra={"path": request.url.path, "error_type": type(exc).__name__, **exc.details})
    return JSONResponse(status_code=exc.status_code, content=content)

@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = {}
    for error in exc.errors():
        loc = [str(part) for part in error["loc"] if part not in ("body", "query", "path")]
        errors[".".join(loc) or "body"] = error["msg"]
    first = next(iter(errors.items()), None)
    message = f"{first[0]}: {first[1]}" if first else "The given data was invalid."
    return JSONResponse(status_code=400, content={"success": False, "error": message, "errors": errors})

@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": exc.detail},
        headers=getattr(exc, "headers", None),
    )

from app.routers import auth, products, cart, checkout, orders, admin

app.include_router(products.router, tags=["products"])
app.include_router(auth.router, prefix="/auth", tags=["auth"])
app.include_router(cart.router, prefix="/cart", tags=["cart"])
app.include_router(checkout.router, prefix="/checkout", tags=["checkout"])
app.include_router(orders.router, prefix="/orders", tags=["orders"])
app.include_router(admin.router, prefix="/admin", tags=["admin"])

app.add_middleware(RequestLoggingMiddleware, service_name=SERVICE_NAME)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
