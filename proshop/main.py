# proshop/main.py
from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from .config import Settings
from .database import ProductStore, UserStore, new_id
from .errors import NotFound, StoreError, StoreUnavailable, ValidationFailure
from .logger import get_logger
from .models import Product, ProductIn, ProductUpdate
from .seeder import import_data

_logger = get_logger(__name__)

SAMPLE_PRODUCT = ProductIn(
    name="Sample name",
    price=0,
    image="/images/sample.jpg",
    brand="Sample brand",
    category="Sample category",
    description="Sample description",
    count_in_stock=0,
)


# ---------------------------
# Dependencies
# ---------------------------
def get_products(request: Request) -> ProductStore:
    return request.app.state.products


def get_users(request: Request) -> UserStore:
    return request.app.state.users


# ---------------------------
# Product endpoints
# ---------------------------
router = APIRouter(prefix="/api/products", tags=["products"])


# GET /api/products -- every product, optionally filtered by name
@router.get("", response_model=List[Product])
async def list_products(keyword: Optional[str] = None, products: ProductStore = Depends(get_products)):
    return await products.list_all(keyword)


# GET /api/products/{product_id}
@router.get("/{product_id}", response_model=Product)
async def get_product(product_id: str, products: ProductStore = Depends(get_products)):
    return await products.get_by_id(product_id)


# POST /api/products -- without a body a sample product is created for the admin to edit
@router.post("", response_model=Product, status_code=201)
async def create_product(
    payload: Optional[ProductIn] = Body(None),
    products: ProductStore = Depends(get_products),
    users: UserStore = Depends(get_users),
):
    owner = await users.first_admin()
    fields = (payload or SAMPLE_PRODUCT).model_dump()
    product = Product(id=new_id(), user=owner.id if owner else None, **fields)
    return await products.insert(product)


# PUT /api/products/{product_id}
@router.put("/{product_id}", response_model=Product)
async def update_product(
    product_id: str,
    payload: ProductUpdate,
    products: ProductStore = Depends(get_products),
):
    return await products.update(product_id, payload.model_dump(exclude_unset=True))


# DELETE /api/products/{product_id}
@router.delete("/{product_id}")
async def delete_product(product_id: str, products: ProductStore = Depends(get_products)):
    await products.delete(product_id)
    return {"message": "Product removed"}


# ---------------------------
# Error mapping
# ---------------------------
async def store_error_handler(request: Request, exc: StoreError):
    if isinstance(exc, NotFound):
        _logger.debug(f"{request.method} {request.url.path}: {exc.message}")
    elif isinstance(exc, StoreUnavailable):
        _logger.error(f"{request.method} {request.url.path}: {exc}", exc_info=exc)
        # internal detail stays in the log
        return JSONResponse(status_code=exc.status_code, content={"message": StoreUnavailable.message})
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if errors:
        first = errors[0]
        loc = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{loc}: {first.get('msg')}" if loc else first.get("msg")
    else:
        message = ValidationFailure.message
    return JSONResponse(status_code=ValidationFailure.status_code, content={"message": message})


async def unhandled_error_handler(request: Request, exc: Exception):
    _logger.error(f"{request.method} {request.url.path}: unhandled {exc!r}", exc_info=exc)
    return JSONResponse(status_code=500, content={"message": "Server Error"})


# ---------------------------
# App factory
# ---------------------------
def create_app(
    products: Optional[ProductStore] = None,
    users: Optional[UserStore] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    settings = settings or Settings.from_env()
    products = products if products is not None else ProductStore()
    users = users if users is not None else UserStore()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if settings.seed:
            await import_data(products, users)
        yield

    app = FastAPI(title="proshop", debug=False, lifespan=lifespan)
    app.state.settings = settings
    app.state.products = products
    app.state.users = users

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(StoreError, store_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    @app.get("/", response_class=PlainTextResponse)
    async def root():
        return "API is running..."

    app.include_router(router)
    return app


app = create_app()
