# product_api/main.py

"""
FastAPI Product Service API.
Exposes list, create, read, update and delete for products under
/api/v1/products. Every product response is wrapped in a
{hasError, message, data} envelope.
"""
import logging
import math
import sys
from contextlib import asynccontextmanager
from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, FastAPI, HTTPException, Query, Request, Response, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import OperationalError, SQLAlchemyError

from . import __version__
from .config import (
    CORS_ALLOW_ORIGINS,
    DB_CONNECT_MAX_RETRIES,
    DB_CONNECT_RETRY_DELAY_SECONDS,
    LOG_LEVEL,
    PRODUCTS_PER_PAGE,
)
from .db import init_db
from .exceptions import ProductNotFound, ProductValidationError
from .repository import ProductRepository, get_product_repository
from .schemas import Envelope, ProductResponse, ValidationErrorEnvelope
from .validation import validate_product_create, validate_product_update

# -----------------------------
# Configure Logging
# -----------------------------
logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)

# Suppress noisy logs from third-party libraries for cleaner output
logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
logging.getLogger("uvicorn.error").setLevel(logging.INFO)

PAGINATION_HEADERS = ["X-Total-Count", "X-Page", "X-Per-Page", "X-Last-Page"]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Ensures database tables exist before serving; exits if the database
    never becomes reachable.
    """
    try:
        init_db(DB_CONNECT_MAX_RETRIES, DB_CONNECT_RETRY_DELAY_SECONDS)
    except OperationalError:
        logger.critical(
            f"Database unreachable after {DB_CONNECT_MAX_RETRIES} attempts. Exiting application.",
            exc_info=True,
        )
        sys.exit(1)
    yield


# -----------------------------
# FastAPI App Initialization
# -----------------------------
app = FastAPI(
    title="Product API",
    description="CRUD API for products",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=PAGINATION_HEADERS,
)


# --- Exception Handlers ---
@app.exception_handler(ProductNotFound)
async def product_not_found_handler(request: Request, exc: ProductNotFound):
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content=Envelope[None](hasError=True, message="Product not found").model_dump(by_alias=True),
    )


@app.exception_handler(ProductValidationError)
async def product_validation_error_handler(request: Request, exc: ProductValidationError):
    body = ValidationErrorEnvelope(hasError=True, message=str(exc), errors=exc.errors)
    return JSONResponse(
        status_code=422,
        content=body.model_dump(by_alias=True),
    )


# --- Root Endpoint ---
@app.get("/", status_code=status.HTTP_200_OK, summary="Root endpoint")
async def read_root():
    """
    Returns a welcome message for the Product Service.
    """
    return {"message": "Welcome to the Product Service!"}


# --- Health Check Endpoint ---
@app.get("/health", status_code=status.HTTP_200_OK, summary="Health check endpoint")
async def health_check():
    """
    A simple health check endpoint to verify the service is running.
    """
    return {"status": "ok", "service": "product-service"}


# -----------------------------
# CRUD Endpoints
# -----------------------------
router = APIRouter(prefix="/api/v1/products", tags=["Products"])

NOT_FOUND_RESPONSE = {404: {"model": Envelope[None], "description": "Product not found"}}
INVALID_RESPONSE = {422: {"model": ValidationErrorEnvelope, "description": "Invalid product data"}}


@router.get(
    "",
    response_model=Envelope[List[ProductResponse]],
    summary="List products, 25 per page",
)
def list_products(
    response: Response,
    page: int = Query(1, ge=1, description="Page number, starting at 1."),
    repository: ProductRepository = Depends(get_product_repository),
):
    """
    Retrieves one page of products in id order.

    - The envelope's `data` holds the products of the requested page.
    - Pagination metadata is returned in the `X-Total-Count`, `X-Page`,
      `X-Per-Page` and `X-Last-Page` headers.
    """
    logger.info(f"Listing products, page={page}")
    products, total = repository.list(page, PRODUCTS_PER_PAGE)
    last_page = max(1, math.ceil(total / PRODUCTS_PER_PAGE))

    response.headers["X-Total-Count"] = str(total)
    response.headers["X-Page"] = str(page)
    response.headers["X-Per-Page"] = str(PRODUCTS_PER_PAGE)
    response.headers["X-Last-Page"] = str(last_page)

    logger.info(f"Retrieved {len(products)} of {total} products (page {page}/{last_page}).")
    return Envelope[List[ProductResponse]](
        data=[ProductResponse.model_validate(p) for p in products],
        message="Products fetched successfully",
    )


@router.post(
    "",
    response_model=Envelope[ProductResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create a new product",
    responses=INVALID_RESPONSE,
)
def create_product(
    payload: Dict[str, Any] = Body(...),
    repository: ProductRepository = Depends(get_product_repository),
):
    """
    Creates a new product.

    - `name` (non-empty string) and `price` (number >= 0) are required.
    - `description` (string or null) and `quantity` (integer >= 0) are optional.
    - Returns the created product, including its assigned `id`.
    """
    product = validate_product_create(payload)
    logger.info(f"Creating product: {product.name}")
    try:
        db_product = repository.insert(product.model_dump())
    except SQLAlchemyError as e:
        logger.error(f"Error creating product: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Could not create product.",
        )
    logger.info(f"Product '{db_product.name}' (ID: {db_product.id}) created successfully.")
    return Envelope[ProductResponse](
        data=ProductResponse.model_validate(db_product),
        message="Product created successfully",
    )


@router.get(
    "/{product_id}",
    response_model=Envelope[ProductResponse],
    summary="Retrieve a product by ID",
    responses=NOT_FOUND_RESPONSE,
)
def get_product(
    product_id: int,
    repository: ProductRepository = Depends(get_product_repository),
):
    logger.info(f"Fetching product with ID: {product_id}")
    product = repository.get(product_id)
    if product is None:
        logger.warning(f"Product with ID: {product_id} not found.")
        raise ProductNotFound(product_id)
    return Envelope[ProductResponse](
        data=ProductResponse.model_validate(product),
        message="Product fetched successfully",
    )


@router.put(
    "/{product_id}",
    response_model=Envelope[ProductResponse],
    summary="Update an existing product",
    responses={**NOT_FOUND_RESPONSE, **INVALID_RESPONSE},
)
def update_product(
    product_id: int,
    payload: Dict[str, Any] = Body(...),
    repository: ProductRepository = Depends(get_product_repository),
):
    """
    Updates the fields present in the request body; absent fields are kept.

    - The create rules apply to every field that is sent.
    - Returns 404 for an unknown id before the body is looked at.
    """
    if repository.get(product_id) is None:
        logger.warning(f"Product with ID: {product_id} not found for update.")
        raise ProductNotFound(product_id)

    patch = validate_product_update(payload).model_dump(exclude_unset=True)
    logger.info(f"Updating product with ID: {product_id} with data: {patch}")
    try:
        product = repository.update(product_id, patch)
    except SQLAlchemyError as e:
        logger.error(f"Error updating product {product_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Could not update product.",
        )
    if product is None:
        raise ProductNotFound(product_id)

    logger.info(f"Product '{product.name}' (ID: {product_id}) updated successfully.")
    return Envelope[ProductResponse](
        data=ProductResponse.model_validate(product),
        message="Product updated successfully",
    )


@router.delete(
    "/{product_id}",
    response_model=Envelope[None],
    summary="Delete a product by ID",
    responses=NOT_FOUND_RESPONSE,
)
def delete_product(
    product_id: int,
    repository: ProductRepository = Depends(get_product_repository),
):
    """
    Permanently deletes a product.

    - Returns 200 with `data: null` on success.
    - Raises 404 if the product does not exist (including when already deleted).
    """
    logger.info(f"Attempting to delete product with ID: {product_id}")
    try:
        deleted = repository.delete(product_id)
    except SQLAlchemyError as e:
        logger.error(f"Error deleting product {product_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An error occurred while deleting the product.",
        )
    if not deleted:
        logger.warning(f"Product with ID: {product_id} not found for deletion.")
        raise ProductNotFound(product_id)

    logger.info(f"Product (ID: {product_id}) deleted successfully.")
    return Envelope[None](message="Product deleted successfully")


app.include_router(router)
