"""Product Resource Service: a FastAPI CRUD API for products."""

__version__ = "1.0.0"
