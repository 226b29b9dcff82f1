"""Run the Product Service with uvicorn: ``python -m product_api``."""
import uvicorn

from .config import HOST, LOG_LEVEL, PORT


def main():
    uvicorn.run("product_api.main:app", host=HOST, port=PORT, log_level=LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
