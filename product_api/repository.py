# product_api/repository.py

"""
Product persistence behind an explicit repository interface.

Handlers depend on ProductRepository, never on SQLAlchemy directly; the
SQLAlchemy implementation is injected per request by get_product_repository.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple

from fastapi import Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .db import get_db
from .models import Product


class ProductRepository(ABC):
    """Repository contract for Product records."""

    @abstractmethod
    def get(self, product_id: int) -> Optional[Product]:
        """Retrieve a product by primary key."""

    @abstractmethod
    def list(self, page: int, size: int) -> Tuple[List[Product], int]:
        """Return one page of products in primary-key order and the total count."""

    @abstractmethod
    def insert(self, record: Dict[str, Any]) -> Product:
        """Persist a new product and return it with its assigned id."""

    @abstractmethod
    def update(self, product_id: int, patch: Dict[str, Any]) -> Optional[Product]:
        """Overwrite the given fields; None if the product does not exist."""

    @abstractmethod
    def delete(self, product_id: int) -> bool:
        """Hard-delete a product; False if it does not exist."""


class SqlAlchemyProductRepository(ProductRepository):
    def __init__(self, db: Session) -> None:
        self._db = db

    def get(self, product_id: int) -> Optional[Product]:
        # Session.get serves rows already loaded in this session without a new SELECT
        return self._db.get(Product, product_id)

    def list(self, page: int, size: int) -> Tuple[List[Product], int]:
        query = self._db.query(Product)
        total = query.count()
        items = (
            query.order_by(Product.id)
            .offset((page - 1) * size)
            .limit(size)
            .all()
        )
        return items, total

    def insert(self, record: Dict[str, Any]) -> Product:
        product = Product(**record)
        self._db.add(product)
        self._commit()
        self._db.refresh(product)
        return product

    def update(self, product_id: int, patch: Dict[str, Any]) -> Optional[Product]:
        product = self.get(product_id)
        if product is None:
            return None
        for field, value in patch.items():
            setattr(product, field, value)
        self._db.add(product)
        self._commit()
        self._db.refresh(product)
        return product

    def delete(self, product_id: int) -> bool:
        product = self.get(product_id)
        if product is None:
            return False
        self._db.delete(product)
        self._commit()
        return True

    def _commit(self) -> None:
        try:
            self._db.commit()
        except SQLAlchemyError:
            self._db.rollback()
            raise


def get_product_repository(db: Session = Depends(get_db)) -> ProductRepository:
    """Dependency providing the request-scoped product repository."""
    return SqlAlchemyProductRepository(db)
