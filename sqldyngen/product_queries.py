"""Queries from product.sql: product catalogue and stock."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from sqldyngen.dbtx import NoRowsError
from sqldyngen.models import Product
from sqldyngen.tracing import start_tracing

CREATE_PRODUCT = """-- name: CreateProduct :one
INSERT INTO products (name, price, stock)
VALUES ($1, $2, $3)
RETURNING id, name, price, stock, created_at
"""

DELETE_PRODUCT = """-- name: DeleteProduct :exec
DELETE FROM products WHERE id = $1
"""

GET_PRODUCT = """-- name: GetProduct :one
SELECT id, name, price, stock, created_at FROM products WHERE id = $1 LIMIT 1
"""

GET_PRODUCT_PRICE = """-- name: GetProductPrice :one
SELECT price FROM products WHERE id = $1 LIMIT 1
"""

GET_PRODUCTS_IN_STOCK = """-- name: GetProductsInStock :one
SELECT stock FROM products WHERE stock > 0 LIMIT 1
"""

LIST_PRODUCTS = """-- name: ListProducts :many
SELECT id, name, price, stock, created_at FROM products ORDER BY created_at DESC
"""

UPDATE_PRODUCT_STOCK = """-- name: UpdateProductStock :exec
UPDATE products SET stock = $2 WHERE id = $1
"""


@dataclass
class CreateProductParams:
    name: str | None
    price: Decimal
    stock: int | None = None


@dataclass
class DeleteProductParams:
    id: int


@dataclass
class GetProductParams:
    id: int


@dataclass
class GetProductPriceParams:
    id: int


@dataclass
class UpdateProductStockParams:
    id: int
    stock: int | None = None


def _first_column(row: Any) -> Any:
    return tuple(row)[0]


class ProductQueries:
    """Queries defined in product.sql."""

    def create_product(self, db: Any, arg: CreateProductParams) -> Product:
        """Insert a product and return the stored row."""
        with start_tracing("ProductQueries.CreateProduct"):
            row = db.query_row(CREATE_PRODUCT, arg.name, arg.price, arg.stock)
            return Product.from_row(row)

    def delete_product(self, db: Any, arg: DeleteProductParams) -> None:
        """Delete the product with the given id."""
        with start_tracing("ProductQueries.DeleteProduct"):
            db.exec(DELETE_PRODUCT, arg.id)

    def get_product(self, db: Any, arg: GetProductParams) -> Product | None:
        """Fetch a product by id; None if there is no such product."""
        with start_tracing("ProductQueries.GetProduct"):
            try:
                row = db.query_row(GET_PRODUCT, arg.id)
            except NoRowsError:
                return None
            return Product.from_row(row)

    def get_product_price(self, db: Any, arg: GetProductPriceParams) -> Decimal:
        """Return a product's price; zero when there is no such product."""
        with start_tracing("ProductQueries.GetProductPrice"):
            try:
                row = db.query_row(GET_PRODUCT_PRICE, arg.id)
            except NoRowsError:
                return Decimal(0)
            price = _first_column(row)
            return price if isinstance(price, Decimal) else Decimal(str(price))

    def get_products_in_stock(self, db: Any) -> int | None:
        """Return the stock of some product that has any; None if none has."""
        with start_tracing("ProductQueries.GetProductsInStock"):
            try:
                row = db.query_row(GET_PRODUCTS_IN_STOCK)
            except NoRowsError:
                return None
            return _first_column(row)

    def list_products(self, db: Any) -> list[Product]:
        """Return all products, newest first."""
        with start_tracing("ProductQueries.ListProducts"):
            return [Product.from_row(row) for row in db.query(LIST_PRODUCTS)]

    def update_product_stock(self, db: Any, arg: UpdateProductStockParams) -> None:
        """Set the stock of a product; None clears it."""
        with start_tracing("ProductQueries.UpdateProductStock"):
            db.exec(UPDATE_PRODUCT_STOCK, arg.id, arg.stock)