"""Price arithmetic shared by the cart coordinator and checkout.

All amounts are integers in cents.
"""

from typing import Iterable, Protocol

FREE_SHIPPING_THRESHOLD = 5000
SHIPPING_FEE = 499


class Priced(Protocol):
    price: int
    sale_price: "int | None"


def unit_price(product: Priced) -> int:
    """Sale price when the product has one, else the list price."""
    if product.sale_price is not None:
        return product.sale_price
    return product.price


def cart_total(lines: Iterable) -> int:
    """Sum of unit price x quantity over lines carrying `.product` and `.quantity`."""
    return sum(unit_price(line.product) * line.quantity for line in lines)


def item_count(lines: Iterable) -> int:
    return sum(line.quantity for line in lines)


def shipping_fee(subtotal: int) -> int:
    # threshold is inclusive: 5000 ships free
    return 0 if subtotal >= FREE_SHIPPING_THRESHOLD else SHIPPING_FEE


def order_total(subtotal: int) -> int:
    return subtotal + shipping_fee(subtotal)


def format_price(cents: int, symbol: str = "$") -> str:
    return f"{symbol}{cents / 100:,.2f}"
