"""Checkout: form validation, order snapshot and submission."""

from dataclasses import dataclass
from datetime import date
from typing import List, Optional

import httpx
import structlog
from pydantic import BaseModel, EmailStr, Field, field_validator

import pricing
from cart import CartCoordinator, CartLine
from schemas import Address, OrderCreate, OrderItem, OrderStatus

logger = structlog.get_logger(__name__)

EXP_MONTHS = [f"{m:02d}" for m in range(1, 13)]


def exp_years(today: Optional[date] = None) -> List[str]:
    year = (today or date.today()).year
    return [str(year + i) for i in range(10)]


class CheckoutForm(BaseModel):
    first_name: str = Field(..., min_length=2)
    last_name: str = Field(..., min_length=2)
    email: EmailStr
    phone: str = Field(..., min_length=10)
    address1: str = Field(..., min_length=5)
    address2: Optional[str] = None
    city: str = Field(..., min_length=2)
    state: str = Field(..., min_length=2)
    postal_code: str = Field(..., min_length=5)
    country: str = Field("US", min_length=2)
    same_as_billing: bool = True

    # collected for the payment step; never leaves the client
    card_name: str = Field(..., min_length=2)
    card_number: str = Field(..., min_length=16, max_length=19)
    exp_month: str
    exp_year: str
    cvv: str = Field(..., pattern=r"^\d{3,4}$")

    @field_validator("exp_month")
    @classmethod
    def _known_month(cls, v: str) -> str:
        if v not in EXP_MONTHS:
            raise ValueError("Select an expiry month")
        return v

    @field_validator("exp_year")
    @classmethod
    def _known_year(cls, v: str) -> str:
        if v not in exp_years():
            raise ValueError("Select an expiry year")
        return v

    def address(self) -> Address:
        return Address(
            first_name=self.first_name,
            last_name=self.last_name,
            address1=self.address1,
            address2=self.address2,
            city=self.city,
            state=self.state,
            postal_code=self.postal_code,
            country=self.country,
        )


@dataclass
class CheckoutResult:
    order: Optional[dict] = None
    redirect_to: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.order is not None


def build_order(form: CheckoutForm, lines: List[CartLine], user_id: Optional[int] = None) -> OrderCreate:
    """Snapshot the cart into an order payload. Shipping is added below the free threshold."""
    subtotal = pricing.cart_total(lines)
    return OrderCreate(
        user_id=user_id,
        status=OrderStatus.PENDING,
        total=pricing.order_total(subtotal),
        items=[
            OrderItem(
                product_id=line.product_id,
                quantity=line.quantity,
                price=pricing.unit_price(line.product),
                name=line.product.name,
            )
            for line in lines
        ],
        shipping_address=form.address(),
        billing_address=None if form.same_as_billing else form.address(),
    )


def place_order(coordinator: CartCoordinator, form: CheckoutForm) -> CheckoutResult:
    if not coordinator.cart or not coordinator.cart.items:
        return CheckoutResult(redirect_to="/cart")

    order = build_order(form, coordinator.cart.items)
    try:
        resp = coordinator.client.post("/api/orders", json=order.model_dump(mode="json"))
        resp.raise_for_status()
    except httpx.HTTPError:
        logger.exception("checkout_failed", session_id=coordinator.session_id, total=order.total)
        coordinator.notify(
            "Checkout Failed",
            "There was an error processing your order. Please try again.",
            "destructive",
        )
        return CheckoutResult()

    created = resp.json()
    logger.info("order_placed", order_id=created.get("id"), total=order.total)
    # not atomic with order creation: a failed clear leaves the order in place
    coordinator.clear_cart()
    coordinator.notify("Order Placed!", "Your order has been successfully placed.")
    return CheckoutResult(order=created, redirect_to="/")
