"""
Client-side cart coordinator

Holds the single source of truth for the shopper's active cart. Every mutation
goes to the API and is followed by a refresh, so local state only ever
reflects what the server returned. Mutations never raise: HTTP failures are
logged and surfaced as notifications.
"""

import os
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional

import httpx
import structlog

import pricing
from schemas import Cart, Product

logger = structlog.get_logger(__name__)

DEFAULT_SESSION_FILE = Path.home() / ".sleepwell" / "cart_session"


def generate_session_id() -> str:
    return os.urandom(13).hex()


def load_session_id(path: Optional[Path] = None) -> str:
    """Return the persisted session id, creating and saving one on first run."""
    path = Path(path or os.getenv("CART_SESSION_FILE") or DEFAULT_SESSION_FILE)
    if path.exists():
        session_id = path.read_text(encoding="utf-8").strip()
        if session_id:
            return session_id
    session_id = generate_session_id()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(session_id, encoding="utf-8")
    logger.debug("session_id_created", path=str(path))
    return session_id


@dataclass
class Notification:
    title: str
    description: str
    variant: str = "default"


@dataclass
class CartLine:
    product_id: int
    quantity: int
    product: Product

    def wire(self) -> Dict[str, int]:
        return {"product_id": self.product_id, "quantity": self.quantity}


@dataclass
class CartView:
    id: int
    session_id: Optional[str]
    created_at: datetime
    updated_at: datetime
    items: List[CartLine] = field(default_factory=list)


class CartCoordinator:
    """
    Drives the cart endpoints for one session.

    `client` is an httpx.Client whose base_url points at the storefront API
    (a FastAPI TestClient works too).
    """

    def __init__(self, client: httpx.Client, session_id: str):
        self.client = client
        self.session_id = session_id
        self.cart: Optional[CartView] = None
        self.products: Optional[List[Product]] = None
        self.notifications: List[Notification] = []
        self.is_loading = True

    # ---- state ----

    def refresh(self) -> None:
        """Fetch the session's cart and the catalog, then join them."""
        try:
            cart_resp = self.client.get(f"/api/carts/{self.session_id}")
            cart_resp.raise_for_status()
            products_resp = self.client.get("/api/products")
            products_resp.raise_for_status()
        except httpx.HTTPError:
            logger.exception("cart_refresh_failed", session_id=self.session_id)
            self.notify("Error", "Failed to load your cart. Please try again.", "destructive")
            return

        cart = Cart.model_validate(cart_resp.json())
        self.products = [Product.model_validate(p) for p in products_resp.json()]
        by_id = {p.id: p for p in self.products}

        # items whose product has disappeared from the catalog are dropped
        lines = [
            CartLine(product_id=item.product_id, quantity=item.quantity, product=by_id[item.product_id])
            for item in cart.items
            if item.product_id in by_id
        ]
        self.cart = CartView(
            id=cart.id,
            session_id=cart.session_id,
            created_at=cart.created_at,
            updated_at=cart.updated_at,
            items=lines,
        )
        self.is_loading = False

    @property
    def has_cart(self) -> bool:
        return self.cart is not None and self.cart.id != 0

    @property
    def cart_total(self) -> int:
        if not self.cart:
            return 0
        return pricing.cart_total(self.cart.items)

    @property
    def item_count(self) -> int:
        if not self.cart:
            return 0
        return pricing.item_count(self.cart.items)

    def notify(self, title: str, description: str, variant: str = "default") -> None:
        self.notifications.append(Notification(title, description, variant))
        log = logger.warning if variant == "destructive" else logger.info
        log("notification", title=title, description=description)

    # ---- mutations ----

    def _put_items(self, lines: List[CartLine]) -> None:
        resp = self.client.put(f"/api/carts/{self.cart.id}", json={"items": [line.wire() for line in lines]})
        resp.raise_for_status()

    def add_to_cart(self, product_id: int, quantity: int = 1) -> None:
        if self.products is None:
            return
        product = next((p for p in self.products if p.id == product_id), None)
        if product is None:
            self.notify("Error", "Product not found.", "destructive")
            return

        try:
            if not self.has_cart:
                resp = self.client.post(
                    "/api/carts",
                    json={"session_id": self.session_id, "items": [{"product_id": product_id, "quantity": quantity}]},
                )
                resp.raise_for_status()
            else:
                lines = list(self.cart.items)
                existing = next((line for line in lines if line.product_id == product_id), None)
                if existing:
                    lines = [
                        CartLine(line.product_id, line.quantity + quantity, line.product)
                        if line.product_id == product_id
                        else line
                        for line in lines
                    ]
                else:
                    lines.append(CartLine(product_id, quantity, product))
                self._put_items(lines)
        except httpx.HTTPError:
            logger.exception("add_to_cart_failed", product_id=product_id)
            self.notify("Error", "Failed to add item to cart. Please try again.", "destructive")
            return

        self.refresh()
        self.notify("Added to cart", f"{product.name} added to your cart.")

    def remove_from_cart(self, product_id: int) -> None:
        if not self.has_cart:
            return
        try:
            self._put_items([line for line in self.cart.items if line.product_id != product_id])
        except httpx.HTTPError:
            logger.exception("remove_from_cart_failed", product_id=product_id)
            self.notify("Error", "Failed to remove item from cart. Please try again.", "destructive")
            return

        self.refresh()
        self.notify("Removed from cart", "Item removed from your cart.")

    def update_cart_item_quantity(self, product_id: int, quantity: int) -> None:
        if not self.has_cart:
            return
        quantity = max(quantity, 1)
        lines = [
            CartLine(line.product_id, quantity, line.product) if line.product_id == product_id else line
            for line in self.cart.items
        ]
        try:
            self._put_items(lines)
        except httpx.HTTPError:
            logger.exception("update_cart_failed", product_id=product_id)
            self.notify("Error", "Failed to update cart. Please try again.", "destructive")
            return

        self.refresh()

    def clear_cart(self) -> None:
        """Delete the cart, then open a fresh empty one for the same session."""
        if not self.has_cart:
            return
        try:
            self.client.delete(f"/api/carts/{self.cart.id}").raise_for_status()
            self.client.post("/api/carts", json={"session_id": self.session_id, "items": []}).raise_for_status()
        except httpx.HTTPError:
            logger.exception("clear_cart_failed", cart_id=self.cart.id)
            self.notify("Error", "Failed to clear cart. Please try again.", "destructive")
            return

        self.refresh()
