"""
Storage layer for the SleepWell storefront

`Storage` is the interface the API layer depends on. `MemStorage` keeps every
collection in process memory: one dict per collection (id -> record), one id
counter per collection starting at 1, and secondary indexes for the fields
that are looked up as unique keys.

Lookups return None on a miss. Creation always succeeds; callers check
uniqueness first where it matters (registration, product and article
slugs in main.py).
"""

import threading
from abc import ABC, abstractmethod
from typing import Callable, Dict, List, Optional, Type, TypeVar

import structlog
from pydantic import BaseModel

import seed as seed_data
from schemas import (
    FAQ,
    Article,
    ArticleCreate,
    Cart,
    CartCreate,
    CartUpdate,
    FAQCreate,
    Newsletter,
    Order,
    OrderCreate,
    OrderStatus,
    Product,
    ProductCreate,
    Testimonial,
    TestimonialCreate,
    User,
    UserCreate,
    utcnow,
)

logger = structlog.get_logger(__name__)

COLLECTIONS = ("users", "products", "articles", "testimonials", "faqs", "carts", "orders", "newsletters")

M = TypeVar("M", bound=BaseModel)


class Storage(ABC):
    # Users
    @abstractmethod
    def get_user(self, user_id: int) -> Optional[User]: ...

    @abstractmethod
    def get_user_by_username(self, username: str) -> Optional[User]: ...

    @abstractmethod
    def get_user_by_email(self, email: str) -> Optional[User]: ...

    @abstractmethod
    def create_user(self, user: UserCreate, password_hash: str) -> User: ...

    # Products
    @abstractmethod
    def get_products(self) -> List[Product]: ...

    @abstractmethod
    def get_product(self, product_id: int) -> Optional[Product]: ...

    @abstractmethod
    def get_product_by_slug(self, slug: str) -> Optional[Product]: ...

    @abstractmethod
    def get_featured_products(self) -> List[Product]: ...

    @abstractmethod
    def get_best_seller_products(self) -> List[Product]: ...

    @abstractmethod
    def get_products_by_category(self, category: str) -> List[Product]: ...

    @abstractmethod
    def create_product(self, product: ProductCreate) -> Product: ...

    # Articles
    @abstractmethod
    def get_articles(self) -> List[Article]: ...

    @abstractmethod
    def get_article(self, article_id: int) -> Optional[Article]: ...

    @abstractmethod
    def get_article_by_slug(self, slug: str) -> Optional[Article]: ...

    @abstractmethod
    def get_featured_articles(self) -> List[Article]: ...

    @abstractmethod
    def get_articles_by_category(self, category: str) -> List[Article]: ...

    @abstractmethod
    def create_article(self, article: ArticleCreate) -> Article: ...

    # Testimonials
    @abstractmethod
    def get_testimonials(self) -> List[Testimonial]: ...

    @abstractmethod
    def get_featured_testimonials(self) -> List[Testimonial]: ...

    @abstractmethod
    def create_testimonial(self, testimonial: TestimonialCreate) -> Testimonial: ...

    # FAQs
    @abstractmethod
    def get_faqs(self) -> List[FAQ]: ...

    @abstractmethod
    def create_faq(self, faq: FAQCreate) -> FAQ: ...

    # Carts
    @abstractmethod
    def get_cart(self, cart_id: int) -> Optional[Cart]: ...

    @abstractmethod
    def get_cart_by_session_id(self, session_id: str) -> Optional[Cart]: ...

    @abstractmethod
    def create_cart(self, cart: CartCreate) -> Cart: ...

    @abstractmethod
    def update_cart(self, cart_id: int, changes: CartUpdate) -> Optional[Cart]: ...

    @abstractmethod
    def delete_cart(self, cart_id: int) -> bool: ...

    # Orders
    @abstractmethod
    def get_orders(self) -> List[Order]: ...

    @abstractmethod
    def get_user_orders(self, user_id: int) -> List[Order]: ...

    @abstractmethod
    def get_order(self, order_id: int) -> Optional[Order]: ...

    @abstractmethod
    def create_order(self, order: OrderCreate) -> Order: ...

    @abstractmethod
    def update_order_status(self, order_id: int, status: OrderStatus) -> Optional[Order]: ...

    # Newsletter
    @abstractmethod
    def subscribe_to_newsletter(self, email: str) -> Newsletter: ...

    @abstractmethod
    def is_email_subscribed(self, email: str) -> bool: ...

    @abstractmethod
    def counts(self) -> Dict[str, int]: ...


class MemStorage(Storage):
    """In-memory Storage. Records handed out are copies of what is stored."""

    def __init__(self, seed: bool = True):
        self._lock = threading.RLock()
        self._data: Dict[str, Dict[int, BaseModel]] = {name: {} for name in COLLECTIONS}
        self._next_id: Dict[str, int] = {name: 1 for name in COLLECTIONS}

        # unique key -> id
        self._username_index: Dict[str, int] = {}
        self._email_index: Dict[str, int] = {}
        self._product_slug_index: Dict[str, int] = {}
        self._article_slug_index: Dict[str, int] = {}
        self._newsletter_index: Dict[str, int] = {}
        # session id -> most recently created cart for that session
        self._cart_session_index: Dict[str, int] = {}

        if seed:
            self._load_seed()

    # ---- helpers ----

    def _insert(self, collection: str, model: Type[M], payload: dict) -> M:
        with self._lock:
            record_id = self._next_id[collection]
            self._next_id[collection] += 1
            record = model(id=record_id, **payload)
            self._data[collection][record_id] = record
        logger.debug("record_created", collection=collection, id=record_id)
        return record.model_copy(deep=True)

    def _get(self, collection: str, record_id: Optional[int]):
        if record_id is None:
            return None
        record = self._data[collection].get(record_id)
        return record.model_copy(deep=True) if record is not None else None

    def _all(self, collection: str, predicate: Optional[Callable] = None) -> list:
        with self._lock:
            records = list(self._data[collection].values())
        return [r.model_copy(deep=True) for r in records if predicate is None or predicate(r)]

    def _load_seed(self) -> None:
        for product in seed_data.PRODUCTS:
            self.create_product(product)
        for article in seed_data.ARTICLES:
            self.create_article(article)
        for testimonial in seed_data.TESTIMONIALS:
            self.create_testimonial(testimonial)
        for faq in seed_data.FAQS:
            self.create_faq(faq)
        logger.info("seed_loaded", **self.counts())

    def counts(self) -> Dict[str, int]:
        with self._lock:
            return {name: len(records) for name, records in self._data.items()}

    # ---- users ----

    def get_user(self, user_id: int) -> Optional[User]:
        return self._get("users", user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        return self._get("users", self._username_index.get(username))

    def get_user_by_email(self, email: str) -> Optional[User]:
        return self._get("users", self._email_index.get(email.lower()))

    def create_user(self, user: UserCreate, password_hash: str) -> User:
        payload = user.model_dump(exclude={"password"})
        payload["password_hash"] = password_hash
        with self._lock:
            created = self._insert("users", User, payload)
            self._username_index[created.username] = created.id
            self._email_index[created.email.lower()] = created.id
        return created

    # ---- products ----

    def get_products(self) -> List[Product]:
        return self._all("products")

    def get_product(self, product_id: int) -> Optional[Product]:
        return self._get("products", product_id)

    def get_product_by_slug(self, slug: str) -> Optional[Product]:
        return self._get("products", self._product_slug_index.get(slug))

    def get_featured_products(self) -> List[Product]:
        return self._all("products", lambda p: p.featured)

    def get_best_seller_products(self) -> List[Product]:
        return self._all("products", lambda p: p.best_seller)

    def get_products_by_category(self, category: str) -> List[Product]:
        return self._all("products", lambda p: p.category.value == category)

    def create_product(self, product: ProductCreate) -> Product:
        with self._lock:
            created = self._insert("products", Product, {**product.model_dump(), "created_at": utcnow()})
            self._product_slug_index.setdefault(created.slug, created.id)
        return created

    # ---- articles ----

    def get_articles(self) -> List[Article]:
        return self._all("articles")

    def get_article(self, article_id: int) -> Optional[Article]:
        return self._get("articles", article_id)

    def get_article_by_slug(self, slug: str) -> Optional[Article]:
        return self._get("articles", self._article_slug_index.get(slug))

    def get_featured_articles(self) -> List[Article]:
        return self._all("articles", lambda a: a.featured)

    def get_articles_by_category(self, category: str) -> List[Article]:
        return self._all("articles", lambda a: a.category.value == category)

    def create_article(self, article: ArticleCreate) -> Article:
        with self._lock:
            created = self._insert("articles", Article, {**article.model_dump(), "created_at": utcnow()})
            self._article_slug_index.setdefault(created.slug, created.id)
        return created

    # ---- testimonials ----

    def get_testimonials(self) -> List[Testimonial]:
        return self._all("testimonials")

    def get_featured_testimonials(self) -> List[Testimonial]:
        return self._all("testimonials", lambda t: t.featured)

    def create_testimonial(self, testimonial: TestimonialCreate) -> Testimonial:
        return self._insert("testimonials", Testimonial, {**testimonial.model_dump(), "created_at": utcnow()})

    # ---- faqs ----

    def get_faqs(self) -> List[FAQ]:
        return sorted(self._all("faqs"), key=lambda f: (f.order, f.id))

    def create_faq(self, faq: FAQCreate) -> FAQ:
        return self._insert("faqs", FAQ, faq.model_dump())

    # ---- carts ----

    def get_cart(self, cart_id: int) -> Optional[Cart]:
        return self._get("carts", cart_id)

    def get_cart_by_session_id(self, session_id: str) -> Optional[Cart]:
        return self._get("carts", self._cart_session_index.get(session_id))

    def create_cart(self, cart: CartCreate) -> Cart:
        now = utcnow()
        with self._lock:
            created = self._insert("carts", Cart, {**cart.model_dump(), "created_at": now, "updated_at": now})
            if created.session_id is not None:
                self._cart_session_index[created.session_id] = created.id
        return created

    def update_cart(self, cart_id: int, changes: CartUpdate) -> Optional[Cart]:
        with self._lock:
            current = self._data["carts"].get(cart_id)
            if current is None:
                return None
            merged = {**current.model_dump(), **changes.model_dump(exclude_unset=True), "updated_at": utcnow()}
            updated = Cart(**merged)
            self._data["carts"][cart_id] = updated
            if current.session_id != updated.session_id:
                self._drop_session_index(current)
                if updated.session_id is not None:
                    self._cart_session_index[updated.session_id] = cart_id
        return updated.model_copy(deep=True)

    def delete_cart(self, cart_id: int) -> bool:
        with self._lock:
            removed = self._data["carts"].pop(cart_id, None)
            if removed is None:
                return False
            self._drop_session_index(removed)
        logger.debug("record_deleted", collection="carts", id=cart_id)
        return True

    def _drop_session_index(self, cart: Cart) -> None:
        if cart.session_id is None or self._cart_session_index.get(cart.session_id) != cart.id:
            return
        del self._cart_session_index[cart.session_id]
        # fall back to the newest remaining cart of the same session, if any
        survivors = [c.id for c in self._data["carts"].values() if c.session_id == cart.session_id]
        if survivors:
            self._cart_session_index[cart.session_id] = max(survivors)

    # ---- orders ----

    def get_orders(self) -> List[Order]:
        return self._all("orders")

    def get_user_orders(self, user_id: int) -> List[Order]:
        return self._all("orders", lambda o: o.user_id == user_id)

    def get_order(self, order_id: int) -> Optional[Order]:
        return self._get("orders", order_id)

    def create_order(self, order: OrderCreate) -> Order:
        return self._insert("orders", Order, {**order.model_dump(), "created_at": utcnow()})

    def update_order_status(self, order_id: int, status: OrderStatus) -> Optional[Order]:
        with self._lock:
            current = self._data["orders"].get(order_id)
            if current is None:
                return None
            updated = current.model_copy(update={"status": OrderStatus(status)})
            self._data["orders"][order_id] = updated
        logger.info("order_status_updated", order_id=order_id, status=updated.status.value)
        return updated.model_copy(deep=True)

    # ---- newsletter ----

    def subscribe_to_newsletter(self, email: str) -> Newsletter:
        key = email.lower()
        with self._lock:
            existing = self._get("newsletters", self._newsletter_index.get(key))
            if existing is not None:
                return existing
            created = self._insert("newsletters", Newsletter, {"email": email, "created_at": utcnow()})
            self._newsletter_index[key] = created.id
        return created

    def is_email_subscribed(self, email: str) -> bool:
        return email.lower() in self._newsletter_index
