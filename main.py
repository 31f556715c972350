import hashlib
import hmac
import os
from contextlib import contextmanager
from typing import List, Optional

import structlog
from fastapi import Depends, FastAPI, HTTPException, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from database import MemStorage, Storage
from logging_config import add_context, clear_context, configure_logging
from schemas import (
    FAQ,
    Article,
    ArticleCreate,
    Cart,
    CartCreate,
    CartUpdate,
    FAQCreate,
    NewsletterSubscribe,
    Order,
    OrderCreate,
    OrderStatusUpdate,
    Product,
    ProductCreate,
    Testimonial,
    TestimonialCreate,
    UserCreate,
    UserPublic,
    utcnow,
)

logger = structlog.get_logger(__name__)


# Utilities

def get_storage(request: Request) -> Storage:
    return request.app.state.storage


@contextmanager
def storage_errors(message: str):
    """Turn unexpected failures inside a handler into a 500 with a fixed message."""
    try:
        yield
    except HTTPException:
        raise
    except Exception as exc:
        logger.exception("request_failed", detail=message)
        raise HTTPException(status_code=500, detail=message) from exc


def format_validation_error(errors) -> str:
    parts = []
    for err in errors:
        loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "path", "query")]
        where = f' at "{".".join(loc)}"' if loc else ""
        parts.append(f"{err.get('msg', 'Invalid value')}{where}")
    return "Validation error: " + "; ".join(parts)


# Passwords: PBKDF2 with a per-user salt, peppered with AUTH_SALT

PBKDF2_ITERATIONS = 100_000


def hash_password(pw: str, salt: Optional[bytes] = None) -> str:
    salt = salt or os.urandom(16)
    pepper = os.getenv("AUTH_SALT", "sleepwell")
    digest = hashlib.pbkdf2_hmac("sha256", (pw + pepper).encode(), salt, PBKDF2_ITERATIONS)
    return f"{salt.hex()}${digest.hex()}"


def verify_password(pw: str, password_hash: str) -> bool:
    salt_hex, _, _ = password_hash.partition("$")
    return hmac.compare_digest(hash_password(pw, bytes.fromhex(salt_hex)), password_hash)


def create_app(storage: Optional[Storage] = None) -> FastAPI:
    app = FastAPI(title="SleepWell Storefront API")
    app.state.storage = storage if storage is not None else MemStorage()

    origins = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def request_context(request: Request, call_next):
        clear_context()
        add_context(request_id=os.urandom(6).hex(), method=request.method, path=request.url.path)
        response = await call_next(request)
        logger.info("request_handled", status_code=response.status_code)
        return response

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        message = format_validation_error(exc.errors())
        logger.info("validation_failed", detail=message)
        return JSONResponse(status_code=400, content={"detail": message})

    register_routes(app)
    return app


def register_routes(app: FastAPI) -> None:
    @app.get("/")
    def root():
        return {"message": "SleepWell storefront API running"}

    @app.get("/test")
    def test_storage(storage: Storage = Depends(get_storage)):
        resp = {
            "backend": "✅ Running",
            "storage": "❌ Not Available",
            "storage_type": type(storage).__name__,
            "collections": {},
        }
        try:
            resp["collections"] = storage.counts()
            resp["storage"] = "✅ Connected & Working"
        except Exception as e:
            logger.exception("storage_check_failed")
            resp["storage"] = f"❌ Error: {str(e)[:80]}"
        return resp

    # Products
    @app.get("/api/products", response_model=List[Product])
    def list_products(storage: Storage = Depends(get_storage)):
        with storage_errors("Failed to fetch products"):
            return storage.get_products()

    @app.get("/api/products/featured", response_model=List[Product])
    def featured_products(storage: Storage = Depends(get_storage)):
        with storage_errors("Failed to fetch featured products"):
            return storage.get_featured_products()

    @app.get("/api/products/bestsellers", response_model=List[Product])
    def bestseller_products(storage: Storage = Depends(get_storage)):
        with storage_errors("Failed to fetch bestseller products"):
            return storage.get_best_seller_products()

    @app.get("/api/products/category/{category}", response_model=List[Product])
    def products_by_category(category: str, storage: Storage = Depends(get_storage)):
        with storage_errors("Failed to fetch products by category"):
            return storage.get_products_by_category(category)

    @app.get("/api/products/{slug}", response_model=Product)
    def get_product(slug: str, storage: Storage = Depends(get_storage)):
        with storage_errors("Failed to fetch product"):
            product = storage.get_product_by_slug(slug)
        if not product:
            raise HTTPException(status_code=404, detail="Product not found")
        return product

    @app.post("/api/products", status_code=201, response_model=Product)
    def create_product(product: ProductCreate, storage: Storage = Depends(get_storage)):
        with storage_errors("Failed to create product"):
            if storage.get_product_by_slug(product.slug):
                raise HTTPException(status_code=400, detail="Slug already exists")
            created = storage.create_product(product)
        logger.info("product_created", product_id=created.id, slug=created.slug)
        return created

    # Articles
    @app.get("/api/articles", response_model=List[Article])
    def list_articles(storage: Storage = Depends(get_storage)):
        with storage_errors("Failed to fetch articles"):
            return storage.get_articles()

    @app.get("/api/articles/featured", response_model=List[Article])
    def featured_articles(storage: Storage = Depends(get_storage)):
        with storage_errors("Failed to fetch featured articles"):
            return storage.get_featured_articles()

    @app.get("/api/articles/category/{category}", response_model=List[Article])
    def articles_by_category(category: str, storage: Storage = Depends(get_storage)):
        with storage_errors("Failed to fetch articles by category"):
            return storage.get_articles_by_category(category)

    @app.get("/api/articles/{slug}", response_model=Article)
    def get_article(slug: str, storage: Storage = Depends(get_storage)):
        with storage_errors("Failed to fetch article"):
            article = storage.get_article_by_slug(slug)
        if not article:
            raise HTTPException(status_code=404, detail="Article not found")
        return article

    @app.post("/api/articles", status_code=201, response_model=Article)
    def create_article(article: ArticleCreate, storage: Storage = Depends(get_storage)):
        with storage_errors("Failed to create article"):
            if storage.get_article_by_slug(article.slug):
                raise HTTPException(status_code=400, detail="Slug already exists")
            return storage.create_article(article)

    # Testimonials
    @app.get("/api/testimonials", response_model=List[Testimonial])
    def list_testimonials(storage: Storage = Depends(get_storage)):
        with storage_errors("Failed to fetch testimonials"):
            return storage.get_testimonials()

    @app.get("/api/testimonials/featured", response_model=List[Testimonial])
    def featured_testimonials(storage: Storage = Depends(get_storage)):
        with storage_errors("Failed to fetch featured testimonials"):
            return storage.get_featured_testimonials()

    @app.post("/api/testimonials", status_code=201, response_model=Testimonial)
    def create_testimonial(testimonial: TestimonialCreate, storage: Storage = Depends(get_storage)):
        with storage_errors("Failed to create testimonial"):
            return storage.create_testimonial(testimonial)

    # FAQs
    @app.get("/api/faqs", response_model=List[FAQ])
    def list_faqs(storage: Storage = Depends(get_storage)):
        with storage_errors("Failed to fetch FAQs"):
            return storage.get_faqs()

    @app.post("/api/faqs", status_code=201, response_model=FAQ)
    def create_faq(faq: FAQCreate, storage: Storage = Depends(get_storage)):
        with storage_errors("Failed to create FAQ"):
            return storage.create_faq(faq)

    # Users
    @app.post("/api/users/register", status_code=201, response_model=UserPublic)
    def register_user(payload: UserCreate, storage: Storage = Depends(get_storage)):
        with storage_errors("Failed to register user"):
            if storage.get_user_by_username(payload.username):
                raise HTTPException(status_code=400, detail="Username already exists")
            if storage.get_user_by_email(payload.email):
                raise HTTPException(status_code=400, detail="Email already exists")
            user = storage.create_user(payload, hash_password(payload.password))
        logger.info("user_registered", user_id=user.id)
        return user.public()

    @app.get("/api/users/{user_id}/orders", response_model=List[Order])
    def user_orders(user_id: int, storage: Storage = Depends(get_storage)):
        with storage_errors("Failed to fetch user orders"):
            return storage.get_user_orders(user_id)

    # Carts
    @app.get("/api/carts/{session_id}", response_model=Cart)
    def get_cart(session_id: str, storage: Storage = Depends(get_storage)):
        with storage_errors("Failed to fetch cart"):
            cart = storage.get_cart_by_session_id(session_id)
        if not cart:
            now = utcnow()
            return Cart(id=0, session_id=session_id, items=[], created_at=now, updated_at=now)
        return cart

    @app.post("/api/carts", status_code=201, response_model=Cart)
    def create_cart(cart: CartCreate, storage: Storage = Depends(get_storage)):
        with storage_errors("Failed to create cart"):
            created = storage.create_cart(cart)
        logger.info("cart_created", cart_id=created.id, session_id=created.session_id)
        return created

    @app.put("/api/carts/{cart_id}", response_model=Cart)
    def update_cart(cart_id: int, changes: CartUpdate, storage: Storage = Depends(get_storage)):
        with storage_errors("Failed to update cart"):
            try:
                updated = storage.update_cart(cart_id, changes)
            except ValidationError as e:
                raise HTTPException(status_code=400, detail=format_validation_error(e.errors()))
        if updated is None:
            raise HTTPException(status_code=404, detail="Cart not found")
        return updated

    @app.delete("/api/carts/{cart_id}", status_code=204)
    def delete_cart(cart_id: int, storage: Storage = Depends(get_storage)):
        with storage_errors("Failed to delete cart"):
            deleted = storage.delete_cart(cart_id)
        if not deleted:
            raise HTTPException(status_code=404, detail="Cart not found")
        return Response(status_code=204)

    # Orders
    @app.post("/api/orders", status_code=201, response_model=Order)
    def create_order(order: OrderCreate, storage: Storage = Depends(get_storage)):
        with storage_errors("Failed to create order"):
            created = storage.create_order(order)
        logger.info("order_created", order_id=created.id, total=created.total, items=len(created.items))
        return created

    @app.get("/api/orders/{order_id}", response_model=Order)
    def get_order(order_id: int, storage: Storage = Depends(get_storage)):
        with storage_errors("Failed to fetch order"):
            order = storage.get_order(order_id)
        if not order:
            raise HTTPException(status_code=404, detail="Order not found")
        return order

    @app.put("/api/orders/{order_id}/status", response_model=Order)
    def update_order_status(order_id: int, payload: OrderStatusUpdate, storage: Storage = Depends(get_storage)):
        with storage_errors("Failed to update order status"):
            order = storage.update_order_status(order_id, payload.status)
        if not order:
            raise HTTPException(status_code=404, detail="Order not found")
        return order

    # Newsletter
    @app.post("/api/newsletter/subscribe")
    def subscribe(payload: NewsletterSubscribe, storage: Storage = Depends(get_storage)):
        with storage_errors("Failed to subscribe to newsletter"):
            if storage.is_email_subscribed(payload.email):
                return {"message": "Email already subscribed"}
            storage.subscribe_to_newsletter(payload.email)
        return JSONResponse(status_code=201, content={"message": "Successfully subscribed to newsletter"})


configure_logging()
app = create_app()


if __name__ == "__main__":
    import uvicorn

    port = int(os.getenv("PORT", 8000))
    uvicorn.run(app, host=os.getenv("HOST", "0.0.0.0"), port=port)
