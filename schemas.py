"""
Data Schemas for the SleepWell storefront

Each entity has an insert schema (what clients send) and a record schema
(what the store hands back, with id and timestamps assigned).

- User -> "users"
- Product -> "products"
- Article -> "articles"
- Testimonial -> "testimonials"
- FAQ -> "faqs"
- Cart -> "carts"
- Order -> "orders"
- Newsletter -> "newsletters"

Prices are integers in minor currency units (cents).
"""

from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, EmailStr, Field


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ProductCategory(str, Enum):
    SUPPLEMENTS = "supplements"
    BUNDLES = "bundles"
    ACCESSORIES = "accessories"


class ArticleCategory(str, Enum):
    SLEEP_DISORDERS = "sleep_disorders"
    SLEEP_TIPS = "sleep_tips"
    SUPPLEMENTS = "supplements"
    RESEARCH = "research"


class OrderStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


# Users

class UserCreate(BaseModel):
    """Registration payload"""
    username: str = Field(..., min_length=1, description="Unique login name")
    password: str = Field(..., min_length=1, description="Plain password, hashed before storage")
    email: EmailStr = Field(..., description="Unique email address")
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone_number: Optional[str] = None


class UserPublic(BaseModel):
    """User as returned over the wire: never carries credentials"""
    id: int
    username: str
    email: EmailStr
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone_number: Optional[str] = None


class User(UserPublic):
    """Stored user record"""
    password_hash: str = Field(..., description="PBKDF2 hash, salt$digest")

    def public(self) -> UserPublic:
        return UserPublic(**self.model_dump(exclude={"password_hash"}))


# Products

class ProductCreate(BaseModel):
    name: str = Field(..., min_length=1, description="Product name")
    slug: str = Field(..., min_length=1, description="URL slug, unique")
    description: str = Field(..., description="Long description")
    short_description: Optional[str] = Field(None, description="Teaser shown on cards")
    price: int = Field(..., ge=0, description="Price in cents")
    sale_price: Optional[int] = Field(None, ge=0, description="Discounted price in cents")
    category: ProductCategory
    image_url: str = Field(..., description="Primary image URL")
    ingredients: Optional[str] = None
    benefits: List[str] = Field(default_factory=list)
    featured: bool = False
    best_seller: bool = False
    in_stock: bool = True
    quantity: int = Field(30, ge=0, description="Units in inventory")


class Product(ProductCreate):
    id: int
    created_at: datetime


# Articles

class ArticleCreate(BaseModel):
    title: str = Field(..., min_length=1)
    slug: str = Field(..., min_length=1)
    content: str = Field(..., description="HTML body")
    summary: str
    category: ArticleCategory
    author: str
    author_title: Optional[str] = None
    image_url: str
    read_time: int = Field(..., ge=1, description="Estimated read time in minutes")
    featured: bool = False


class Article(ArticleCreate):
    id: int
    created_at: datetime


# Testimonials

class TestimonialCreate(BaseModel):
    customer_name: str = Field(..., min_length=1)
    rating: float = Field(..., ge=0, le=5, description="Star rating, half stars allowed")
    review: str
    image_url: Optional[str] = None
    verified: bool = True
    featured: bool = False


class Testimonial(TestimonialCreate):
    id: int
    created_at: datetime


# FAQs

class FAQCreate(BaseModel):
    question: str = Field(..., min_length=1)
    answer: str = Field(..., min_length=1)
    category: Optional[str] = None
    order: int = Field(0, description="Display position")


class FAQ(FAQCreate):
    id: int


# Carts

class CartItem(BaseModel):
    product_id: int = Field(..., description="ID of the product")
    quantity: int = Field(1, ge=1, description="Quantity of the product")


class CartCreate(BaseModel):
    user_id: Optional[int] = Field(None, description="Owner user id")
    session_id: Optional[str] = Field(None, description="Anonymous session key")
    items: List[CartItem] = Field(default_factory=list, description="List of cart items")


class CartUpdate(BaseModel):
    """Partial cart update: only fields present in the payload are applied"""
    user_id: Optional[int] = None
    session_id: Optional[str] = None
    items: Optional[List[CartItem]] = None


class Cart(CartCreate):
    id: int
    created_at: datetime
    updated_at: datetime


# Orders

class Address(BaseModel):
    first_name: str
    last_name: str
    address1: str
    address2: Optional[str] = None
    city: str
    state: str
    postal_code: str
    country: str


class OrderItem(BaseModel):
    product_id: int
    quantity: int = Field(..., ge=1)
    price: int = Field(..., ge=0, description="Unit price in cents at time of purchase")
    name: str


class OrderCreate(BaseModel):
    user_id: Optional[int] = None
    status: OrderStatus = OrderStatus.PENDING
    total: int = Field(..., ge=0, description="Order total in cents, shipping included")
    items: List[OrderItem]
    shipping_address: Address
    billing_address: Optional[Address] = None


class Order(OrderCreate):
    id: int
    created_at: datetime


class OrderStatusUpdate(BaseModel):
    status: OrderStatus


# Newsletter

class NewsletterSubscribe(BaseModel):
    email: EmailStr


class Newsletter(BaseModel):
    id: int
    email: EmailStr
    created_at: datetime
