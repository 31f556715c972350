"""Tests for the in-memory store."""

import pytest

from database import MemStorage, Storage
from schemas import CartCreate, CartItem, CartUpdate, OrderCreate, OrderStatus, ProductCreate, UserCreate


def _product(**overrides):
    data = {
        "name": "Cuscino Memory",
        "slug": "cuscino-memory",
        "description": "Cuscino ergonomico in memory foam.",
        "price": 2999,
        "category": "accessories",
        "image_url": "https://example.com/pillow.jpg",
        "benefits": ["Supporto cervicale"],
    }
    data.update(overrides)
    return ProductCreate(**data)


def _order(user_id=None, total=5498):
    return OrderCreate(
        user_id=user_id,
        total=total,
        items=[{"product_id": 2, "quantity": 1, "price": 4999, "name": "Sonno Profondo Trim"}],
        shipping_address={
            "first_name": "Anna",
            "last_name": "Verdi",
            "address1": "Via Roma 12",
            "city": "Milano",
            "state": "MI",
            "postal_code": "20121",
            "country": "IT",
        },
    )


class TestSeedData:
    def test_seeded_collections(self, storage):
        counts = storage.counts()
        assert counts["products"] == 3
        assert counts["articles"] == 3
        assert counts["testimonials"] == 3
        assert counts["faqs"] == 5
        assert counts["users"] == counts["carts"] == counts["orders"] == counts["newsletters"] == 0

    def test_unseeded_store_is_empty(self):
        assert MemStorage(seed=False).get_products() == []

    def test_ids_start_at_one(self, storage):
        assert [p.id for p in storage.get_products()] == [1, 2, 3]

    def test_faqs_are_ordered(self, storage):
        orders = [f.order for f in storage.get_faqs()]
        assert orders == sorted(orders)


class TestProducts:
    def test_created_product_round_trips_by_slug(self, storage):
        payload = _product()
        created = storage.create_product(payload)

        fetched = storage.get_product_by_slug("cuscino-memory")
        assert fetched.id == created.id == 4
        assert fetched.created_at is not None
        assert fetched.model_dump(exclude={"id", "created_at"}) == payload.model_dump()

    def test_missing_slug_returns_none(self, storage):
        assert storage.get_product_by_slug("nope") is None
        assert storage.get_product(999) is None

    def test_filters(self, storage):
        assert [p.slug for p in storage.get_featured_products()] == ["formula-sonno-trim"]
        assert [p.slug for p in storage.get_best_seller_products()] == ["formula-sonno-trim"]
        assert [p.slug for p in storage.get_products_by_category("bundles")] == ["bundle-sonno-relax"]
        assert storage.get_products_by_category("unknown") == []

    def test_returned_records_are_copies(self, storage):
        product = storage.get_product(1)
        product.benefits.append("tampered")
        assert "tampered" not in storage.get_product(1).benefits


class TestArticles:
    def test_lookup_and_filters(self, storage):
        article = storage.get_article_by_slug("consigli-igiene-sonno-riposo-migliore")
        assert article.category.value == "sleep_tips"
        assert len(storage.get_featured_articles()) == 3
        assert [a.slug for a in storage.get_articles_by_category("supplements")] == [
            "scienza-dietro-integratori-sonno"
        ]


class TestUsers:
    def test_lookup_by_username_and_email(self, storage):
        user = storage.create_user(
            UserCreate(username="giulia", password="segreto", email="giulia@example.com"), "salt$hash"
        )
        assert storage.get_user(user.id).username == "giulia"
        assert storage.get_user_by_username("giulia").id == user.id
        assert storage.get_user_by_email("GIULIA@example.com").id == user.id
        assert storage.get_user_by_username("marco") is None


class TestCarts:
    def test_create_then_fetch_by_session(self, storage):
        cart = storage.create_cart(CartCreate(session_id="s1", items=[CartItem(product_id=1, quantity=2)]))

        fetched = storage.get_cart_by_session_id("s1")
        assert fetched.id == cart.id
        assert [i.model_dump() for i in fetched.items] == [{"product_id": 1, "quantity": 2}]
        assert fetched.created_at == fetched.updated_at

    def test_update_merges_and_refreshes_timestamp(self, storage):
        cart = storage.create_cart(CartCreate(session_id="s1", user_id=7))

        updated = storage.update_cart(cart.id, CartUpdate(items=[CartItem(product_id=3, quantity=1)]))
        assert updated.user_id == 7
        assert updated.session_id == "s1"
        assert updated.items[0].product_id == 3
        assert updated.updated_at >= cart.updated_at

    def test_update_missing_cart(self, storage):
        assert storage.update_cart(42, CartUpdate(items=[])) is None

    def test_delete_then_fetch(self, storage):
        cart = storage.create_cart(CartCreate(session_id="s1"))

        assert storage.delete_cart(cart.id) is True
        assert storage.get_cart(cart.id) is None
        assert storage.get_cart_by_session_id("s1") is None
        assert storage.delete_cart(cart.id) is False

    def test_newest_cart_wins_for_a_session(self, storage):
        first = storage.create_cart(CartCreate(session_id="s1"))
        second = storage.create_cart(CartCreate(session_id="s1"))
        assert storage.get_cart_by_session_id("s1").id == second.id

        storage.delete_cart(second.id)
        assert storage.get_cart_by_session_id("s1").id == first.id


class TestOrders:
    def test_create_and_filter_by_user(self, storage):
        mine = storage.create_order(_order(user_id=1))
        storage.create_order(_order(user_id=2))
        storage.create_order(_order())

        assert [o.id for o in storage.get_user_orders(1)] == [mine.id]
        assert len(storage.get_orders()) == 3
        assert storage.get_order(mine.id).status == OrderStatus.PENDING

    def test_update_status(self, storage):
        order = storage.create_order(_order())

        updated = storage.update_order_status(order.id, OrderStatus.SHIPPED)
        assert updated.status == OrderStatus.SHIPPED
        assert storage.get_order(order.id).status == OrderStatus.SHIPPED
        assert storage.update_order_status(99, OrderStatus.SHIPPED) is None


class TestNewsletter:
    def test_subscribe_is_idempotent(self, storage):
        first = storage.subscribe_to_newsletter("notte@example.com")
        second = storage.subscribe_to_newsletter("notte@example.com")

        assert first == second
        assert storage.counts()["newsletters"] == 1
        assert storage.is_email_subscribed("notte@example.com")

    def test_unknown_email_not_subscribed(self, storage):
        assert not storage.is_email_subscribed("ghost@example.com")


@pytest.mark.parametrize("category", ["supplements", "bundles", "accessories"])
def test_every_category_is_filterable(storage, category):
    storage.create_product(_product(slug=f"extra-{category}", category=category))
    assert any(p.slug == f"extra-{category}" for p in storage.get_products_by_category(category))


class TestStorageInterface:
    def test_counts_is_part_of_the_contract(self):
        assert "counts" in Storage.__abstractmethods__

    def test_backend_without_counts_cannot_be_built(self):
        abstract = set(Storage.__abstractmethods__) - {"counts"}
        Incomplete = type("Incomplete", (Storage,), {name: lambda self, *a, **kw: None for name in abstract})

        with pytest.raises(TypeError, match="counts"):
            Incomplete()
