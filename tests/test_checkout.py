"""Tests for checkout: form rules, order snapshot and submission."""

import pytest
from pydantic import ValidationError

import pricing
from checkout import CheckoutForm, build_order, exp_years, place_order
from schemas import OrderStatus


def _form(**overrides):
    data = {
        "first_name": "Anna",
        "last_name": "Verdi",
        "email": "anna@example.com",
        "phone": "3331234567",
        "address1": "Via Roma 12",
        "city": "Milano",
        "state": "MI",
        "postal_code": "20121",
        "country": "IT",
        "card_name": "Anna Verdi",
        "card_number": "4111111111111111",
        "exp_month": "07",
        "exp_year": exp_years()[2],
        "cvv": "123",
    }
    data.update(overrides)
    return CheckoutForm(**data)


class TestCheckoutForm:
    def test_valid_form(self):
        form = _form()
        assert form.same_as_billing is True

    @pytest.mark.parametrize(
        "field,value",
        [
            ("first_name", "A"),
            ("last_name", "V"),
            ("email", "anna-at-example"),
            ("phone", "12345"),
            ("address1", "Via"),
            ("city", "M"),
            ("postal_code", "201"),
            ("card_name", "A"),
            ("card_number", "4111"),
            ("card_number", "41111111111111111111"),
            ("cvv", "12"),
            ("cvv", "12345"),
            ("cvv", "12a"),
            ("exp_month", "13"),
            ("exp_month", "7"),
            ("exp_year", "1999"),
        ],
    )
    def test_rejects_invalid_field(self, field, value):
        with pytest.raises(ValidationError):
            _form(**{field: value})

    def test_four_digit_cvv_and_nineteen_digit_card(self):
        form = _form(cvv="1234", card_number="4111111111111111111")
        assert form.cvv == "1234"


class TestBuildOrder:
    def test_snapshot_and_shipping(self, coordinator):
        coordinator.add_to_cart(2, 1)  # 4999

        order = build_order(_form(), coordinator.cart.items)
        assert order.total == 4999 + 499
        assert order.status == OrderStatus.PENDING
        assert order.user_id is None
        assert [i.model_dump() for i in order.items] == [
            {"product_id": 2, "quantity": 1, "price": 4999, "name": "Sonno Profondo Trim"}
        ]
        assert order.shipping_address.city == "Milano"
        assert order.billing_address is None

    def test_sale_price_is_snapshotted(self, coordinator):
        coordinator.add_to_cart(3, 1)

        order = build_order(_form(), coordinator.cart.items)
        assert order.items[0].price == 5999
        assert order.total == 5999

    def test_separate_billing_copies_shipping(self, coordinator):
        coordinator.add_to_cart(1, 1)

        order = build_order(_form(same_as_billing=False), coordinator.cart.items)
        assert order.billing_address == order.shipping_address


class TestPlaceOrder:
    def test_success_records_order_and_clears_cart(self, coordinator, storage):
        coordinator.add_to_cart(1, 2)  # 7998, ships free

        result = place_order(coordinator, _form())

        assert result.ok
        assert result.redirect_to == "/"
        stored = storage.get_order(result.order["id"])
        assert stored.total == 7998
        assert stored.items[0].name == "Formula Sonno Trim"
        assert coordinator.cart.items == []
        assert coordinator.notifications[-1].title == "Order Placed!"

    def test_card_details_are_not_sent(self, coordinator, storage):
        coordinator.add_to_cart(1, 1)

        result = place_order(coordinator, _form())
        assert "card_number" not in result.order
        assert "cvv" not in result.order

    def test_empty_cart_redirects_to_cart_page(self, coordinator, storage):
        result = place_order(coordinator, _form())

        assert not result.ok
        assert result.redirect_to == "/cart"
        assert storage.get_orders() == []

    def test_failure_keeps_cart_and_notifies(self, coordinator, storage, monkeypatch):
        coordinator.add_to_cart(1, 1)

        def boom(order):
            raise RuntimeError("order book unavailable")

        monkeypatch.setattr(storage, "create_order", boom)
        result = place_order(coordinator, _form())

        assert not result.ok
        assert result.redirect_to is None
        assert coordinator.notifications[-1].title == "Checkout Failed"
        assert [line.product_id for line in coordinator.cart.items] == [1]
        assert storage.get_cart_by_session_id(coordinator.session_id).items[0].product_id == 1


class TestShippingThreshold:
    def test_below_threshold_pays_shipping(self):
        assert pricing.order_total(4999) == 5498

    def test_threshold_is_inclusive(self):
        assert pricing.order_total(5000) == 5000

    def test_above_threshold(self):
        assert pricing.shipping_fee(12000) == 0
