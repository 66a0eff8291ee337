"""Unit tests for the OrderPlacementService domain service."""

import pytest

from storefront.domain.exceptions import OutOfStock, ProductUnavailable
from storefront.domain.model.order import OrderStatus
from storefront.domain.model.submission import OrderSubmission
from storefront.domain.model.value_objects import Money
from storefront.domain.service.order_placement_service import OrderPlacementService
from tests.fakes import FakeOrderRepository, FakeProductRepository, make_form, make_product


def _setup(products=None):
    if products is None:
        products = [
            make_product("1", name="Vase", price="10.00", stock=5),
            make_product("2", name="Cup", price="5.50", stock=2),
        ]
    product_repo = FakeProductRepository(products)
    order_repo = FakeOrderRepository()
    return OrderPlacementService(product_repo, order_repo), product_repo, order_repo


def _submission(*items):
    return OrderSubmission.from_form(make_form(), list(items))


class TestPlaceHappyPath:

    def test_creates_pending_order_with_server_prices(self):
        svc, _, order_repo = _setup()
        order = svc.place(_submission(("1", 2), ("2", 1)))
        assert order.status == OrderStatus.PENDING
        assert order.total_amount == Money.of("25.50")
        assert order_repo.get_by_id(order.id) is order

    def test_deducts_stock(self):
        svc, product_repo, _ = _setup()
        svc.place(_submission(("1", 2), ("2", 2)))
        assert product_repo.get_by_id("1").stock_quantity == 3
        assert product_repo.get_by_id("2").stock_quantity == 0

    def test_copies_customer_details(self):
        svc, _, _ = _setup()
        order = svc.place(_submission(("1", 1)))
        assert order.customer_email == "ivan@example.com"
        assert order.delivery_postal_code == "1000"


class TestPlacePriceLock:

    def test_later_price_change_does_not_affect_order(self):
        svc, product_repo, order_repo = _setup()
        order = svc.place(_submission(("1", 1)))

        vase = product_repo.get_by_id("1")
        vase.update_price(Money.of("99.99"))
        product_repo.save(vase)

        saved = order_repo.get_by_id(order.id)
        assert saved.total_amount == Money.of("10.00")
        assert saved.lines[0].unit_price == Money.of("10.00")


class TestPlaceValidation:

    def test_insufficient_stock_rejected(self):
        svc, _, _ = _setup()
        with pytest.raises(OutOfStock) as info:
            svc.place(_submission(("2", 3)))
        assert info.value.available == 2

    def test_failure_on_second_line_leaves_first_untouched(self):
        svc, product_repo, order_repo = _setup()
        with pytest.raises(OutOfStock):
            svc.place(_submission(("1", 2), ("2", 3)))
        assert product_repo.get_by_id("1").stock_quantity == 5
        assert order_repo.list_all() == []

    def test_inactive_product_rejected(self):
        svc, _, _ = _setup([make_product("1", active=False)])
        with pytest.raises(ProductUnavailable) as info:
            svc.place(_submission(("1", 1)))
        assert info.value.product_id == "1"

    def test_deleted_product_rejected(self):
        svc, _, _ = _setup()
        with pytest.raises(ProductUnavailable):
            svc.place(_submission(("404", 1)))


class TestPlaceStorageFailure:

    def test_failed_order_save_restores_stock(self):
        svc, product_repo, order_repo = _setup()
        order_repo.fail_next_save = True

        with pytest.raises(OSError):
            svc.place(_submission(("1", 2), ("2", 2)))

        assert product_repo.get_by_id("1").stock_quantity == 5
        assert product_repo.get_by_id("2").stock_quantity == 2
        assert order_repo.list_all() == []

    def test_retry_after_failure_takes_stock_once(self):
        svc, product_repo, order_repo = _setup()
        order_repo.fail_next_save = True
        with pytest.raises(OSError):
            svc.place(_submission(("1", 2)))

        svc.place(_submission(("1", 2)))
        assert product_repo.get_by_id("1").stock_quantity == 3
        assert len(order_repo.list_all()) == 1
