"""Integration tests for order listing, detail and status change use cases."""

import pytest

from storefront.application.change_order_status import ChangeOrderStatusHandler
from storefront.application.show_order import ListOrdersHandler, ShowOrderHandler
from storefront.domain.exceptions import EntityNotFoundError, InvalidTransition
from storefront.domain.model.order import OrderStatus
from tests.fakes import FakeOrderGateway, make_order


def _gateway(*orders):
    gateway = FakeOrderGateway()
    for order in orders:
        gateway.orders.save(order)
    return gateway


class TestShowOrder:

    def test_detail_includes_lines_and_next_statuses(self):
        gateway = _gateway(make_order())
        dto = ShowOrderHandler(gateway).handle("order-1")
        assert dto.total == "20.00"
        assert dto.status == "pending"
        assert [(i.product_name, i.quantity, i.subtotal) for i in dto.items] == [
            ("Clay Vase", 2, "20.00")
        ]
        assert dto.next_statuses == ["processing", "cancelled"]

    def test_unknown_order_rejected(self):
        with pytest.raises(EntityNotFoundError):
            ShowOrderHandler(_gateway()).handle("nope")


class TestListOrders:

    def test_lists_newest_first(self):
        gateway = _gateway(make_order(order_id="a"), make_order(order_id="b"))
        assert [o.id for o in ListOrdersHandler(gateway).handle()] == ["b", "a"]


class TestChangeOrderStatus:

    def test_moves_order_and_returns_refreshed_detail(self):
        gateway = _gateway(make_order())
        dto = ChangeOrderStatusHandler(gateway).handle("order-1", "processing")
        assert dto.status == "processing"
        assert dto.next_statuses == ["shipped", "cancelled"]
        assert gateway.orders.get_by_id("order-1").status == OrderStatus.PROCESSING

    def test_illegal_move_rejected(self):
        gateway = _gateway(make_order())
        with pytest.raises(InvalidTransition):
            ChangeOrderStatusHandler(gateway).handle("order-1", "delivered")
        assert gateway.status_calls == []

    def test_unknown_order_rejected(self):
        with pytest.raises(EntityNotFoundError):
            ChangeOrderStatusHandler(_gateway()).handle("nope", "processing")

    def test_same_status_returns_detail_without_gateway_write(self):
        gateway = _gateway(make_order())
        dto = ChangeOrderStatusHandler(gateway).handle("order-1", "pending")
        assert dto.id == "order-1"
        assert dto.status == "pending"
        assert gateway.status_calls == []
