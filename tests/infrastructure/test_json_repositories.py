"""Tests for the JSON-file-backed repositories, using pytest's tmp_path."""

import pytest

from storefront.domain.exceptions import TransportFailure
from storefront.domain.model.cart import Cart
from storefront.domain.model.order import OrderStatus
from storefront.domain.model.value_objects import Money
from storefront.infrastructure.persistence.json_cart_repository import JsonCartRepository
from storefront.infrastructure.persistence.json_order_repository import JsonOrderRepository
from storefront.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from tests.fakes import make_order, make_product


class TestJsonProductRepository:

    def test_creates_missing_file(self, tmp_path):
        path = tmp_path / "nested" / "products.json"
        repo = JsonProductRepository(path)
        assert path.exists()
        assert repo.list_all() == []

    def test_save_and_reload(self, tmp_path):
        path = tmp_path / "products.json"
        JsonProductRepository(path).save(make_product(price="10.05", stock=3, active=False))

        product = JsonProductRepository(path).get_by_id("1")
        assert product.price == Money.of("10.05")
        assert product.stock_quantity == 3
        assert product.is_active is False

    def test_save_all_upserts(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        repo.save(make_product("1", stock=5))
        a = make_product("1", stock=4)
        b = make_product("2", name="Cup", stock=1)
        repo.save_all([a, b])
        assert [(p.id, p.stock_quantity) for p in repo.list_all()] == [("1", 4), ("2", 1)]

    def test_get_by_name_is_case_insensitive(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        repo.save(make_product(name="Clay Vase"))
        assert repo.get_by_name("clay vase").id == "1"

    def test_no_temp_file_left_behind(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        repo.save(make_product())
        assert sorted(p.name for p in tmp_path.iterdir()) == ["products.json"]

    def test_delete_removes_product(self, tmp_path):
        path = tmp_path / "products.json"
        JsonProductRepository(path).save_all([make_product("1"), make_product("2", name="Cup")])
        JsonProductRepository(path).delete("1")
        repo = JsonProductRepository(path)
        assert repo.get_by_id("1") is None
        assert repo.get_by_id("2").name == "Cup"

    def test_delete_unknown_is_ignored(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        repo.save(make_product())
        repo.delete("9")
        assert len(repo.list_all()) == 1


class TestJsonOrderRepository:

    def test_assigns_uuid_on_first_save(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        order = make_order()
        order.id = None
        repo.save(order)
        assert order.id is not None and len(order.id) == 36

    def test_round_trip_keeps_stored_total(self, tmp_path):
        path = tmp_path / "orders.json"
        order = make_order(OrderStatus.SHIPPED)
        JsonOrderRepository(path).save(order)

        loaded = JsonOrderRepository(path).get_by_id(order.id)
        assert loaded.status == OrderStatus.SHIPPED
        assert loaded.total_amount == Money.of("20.00")
        assert loaded.lines[0].product_name == "Clay Vase"
        assert loaded.created_at == order.created_at

    def test_upsert_replaces_existing(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        order = make_order()
        repo.save(order)
        order.transition_to(OrderStatus.PROCESSING)
        repo.save(order)
        assert len(repo.list_all()) == 1
        assert repo.get_by_id(order.id).status == OrderStatus.PROCESSING

    def test_unknown_id_returns_none(self, tmp_path):
        assert JsonOrderRepository(tmp_path / "orders.json").get_by_id("x") is None

    def test_detach_product_persists(self, tmp_path):
        path = tmp_path / "orders.json"
        order = make_order()
        JsonOrderRepository(path).save(order)

        assert JsonOrderRepository(path).detach_product("1") == 1
        stored = JsonOrderRepository(path).get_by_id(order.id)
        assert stored.lines[0].product_id is None
        assert stored.total_amount == Money.of("20.00")
        assert JsonOrderRepository(path).detach_product("1") == 0


class TestJsonCartRepository:

    def test_unknown_session_returns_none(self, tmp_path):
        assert JsonCartRepository(tmp_path / "carts.json").load("s1") is None

    def test_round_trip_keeps_totals(self, tmp_path):
        path = tmp_path / "carts.json"
        cart = Cart()
        cart.add_item(make_product("A", name="Vase", price="10.00"), 2)
        cart.add_item(make_product("B", name="Cup", price="5.50"), 1)
        JsonCartRepository(path).save("s1", cart)

        restored = JsonCartRepository(path).load("s1")
        assert restored == cart
        assert restored.total_price == Money.of("25.50")
        assert restored.total_items == 3

    def test_saving_empty_cart_drops_session(self, tmp_path):
        repo = JsonCartRepository(tmp_path / "carts.json")
        cart = Cart()
        cart.add_item(make_product(), 1)
        repo.save("s1", cart)
        repo.save("s1", Cart())
        assert repo.load("s1") is None

    def test_sessions_do_not_overwrite_each_other(self, tmp_path):
        repo = JsonCartRepository(tmp_path / "carts.json")
        alice = Cart()
        alice.add_item(make_product("1"), 1)
        bob = Cart()
        bob.add_item(make_product("2", name="Cup"), 2)
        repo.save("alice", alice)
        repo.save("bob", bob)
        assert repo.load("alice").total_items == 1
        assert repo.load("bob").total_items == 2

    def test_corrupt_file_is_transport_failure(self, tmp_path):
        path = tmp_path / "carts.json"
        path.write_text("{", encoding="utf-8")
        repo = JsonCartRepository(path)
        with pytest.raises(TransportFailure, match="carts.json"):
            repo.load("s1")
        with pytest.raises(TransportFailure):
            repo.save("s1", Cart())
