"""Tests for cart_pricing.infra.json_storage and infra.records."""

import json

import pytest

from cart_pricing import create_storage
from cart_pricing.defaults import DEFAULT_COUPONS, DEFAULT_PRODUCTS
from cart_pricing.domain.models import Coupon, DiscountTier, DiscountType, Product
from cart_pricing.infra.json_storage import JsonStorage
from cart_pricing.infra.memory import MemoryStorage
from cart_pricing.infra.records import (
    coupon_from_record,
    coupon_to_record,
    product_from_record,
    product_to_record,
)


# ------------------------------------------------------------------ #
#  Factory                                                              #
# ------------------------------------------------------------------ #


class TestFactory:
    def test_create_json_storage(self, tmp_path):
        storage = create_storage("json", path=tmp_path / "s.json")
        assert isinstance(storage, JsonStorage)
        assert storage.backend == "json"

    def test_create_memory_storage(self):
        storage = create_storage("MEMORY")
        assert isinstance(storage, MemoryStorage)
        assert storage.backend == "memory"

    def test_unknown_backend(self):
        with pytest.raises(ValueError, match="Unsupported storage backend"):
            create_storage("redis")


# ------------------------------------------------------------------ #
#  Record mapping                                                      #
# ------------------------------------------------------------------ #


class TestRecords:
    def test_product_from_storefront_record(self):
        record = {
            "id": "p1",
            "name": "Product 1",
            "price": 10000,
            "stock": 20,
            "discounts": [{"quantity": 20, "rate": 0.2}, {"quantity": 10, "rate": 0.1}],
            "description": "Best-selling item",
            "isRecommended": True,
        }
        product = product_from_record(record)
        assert product.discounts == (DiscountTier(10, 0.1), DiscountTier(20, 0.2))
        assert product.is_recommended is True

    def test_product_optional_fields(self):
        product = product_from_record(
            {"id": "p9", "name": "Bare", "price": 1, "stock": 0},
        )
        assert product.discounts == ()
        assert product.description == ""
        assert product.is_recommended is False

    def test_product_record_field_names(self):
        record = product_to_record(DEFAULT_PRODUCTS[0])
        assert set(record) == {
            "id", "name", "price", "stock", "discounts", "description", "isRecommended",
        }
        assert record["discounts"][0] == {"quantity": 10, "rate": 0.1}

    def test_coupon_record_field_names(self):
        record = coupon_to_record(DEFAULT_COUPONS[1])
        assert record == {
            "name": "10% off",
            "code": "PERCENT10",
            "discountType": "percentage",
            "discountValue": 10,
        }

    def test_coupon_from_record(self):
        coupon = coupon_from_record(
            {"name": "N", "code": "C", "discountType": "amount", "discountValue": 500},
        )
        assert coupon == Coupon("C", "N", DiscountType.AMOUNT, 500)

    def test_unknown_discount_type_raises(self):
        with pytest.raises(ValueError):
            coupon_from_record(
                {"name": "N", "code": "C", "discountType": "bogo", "discountValue": 1},
            )


# ------------------------------------------------------------------ #
#  JsonStorage                                                         #
# ------------------------------------------------------------------ #


class TestJsonStorage:
    def test_missing_file_gives_defaults(self, tmp_path):
        storage = JsonStorage(tmp_path / "none.json")
        assert storage.load_products() == list(DEFAULT_PRODUCTS)
        assert storage.load_coupons() == list(DEFAULT_COUPONS)

    def test_save_and_load_products(self, tmp_path):
        storage = JsonStorage(tmp_path / "nested" / "s.json")
        product = Product(id="x", name="X", price=5, stock=2,
                          discounts=(DiscountTier(2, 0.5),))
        storage.save_products([product])
        assert storage.load_products() == [product]

    def test_keys_are_independent(self, tmp_path):
        path = tmp_path / "s.json"
        storage = JsonStorage(path)
        storage.save_coupons([Coupon("ONLY", "Only", DiscountType.AMOUNT, 1)])
        storage.save_products([Product(id="x", name="X", price=5, stock=2)])

        document = json.loads(path.read_text(encoding="utf-8"))
        assert set(document) == {"products", "coupons"}
        assert [c.code for c in storage.load_coupons()] == ["ONLY"]

    def test_products_only_document_gives_default_coupons(self, tmp_path):
        path = tmp_path / "s.json"
        path.write_text(json.dumps({"products": []}), encoding="utf-8")
        storage = JsonStorage(path)
        assert storage.load_products() == []
        assert storage.load_coupons() == list(DEFAULT_COUPONS)

    def test_corrupt_file_falls_back(self, tmp_path):
        path = tmp_path / "s.json"
        path.write_text("{not json", encoding="utf-8")
        assert JsonStorage(path).load_products() == list(DEFAULT_PRODUCTS)

    def test_malformed_records_fall_back(self, tmp_path):
        path = tmp_path / "s.json"
        path.write_text(
            json.dumps({"products": [{"id": "p1", "price": -5}]}), encoding="utf-8",
        )
        assert JsonStorage(path).load_products() == list(DEFAULT_PRODUCTS)

    def test_duplicate_codes_fall_back(self, tmp_path):
        path = tmp_path / "s.json"
        record = {"name": "X", "code": "X", "discountType": "amount", "discountValue": 1}
        path.write_text(
            json.dumps({"coupons": [record, record], "products": []}), encoding="utf-8",
        )
        storage = JsonStorage(path)
        assert storage.load_coupons() == list(DEFAULT_COUPONS)
        assert storage.load_products() == []

    @pytest.mark.parametrize("value", ["150", "NaN", "Infinity", "0"])
    def test_invalid_coupon_falls_back(self, tmp_path, value):
        path = tmp_path / "s.json"
        path.write_text(
            '{"coupons": [{"name": "N", "code": "C", '
            f'"discountType": "percentage", "discountValue": {value}}}]}}',
            encoding="utf-8",
        )
        assert JsonStorage(path).load_coupons() == list(DEFAULT_COUPONS)

    def test_duplicate_product_ids_fall_back(self, tmp_path):
        path = tmp_path / "s.json"
        record = {"id": "x", "name": "X", "price": 5, "stock": 2}
        path.write_text(json.dumps({"products": [record, record]}), encoding="utf-8")
        assert JsonStorage(path).load_products() == list(DEFAULT_PRODUCTS)

    def test_non_list_value_falls_back(self, tmp_path):
        path = tmp_path / "s.json"
        path.write_text(json.dumps({"coupons": {"a": 1}}), encoding="utf-8")
        assert JsonStorage(path).load_coupons() == list(DEFAULT_COUPONS)

    def test_non_object_document_falls_back(self, tmp_path):
        path = tmp_path / "s.json"
        path.write_text("[1, 2, 3]", encoding="utf-8")
        assert JsonStorage(path).load_coupons() == list(DEFAULT_COUPONS)

    def test_save_overwrites_corrupt_document(self, tmp_path):
        path = tmp_path / "s.json"
        path.write_text("garbage", encoding="utf-8")
        storage = JsonStorage(path)
        storage.save_coupons([])
        assert json.loads(path.read_text(encoding="utf-8")) == {"coupons": []}


class TestMemoryStorage:
    def test_defaults(self):
        storage = MemoryStorage()
        assert storage.load_products() == list(DEFAULT_PRODUCTS)

    def test_explicit_empty(self):
        storage = MemoryStorage(products=[], coupons=[])
        assert storage.load_products() == []
        assert storage.load_coupons() == []

    def test_save_replaces(self):
        storage = MemoryStorage()
        storage.save_coupons([])
        assert storage.load_coupons() == []
