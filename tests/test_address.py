import pytest

from shopify_api import Descriptor, MissingParentReference
from shopify_api.address import pluralize

IMAGES = Descriptor("image", prefix="/admin/products/:product_id/")


@pytest.mark.parametrize(
    "name, expect",
    [
        ("product", "products"),
        ("country", "countries"),
        ("custom_collection", "custom_collections"),
        ("key", "keys"),
    ],
)
def test_pluralize(name, expect):
    assert pluralize(name) == expect


class TestDescriptor:
    def test_top_level(self):
        products = Descriptor("product")
        assert products.placeholders == frozenset()
        assert products.collection_path() == ("/admin/products", {})
        assert products.member_path(4) == ("/admin/products/4", {})

    def test_explicit_plural(self):
        assert Descriptor("person", plural="people").collection_path() == (
            "/admin/people",
            {},
        )

    def test_prefix_without_trailing_slash(self):
        d = Descriptor("image", prefix="/admin/products/:product_id")
        assert d.prefix == "/admin/products/:product_id/"

    def test_placeholders(self):
        assert IMAGES.placeholders == frozenset(["product_id"])

    def test_resolve_from_params(self):
        assert IMAGES.collection_path({"product_id": 7}) == (
            "/admin/products/7/images",
            {},
        )

    def test_resolve_from_parent_refs(self):
        assert IMAGES.member_path(3, parent_refs={"product_id": 7}) == (
            "/admin/products/7/images/3",
            {},
        )

    def test_params_take_precedence(self):
        path, _ = IMAGES.collection_path(
            {"product_id": 8}, parent_refs={"product_id": 7}
        )
        assert path == "/admin/products/8/images"

    def test_none_param_falls_back_to_parent_ref(self):
        path, _ = IMAGES.collection_path(
            {"product_id": None}, parent_refs={"product_id": 7}
        )
        assert path == "/admin/products/7/images"

    def test_missing(self):
        with pytest.raises(MissingParentReference) as exc:
            IMAGES.collection_path({"since_id": 5})
        assert exc.value.placeholder == "product_id"
        assert exc.value.resource == "image"
        assert "product_id" in str(exc.value)

    def test_empty_value_is_missing(self):
        with pytest.raises(MissingParentReference):
            IMAGES.collection_path({"product_id": ""})
        with pytest.raises(MissingParentReference):
            IMAGES.member_path(3, parent_refs={"product_id": ""})
        path, _ = IMAGES.collection_path(
            {"product_id": ""}, parent_refs={"product_id": 7}
        )
        assert path == "/admin/products/7/images"
        assert IMAGES.parent_refs({"product_id": ""}) == {}

    def test_missing_is_lookup_error(self):
        with pytest.raises(LookupError):
            IMAGES.member_path(1)

    def test_remaining_params(self):
        assert IMAGES.collection_path(
            {"product_id": 7, "since_id": 5, "limit": 10}
        ) == ("/admin/products/7/images", {"since_id": 5, "limit": 10})

    def test_deep_nesting(self):
        d = Descriptor("thing", prefix="/admin/a/:a_id/b/:b_id/c/:c_id/")
        assert d.placeholders == frozenset(["a_id", "b_id", "c_id"])
        path, rest = d.member_path(
            9, {"a_id": 1, "c_id": 3}, parent_refs={"b_id": 2}
        )
        assert path == "/admin/a/1/b/2/c/3/things/9"
        assert rest == {}

    def test_action_path(self):
        orders = Descriptor("order")
        assert orders.action_path("close", 1) == ("/admin/orders/1/close", {})
        assert orders.action_path("count") == ("/admin/orders/count", {})

    def test_parent_refs(self):
        assert IMAGES.parent_refs(
            {"product_id": 8, "limit": 4}, {"product_id": 7}
        ) == {"product_id": 8}
        assert IMAGES.parent_refs(None, {"product_id": 7}) == {
            "product_id": 7
        }
        assert IMAGES.parent_refs() == {}

    def test_equality(self):
        assert Descriptor("order") == Descriptor("order")
        assert Descriptor("order") != Descriptor("product")
        assert hash(Descriptor("order")) == hash(Descriptor("order"))

    def test_repr(self):
        assert "image" in repr(IMAGES)
