from collections.abc import Mapping
from operator import attrgetter

import pytest

import shopify_api


class AlwaysEquals:
    def __eq__(self, other):
        return True

    def __ne__(self, other):
        return False


class AlwaysInEquals:
    def __eq__(self, other):
        return False

    def __ne__(self, other):
        return True


class FrozenDict(Mapping):
    def __init__(self, inner):
        self._inner = dict(inner)

    __len__ = property(attrgetter("_inner.__len__"))
    __iter__ = property(attrgetter("_inner.__iter__"))
    __getitem__ = property(attrgetter("_inner.__getitem__"))
    __repr__ = property(attrgetter("_inner.__repr__"))


class TestRequest:
    def test_defaults(self):
        req = shopify_api.Request("GET", "/admin/shop.json")
        assert req == shopify_api.Request(
            "GET", "/admin/shop.json", params={}, headers={}
        )

    def test_with_headers(self):
        req = shopify_api.GET("/admin/shop.json", headers={"foo": "bla"})
        assert req.with_headers({"other-header": 3}) == shopify_api.GET(
            "/admin/shop.json", headers={"foo": "bla", "other-header": 3}
        )

    def test_with_headers_other_mappingtype(self):
        req = shopify_api.GET("/admin", headers=FrozenDict({"foo": "bar"}))
        added = req.with_headers({"bla": "qux"})
        assert added == shopify_api.GET(
            "/admin", headers={"foo": "bar", "bla": "qux"}
        )
        assert isinstance(added.headers, FrozenDict)

    def test_with_prefix(self):
        req = shopify_api.GET("/admin/orders.json")
        assert req.with_prefix("https://myshop.myshopify.com") == (
            shopify_api.GET("https://myshop.myshopify.com/admin/orders.json")
        )

    def test_default_mappings_are_read_only(self):
        req = shopify_api.Request("GET", "/admin/shop.json")
        assert isinstance(req.headers, shopify_api.FrozenMap)
        with pytest.raises(TypeError):
            req.headers["Accept"] = "text/html"
        with pytest.raises(TypeError):
            req.params["limit"] = 1
        assert shopify_api.Request("GET", "/admin").headers == {}

    def test_get_shortcut(self):
        assert shopify_api.GET("/admin", params={"a": 1}) == (
            shopify_api.Request("GET", "/admin", params={"a": 1})
        )

    def test_equality(self):
        req = shopify_api.Request("GET", "/admin")
        other = req.replace()
        assert req == other
        assert not req != other

        assert not req == req.replace(headers={"foo": "bar"})
        assert req != req.replace(headers={"foo": "bar"})

        assert req == AlwaysEquals()
        assert not req != AlwaysEquals()
        assert req != AlwaysInEquals()
        assert not req == AlwaysInEquals()

    def test_repr(self):
        req = shopify_api.GET("/admin/shop.json")
        assert "GET /admin/shop.json" in repr(req)

    def test_repr_masks_authorization(self):
        req = shopify_api.GET(
            "/admin", headers={"Authorization": "Basic c2VjcmV0"}
        )
        assert "c2VjcmV0" not in repr(req)
        assert "***" in repr(req)


class TestResponse:
    def test_equality(self):
        rsp = shopify_api.Response(204)
        other = rsp.replace()
        assert rsp == other
        assert not rsp != other

        assert not rsp == rsp.replace(headers={"foo": "bar"})
        assert rsp != rsp.replace(headers={"foo": "bar"})

        assert not rsp == object()
        assert rsp != object()

    def test_repr(self):
        assert "404" in repr(shopify_api.Response(404))


def test_prefix_adder():
    req = shopify_api.GET("/admin")
    adder = shopify_api.prefix_adder("http://myshop.myshopify.com")
    assert adder(req) == shopify_api.GET("http://myshop.myshopify.com/admin")


def test_header_adder():
    req = shopify_api.GET("/admin", headers={"Accept": "application/json"})
    adder = shopify_api.header_adder({"Authorization": "my-auth"})
    assert adder(req) == shopify_api.GET(
        "/admin",
        headers={"Accept": "application/json", "Authorization": "my-auth"},
    )


def test_basic_auth():
    req = shopify_api.basic_auth(("user", "pw"))(shopify_api.GET("/admin"))
    assert req.headers == {"Authorization": "Basic dXNlcjpwdw=="}
