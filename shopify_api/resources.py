"""The admin API's resource types.

Each resource type is a module-level object exposing queries:

>>> run = executor(auth=session)
>>> order = run(orders.find(450789469))
>>> run(orders.close(order)).status
'closed'
>>> run(articles.all({'blog_id': 241253187}))
[<Record 134645308>, ...]
"""
import base64
import enum
import re
from collections.abc import Mapping
from decimal import Decimal
from urllib.parse import urlsplit, urlunsplit

from . import formats
from .address import Descriptor
from .http import GET
from .resource import (
    COLLECTION,
    MEMBER,
    Facade,
    Operation,
    Record,
    ResourceClient,
)

__all__ = [
    "Shop",
    "Product",
    "Image",
    "ImageSize",
    "Order",
    "BillingAddress",
    "ShippingAddress",
    "LineItem",
    "ShippingLine",
    "Payment",
    "PaymentKind",
    "Payments",
    "variant_url",
    "shop",
    "products",
    "variants",
    "images",
    "orders",
    "payments",
    "sales",
    "authorizations",
    "blogs",
    "articles",
    "countries",
    "provinces",
    "pages",
    "custom_collections",
]

PRODUCT_SCOPE = "/admin/products/:product_id/"
ORDER_SCOPE = "/admin/orders/:order_id/"
BLOG_SCOPE = "/admin/blogs/:blog_id/"
COUNTRY_SCOPE = "/admin/countries/:country_id/"


class Shop(Record):
    __slots__ = ()


class ShopAccessor(object):
    """The shop of the session. A shop can only ever see itself,
    so there is no lookup by id; only :meth:`current`."""

    __slots__ = ()
    path = "/admin/shop"

    def current(self):
        return Operation(
            GET(self.path + formats.EXTENSION, headers=formats.HEADERS),
            _load_shop,
        )

    def __repr__(self):
        return "<ShopAccessor {}>".format(self.path)


def _load_shop(response):
    data = formats.unwrap(formats.load(response.content), "shop")
    return Shop(data, persisted=True)


class ImageSize(enum.Enum):
    PICO = "pico"
    ICON = "icon"
    THUMB = "thumb"
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"
    ORIGINAL = "original"


_FILE_EXTENSION = re.compile(r"\.(\w{2,4})$")


def variant_url(src: str, size) -> str:
    """The url of a size variant of an image.

    The size is inserted before the extension of the file name,
    leaving the rest of the url alone:

    >>> variant_url('http://cdn.shopify.com/s/files/foo.jpg?v=1', 'thumb')
    'http://cdn.shopify.com/s/files/foo_thumb.jpg?v=1'

    Only apply this to the canonical url, not to a variant url.

    Parameters
    ----------
    src: str
        the image's canonical url
    size: ImageSize or str
        the size variant
    """
    size = ImageSize(size)
    parts = urlsplit(src)
    head, sep, filename = parts.path.rpartition("/")
    filename = _FILE_EXTENSION.sub(
        r"_{}.\1".format(size.value), filename
    )
    return urlunsplit(parts._replace(path=head + sep + filename))


class Image(Record):
    __slots__ = ()

    def variant(self, size) -> str:
        """The url of this image in the given size"""
        return variant_url(self.src, size)

    def attach(self, data: bytes, filename=None):
        """Set the image contents to upload with the next save"""
        self.attachment = base64.b64encode(data).decode("ascii")
        if filename is not None:
            self.filename = filename


def _price(variant):
    value = variant["price"] if isinstance(variant, Mapping) else variant.price
    return Decimal(str(value))


def _money(amount):
    return "{:.2f}".format(amount)


class Product(Record):
    __slots__ = ()

    def price_range(self) -> str:
        """The price, or the range of prices over the product's variants

        Raises
        ------
        ValueError
            if the product has no variants
        """
        prices = [_price(v) for v in self.variants]
        if not prices:
            raise ValueError("product {} has no variants".format(self.id))
        low, high = min(prices), max(prices)
        if low == high:
            return _money(low)
        return "{} - {}".format(_money(low), _money(high))

    def storefront_url(self, session) -> str:
        """The product's page in the shop's storefront"""
        return "{}/products/{}".format(session.url, self.handle)


class ShippingAddress(Record):
    __slots__ = ()


class BillingAddress(Record):
    __slots__ = ()

    @property
    def name(self):
        return "{} {}".format(self.first_name, self.last_name)


class LineItem(Record):
    __slots__ = ()


class ShippingLine(Record):
    __slots__ = ()


def _wrap(value, model):
    return model(value) if isinstance(value, Mapping) else value


class Order(Record):
    """An order. Its nested addresses, line items and shipping lines
    are wrapped in their own record types on access."""

    __slots__ = ()

    def _one(self, key, model):
        value = self.attributes.get(key)
        return None if value is None else _wrap(value, model)

    def _many(self, key, model):
        return [_wrap(v, model) for v in self.attributes.get(key) or ()]

    @property
    def billing_address(self):
        return self._one("billing_address", BillingAddress)

    @property
    def shipping_address(self):
        return self._one("shipping_address", ShippingAddress)

    @property
    def line_items(self):
        return self._many("line_items", LineItem)

    @property
    def shipping_lines(self):
        return self._many("shipping_lines", ShippingLine)


class Payment(Record):
    __slots__ = ()


class PaymentKind(enum.Enum):
    """Which wire resource a :class:`Payments` facade addresses"""

    PAYMENT = "payment"
    SALE = "sale"
    AUTHORIZATION = "authorization"


class Products(Facade):
    __slots__ = ()

    def share(self):
        """Share all products of the shop with the marketplace"""
        return self.dispatch_action("share", COLLECTION, "POST")

    def unshare(self):
        return self.dispatch_action("share", COLLECTION, "DELETE")

    def variants(self, product):
        return variants.all({"product_id": product.id})

    def images(self, product):
        return images.all({"product_id": product.id})


class Orders(Facade):
    """Orders, which are either open or closed.

    ``close`` and ``open`` are not checked against the current status:
    the order is reloaded with whatever the server answers.
    """

    __slots__ = ()

    def close(self, order):
        return self.dispatch_action("close", MEMBER, "POST", record=order)

    def open(self, order):
        return self.dispatch_action("open", MEMBER, "POST", record=order)

    def capture(self, order, amount=None):
        """Capture the authorized payment, fully or for ``amount``"""
        params = None if amount is None else {"amount": amount}
        return self.dispatch_action(
            "capture", MEMBER, "POST", record=order, params=params
        )

    def payments(self, order):
        return payments.all({"order_id": order.id})


class Payments(Facade):
    """Payments of an order. The kind selects the wire resource;
    addressing and operations are identical."""

    __slots__ = "kind"

    def __init__(self, kind=PaymentKind.PAYMENT):
        self.kind = PaymentKind(kind)
        super().__init__(
            ResourceClient(
                Descriptor(self.kind.value, prefix=ORDER_SCOPE), model=Payment
            )
        )


class Blogs(Facade):
    __slots__ = ()

    def articles(self, blog):
        return articles.all({"blog_id": blog.id})


class Countries(Facade):
    __slots__ = ()

    def provinces(self, country):
        return provinces.all({"country_id": country.id})


shop = ShopAccessor()
products = Products(ResourceClient(Descriptor("product"), model=Product))
variants = Facade(ResourceClient(Descriptor("variant", prefix=PRODUCT_SCOPE)))
images = Facade(
    ResourceClient(Descriptor("image", prefix=PRODUCT_SCOPE), model=Image)
)
orders = Orders(ResourceClient(Descriptor("order"), model=Order))
payments = Payments(PaymentKind.PAYMENT)
sales = Payments(PaymentKind.SALE)
authorizations = Payments(PaymentKind.AUTHORIZATION)
blogs = Blogs(ResourceClient(Descriptor("blog")))
articles = Facade(ResourceClient(Descriptor("article", prefix=BLOG_SCOPE)))
countries = Countries(ResourceClient(Descriptor("country")))
provinces = Facade(
    ResourceClient(Descriptor("province", prefix=COUNTRY_SCOPE))
)
pages = Facade(ResourceClient(Descriptor("page")))
custom_collections = Facade(ResourceClient(Descriptor("custom_collection")))
