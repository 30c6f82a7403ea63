__version__ = "0.3.0"
__author__ = "shopify_api contributors"
__description__ = "Addressable resource objects for the Shopify admin API"
