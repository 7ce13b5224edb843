"""Static store registry.

Orders carry an integer ``user_id`` that points at the merchant store the order
came from. The mapping below is process-wide configuration and never changes at
runtime, so it is exposed read-only.
"""
from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Mapping, Optional


DEFAULT_CURRENCY = "GBP"


@dataclass(frozen=True)
class StoreInfo:
    name: str
    domain: str
    currency: str = DEFAULT_CURRENCY


_STORES = {
    "1": StoreInfo("kvatt-green-package-demo", "kvatt-green-package-demo.myshopify.com"),
    "5": StoreInfo("Quickstart", "quickstart-ba771359.myshopify.com"),
    "6": StoreInfo("TOAST DEV", "dev.toa.st"),
    "7": StoreInfo("Universal Works", "universalworks.com"),
    "8": StoreInfo("TOAST NEW DEV", "toast-newdev.myshopify.com"),
    "9": StoreInfo("TOAST NEW DEV USD", "toast-newdev-us.myshopify.com", "USD"),
    "10": StoreInfo("TOAST DEV USD", "toast-dev-us.myshopify.com", "USD"),
    "11": StoreInfo("KVATT DEV", "kvatt-dev.myshopify.com"),
    "12": StoreInfo("TOAST", "www.toa.st"),
    "13": StoreInfo("Zapply EU", "zapply.eu", "EUR"),
    "14": StoreInfo("Cocopup™ Wipes", "cocopupwipes.com", "USD"),
    "15": StoreInfo("Anerkennen Fashion", "anerkennen.com", "INR"),
    "16": StoreInfo("SPARTAGIFTSHOP USA", "auibrn-ad.myshopify.com", "USD"),
    "17": StoreInfo("SIRPLUS", "sirplus.co.uk"),
    "20": StoreInfo("Kvatt - Demo Store", "smitg-kvatt-demo.myshopify.com"),
    "23": StoreInfo("smit-v2", "smit-v2.myshopify.com", "INR"),
    "24": StoreInfo("partht-kvatt-demo", "partht-kvatt-demo.myshopify.com"),
    "25": StoreInfo("vrutankt.devesha", "vrutankt-devesha.myshopify.com", "INR"),
    "26": StoreInfo("Plus Test Store 1", "bdnee0-s0.myshopify.com", "USD"),
    "27": StoreInfo("Kvatt | One Tap Returns", "kvatt.com"),
    "28": StoreInfo("leming-kvatt-demo", "leming-kvatt-demo.myshopify.com"),
    "29": StoreInfo("Kapil Kvatt Checkout", "kapil-kvatt-checkout.myshopify.com", "USD"),
    "30": StoreInfo("SCALES SwimSkins", "shop.scales-swimskins.com", "CHF"),
}

STORE_REGISTRY: Mapping[str, StoreInfo] = MappingProxyType(_STORES)
del _STORES


def _key(store_id: Any) -> Optional[str]:
    if store_id is None:
        return None
    key = str(store_id).strip()
    return key or None


def store_name(store_id: Any, registry: Mapping[str, StoreInfo] = STORE_REGISTRY) -> str:
    key = _key(store_id)
    if key is None:
        return "N/A"
    info = registry.get(key)
    return info.name if info is not None else f"Store {key}"


def store_info(store_id: Any, registry: Mapping[str, StoreInfo] = STORE_REGISTRY) -> StoreInfo:
    key = _key(store_id) or ""
    info = registry.get(key)
    if info is not None:
        return info
    return StoreInfo(name=store_name(store_id, registry), domain=f"unknown-{key}")
