"""
Request builders for the shop group endpoints.

Each builder binds its arguments and returns a function from Credential to
DomainRequest, which is what the dispatcher consumes.
"""

from __future__ import annotations

import copy
from typing import Any, Callable, Dict, Iterable, List, Optional, Union
from urllib.parse import urlencode

from ..domain.models import Credential, DomainRequest, HttpMethod

GroupId = Union[int, str]
Builder = Callable[[Credential], DomainRequest]

MOD_ACTION_ADD = 1
MOD_ACTION_DELETE = 0


def merchant_url(prefix: str, path: str, credential: Credential) -> str:
    return f"{prefix}{path}?{urlencode({'access_token': credential.value})}"


def _post(prefix: str, path: str, payload: Dict[str, Any], name: str) -> Builder:
    def build(credential: Credential) -> DomainRequest:
        return DomainRequest(url=merchant_url(prefix, path, credential), payload=copy.deepcopy(payload))
    build.__name__ = name
    return build


def create_group(prefix: str, group_name: str, product_list: Optional[Iterable[str]] = None) -> Builder:
    payload = {
        "group_detail": {
            "group_name": group_name,
            "product_list": list(product_list or []),
        }
    }
    return _post(prefix, "group/add", payload, "create_group")


def delete_group(prefix: str, group_id: GroupId) -> Builder:
    return _post(prefix, "group/del", {"group_id": group_id}, "delete_group")


def update_group(prefix: str, group_id: GroupId, group_name: str) -> Builder:
    payload = {"group_id": group_id, "group_name": group_name}
    return _post(prefix, "group/propertymod", payload, "update_group")


def update_group_products(
    prefix: str,
    group_id: GroupId,
    add_products: Optional[Iterable[str]] = None,
    delete_products: Optional[Iterable[str]] = None,
) -> Builder:
    product: List[Dict[str, Any]] = []
    for product_id in add_products or []:
        product.append({"product_id": product_id, "mod_action": MOD_ACTION_ADD})
    for product_id in delete_products or []:
        product.append({"product_id": product_id, "mod_action": MOD_ACTION_DELETE})

    payload = {"group_id": group_id, "product": product}
    return _post(prefix, "group/productmod", payload, "update_group_products")


def get_all_groups(prefix: str) -> Builder:
    def build(credential: Credential) -> DomainRequest:
        return DomainRequest(url=merchant_url(prefix, "group/getall", credential), method=HttpMethod.GET)
    build.__name__ = "get_all_groups"
    return build


def get_group_by_id(prefix: str, group_id: GroupId) -> Builder:
    return _post(prefix, "group/getbyid", {"group_id": group_id}, "get_group_by_id")
