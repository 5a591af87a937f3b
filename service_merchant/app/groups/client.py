"""
Shop group operations of the merchant API.
"""

from typing import Any, Dict, Iterable, Optional

from ..dispatch.dispatcher import Dispatcher
from . import builders
from .builders import GroupId


class GroupClient:
    """Create, edit, list and fetch product groups.

    Every method returns the upstream body unchanged on success, e.g.
    ``{"errcode": 0, "errmsg": "success", "group_id": 19}`` for a creation,
    and raises BusinessError when upstream rejects the call.
    """

    def __init__(self, dispatcher: Dispatcher, merchant_prefix: str):
        self.dispatcher = dispatcher
        self.merchant_prefix = merchant_prefix

    async def create_group(self, group_name: str, product_list: Optional[Iterable[str]] = None) -> Dict[str, Any]:
        return await self.dispatcher.run(
            builders.create_group(self.merchant_prefix, group_name, product_list),
            operation="create_group"
        )

    async def delete_group(self, group_id: GroupId) -> Dict[str, Any]:
        return await self.dispatcher.run(
            builders.delete_group(self.merchant_prefix, group_id),
            operation="delete_group"
        )

    async def update_group(self, group_id: GroupId, group_name: str) -> Dict[str, Any]:
        """Rename a group."""
        return await self.dispatcher.run(
            builders.update_group(self.merchant_prefix, group_id, group_name),
            operation="update_group"
        )

    async def update_group_products(
        self,
        group_id: GroupId,
        add_products: Optional[Iterable[str]] = None,
        delete_products: Optional[Iterable[str]] = None,
    ) -> Dict[str, Any]:
        """Add and remove products of a group in one call."""
        return await self.dispatcher.run(
            builders.update_group_products(self.merchant_prefix, group_id, add_products, delete_products),
            operation="update_group_products"
        )

    async def get_all_groups(self) -> Dict[str, Any]:
        """List all groups; the body carries ``groups_detail``."""
        return await self.dispatcher.run(
            builders.get_all_groups(self.merchant_prefix),
            operation="get_all_groups"
        )

    async def get_group_by_id(self, group_id: GroupId) -> Dict[str, Any]:
        """Fetch one group; the body carries ``group_detail``."""
        return await self.dispatcher.run(
            builders.get_group_by_id(self.merchant_prefix, group_id),
            operation="get_group_by_id"
        )
