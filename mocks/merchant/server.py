"""
Mock merchant upstream providing the token and shop group endpoints.
"""

import asyncio
from typing import Any, Dict, List, Optional, Set

from fastapi import FastAPI, Query, Request

from shared.logging import get_logger

GROUP_NOT_FOUND = 1000


class MockMerchantServer:
    """Mock merchant upstream implementation."""

    def __init__(self, app_id: str = "wx-test-app", app_secret: str = "wx-test-secret",
                 expires_in: int = 7200, token_delay: float = 0.0):
        self.logger = get_logger("mock.merchant")
        self.app = FastAPI(title="Mock Merchant API", version="1.0.0")

        self.app_id = app_id
        self.app_secret = app_secret
        self.expires_in = expires_in
        self.token_delay = token_delay

        self.token_requests = 0
        self.business_requests: List[str] = []
        self._valid_tokens: Set[str] = set()
        self._reject_all_tokens = False

        self.groups: Dict[int, Dict[str, Any]] = {}
        self._next_group_id = 19

        self._setup_routes()

    def revoke_tokens(self) -> None:
        """Invalidate every token issued so far, as if upstream expired them early."""
        self.logger.info("Revoking issued tokens", count=len(self._valid_tokens))
        self._valid_tokens.clear()

    def reject_all_tokens(self, reject: bool = True) -> None:
        """Reject even freshly issued tokens."""
        self._reject_all_tokens = reject

    def _setup_routes(self):
        """Setup API routes."""

        @self.app.get("/cgi-bin/token")
        async def token_endpoint(
            grant_type: Optional[str] = Query(default=None),
            appid: Optional[str] = Query(default=None),
            secret: Optional[str] = Query(default=None),
        ):
            self.token_requests += 1
            if self.token_delay:
                await asyncio.sleep(self.token_delay)

            if grant_type != "client_credential":
                return {"errcode": 40002, "errmsg": "invalid grant_type"}
            if appid != self.app_id:
                return {"errcode": 40013, "errmsg": "invalid appid"}
            if secret != self.app_secret:
                return {"errcode": 40125, "errmsg": "invalid appsecret"}

            token = f"mock-token-{self.token_requests}"
            self._valid_tokens.add(token)
            return {"access_token": token, "expires_in": self.expires_in}

        @self.app.post("/merchant/group/add")
        async def add_group(request: Request, access_token: Optional[str] = Query(default=None)):
            error = self._check_token("group/add", access_token)
            if error:
                return error
            body = await request.json()
            detail = body.get("group_detail") or {}
            if not detail.get("group_name"):
                return {"errcode": 40097, "errmsg": "invalid args"}

            group_id = self._next_group_id
            self._next_group_id += 1
            self.groups[group_id] = {
                "group_id": group_id,
                "group_name": detail["group_name"],
                "product_list": list(detail.get("product_list") or []),
            }
            return {"errcode": 0, "errmsg": "success", "group_id": group_id}

        @self.app.post("/merchant/group/del")
        async def delete_group(request: Request, access_token: Optional[str] = Query(default=None)):
            error = self._check_token("group/del", access_token)
            if error:
                return error
            body = await request.json()
            if self.groups.pop(self._group_id(body), None) is None:
                return self._not_found()
            return {"errcode": 0, "errmsg": "success"}

        @self.app.post("/merchant/group/propertymod")
        async def rename_group(request: Request, access_token: Optional[str] = Query(default=None)):
            error = self._check_token("group/propertymod", access_token)
            if error:
                return error
            body = await request.json()
            group = self.groups.get(self._group_id(body))
            if group is None:
                return self._not_found()
            group["group_name"] = body.get("group_name")
            return {"errcode": 0, "errmsg": "success"}

        @self.app.post("/merchant/group/productmod")
        async def modify_products(request: Request, access_token: Optional[str] = Query(default=None)):
            error = self._check_token("group/productmod", access_token)
            if error:
                return error
            body = await request.json()
            group = self.groups.get(self._group_id(body))
            if group is None:
                return self._not_found()
            for change in body.get("product") or []:
                product_id = change.get("product_id")
                if change.get("mod_action") == 1:
                    if product_id not in group["product_list"]:
                        group["product_list"].append(product_id)
                elif product_id in group["product_list"]:
                    group["product_list"].remove(product_id)
            return {"errcode": 0, "errmsg": "success"}

        @self.app.get("/merchant/group/getall")
        async def get_all_groups(access_token: Optional[str] = Query(default=None)):
            error = self._check_token("group/getall", access_token)
            if error:
                return error
            return {
                "errcode": 0,
                "errmsg": "success",
                "groups_detail": [
                    {"group_id": group["group_id"], "group_name": group["group_name"]}
                    for group in self.groups.values()
                ],
            }

        @self.app.post("/merchant/group/getbyid")
        async def get_group(request: Request, access_token: Optional[str] = Query(default=None)):
            error = self._check_token("group/getbyid", access_token)
            if error:
                return error
            body = await request.json()
            group = self.groups.get(self._group_id(body))
            if group is None:
                return self._not_found()
            return {"errcode": 0, "errmsg": "success", "group_detail": dict(group)}

    def _check_token(self, endpoint: str, access_token: Optional[str]) -> Optional[Dict[str, Any]]:
        self.business_requests.append(endpoint)
        if not access_token:
            return {"errcode": 41001, "errmsg": "access_token missing"}
        if self._reject_all_tokens or access_token not in self._valid_tokens:
            return {"errcode": 40001, "errmsg": "invalid credential"}
        return None

    @staticmethod
    def _group_id(body: Dict[str, Any]) -> Optional[int]:
        try:
            return int(body.get("group_id"))
        except (TypeError, ValueError):
            return None

    @staticmethod
    def _not_found() -> Dict[str, Any]:
        return {"errcode": GROUP_NOT_FOUND, "errmsg": "group not found"}


def create_app():
    """Create mock merchant application."""
    server = MockMerchantServer()
    return server.app


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(create_app(), host="0.0.0.0", port=8090)
