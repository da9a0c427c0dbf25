# storefront/client.py
from typing import Any, Dict, List, Optional

import httpx
import requests


class TransportFailure(Exception):
    """A request that did not produce a usable response.

    ``message`` is what the server said when it said anything, otherwise the
    transport error text (e.g. "Network Error").
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _server_message(body: Any) -> Optional[str]:
    if isinstance(body, dict):
        msg = body.get("message") or body.get("detail")
        if isinstance(msg, str) and msg:
            return msg
    return None


def _check(resp) -> Any:
    """Return decoded JSON for a 2xx response, raise TransportFailure otherwise.

    Works for both requests and httpx responses. Redirects are not followed
    by the async client, so a 3xx lands here and counts as a failure.
    """
    if not 200 <= resp.status_code < 300:
        try:
            body = resp.json()
        except ValueError:
            body = None
        message = _server_message(body) or f"Request failed with status code {resp.status_code}"
        raise TransportFailure(message, resp.status_code)
    try:
        return resp.json()
    except ValueError as e:
        raise TransportFailure("Response was not valid JSON", resp.status_code) from e


class StoreClient:
    def __init__(
        self,
        base_url: str = "http://127.0.0.1:5000",
        timeout: int = 10,
        session=None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session if session is not None else requests.Session()
        self._transport = transport

    def _url(self, path: str) -> str:
        return f"{self.base_url}/api/products{path}"

    # ---------------------------
    # Blocking calls (scripts, demos)
    # ---------------------------
    def _send(self, method: str, path: str, **kwargs) -> Any:
        try:
            r = self.session.request(method, self._url(path), timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise TransportFailure(str(e)) from e
        return _check(r)

    def list_products(self, keyword: Optional[str] = None) -> List[Dict[str, Any]]:
        params = {"keyword": keyword} if keyword else None
        return self._send("GET", "", params=params)

    def get_product(self, product_id: str) -> Dict[str, Any]:
        return self._send("GET", f"/{product_id}")

    def create_product(self, data: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return self._send("POST", "", json=data)

    def update_product(self, product_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
        return self._send("PUT", f"/{product_id}", json=changes)

    def delete_product(self, product_id: str) -> Dict[str, Any]:
        return self._send("DELETE", f"/{product_id}")

    # ---------------------------
    # Non-blocking calls (used by the action creators)
    # ---------------------------
    async def _asend(self, method: str, path: str, **kwargs) -> Any:
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport, follow_redirects=False
            ) as client:
                r = await client.request(method, self._url(path), **kwargs)
        except httpx.HTTPError as e:
            raise TransportFailure(str(e) or e.__class__.__name__) from e
        return _check(r)

    async def alist_products(self, keyword: Optional[str] = None) -> List[Dict[str, Any]]:
        params = {"keyword": keyword} if keyword else None
        return await self._asend("GET", "", params=params)

    async def aget_product(self, product_id: str) -> Dict[str, Any]:
        return await self._asend("GET", f"/{product_id}")

    async def acreate_product(self, data: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return await self._asend("POST", "", json=data)

    async def aupdate_product(self, product_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
        return await self._asend("PUT", f"/{product_id}", json=changes)

    async def adelete_product(self, product_id: str) -> Dict[str, Any]:
        return await self._asend("DELETE", f"/{product_id}")
