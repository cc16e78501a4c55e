import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, List, Literal, Optional, Tuple, Type, TypeVar
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ValidationError

from .observability import log_event

T = TypeVar("T", bound=BaseModel)

API_PREFIX = "/api/v2.0"
TOTAL_COUNT_HEADER = "X-Total-Count"
RESOURCE_NAME_HEADER = "X-Is-Resource-Name"


class HarborClientError(Exception):
    """Base error for client failures."""


class HarborHTTPError(HarborClientError):
    def __init__(
        self,
        *,
        status_code: int,
        method: str,
        url: str,
        message: str,
        response_json: Optional[Any] = None,
        response_text: Optional[str] = None,
    ):
        super().__init__(f"{status_code} {method} {url}: {message}")
        self.status_code = status_code
        self.method = method
        self.url = url
        self.message = message
        self.response_json = response_json
        self.response_text = response_text


class HarborParseError(HarborClientError):
    pass


class HarborModelValidationError(HarborClientError):
    pass


@dataclass(frozen=True)
class HarborAuth:
    """Static credentials; Harbor accepts both passwords and robot secrets via basic auth."""  # noqa: E501

    kind: Literal["password", "token"]
    username: str
    secret: str

    def as_httpx(self) -> httpx.BasicAuth:
        return httpx.BasicAuth(self.username, self.secret)


def encode_repository_name(name: str) -> str:
    """Harbor expects nested repository names ("a/b") double-encoded in paths."""
    return quote(quote(name, safe=""), safe="")


def _api_root(url: str) -> str:
    url = (url or "").strip().rstrip("/")
    if url.endswith(API_PREFIX):
        return url
    return url + API_PREFIX


class HarborClient:
    """
    Shared HTTP client for the Harbor v2.0 REST API.
    - Handles auth, base URL, TLS verification, timeouts
    - Returns parsed JSON payloads (objects or arrays) or optional Pydantic models
    - No business logic; tools own domain decisions
    """

    def __init__(
        self,
        *,
        base_url: str,
        auth: HarborAuth,
        verify: bool = True,
        timeout_seconds: float = 30.0,
        logger: Optional[logging.Logger] = None,
        http: Optional[httpx.AsyncClient] = None,
    ):
        if not (base_url or "").strip():
            raise ValueError("base_url must be provided.")
        if not auth.secret:
            raise ValueError("A password or token must be provided.")

        self.base_url = base_url.strip().rstrip("/")
        self.api_url = _api_root(self.base_url)
        self.auth = auth
        self.verify = verify
        self.timeout_seconds = timeout_seconds
        self.log = logger or logging.getLogger("harbor_mcp.client")

        self._owns_http = http is None
        self.http = http or httpx.AsyncClient(
            base_url=self.api_url,
            auth=auth.as_httpx(),
            headers={
                "Accept": "application/json",
                "Content-Type": "application/json",
            },
            timeout=timeout_seconds,
            verify=verify,
        )

    async def aclose(self) -> None:
        if self._owns_http:
            await self.http.aclose()

    async def __aenter__(self) -> "HarborClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def send(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        tool: Optional[str] = None,
    ) -> httpx.Response:
        """
        Issue one request and return the raw 2xx response.
        - Raises HarborHTTPError on non-2xx responses
        - Raises HarborClientError on network/timeout errors
        """
        method = method.upper()
        start = time.perf_counter()
        if params:
            params = {k: v for k, v in params.items() if v is not None}

        try:
            resp = await self.http.request(
                method, path, params=params or None, json=json, headers=headers
            )
        except httpx.HTTPError as exc:
            log_event(
                "harbor_call",
                logger=self.log,
                tool=tool,
                method=method,
                path=path,
                status="exception",
                error_type=type(exc).__name__,
                duration_ms=int((time.perf_counter() - start) * 1000),
            )
            raise HarborClientError(
                f"Network error calling {method} {path}: {exc}"
            ) from exc

        log_event(
            "harbor_call",
            logger=self.log,
            tool=tool,
            method=method,
            path=path,
            status=resp.status_code,
            duration_ms=int((time.perf_counter() - start) * 1000),
        )

        if resp.status_code < 200 or resp.status_code >= 300:
            raise self._to_http_error(resp, method=method)
        return resp

    async def request(self, method: str, path: str, **kwargs: Any) -> Any:
        resp = await self.send(method, path, **kwargs)
        return self._safe_json(resp)

    async def get(
        self,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        tool: Optional[str] = None,
    ) -> Any:
        return await self.request(
            "GET", path, params=params, headers=headers, tool=tool
        )

    async def get_page(
        self,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        tool: Optional[str] = None,
    ) -> Tuple[List[Dict[str, Any]], Optional[int]]:
        """GET a Harbor list endpoint; returns (items, X-Total-Count or None)."""
        resp = await self.send("GET", path, params=params, tool=tool)
        data = self._safe_json(resp)
        if data == {}:
            data = []
        if not isinstance(data, list):
            raise HarborParseError(
                f"Expected JSON array from GET {resp.request.url}, "
                f"got {type(data).__name__}"
            )

        total: Optional[int] = None
        raw_total = resp.headers.get(TOTAL_COUNT_HEADER)
        if raw_total and raw_total.isdigit():
            total = int(raw_total)
        return [item for item in data if isinstance(item, dict)], total

    async def post(
        self,
        path: str,
        *,
        json: Optional[Dict[str, Any]] = None,
        tool: Optional[str] = None,
    ) -> Any:
        return await self.request("POST", path, json=json, tool=tool)

    async def delete(
        self,
        path: str,
        *,
        headers: Optional[Dict[str, str]] = None,
        tool: Optional[str] = None,
    ) -> Any:
        return await self.request("DELETE", path, headers=headers, tool=tool)

    async def request_model(
        self, model: Type[T], method: str, path: str, **kwargs: Any
    ) -> T:
        payload = await self.request(method, path, **kwargs)
        try:
            return model.model_validate(payload)
        except ValidationError as exc:
            raise HarborModelValidationError(
                f"Response did not match model {model.__name__}: {exc}"
            ) from exc

    def _safe_json(self, resp: httpx.Response) -> Any:
        # 201 Created / 200 OK on DELETE come back with an empty body
        if not resp.content:
            return {}

        try:
            return resp.json()
        except ValueError as exc:
            snippet = (resp.text or "")[:500]
            raise HarborParseError(
                f"Expected JSON from {resp.request.method} "
                f"{resp.request.url}, got non-JSON body snippet: "
                f"{snippet!r}"
            ) from exc

    @staticmethod
    def _to_http_error(resp: httpx.Response, *, method: str) -> HarborHTTPError:
        url = str(resp.request.url)
        response_json: Optional[Any] = None
        response_text: Optional[str] = None
        message = resp.reason_phrase or "request failed"

        try:
            parsed = resp.json()
        except ValueError:
            response_text = (resp.text or "")[:500]
        else:
            response_json = parsed
            # Harbor error envelope: {"errors": [{"code": "...", "message": "..."}]}
            errors = parsed.get("errors") if isinstance(parsed, dict) else None
            if isinstance(errors, list) and errors and isinstance(errors[0], dict):
                message = errors[0].get("message") or message
            elif isinstance(parsed, dict) and parsed.get("message"):
                message = parsed["message"]

        return HarborHTTPError(
            status_code=resp.status_code,
            method=method,
            url=url,
            message=message,
            response_json=response_json,
            response_text=response_text,
        )
