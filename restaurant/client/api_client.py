"""
后端 API 客户端
封装 requests.Session：基础地址、超时、Bearer 令牌、JSON 解析，
非 2xx 响应统一抛出 ApiError
"""

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import urljoin

import requests

from ..config.settings import settings

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """API 调用失败

    Attributes:
        status_code: HTTP 状态码；网络错误或超时为 None
        message: 服务端返回的 message 字段或错误描述
        error_code: 服务端返回的 error 字段
    """

    def __init__(self, message: str, status_code: Optional[int] = None,
                 error_code: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.details = details or {}


class ApiClient:
    """餐厅后端 API 客户端"""

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None,
                 session: Optional[requests.Session] = None, token: Optional[str] = None):
        self.base_url = (base_url or settings.api_base_url).rstrip("/") + "/"
        self.timeout = timeout if timeout is not None else settings.client_timeout_seconds
        self.session = session or requests.Session()
        self.token = token

    def _url(self, path: str) -> str:
        path = path.lstrip("/")
        prefix = settings.api_prefix.strip("/")
        if prefix and not path.startswith(prefix + "/"):
            path = f"{prefix}/{path}"
        return urljoin(self.base_url, path)

    def request(self, method: str, path: str, json: Any = None,
                params: Optional[Dict[str, Any]] = None) -> Any:
        """发送请求并返回解析后的 JSON；空响应体返回 None"""
        url = self._url(path)
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        try:
            response = self.session.request(
                method, url, json=json, params=params, headers=headers, timeout=self.timeout
            )
        except requests.exceptions.Timeout:
            raise ApiError(f"Request timed out: {method} {url}")
        except requests.exceptions.RequestException as e:
            raise ApiError(f"Request failed: {method} {url} - {e}")

        return self._parse_response(response)

    def _parse_response(self, response: requests.Response) -> Any:
        payload: Any = None
        if response.content:
            try:
                payload = response.json()
            except ValueError:
                payload = None

        if not response.ok:
            body = payload if isinstance(payload, dict) else {}
            message = body.get("message") or response.reason or f"HTTP {response.status_code}"
            logger.debug("API error %s: %s", response.status_code, message)
            raise ApiError(
                message,
                status_code=response.status_code,
                error_code=body.get("error"),
                details=body.get("details"),
            )
        return payload

    def get(self, path: str, **kwargs) -> Any:
        return self.request("GET", path, **kwargs)

    def post(self, path: str, **kwargs) -> Any:
        return self.request("POST", path, **kwargs)

    def put(self, path: str, **kwargs) -> Any:
        return self.request("PUT", path, **kwargs)

    def delete(self, path: str, **kwargs) -> Any:
        return self.request("DELETE", path, **kwargs)

    # 常用接口

    def login(self, username: str, password: str) -> Dict[str, Any]:
        """登录并保存令牌"""
        data = self.post("/login", json={"username": username, "password": password})
        self.token = data["token"]
        return data

    def logout(self) -> None:
        if self.token:
            self.post("/logout")
        self.token = None

    def create_reservation(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self.post("/reservations", json=payload)

    def list_menu_items(self) -> List[Dict[str, Any]]:
        return self.get("/menu-items")

    def get_site_settings(self) -> Dict[str, Any]:
        return self.get("/site-settings")

    def get_location(self) -> Dict[str, Any]:
        return self.get("/location") or {}

    def location_phone(self) -> Optional[str]:
        """餐厅 WhatsApp 号码，供购物车结账使用"""
        return self.get_location().get("phone")
