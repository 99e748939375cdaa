import json
import logging
from typing import Any, Callable, Dict, List, Optional, Sequence, TypeVar

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from neattabs.host.domain.browser_state import PageView, TabGroupView
from neattabs.host.domain.host_errors import HostApiError, HostNetworkError, HostNotFoundError
from neattabs.host.interfaces.browser_host import BrowserHost

logger = logging.getLogger(__name__)

T = TypeVar("T")


class HttpBrowserHost(BrowserHost):
    """
    BrowserHost backed by the browser-side bridge over HTTP.
    Each operation is a POST to {base_url}/{operation}; the bridge answers with
    {"ok": bool, "result": ..., "error_code": int, "description": str}.
    """

    def __init__(
        self,
        base_url: str,
        token: str = "",
        max_retries: int = 2,
        timeout: int = 5,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self.session = session or self._create_session(max_retries)

    def _create_session(self, max_retries: int) -> requests.Session:
        session = requests.Session()
        retry_strategy = Retry(
            total=max_retries,
            backoff_factor=0.2,
            status_forcelist=[502, 503, 504],
            allowed_methods=["POST"]
        )
        adapter = HTTPAdapter(max_retries=retry_strategy)
        session.mount("http://", adapter)
        session.mount("https://", adapter)
        return session

    # --- Queries ---

    def list_groups(self, window_id: int) -> List[TabGroupView]:
        rows = self._post("groups.query", {"windowId": window_id})
        return self._parse_rows("groups.query", rows, TabGroupView.from_payload)

    def list_pages(self, window_id: int) -> List[PageView]:
        rows = self._post("tabs.query", {"windowId": window_id})
        return self._parse_rows("tabs.query", rows, PageView.from_payload)

    def list_group_pages(self, group_id: int) -> List[PageView]:
        rows = self._post("tabs.query", {"groupId": group_id})
        return self._parse_rows("tabs.query", rows, PageView.from_payload)

    # --- Mutations ---

    def group_pages(self, page_ids: Sequence[int], group_id: Optional[int] = None) -> int:
        payload: Dict[str, Any] = {"tabIds": list(page_ids)}
        if group_id is not None:
            payload["groupId"] = group_id
        result = self._post("tabs.group", payload)
        try:
            return int(result)
        except (TypeError, ValueError) as e:
            raise HostNetworkError(f"Bridge returned no group id: {result!r}") from e

    def update_group(self, group_id: int, title: Optional[str] = None, color: Optional[str] = None) -> TabGroupView:
        changes: Dict[str, Any] = {}
        if title is not None:
            changes["title"] = title
        if color is not None:
            changes["color"] = color
        row = self._post("groups.update", {"groupId": group_id, "update": changes})
        try:
            return TabGroupView.from_payload(row)
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise HostNetworkError(f"Malformed group in groups.update response: {row!r}") from e

    def ungroup_pages(self, page_ids: Sequence[int]) -> None:
        self._post("tabs.ungroup", {"tabIds": list(page_ids)})

    def close_pages(self, page_ids: Sequence[int]) -> None:
        self._post("tabs.remove", {"tabIds": list(page_ids)})

    def activate_page(self, page_id: int) -> None:
        self._post("tabs.update", {"tabId": page_id, "update": {"active": True}})

    # --- Transport ---

    def _post(self, operation: str, data: Dict[str, Any]) -> Any:
        url = f"{self.base_url}/{operation}"
        headers = {"x-neattabs-bridge-token": self.token} if self.token else {}

        try:
            response = self.session.post(url, json=data, headers=headers, timeout=self.timeout)
            response_data = response.json()
        except requests.RequestException as e:
            logger.error(f"Host bridge network error on {operation}: {e}")
            raise HostNetworkError(f"Request failed: {str(e)}") from e
        except (json.JSONDecodeError, ValueError) as e:
            logger.error(f"Host bridge invalid JSON on {operation}: {e}")
            raise HostNetworkError("Invalid JSON response") from e

        if not isinstance(response_data, dict):
            raise HostNetworkError(f"Unexpected response shape for {operation}")

        if not response_data.get("ok"):
            self._handle_api_error(operation, response_data)

        return response_data.get("result")

    @staticmethod
    def _parse_rows(operation: str, rows: Any, factory: Callable[[Dict[str, Any]], T]) -> List[T]:
        if rows is None:
            return []
        try:
            return [factory(row) for row in rows]
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise HostNetworkError(f"Malformed {operation} response: {e!r}") from e

    def _handle_api_error(self, operation: str, data: Dict[str, Any]):
        try:
            error_code = int(data.get("error_code", 0) or 0)
        except (TypeError, ValueError):
            error_code = 0
        description = str(data.get("description", "Unknown error"))

        logger.warning(f"Host bridge error {error_code} on {operation}: {description}")

        if error_code == 404:
            raise HostNotFoundError(error_code, description)

        raise HostApiError(error_code, description)
