"""
Python client for the book inventory REST API.

`InventoryClient` is a thin wrapper over an `httpx.Client` that unwraps the
response envelope and raises `ApiError` on failures. `AppState` holds what a
front end needs (credential, current user, list filters, current page of
books, stats, last error) and reloads explicitly after every mutation.
Role checks done here only decide what to offer the user; the server decides
what is allowed.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import httpx

from bookinventory.core.valuation import value_change_percentage

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Error response from the API, with its status, message and field errors."""

    def __init__(self, status_code: int, message: str, errors: Optional[List[Dict[str, Any]]] = None):
        self.status_code = status_code
        self.message = message
        self.errors = errors or []
        super().__init__(f"{status_code}: {message}")

    @property
    def retriable(self) -> bool:
        return self.status_code == 503


def preview_value_change(purchase_price: Optional[float], market_value: Optional[float]) -> float:
    """Live preview of the value change for a form; 0 until both prices are filled in."""
    if purchase_price is None or market_value is None:
        return 0.0
    return value_change_percentage(purchase_price, market_value)


class InventoryClient:
    """
    Wraps the REST surface of the service.

    Args:
        base_url (str): Root URL of the API; ignored when `http` is given.
        http (Optional[httpx.Client]): Preconfigured client (for example a
            FastAPI TestClient).
        timeout (float): Request timeout for the client created here.
    """

    def __init__(self, base_url: str = "http://localhost:8000", http: Optional[httpx.Client] = None, timeout: float = 10.0):
        self.http = http or httpx.Client(base_url=base_url, timeout=timeout)
        self.token: Optional[str] = None

    def _headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"} if self.token else {}

    def _request(self, method: str, path: str, **kwargs) -> Dict[str, Any]:
        try:
            response = self.http.request(method, path, headers=self._headers(), **kwargs)
        except httpx.TimeoutException as exc:
            raise ApiError(503, "Request timed out") from exc
        except httpx.RequestError as exc:
            raise ApiError(503, f"Could not reach the server: {exc}") from exc

        try:
            body = response.json()
        except ValueError:
            body = {}
        if response.is_error or not body.get("success", False):
            raise ApiError(response.status_code, body.get("message", "Request failed"), body.get("errors"))
        return body

    # auth
    def register(self, username: str, name: str, password: str) -> Dict[str, Any]:
        body = self._request("POST", "/auth/register", json={"username": username, "name": name, "password": password})
        self.token = body["token"]
        return body

    def login(self, username: str, password: str) -> Dict[str, Any]:
        body = self._request("POST", "/auth/login", json={"username": username, "password": password})
        self.token = body["token"]
        return body

    def me(self) -> Dict[str, Any]:
        return self._request("GET", "/auth/me")["data"]

    # books
    def list_books(self, **params: Any) -> Dict[str, Any]:
        query = {key: value for key, value in params.items() if value not in (None, "")}
        return self._request("GET", "/books", params=query)["data"]

    def get_book(self, book_id: str) -> Dict[str, Any]:
        return self._request("GET", f"/books/{book_id}")["data"]

    def create_book(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", "/books", json=data)["data"]

    def update_book(self, book_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("PUT", f"/books/{book_id}", json=data)["data"]

    def delete_book(self, book_id: str) -> Dict[str, Any]:
        return self._request("DELETE", f"/books/{book_id}")

    def book_stats(self) -> Dict[str, Any]:
        return self._request("GET", "/books/stats")["data"]

    def fetch_book_details(self, isbn: str) -> Dict[str, Any]:
        return self._request("POST", "/books/fetch-details", json={"isbn": isbn})["data"]

    # users
    def list_users(self, page: int = 1, limit: int = 10) -> Dict[str, Any]:
        return self._request("GET", "/users", params={"page": page, "limit": limit})["data"]

    def update_user(self, user_id: str, name: Optional[str] = None, role: Optional[str] = None) -> Dict[str, Any]:
        payload = {key: value for key, value in {"name": name, "role": role}.items() if value is not None}
        return self._request("PUT", f"/users/{user_id}", json=payload)


@dataclass
class ListFilters:
    """Filters of the book list screen. Defaults to title ascending, page 1."""
    book_type: Optional[str] = None
    category: Optional[str] = None
    status: Optional[str] = None
    condition: Optional[str] = None
    is_featured: Optional[bool] = None
    search: str = ""
    sort_field: str = "title"
    sort_direction: str = "asc"
    page: int = 1
    limit: int = 10

    def as_params(self) -> Dict[str, Any]:
        return {
            "bookType": self.book_type,
            "category": self.category,
            "status": self.status,
            "condition": self.condition,
            "isFeatured": None if self.is_featured is None else str(self.is_featured).lower(),
            "search": self.search,
            "sortField": self.sort_field,
            "sortDirection": self.sort_direction,
            "page": self.page,
            "limit": self.limit,
        }


@dataclass
class AppState:
    """
    Application state shared by the screens of a front end.

    Mutations go through this object and are followed by an explicit reload
    of the data they affect. Errors are stored in `error` for a dismissible
    banner; the caller can retry the same operation.
    """
    client: InventoryClient
    user: Optional[Dict[str, Any]] = None
    expires_at: Optional[datetime] = None
    filters: ListFilters = field(default_factory=ListFilters)
    books: List[Dict[str, Any]] = field(default_factory=list)
    total: int = 0
    total_pages: int = 0
    stats: Optional[Dict[str, Any]] = None
    error: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        if self.client.token is None or self.expires_at is None:
            return False
        return datetime.now(timezone.utc) < self.expires_at

    @property
    def can_edit(self) -> bool:
        return bool(self.user) and self.user["role"] in ("ADMIN", "EDITOR")

    @property
    def is_admin(self) -> bool:
        return bool(self.user) and self.user["role"] == "ADMIN"

    def _start_session(self, body: Dict[str, Any]) -> None:
        self.user = body["user"]
        self.expires_at = datetime.fromisoformat(body["expiresAt"].replace("Z", "+00:00"))
        self.error = None

    def login(self, username: str, password: str) -> bool:
        try:
            self._start_session(self.client.login(username, password))
        except ApiError as exc:
            self.error = exc.message
            return False
        return True

    def register(self, username: str, name: str, password: str) -> bool:
        try:
            self._start_session(self.client.register(username, name, password))
        except ApiError as exc:
            self.error = exc.message
            return False
        return True

    def logout(self) -> None:
        """Forgets the credential locally; the server keeps no session."""
        self.client.token = None
        self.user = None
        self.expires_at = None
        self.books = []
        self.stats = None

    def dismiss_error(self) -> None:
        self.error = None

    def _run(self, operation, *args, **kwargs):
        if not self.is_authenticated:
            self.logout()
            self.error = "Session expired, please log in again"
            return None
        try:
            result = operation(*args, **kwargs)
        except ApiError as exc:
            logger.warning(f"API call {operation.__name__} failed: {exc}")
            self.error = exc.message
            if exc.status_code == 401:
                self.logout()
            return None
        self.error = None
        return result

    def reload_books(self) -> bool:
        data = self._run(self.client.list_books, **self.filters.as_params())
        if data is None:
            return False
        self.books = data["books"]
        self.total = data["total"]
        self.total_pages = data["totalPages"]
        return True

    def reload_stats(self) -> bool:
        stats = self._run(self.client.book_stats)
        if stats is None:
            return False
        self.stats = stats
        return True

    def set_filters(self, **changes: Any) -> bool:
        """Changes filters and goes back to page 1 unless a page is given."""
        changes.setdefault("page", 1)
        for key, value in changes.items():
            setattr(self.filters, key, value)
        return self.reload_books()

    def create_book(self, data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        book = self._run(self.client.create_book, data)
        if book is not None:
            self.reload_books()
            self.reload_stats()
        return book

    def update_book(self, book_id: str, data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        book = self._run(self.client.update_book, book_id, data)
        if book is not None:
            self.reload_books()
            self.reload_stats()
        return book

    def delete_book(self, book_id: str) -> bool:
        done = self._run(self.client.delete_book, book_id) is not None
        if done:
            self.reload_books()
            self.reload_stats()
        return done
