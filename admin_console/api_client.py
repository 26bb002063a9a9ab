import logging
import requests

from .errors import ApiError, ResponseShapeError, TransportError

log = logging.getLogger(__name__)


class ApiClient:
    """Calls the marketplace REST backend on behalf of one console session.

    ``token_provider`` is called before every request so a token cleared
    mid-request (logout, expiry) is never sent afterwards.
    """

    def __init__(self, base_url: str, token_provider=None, timeout: float = 8,
                 http=None):
        self.base_url = base_url.rstrip("/")
        self.token_provider = token_provider or (lambda: None)
        self.timeout = timeout
        self.http = http or requests.Session()

    def _headers(self):
        headers = {"Content-Type": "application/json"}
        token = self.token_provider()
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def request(self, method: str, path: str, params=None, json=None):
        url = f"{self.base_url}/{path.lstrip('/')}"
        if params:
            params = {k: v for k, v in params.items() if v not in (None, "")}
        try:
            r = self.http.request(method, url, params=params or None, json=json,
                                  headers=self._headers(), timeout=self.timeout)
        except requests.RequestException as e:
            log.warning("%s %s unreachable: %s", method, url, e)
            raise TransportError(str(e)) from e

        body = None
        if r.content and r.headers.get("content-type", "").startswith("application/json"):
            try:
                body = r.json()
            except ValueError:
                body = None

        if not r.ok:
            msg = None
            if isinstance(body, dict):
                msg = body.get("message") or body.get("error")
            log.info("%s %s -> HTTP %s %s", method, url, r.status_code, msg or "")
            raise ApiError(r.status_code, msg)
        return body

    def get(self, path, params=None):
        return self.request("GET", path, params=params)

    def post(self, path, json=None):
        return self.request("POST", path, json=json)

    def patch(self, path, json=None):
        return self.request("PATCH", path, json=json)

    def delete(self, path):
        return self.request("DELETE", path)

    def get_record(self, path) -> dict:
        """``GET <resource>/<id>`` → the ``data`` record."""
        body = self.get(path)
        data = body.get("data") if isinstance(body, dict) else None
        if not isinstance(data, dict):
            raise ResponseShapeError(f"expected {{data: {{...}}}} from {path}")
        return data
