"""HTTP client for provider APIs: bearer auth, timeouts, error wrapping."""
import json
import time
import logging
import requests

logger = logging.getLogger("sleepmonitor.http")


class APIError(Exception):
    """API request error with status code and response body."""
    def __init__(self, message, status_code=None, response_body=None, source=None):
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body
        self.source = source
        self.error_detail = _parse_body(response_body)


def _parse_body(body):
    """Provider error bodies are usually JSON; return None when they aren't."""
    if not body:
        return None
    try:
        return json.loads(body)
    except ValueError:
        return None


class HTTPClient:
    """Single-shot HTTP client. Failures are raised, never retried."""

    def __init__(self, base_url, token=None, timeout=30, source=None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.source = source
        self.session = requests.Session()
        self.session.headers.update({"User-Agent": "SleepMonitor/1.0"})
        if token:
            self.session.headers.update({"Authorization": f"Bearer {token}"})

    def get(self, path="", params=None):
        """Make a GET request. Returns decoded JSON, or the raw text if the body isn't JSON."""
        return self._request("GET", path, params)

    def get_json(self, path="", params=None):
        """Make a GET request whose body must be a JSON object."""
        return self._request("GET", path, params, require_json=True)

    def _request(self, method, path, params=None, require_json=False):
        url = f"{self.base_url}/{path.lstrip('/')}" if path else self.base_url

        try:
            start = time.time()
            resp = self.session.request(method, url, params=params, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise APIError(f"Request to {url} failed: {e}", source=self.source) from e

        latency = int((time.time() - start) * 1000)
        logger.debug(f"{method} {url} → {resp.status_code} ({latency}ms)")

        if not 200 <= resp.status_code < 300:
            status = f"HTTP {resp.status_code} {resp.reason or ''}".strip()
            error = APIError(
                f"{status} from {url}",
                status_code=resp.status_code,
                response_body=resp.text,
                source=self.source,
            )
            logger.error(f"{self.source or 'API'} error: {status}")
            if error.error_detail is not None:
                logger.error(f"{self.source or 'API'} response: {json.dumps(error.error_detail)}")
            raise error

        try:
            data = resp.json()
        except ValueError:
            if not require_json:
                return resp.text
            data = None
        if isinstance(data, dict) or not require_json:
            return data

        logger.error(f"{self.source or 'API'} returned a non-JSON body from {url}")
        raise APIError(
            f"HTTP {resp.status_code} from {url} is not a JSON object",
            status_code=resp.status_code,
            response_body=resp.text,
            source=self.source,
        )
