import logging
from dataclasses import dataclass
from typing import Any, Optional

import certifi  # Provides Mozilla's CA bundle for SSL certificate verification
import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from hateoas_registry.settings import Settings, get_settings

logger = logging.getLogger(__name__)


@dataclass
class RestResponse:
    payload: Any
    status_code: int


class HALRestClient:
    def __init__(self, settings: Optional[Settings] = None, session: Optional[requests.Session] = None):
        """
        Initializes a requests.Session with:
            - JSON/HAL accept header
            - HTTPAdapter for retries on connection errors and specified HTTP status codes
        """
        self.settings: Settings = settings or get_settings()
        self.session = session or requests.Session()

        # Configure retries
        retry_strategy = Retry(
            total=self.settings.total_retries,
            connect=self.settings.total_retries,
            read=self.settings.total_retries,
            backoff_factor=self.settings.backoff_factor,
            status_forcelist=self.settings.status_forcelist,
            allowed_methods=frozenset(["GET", "POST", "PATCH"]),
            raise_on_status=False
        )
        adapter = HTTPAdapter(max_retries=retry_strategy)
        self.session.mount("https://", adapter)
        self.session.mount("http://", adapter)

        # Default headers
        self.session.headers.update({
            "Accept": "application/hal+json, application/json",
        })
        self.verify = certifi.where() if self.settings.verify_ssl else False

    def absolute_url(self, href: str) -> str:
        """HAL hrefs are usually absolute already; relative ones are joined onto the API base URL."""
        if href.startswith(("http://", "https://")):
            return href
        api_base_url: str = str(self.settings.api_base_url)
        return f"{api_base_url.rstrip('/')}/{href.lstrip('/')}"

    def _handle_response(self, resp: requests.Response) -> RestResponse:
        """
            Handle API response with proper error checking and JSON parsing.

            Raises:
                requests.HTTPError: For 4xx/5xx HTTP status codes
                ValueError: If response is not valid JSON
            """
        try:
            resp.raise_for_status()
        except requests.HTTPError:
            logger.error(f"HTTP {resp.status_code} error for {resp.url}: {resp.text[:200]}")
            raise

        if not resp.content:
            logger.warning(f"Empty response received for {resp.url}")
            return RestResponse(payload={}, status_code=resp.status_code)

        try:
            payload = resp.json()
        except ValueError as e:
            logger.error(f"Invalid JSON response from {resp.url}: {resp.text[:200]}...")
            raise ValueError(f"Invalid JSON response: {e}") from e
        return RestResponse(payload=payload, status_code=resp.status_code)

    def get(self, href: str, params=None) -> RestResponse:
        resp = self.session.get(self.absolute_url(href), params=params,
                                timeout=self.settings.request_timeout, verify=self.verify)
        return self._handle_response(resp)

    def post(self, href: str, body: Any, params=None) -> RestResponse:
        resp = self.session.post(self.absolute_url(href), json=body, params=params,
                                 timeout=self.settings.request_timeout, verify=self.verify)
        return self._handle_response(resp)

    def patch(self, href: str, body: Any) -> RestResponse:
        resp = self.session.patch(
            self.absolute_url(href),
            json=body,
            headers={"Content-Type": "application/json; charset=UTF-8"},
            timeout=self.settings.request_timeout,
            verify=self.verify,
        )
        return self._handle_response(resp)
