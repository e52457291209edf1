# 📄 File: app/shared/infrastructure/external_apis/api_client.py

# 🧭 Purpose (Layman Explanation):
# This file creates an HTTP client that knows how to talk to external services,
# handling timeouts and errors clearly when communicating with the weather API.

# 🧪 Purpose (Technical Summary):
# Generic async HTTP client over a single aiohttp session with explicit lifecycle
# (initialize/close), status-code handling, request statistics and error history.
# Requests are attempted exactly once; callers decide what a failure means.

# 🔗 Dependencies:
# - aiohttp: Async HTTP client
# - app.shared.core.exceptions: ServiceUnavailableError for use outside the lifecycle
# - app.shared.utils.logging: structured logging

# 🔄 Connected Modules / Calls From:
# Used by: OpenWeatherClient (weather_care module); created and closed by the app lifespan

import asyncio
import time
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from urllib.parse import urljoin

import aiohttp
from aiohttp import ClientSession, ClientTimeout

from app.shared.core.exceptions import ServiceUnavailableError
from app.shared.utils.logging import get_logger

logger = get_logger(__name__)


class APIRequestError(Exception):
    """
    Transport-level failure talking to an external API.

    Provider clients translate this into their domain error.
    """

    def __init__(self, message: str, status: Optional[int] = None, body: Optional[str] = None):
        self.status = status
        self.body = body
        super().__init__(message)


class APIClient:
    """
    Generic async HTTP client for external API integrations.

    Features:
    - One pooled aiohttp session per client, opened and closed explicitly
    - Per-request timeout
    - Non-2xx responses raised as APIRequestError with status and body
    - Request statistics and a bounded error history for health reporting
    """

    def __init__(
        self,
        base_url: str,
        api_name: str,
        timeout: int = 30,
        default_params: Optional[Dict[str, Any]] = None,
        session: Optional[ClientSession] = None
    ):
        """Initialize API client with configuration."""
        self.base_url = base_url.rstrip('/') + '/'
        self.api_name = api_name
        self.timeout = timeout
        self.default_params = default_params or {}

        self.session: Optional[ClientSession] = session
        self._owns_session = session is None

        self.stats = {
            'total_requests': 0,
            'successful_requests': 0,
            'failed_requests': 0,
            'average_response_time': 0.0,
            'last_request_time': None,
        }

        self.error_history: List[Dict[str, Any]] = []
        self.max_error_history = 100

    async def initialize(self) -> None:
        """Open the underlying session if one was not injected."""
        if self.session is not None:
            return

        connector = aiohttp.TCPConnector(
            limit=10,
            limit_per_host=5,
            ttl_dns_cache=300,
        )
        self.session = ClientSession(
            timeout=ClientTimeout(total=self.timeout),
            connector=connector,
            headers=self._get_default_headers()
        )
        self._owns_session = True
        logger.info(f"API client initialized for {self.api_name}")

    async def close(self) -> None:
        """Close the session if this client opened it."""
        if self.session is not None and self._owns_session:
            await self.session.close()
            logger.info(f"API client closed for {self.api_name}")
        self.session = None

    @property
    def is_initialized(self) -> bool:
        return self.session is not None

    def _get_default_headers(self) -> Dict[str, str]:
        return {
            'User-Agent': f'GreenMate/1.0 ({self.api_name}-client)',
            'Accept': 'application/json',
        }

    async def get(
        self,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None
    ) -> Dict[str, Any]:
        """Make a GET request and return the decoded JSON body."""
        return await self._make_request('GET', endpoint, params=params, headers=headers)

    async def _make_request(
        self,
        method: str,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None
    ) -> Dict[str, Any]:
        """Make a single HTTP request."""
        if self.session is None:
            raise ServiceUnavailableError(
                self.api_name,
                f"{self.api_name} client used before initialize() or after close()"
            )

        url = urljoin(self.base_url, endpoint.lstrip('/'))
        request_params = {**self.default_params, **(params or {})}

        start_time = time.monotonic()
        self.stats['total_requests'] += 1
        self.stats['last_request_time'] = datetime.now(timezone.utc).isoformat()

        try:
            async with self.session.request(
                method,
                url,
                params=request_params,
                headers=headers,
                timeout=ClientTimeout(total=self.timeout)
            ) as response:
                response_time = time.monotonic() - start_time
                self._record_response_time(response_time)

                if response.status != 200:
                    body = await response.text()
                    raise APIRequestError(
                        f"{self.api_name} returned HTTP {response.status}",
                        status=response.status,
                        body=body[:500]
                    )

                try:
                    response_data = await response.json(content_type=None)
                except ValueError as e:
                    raise APIRequestError(
                        f"{self.api_name} returned a non-JSON body: {e}",
                        status=response.status
                    ) from e

                self.stats['successful_requests'] += 1
                logger.info(
                    f"{self.api_name} API request successful: "
                    f"{method} {endpoint} - {response.status} - {response_time:.2f}s"
                )
                return response_data

        except APIRequestError as e:
            self._record_error(e, method, endpoint)
            raise
        except asyncio.TimeoutError as e:
            self._record_error(e, method, endpoint)
            raise APIRequestError(f"Timeout for {self.api_name}: {method} {endpoint}") from e
        except aiohttp.ClientError as e:
            self._record_error(e, method, endpoint)
            raise APIRequestError(f"Client error for {self.api_name}: {e}") from e

    def _record_response_time(self, response_time: float) -> None:
        if self.stats['average_response_time'] == 0:
            self.stats['average_response_time'] = response_time
        else:
            self.stats['average_response_time'] = (
                self.stats['average_response_time'] * 0.7 + response_time * 0.3
            )

    def _record_error(self, error: Exception, method: str, endpoint: str) -> None:
        """Record error for analysis and monitoring."""
        self.stats['failed_requests'] += 1
        error_record = {
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'error_type': type(error).__name__,
            'error_message': str(error),
            'method': method,
            'endpoint': endpoint,
            'api_name': self.api_name
        }

        self.error_history.append(error_record)
        if len(self.error_history) > self.max_error_history:
            self.error_history = self.error_history[-self.max_error_history:]

        logger.error(f"API error recorded for {self.api_name}: {error_record}")

    def get_stats(self) -> Dict[str, Any]:
        return {
            'api_name': self.api_name,
            'initialized': self.is_initialized,
            **self.stats,
            'recent_errors': self.error_history[-5:],
        }
