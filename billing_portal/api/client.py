"""
Portal API Client

Async client for the portal REST API. Every request carries the shared
Authorization header; failed calls are raised once and never retried.
"""

import logging
from typing import Any, Dict, List, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from .config import INVENTORY, ApiConfig
from ..exceptions import SubmitError, TransportError


logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class PortalApiClient:
    """Portal API client with error mapping for reads and writes"""

    def __init__(self, config: ApiConfig, transport: Optional[httpx.AsyncBaseTransport] = None):
        """
        Initialize portal API client

        Args:
            config: Portal API configuration
            transport: Optional httpx transport (tests pass a MockTransport)
        """
        self.config = config
        self.config.validate()
        self.http_client = httpx.AsyncClient(
            headers=self.config.headers,
            timeout=self.config.timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "PortalApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.http_client.aclose()

    async def get(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """
        Make GET request

        Raises:
            TransportError: On network failure, non-2xx status or a non-JSON body
        """
        url = self.config.url(endpoint)
        logger.debug(f"Making GET request to {endpoint}")
        try:
            response = await self.http_client.get(url, params=params)
        except httpx.HTTPError as e:
            logger.error(f"GET {endpoint} failed: {e}")
            raise TransportError(f"Request failed: {e}")

        if not response.is_success:
            logger.error(f"GET {endpoint} returned HTTP {response.status_code}")
            raise TransportError(
                f"HTTP {response.status_code} error from {endpoint}",
                status_code=response.status_code,
                response=response.text,
            )

        try:
            return response.json()
        except ValueError:
            raise TransportError(f"Invalid JSON from {endpoint}", status_code=response.status_code,
                                 response=response.text)

    async def post(self, endpoint: str, data: Optional[Dict[str, Any]] = None) -> Any:
        """
        Make POST request with a JSON body

        Raises:
            SubmitError: On network failure or non-2xx status; carries the response body text
        """
        url = self.config.url(endpoint)
        logger.debug(f"Making POST request to {endpoint}")
        try:
            response = await self.http_client.post(url, json=data)
        except httpx.HTTPError as e:
            logger.error(f"POST {endpoint} failed: {e}")
            raise SubmitError(f"Request failed: {e}")

        if not response.is_success:
            logger.error(f"POST {endpoint} rejected with HTTP {response.status_code}")
            raise SubmitError(response.text or f"HTTP {response.status_code} error",
                              status_code=response.status_code,
                              response=response.text)

        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError:
            return {"raw": response.text}

    async def health_check(self) -> bool:
        """
        Check if the client can reach the portal API

        Returns:
            True if connection successful, False otherwise
        """
        try:
            await self.get(INVENTORY, params={"limit": 1})
            return True
        except TransportError as e:
            logger.error(f"Health check failed: {e}")
            return False


def parse_records(model: Type[ModelT], payload: Any, resource: str) -> List[ModelT]:
    """
    Validate a JSON list payload into models

    Raises:
        TransportError: If the payload is not a list of matching records
    """
    if not isinstance(payload, list):
        raise TransportError(f"Expected a list of {resource}, got {type(payload).__name__}")
    try:
        return [model.model_validate(item) for item in payload]
    except PydanticValidationError as e:
        logger.error(f"Malformed {resource} payload: {e}")
        raise TransportError(f"Malformed {resource} payload")
