from abc import ABC, abstractmethod
from typing import Any, Callable

import httpx
from httpx._types import QueryParamTypes

from shared.helper.errors import TransportError
from shared.helper.HelperConfig import HelperConfig
from shared.models.config import EnvConfig


class ClientInterface(ABC):
    """
    Base class of all HTTP backed clients.

    Configuration is read from env keys named {TYPE}_{ENGINE}_{KEY}, e.g. CMS_STRAPI_BASE_URL.
    The underlying httpx.AsyncClient only exists between boot() and close().
    """

    def __init__(self, helper_config: HelperConfig):
        self.logging = helper_config.get_logger()
        self._helper_config = helper_config
        self.timeout = helper_config.get_number_val(f"{self.get_client_type().upper()}_TIMEOUT", default=30.0)

        self._client: httpx.AsyncClient | None = None
        self.validate_full_configuration()

    ##########################################
    ############### CHECKER ##################
    ##########################################

    def validate_full_configuration(self) -> None:
        """
        Reads every required configuration key once so a missing value fails at startup.

        Raises:
            ValueError: If a required key is missing or has the wrong type.
        """
        for config in self._get_required_config():
            self.get_config_val(raw_key=config.env_key, default=config.default, val_type=config.val_type)

    ##########################################
    ################ GETTER ##################
    ##########################################

    ################ GENERAL ##################
    def get_client_type(self) -> str:
        return self._get_client_type().lower()

    @abstractmethod
    def _get_client_type(self) -> str:
        """
        Returns the type of the client. E.g. "cms"
        """
        pass

    def get_engine_name(self) -> str:
        return self._get_engine_name().lower()

    @abstractmethod
    def _get_engine_name(self) -> str:
        """
        Returns the display name of the backend engine. E.g. "Strapi"
        """
        pass

    ################ CONFIG ##################
    @abstractmethod
    def _get_required_config(self) -> list[EnvConfig]:
        """
        Returns the configuration keys the client needs, without the type/engine prefix.
        """
        pass

    def _get_config_key_name(self, raw_key: str) -> str:
        return f"{self.get_client_type()}_{self.get_engine_name()}_{raw_key}".upper()

    def _get_config_readers(self) -> dict[str, Callable[..., Any]]:
        return {
            "string": self._helper_config.get_string_val,
            "number": self._helper_config.get_number_val,
            "bool": self._helper_config.get_bool_val,
            "list": self._helper_config.get_list_val,
        }

    def get_config_val(self, raw_key: str, default: Any = None, val_type: str = "string") -> Any:
        """
        Reads a configuration value of this client.

        Args:
            raw_key (str): Key without prefix, e.g. "BASE_URL".
            default (Any): Value used when the key is not set. None makes the key required.
            val_type (str): One of "string", "number", "bool", "list".

        Returns:
            Any: The parsed value.
        """
        reader = self._get_config_readers().get(val_type)
        if reader is None:
            raise ValueError(f"Unsupported config value type '{val_type}' for key '{raw_key}' of {self.get_client_type()} client '{self.get_engine_name()}'.")
        return reader(self._get_config_key_name(raw_key), default=default)

    ################ AUTH ##################
    @abstractmethod
    def _get_auth_header(self) -> dict:
        """
        Returns the authentication header, or an empty dict when no token is configured.
        """
        pass

    ################ ENDPOINTS ##################
    @abstractmethod
    def _get_base_url(self) -> str:
        """
        Returns the base URL of the backend (e.g. "http://localhost:1337").
        """
        pass

    @abstractmethod
    def _get_endpoint_healthcheck(self) -> str:
        pass

    def _build_url(self, endpoint: str) -> str:
        endpoint = endpoint.strip()
        path = "/" + endpoint.lstrip("/") if endpoint else ""
        return f"{self._get_base_url().rstrip('/')}{path}"

    ##########################################
    ############### REQUESTS #################
    ##########################################

    async def do_healthcheck(self) -> httpx.Response:
        """Sends a request to the healthcheck endpoint. Non-2xx answers are returned, not raised."""
        return await self.do_request(method="GET", endpoint=self._get_endpoint_healthcheck())

    ##########################################
    ############ CORE REQUESTS ###############
    ##########################################

    async def boot(self, transport: httpx.AsyncBaseTransport | None = None) -> None:
        """Creates the HTTP client. A transport can be injected, e.g. httpx.MockTransport in tests."""
        self._client = httpx.AsyncClient(timeout=self.timeout, transport=transport)

    async def close(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    async def do_request(
        self,
        method: str = "GET",
        json: dict | None = None,
        params: QueryParamTypes | None = None,
        endpoint: str = "",
        additional_headers: dict | None = None,
    ) -> httpx.Response:
        """
        Sends an HTTP request to the backend and returns the raw response.

        Args:
            method (str): HTTP method.
            json (dict | None): JSON body.
            params (QueryParamTypes | None): Query parameters, e.g. a list of (key, value) pairs.
            endpoint (str): Path appended to the base URL.
            additional_headers (dict | None): Headers overriding the defaults.

        Returns:
            httpx.Response: The response, whatever its status.

        Raises:
            RuntimeError: If boot() has not been called.
        """
        if self._client is None:
            raise RuntimeError("HTTP client not initialised. Call boot() before making requests.")

        headers = {"Accept": "application/json", **self._get_auth_header(), **(additional_headers or {})}
        url = self._build_url(endpoint)
        self.logging.debug("%s %s (%s client '%s')", method, url, self.get_client_type(), self.get_engine_name())
        return await self._client.request(method, url, headers=headers, params=params, json=json)

    async def do_request_json(
        self,
        method: str = "GET",
        json: dict | None = None,
        params: QueryParamTypes | None = None,
        endpoint: str = "",
    ) -> dict:
        """
        Sends a request that must succeed and returns the decoded JSON body.
        An empty body decodes to an empty dict.

        Raises:
            TransportError: If the backend answers with a non-2xx status.
        """
        response = await self.do_request(method=method, json=json, params=params, endpoint=endpoint)
        self._raise_for_status(response)
        return response.json() if response.content else {}

    def _raise_for_status(self, response: httpx.Response) -> None:
        if response.is_success:
            return
        url = str(response.request.url)
        self.logging.error("Request to %s failed with status %d: %s", url, response.status_code, response.text)
        raise TransportError(status_code=response.status_code, body=response.text, url=url)
