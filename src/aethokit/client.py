"""Async client for the Aethokit gas sponsorship relay."""

from __future__ import annotations

import logging
from typing import Mapping, Optional, Union

import httpx

from .config import ClientConfig, NetworkName, NetworkTable, ResolvedConfig, resolve
from .errors import EmptyInput, HttpStatus, MalformedResponse, TransportFailure
from .http_client import HttpClient
from .models import ErrorBody, RelayResponse, Success, SponsorTxRequest, parse_gas_address, parse_sponsored_tx

log = logging.getLogger(__name__)

GAS_ADDRESS_PATH = "get-gas-address"
SPONSOR_TX_PATH = "sponsor-tx"


class Aethokit:
    """
    Client for the Aethokit gas sponsorship API.

    The gas key and relay endpoint are fixed when the client is built; use a
    new client to rotate either. Calls may run concurrently on one client.

    Args:
        gas_key: GAS KEY identifying the caller to the relay.
        rpc_or_network: A network name from the network table (e.g. "mainnet")
            or an explicit relay URL. Defaults to the table's default network.
        networks: Network table to resolve names against; the bundled table
            when omitted.
        config: Timeouts and session settings.
        transport: Optional httpx transport, mainly for tests.

    Raises:
        EmptyCredential: ``gas_key`` is empty or whitespace.
        InvalidEndpoint: ``rpc_or_network`` is neither a known network nor a valid URL.
    """

    def __init__(
        self,
        gas_key: str,
        rpc_or_network: Optional[str] = None,
        *,
        networks: Union[NetworkTable, Mapping[str, str], None] = None,
        config: Optional[ClientConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._resolved = resolve(gas_key, rpc_or_network, networks)
        self._config = config or ClientConfig()
        self._http = HttpClient(self._resolved, self._config, transport=transport)
        log.info("aethokit client targeting %s (network=%s)", self._resolved.base_url, self._resolved.network)

    @property
    def resolved(self) -> ResolvedConfig:
        return self._resolved

    @property
    def base_url(self) -> str:
        return self._resolved.base_url

    @property
    def network(self) -> Optional[str]:
        return self._resolved.network

    @property
    def config(self) -> ClientConfig:
        return self._config

    def __repr__(self) -> str:
        return f"Aethokit(base_url={self.base_url!r}, network={self.network!r})"

    # ---- Operations ----

    async def get_gas_address(self) -> str:
        """Retrieve the gas address for the gas tank associated with the GAS KEY."""
        response = await self._http.send("GET", GAS_ADDRESS_PATH)
        return parse_gas_address(self._expect_success(response)).address

    async def sponsor_tx(self, serialized_tx: str) -> str:
        """
        Submit a serialized transaction for sponsorship.

        The transaction is passed through untouched; the relay countersigns it
        as fee payer and submits it. When the client was built with a network
        name, that name is sent along as ``rpcOrNetwork``.

        Returns:
            The transaction hash reported by the relay.
        """
        if not serialized_tx:
            raise EmptyInput("serialized_tx")
        request = SponsorTxRequest(tx=serialized_tx, rpc_or_network=self._network_label())
        response = await self._http.send("POST", SPONSOR_TX_PATH, request.to_payload())
        return parse_sponsored_tx(self._expect_success(response)).hash

    # ---- Helpers ----

    def _network_label(self) -> Optional[str]:
        # Only an explicitly chosen network name is forwarded to the relay.
        selector = self._resolved.selector
        return selector.name if isinstance(selector, NetworkName) else None

    @staticmethod
    def _expect_success(response: RelayResponse) -> Success:
        if isinstance(response, Success):
            return response
        if isinstance(response, ErrorBody):
            raise HttpStatus(response.status, response.code, response.message)
        if 200 <= response.status < 300:
            raise MalformedResponse(None, "body is not a JSON object", body=response.raw)
        raise TransportFailure(
            "relay returned an error without a decodable body",
            http_status=response.status,
            body=response.raw,
        )

    # ---- Lifecycle ----

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "Aethokit":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
