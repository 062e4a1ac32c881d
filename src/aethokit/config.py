"""Client configuration and network resolution.

Resolution happens once, when a client is built. A selector is turned into
one of three variants at the boundary and resolved immediately:

* ``NetworkName`` - a name present in the network table, mapped to its URL
* ``ExplicitUrl`` - anything else, used verbatim as the relay base URL
* ``DefaultNetwork`` - no selector given, the table's default network
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional, Union
from urllib.parse import urlsplit

import yaml

from . import __version__
from .errors import EmptyCredential, InvalidCredential, InvalidEndpoint

BUNDLED_NETWORKS = Path(__file__).with_name("networks.yaml")
DEFAULT_NETWORK = "devnet"


@dataclass(frozen=True)
class ClientConfig:
    connect_timeout: float = 5.0
    read_timeout: float = 30.0
    user_agent: str = f"aethokit-python/{__version__}"
    max_connections: int = 16

    @property
    def deadline(self) -> float:
        """Upper bound, in seconds, for one complete exchange."""
        return self.connect_timeout + self.read_timeout


@dataclass(frozen=True)
class NetworkTable:
    urls: Mapping[str, str]
    default: str = DEFAULT_NETWORK

    def __post_init__(self) -> None:
        object.__setattr__(self, "urls", MappingProxyType(dict(self.urls)))
        if self.default not in self.urls:
            raise ValueError(f"default network {self.default!r} is not in the network table")

    def __contains__(self, name: object) -> bool:
        return name in self.urls

    def url_for(self, name: str) -> str:
        return self.urls[name]

    @classmethod
    def load(cls, path: Union[str, Path]) -> "NetworkTable":
        with Path(path).open("r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}
        if not isinstance(data, dict):
            raise ValueError(f"{path}: expected a mapping at the top level")
        networks = data.get("networks")
        if not isinstance(networks, dict) or not networks:
            raise ValueError(f"{path}: expected a non-empty 'networks' mapping")
        return cls(
            urls={str(name): str(url) for name, url in networks.items()},
            default=str(data.get("default", DEFAULT_NETWORK)),
        )


def default_networks() -> NetworkTable:
    return NetworkTable.load(BUNDLED_NETWORKS)


# ---- Selector variants ----


@dataclass(frozen=True)
class NetworkName:
    name: str


@dataclass(frozen=True)
class ExplicitUrl:
    url: str


@dataclass(frozen=True)
class DefaultNetwork:
    pass


NetworkSelector = Union[NetworkName, ExplicitUrl, DefaultNetwork]


def parse_selector(raw: Optional[str], networks: NetworkTable) -> NetworkSelector:
    if raw is None:
        return DefaultNetwork()
    if raw in networks:
        return NetworkName(raw)
    return ExplicitUrl(raw)


@dataclass(frozen=True)
class ResolvedConfig:
    gas_key: str = field(repr=False)
    base_url: str
    network: Optional[str]
    selector: NetworkSelector


def validate_base_url(url: str) -> str:
    """Check URL syntax locally; the URL itself is returned unchanged."""
    if not url or url != url.strip():
        raise InvalidEndpoint(url, "empty URL or surrounding whitespace")
    try:
        parts = urlsplit(url)
        parts.port  # raises on a malformed port
    except ValueError as exc:
        raise InvalidEndpoint(url, str(exc)) from exc
    if parts.scheme not in ("http", "https"):
        raise InvalidEndpoint(url, "scheme must be http or https")
    if not parts.hostname:
        raise InvalidEndpoint(url, "missing host")
    if parts.query or parts.fragment:
        raise InvalidEndpoint(url, "query and fragment are not allowed")
    return url


def validate_gas_key(gas_key: str) -> None:
    if not gas_key or not gas_key.strip():
        raise EmptyCredential()
    if gas_key != gas_key.strip():
        raise InvalidCredential("leading or trailing whitespace")
    if not gas_key.isascii():
        raise InvalidCredential("non-ASCII characters")
    if not gas_key.isprintable():
        raise InvalidCredential("control characters")


def _as_table(networks: Union[NetworkTable, Mapping[str, str], None]) -> NetworkTable:
    if networks is None:
        return default_networks()
    if isinstance(networks, NetworkTable):
        return networks
    return NetworkTable(urls=networks)


def resolve(
    gas_key: str,
    rpc_or_network: Optional[str] = None,
    networks: Union[NetworkTable, Mapping[str, str], None] = None,
) -> ResolvedConfig:
    """Turn a credential and an optional network-or-URL into a fixed relay target.

    Raises:
        EmptyCredential: if ``gas_key`` is empty or only whitespace.
        InvalidCredential: if ``gas_key`` cannot be sent as a header value.
        InvalidEndpoint: if the selector is not a known network and not a valid URL.
    """
    validate_gas_key(gas_key)

    table = _as_table(networks)
    selector = parse_selector(rpc_or_network, table)

    if isinstance(selector, DefaultNetwork):
        network: Optional[str] = table.default
        base_url = validate_base_url(table.url_for(table.default))
    elif isinstance(selector, NetworkName):
        network = selector.name
        base_url = validate_base_url(table.url_for(selector.name))
    else:
        network = None
        base_url = validate_base_url(selector.url)

    return ResolvedConfig(gas_key=gas_key, base_url=base_url, network=network, selector=selector)
