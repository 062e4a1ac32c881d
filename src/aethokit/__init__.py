"""
Python SDK for the Aethokit gas sponsorship relay.

Example:
    from aethokit import Aethokit

    async with Aethokit(gas_key, "devnet") as client:
        fee_payer = await client.get_gas_address()
        tx_hash = await client.sponsor_tx(serialized_tx)
"""

import logging

__version__ = "0.1.0"

from .client import Aethokit
from .config import (
    ClientConfig,
    DefaultNetwork,
    ExplicitUrl,
    NetworkName,
    NetworkTable,
    ResolvedConfig,
    default_networks,
    resolve,
)
from .errors import (
    AethokitError,
    ApiError,
    Cancelled,
    ConfigError,
    EmptyCredential,
    EmptyInput,
    HttpStatus,
    InvalidCredential,
    InvalidEndpoint,
    MalformedResponse,
    Timeout,
    TransportFailure,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Aethokit",
    "ClientConfig",
    "DefaultNetwork",
    "ExplicitUrl",
    "NetworkName",
    "NetworkTable",
    "ResolvedConfig",
    "default_networks",
    "resolve",
    "AethokitError",
    "ApiError",
    "Cancelled",
    "ConfigError",
    "EmptyCredential",
    "EmptyInput",
    "HttpStatus",
    "InvalidCredential",
    "InvalidEndpoint",
    "MalformedResponse",
    "Timeout",
    "TransportFailure",
]
