import json
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from .errors import MalformedResponse


@dataclass(frozen=True)
class GasAddress:
    address: str


@dataclass(frozen=True)
class SponsorTxRequest:
    tx: str
    rpc_or_network: Optional[str] = None

    def to_payload(self) -> Dict[str, str]:
        payload = {"tx": self.tx}
        if self.rpc_or_network is not None:
            payload["rpcOrNetwork"] = self.rpc_or_network
        return payload


@dataclass(frozen=True)
class SponsoredTx:
    hash: str


# ---- Relay response, decoded once per exchange ----


@dataclass(frozen=True)
class Success:
    status: int
    payload: Dict[str, Any]
    raw: str


@dataclass(frozen=True)
class ErrorBody:
    status: int
    code: str
    message: str


@dataclass(frozen=True)
class Unparseable:
    status: int
    raw: str


RelayResponse = Union[Success, ErrorBody, Unparseable]


def _load_object(text: str) -> Optional[Dict[str, Any]]:
    try:
        data = json.loads(text)
    except ValueError:
        return None
    return data if isinstance(data, dict) else None


def decode_response(status: int, text: str) -> RelayResponse:
    data = _load_object(text)
    if data is None:
        return Unparseable(status=status, raw=text)
    if 200 <= status < 300:
        return Success(status=status, payload=data, raw=text)

    code = data.get("code")
    if not isinstance(code, str) or not code:
        return Unparseable(status=status, raw=text)
    message = data.get("message")
    if not isinstance(message, str):
        message = data.get("error")
    if not isinstance(message, str):
        message = text
    return ErrorBody(status=status, code=code, message=message)


def require_field(response: Success, name: str) -> str:
    if name not in response.payload:
        raise MalformedResponse(name, "missing field", body=response.raw)
    value = response.payload[name]
    if not isinstance(value, str):
        raise MalformedResponse(name, f"expected a string, got {type(value).__name__}", body=response.raw)
    if not value:
        raise MalformedResponse(name, "empty value", body=response.raw)
    return value


def parse_gas_address(response: Success) -> GasAddress:
    # The hosted relay historically named this field "gasAddress"; only "address" is read.
    return GasAddress(address=require_field(response, "address"))


def parse_sponsored_tx(response: Success) -> SponsoredTx:
    return SponsoredTx(hash=require_field(response, "hash"))
