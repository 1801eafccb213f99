"""
Provider - Remote data capability used by the wallet client.

The core is written against the Provider interface; JsonRpcProvider is the
default implementation that posts named JSON-RPC 2.0 methods to a Sui
full node with `requests`.

Responses are returned as the node's JSON (dicts and lists); parsing them
is left to the services that consume them.
"""

import itertools
import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

import requests

from errors import RemoteQueryFailed
from networks import DEFAULT_REQUEST_TIMEOUT
from .coins import coin_type_arg

logger = logging.getLogger(__name__)

# Node-side wait mode for executed transactions
DEFAULT_EXECUTE_REQUEST_TYPE = "WaitForLocalExecution"


class Provider(ABC):
    """Remote queries the wallet client depends on."""

    @abstractmethod
    def get_object(self, object_id: str) -> dict:
        """Object lookup by id."""

    @abstractmethod
    def get_object_batch(self, object_ids: list[str]) -> list[dict]:
        """Object lookup for several ids, in the order given."""

    @abstractmethod
    def get_objects_owned_by_address(self, address: str) -> list[dict]:
        """Object infos ({objectId, type, ...}) owned by an address."""

    @abstractmethod
    def get_objects_owned_by_object(self, object_id: str) -> list[dict]:
        """Object infos owned by another object (e.g. a bag)."""

    @abstractmethod
    def get_coin_balances_owned_by_address(self, address: str,
                                           type_arg: Optional[str] = None) -> list[dict]:
        """Coin objects owned by an address, optionally of one coin type."""

    @abstractmethod
    def get_transactions_for_address(self, address: str) -> list[str]:
        """Transaction digests sent from or to an address (may repeat)."""

    @abstractmethod
    def get_transaction_with_effects(self, digest: str) -> dict:
        """Transaction, effects and timestamp_ms for a digest."""

    @abstractmethod
    def dry_run_transaction(self, tx_bytes: str) -> dict:
        """Compute effects of base64 transaction bytes without committing."""

    @abstractmethod
    def execute_transaction(self, tx_bytes: str, signature_scheme: str,
                            signature: str, pub_key: str) -> dict:
        """Submit signed base64 transaction bytes."""

    @abstractmethod
    def request_sui_from_faucet(self, address: str) -> dict:
        """Ask the network faucet for gas coins."""


class JsonRpcProvider(Provider):
    """Provider backed by a Sui full node's JSON-RPC endpoint."""

    def __init__(self, endpoint: str, faucet_url: Optional[str] = None,
                 timeout: float = DEFAULT_REQUEST_TIMEOUT,
                 session: Optional[requests.Session] = None):
        """
        Initialize provider.

        Args:
            endpoint: Full node JSON-RPC URL
            faucet_url: Faucet URL (None disables airdrops)
            timeout: Per-request timeout in seconds
            session: Optional requests session to reuse connections
        """
        self.endpoint = endpoint
        self.faucet_url = faucet_url
        self.timeout = timeout
        self.session = session or requests.Session()
        self._ids = itertools.count(1)

    # ============================================
    # Transport
    # ============================================

    def _post(self, url: str, payload: Any, what: str) -> Any:
        try:
            response = self.session.post(
                url,
                json=payload,
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
            )
            response.raise_for_status()
            return response.json()
        except requests.exceptions.RequestException as e:
            logger.warning(f"{what} failed: {e}")
            raise RemoteQueryFailed(f"{what} failed: {e}") from e
        except ValueError as e:
            # Body was not JSON
            logger.warning(f"{what} returned an invalid response: {e}")
            raise RemoteQueryFailed(f"{what} returned an invalid response") from e

    @staticmethod
    def _unwrap(body: Any, method: str) -> Any:
        if not isinstance(body, dict):
            raise RemoteQueryFailed(f"{method} returned an invalid response")
        if body.get("error"):
            error = body["error"]
            message = error.get("message", error) if isinstance(error, dict) else error
            raise RemoteQueryFailed(f"{method} failed: {message}")
        return body.get("result")

    def call(self, method: str, params: list) -> Any:
        """Invoke one JSON-RPC method and return its result."""
        payload = {"jsonrpc": "2.0", "id": next(self._ids), "method": method, "params": params}
        return self._unwrap(self._post(self.endpoint, payload, method), method)

    def batch_call(self, method: str, params_list: list[list]) -> list:
        """Invoke one method several times in a single batch request."""
        if not params_list:
            return []
        payload = [
            {"jsonrpc": "2.0", "id": next(self._ids), "method": method, "params": params}
            for params in params_list
        ]
        body = self._post(self.endpoint, payload, f"{method} batch")
        if not isinstance(body, list):
            raise RemoteQueryFailed(f"{method} batch returned an invalid response")

        by_id = {item.get("id"): item for item in body if isinstance(item, dict)}
        results = []
        for request in payload:
            if request["id"] not in by_id:
                raise RemoteQueryFailed(f"{method} batch is missing response {request['id']}")
            results.append(self._unwrap(by_id[request["id"]], method))
        return results

    # ============================================
    # Objects
    # ============================================

    def get_object(self, object_id: str) -> dict:
        return self.call("sui_getObject", [object_id])

    def get_object_batch(self, object_ids: list[str]) -> list[dict]:
        return self.batch_call("sui_getObject", [[object_id] for object_id in object_ids])

    def get_objects_owned_by_address(self, address: str) -> list[dict]:
        return self.call("sui_getObjectsOwnedByAddress", [address]) or []

    def get_objects_owned_by_object(self, object_id: str) -> list[dict]:
        return self.call("sui_getObjectsOwnedByObject", [object_id]) or []

    def get_coin_balances_owned_by_address(self, address: str,
                                           type_arg: Optional[str] = None) -> list[dict]:
        objects = self.get_objects_owned_by_address(address)
        coin_ids = []
        for info in objects:
            arg = coin_type_arg(info.get("type", ""))
            if arg is None:
                continue
            if type_arg is None or arg == type_arg:
                coin_ids.append(info["objectId"])
        return self.get_object_batch(coin_ids)

    # ============================================
    # Transactions
    # ============================================

    def get_transactions_for_address(self, address: str) -> list[str]:
        digests: list[str] = []
        for query in ({"ToAddress": address}, {"FromAddress": address}):
            page = self.call("sui_getTransactions", [query, None, None, True]) or {}
            digests.extend(page.get("data", []))
        return digests

    def get_transaction_with_effects(self, digest: str) -> dict:
        return self.call("sui_getTransaction", [digest])

    def dry_run_transaction(self, tx_bytes: str) -> dict:
        return self.call("sui_dryRunTransaction", [tx_bytes])

    def execute_transaction(self, tx_bytes: str, signature_scheme: str,
                            signature: str, pub_key: str) -> dict:
        return self.call(
            "sui_executeTransaction",
            [tx_bytes, signature_scheme, signature, pub_key, DEFAULT_EXECUTE_REQUEST_TYPE],
        )

    def request_sui_from_faucet(self, address: str) -> dict:
        if not self.faucet_url:
            raise RemoteQueryFailed("No faucet configured for this network")
        body = self._post(
            self.faucet_url,
            {"FixedAmountRequest": {"recipient": address}},
            "Faucet request",
        )
        if isinstance(body, dict) and body.get("error"):
            raise RemoteQueryFailed(f"Faucet request failed: {body['error']}")
        logger.info(f"Requested SUI from faucet for {address}")
        return body
