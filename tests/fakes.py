"""
In-memory fakes and object builders for the wallet client tests
"""

from errors import RemoteQueryFailed
from services.provider import Provider
from services.serializer import Serializer

__all__ = [
    "FakeProvider", "FakeSerializer", "make_address", "make_coin", "make_object",
    "make_nft", "make_domain", "make_transaction",
]

PHRASE = "abandon abandon abandon abandon abandon abandon abandon abandon abandon abandon abandon about"


# --- Object builders --- #

def make_address(n: int) -> str:
    return "0x" + f"{n:040x}"


def make_object(object_id: str, type_: str, fields: dict, owner=None, status: str = "Exists") -> dict:
    return {
        "status": status,
        "details": {
            "data": {"dataType": "moveObject", "type": type_, "fields": fields},
            "owner": owner or {"AddressOwner": make_address(1)},
            "reference": {"objectId": object_id, "version": 1, "digest": "d"},
        },
    }


def make_coin(object_id: str, balance: int, coin_type: str = "0x2::sui::SUI") -> dict:
    return make_object(
        object_id,
        f"0x2::coin::Coin<{coin_type}>",
        {"balance": balance, "id": {"id": object_id}},
    )


PKG = "0x" + "a" * 40


def make_nft(object_id: str, bag_id: str, owner: str = None) -> dict:
    return make_object(
        object_id,
        f"{PKG}::nft::Nft<{PKG}::suimarines::Submarine>",
        {
            "id": {"id": object_id},
            "logical_owner": owner or make_address(1),
            "bag": {"type": "0x2::bag::Bag", "fields": {"id": {"id": bag_id}, "size": 2}},
        },
    )


def make_domain(object_id: str, kind: str, value: dict) -> dict:
    type_ = (
        f"0x2::dynamic_field::Field<{PKG}::utils::Marker<{PKG}::display::{kind}>, "
        f"{PKG}::display::{kind}>"
    )
    return make_object(object_id, type_, {"value": {"type": kind, "fields": value}})


def make_transaction(events: list, timestamp_ms: int = 0, status: str = "success") -> dict:
    return {
        "certificate": {},
        "effects": {"status": {"status": status}, "events": events},
        "timestamp_ms": timestamp_ms,
    }


# --- Fakes --- #

class FakeProvider(Provider):
    """In-memory provider. Lookups of ids in `failing` raise RemoteQueryFailed."""

    def __init__(self):
        self.objects = {}            # object id -> response
        self.owned = {}              # address -> [object id]
        self.owned_by_object = {}    # object id -> [object id]
        self.digests = {}            # address -> [digest]
        self.transactions = {}       # digest -> transaction
        self.failing = set()
        self.owned_queries = []
        self.executed = []
        self.dry_runs = []
        self.faucet_requests = []

    def add(self, response: dict, owner: str = None) -> dict:
        object_id = response["details"]["reference"]["objectId"]
        self.objects[object_id] = response
        if owner is not None:
            self.owned.setdefault(owner, []).append(object_id)
        return response

    def _lookup(self, object_id):
        if object_id in self.failing:
            raise RemoteQueryFailed(f"lookup of {object_id} failed")
        return self.objects.get(object_id, {"status": "NotExists", "details": object_id})

    def _infos(self, ids):
        return [
            {"objectId": i, "type": self.objects[i]["details"]["data"]["type"]}
            for i in ids
        ]

    def get_object(self, object_id):
        return self._lookup(object_id)

    def get_object_batch(self, object_ids):
        return [self._lookup(i) for i in object_ids]

    def get_objects_owned_by_address(self, address):
        self.owned_queries.append(address)
        return self._infos(self.owned.get(address, []))

    def get_objects_owned_by_object(self, object_id):
        return self._infos(self.owned_by_object.get(object_id, []))

    def get_coin_balances_owned_by_address(self, address, type_arg=None):
        responses = []
        for object_id in self.owned.get(address, []):
            type_ = self.objects[object_id]["details"]["data"]["type"]
            if not type_.startswith("0x2::coin::Coin<"):
                continue
            if type_arg is None or type_ == f"0x2::coin::Coin<{type_arg}>":
                responses.append(self.objects[object_id])
        return responses

    def get_transactions_for_address(self, address):
        return list(self.digests.get(address, []))

    def get_transaction_with_effects(self, digest):
        if digest in self.failing:
            raise RemoteQueryFailed(f"lookup of {digest} failed")
        return self.transactions[digest]

    def dry_run_transaction(self, tx_bytes):
        self.dry_runs.append(tx_bytes)
        return {"status": {"status": "success"}, "txBytes": tx_bytes}

    def execute_transaction(self, tx_bytes, signature_scheme, signature, pub_key):
        self.executed.append((tx_bytes, signature_scheme, signature, pub_key))
        return {"effects": {"status": {"status": "success"}}}

    def request_sui_from_faucet(self, address):
        self.faucet_requests.append(address)
        return {"transferred_gas_objects": []}


class FakeSerializer(Serializer):
    """Serializes an intent to the UTF-8 bytes of its kind and signer."""

    def __init__(self):
        self.calls = []

    def serialize_to_bytes(self, signer_address, tx):
        self.calls.append((signer_address, tx))
        return f"{tx.kind}:{signer_address}".encode()


