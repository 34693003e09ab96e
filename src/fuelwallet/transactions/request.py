"""
Mutable transaction request models.

A request is built up by the caller, optionally completed by the provider's
dependency estimation, and finally witnessed by one or more signers. Coin and
message inputs point at a witness slot by index; inputs owned by the same
address share the slot assigned when that address was first seen.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any

from fuelwallet.address import Address

ZERO_B256 = bytes(32)
BASE_ASSET_ID = ZERO_B256


class TransactionType(IntEnum):
    SCRIPT = 0
    CREATE = 1


class InputType(IntEnum):
    COIN = 0
    CONTRACT = 1
    MESSAGE = 2


class OutputType(IntEnum):
    COIN = 0
    CONTRACT = 1
    CHANGE = 2
    VARIABLE = 3


def _b256(value: bytes | str) -> bytes:
    if isinstance(value, str):
        value = bytes.fromhex(value.removeprefix("0x"))
    if len(value) != 32:
        raise ValueError(f"Expected 32 bytes, got {len(value)}")
    return bytes(value)


def _blob(value: bytes | str) -> bytes:
    if isinstance(value, str):
        return bytes.fromhex(value.removeprefix("0x"))
    return bytes(value)


@dataclass
class TxPointer:
    block_height: int = 0
    tx_index: int = 0


@dataclass
class CoinInput:
    """Spend of a coin (UTXO). id is the 32-byte tx id followed by a 1-byte output index."""

    id: bytes
    owner: Address
    amount: int
    asset_id: bytes = BASE_ASSET_ID
    witness_index: int = 0
    tx_pointer: TxPointer = field(default_factory=TxPointer)
    maturity: int = 0
    predicate: bytes = b""
    predicate_data: bytes = b""

    type = InputType.COIN

    @property
    def witness_owner(self) -> Address | None:
        return self.owner if not self.predicate else None


@dataclass
class MessageInput:
    """Spend of a bridged message; the recipient is the owner that must sign."""

    sender: Address
    recipient: Address
    amount: int
    nonce: bytes
    witness_index: int = 0
    data: bytes = b""
    predicate: bytes = b""
    predicate_data: bytes = b""

    type = InputType.MESSAGE

    @property
    def witness_owner(self) -> Address | None:
        return self.recipient if not self.predicate else None


@dataclass
class ContractInput:
    contract_id: bytes
    tx_pointer: TxPointer = field(default_factory=TxPointer)

    type = InputType.CONTRACT

    @property
    def witness_owner(self) -> Address | None:
        return None


@dataclass
class CoinOutput:
    to: Address
    amount: int
    asset_id: bytes = BASE_ASSET_ID

    type = OutputType.COIN


@dataclass
class ChangeOutput:
    to: Address
    asset_id: bytes = BASE_ASSET_ID

    type = OutputType.CHANGE


@dataclass
class ContractOutput:
    input_index: int

    type = OutputType.CONTRACT


@dataclass
class VariableOutput:
    type = OutputType.VARIABLE


TransactionInput = CoinInput | MessageInput | ContractInput
TransactionOutput = CoinOutput | ChangeOutput | ContractOutput | VariableOutput


@dataclass
class StorageSlot:
    key: bytes
    value: bytes


@dataclass
class TransactionRequest:
    """
    Base transaction request.

    The witness list holds signatures (and, for create transactions, the
    contract bytecode). Slot i is referenced by every input whose
    witness_index is i.
    """

    gas_price: int = 0
    maturity: int = 0
    inputs: list[TransactionInput] = field(default_factory=list)
    outputs: list[TransactionOutput] = field(default_factory=list)
    witnesses: list[bytes] = field(default_factory=list)

    type = TransactionType.SCRIPT

    def add_witness(self, witness: bytes) -> int:
        """Append a witness, returns its index"""
        self.witnesses.append(bytes(witness))
        return len(self.witnesses) - 1

    def add_empty_witness(self) -> int:
        return self.add_witness(b"")

    def update_witness(self, index: int, witness: bytes) -> None:
        """Write a witness slot, padding the list with empty witnesses up to index"""
        if index < 0:
            raise IndexError(f"Invalid witness index: {index}")
        while len(self.witnesses) <= index:
            self.add_empty_witness()
        self.witnesses[index] = bytes(witness)

    def get_witness_index_by_owner(self, owner: Address | str | bytes) -> int | None:
        from fuelwallet.transactions.codec import resolve_witness_index

        return resolve_witness_index(self, Address.from_dynamic_input(owner))

    def update_witness_by_owner(self, owner: Address | str | bytes, signature: bytes) -> None:
        from fuelwallet.transactions.codec import set_witness_at_owner

        set_witness_at_owner(self, Address.from_dynamic_input(owner), signature)

    def get_transaction_id(self, chain_id: int) -> str:
        """Hex id of the transaction on the given chain (the signing digest)"""
        from fuelwallet.transactions.codec import compute_signing_digest

        return "0x" + compute_signing_digest(self, chain_id).hex()

    def _witness_index_for(self, owner: Address) -> int:
        existing = self.get_witness_index_by_owner(owner)
        if existing is not None:
            return existing
        return self.add_empty_witness()

    def add_coin_input(
        self,
        id: bytes | str,
        owner: Address | str | bytes,
        amount: int,
        asset_id: bytes | str = BASE_ASSET_ID,
        tx_pointer: TxPointer | None = None,
        maturity: int = 0,
        predicate: bytes = b"",
        predicate_data: bytes = b"",
    ) -> CoinInput:
        """
        Add a coin input.

        Signed inputs reuse the witness slot of an earlier input with the same
        owner, otherwise a new empty witness is appended for them. Predicate
        inputs carry no signature.
        """
        owner = Address.from_dynamic_input(owner)
        witness_index = 0 if predicate else self._witness_index_for(owner)

        coin_input = CoinInput(
            id=_blob(id),
            owner=owner,
            amount=amount,
            asset_id=_b256(asset_id),
            witness_index=witness_index,
            tx_pointer=tx_pointer or TxPointer(),
            maturity=maturity,
            predicate=predicate,
            predicate_data=predicate_data,
        )
        self.inputs.append(coin_input)
        return coin_input

    def add_message_input(
        self,
        sender: Address | str | bytes,
        recipient: Address | str | bytes,
        amount: int,
        nonce: bytes | str,
        data: bytes = b"",
        predicate: bytes = b"",
        predicate_data: bytes = b"",
    ) -> MessageInput:
        recipient = Address.from_dynamic_input(recipient)
        witness_index = 0 if predicate else self._witness_index_for(recipient)

        message_input = MessageInput(
            sender=Address.from_dynamic_input(sender),
            recipient=recipient,
            amount=amount,
            nonce=_b256(nonce),
            witness_index=witness_index,
            data=data,
            predicate=predicate,
            predicate_data=predicate_data,
        )
        self.inputs.append(message_input)
        return message_input

    def add_contract_input(
        self, contract_id: bytes | str, tx_pointer: TxPointer | None = None
    ) -> ContractInput:
        """Add a contract input together with its matching contract output"""
        contract_input = ContractInput(
            contract_id=_b256(contract_id), tx_pointer=tx_pointer or TxPointer()
        )
        self.inputs.append(contract_input)
        self.outputs.append(ContractOutput(input_index=len(self.inputs) - 1))
        return contract_input

    def add_coin_output(
        self, to: Address | str | bytes, amount: int, asset_id: bytes | str = BASE_ASSET_ID
    ) -> CoinOutput:
        output = CoinOutput(
            to=Address.from_dynamic_input(to), amount=amount, asset_id=_b256(asset_id)
        )
        self.outputs.append(output)
        return output

    def add_change_output(
        self, to: Address | str | bytes, asset_id: bytes | str = BASE_ASSET_ID
    ) -> ChangeOutput:
        """Add a change output unless one already exists for this asset"""
        asset_id = _b256(asset_id)
        for output in self.outputs:
            if isinstance(output, ChangeOutput) and output.asset_id == asset_id:
                return output

        output = ChangeOutput(to=Address.from_dynamic_input(to), asset_id=asset_id)
        self.outputs.append(output)
        return output

    def add_variable_outputs(self, count: int = 1) -> None:
        for _ in range(count):
            self.outputs.append(VariableOutput())


@dataclass
class ScriptTransactionRequest(TransactionRequest):
    gas_limit: int = 0
    script: bytes = b""
    script_data: bytes = b""

    type = TransactionType.SCRIPT


@dataclass
class CreateTransactionRequest(TransactionRequest):
    bytecode_witness_index: int = 0
    salt: bytes = ZERO_B256
    storage_slots: list[StorageSlot] = field(default_factory=list)

    type = TransactionType.CREATE


def _input_from_dict(data: Mapping[str, Any]) -> TransactionInput:
    input_type = InputType(data["type"])
    pointer = data.get("tx_pointer") or {}
    if input_type == InputType.COIN:
        return CoinInput(
            id=_blob(data["id"]),
            owner=Address.from_dynamic_input(data["owner"]),
            amount=int(data["amount"]),
            asset_id=_b256(data.get("asset_id", BASE_ASSET_ID)),
            witness_index=int(data.get("witness_index", 0)),
            tx_pointer=TxPointer(**pointer),
            maturity=int(data.get("maturity", 0)),
            predicate=_blob(data.get("predicate", b"")),
            predicate_data=_blob(data.get("predicate_data", b"")),
        )
    if input_type == InputType.MESSAGE:
        return MessageInput(
            sender=Address.from_dynamic_input(data["sender"]),
            recipient=Address.from_dynamic_input(data["recipient"]),
            amount=int(data["amount"]),
            nonce=_b256(data["nonce"]),
            witness_index=int(data.get("witness_index", 0)),
            data=_blob(data.get("data", b"")),
            predicate=_blob(data.get("predicate", b"")),
            predicate_data=_blob(data.get("predicate_data", b"")),
        )
    return ContractInput(contract_id=_b256(data["contract_id"]), tx_pointer=TxPointer(**pointer))


def _output_from_dict(data: Mapping[str, Any]) -> TransactionOutput:
    output_type = OutputType(data["type"])
    if output_type == OutputType.COIN:
        return CoinOutput(
            to=Address.from_dynamic_input(data["to"]),
            amount=int(data["amount"]),
            asset_id=_b256(data.get("asset_id", BASE_ASSET_ID)),
        )
    if output_type == OutputType.CHANGE:
        return ChangeOutput(
            to=Address.from_dynamic_input(data["to"]),
            asset_id=_b256(data.get("asset_id", BASE_ASSET_ID)),
        )
    if output_type == OutputType.CONTRACT:
        return ContractOutput(input_index=int(data["input_index"]))
    return VariableOutput()


def transaction_requestify(
    obj: TransactionRequest | Mapping[str, Any],
) -> TransactionRequest:
    """
    Normalize a request-like value into a TransactionRequest.

    Requests are returned as-is (the same instance, so witness updates are
    visible to the caller); mappings are parsed into a new request.
    """
    if isinstance(obj, TransactionRequest):
        return obj

    if not isinstance(obj, Mapping):
        raise TypeError(f"Cannot convert {type(obj).__name__} to a transaction request")

    tx_type = TransactionType(obj.get("type", TransactionType.SCRIPT))
    common: dict[str, Any] = {
        "gas_price": int(obj.get("gas_price", 0)),
        "maturity": int(obj.get("maturity", 0)),
        "inputs": [_input_from_dict(i) for i in obj.get("inputs", [])],
        "outputs": [_output_from_dict(o) for o in obj.get("outputs", [])],
        "witnesses": [_blob(w) for w in obj.get("witnesses", [])],
    }

    if tx_type == TransactionType.CREATE:
        return CreateTransactionRequest(
            **common,
            bytecode_witness_index=int(obj.get("bytecode_witness_index", 0)),
            salt=_b256(obj.get("salt", ZERO_B256)),
            storage_slots=[
                StorageSlot(key=_b256(s["key"]), value=_b256(s["value"]))
                for s in obj.get("storage_slots", [])
            ],
        )

    return ScriptTransactionRequest(
        **common,
        gas_limit=int(obj.get("gas_limit", 0)),
        script=_blob(obj.get("script", b"")),
        script_data=_blob(obj.get("script_data", b"")),
    )
