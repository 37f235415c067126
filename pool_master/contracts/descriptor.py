"""Static description of the pool master contract's callable functions"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterator, Sequence, Tuple

from eth_abi import decode, encode, is_encodable
from web3 import Web3

from ..core.exceptions import DecodeError, EncodingError

READ_ONLY = ("view", "pure")


@dataclass(frozen=True)
class Param:
    """A named, typed function input or output"""

    name: str
    type: str

    @property
    def label(self) -> str:
        """Name without the Solidity-style leading underscore"""
        return self.name.lstrip("_")


@dataclass(frozen=True)
class ContractFunction:
    """
    One callable contract function.

    Attributes:
        name: Function name as declared in the ABI
        inputs: Ordered input parameters
        outputs: Ordered output parameters
        mutability: view, pure, nonpayable or payable
    """

    name: str
    inputs: Tuple[Param, ...]
    outputs: Tuple[Param, ...]
    mutability: str

    @classmethod
    def from_abi(cls, entry: Dict[str, Any]) -> "ContractFunction":
        return cls(
            name=entry["name"],
            inputs=tuple(Param(p.get("name", ""), p["type"]) for p in entry.get("inputs", [])),
            outputs=tuple(Param(p.get("name", ""), p["type"]) for p in entry.get("outputs", [])),
            mutability=entry.get("stateMutability", "nonpayable"),
        )

    @property
    def input_types(self) -> Tuple[str, ...]:
        return tuple(p.type for p in self.inputs)

    @property
    def output_types(self) -> Tuple[str, ...]:
        return tuple(p.type for p in self.outputs)

    @property
    def signature(self) -> str:
        return f"{self.name}({','.join(self.input_types)})"

    @property
    def selector(self) -> bytes:
        return bytes(Web3.keccak(text=self.signature)[:4])

    @property
    def is_read_only(self) -> bool:
        return self.mutability in READ_ONLY

    @property
    def is_payable(self) -> bool:
        return self.mutability == "payable"

    def validate(self, args: Sequence[Any]) -> None:
        """
        Check argument count and types against the declared inputs.

        Raises:
            EncodingError: On arity mismatch or a value not encodable as its type
        """
        if len(args) != len(self.inputs):
            raise EncodingError(
                f"{self.name} expects {len(self.inputs)} argument(s) "
                f"({', '.join(f'{p.label}: {p.type}' for p in self.inputs) or 'none'}), "
                f"got {len(args)}"
            )
        for param, value in zip(self.inputs, args):
            if not is_encodable(param.type, value):
                raise EncodingError(
                    f"{self.name}: {param.label}={value!r} is not a valid {param.type}"
                )

    def validate_value(self, value: Any) -> None:
        """
        Check the wei attached to a call.

        Raises:
            EncodingError: If value is not a non-negative int, or is
                non-zero for a function that is not payable
        """
        if not isinstance(value, int) or isinstance(value, bool) or value < 0:
            raise EncodingError(f"{self.name}: value={value!r} is not a non-negative integer")
        if value and not self.is_payable:
            raise EncodingError(f"{self.name} is not payable, cannot send value")

    def encode_call(self, args: Sequence[Any]) -> bytes:
        """Validate and ABI-encode a call: selector followed by the arguments"""
        self.validate(args)
        return self.selector + encode(list(self.input_types), list(args))

    def decode_output(self, data: bytes) -> tuple:
        """
        Decode return data into a tuple matching the declared outputs.

        Raises:
            DecodeError: If the data does not match the output types
        """
        if not self.outputs:
            return ()
        try:
            return tuple(decode(list(self.output_types), bytes(data)))
        except Exception as e:
            raise DecodeError(
                f"{self.name}: response does not decode as "
                f"({', '.join(self.output_types)}): {e}"
            )

    def named_output(self, values: Sequence[Any]) -> Dict[str, Any]:
        """Map decoded values to output names, in declared order"""
        return {p.label: v for p, v in zip(self.outputs, values)}

    def describe(self) -> str:
        ins = ", ".join(f"{p.label}: {p.type}" for p in self.inputs)
        outs = ", ".join(f"{p.label}: {p.type}" for p in self.outputs)
        return f"{self.name}({ins}) -> ({outs}) [{self.mutability}]"


class ContractDescriptor:
    """Address plus name -> ContractFunction table for one contract"""

    def __init__(self, address: str, functions: Sequence[ContractFunction]):
        self.address = Web3.to_checksum_address(address)
        self._functions = {f.name: f for f in functions}

    @classmethod
    def from_abi(cls, address: str, abi: Sequence[Dict[str, Any]]) -> "ContractDescriptor":
        functions = [ContractFunction.from_abi(e) for e in abi if e.get("type") == "function"]
        return cls(address, functions)

    def function(self, name: str) -> ContractFunction:
        try:
            return self._functions[name]
        except KeyError:
            raise EncodingError(
                f"Unknown function: {name}. Available: {sorted(self._functions)}"
            )

    def __getitem__(self, name: str) -> ContractFunction:
        return self.function(name)

    def __contains__(self, name: object) -> bool:
        return name in self._functions

    def __iter__(self) -> Iterator[ContractFunction]:
        return iter(self._functions.values())

    def __len__(self) -> int:
        return len(self._functions)

    @property
    def names(self):
        return list(self._functions)
