"""Contract interface descriptor: lookup, validation, encoding and decoding"""

import pytest
from eth_abi import encode
from web3 import Web3

from pool_master.core.exceptions import DecodeError, EncodingError


VALID_ARGS = {
    "swapExactInputSingle": (10 ** 17, 0, True),
    "collectPoolAllFees": (),
    "mintPosition": (31920, 39060, 5 * 10 ** 21, 5 * 10 ** 21),
    "burnPosition": (2107, 0, 0),
    "increaseLiquidity": (2107, 500000, 500000),
    "decreaseLiquidity": (2107, 100000, 0, 0),
    "getDynamicInfo": (2107,),
}


def test_seven_functions(descriptor):
    assert sorted(descriptor.names) == sorted(VALID_ARGS)
    assert descriptor.address == Web3.to_checksum_address("0x1efc8d699d20c030b393ffbf406cf2c317383ddf")


def test_signatures_and_mutability(descriptor):
    assert descriptor["mintPosition"].signature == "mintPosition(int24,int24,uint256,uint256)"
    assert descriptor["increaseLiquidity"].input_types == ("uint256", "uint128", "uint128")
    assert descriptor["swapExactInputSingle"].is_payable
    assert descriptor["getDynamicInfo"].is_read_only
    assert not descriptor["collectPoolAllFees"].is_read_only
    assert descriptor["collectPoolAllFees"].outputs == ()


def test_selector_is_keccak_prefix(descriptor):
    fn = descriptor["getDynamicInfo"]
    assert fn.selector == bytes(Web3.keccak(text="getDynamicInfo(uint256)")[:4])
    assert len(fn.selector) == 4


@pytest.mark.parametrize("name", sorted(VALID_ARGS))
def test_matching_arguments_encode(descriptor, name):
    fn = descriptor[name]
    data = fn.encode_call(VALID_ARGS[name])
    assert data[:4] == fn.selector
    assert len(data) == 4 + 32 * len(fn.inputs)


@pytest.mark.parametrize("name,args", [
    ("mintPosition", (31920, 39060, 1)),
    ("collectPoolAllFees", (1,)),
    ("getDynamicInfo", ()),
    ("decreaseLiquidity", (2107, 1, 0, 0, 0)),
])
def test_wrong_arity_rejected(descriptor, name, args):
    with pytest.raises(EncodingError, match="expects"):
        descriptor[name].encode_call(args)


@pytest.mark.parametrize("name,args", [
    ("swapExactInputSingle", (10 ** 17, 0, 1)),          # int is not bool
    ("swapExactInputSingle", (True, 0, True)),           # bool is not uint
    ("burnPosition", (-1, 0, 0)),                        # negative uint
    ("mintPosition", (2 ** 23, 0, 1, 1)),                # int24 overflow
    ("increaseLiquidity", (1, 2 ** 128, 0)),             # uint128 overflow
    ("getDynamicInfo", ("2107",)),                       # string is not uint
])
def test_wrong_type_rejected(descriptor, name, args):
    with pytest.raises(EncodingError, match="is not a valid"):
        descriptor[name].validate(args)


def test_negative_ticks_allowed(descriptor):
    descriptor["mintPosition"].validate((-887220, 887220, 1, 1))


def test_unknown_function(descriptor):
    with pytest.raises(EncodingError, match="Unknown function"):
        descriptor["flashLoan"]
    assert "flashLoan" not in descriptor


def test_decode_dynamic_info(descriptor):
    fn = descriptor["getDynamicInfo"]
    data = encode(["uint256", "int24", "uint256", "uint256"], [79228162514264337593543950336, -120, 7, 9])
    values = fn.decode_output(data)
    assert values == (79228162514264337593543950336, -120, 7, 9)
    assert list(fn.named_output(values)) == ["price", "currentTick", "amount0", "amount1"]


def test_decode_short_response(descriptor):
    with pytest.raises(DecodeError, match="getDynamicInfo"):
        descriptor["getDynamicInfo"].decode_output(encode(["uint256"], [1]))


def test_decode_empty_response(descriptor):
    with pytest.raises(DecodeError):
        descriptor["mintPosition"].decode_output(b"")


def test_no_outputs_decode_to_empty_tuple(descriptor):
    assert descriptor["burnPosition"].decode_output(b"") == ()


def test_input_labels_strip_underscore(descriptor):
    assert [p.label for p in descriptor["decreaseLiquidity"].inputs] == [
        "tokenId", "liquidity", "amount0Min", "amount1Min"
    ]


@pytest.mark.parametrize("name,value", [
    ("swapExactInputSingle", 0),
    ("swapExactInputSingle", 10 ** 18),
    ("burnPosition", 0),
])
def test_value_accepted(descriptor, name, value):
    descriptor[name].validate_value(value)


@pytest.mark.parametrize("name,value,match", [
    ("burnPosition", 1, "not payable"),
    ("getDynamicInfo", 1, "not payable"),
    ("swapExactInputSingle", -1, "non-negative"),
    ("swapExactInputSingle", "1", "non-negative"),
    ("swapExactInputSingle", False, "non-negative"),
])
def test_value_rejected(descriptor, name, value, match):
    with pytest.raises(EncodingError, match=match):
        descriptor[name].validate_value(value)
