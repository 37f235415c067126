"""Ordered operation sequences"""

import json

import pytest

from pool_master.core.exceptions import ConfigError, EncodingError
from pool_master.operations.sequence import DEFAULT_SEQUENCE, Step, load_sequence, run_sequence

from .test_invoker import stub_outputs


def test_default_sequence_replaces_position():
    assert [s.operation for s in DEFAULT_SEQUENCE] == ["burnPosition", "mintPosition"]
    assert DEFAULT_SEQUENCE[0].args == (2107, 0, 0)
    assert DEFAULT_SEQUENCE[1].args == (31920, 39060, 5000000000000000000000, 5000000000000000000000)


def test_step_from_keyword_args(descriptor):
    step = Step.from_dict(
        {"operation": "decreaseLiquidity",
         "args": {"amount1Min": 0, "_tokenId": 2107, "liquidity": 100000, "amount0Min": 0}},
        descriptor,
    )
    assert step.args == (2107, 100000, 0, 0)


def test_step_from_positional_args(descriptor):
    step = Step.from_dict({"operation": "burnPosition", "args": [2108, 0, 0]}, descriptor)
    assert step == Step("burnPosition", (2108, 0, 0))


def test_step_without_args(descriptor):
    assert Step.from_dict({"operation": "collectPoolAllFees"}, descriptor).args == ()


@pytest.mark.parametrize("data,error", [
    ({"operation": "rebalance"}, EncodingError),
    ({"args": [1]}, ConfigError),
    ({"operation": "burnPosition", "args": {"tokenId": 1}}, EncodingError),
    ({"operation": "burnPosition", "args": {"tokenId": 1, "amount0Min": 0, "amount1Min": 0, "x": 1}}, EncodingError),
    ({"operation": "burnPosition", "args": [1, 0]}, EncodingError),
])
def test_invalid_steps_rejected_at_load(descriptor, data, error):
    with pytest.raises(error):
        Step.from_dict(data, descriptor)


def test_load_sequence_file(tmp_path, descriptor):
    path = tmp_path / "steps.json"
    path.write_text(json.dumps([
        {"operation": "getDynamicInfo", "args": {"tokenId": 2107}},
        {"operation": "swapExactInputSingle", "args": [10 ** 17, 0, False], "note": "back"},
    ]))
    steps = load_sequence(path, descriptor)
    assert [s.operation for s in steps] == ["getDynamicInfo", "swapExactInputSingle"]
    assert steps[1].note == "back"
    assert steps[1].args == (10 ** 17, 0, False)


def test_shipped_sequences_load(descriptor):
    from pathlib import Path

    config_dir = Path(__file__).parent.parent / "config"
    maintenance = load_sequence(config_dir / "maintenance.json", descriptor)
    assert len(maintenance) == 10
    assert maintenance[5].operation == "collectPoolAllFees"
    replace = load_sequence(config_dir / "replace_position.json", descriptor)
    assert [s.args for s in replace] == [s.args for s in DEFAULT_SEQUENCE]


def test_load_missing_file(tmp_path):
    with pytest.raises(ConfigError, match="not found"):
        load_sequence(tmp_path / "nope.json")


def test_load_invalid_json(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("[{")
    with pytest.raises(ConfigError, match="Invalid"):
        load_sequence(path)


def test_burn_confirmed_before_mint_sent(invoker, fake_w3, descriptor):
    stub_outputs(fake_w3, descriptor)
    results = run_sequence(invoker, list(DEFAULT_SEQUENCE))

    assert all(result.ok for _, result in results)
    kinds = [event[0] for event in fake_w3.eth.events]
    assert kinds == ["call", "send", "wait", "call", "send", "wait"]
    assert results[1][1].value.values[0] == 2107


def test_failed_step_does_not_stop_sequence(invoker, fake_w3, descriptor):
    stub_outputs(fake_w3, descriptor)
    fake_w3.eth.receipt_status = 0
    results = run_sequence(invoker, list(DEFAULT_SEQUENCE))
    assert len(results) == 2
    assert not any(result.ok for _, result in results)


def test_stop_on_error(invoker, fake_w3, descriptor):
    stub_outputs(fake_w3, descriptor)
    fake_w3.eth.send_error = ValueError("insufficient funds")
    results = run_sequence(invoker, list(DEFAULT_SEQUENCE), stop_on_error=True)
    assert len(results) == 1
    assert len(fake_w3.eth.sent) == 0


@pytest.mark.parametrize("data", [
    {"operation": "collectPoolAllFees", "value": 1},
    {"operation": "burnPosition", "args": [2107, 0, 0], "value": 5},
    {"operation": "swapExactInputSingle", "args": [1, 0, True], "value": -1},
])
def test_bad_value_rejected_at_load(descriptor, data):
    with pytest.raises(EncodingError):
        Step.from_dict(data, descriptor)


def test_payable_value_kept(descriptor):
    step = Step.from_dict({"operation": "swapExactInputSingle", "args": [1, 0, True], "value": 9}, descriptor)
    assert step.value == 9


@pytest.mark.parametrize("raw", [5, "2107", None])
def test_args_must_be_list_or_object(descriptor, raw):
    with pytest.raises(ConfigError, match="must be a list or an object"):
        Step.from_dict({"operation": "getDynamicInfo", "args": raw}, descriptor)
