"""Ordered lists of operation invocations"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Tuple

from ..core.config import Config
from ..core.exceptions import ConfigError, EncodingError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Step:
    """One operation call with its positional arguments"""

    operation: str
    args: Tuple[Any, ...] = ()
    value: int = 0
    note: Optional[str] = None

    @classmethod
    def from_dict(cls, data, descriptor=None):
        """
        Build a step from {"operation": name, "args": [...] or {...}}.

        Keyword args are put in the function's declared input order; the
        leading underscore of ABI parameter names is optional.
        """
        descriptor = descriptor or Config().descriptor()
        try:
            name = data["operation"]
        except (KeyError, TypeError):
            raise ConfigError(f"Sequence step needs an 'operation': {data!r}")
        function = descriptor[name]

        raw = data.get("args", [])
        if isinstance(raw, dict):
            given = {k.lstrip("_"): v for k, v in raw.items()}
            unknown = set(given) - {p.label for p in function.inputs}
            if unknown:
                raise EncodingError(f"{name}: unknown argument(s) {sorted(unknown)}")
            missing = [p.label for p in function.inputs if p.label not in given]
            if missing:
                raise EncodingError(f"{name}: missing argument(s) {missing}")
            args = tuple(given[p.label] for p in function.inputs)
        elif isinstance(raw, (list, tuple)):
            args = tuple(raw)
        else:
            raise ConfigError(f"{name}: 'args' must be a list or an object, got {raw!r}")

        value = data.get("value", 0)
        function.validate(args)
        function.validate_value(value)
        return cls(operation=name, args=args, value=value, note=data.get("note"))

    def describe(self):
        text = f"{self.operation}({', '.join(str(a) for a in self.args)})"
        return f"{text}  # {self.note}" if self.note else text


# Replace position 2107 with a fresh one over ticks 31920..39060
DEFAULT_SEQUENCE = (
    Step("burnPosition", (2107, 0, 0), note="close the current position"),
    Step(
        "mintPosition",
        (31920, 39060, 5000000000000000000000, 5000000000000000000000),
        note="open the replacement position",
    ),
)


def load_sequence(path, descriptor=None):
    """Load a JSON list of steps"""
    path = Path(path)
    if not path.exists():
        raise ConfigError(f"Sequence file not found: {path}")
    with open(path) as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid sequence file {path}: {e}")

    if isinstance(data, dict):
        data = data.get("steps", [])
    if not isinstance(data, list):
        raise ConfigError(f"Sequence file {path} must hold a list of steps")

    descriptor = descriptor or Config().descriptor()
    return [Step.from_dict(item, descriptor) for item in data]


def run_sequence(invoker, steps, stop_on_error=False):
    """
    Run steps strictly in order.

    Each write is confirmed (or has failed) before the next step starts, so a
    mint following a burn only goes out once the burn is mined.

    Returns:
        List of (step, result) for the steps that ran
    """
    results = []
    total = len(steps)
    for index, step in enumerate(steps, 1):
        logger.info("Step %d/%d: %s", index, total, step.describe())
        result = invoker.invoke(step.operation, *step.args, value=step.value)
        results.append((step, result))

        if not result.ok and stop_on_error:
            logger.warning("Stopping after failed step %d/%d; %d step(s) skipped",
                           index, total, total - index)
            break
    return results
