import dataclasses
import math
from typing import Any


def sanitize_for_json(obj: Any) -> Any:
    """
    Recursively convert an engine result into plain JSON-safe values.

    - Dataclass instances become dicts.
    - Tuples become lists.
    - NaN and +/-inf become None (an all-cash deal has an unbounded DSCR).

    Args:
        obj: The object to sanitize (dataclass, dict, list, float, etc.)

    Returns:
        The sanitized object.
    """
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        obj = dataclasses.asdict(obj)

    if isinstance(obj, float):
        return obj if math.isfinite(obj) else None
    if isinstance(obj, dict):
        return {k: sanitize_for_json(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [sanitize_for_json(item) for item in obj]
    return obj
