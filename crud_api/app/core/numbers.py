"""
Lenient number handling for raw request values.

Request fields arrive as JSON numbers, strings or form values.  Two
helpers cover how the API treats them:

* ``is_numeric`` decides whether a raw value reads as a number at all
  (``"12"``, ``" 3.5 "``, ``"1e3"``, ``7``), used by the request gates;
* ``parse_int`` reads the leading integer of a value (``"30abc"`` and
  ``30.9`` both give ``30``), used when building entities.  ``None``
  stands for "not a number".
"""

import math
import re
from typing import Any, Optional


_NUMBER_RE = re.compile(r"^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?\s*$")
_INT_PREFIX_RE = re.compile(r"^\s*([+-]?\d+)")


def is_numeric(value: Any) -> bool:
    if isinstance(value, bool) or value is None:
        return False
    if isinstance(value, (int, float)):
        return not math.isnan(value)
    if isinstance(value, str):
        return bool(_NUMBER_RE.match(value))
    return False


def parse_int(value: Any) -> Optional[int]:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return None
        return int(value)
    if isinstance(value, str):
        match = _INT_PREFIX_RE.match(value)
        return int(match.group(1)) if match else None
    return None
