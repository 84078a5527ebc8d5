# src/seiscat/util/serialization.py

from dataclasses import fields, is_dataclass
from datetime import date
from enum import Enum
from typing import Any


# ---------------------------------------------------------------------------
# Generic Serializer
# ---------------------------------------------------------------------------

def serialize(obj: Any):
    """
    Recursively convert dataclasses, Enums, dates, tuples/lists, sets and
    dicts into JSON-serializable structures.
    """
    # dataclass → dict
    if is_dataclass(obj) and not isinstance(obj, type):
        return {f.name: serialize(getattr(obj, f.name)) for f in fields(obj)}

    # Enum → value
    if isinstance(obj, Enum):
        return obj.value

    # date → ISO string
    if isinstance(obj, date):
        return obj.isoformat()

    # tuple / list → list
    if isinstance(obj, (list, tuple)):
        return [serialize(i) for i in obj]

    # set → sorted list (stable output)
    if isinstance(obj, (set, frozenset)):
        return sorted(serialize(i) for i in obj)

    # dict → dict (Enum keys become their values)
    if isinstance(obj, dict):
        return {serialize(k): serialize(v) for k, v in obj.items()}

    # primitive → unchanged
    return obj
