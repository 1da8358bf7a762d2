from __future__ import annotations

import json
from typing import Any, TypedDict, Unpack

from pydantic_core import to_jsonable_python


class _JsonDumpsKwargs(TypedDict, total=False):
    ensure_ascii: bool
    indent: None | int | str
    sort_keys: bool


def json_serializer(obj: Any, **kwargs: Unpack[_JsonDumpsKwargs]) -> str:
    """Serialize to JSON, letting pydantic handle dataclasses, datetimes
    and other values the json module rejects.
    """
    return json.dumps(obj, default=to_jsonable_python, **kwargs)
