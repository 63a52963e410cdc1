"""
JSON encoding for result records.

Records expose ``to_dict()`` / ``from_dict()`` returning JSON-ready values;
datetimes are written as ISO 8601 strings with microseconds and a UTC
offset, floats with full repr precision.
"""

import json
from datetime import datetime
from typing import Any, List, Optional, Type, TypeVar, Union

from .timeutils import ensure_utc

R = TypeVar("R")


def format_time(dt: datetime) -> str:
    return ensure_utc(dt).isoformat(timespec="microseconds")


def parse_time(value: str) -> datetime:
    return ensure_utc(datetime.fromisoformat(value))


def dumps(record: Any, indent: Optional[int] = None) -> str:
    """
    Serialize a record, or a list of records, to JSON.

    Args:
        record: Object with a to_dict() method, or a list of them
        indent: Passed through to json.dumps

    Returns:
        JSON text
    """
    if isinstance(record, (list, tuple)):
        payload = [item.to_dict() for item in record]
    else:
        payload = record.to_dict()
    return json.dumps(payload, indent=indent)


def loads(text: str, record_type: Type[R]) -> Union[R, List[R]]:
    """
    Inverse of dumps().

    Args:
        text: JSON produced by dumps()
        record_type: Class providing from_dict()

    Returns:
        A record, or a list of records if the JSON holds an array
    """
    payload = json.loads(text)
    if isinstance(payload, list):
        return [record_type.from_dict(item) for item in payload]
    return record_type.from_dict(payload)
