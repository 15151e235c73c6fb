"""
Contains functions to read and write the value of a single field inside a request location container.
"""
from typing import Any, MutableMapping

from typeguard import TypeCheckError, check_type

from fieldchain.types import FieldContainer, FieldValue, RequestFields


def location_container(request: RequestFields, location: str) -> FieldContainer:
    """
    Returns the field container of `location` (e.g. ``request["query"]``).
    If the request has no such location, a KeyError will be raised.
    If the container is not a mutable mapping, a TypeCheckError will be raised.
    """
    try:
        container = request[location]
    except KeyError as error:
        raise KeyError(f"{location}: Not found in request") from error
    try:
        check_type(container, MutableMapping[str, Any])
    except TypeCheckError as error:
        raise TypeCheckError(f"{location}: {error}") from error
    return container


def read_field(request: RequestFields, location: str, field: str) -> FieldValue:
    """
    Reads the current value of `field` in `location`. A missing field is returned as ``None``.
    """
    return location_container(request, location).get(field)


def write_field(request: RequestFields, location: str, field: str, value: FieldValue) -> None:
    """
    Writes `value` back into `location`. Writing ``None`` removes the field, so that it reads as missing afterwards.
    """
    container = location_container(request, location)
    if value is None:
        container.pop(field, None)
    else:
        container[field] = value
