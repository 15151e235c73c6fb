"""
Contains the types used in the validation chains
"""
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Mapping, MutableMapping, Optional, TypeAlias

if TYPE_CHECKING:
    from .link import RuntimeInputs

FieldValue: TypeAlias = Any
"""The current value of a request field. ``None`` means the field is missing ("undefined")."""

FieldContainer: TypeAlias = MutableMapping[str, Any]
RequestFields: TypeAlias = Mapping[str, FieldContainer]
"""A request as seen by the chains: location name (query, header, cookie) mapped onto its field container."""

ValidatorOutcome: TypeAlias = tuple[bool, str] | tuple[bool, str, Optional[str]]
"""(passed, expected description, optional message)"""

SyncLinkOperation: TypeAlias = Callable[[FieldValue, "RuntimeInputs"], Any]
AsyncLinkOperation: TypeAlias = Callable[[FieldValue, "RuntimeInputs"], Awaitable[Any]]
LinkOperation: TypeAlias = SyncLinkOperation | AsyncLinkOperation

Predicate: TypeAlias = Callable[..., bool | Awaitable[bool]]
"""A user supplied check. Takes the value (and optionally the runtime inputs) and returns whether it passed."""

UserFunction: TypeAlias = Callable[..., Any]
"""A user supplied function for ``modify`` / ``do``. Takes the value and optionally the runtime inputs."""

NextStep: TypeAlias = Callable[[], Any]
