"""
Contains the failure record which gets appended to a request for every failing validator and the errors raised on
programmer mistakes.
"""
from dataclasses import asdict, dataclass
from typing import Any

from .types import FieldValue

FALLBACK_MESSAGE = "invalid value"
UNDEFINED = "undefined"


class RegistrationError(ValueError):
    """
    Raised if a custom validator could not be registered, e.g. because its name is not in camel or Pascal case.
    """


@dataclass(frozen=True)
class FailureRecord:
    """
    Describes a single failed validator. Exactly one record is created per failing validator link; actions and
    modifiers never produce one.
    """

    message: str
    location: str
    field: str
    expected: str
    got: Any
    """The value the validator saw or the literal string ``"undefined"`` if the field was missing"""

    @classmethod
    def from_outcome(cls, message: str, location: str, field: str, expected: str, value: FieldValue) -> "FailureRecord":
        """
        Creates a failure record and renders a missing value as ``"undefined"``.
        """
        return cls(
            message=message,
            location=location,
            field=field,
            expected=expected,
            got=UNDEFINED if value is None else value,
        )

    def as_dict(self) -> dict[str, Any]:
        """Plain mapping representation, e.g. to be serialized into a response body"""
        return asdict(self)

    def __str__(self):
        return f"{self.location}.{self.field}: {self.message} (expected {self.expected}, got {self.got!r})"
