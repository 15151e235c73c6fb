"""
Contains functionality to analyze the failures a request collected
"""
import itertools
from typing import Optional, Sequence

from .errors import FailureRecord


def _extract_field_key(failure: FailureRecord) -> tuple[str, str]:
    return failure.location, failure.field


class ValidationResults:
    """
    Wraps the failure list of a request and provides properties for further analysis of it. Note that the values
    are calculated only if you use them.
    """

    def __init__(self, failures: Sequence[FailureRecord]):
        self._failures = list(failures)
        self._field_failures: Optional[dict[tuple[str, str], list[FailureRecord]]] = None
        self._messages_per_field: Optional[dict[str, list[str]]] = None

    def __bool__(self):
        return self.is_valid

    def __len__(self):
        return len(self._failures)

    @property
    def failures(self) -> list[FailureRecord]:
        """All failures in the order they got appended"""
        return self._failures

    @property
    def is_valid(self) -> bool:
        return len(self._failures) == 0

    @property
    def num_failures(self) -> int:
        return len(self._failures)

    @property
    def field_failures(self) -> dict[tuple[str, str], list[FailureRecord]]:
        """
        Maps (location, field) onto the failures of that field. Within a field the failures keep their order.
        """
        if self._field_failures is None:
            self._field_failures = {
                key: list(values_iter)
                for key, values_iter in itertools.groupby(
                    sorted(self._failures, key=_extract_field_key), key=_extract_field_key
                )
            }
        return self._field_failures

    @property
    def failed_fields(self) -> list[tuple[str, str]]:
        return list(self.field_failures.keys())

    @property
    def messages_per_field(self) -> dict[str, list[str]]:
        """
        Maps ``"<location>.<field>"`` onto the error messages of that field, e.g. to be rendered into a response.
        """
        if self._messages_per_field is None:
            self._messages_per_field = {
                f"{location}.{field}": [failure.message for failure in failures]
                for (location, field), failures in self.field_failures.items()
            }
        return self._messages_per_field

    def as_dicts(self) -> list[dict]:
        return [failure.as_dict() for failure in self._failures]
