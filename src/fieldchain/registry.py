"""
Contains the registry of custom checks. Registered checks become fluent methods of every `ChainBuilder` bound to
the registry.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from .errors import RegistrationError
from .types import Predicate
from .utils.casing import is_camel_or_pascal_case, to_description, to_snake_case

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RegisteredCheck:
    """A custom check as stored in the registry"""

    name: str
    """The name given at registration, e.g. ``isEven``"""
    method_name: str
    """The name of the builder method, e.g. ``is_even``"""
    description: str
    """The default expected description, e.g. ``is even``"""
    predicate: Predicate


class ValidatorRegistry:
    """
    Maps names onto custom checks. It should be populated at configuration time, before any chain is built.
    """

    def __init__(self, reserved_names: frozenset[str] = frozenset()):
        self._checks: dict[str, RegisteredCheck] = {}
        self._reserved_names = reserved_names

    def register(self, name: str, predicate: Predicate, description: Optional[str] = None) -> RegisteredCheck:
        """
        Registers `predicate` under `name`. The name must be camel or Pascal case; it is turned into the snake case
        builder method name and into the default description (``isEven`` -> ``is_even`` / ``is even``).
        """
        if not isinstance(name, str) or not is_camel_or_pascal_case(name):
            raise RegistrationError(f"{name!r} is not a valid validator name: it must be camel or Pascal case")
        if not callable(predicate):
            raise RegistrationError(f"{name}: {predicate!r} is not callable")
        method_name = to_snake_case(name)
        if method_name in self._reserved_names or name in self._reserved_names:
            raise RegistrationError(f"{name}: '{method_name}' would shadow a built-in builder method")
        if method_name in self._checks:
            raise RegistrationError(f"{name}: a check named '{method_name}' is already registered")
        check = RegisteredCheck(
            name=name,
            method_name=method_name,
            description=description if description is not None else to_description(name),
            predicate=predicate,
        )
        self._checks[method_name] = check
        logger.debug("Registered check %s as '%s'", name, method_name)
        return check

    def lookup(self, name: str) -> Optional[RegisteredCheck]:
        """Finds a check by its method name (``is_even``) or by its registered name (``isEven``)"""
        check = self._checks.get(name)
        if check is not None:
            return check
        if is_camel_or_pascal_case(name):
            check = self._checks.get(to_snake_case(name))
            if check is not None and check.name == name:
                return check
        return None

    def __contains__(self, name: str) -> bool:
        return self.lookup(name) is not None

    def __len__(self):
        return len(self._checks)
