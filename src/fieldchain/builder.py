"""
Contains the fluent API to build validation chains.
"""
import inspect
import logging
from typing import Any, Callable, Optional

from .chain import ChainOptions, RequestLocation, ValidationChain
from .link import Link, LinkKind, RuntimeInputs, as_link_operation
from .predicates import DEFAULT_PREDICATES, PredicateLibrary
from .registry import RegisteredCheck, ValidatorRegistry
from .types import FieldValue, LinkOperation, Predicate, UserFunction

logger = logging.getLogger(__name__)


def _validator_operation(predicate: LinkOperation, expected: str) -> LinkOperation:
    """
    Wraps a predicate returning a bool (or an awaitable of a bool) into a validator operation returning
    ``(passed, expected)``.
    """

    async def operation(value: FieldValue, inputs: RuntimeInputs) -> tuple[bool, str]:
        passed = predicate(value, inputs)
        if inspect.isawaitable(passed):
            passed = await passed
        return bool(passed), expected

    operation.__name__ = getattr(predicate, "__name__", expected)
    return operation


class ChainBuilder:
    """
    Builds a `ValidationChain` for one field of one request location. Every fluent method appends exactly one
    link and returns the builder itself:
    ```
    chain = ChainBuilder("query", "id", bail=True).exists().error("id is required").is_int(min=1).build()
    ```
    Custom checks registered via `ChainBuilder.register_is` are available as methods as well.
    """

    def __init__(
        self,
        request_location: RequestLocation | str,
        request_field: str,
        bail: bool = False,
        predicates: PredicateLibrary = DEFAULT_PREDICATES,
        registry: Optional[ValidatorRegistry] = None,
    ):
        self._request_location = RequestLocation(request_location)
        self._request_field = request_field
        self._options = ChainOptions(bail=bail)
        self._predicates = predicates
        self._registry = registry if registry is not None else DEFAULT_REGISTRY
        self._links: list[Link] = []
        self._error_override: Optional[str] = None

    def __getattr__(self, name: str) -> Callable[..., "ChainBuilder"]:
        if name.startswith("_"):
            raise AttributeError(name)
        check = self._registry.lookup(name)
        if check is None:
            raise AttributeError(f"{type(self).__name__} has no attribute or registered check '{name}'")

        def add_registered_check(*args: Any, **kwargs: Any) -> "ChainBuilder":
            return self._add_registered(check, args, kwargs)

        return add_registered_check

    def _add(self, operation: LinkOperation, kind: LinkKind, **link_kwargs: Any) -> "ChainBuilder":
        self._links.append(Link(operation, kind, **link_kwargs))
        return self

    def _validate(self, predicate: Callable[[FieldValue], Any], expected: str, **link_kwargs: Any) -> "ChainBuilder":
        link_kwargs.setdefault("name", expected)
        operation = _validator_operation(as_link_operation(predicate), expected)
        return self._add(operation, LinkKind.VALIDATOR, **link_kwargs)

    def _add_registered(self, check: RegisteredCheck, args: tuple, kwargs: dict[str, Any]) -> "ChainBuilder":
        def predicate(value: FieldValue) -> Any:
            return check.predicate(value, *args, **kwargs)

        return self._validate(predicate, check.description, name=check.name, options=kwargs)

    def not_(self) -> "ChainBuilder":
        """Negates the next validator (its result and its expected description)"""

        def negate(_value: FieldValue, inputs: RuntimeInputs) -> None:
            inputs.context.negated = True

        return self._add(negate, LinkKind.ACTION, name="not")

    def exists(self) -> "ChainBuilder":
        """The field has to be present in its location and hold a string"""
        return self._validate(lambda value: isinstance(value, str), "existant", name="exists")

    is_existant = exists

    def is_int(
        self,
        min: Optional[int] = None,  # pylint: disable=redefined-builtin
        max: Optional[int] = None,  # pylint: disable=redefined-builtin
        allow_leading_zeroes: bool = True,
    ) -> "ChainBuilder":
        defaults = {"min": None, "max": None, "allow_leading_zeroes": True}
        given = {"min": min, "max": max, "allow_leading_zeroes": allow_leading_zeroes}
        options = {key: value for key, value in given.items() if value != defaults[key]}
        return self._validate(
            lambda value: self._predicates.is_integer(value, **options), "integer", name="is_int", options=options
        )

    def is_float(self) -> "ChainBuilder":
        return self._validate(self._predicates.is_float, "float", name="is_float")

    def is_boolean(self) -> "ChainBuilder":
        return self._validate(self._predicates.is_boolean, "boolean", name="is_boolean")

    def is_containing(self, needle: str) -> "ChainBuilder":
        return self._validate(
            lambda value: self._predicates.contains(value, needle),
            f"containing {needle!r}",
            name="is_containing",
            options={"needle": needle},
        )

    def is_(self, name: str, predicate: Predicate) -> "ChainBuilder":
        """
        Attaches an ad hoc check without registering it. `name` is used verbatim as expected description.
        `predicate` takes ``(value)`` or ``(value, inputs)`` and may be async.
        """
        return self._validate(predicate, name, name=name)

    def error(self, message: str) -> "ChainBuilder":
        """
        Sets the error message of the most recently added link. If no link was added yet, the message becomes the
        chain level message used for every failing link without its own message.
        """
        if self._links:
            self._links[-1].error_override = message
        else:
            self._error_override = message
        return self

    def modify(self, function: UserFunction) -> "ChainBuilder":
        """
        Adds a modifier. The value returned by `function` replaces the field value in the request; returning
        ``None`` removes the field.
        """
        return self._add(as_link_operation(function), LinkKind.MODIFIER, name=getattr(function, "__name__", None))

    def do(self, function: UserFunction) -> "ChainBuilder":
        """Adds an action. `function` may change the context (``inputs.context``); its return value is ignored."""
        return self._add(as_link_operation(function), LinkKind.ACTION, name=getattr(function, "__name__", None))

    def build(self) -> ValidationChain:
        """
        Returns the chain built so far. The chain is independent of further calls on this builder, except for
        error messages set on links it already contains.
        """
        chain = ValidationChain(
            self._request_location,
            self._request_field,
            links=self._links,
            options=self._options,
            error_override=self._error_override,
        )
        logger.debug("Built %s", chain)
        return chain

    @classmethod
    def register_is(
        cls,
        name: str,
        predicate: Predicate,
        registry: Optional[ValidatorRegistry] = None,
        description: Optional[str] = None,
    ) -> RegisteredCheck:
        """
        Registers a reusable check. `name` must be camel or Pascal case; it becomes a snake case builder method
        (``isEven`` -> ``builder.is_even()``) with the default expected description ``is even``.
        The predicate is called as ``predicate(value, *args, **kwargs)`` with the arguments of the method call.
        """
        return (registry if registry is not None else DEFAULT_REGISTRY).register(name, predicate, description)


BUILDER_METHOD_NAMES = frozenset(name for name in dir(ChainBuilder) if not name.startswith("_"))


def create_registry() -> ValidatorRegistry:
    """Creates an empty registry which refuses names shadowing the builder methods"""
    return ValidatorRegistry(reserved_names=BUILDER_METHOD_NAMES)


DEFAULT_REGISTRY = create_registry()
