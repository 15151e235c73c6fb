"""
Contains the links a validation chain consists of and the context they share during a chain run.
"""
import inspect
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, NamedTuple, Optional

from frozendict import frozendict
from typeguard import TypeCheckError, check_type

from .types import FieldValue, LinkOperation, RequestFields, UserFunction, ValidatorOutcome


class LinkKind(Enum):
    """
    The closed set of link kinds. The kind decides how the chain treats the result of a link operation.
    """

    VALIDATOR = "validator"
    """Evaluates the value and yields (passed, expected description, message)"""
    ACTION = "action"
    """Only mutates the context (e.g. negation); its return value is discarded"""
    MODIFIER = "modifier"
    """Returns a replacement value which is written back into the request"""


@dataclass
class Context:
    """
    Mutable state shared by all links of exactly one chain run. A new context is created for every run.
    """

    negated: bool = False
    error_override: Optional[str] = None
    current_request: Optional[RequestFields] = None
    locals: dict[str, Any] = field(default_factory=dict)
    """Free-form storage for links which need to communicate with each other"""


@dataclass(frozen=True)
class RuntimeInputs:
    """
    The second argument of every link operation. Actions only get the context, validators and modifiers
    get the request as well.
    """

    context: Context
    request: Optional[RequestFields] = None


class ValidatorResult(NamedTuple):
    """The normalized outcome of a validator link"""

    passed: bool
    expected: str
    message: Optional[str] = None
    """Informational only; the failure message comes from the error overrides or the fallback"""


def _wants_inputs(function: UserFunction) -> bool:
    """
    Returns True if `function` takes the runtime inputs as second positional argument, i.e. if it has at least two
    required positional parameters or accepts ``*args``.
    """
    try:
        signature = inspect.signature(function)
    except (TypeError, ValueError):
        return False
    required_positional = 0
    for parameter in signature.parameters.values():
        if parameter.kind == inspect.Parameter.VAR_POSITIONAL:
            return True
        if (
            parameter.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
            and parameter.default is inspect.Parameter.empty
        ):
            required_positional += 1
    return required_positional >= 2


def as_link_operation(function: UserFunction) -> LinkOperation:
    """
    Wraps a user function taking either ``(value)`` or ``(value, inputs)`` into a link operation which always
    takes ``(value, inputs)``. Awaitables returned by the function are passed through untouched.
    """
    if not callable(function):
        raise TypeError(f"{function!r} is not callable")
    if _wants_inputs(function):
        return function

    def operation(value: FieldValue, _inputs: RuntimeInputs) -> Any:
        return function(value)

    operation.__name__ = getattr(function, "__name__", "operation")
    return operation


class Link:
    """
    One unit of work in a validation chain: an operation together with its kind and an optional error message
    which overrides the chain level message if this link fails.
    """

    def __init__(
        self,
        operation: LinkOperation,
        kind: LinkKind,
        error_override: Optional[str] = None,
        options: Optional[Mapping[str, Any]] = None,
        name: Optional[str] = None,
    ):
        if not callable(operation):
            raise TypeError(f"{operation!r} is not callable")
        self._operation = operation
        self._kind = kind
        self.error_override = error_override
        self.options: frozendict[str, Any] = frozendict(options or {})
        self.name: str = name if name is not None else getattr(operation, "__name__", kind.value)

    @property
    def kind(self) -> LinkKind:
        """The kind can not be changed after construction"""
        return self._kind

    def __str__(self):
        return f"Link({self._kind.value}, {self.name})"

    async def run(self, value: FieldValue, inputs: RuntimeInputs) -> Any:
        """
        Runs the operation and awaits it if it suspended. Validator outcomes are checked and normalized into a
        `ValidatorResult`. Any exception raised by the operation propagates.
        """
        result = self._operation(value, inputs)
        if inspect.isawaitable(result):
            result = await result
        match self._kind:
            case LinkKind.VALIDATOR:
                try:
                    check_type(result, ValidatorOutcome)
                except TypeCheckError as error:
                    raise TypeCheckError(f"{self}: invalid validator outcome: {error}") from error
                return ValidatorResult(*result)
            case LinkKind.ACTION:
                return None
            case LinkKind.MODIFIER:
                return result
            case _:
                raise ValueError(f"Unknown link kind {self._kind}")
