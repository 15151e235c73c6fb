"""
Contains the validation chain and the algorithm which runs its links against a request.
"""
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Iterable, Optional

from .errors import FALLBACK_MESSAGE, FailureRecord
from .link import Context, Link, LinkKind, RuntimeInputs, ValidatorResult
from .utils.request_fields import read_field, write_field

if TYPE_CHECKING:
    from .runner import RequestScope

logger = logging.getLogger(__name__)


class RequestLocation(str, Enum):
    """
    The locations of a request a chain can take its field from
    """

    QUERY = "query"
    HEADER = "header"
    COOKIE = "cookie"


@dataclass(frozen=True)
class ChainOptions:
    """
    Options of a single chain.
    """

    bail: bool = False
    """Stop the chain at the first failing validator"""


class ChainRunState(Enum):
    """The states a single chain run goes through"""

    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"


@dataclass
class ChainRun:
    """
    Holds the state of exactly one run of a chain. `ValidationChain.run` returns it after completion.
    """

    chain: "ValidationChain"
    context: Context
    state: ChainRunState = ChainRunState.PENDING
    failures: list[FailureRecord] = field(default_factory=list)
    """The failure records appended to the request by this run (in order)"""
    executed: int = 0
    """Number of links which got executed"""
    bailed: bool = False

    @property
    def passed(self) -> bool:
        return len(self.failures) == 0


def _negate(result: ValidatorResult) -> ValidatorResult:
    return ValidatorResult(not result.passed, f"not {result.expected}")


class ValidationChain:
    """
    An ordered, immutable sequence of links bound to one field of one request location. The order of the links is
    the execution order. A chain is built once (usually at start up) and run once per request; it holds no state
    between runs.
    """

    def __init__(
        self,
        request_location: RequestLocation | str,
        request_field: str,
        links: Iterable[Link] = (),
        options: Optional[ChainOptions] = None,
        error_override: Optional[str] = None,
    ):
        self.request_location = RequestLocation(request_location)
        self.request_field = request_field
        self.links: tuple[Link, ...] = tuple(links)
        self.options = options if options is not None else ChainOptions()
        self.error_override = error_override
        """Chain level error message; every run starts with a context carrying it"""

    def __str__(self):
        return f"ValidationChain({self.request_location.value}.{self.request_field}, {len(self.links)} links)"

    def __len__(self):
        return len(self.links)

    def _create_context(self, scope: "RequestScope") -> Context:
        return Context(error_override=self.error_override, current_request=scope.request)

    def _resolve_message(self, link: Link, context: Context) -> str:
        if link.error_override is not None:
            return link.error_override
        if context.error_override is not None:
            return context.error_override
        return FALLBACK_MESSAGE

    async def run(self, scope: "RequestScope") -> ChainRun:
        """
        Runs all links in order against the request of `scope`.
        The field value is read fresh before every link because modifiers may have changed it. Every failing
        validator (after negation) appends one failure record to the failure list of the scope. With
        ``bail`` enabled the run stops at the first failing validator, no later link gets executed.
        Exceptions raised by a link abort the run and propagate to the caller.
        """
        failures = scope.ensure_failures()
        run = ChainRun(chain=self, context=self._create_context(scope))
        run.state = ChainRunState.RUNNING
        location = self.request_location.value
        for link in self.links:
            value = read_field(scope.request, location, self.request_field)
            run.executed += 1
            match link.kind:
                case LinkKind.ACTION:
                    await link.run(value, RuntimeInputs(context=run.context))
                    continue
                case LinkKind.MODIFIER:
                    new_value = await link.run(value, RuntimeInputs(context=run.context, request=scope.request))
                    write_field(scope.request, location, self.request_field, new_value)
                    logger.debug("%s: %s replaced %r by %r", self, link, value, new_value)
                    continue
                case LinkKind.VALIDATOR:
                    result: ValidatorResult = await link.run(
                        value, RuntimeInputs(context=run.context, request=scope.request)
                    )
                case _:
                    raise ValueError(f"Unknown link kind {link.kind}")

            if run.context.negated:
                result = _negate(result)
            run.context.negated = False
            if result.passed:
                continue

            record = FailureRecord.from_outcome(
                message=self._resolve_message(link, run.context),
                location=location,
                field=self.request_field,
                expected=result.expected,
                value=value,
            )
            failures.append(record)
            run.failures.append(record)
            logger.debug("%s: %s failed: %s", self, link, record)
            if self.options.bail:
                run.bailed = True
                logger.debug("%s: bailing after link %d of %d", self, run.executed, len(self.links))
                break
        run.state = ChainRunState.COMPLETED
        logger.debug("%s: completed with %d failure(s)", self, len(run.failures))
        return run
