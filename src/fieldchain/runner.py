"""
Contains the adapter between validation chains and a request handling pipeline as well as the public entry point
to build chains and to retrieve the validation results of a request.
"""
import asyncio
import inspect
import logging
from typing import Any, Awaitable, Callable, Iterable, Optional

from .analysis import ValidationResults
from .builder import ChainBuilder
from .chain import ChainRun, RequestLocation, ValidationChain
from .errors import FailureRecord
from .predicates import DEFAULT_PREDICATES, PredicateLibrary
from .registry import ValidatorRegistry
from .types import NextStep, RequestFields

logger = logging.getLogger(__name__)

PipelineStep = Callable[["RequestScope", Any, NextStep], Awaitable[None]]


class RequestScope:
    """
    Request scoped state owned by the host adapter: the request fields and the failure list all chains validating
    this request append to. The failure list is created when the first chain touches the scope.
    """

    def __init__(self, request: RequestFields):
        self.request = request
        self.failures: Optional[list[FailureRecord]] = None

    def ensure_failures(self) -> list[FailureRecord]:
        if self.failures is None:
            self.failures = []
        return self.failures


async def _continue(next_: NextStep) -> None:
    result = next_()
    if inspect.isawaitable(result):
        await result


class ChainRunner:
    """
    Runs chains for a request and hands over to the next step of the pipeline. The runner never stops the
    pipeline because of validation failures; they are inspected later using `ValidateRequests.results`.
    """

    async def handle(self, chain: ValidationChain, scope: RequestScope, response: Any, next_: NextStep) -> ChainRun:
        """
        Runs `chain` and then calls `next_`. Exceptions raised by a link propagate and `next_` is not called.
        `response` is not touched; it is accepted to match the (request, response, next) step convention.
        """
        run = await chain.run(scope)
        await _continue(next_)
        return run

    async def run_all(
        self, chains: Iterable[ValidationChain], scope: RequestScope, concurrently: bool = False
    ) -> list[ChainRun]:
        """
        Runs several chains against the same request. Sequentially, the failures are ordered by chain. Concurrently,
        the failures of each chain keep their order but may interleave with those of other chains.
        """
        chains = list(chains)
        logger.debug("Running %d chain(s) %s", len(chains), "concurrently" if concurrently else "sequentially")
        if concurrently:
            return list(await asyncio.gather(*(chain.run(scope) for chain in chains)))
        return [await chain.run(scope) for chain in chains]


def as_step(chain: ValidationChain, runner: Optional[ChainRunner] = None) -> PipelineStep:
    """
    Returns a pipeline step ``async (scope, response, next_)`` which validates `chain` and continues the pipeline.
    """
    chain_runner = runner if runner is not None else ChainRunner()

    async def step(scope: RequestScope, response: Any, next_: NextStep) -> None:
        await chain_runner.handle(chain, scope, response, next_)

    step.__name__ = f"validate_{chain.request_location.value}_{chain.request_field}"
    return step


class LocationFactories:
    """
    Creates chain builders for the fields of each request location:
    ```
    check = validate_requests.validator(bail=True)
    chain = check.query("id").is_int().build()
    ```
    """

    def __init__(self, options: dict[str, Any]):
        self._options = options

    def _builder(self, location: RequestLocation, field: str) -> ChainBuilder:
        return ChainBuilder(location, field, **self._options)

    def query(self, field: str) -> ChainBuilder:
        return self._builder(RequestLocation.QUERY, field)

    def header(self, field: str) -> ChainBuilder:
        return self._builder(RequestLocation.HEADER, field)

    def cookie(self, field: str) -> ChainBuilder:
        return self._builder(RequestLocation.COOKIE, field)


class ValidateRequests:
    """
    Public entry point. Default options given here are merged with the options of each `validator` call, the
    latter taking precedence.
    """

    def __init__(
        self,
        bail: bool = False,
        predicates: PredicateLibrary = DEFAULT_PREDICATES,
        registry: Optional[ValidatorRegistry] = None,
    ):
        self._defaults: dict[str, Any] = {"bail": bail, "predicates": predicates, "registry": registry}

    def validator(self, **options: Any) -> LocationFactories:
        unknown = set(options) - set(self._defaults)
        if unknown:
            raise TypeError(f"Unknown option(s) {sorted(unknown)}")
        merged = {**self._defaults, **{key: value for key, value in options.items() if value is not None}}
        return LocationFactories(merged)

    def results(self, scope: RequestScope) -> Optional[list[FailureRecord]]:
        """The failure list of the request or None if no chain ever ran for it"""
        return scope.failures

    def analyze(self, scope: RequestScope) -> ValidationResults:
        return ValidationResults(scope.failures or [])


validate_requests = ValidateRequests()
