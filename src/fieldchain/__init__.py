"""
This package enables you to validate and transform single request fields (query parameters, headers, cookies) by
running them through ordered chains of validators, actions and modifiers.
"""

from .analysis import ValidationResults
from .builder import DEFAULT_REGISTRY, ChainBuilder, create_registry
from .chain import ChainOptions, ChainRun, ChainRunState, RequestLocation, ValidationChain
from .errors import FALLBACK_MESSAGE, UNDEFINED, FailureRecord, RegistrationError
from .link import Context, Link, LinkKind, RuntimeInputs, ValidatorResult
from .predicates import DEFAULT_PREDICATES, PredicateLibrary
from .registry import RegisteredCheck, ValidatorRegistry
from .runner import ChainRunner, LocationFactories, RequestScope, ValidateRequests, as_step, validate_requests
