import asyncio
from typing import Any

from fieldchain import (
    ChainBuilder,
    ChainRunner,
    RequestScope,
    RuntimeInputs,
    ValidateRequests,
    as_step,
    create_registry,
)


class TestComplexExamples:
    async def test_pipeline_with_lookup_and_normalization(self):
        known_customers = {"C-0042": "John Doe"}

        async def lookup_customer(customer_id: str, inputs: RuntimeInputs) -> bool:
            """
            Simulates an external lookup and stores the customer name for later links.
            """
            await asyncio.sleep(0)
            name = known_customers.get(customer_id)
            inputs.context.locals["customer_name"] = name
            return name is not None

        registry = create_registry()
        ChainBuilder.register_is(
            "isCustomerId", lambda value: isinstance(value, str) and value.startswith("C-"), registry=registry
        )
        validate_requests = ValidateRequests(registry=registry)
        check = validate_requests.validator()

        steps = [
            as_step(
                check.query("customer")
                .exists()
                .error("customer is required")
                .modify(lambda value: value.strip().upper())
                .is_customer_id()  # pylint: disable=no-member
                .is_("a known customer", lookup_customer)
                .build()
            ),
            as_step(check.query("page").not_().exists().build()),
            as_step(check.header("x-retries").is_int(max=3).error("too many retries").build()),
            as_step(check.cookie("consent").is_boolean().build()),
        ]

        scope = RequestScope(
            {
                "query": {"customer": " c-0043 ", "page": "2"},
                "header": {"x-retries": "5"},
                "cookie": {"consent": "true"},
            }
        )
        reached: list[int] = []
        for index, step in enumerate(steps):
            await step(scope, None, lambda index=index: reached.append(index))

        assert reached == [0, 1, 2, 3]
        assert scope.request["query"]["customer"] == "C-0043"
        results = validate_requests.analyze(scope)
        assert results.messages_per_field == {
            "header.x-retries": ["too many retries"],
            "query.customer": ["invalid value"],
            "query.page": ["invalid value"],
        }
        page_failure = results.field_failures[("query", "page")][0]
        assert page_failure.expected == "not existant"
        assert page_failure.got == "2"

    async def test_bailing_chain_with_shared_context(self):
        def remember_raw(value: Any, inputs: RuntimeInputs) -> None:
            inputs.context.locals["raw"] = value

        chain = (
            ChainBuilder("query", "amount", bail=True)
            .error("amount must be a positive number")
            .do(remember_raw)
            .exists()
            .modify(lambda value: value.replace(",", "."))
            .is_float()
            .is_("positive", lambda value: float(value) > 0)
            .build()
        )
        scope = RequestScope({"query": {"amount": "-1,5"}, "header": {}, "cookie": {}})
        run = await ChainRunner().handle(chain, scope, None, lambda: None)
        assert run.context.locals == {"raw": "-1,5"}
        assert [failure.as_dict() for failure in scope.failures] == [
            {
                "message": "amount must be a positive number",
                "location": "query",
                "field": "amount",
                "expected": "positive",
                "got": "-1.5",
            }
        ]
