from birthday_planner.schemas.user_input import PartyLocation, UserInput
from birthday_planner.services.ai import exceptions
from birthday_planner.services.ai.models import BranchFailure, RequestBranch


def test_exception_error_codes_and_messages():
    # Ensure each domain exception sets the correct error_code and message
    e = exceptions.ParseFailure()
    assert isinstance(e, exceptions.AIExtractionError)
    assert e.error_code == "parse_failed"
    assert "JSON payload" in e.message

    e2 = exceptions.SchemaShapeFailure("no plans")
    assert e2.error_code == "invalid_shape"
    assert e2.message == "no plans"

    e3 = exceptions.ProviderFailure("503 overloaded")
    assert e3.error_code == "provider_error"
    assert str(e3) == "provider_error: 503 overloaded"


def test_aggregate_failure_joins_branch_reasons():
    user_input = UserInput(
        age=30,
        theme="Jazz",
        guest_count=20,
        budget="premium",
        location=PartyLocation(city="Lyon", country="France", setting="indoor"),
    )
    failures = [
        BranchFailure(
            branch=RequestBranch(profile=profile, plan_id=f"id-{i}", user_input=user_input),
            reason=f"Failed to generate plan for {profile} profile: boom {i}",
            error_code="provider_error",
        )
        for i, profile in enumerate(["DIY/Budget", "Premium/Convenience"])
    ]

    e = exceptions.AggregateFailure(failures)

    assert e.error_code == "all_failed"
    assert e.message == (
        "Failed to generate any plans. Errors: "
        "Failed to generate plan for DIY/Budget profile: boom 0; "
        "Failed to generate plan for Premium/Convenience profile: boom 1"
    )
    assert e.failures == failures


def test_aggregate_failure_without_branches():
    e = exceptions.AggregateFailure([])
    assert e.message == "Failed to generate any plans. Errors: "
    assert e.failures == []
