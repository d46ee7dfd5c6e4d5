"""BDD step definitions for tallying and shutdown reporting features."""

import json
import logging
from collections.abc import Generator

import pytest
from click.testing import CliRunner
from pytest_bdd import given, parsers, then, when

from auditcheck import cli
from auditcheck.adapters.logging import ROOT_LOGGER_NAME, configure_logging
from auditcheck.core.models import ActionTally
from tests.features.tallying.steps_helpers import (
    TallyScenarioContext,
    process_and_shut_down,
    run_async,
)


@pytest.fixture
def ctx() -> Generator[TallyScenarioContext, None, None]:
    """Fresh scenario context for each test."""
    context = TallyScenarioContext()
    yield context
    for handler in list(logging.getLogger(ROOT_LOGGER_NAME).handlers):
        logging.getLogger(ROOT_LOGGER_NAME).removeHandler(handler)


# === Background Steps ===
@given("an in-memory log sink")
def step_log_sink(ctx: TallyScenarioContext) -> None:
    configure_logging(ctx.log_sink, "DEBUG")


# === Message Steps ===
@given(parsers.parse('audit events for action "{action}" with results:'))
def step_events_with_results(
    ctx: TallyScenarioContext, action: str, datatable: list[list[str]]
) -> None:
    header, *rows = datatable
    column = header.index("result")
    for row in rows:
        ctx.add_event(action, row[column])


@given(parsers.parse('an audit event for action "{action}" with result "{result}"'))
def step_single_event(ctx: TallyScenarioContext, action: str, result: str) -> None:
    ctx.add_event(action, result)


@given("a corrupt message")
def step_corrupt_message(ctx: TallyScenarioContext) -> None:
    ctx.payloads.append(b"\x02\xff")


@when("the consumer processes the messages and shuts down")
def step_process(ctx: TallyScenarioContext) -> None:
    run_async(process_and_shut_down(ctx))


# === CLI Steps ===
@when("auditcheck starts with no kafka brokers")
def step_start_without_brokers(
    ctx: TallyScenarioContext, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(cli, "KafkaMessageSource", ctx.sources_created.append)
    result = CliRunner().invoke(cli.main, [], env={"KAFKA_BROKERS": ""})
    ctx.status = result.exit_code
    ctx.cli_output = result.output


# === Assertions ===
@then(
    parsers.parse(
        'the tally for "{action}" is attempted {attempted:d}, successful '
        "{successful:d}, unsuccessful {unsuccessful:d}, total {total:d}"
    )
)
def step_tally_is(
    ctx: TallyScenarioContext,
    action: str,
    attempted: int,
    successful: int,
    unsuccessful: int,
    total: int,
) -> None:
    assert ctx.table[action] == ActionTally(
        attempted=attempted,
        successful=successful,
        unsuccessful=unsuccessful,
        total=total,
    )


@then(parsers.parse("{count:d} messages were acknowledged"))
def step_acknowledged(ctx: TallyScenarioContext, count: int) -> None:
    assert ctx.acknowledged == count


@then(parsers.parse("{count:d} decode failure was logged"))
def step_decode_failures(ctx: TallyScenarioContext, count: int) -> None:
    assert len(ctx.log_sink.find("failed to unmarshal event")) == count


@then(parsers.parse("the consumer exits with status {status:d}"))
def step_exit_status(ctx: TallyScenarioContext, status: int) -> None:
    assert ctx.status == status


@then(parsers.parse("the final report contains {count:d} actions"))
def step_report_size(ctx: TallyScenarioContext, count: int) -> None:
    assert len(ctx.final_report().attributes["audit"]) == count


@then(parsers.parse('the final report shows a total of {total:d} for "{action}"'))
def step_report_total(ctx: TallyScenarioContext, total: int, action: str) -> None:
    assert ctx.final_report().attributes["audit"][action]["total"] == total


@then("a configuration error is printed")
def step_configuration_error(ctx: TallyScenarioContext) -> None:
    [line] = [json.loads(raw) for raw in ctx.cli_output.splitlines() if raw.strip()]
    assert line["level"] == "ERROR"
    assert "missing kafka brokers" in line["message"]


@then("no message source is created")
def step_no_source(ctx: TallyScenarioContext) -> None:
    assert ctx.sources_created == []
    assert ctx.status == 0
