"""Tests for RLMEngine: lifecycle states and error handling."""

import pytest

from smart_rlm.agents.rlm_engine import RLMEngine
from smart_rlm.config.constants import RunState
from smart_rlm.utils.exceptions import PlanningError
from tests.doubles import ScriptedModelClient, invoice_leaf, strategy_program, verdict_json

INVOICES = "Invoice #1001 total $500. Invoice #1002 total $750."


class StateRecordingClient(ScriptedModelClient):
    """Remembers the engine state at every model request."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.engine = None
        self.seen_states = []

    async def complete(self, model, messages, json_mode=False):
        self.seen_states.append(self.engine.state)
        return await super().complete(model, messages, json_mode)


def make_engine(client, context=INVOICES, **kwargs):
    kwargs.setdefault("sandbox_timeout", 5)
    return RLMEngine(context, client=client, root_model="test/root", leaf_model="test/leaf", **kwargs)


def test_run_returns_answer_and_program(run):
    program = strategy_program(["invoice", "total"])
    engine = make_engine(ScriptedModelClient(program=program, leaf=invoice_leaf))

    result = run(engine.run("What is the total for invoice 1002?"))

    assert result.answer == "Invoice #1002 total is $750"
    assert result.program == program.strip()
    assert result.state is RunState.COMPLETED
    assert result.execution.succeeded
    assert engine.state is RunState.COMPLETED


def test_states_progress_through_planning_and_execution(run):
    client = StateRecordingClient(program=strategy_program(["invoice"]), leaf=invoice_leaf)
    engine = make_engine(client)
    client.engine = engine
    assert engine.state is RunState.IDLE

    run(engine.run("What is the total for invoice 1001?"))

    assert client.seen_states[0] is RunState.PLANNING
    assert set(client.seen_states[1:]) == {RunState.EXECUTING}
    assert engine.state is RunState.COMPLETED


def test_planning_error_fails_the_run_and_propagates(run):
    client = ScriptedModelClient(program=ConnectionError("root model down"))
    engine = make_engine(client)

    with pytest.raises(PlanningError):
        run(engine.run("anything"))

    assert engine.state is RunState.FAILED
    assert client.leaf_requests == []


def test_broken_strategy_still_completes(run):
    engine = make_engine(ScriptedModelClient(program="report(1 / 0)"))

    result = run(engine.run("anything"))

    assert result.state is RunState.COMPLETED
    assert result.answer is None
    assert result.execution.error.startswith("ZeroDivisionError")


def test_strategy_without_report_returns_none(run):
    engine = make_engine(ScriptedModelClient(program="chunks = chunk_text(CONTEXT)"))

    result = run(engine.run("anything"))

    assert result.answer is None
    assert result.execution.succeeded


def test_engine_is_reusable_across_queries(run):
    engine = make_engine(ScriptedModelClient(program=strategy_program(["invoice"]), leaf=invoice_leaf))

    first = run(engine.run("total for invoice 1001"))
    second = run(engine.run("total for invoice 1002"))

    assert first.answer == "Invoice #1001 total is $500"
    assert second.answer == "Invoice #1002 total is $750"


def test_run_sync_uses_blocking_loop():
    engine = make_engine(ScriptedModelClient(program="report(USER_QUERY.upper())"))

    assert engine.run_sync("hello").answer == "HELLO"
    assert engine.run_sync("again").answer == "AGAIN"


@pytest.mark.parametrize("query", ["", "   ", None])
def test_empty_query_is_rejected(run, query):
    engine = make_engine(ScriptedModelClient(program="report('x')"))

    with pytest.raises(ValueError):
        run(engine.run(query))


def test_context_must_be_text():
    with pytest.raises(TypeError):
        RLMEngine(b"bytes", client=ScriptedModelClient())


def test_leaf_failure_does_not_abort_fan_out(run):
    def flaky(chunk, query):
        if "1001" in chunk:
            raise ConnectionError("leaf timeout")
        return invoice_leaf(chunk, query)

    context = "Invoice #1001 total $500." + " " * 40 + "Invoice #1002 total $750."
    program = strategy_program(["invoice"], size=60, overlap=10)
    engine = make_engine(ScriptedModelClient(program=program, leaf=flaky), context=context)

    result = run(engine.run("total for invoice 1002"))

    assert result.answer == "Invoice #1002 total is $750"
    assert result.execution.succeeded


def test_nothing_found_reports_not_found(run):
    engine = make_engine(
        ScriptedModelClient(
            program=strategy_program(["invoice"]),
            leaf=lambda chunk, query: verdict_json(False, "no"),
        )
    )

    result = run(engine.run("total for invoice 9999"))

    assert result.answer == "Information not found in context."
