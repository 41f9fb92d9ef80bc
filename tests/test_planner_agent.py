"""Tests for StrategyPlanner: prompt contents, fence stripping, fatal errors."""

import pytest

from smart_rlm.agents.planner_agent import StrategyPlanner, build_planner_system_prompt
from smart_rlm.config.constants import NOT_FOUND_ANSWER
from smart_rlm.utils.exceptions import AgentError, PlanningError

PROGRAM = "report('done')"


def test_plan_returns_program_and_sends_one_request(make_client, run):
    client = make_client(program=PROGRAM)
    planner = StrategyPlanner(client=client, model="test/root")

    program = run(planner.plan("What is the total?"))

    assert program == PROGRAM
    assert len(client.requests) == 1
    request = client.requests[0]
    assert request["model"] == "test/root"
    assert request["json_mode"] is False
    assert request["messages"][0]["role"] == "system"
    assert request["messages"][1] == {"role": "user", "content": "What is the total?"}


@pytest.mark.parametrize(
    "raw",
    [
        "```python\nreport('done')\n```",
        "```py\nreport('done')\n```\n",
        "```\nreport('done')\n```",
        "   report('done')   ",
    ],
)
def test_plan_strips_fencing(make_client, run, raw):
    planner = StrategyPlanner(client=make_client(program=raw), model="test/root")

    assert run(planner.plan("q")) == PROGRAM


def test_plan_keeps_indentation_inside_program(make_client, run):
    raw = "```python\nif True:\n    report('x')\n```"
    planner = StrategyPlanner(client=make_client(program=raw), model="test/root")

    assert run(planner.plan("q")) == "if True:\n    report('x')"


def test_service_error_is_fatal(make_client, run):
    planner = StrategyPlanner(client=make_client(program=ConnectionError("down")), model="test/root")

    with pytest.raises(PlanningError, match="down"):
        run(planner.plan("q"))


def test_empty_program_is_fatal(make_client, run):
    planner = StrategyPlanner(client=make_client(program="```python\n```"), model="test/root")

    with pytest.raises(PlanningError):
        run(planner.plan("q"))


def test_planning_error_is_an_agent_error():
    assert issubclass(PlanningError, AgentError)


def test_empty_query_is_rejected(make_client, run):
    planner = StrategyPlanner(client=make_client(program=PROGRAM), model="test/root")

    with pytest.raises(ValueError):
        run(planner.plan("   "))


def test_system_prompt_documents_toolbox_and_safety_net():
    prompt = build_planner_system_prompt(chunk_size=15000, chunk_overlap=500)

    for name in ("CONTEXT", "USER_QUERY", "chunk_text(text, size, overlap)",
                 "keyword_filter(chunks, keywords)", "ask_leaf(chunk, query=USER_QUERY)",
                 "gather(*awaitables)", "report(text)"):
        assert name in prompt
    assert "size=15000, overlap=500" in prompt
    assert "fall back" in prompt
    assert "targets = chunks" in prompt
    assert "BROAD" in prompt
    assert "No Markdown fences" in prompt
    assert NOT_FOUND_ANSWER in prompt


def test_system_prompt_uses_configured_chunking(make_client):
    planner = StrategyPlanner(client=make_client(), model="test/root", chunk_size=800, chunk_overlap=40)

    assert "chunk_text(CONTEXT, 800, 40)" in planner.system_prompt
