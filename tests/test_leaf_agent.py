"""Tests for LeafQueryAgent: structured verdicts and failure containment."""

import json

import pytest

from smart_rlm.agents.leaf_agent import LEAF_SYSTEM_PROMPT, LeafQueryAgent, LeafVerdict, parse_verdict
from smart_rlm.config.constants import LEAF_FAILURE_ANSWER, AgentType
from tests.doubles import invoice_leaf, verdict_json


def test_positive_verdict_is_parsed(make_leaf_agent, run):
    agent = make_leaf_agent(leaf=invoice_leaf)

    verdict = run(agent.ask("Invoice #1002 total $750.", "What is the total for invoice 1002?"))

    assert verdict == LeafVerdict(found=True, answer="Invoice #1002 total is $750")


def test_negative_verdict_is_parsed(make_leaf_agent, run):
    agent = make_leaf_agent(leaf=lambda chunk, query: verdict_json(False, "nothing here"))

    verdict = run(agent.ask("unrelated text", "anything"))

    assert verdict.found is False


def test_request_uses_json_mode_and_extractor_role(make_client, run):
    client = make_client(leaf=invoice_leaf)
    agent = LeafQueryAgent(client=client, model="test/leaf")

    run(agent.ask("Invoice #1001 total $500.", "invoice 1001"))

    request = client.requests[-1]
    assert request["json_mode"] is True
    assert request["model"] == "test/leaf"
    assert request["messages"][0] == {"role": "system", "content": LEAF_SYSTEM_PROMPT}
    assert request["messages"][1]["content"] == "Query: invoice 1001\n\nText Chunk: Invoice #1001 total $500."


def _raise(exc):
    def _responder(chunk, query):
        raise exc
    return _responder


@pytest.mark.parametrize(
    "leaf",
    [
        lambda chunk, query: "not json at all",
        lambda chunk, query: "",
        lambda chunk, query: json.dumps(["found", True]),
        lambda chunk, query: json.dumps({"answer": "missing found"}),
        lambda chunk, query: json.dumps({"found": "yes", "answer": "string flag"}),
        _raise(ConnectionError("upstream unavailable")),
        _raise(RuntimeError("boom")),
    ],
    ids=["non-json", "empty", "json-array", "missing-found", "non-bool-found", "transport-error", "runtime-error"],
)
def test_any_failure_becomes_negative_verdict(make_leaf_agent, run, leaf):
    agent = make_leaf_agent(leaf=leaf)

    verdict = run(agent.ask("some chunk", "some query"))

    assert verdict == LeafVerdict(found=False, answer=LEAF_FAILURE_ANSWER)


def test_parse_verdict_coerces_missing_answer():
    assert parse_verdict('{"found": false}') == LeafVerdict(found=False, answer="")
    assert parse_verdict('{"found": true, "answer": 750}') == LeafVerdict(found=True, answer="750")


def test_verdict_to_dict():
    assert LeafVerdict(True, "x").to_dict() == {"found": True, "answer": "x"}


def test_agent_tier_and_model(make_leaf_agent):
    agent = make_leaf_agent()

    assert agent.get_agent_type() is AgentType.LEAF
    assert agent.model == "test/leaf"
