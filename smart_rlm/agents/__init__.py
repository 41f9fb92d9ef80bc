"""
Agent architecture module.

This package defines the two agent tiers and the engine that wires them:

- ModelClient / LangChainModelClient: injected model completion client.
- AgentInterface / BaseAgent: shared model wiring and prompt helper.
- StrategyPlanner: root agent that writes the strategy program.
- LeafQueryAgent / LeafVerdict: per-chunk extractor and its verdict.
- RLMEngine / RunResult: plan -> sandboxed execution -> answer.
"""

from smart_rlm.agents.model_client import ModelClient, LangChainModelClient
from smart_rlm.agents.base_agent import AgentInterface, BaseAgent
from smart_rlm.agents.leaf_agent import LeafQueryAgent, LeafVerdict
from smart_rlm.agents.planner_agent import StrategyPlanner
from smart_rlm.agents.rlm_engine import RLMEngine, RunResult

__all__ = [
    "ModelClient",
    "LangChainModelClient",
    "AgentInterface",
    "BaseAgent",
    "LeafQueryAgent",
    "LeafVerdict",
    "StrategyPlanner",
    "RLMEngine",
    "RunResult",
]
