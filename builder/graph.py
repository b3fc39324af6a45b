"""LangGraph definition of the build pipeline.

Topology:
    START -> html_agent -> css_agent -> js_agent -> review_agent -> publish_agent -> END

Every step routes to END as soon as ``errors`` is non-empty; that early END is
the failed state.
"""

from collections.abc import Callable, Sequence

from langgraph.graph import END, START, StateGraph

from .nodes import AgentStep
from .state import BuildState


def _route_after(next_node: str) -> Callable[[BuildState], str]:
    def route(state: BuildState) -> str:
        if state.get("errors"):
            return END
        return next_node

    return route


def create_build_graph(steps: Sequence[AgentStep]):
    """Compile a strictly sequential graph over ``steps`` (in order)."""
    if not steps:
        raise ValueError("Build graph needs at least one step")

    graph = StateGraph(BuildState)
    for step in steps:
        graph.add_node(step.name, step.as_node())

    graph.add_edge(START, steps[0].name)
    for current, following in zip(steps, steps[1:]):
        graph.add_conditional_edges(
            current.name,
            _route_after(following.name),
            {following.name: following.name, END: END},
        )
    graph.add_edge(steps[-1].name, END)

    return graph.compile()
