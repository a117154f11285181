"""
workflow.py - Declarative submission workflow state machine.

The workflow section of an AppSpec is data: a set of states, an initial
state and role-gated transitions. The compiler renders it into the build
prompt, and the generated app's runtime must enforce exactly the same rules
on submitted records. This module is the reference reading of those rules:

- DRAFT is client-only. It is the initial state and is never stored as a
  record's status.
- A transition whose ``from`` lists several states is the same edge repeated
  for each source; it is expanded, never abbreviated.
- A state change is allowed only if an expanded edge matches source, target
  and the acting role.

Nothing here executes transitions; callers ask questions of the machine.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Tuple, Union

from .capabilities import WorkflowState
from .types import Transition, WorkflowConfig


@dataclass(frozen=True)
class Edge:
    """A single expanded transition: one source, one target, its role gate."""
    source: str
    target: str
    allowed_roles: Tuple[str, ...]

    def permits(self, role: str) -> bool:
        return role in self.allowed_roles


def expand_transition(transition: Transition) -> List[Edge]:
    """Expand a (possibly multi-source) transition into one edge per source."""
    return [
        Edge(source=source, target=transition.to, allowed_roles=tuple(transition.allowed_roles))
        for source in transition.sources
    ]


class WorkflowStateMachine:
    """Query interface over a workflow declaration."""

    def __init__(self, states: Tuple[str, ...], initial_state: str, edges: Tuple[Edge, ...]):
        self.states = states
        self.initial_state = initial_state
        self._edges = edges

    @classmethod
    def from_config(
        cls, workflow: Union[WorkflowConfig, Mapping[str, Any]]
    ) -> "WorkflowStateMachine":
        if not isinstance(workflow, WorkflowConfig):
            workflow = WorkflowConfig.model_validate(workflow)
        edges: List[Edge] = []
        for transition in workflow.transitions:
            edges.extend(expand_transition(transition))
        return cls(tuple(workflow.states), workflow.initial_state, tuple(edges))

    def edges(self) -> Tuple[Edge, ...]:
        """Expanded edges in declaration order."""
        return self._edges

    def can_transition(self, source: str, target: str, role: str) -> bool:
        return any(
            edge.source == source and edge.target == target and edge.permits(role)
            for edge in self._edges
        )

    def available_targets(self, state: str, role: str) -> List[str]:
        """Target states `role` may move a record in `state` to (deduplicated, ordered)."""
        targets: List[str] = []
        for edge in self._edges:
            if edge.source == state and edge.permits(role) and edge.target not in targets:
                targets.append(edge.target)
        return targets

    def terminal_states(self) -> List[str]:
        """Declared states with no outgoing edge."""
        sources = {edge.source for edge in self._edges}
        return [state for state in self.states if state not in sources]

    def edges_by_source(self) -> Dict[str, List[Edge]]:
        grouped: Dict[str, List[Edge]] = {}
        for edge in self._edges:
            grouped.setdefault(edge.source, []).append(edge)
        return grouped

    @staticmethod
    def is_persisted_state(state: str) -> bool:
        """Whether a record may be stored with this status (DRAFT never is)."""
        return state != WorkflowState.DRAFT.value
