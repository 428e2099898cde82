"""
Shared fixtures for the traceflow test suite.

Provides: positioned-node factory, resolved bundled themes, sample graphs
"""

import pytest

from traceflow.bundled_themes import BLUEPRINT_THEME, CORPORATE_THEME, DEFAULT_THEME
from traceflow.models import Graph, Node, NodeType, PositionedNode
from traceflow.resolver import ThemeResolver, create_default_registry, resolve_theme_direct


@pytest.fixture
def place():
    """Factory for positioned nodes: place(id, x, y, width=120, height=60, type=...)."""

    def _place(node_id, x, y, width=120, height=60, type=NodeType.PROCESS, **kwargs):
        node = Node(id=node_id, label=kwargs.pop("label", node_id.title()), type=type, **kwargs)
        return PositionedNode(node=node, x=x, y=y, width=width, height=height)

    return _place


@pytest.fixture
def default_theme():
    return resolve_theme_direct(DEFAULT_THEME, "light")


@pytest.fixture
def blueprint_theme():
    return resolve_theme_direct(BLUEPRINT_THEME, "light")


@pytest.fixture
def corporate_theme():
    return resolve_theme_direct(CORPORATE_THEME, "light")


@pytest.fixture
def resolver():
    return ThemeResolver(create_default_registry())


@pytest.fixture
def chain_graph():
    """start -> work -> done, top to bottom."""
    return Graph.from_dict({
        "direction": "TB",
        "nodes": [
            {"id": "start", "label": "Start", "type": "start"},
            {"id": "work", "label": "Work"},
            {"id": "done", "label": "Done", "type": "end"},
        ],
        "edges": [
            {"from": "start", "to": "work"},
            {"from": "work", "to": "done"},
        ],
    })


@pytest.fixture
def decision_graph():
    """A decision with a yes branch, a dashed no branch and a loop back."""
    return Graph.from_dict({
        "title": "Review",
        "direction": "TB",
        "nodes": [
            {"id": "start", "label": "Start", "type": "start"},
            {"id": "check", "label": "Valid?", "type": "decision"},
            {"id": "fix", "label": "Fix input", "description": "Manual correction"},
            {"id": "done", "label": "Done", "type": "end"},
        ],
        "edges": [
            {"from": "start", "to": "check"},
            {"from": "check", "to": "done", "label": "yes"},
            {"from": "check", "to": "fix", "label": "no", "style": "dashed"},
            {"from": "fix", "to": "check", "label": "retry"},
        ],
    })
