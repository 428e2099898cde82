"""Tests for node outline paths."""

from traceflow.models import NodeType
from traceflow.shapes import diamond_path, node_outline, rounded_rect_path


def test_diamond_through_edge_midpoints(place):
    node = place("d", 100, 100, width=180, height=80, type=NodeType.DECISION)
    assert diamond_path(node) == "M 100 60 L 190 100 L 100 140 L 10 100 Z"


def test_decision_outline_is_diamond(place):
    node = place("d", 100, 100, width=180, height=80, type=NodeType.DECISION)
    assert node_outline(node) == diamond_path(node)


def test_start_and_end_are_stadiums(place):
    for node_type in (NodeType.START, NodeType.END):
        outline = node_outline(place("s", 60, 30, type=node_type))
        assert outline.startswith("M 30 0 L 90 0 A 30 30 0 0 1 90 60")
        assert outline.endswith("Z")


def test_rounded_rect_radius_clamped(place):
    node = place("p", 60, 30)
    assert rounded_rect_path(node, radius=100).startswith("M 30 0 L 90 0 Q 120 0 120 30")


def test_process_uses_corner_radius(place):
    node = place("p", 60, 30)
    assert node_outline(node, corner_radius=4).startswith("M 4 0 L 116 0 Q 120 0 120 4")


def test_other_types_fall_back_to_rounded_rect(place):
    for node_type in (NodeType.DATABASE, NodeType.EXTERNAL, NodeType.MANUAL, NodeType.DELAY):
        outline = node_outline(place("x", 60, 30, type=node_type))
        assert " Q " in outline
        assert " A " not in outline
