"""Showcase examples for the traceflow README."""

import logging

from traceflow import ColorSchemeMonitor, Graph, ThemeResolver, create_default_registry, render_to_svg


def approval_flow():
    """Top-to-bottom approval flow with a decision and a retry loop."""
    graph = Graph.from_dict({
        "title": "Expense approval",
        "direction": "TB",
        "nodes": [
            {"id": "submit", "label": "Submit expense", "type": "start"},
            {"id": "validate", "label": "Validate", "description": "Receipts & limits"},
            {"id": "review", "label": "Within budget?", "type": "decision"},
            {"id": "manager", "label": "Manager review", "emphasis": "high"},
            {"id": "reject", "label": "Rejected", "status": "error"},
            {"id": "pay", "label": "Reimburse", "type": "end"},
        ],
        "edges": [
            {"from": "submit", "to": "validate"},
            {"from": "validate", "to": "review"},
            {"from": "review", "to": "pay", "label": "yes"},
            {"from": "review", "to": "manager", "label": "no", "style": "dashed"},
            {"from": "manager", "to": "reject", "style": "dotted"},
            {"from": "manager", "to": "validate", "label": "revise"},
        ],
    })
    render_to_svg(graph, "default", filename="docs/approval_flow")


def data_pipeline():
    """Left-to-right pipeline on the blueprint theme with an animated edge."""
    graph = Graph.from_dict({
        "title": "Nightly ingest",
        "direction": "LR",
        "theme": {"name": "blueprint", "mode": "dark"},
        "nodes": [
            {"id": "extract", "label": "Extract", "type": "start"},
            {"id": "stage", "label": "Staging", "type": "database"},
            {"id": "transform", "label": "Transform", "description": "dbt models"},
            {"id": "warehouse", "label": "Warehouse", "type": "database"},
            {"id": "report", "label": "Report", "type": "end"},
        ],
        "edges": [
            {"from": "extract", "to": "stage", "animate": True},
            {"from": "stage", "to": "transform"},
            {"from": "transform", "to": "warehouse", "label": "load"},
            {"from": "warehouse", "to": "report"},
            {"from": "transform", "to": "stage", "label": "retry", "style": "dashed"},
        ],
    })
    render_to_svg(graph, filename="docs/data_pipeline")


def retry_loop():
    """Retry loop with theme overrides, following the ambient dark preference."""
    color_scheme = ColorSchemeMonitor(initial="dark")
    resolver = ThemeResolver(create_default_registry(), color_scheme)

    graph = Graph.from_dict({
        "direction": "TB",
        "nodes": [
            {"id": "request", "label": "Send request", "type": "start"},
            {"id": "call", "label": "Call API", "type": "external"},
            {"id": "ok", "label": "Succeeded?", "type": "decision"},
            {"id": "wait", "label": "Back off", "type": "delay", "status": "warning"},
            {"id": "done", "label": "Done", "type": "end"},
        ],
        "edges": [
            {"from": "request", "to": "call"},
            {"from": "call", "to": "ok"},
            {"from": "ok", "to": "done", "label": "yes"},
            {"from": "ok", "to": "wait", "label": "no", "style": "dashed"},
            {"from": "wait", "to": "call", "description": "Exponential back-off"},
        ],
    })
    theme = {
        "name": "vibrant",
        "mode": "system",
        "overrides": {"typography": {"fontSizeLabel": 15}},
    }
    render_to_svg(graph, theme, filename="docs/retry_loop", resolver=resolver)


if __name__ == "__main__":
    import os

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    log = logging.getLogger("examples")

    os.makedirs("docs", exist_ok=True)

    log.info("Generating approval flow...")
    approval_flow()

    log.info("Generating data pipeline...")
    data_pipeline()

    log.info("Generating retry loop...")
    retry_loop()

    log.info("All examples generated in docs/")
