"""Shared fixtures for DOCFLOW tests."""

import os

import pytest
from fpdf import FPDF

os.environ.setdefault("HF_TOKEN", "test-token")

from core.config import Settings
from schemas.workflow_schemas import Edge, Graph, Node, NodeKind


def make_graph(nodes, edges):
    """``nodes`` as (id, kind) pairs, ``edges`` as (source, target) pairs."""
    return Graph(
        nodes=[Node(id=node_id, kind=kind) for node_id, kind in nodes],
        edges=[Edge(id=f"e{s}-{t}", source=s, target=t) for s, t in edges],
    )


def make_pdf(pages):
    """Real PDF bytes with one page per entry, each holding that text."""
    pdf = FPDF()
    pdf.set_font("Helvetica", size=12)
    for text in pages:
        pdf.add_page()
        if text:
            pdf.cell(0, 10, text)
    return bytes(pdf.output())


@pytest.fixture
def settings():
    return Settings(
        hf_token="test-token",
        summarization_url_en="https://inference.test/en",
        summarization_url_ar="https://inference.test/ar",
        dispatch_relay_url="https://relay.test/ajax/",
    )


@pytest.fixture
def linear_graph():
    """Open PDF -> Extract Text -> Summarize."""
    return make_graph(
        [("1", NodeKind.OPEN_PDF), ("2", NodeKind.EXTRACT_TEXT), ("3", NodeKind.SUMMARIZE)],
        [("1", "2"), ("2", "3")],
    )


@pytest.fixture
def email_graph():
    """Open PDF -> Extract Text -> Summarize -> Send Email."""
    return make_graph(
        [
            ("1", NodeKind.OPEN_PDF),
            ("2", NodeKind.EXTRACT_TEXT),
            ("3", NodeKind.SUMMARIZE),
            ("4", NodeKind.SEND_EMAIL),
        ],
        [("1", "2"), ("2", "3"), ("3", "4")],
    )


@pytest.fixture
def english_pdf():
    return make_pdf(["Quarterly report for the board", "Revenue grew in every region"])
