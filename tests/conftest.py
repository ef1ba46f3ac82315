"""
Shared fixtures for the gateway tests.

Run with: pytest -v
"""
import io
import json
from typing import Any, Callable, Dict, List

import httpx
import pytest
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas

from core.config import GatewayConfig

BRAIN_URL = "http://brain.test/classify"
PROCESSOR_URL = "http://processor.test/process"


def build_brief_pdf(lines: List[str], title: str = "Creative Brief") -> bytes:
    """Small text PDF, laid out like a one-page brief."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=A4)
    width, height = A4

    c.setFont("Helvetica-Bold", 16)
    c.drawCentredString(width / 2.0, height - 25 * mm, title)

    c.setFont("Helvetica", 11)
    y = height - 40 * mm
    for line in lines:
        c.drawString(20 * mm, y, line)
        y -= 6 * mm

    c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture
def brief_pdf_bytes() -> bytes:
    return build_brief_pdf(
        [
            "Refresh the spring sale banners for the flagship property.",
            "Deliverables: 3 web banners, 1 email header.",
        ]
    )


@pytest.fixture
def config() -> GatewayConfig:
    return GatewayConfig(
        brain_url=BRAIN_URL,
        processor_url=PROCESSOR_URL,
        timeout_s=5.0,
        event_log_enabled=False,
    )


@pytest.fixture
def brain_output() -> Dict[str, Any]:
    """Representative Brain v2 output for a routine banner refresh."""
    return {
        "request_summary": "Refresh spring sale banners",
        "deliverables": [
            {"type": "banner", "format": "728x90", "quantity": 3},
            {"name": "email header", "format_hint": "600x200"},
        ],
        "clarifications_needed": [],
        "routing": {"recommendation": "production", "confidence": 0.92, "flags": []},
        "project_type": {"primary": "standard_refresh"},
        "content": {"campaign_purpose": "Drive spring sale traffic", "audience": ["loyalty members"]},
        "channels": ["web", "email"],
        "timeline": {"due_date": "2026-11-01", "urgency": "normal"},
        "property": {"id": "PROP-7", "name": "Flagship"},
        "_metadata": {"confidence": 0.5, "run_id": "run-abc", "model": "brain-v2.3"},
        "unexpected_field": {"ignored": True},
    }


class FakeUpstream:
    """
    httpx.MockTransport handler standing in for the Brain and the Processor.

    brain(request_text) decides the Brain's answer; requests are recorded.
    """

    def __init__(self, brain: Callable[[str], httpx.Response], processor: Callable[[Dict], httpx.Response] = None):
        self.brain = brain
        self.processor = processor or (lambda body: httpx.Response(200, json={"accepted": True}))
        self.brain_calls: List[Dict[str, Any]] = []
        self.processor_calls: List[Dict[str, Any]] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content or b"{}")
        if str(request.url) == BRAIN_URL:
            self.brain_calls.append(body)
            return self.brain(body.get("request_text", ""))
        if str(request.url) == PROCESSOR_URL:
            self.processor_calls.append(body)
            return self.processor(body)
        return httpx.Response(404, text="no such endpoint")

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)
