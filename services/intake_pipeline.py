# services/intake_pipeline.py
# -*- coding: utf-8 -*-
"""
Per-file and batch intake pipeline.

Per file
--------
extract text -> Brain -> engine.adapt -> engine.decide -> Processor

- blocked briefs (human confirmation required) never reach the Processor
- no PROCESSOR_URL -> the Processor step is skipped
- ExtractionFailed / UpstreamCallFailed are caught here and returned as a
  per-file error record

Batch
-----
One asyncio task per file, joined with asyncio.gather. A failing file never
cancels or fails the others; results keep upload order.
"""

import asyncio
import uuid
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import httpx

from core.config import GatewayConfig
from core.logging import log_event, logger
from engine import adapt, decide

from .errors import ExtractionFailed, IntakeError
from .text_extraction import extract_text
from .upstream import call_brain, call_processor

SKIP_BLOCKED = "blocked"
SKIP_NOT_CONFIGURED = "processor not configured"


@dataclass(frozen=True)
class UploadedBrief:
    filename: str
    content_type: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)

    def receipt(self) -> Dict[str, Any]:
        return {
            "filename": self.filename,
            "content_type": self.content_type,
            "size": self.size,
        }


def summarize_batch(results: List[Dict[str, Any]]) -> Dict[str, Any]:
    succeeded = sum(1 for r in results if r.get("ok"))
    return {
        "total": len(results),
        "succeeded": succeeded,
        "failed": len(results) - succeeded,
        "results": results,
    }


def error_result(upload: UploadedBrief, exc: BaseException) -> Dict[str, Any]:
    return {
        **upload.receipt(),
        "ok": False,
        "error": str(exc) or type(exc).__name__,
        "error_type": type(exc).__name__,
    }


class IntakePipeline:
    """
    Brief intake pipeline bound to one GatewayConfig.

    `transport` lets tests (or a proxy setup) replace the network layer of the
    httpx client used for the Brain / Processor calls.
    """

    def __init__(
        self,
        config: GatewayConfig,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.config.timeout_s, transport=self.transport)

    # ------------------------------------------------------------
    # one file
    # ------------------------------------------------------------
    async def process_file(
        self,
        client: httpx.AsyncClient,
        upload: UploadedBrief,
        batch_id: str,
    ) -> Dict[str, Any]:
        try:
            result = await self._run_file(client, upload)
        except IntakeError as e:
            logger.warning(f"⚠️ [{upload.filename}] {type(e).__name__}: {e}")
            result = error_result(upload, e)

        self._log_file_done(batch_id, upload, result)
        return result

    def _log_file_done(self, batch_id: str, upload: UploadedBrief, result: Dict[str, Any]) -> None:
        log_event(
            batch_id,
            {
                "type": "file_done",
                "filename": upload.filename,
                "ok": result["ok"],
                "error": result.get("error"),
                "routing": result.get("routing"),
            },
            enabled=self.config.event_log_enabled,
        )

    async def _run_file(self, client: httpx.AsyncClient, upload: UploadedBrief) -> Dict[str, Any]:
        if upload.size > self.config.max_upload_bytes:
            raise ExtractionFailed(
                f"File too large: {upload.size} bytes (limit {self.config.max_upload_bytes})"
            )

        # 1) text extraction (pdfplumber is blocking)
        text = await asyncio.to_thread(
            extract_text, upload.data, upload.filename, upload.content_type
        )
        logger.info(f"[{upload.filename}] extracted {len(text)} chars")

        # 2) Brain
        brain_output = await call_brain(client, self.config.brain_url, text)

        # 3) adapt + routing verdict
        intent_object = adapt(brain_output, self.config.brain_schema_version)
        decision = decide(intent_object)
        logger.info(
            f"[{upload.filename}] scope={intent_object.intent.what.scope_class} "
            f"routing={decision.status}/{decision.route}"
        )

        # 4) Processor (never for blocked briefs)
        processor_result = None
        skipped_reason = None
        if decision.status == "blocked":
            skipped_reason = SKIP_BLOCKED
        elif not self.config.processor_url:
            skipped_reason = SKIP_NOT_CONFIGURED
        else:
            processor_result = await call_processor(
                client, self.config.processor_url, intent_object
            )

        return {
            **upload.receipt(),
            "ok": True,
            "text_chars": len(text),
            "brain_version": intent_object.meta.brain_version,
            "intent_object": intent_object.to_json(),
            "routing": decision.to_json(),
            "processor_result": processor_result,
            "processor_skipped_reason": skipped_reason,
        }

    # ------------------------------------------------------------
    # batch
    # ------------------------------------------------------------
    async def process_batch(self, uploads: List[UploadedBrief]) -> Dict[str, Any]:
        batch_id = f"batch_{uuid.uuid4().hex}"
        logger.info(f"=== 🟦 intake batch {batch_id}: {len(uploads)} file(s) ===")
        log_event(
            batch_id,
            {"type": "batch_start", "files": [u.receipt() for u in uploads]},
            enabled=self.config.event_log_enabled,
        )

        async with self._client() as client:
            outcomes = await asyncio.gather(
                *(self.process_file(client, upload, batch_id) for upload in uploads),
                return_exceptions=True,
            )

        results: List[Dict[str, Any]] = []
        for upload, outcome in zip(uploads, outcomes):
            if isinstance(outcome, BaseException):
                # unexpected failure inside one task; the batch still completes
                logger.error(f"❌ [{upload.filename}] unexpected error: {outcome!r}")
                failed = error_result(upload, outcome)
                self._log_file_done(batch_id, upload, failed)
                results.append(failed)
            else:
                results.append(outcome)

        summary = summarize_batch(results)
        logger.info(
            f"=== 🟩 intake batch {batch_id} done: "
            f"{summary['succeeded']} ok / {summary['failed']} failed ==="
        )
        return summary
