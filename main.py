# -*- coding: utf-8 -*-
"""
main.py

Console demo for the brief intake gateway.

Modes
--------------------------------------
1. Brain JSON mode
   - read a saved Brain output (JSON file)
   - engine.adapt + engine.decide only, no network

2. Document mode
   - read a brief document (.pdf / .txt)
   - full pipeline: extraction -> Brain -> adapt -> routing -> Processor
   - endpoints come from .env (BRAIN_URL / PROCESSOR_URL)

The HTTP server is app_fastapi.py; this file is for trying things by hand.
"""

import asyncio
import json
import mimetypes
from pathlib import Path
from typing import Any, Dict

from core.config import load_gateway_config
from engine import adapt, decide
from services.intake_pipeline import IntakePipeline, UploadedBrief


def _print_json(label: str, data: Any) -> None:
    print(f"\n[{label}]")
    print(json.dumps(data, ensure_ascii=False, indent=2))


def _print_summary(intent: Dict[str, Any], routing: Dict[str, Any]) -> None:
    what = intent["intent"]["what"]
    how_hard = intent["intent"]["how_hard"]
    print("\n[summary]")
    print(" - request:", intent["input"]["request_text"] or "(empty)")
    print(" - scope:", what["scope_class"], "| novelty:", what["novelty"])
    print(" - deliverables:", ", ".join(d["deliverable_name"] for d in what["deliverables"]) or "-")
    print(
        " - rework risk:", how_hard["rework_risk"],
        "| coordination:", how_hard["coordination_cost"],
        "| speed:", how_hard["speed_sensitivity"],
    )
    print(" - routing:", routing.get("status"), routing.get("route") or "")
    if routing.get("questions"):
        print(" - questions for humans:")
        for q in routing["questions"]:
            print("   *", q)


# =====================================================================
#  mode 1: saved Brain output
# =====================================================================
def run_json_mode():
    print("\n[mode 1] Brain JSON -> intent object (type exit to quit)")

    while True:
        try:
            path = input("\nBrain JSON path > ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nbye.")
            break

        if not path or path.lower() in ("exit", "quit"):
            print("bye.")
            break

        try:
            payload = json.loads(Path(path).read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            print("could not read JSON:", e)
            continue

        intent_object = adapt(payload)
        routing = decide(intent_object).to_json()

        intent = intent_object.to_json()
        _print_summary(intent, routing)
        _print_json("intent_object", intent)


# =====================================================================
#  mode 2: brief document through the full pipeline
# =====================================================================
def run_document_mode():
    print("\n[mode 2] brief document -> full pipeline (type exit to quit)")
    pipeline = IntakePipeline(load_gateway_config())

    while True:
        try:
            path = input("\nbrief path (.pdf/.txt) > ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nbye.")
            break

        if not path or path.lower() in ("exit", "quit"):
            print("bye.")
            break

        file_path = Path(path)
        try:
            data = file_path.read_bytes()
        except OSError as e:
            print("could not read file:", e)
            continue

        upload = UploadedBrief(
            filename=file_path.name,
            content_type=mimetypes.guess_type(file_path.name)[0] or "",
            data=data,
        )
        batch = asyncio.run(pipeline.process_batch([upload]))
        result = batch["results"][0]

        if not result["ok"]:
            print(f"\n[failed] {result['error_type']}: {result['error']}")
            continue

        _print_summary(result["intent_object"], result["routing"])
        if result["processor_skipped_reason"]:
            print(" - processor skipped:", result["processor_skipped_reason"])
        else:
            _print_json("processor_result", result["processor_result"])


# =====================================================================
#  entry point
# =====================================================================

def main():
    print("===== brief intake gateway demo =====")
    print("1) Brain JSON -> intent object")
    print("2) brief document -> full pipeline")
    print("0) exit")

    while True:
        mode = input("\nchoose a mode (1/2/0) > ").strip()
        if mode == "1":
            run_json_mode()
            break
        elif mode == "2":
            run_document_mode()
            break
        elif mode == "0":
            print("bye.")
            break
        else:
            print("invalid choice, enter 1, 2 or 0.")


if __name__ == "__main__":
    main()
