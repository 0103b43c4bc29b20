import argparse
import asyncio
import json
import logging
import sys
from datetime import datetime, timezone
from typing import Awaitable, Callable, Dict, Literal, Optional

from langgraph.graph import StateGraph, END

from agents.node1_extract_text import extract_text, has_meaningful_text
from agents.node2_detect_language import detect_language
from agents.node3_summarize import SummarizationClient, failure_marker
from agents.node4_dispatch import DispatchClient
from core.config import get_settings
from core.exceptions import DispatchError, DocflowError, NoDocumentSelected, SummarizationError, ValidationError
from core.logging_setup import configure_logging
from pipeline.stages import pipeline_steps, require_runnable
from pipeline.state import DocflowRunState
from pipeline.traversal import topological_order
from schemas.pipeline_schemas import DispatchStatus, Language, Outcome, Phase, PipelineState, StageFlags
from schemas.workflow_schemas import Graph, NodeKind

logger = logging.getLogger(__name__)

NO_TEXT_MESSAGE = "No meaningful text found in PDF."

Extractor = Callable[[bytes], Awaitable[str]]
TransitionHook = Callable[[PipelineState], None]


def text_router(state: DocflowRunState) -> Literal["detect_language", "no_text_exit"]:
    """
    Conditional router after Extract Text.
    """
    if state.get("no_text"):
        return "no_text_exit"
    return "detect_language"


class WorkflowEngine:
    """
    Runs one workflow graph against the selected document.

    The selected document and the recipient typed so far are kept between
    runs; everything else in ``state`` starts fresh on each ``run()``.
    Only one run (or send) may be in flight at a time.
    """

    def __init__(
        self,
        graph: Graph,
        summarizer: Optional[SummarizationClient] = None,
        dispatcher: Optional[DispatchClient] = None,
        extractor: Optional[Extractor] = None,
        on_transition: Optional[TransitionHook] = None,
    ):
        self.graph = graph
        self._owned = []
        self._summarizer = summarizer or self._own(SummarizationClient())
        self._dispatcher = dispatcher or self._own(DispatchClient())
        self._extract = extractor or extract_text
        self._on_transition = on_transition
        self._state = PipelineState()
        self._flags = StageFlags()
        self._app = self._build_graph()

    @property
    def state(self) -> PipelineState:
        return self._state

    def select_document(self, document: bytes) -> None:
        self._state.selected_document = document

    def set_recipient(self, recipient: str) -> None:
        self._state.recipient = recipient

    # -----------------
    # Stage graph
    # -----------------

    def _build_graph(self):
        """
        Construct the stage StateGraph from the stage step table.
        """
        handlers: Dict[str, Callable] = {
            "open_document": self._open_document,
            "extract_text": self._extract_text,
            "detect_language": self._detect_language,
            "summarize": self._summarize,
        }
        steps = pipeline_steps()

        workflow = StateGraph(DocflowRunState)
        for step in steps:
            workflow.add_node(step, handlers[step])
        workflow.add_node("no_text_exit", self._no_text_exit)

        workflow.set_entry_point(steps[0])
        for current, following in zip(steps, steps[1:]):
            if current == "extract_text":
                workflow.add_conditional_edges(
                    current,
                    text_router,
                    {
                        following: following,
                        "no_text_exit": "no_text_exit",
                    },
                )
            else:
                workflow.add_edge(current, following)
        workflow.add_edge(steps[-1], END)
        workflow.add_edge("no_text_exit", END)

        return workflow.compile()

    async def _open_document(self, state: DocflowRunState) -> dict:
        document = self._state.selected_document
        logger.info("[Open] %d bytes selected", len(document or b""))
        return {"document": document}

    async def _extract_text(self, state: DocflowRunState) -> dict:
        self._set_phase(Phase.EXTRACTING)
        text = await self._extract(state["document"])
        self._state.extracted_text = text
        return {"extracted_text": text, "no_text": not has_meaningful_text(text)}

    async def _no_text_exit(self, state: DocflowRunState) -> dict:
        logger.info("[Extract] no Latin or Arabic letters found, skipping summarization")
        self._state.summary = NO_TEXT_MESSAGE
        self._state.outcome = Outcome.NO_TEXT_FOUND
        return {"summary": NO_TEXT_MESSAGE}

    async def _detect_language(self, state: DocflowRunState) -> dict:
        self._set_phase(Phase.CLASSIFYING)
        language = detect_language(state["extracted_text"])
        self._state.detected_language = language
        self._state.model_label = language.model_label
        return {"language": language.value}

    async def _summarize(self, state: DocflowRunState) -> dict:
        self._set_phase(Phase.SUMMARIZING)
        try:
            result = await self._summarizer.summarize(state["extracted_text"], Language(state["language"]))
            summary = result.summary_text
        except SummarizationError as e:
            logger.warning("[Summarize] %s", e)
            summary = failure_marker(e)

        self._state.summary = summary
        self._state.outcome = Outcome.SUMMARY
        # A fresh summary never inherits the previous recipient or status.
        if self._flags.has_send_email:
            self._state.recipient = ""
            self._state.dispatch_status = DispatchStatus.IDLE
        return {"summary": summary}

    # -----------------
    # Run + dispatch
    # -----------------

    async def run(self) -> PipelineState:
        previous = self._state
        self._state = PipelineState(
            selected_document=previous.selected_document,
            recipient=previous.recipient,
            started_at=datetime.now(timezone.utc),
        )
        self._set_phase(Phase.VALIDATING)

        try:
            order = topological_order(self.graph, strict=True)
            self._state.execution_order = [n.id for n in order]
            self._flags = require_runnable(order)
            if not self._state.selected_document:
                raise NoDocumentSelected()
        except ValidationError as e:
            return self._fail(Outcome.VALIDATION_ERROR, e)

        initial_state: DocflowRunState = {
            "document": None,
            "extracted_text": None,
            "no_text": False,
            "language": None,
            "summary": None,
        }

        logger.info("=== Starting DOCFLOW run (%s) ===", " -> ".join(self._state.execution_order))
        try:
            await self._app.ainvoke(initial_state)
        except DocflowError as e:
            return self._fail(Outcome.STAGE_ERROR, e)

        self._state.finished_at = datetime.now(timezone.utc)
        self._set_phase(Phase.DONE)
        logger.info("=== Run complete (%s) ===", self._state.outcome.value)
        return self._state

    async def send_summary(self) -> DispatchStatus:
        """Send the last summary to the current recipient. Explicit user action only."""
        state = self._state
        if state.phase is not Phase.DONE or state.outcome is not Outcome.SUMMARY or not state.summary:
            raise DispatchError("No summary to send. Run the workflow first.")
        if not self.graph.has_kind(NodeKind.SEND_EMAIL):
            raise DispatchError("Workflow has no Send Email node.")
        recipient = state.recipient.strip()
        if not recipient:
            raise DispatchError("Recipient address is required.")

        state.dispatch_status = DispatchStatus.SENDING
        self._set_phase(Phase.AWAITING_DISPATCH)
        try:
            state.dispatch_status = await self._dispatcher.send(recipient, state.summary)
        finally:
            if state.dispatch_status is DispatchStatus.SENDING:
                state.dispatch_status = DispatchStatus.ERROR
            self._set_phase(Phase.DONE)
        return state.dispatch_status

    def _own(self, client):
        self._owned.append(client)
        return client

    async def close(self) -> None:
        """Close the HTTP clients this engine created itself."""
        for client in self._owned:
            await client.close()

    def _set_phase(self, phase: Phase) -> None:
        self._state.phase = phase
        logger.debug("[Engine] phase=%s", phase.value)
        if self._on_transition:
            self._on_transition(self._state)

    def _fail(self, outcome: Outcome, error: DocflowError) -> PipelineState:
        logger.warning("[Engine] run failed (%s): %s", type(error).__name__, error)
        self._state.outcome = outcome
        self._state.error = str(error)
        self._state.error_type = type(error).__name__
        self._state.finished_at = datetime.now(timezone.utc)
        self._set_phase(Phase.FAILED)
        return self._state


async def run_pipeline(
    graph: Graph,
    document: Optional[bytes],
    summarizer: Optional[SummarizationClient] = None,
    extractor: Optional[Extractor] = None,
    on_transition: Optional[TransitionHook] = None,
) -> PipelineState:
    """
    Run the workflow once for ``document`` and return the terminal state.
    """
    engine = WorkflowEngine(graph, summarizer=summarizer, extractor=extractor, on_transition=on_transition)
    if document is not None:
        engine.select_document(document)
    try:
        return await engine.run()
    finally:
        await engine.close()


async def _main(args: argparse.Namespace) -> int:
    try:
        with open(args.workflow, "r") as f:
            graph = Graph.from_dict(json.load(f))
        with open(args.document, "rb") as f:
            document = f.read()
    except (ValueError, KeyError, OSError) as e:
        print(f"Error: {e}")
        return 1

    engine = WorkflowEngine(graph)
    engine.select_document(document)
    try:
        state = await engine.run()
        print(f"Phase: {state.phase.value} ({state.outcome.value if state.outcome else 'n/a'})")
        if state.phase is Phase.FAILED:
            print(f"Error: {state.error}")
            return 1

        print(f"Model: {state.model_label or 'Unknown'}")
        print(f"Summary:\n{state.summary}")

        if args.send_to:
            engine.set_recipient(args.send_to)
            try:
                status = await engine.send_summary()
            except DispatchError as e:
                print(f"Email not sent: {e}")
                return 1
            print("Email sent!" if status is DispatchStatus.SENT else "Failed to send.")
            return 0 if status is DispatchStatus.SENT else 1
        return 0
    finally:
        await engine.close()


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Run a DOCFLOW workflow against a PDF.")
    parser.add_argument("workflow", help="workflow JSON exported from the editor")
    parser.add_argument("document", help="PDF file to summarize")
    parser.add_argument("--send-to", help="email the summary to this address")
    parser.add_argument("--log-level", default=None)
    args = parser.parse_args(argv)

    configure_logging(args.log_level or get_settings().log_level)
    return asyncio.run(_main(args))


if __name__ == "__main__":
    sys.exit(main())
