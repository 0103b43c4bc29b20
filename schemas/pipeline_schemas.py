"""
DOCFLOW - Pipeline Run Schemas
Per-run state handed to the presentation layer after every phase change.
"""

from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime
from enum import Enum


class Phase(str, Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    EXTRACTING = "extracting"
    CLASSIFYING = "classifying"
    SUMMARIZING = "summarizing"
    AWAITING_DISPATCH = "awaiting_dispatch"
    DONE = "done"
    FAILED = "failed"


class Outcome(str, Enum):
    SUMMARY = "summary"
    NO_TEXT_FOUND = "no_text_found"
    VALIDATION_ERROR = "validation_error"
    STAGE_ERROR = "stage_error"


class Language(str, Enum):
    ARABIC = "ar"
    ENGLISH = "en"

    @property
    def model_label(self) -> str:
        return "Arabic" if self is Language.ARABIC else "English"


class DispatchStatus(str, Enum):
    IDLE = "idle"
    SENDING = "sending"
    SENT = "sent"
    ERROR = "error"


class SummaryResult(BaseModel):
    summary_text: str
    model_label: str


class StageFlags(BaseModel):
    """Which recognised stage kinds appear in an execution order."""
    has_open_document: bool = False
    has_extract_text: bool = False
    has_summarize: bool = False
    has_send_email: bool = False
    has_show_email_count: bool = False

    @property
    def is_runnable(self) -> bool:
        return self.has_open_document and self.has_extract_text and self.has_summarize


class PipelineState(BaseModel):
    """
    Mutable record of one run. Only the selected document and the
    recipient typed so far survive into the next run.
    """
    phase: Phase = Phase.IDLE
    outcome: Optional[Outcome] = None
    selected_document: Optional[bytes] = Field(default=None, repr=False)
    extracted_text: Optional[str] = Field(default=None, repr=False)
    detected_language: Optional[Language] = None
    summary: Optional[str] = None
    model_label: Optional[str] = None
    execution_order: List[str] = []
    recipient: str = ""
    dispatch_status: DispatchStatus = DispatchStatus.IDLE
    error: Optional[str] = None
    error_type: Optional[str] = None
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None
