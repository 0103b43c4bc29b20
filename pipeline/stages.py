"""
DOCFLOW - Stage Detection
Which stage kinds a run contains, and which engine steps each kind drives.
"""

from typing import Dict, List, Sequence, Tuple

from core.exceptions import MissingRequiredStages
from schemas.pipeline_schemas import StageFlags
from schemas.workflow_schemas import Node, NodeKind

REQUIRED_STAGES: Tuple[NodeKind, ...] = (
    NodeKind.OPEN_PDF,
    NodeKind.EXTRACT_TEXT,
    NodeKind.SUMMARIZE,
)

# Engine steps per stage kind, in execution order. Kinds with no steps are
# recognised but do nothing during a run (Send Email waits for the user).
STAGE_STEPS: Dict[NodeKind, Tuple[str, ...]] = {
    NodeKind.OPEN_PDF: ("open_document",),
    NodeKind.EXTRACT_TEXT: ("extract_text",),
    NodeKind.SUMMARIZE: ("detect_language", "summarize"),
    NodeKind.SEND_EMAIL: (),
    NodeKind.SHOW_EMAIL_COUNT: (),
}

_FLAG_FIELDS = {
    NodeKind.OPEN_PDF: "has_open_document",
    NodeKind.EXTRACT_TEXT: "has_extract_text",
    NodeKind.SUMMARIZE: "has_summarize",
    NodeKind.SEND_EMAIL: "has_send_email",
    NodeKind.SHOW_EMAIL_COUNT: "has_show_email_count",
}


def detect_stages(order: Sequence[Node]) -> StageFlags:
    """Single pass over the order, keyed on node kind (never on the label)."""
    kinds = {node.kind for node in order}
    return StageFlags(**{field: kind in kinds for kind, field in _FLAG_FIELDS.items()})


def missing_stages(flags: StageFlags) -> List[NodeKind]:
    return [kind for kind in REQUIRED_STAGES if not getattr(flags, _FLAG_FIELDS[kind])]


def require_runnable(order: Sequence[Node]) -> StageFlags:
    flags = detect_stages(order)
    missing = missing_stages(flags)
    if missing:
        raise MissingRequiredStages(missing)
    return flags


def pipeline_steps() -> List[str]:
    """Engine steps for the required stages, in pipeline order."""
    return [step for kind in REQUIRED_STAGES for step in STAGE_STEPS[kind]]
