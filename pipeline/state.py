"""
DOCFLOW - Stage Graph State
Values passed between LangGraph stage nodes during one run.
"""

from typing import Optional
from typing_extensions import TypedDict


class DocflowRunState(TypedDict):
    """
    Working values of a run. The engine mirrors each of them onto the
    PipelineState it hands to the presentation layer.
    """

    # Bytes of the document attached to the Open PDF node
    document: Optional[bytes]

    # Extract Text output
    extracted_text: Optional[str]
    no_text: bool

    # Summarize output
    language: Optional[str]
    summary: Optional[str]
