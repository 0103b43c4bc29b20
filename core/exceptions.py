"""
DOCFLOW - Error Taxonomy
Every failure the engine can turn into a terminal pipeline state.
"""


class DocflowError(Exception):
    """Base exception for all DOCFLOW errors."""
    pass


class ValidationError(DocflowError):
    """Workflow cannot be run as drawn. Raised before any side effect."""
    pass


class NoStartNode(ValidationError):
    """Every node has an incoming edge, so there is nowhere to begin."""

    def __init__(self, message: str = "No start node found!"):
        super().__init__(message)


class MissingRequiredStages(ValidationError):
    """Open PDF, Extract Text and Summarize are not all reachable."""

    def __init__(self, missing=None, message: str = "Please add and connect Open PDF, Extract Text, and Summarize nodes."):
        super().__init__(message)
        self.missing = list(missing or [])


class NoDocumentSelected(ValidationError):
    """Stages are present but the Open PDF node has no file attached."""

    def __init__(self, message: str = "Please select a PDF file by clicking the Open PDF node first."):
        super().__init__(message)


class CyclicGraphError(ValidationError):
    """A cycle is reachable from a start node."""

    def __init__(self, cycle=None):
        self.cycle = list(cycle or [])
        path = " -> ".join(self.cycle)
        super().__init__(f"Workflow contains a cycle: {path}" if path else "Workflow contains a cycle.")


class DecodeError(DocflowError):
    """Selected document is not a readable PDF."""
    pass


class SummarizationError(DocflowError):
    """Inference endpoint call failed."""
    pass


class UnexpectedResponseShape(SummarizationError):
    """Inference endpoint answered, but not with a list of summary objects."""

    def __init__(self, message: str = "Unexpected response from Hugging Face API"):
        super().__init__(message)


class DispatchError(DocflowError):
    """Summary cannot be sent (nothing to send, no recipient, or no Send Email node)."""
    pass
