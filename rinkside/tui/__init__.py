"""Document rendering engine: elements, focus extraction, viewport and navigation."""
from .buffer import Buffer, Rect
from .document import Document, DocumentView
from .document_nav import DocumentNavState, handle_message
from .focus import FocusableElement, FocusContext, RowPosition

__all__ = [
    "Buffer",
    "Document",
    "DocumentNavState",
    "DocumentView",
    "FocusContext",
    "FocusableElement",
    "Rect",
    "RowPosition",
    "handle_message",
]
