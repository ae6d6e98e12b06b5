"""Non-blocking live output: spinner, draft lines and a progress bar."""

from promptkit.output.draft import Draft, DraftLine
from promptkit.output.progress import ProgressBar
from promptkit.output.spinner import Spinner

__all__ = [
    "Draft",
    "DraftLine",
    "ProgressBar",
    "Spinner",
]
