"""Text rendering of fault records for the diagnostic stream.

The layout follows the interpreter's own traceback output so a rendered
record reads like the traceback a developer expects, with the causal
chain printed first and a metadata block at the end.
"""

from __future__ import annotations

from faultwarden.models.fault import FaultCause, FaultRecord, StackFrame

_CAUSE_SEPARATOR = (
    "\nThe above exception was the direct cause of the following exception:\n"
)
_CONTEXT_SEPARATOR = (
    "\nDuring handling of the above exception, another exception occurred:\n"
)


def format_frames(frames: list[StackFrame]) -> list[str]:
    """Render frames as ``File "...", line N, in name`` pairs."""
    if not frames:
        return []
    lines = ["Traceback (most recent call last):"]
    for frame in frames:
        location = f'  File "{frame.filename}"'
        if frame.lineno is not None:
            location += f", line {frame.lineno}"
        lines.append(f"{location}, in {frame.name}")
        if frame.line:
            lines.append(f"    {frame.line}")
    return lines


def format_exception_line(exc_type: str, message: str) -> str:
    return f"{exc_type}: {message}" if message else exc_type


def _format_cause(cause: FaultCause) -> list[str]:
    return format_frames(cause.frames) + [
        format_exception_line(cause.exc_type, cause.message)
    ]


def format_metadata(record: FaultRecord) -> list[str]:
    if not record.metadata:
        return []
    lines = ["Metadata:"]
    for key in sorted(record.metadata):
        lines.append(f"  {key}: {record.metadata[key]!r}")
    return lines


def render_record(record: FaultRecord) -> str:
    """Render *record* as one multi-line block ending with a newline.

    Causes are stored nearest-first; they are printed outermost-first
    (oldest at the top) to match the interpreter's ordering.
    """
    lines: list[str] = []
    causes = list(record.causes)
    # A cause's relation describes its link to the block printed after it.
    for index in range(len(causes) - 1, -1, -1):
        lines.extend(_format_cause(causes[index]))
        lines.append(
            _CAUSE_SEPARATOR if causes[index].relation == "cause" else _CONTEXT_SEPARATOR
        )
    lines.extend(format_frames(record.frames))
    lines.append(format_exception_line(record.exc_type, record.message))
    lines.extend(format_metadata(record))
    return "\n".join(lines) + "\n"
