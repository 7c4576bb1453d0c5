"""
PolySolver - Plain-text rendering of operands and transcript entries.

Layout follows the chat cards of the web client: a request bubble with the
operation badge, and a result card with the operands, the answer and the
explanation steps.
"""

from polysolver.entries import RequestEntry, ResultEntry
from polysolver.steps import StepKind

STEP_GLYPHS = {
    StepKind.PRIMARY: "◆",
    StepKind.SUB: "▶",
    StepKind.PLAIN: "•",
}

RULE = "─" * 48


def render_operands(operands) -> str:
    if not operands:
        return "  (no polynomials staged)"
    return "\n".join(f"  P{i}: {op}" for i, op in enumerate(operands, start=1))


def render_request(entry: RequestEntry) -> str:
    badge, _, text = entry.summary.partition(":")
    return f"{'You':>8}  [{badge}]{text}"


def render_result(entry: ResultEntry) -> str:
    lines: list[str] = [RULE, f"  [{entry.operation.badge}]"]
    lines.extend(render_operands(entry.operands).split("\n"))
    lines.append(f"  ➜ {entry.result}")

    steps = entry.steps
    if steps:
        lines.append("")
    for step in steps:
        indent = "      " if step.kind is StepKind.SUB else "  "
        lines.append(f"{indent}{STEP_GLYPHS[step.kind]} {step.text}")
    lines.append(RULE)
    return "\n".join(lines)


def render_entry(entry) -> str:
    if isinstance(entry, RequestEntry):
        return render_request(entry)
    return render_result(entry)


def render_transcript(entries) -> str:
    if not entries:
        return "  (history is empty)"
    return "\n".join(render_entry(e) for e in entries)
