from dataclasses import dataclass
from .objdump_filter import LineKind, classify_line


@dataclass
class DisasmSummary:
    total_lines: int = 0
    labels: int = 0
    instructions: int = 0
    source_locations: int = 0


def summarize(disasm: str) -> DisasmSummary:
    """Counts line kinds in an objdump listing (filtered or raw)."""
    summary = DisasmSummary()
    if not disasm:
        return summary

    for line in disasm.split("\n"):
        summary.total_lines += 1
        kind = classify_line(line)
        if kind is LineKind.LABEL:
            summary.labels += 1
        elif kind is LineKind.INSTRUCTION:
            summary.instructions += 1
        elif kind is LineKind.TEXT:
            summary.source_locations += 1

    return summary
