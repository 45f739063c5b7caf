"""
Filters `objdump -l -d <exe>` output down to the instructions of one source file.

objdump produces a block for each function roughly matching the format:

    0000000000401130 <main>:
    main():
    /full/path/to/main.jai:12
      401130:	55                   	push   rbp
      401131:	48 89 e5             	mov    rbp,rsp

    /full/path/to/main.jai:13
      401134:	e8 c7 ff ff ff       	call   401100 <helper>

Only instructions whose code location names the target path are kept. All
labels are retained to give a summary of the executable's contents without
flooding the view with thousands of lines of linked runtime code.
"""
import logging
from enum import Enum
from typing import List

logger = logging.getLogger(__name__)


class LineKind(str, Enum):
    EMPTY = "empty"
    LABEL = "label"
    INSTRUCTION = "instruction"
    TEXT = "text"


def classify_line(line: str) -> LineKind:
    """
    Classify a single objdump line. Precedence: empty, trailing colon,
    two-space indent, everything else.
    """
    if not line:
        return LineKind.EMPTY
    if line.endswith(":"):
        return LineKind.LABEL
    if line.startswith("  "):
        return LineKind.INSTRUCTION
    return LineKind.TEXT


def filter_objdump_output(objdump_text: str, target_path: str) -> str:
    """
    Keep every label and blank line, plus each code-location block whose
    header contains `target_path`. Instructions outside a matching block are
    dropped. The result is always a subsequence of the input lines.
    """
    lines = objdump_text.split("\n")
    keep: List[str] = []

    i = 0
    while i < len(lines):
        line = lines[i]
        kind = classify_line(line)

        if kind is LineKind.EMPTY:
            keep.append(line)
        elif kind is LineKind.LABEL:
            if i >= len(lines) - 1:
                logger.warning("label on last line of objdump output is unexpected: %r", line)
            keep.append(line)
        elif kind is LineKind.TEXT and target_path in line:
            # Consume the block up to the next label or different code location.
            keep.append(line)
            i += 1

            # The final input line is never consumed here; the outer pass
            # classifies it on its own.
            while i < len(lines) - 1:
                next_line = lines[i]
                next_kind = classify_line(next_line)
                if next_kind is LineKind.LABEL or (
                    next_kind is LineKind.TEXT and next_line != line
                ):
                    break
                keep.append(next_line)
                i += 1
            continue

        i += 1

    return "\n".join(keep)
