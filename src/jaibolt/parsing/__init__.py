from .objdump_filter import LineKind, classify_line, filter_objdump_output
from .summary import DisasmSummary, summarize
from .diagnostics import parse_diagnostics, Diagnostic
from typing import Tuple

def process_disassembly(raw_disasm: str, source_path: str) -> Tuple[str, DisasmSummary]:
    """
    Pipeline: Whole-executable objdump -> User's source blocks only
    Returns: (filtered_disasm, summary_of_filtered)
    """
    filtered = filter_objdump_output(raw_disasm, source_path)
    return filtered, summarize(filtered)
