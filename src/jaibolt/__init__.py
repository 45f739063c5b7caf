__version__ = "0.1.0"

from .parsing import LineKind, classify_line, filter_objdump_output, process_disassembly

__all__ = ["LineKind", "classify_line", "filter_objdump_output", "process_disassembly"]
