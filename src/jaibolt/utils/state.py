import time
from dataclasses import dataclass, field
from typing import List
from ..parsing.summary import DisasmSummary
from ..parsing.diagnostics import Diagnostic

@dataclass
class BoltState:
    """
    The single source of truth for the application's data.
    """
    source_path: str = ""
    source_code: str = ""
    source_lines: List[str] = field(default_factory=list)

    # Disassembly Data
    raw_disasm: str = ""
    asm_content: str = ""
    summary: DisasmSummary = field(default_factory=DisasmSummary)

    # Compiler Metadata & Errors
    compiler_output: str = ""
    user_flags: List[str] = field(default_factory=list)
    diagnostics: List[Diagnostic] = field(default_factory=list)
    last_update: float = 0.0

    @property
    def has_errors(self) -> bool:
        """Returns True if any diagnostic is marked as an error."""
        return any(d.severity == "error" for d in self.diagnostics)

    @property
    def hidden_lines(self) -> int:
        """Lines of linked code the filter removed from view."""
        if not self.raw_disasm:
            return 0
        return len(self.raw_disasm.split("\n")) - self.summary.total_lines

    def update_asm(self, asm: str, summary: DisasmSummary, raw: str = ""):
        self.asm_content = asm
        self.summary = summary
        self.raw_disasm = raw
        self.last_update = time.time()

    def clear_asm(self):
        """Drop the listing of a previous build, e.g. after a failed compile."""
        self.update_asm("", DisasmSummary(), "")
