import re
from dataclasses import dataclass
from typing import List

@dataclass
class Diagnostic:
    line: int
    column: int
    severity: str # 'error' or 'warning'
    message: str

# Jai reports `file:line,col: Error: msg`; some tools in the chain use `file:line:col:`.
RE_DIAGNOSTIC = re.compile(
    r"^.*:(\d+)[,:](\d+):\s+(error|warning):\s+(.*)$",
    re.MULTILINE | re.IGNORECASE,
)

def parse_diagnostics(stderr: str) -> List[Diagnostic]:
    """
    Parses Jai compiler output into structured objects.
    Example: /home/me/main.jai:10,5: Error: Undeclared identifier 'x'.
    """
    diagnostics = []

    for match in RE_DIAGNOSTIC.finditer(stderr):
        diagnostics.append(Diagnostic(
            line=int(match.group(1)),
            column=int(match.group(2)),
            severity=match.group(3).lower(),
            message=match.group(4).strip()
        ))

    return diagnostics
