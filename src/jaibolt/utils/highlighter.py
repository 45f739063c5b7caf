import re

from rich.text import Text

from ..parsing.objdump_filter import LineKind, classify_line

REGISTERS = re.compile(
    r"\b("
    r"r[abcd]x|r[sd]i|r[bs]p|r(?:8|9|1[0-5])[dwb]?|rip"
    r"|e[abcd]x|e[sd]i|e[bs]p"
    r"|[abcd][hl]|[abcd]x|[sd]il?|[bs]pl?"
    r"|xmm[0-9]+|ymm[0-9]+|zmm[0-9]+"
    r")\b",
    re.IGNORECASE,
)

SIZE_KEYWORDS = re.compile(
    r"\b(DWORD|QWORD|WORD|BYTE|XMMWORD|YMMWORD|PTR)\b",
)

NUMBERS = re.compile(
    r"\b(0x[0-9a-fA-F]+|[0-9]+)\b",
)

INSTRUCTIONS = re.compile(
    r"\b("
    r"movs?[xzbwdq]?|movabs|lea|add|sub|imul|idiv|mul|div|inc|dec|neg"
    r"|cmp|test|and|or|xor|not|shl|shr|sar|sal"
    r"|jmp|je|jne|jz|jnz|jg|jge|jl|jle|ja|jae|jb|jbe"
    r"|call|ret|push|pop|nop|int3?|syscall|leave|enter|endbr64"
    r"|cmov\w+|set\w{1,2}|cvt\w+|movs[sd]|adds[sd]|subs[sd]|muls[sd]|divs[sd]"
    r")\b",
    re.IGNORECASE,
)

# objdump instruction row: "  401130:\t55 48 89 e5 \tpush   rbp"
RE_ADDRESS = re.compile(r"^\s*([0-9a-fA-F]+):")
RE_RAW_BYTES = re.compile(r"\t((?:[0-9a-f]{2} )+)\s*\t?")
RE_SYMBOL_REF = re.compile(r"<[^>]+>")


def highlight_line(line: str) -> Text:
    """
    Style one objdump line according to its LineKind:
      - Labels (symbol headers, "main():") -> YELLOW / bold
      - Source locations ("/path/main.jai:12") -> DIM CYAN / italic
      - Instructions -> address dim, mnemonics blue, registers red,
        numbers cyan, symbol references yellow
    """
    kind = classify_line(line)
    text = Text(line)

    if kind is LineKind.LABEL:
        text.stylize("bold yellow")
        return text
    if kind is LineKind.TEXT:
        text.stylize("italic dim cyan")
        return text
    if kind is LineKind.EMPTY:
        return text

    operand_start = 0
    addr = RE_ADDRESS.match(line)
    if addr:
        text.stylize("dim cyan", addr.start(1), addr.end(1))
        operand_start = addr.end()
        raw = RE_RAW_BYTES.match(line, addr.end())
        if raw:
            text.stylize("dim", raw.start(1), raw.end(1))
            operand_start = raw.end()

    body = line[operand_start:]

    for m in INSTRUCTIONS.finditer(body):
        text.stylize("blue", operand_start + m.start(), operand_start + m.end())

    for m in SIZE_KEYWORDS.finditer(body):
        text.stylize("magenta", operand_start + m.start(), operand_start + m.end())

    for m in NUMBERS.finditer(body):
        text.stylize("cyan", operand_start + m.start(), operand_start + m.end())

    for m in REGISTERS.finditer(body):
        text.stylize("bold red", operand_start + m.start(), operand_start + m.end())

    # Symbol references win over anything inside them
    for m in RE_SYMBOL_REF.finditer(body):
        text.stylize("yellow", operand_start + m.start(), operand_start + m.end())

    return text


def highlight_disassembly(disasm: str) -> Text:
    """Highlight a whole (usually filtered) objdump listing."""
    result = Text()
    lines = disasm.split("\n") if disasm else []
    for i, line in enumerate(lines):
        result.append_text(highlight_line(line))
        if i < len(lines) - 1:
            result.append("\n")
    return result
