import sys
import os
import shlex
import argparse
from rich.console import Console
from . import __version__
from .compiler.driver import JaiCompilerDriver, is_jai_source
from .engine import BoltEngine
from .parsing import filter_objdump_output
from .ui.app import run_tui
from .utils.highlighter import highlight_disassembly
from .utils.log import setup_logging


def _build_parser() -> argparse.ArgumentParser:
    """Build and return the CLI argument parser."""
    parser = argparse.ArgumentParser(description="JaiBolt: Offline Jai Disassembly Explorer")
    parser.add_argument("file", nargs="?", help="Jai source file to watch (the target path with --dump)")
    parser.add_argument("--dump", metavar="PATH", help="Filter an existing `objdump -l -d` listing instead of compiling ('-' reads stdin)")
    parser.add_argument("--print", dest="print_only", action="store_true", help="Compile once, print the filtered disassembly and exit")
    parser.add_argument(
        "--flags", default="", metavar="ARGS",
        help="Extra arguments for the jai compiler. Attach values that start with a dash: --flags=-release, --flags=\"-release -x64\""
    )
    parser.add_argument("--version", action="store_true", help="Print the jaibolt and jai compiler versions and exit")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def _read_dump(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    with open(path, "r") as f:
        return f.read()


def run_dump(dump_path: str, target_path: str, console: Console) -> None:
    """Filter a saved objdump listing for target_path and print it."""
    try:
        raw = _read_dump(dump_path)
    except OSError as e:
        print(f"Error: Cannot read objdump listing: {e}")
        sys.exit(1)

    console.print(highlight_disassembly(filter_objdump_output(raw, target_path)), highlight=False)


def run_once(source_path: str, user_flags: list[str], console: Console) -> None:
    """Compile, disassemble and filter a single time, printing the result."""
    engine = BoltEngine(source_path)
    engine.user_flags = user_flags
    engine.refresh()
    state = engine.state

    if state.has_errors or not state.asm_content:
        print(state.compiler_output or "Error: No disassembly produced.", file=sys.stderr)
        sys.exit(1)

    console.print(highlight_disassembly(state.asm_content), highlight=False)


def print_versions() -> None:
    print(f"jaibolt {__version__}")
    driver = JaiCompilerDriver()
    compiler_version = driver.version()
    if compiler_version:
        print(compiler_version)
    else:
        print(f"Compiler '{driver.compiler}' not found.")


def run():
    parser = _build_parser()
    args = parser.parse_args()

    if args.version:
        print_versions()
        sys.exit(0)

    user_flags = shlex.split(args.flags)
    console = Console()

    if args.dump:
        setup_logging(to_file=False, verbose=args.verbose)
        if not args.file:
            print("Error: --dump needs the source path to keep.")
            print("Usage: jaibolt --dump objdump.txt <path/to/file.jai>")
            sys.exit(1)
        run_dump(args.dump, args.file, console)
        return

    if not args.file:
        print("Error: No source file specified.")
        print("Usage: jaibolt <filename.jai>")
        sys.exit(1)

    # Resolve to absolute path immediately; objdump reports absolute locations
    abs_path = os.path.abspath(args.file)

    if not os.path.exists(abs_path):
        print(f"Error: File not found: {abs_path}")
        sys.exit(1)

    if not is_jai_source(abs_path):
        print("Error: Unsupported file type. Use a .jai file")
        sys.exit(1)

    setup_logging(to_file=not args.print_only, verbose=args.verbose)

    try:
        if args.print_only:
            run_once(abs_path, user_flags, console)
        else:
            run_tui(abs_path, user_flags)
    except KeyboardInterrupt:
        pass
    except Exception as e:
        print(f"Fatal Error: {e}")
        sys.exit(1)

if __name__ == "__main__":
    run()
