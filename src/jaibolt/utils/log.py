import logging

from rich.console import Console
from rich.logging import RichHandler

LOG_FILE = "/tmp/jaibolt.log"
LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"


def setup_logging(to_file: bool, verbose: bool = False) -> None:
    """
    The TUI owns the terminal, so it logs to LOG_FILE. One-shot modes log
    warnings (or everything with --verbose) to stderr through rich.
    """
    if to_file:
        handler: logging.Handler = logging.FileHandler(LOG_FILE)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        level = logging.DEBUG if verbose else logging.INFO
    else:
        handler = RichHandler(console=Console(stderr=True), show_path=False)
        level = logging.DEBUG if verbose else logging.WARNING

    logging.basicConfig(level=level, handlers=[handler], force=True)
