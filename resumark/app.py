"""Entry point for launching the Resumark annotation editor."""
import argparse
import logging
import sys
from typing import List, Optional

from PyQt5.QtWidgets import QApplication, QFileDialog

from .config import load_config
from .ui import EditorWindow
from .utils.resource_loader import APP_NAME

log = logging.getLogger(__name__)


def setup_logging(debug: bool = False) -> None:
    """Send log records to the console, INFO by default."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )


def parse_args(argv: List[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="resumark",
                                     description="Annotate a PDF with text and highlights.")
    parser.add_argument("file", nargs="?", help="PDF file to open")
    parser.add_argument("--debug", action="store_true", help="enable debug logging")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Bootstrap the Qt application and block until it exits."""
    argv = list(sys.argv if argv is None else argv)
    args = parse_args(argv[1:])
    setup_logging(args.debug)

    app = QApplication(argv)
    app.setApplicationName(APP_NAME)

    file_path = args.file
    if not file_path:
        file_path, _ = QFileDialog.getOpenFileName(None, "Open PDF", "", "PDF Files (*.pdf)")
        if not file_path:
            log.info("No document chosen, exiting")
            return 0

    log.info("Opening %s", file_path)
    window = EditorWindow(file_path, config=load_config())
    window.showMaximized()
    return app.exec_()


if __name__ == '__main__':
    sys.exit(main())
