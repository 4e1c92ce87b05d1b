"""Terminal application and ``jv`` command line entry point."""

from __future__ import annotations

import argparse
import logging
import sys

from textual.app import App, ComposeResult
from textual.containers import Horizontal, Vertical
from textual.widgets import Button, Static

from jv._ascii_line import AsciiLine
from jv.document import Document, DocumentError, load_document
from jv.widget import JsonViewer

logger = logging.getLogger(__name__)

HELP_TEXT = """\
Navigation
    h / Left        move left
    l / Right       move right
    k / Up          move up
    j / Down        move down
    0 / Home        start of line
    $ / End         end of line
    PgUp / Ctrl+b   page up
    PgDn / Ctrl+f   page down

Goto
    :12             line 12
    :12:5           line 12, column 5
    ::5             column 5 of the current line

Query
    #/              the document root
    #/key/0/name    jump to the value at that path

Other
    ?               toggle this help
    q               quit
"""


def help_lines() -> list[AsciiLine]:
    return [AsciiLine(line) for line in HELP_TEXT.splitlines()]


class JsonViewerApp(App):
    """TUI app that wraps the JsonViewer widget."""

    CSS = """
    Screen {
        layout: vertical;
    }
    #viewer {
        height: 1fr;
    }
    #help-panel {
        display: none;
        height: 1fr;
        border-top: solid $accent;
    }
    #help-panel.visible {
        display: block;
    }
    #help-header {
        height: 1;
    }
    #help-title {
        width: 1fr;
    }
    #help-close {
        min-width: 5;
        height: 1;
        border: none;
    }
    """

    TITLE = "jv"
    BINDINGS = []
    ENABLE_COMMAND_PALETTE = False

    def __init__(self, document: Document, file_path: str = "", **kwargs) -> None:
        super().__init__(**kwargs)
        self.document = document
        self.file_path = file_path

    def compose(self) -> ComposeResult:
        yield JsonViewer(self.document.lines, self.document.index, id="viewer")
        with Vertical(id="help-panel"):
            with Horizontal(id="help-header"):
                yield Static("[b]Help[/b]", id="help-title")
                yield Button("✕", id="help-close", variant="error")
            yield JsonViewer(help_lines(), id="help-viewer")

    def on_mount(self) -> None:
        self.sub_title = self.file_path
        self.query_one("#viewer").focus()

    # -- Event handlers ----------------------------------------------------

    def _is_help_viewer_focused(self) -> bool:
        focused = self.focused
        return focused is not None and focused.id == "help-viewer"

    def _close_help(self) -> None:
        self.query_one("#help-panel").remove_class("visible")
        self.query_one("#viewer").focus()

    def on_json_viewer_quit(self, event: JsonViewer.Quit) -> None:
        if self._is_help_viewer_focused():
            self._close_help()
        else:
            self.exit()

    def on_json_viewer_help_toggle_requested(self) -> None:
        help_panel = self.query_one("#help-panel")
        help_panel.toggle_class("visible")
        if help_panel.has_class("visible"):
            self.query_one("#help-viewer").focus()
        else:
            self.query_one("#viewer").focus()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "help-close":
            self._close_help()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jv",
        description="Read-only terminal viewer for JSON and ASCII text",
    )
    parser.add_argument("file", help="file to view; names ending in 'json' are parsed as JSON")
    parser.add_argument(
        "--text",
        action="store_true",
        default=False,
        help="show the file as plain text even if it looks like JSON",
    )
    parser.add_argument(
        "--log-file",
        default="",
        help="write debug logs to this file",
    )
    return parser


def configure_logging(log_file: str) -> None:
    if log_file:
        logging.basicConfig(
            filename=log_file,
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
    else:
        # the terminal belongs to the app; stay quiet
        logging.getLogger("jv").addHandler(logging.NullHandler())
        logging.getLogger("jv").propagate = False


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_file)

    try:
        document = load_document(args.file, force_text=args.text)
    except DocumentError as exc:
        print(f"jv: {exc}", file=sys.stderr)
        sys.exit(1)

    app = JsonViewerApp(document, file_path=args.file)
    app.run()


if __name__ == "__main__":
    main()
