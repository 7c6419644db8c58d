from __future__ import annotations

from typing import List, Optional

from rich.markup import escape
from textual.app import App, ComposeResult
from textual.widgets import DataTable, Footer, Header, Static, TabbedContent, TabPane

from .arch import format_cmd
from .models import Buckets, InstallStep
from .modals import ConfirmModal

# (pane id, title, Buckets attribute)
BUCKET_TABS = [
    ("tab_repo", "Repo", "repo_install"),
    ("tab_aur", "AUR", "aur_install"),
    ("tab_installed", "Installed", "installed"),
    ("tab_missing", "Missing", "unresolved"),
]

class ReviewApp(App[bool]):
    """
    Shows the classification result and the planned installer commands.
    Exits with True when the user confirms, False otherwise.
    """

    CSS = """
    Screen { background: $background; }
    #statusbar { height: auto; border: round $primary; background: $boost; padding: 0 2; margin: 0 1 1 1; }
    .infobox { border: round $primary; background: $boost; padding: 1 2; margin: 0 1 1 1; }
    DataTable { height: 1fr; border: round $surface; background: $panel; margin: 0 1 1 1; }
    #modal { width: 92%; max-width: 170; padding: 1 2; border: round $primary; background: $panel; }
    """

    BINDINGS = [
        ("ctrl+c", "abort", "Quit"),
        ("q", "abort", "Quit"),
        ("i", "apply", "Install"),
    ]

    def __init__(self, buckets: Buckets, steps: List[InstallStep], dry_run: bool = False):
        super().__init__()
        self.buckets = buckets
        self.steps = steps
        self.dry_run = dry_run

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        yield Static(self.status_text(), id="statusbar")
        with TabbedContent(id="tabs"):
            with TabPane("Plan", id="tab_plan"):
                yield Static(self.plan_text(), id="plan_out", classes="infobox")
            for pane_id, title, attr in BUCKET_TABS:
                with TabPane(f"{title} ({len(getattr(self.buckets, attr))})", id=pane_id):
                    yield DataTable(id=f"{pane_id}_tbl")
        yield Footer()

    def on_mount(self) -> None:
        for pane_id, _, attr in BUCKET_TABS:
            tbl = self.query_one(f"#{pane_id}_tbl", DataTable)
            tbl.cursor_type = "row"
            tbl.add_columns("#", "Package")
            for i, name in enumerate(getattr(self.buckets, attr), 1):
                tbl.add_row(str(i), name, key=name)

    def status_text(self) -> str:
        b = self.buckets
        mode = "  [b]DRY-RUN[/b]" if self.dry_run else ""
        return (
            f"installed={len(b.installed)}   repo={len(b.repo_install)}   "
            f"aur={len(b.aur_install)}   missing={len(b.unresolved)}{mode}"
        )

    def plan_text(self) -> str:
        if not self.steps:
            return "Nothing to install."
        lines = ["[b]Planned commands[/b]", ""]
        lines += ["  " + escape(format_cmd(st.argv)) for st in self.steps]
        lines += ["", "[dim]i Install · q Quit[/dim]"]
        return "\n".join(lines)

    def action_abort(self) -> None:
        self.exit(False)

    def action_apply(self) -> None:
        n = sum(len(st.packages) for st in self.steps)
        verb = "Print" if self.dry_run else "Run"
        body = f"{verb} {len(self.steps)} installer command(s) for {n} package(s)?"
        self.push_screen(ConfirmModal("Install", body), callback=self._confirmed)

    def _confirmed(self, ok: Optional[bool]) -> None:
        if ok:
            self.exit(True)
