from typing import List
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Header, Footer, DataTable, Static, Input
from ..domain.models import AppRecord

class PickerApp(App[List[AppRecord]]):
    CSS = """
    #title {content-align: center middle; padding: 1 0}
    #filter {margin: 0 1}
    #apps {height: 1fr; width: 100%}
    #status {padding: 0 1}
    """
    AUTO_FOCUS = "#apps"
    BINDINGS = [
        Binding("space", "toggle", "Toggle"),
        Binding("a", "select_all", "All"),
        Binding("n", "select_none", "None"),
        Binding("slash", "focus_filter", "Filter"),
        Binding("g", "confirm", "Reinstall selected"),
        Binding("q", "cancel", "Quit"),
    ]

    def __init__(self, apps: List[AppRecord]):
        super().__init__()
        self.apps = list(apps)
        self.view: List[AppRecord] = list(apps)
        self.selected_ids: set[str] = set()

    def compose(self) -> ComposeResult:
        yield Header()
        yield Static("Winget Reinstaller — pick apps to reinstall", id="title")
        yield Input(placeholder="Filter by name or id, Enter to apply", id="filter")
        self.table = DataTable(id="apps", cursor_type="row")
        self.table.add_columns("Sel", "Name", "Id", "Version", "Source")
        yield self.table
        yield Static("", id="status")
        yield Footer()

    def on_mount(self):
        self.rebuild_table()

    def set_status(self, text: str):
        self.query_one("#status", Static).update(text)

    def rebuild_table(self):
        row = self.table.cursor_row or 0
        self.table.clear()
        for a in self.view:
            sel = "✔" if a.identifier in self.selected_ids else ""
            self.table.add_row(sel, a.name, a.identifier, a.version, a.source)
        if self.view:
            self.table.move_cursor(row=min(row, len(self.view) - 1))
        self.set_status(f"{len(self.selected_ids)} selected · {len(self.view)}/{len(self.apps)} shown")

    def action_toggle(self):
        if not self.view:
            return
        pid = self.view[self.table.cursor_row or 0].identifier
        if pid in self.selected_ids:
            self.selected_ids.remove(pid)
        else:
            self.selected_ids.add(pid)
        self.rebuild_table()

    def on_data_table_row_selected(self, event: DataTable.RowSelected):
        self.action_toggle()

    def action_select_all(self):
        self.selected_ids |= {a.identifier for a in self.view}
        self.rebuild_table()

    def action_select_none(self):
        self.selected_ids.clear()
        self.rebuild_table()

    def action_focus_filter(self):
        self.query_one("#filter", Input).focus()

    def on_input_submitted(self, event: Input.Submitted):
        term = event.value.strip().lower()
        if term:
            self.view = [a for a in self.apps if term in a.name.lower() or term in a.identifier.lower()]
        else:
            self.view = list(self.apps)
        self.rebuild_table()
        self.table.focus()

    def action_confirm(self):
        if not self.selected_ids:
            self.set_status("Nothing selected yet.")
            return
        self.exit([a for a in self.apps if a.identifier in self.selected_ids])

    def action_cancel(self):
        self.exit([])

class TextualPicker:
    def __init__(self, console):
        self.console = console

    def __call__(self, apps: List[AppRecord]) -> List[AppRecord]:
        if not apps:
            self.console.warn("No entries to pick from.")
            return []
        result = PickerApp(apps).run()
        return list(result or [])
