from ..core.console import Console, ORANGE1, ORANGE2, BOLD, RESET, GREEN, GRAY, WHITE

class ConsolePicker:
    """Line-oriented multi-pick over the catalog; returns the picked AppRecords."""

    def __init__(self, console: Console, prompt=input):
        self.console = console
        self.prompt = prompt

    def print_table(self, apps, selected=None, title="Installed apps (winget)"):
        selected = selected or set()
        self.console.header(title)
        if not apps:
            self.console.warn("No entries found.")
            return
        w = len(str(len(apps)))
        self.console.plain(f"{ORANGE1}{BOLD}{'#'.rjust(w)}  {'Sel':3}  {'Name':40}  {'Id':34}  {'Version':>14}  {'Src':7}{RESET}")
        for i, a in enumerate(apps, 1):
            sel = "✔" if a.identifier in selected else " "
            name = a.name[:40].ljust(40)
            pid = a.identifier[:34].ljust(34)
            ver = (a.version or "")[:14].rjust(14)
            src = (a.source or "")[:7].ljust(7)
            color = GREEN if sel == "✔" else GRAY
            self.console.plain(f"{str(i).rjust(w)}   {color}{sel:3}{RESET}  {WHITE}{name}{RESET}  {GRAY}{pid}{RESET}  {ver}  {src}")

    def __call__(self, apps):
        return self.loop(apps)

    def loop(self, apps):
        selected = set()
        view = list(apps)
        self.print_table(view, selected)
        while True:
            self.console.plain("")
            self.console.plain(f"{ORANGE1}{BOLD}Commands{RESET}: numbers (e.g. 1,3,5) | all | none | filter <text> | clear | list | go | quit")
            cmd = self.prompt(f"{ORANGE2}{BOLD}Select → {RESET}").strip()

            if not cmd: continue
            if cmd in ("quit", "back"): return []
            if cmd == "go":
                if not selected:
                    self.console.warn("No packages selected."); continue
                return [a for a in apps if a.identifier in selected]
            if cmd == "all":
                selected |= {a.identifier for a in view}
                self.console.ok(f"Selected {len(selected)} package(s)."); continue
            if cmd == "none":
                selected.clear(); self.console.ok("Cleared selection."); continue
            if cmd == "list":
                self.print_table(view, selected); continue
            if cmd == "clear":
                view = list(apps)
                self.print_table(view, selected); continue
            if cmd.startswith("filter "):
                q = cmd[7:].strip().lower()
                view = [a for a in apps if q in a.name.lower() or q in a.identifier.lower()]
                self.print_table(view, selected, title=f"Filtered: '{q}'"); continue
            parts = [x.strip() for x in cmd.split(",") if x.strip()]
            if not parts or not all(p.isdigit() for p in parts):
                self.console.warn("Unknown command. Try: 1,3,5 | all | none | filter vscode | go")
                continue
            changed = 0
            for i in (int(p) for p in parts):
                if 1 <= i <= len(view):
                    pid = view[i-1].identifier
                    if pid in selected: selected.remove(pid)
                    else: selected.add(pid)
                    changed += 1
            self.console.ok(f"Toggled {changed} package(s).")
