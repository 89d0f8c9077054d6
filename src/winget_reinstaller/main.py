import argparse, sys
from pathlib import Path
from .core.admin import is_admin, require_admin
from .core.console import Console
from .core.errors import ReinstallerError
from .core.process import Process, make_runner
from .data.paths import LOG_DIR
from .domain.config import ConfigStore
from .domain.models import FinalState
from .domain.reports import RunReport
from .services.apps import AppService
from .services.cleanup import make_cleaner
from .services.pipeline import PipelineExecutor
from .services.registry import RegistryReader
from .services.selector import Selector, sort_by_name

EXIT_OK = 0
EXIT_APP_FAILED = 1
EXIT_FATAL = 2
EXIT_CANCELLED = 130

def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="winget-reinstaller",
        description="Uninstall, clean up and reinstall selected winget packages.")
    p.add_argument("--id", dest="ids", action="append", metavar="ID", help="package id (repeatable)")
    p.add_argument("--name", dest="names", action="append", metavar="PATTERN", help="name or wildcard pattern (repeatable)")
    p.add_argument("--profile", type=str, help="use the ids saved under this profile")
    p.add_argument("--save-profile", type=str, help="save the selected ids under this profile")
    p.add_argument("--include-store", action="store_true", help="also offer msstore packages")
    p.add_argument("--pin-version", action="store_true", help="reinstall the currently installed version")
    p.add_argument("--dry-run", action="store_true", help="log the commands, change nothing")
    p.add_argument("--picker", choices=["tui", "console"])
    p.add_argument("--list", action="store_true", help="print the catalog and exit")
    p.add_argument("--yes", action="store_true", help="do not ask for confirmation")
    p.add_argument("--report", choices=["json", "txt"])
    p.add_argument("--out", type=str, help="write a run report here")
    p.add_argument("--log-dir", type=str)
    p.add_argument("--timeout", type=int, help="seconds before a winget call is killed")
    p.add_argument("--debug", action="store_true")
    return p

def _apply_defaults(args, defaults: dict):
    if not args.include_store and defaults.get("include_store"):
        args.include_store = True
    if not args.pin_version and defaults.get("pin_version"):
        args.pin_version = True
    if not args.yes and defaults.get("yes"):
        args.yes = True
    if not args.picker:
        args.picker = defaults.get("picker") or "tui"
    if not args.report:
        args.report = defaults.get("report") or "json"
    if not args.out:
        args.out = defaults.get("out")
    if not args.timeout:
        args.timeout = int(defaults.get("timeout_sec") or 0)

def _make_picker(kind: str, console: Console, prompt):
    if kind == "console":
        from .ui.selector import ConsolePicker
        return ConsolePicker(console, prompt=prompt)
    from .ui.tui import TextualPicker
    return TextualPicker(console)

def _print_catalog(console: Console, apps):
    console.header(f"Installed apps ({len(apps)})")
    console.plain(f"{'Name':40}  {'Id':34}  {'Version':>14}  {'Source':7}  Install location")
    for a in apps:
        console.plain(f"{a.name[:40]:40}  {a.identifier[:34]:34}  {(a.version or '')[:14]:>14}  {(a.source or '')[:7]:7}  {a.install_location or '-'}")

def _print_summary(console: Console, report: RunReport):
    console.header("Summary")
    if report.dry_run:
        console.info("Dry run: nothing was uninstalled, deleted or installed.")
    done = report.names_in(FinalState.REINSTALLED)
    if done:
        console.ok(f"Reinstalled: {', '.join(done)}")
    bad = report.names_in(FinalState.REINSTALL_FAILED)
    if bad:
        console.warn(f"Reinstall failed: {', '.join(bad)}")
    bad = report.names_in(FinalState.UNINSTALL_FAILED)
    if bad:
        console.warn(f"Uninstall failed: {', '.join(bad)}")
    for o in report.outcomes:
        if o.cleanup_error:
            console.warn(f"Cleanup issue ({o.app.name}): {o.cleanup_error}")

def _confirm(prompt, count: int) -> bool:
    try:
        ans = prompt(f"Uninstall and reinstall {count} app(s)? [y/N] ").strip().lower()
    except EOFError:
        ans = ""
    return ans in ("y", "yes")

def _run(args, console: Console, cfg: ConfigStore, registry, picker, prompt) -> int:
    defaults = cfg.get_defaults()
    winget = defaults.get("winget") or "winget"
    console.banner(is_admin(), args.dry_run)

    apps = AppService(console, Process(console, timeout_s=args.timeout),
                      registry or RegistryReader(console), winget=winget)
    apps.check_environment()
    if not (args.dry_run or args.list):
        require_admin(console)
    catalog = apps.load_catalog()
    selector = Selector(console, store_source=defaults.get("store_source") or "msstore")

    if args.list:
        _print_catalog(console, sort_by_name(selector.filter_store(catalog, args.include_store)))
        return EXIT_OK

    ids = list(args.ids or [])
    if args.profile:
        saved = cfg.get_profile(args.profile)
        if not saved:
            console.warn(f"No saved profile named '{args.profile}'.")
            console.warn("Nothing selected.")
            return EXIT_OK
        ids += saved

    selection = selector.resolve(
        catalog, ids=ids, names=args.names, include_store=args.include_store,
        picker=picker or _make_picker(args.picker, console, prompt))
    if not selection:
        console.warn("Nothing selected.")
        return EXIT_OK

    if args.save_profile:
        cfg.set_profile(args.save_profile, [a.identifier for a in selection])
        console.ok(f"Saved profile '{args.save_profile}' with {len(selection)} entries.")

    console.header(f"Selected ({len(selection)})")
    for a in selection:
        console.info(f"{a.label()}  {a.install_location or '(no install location)'}")

    if not args.dry_run and not args.yes and not _confirm(prompt, len(selection)):
        console.warn("Cancelled; nothing was changed.")
        return EXIT_CANCELLED

    report = RunReport(dry_run=args.dry_run, pin_version=args.pin_version)
    executor = PipelineExecutor(
        console,
        runner=make_runner(console, args.dry_run, timeout_s=args.timeout),
        cleaner=make_cleaner(console, args.dry_run),
        winget=winget,
        pin_version=args.pin_version,
        on_outcome=report.add,
    )
    executor.run(selection)
    report.mark_finished()
    _print_summary(console, report)

    if args.out:
        out_path = Path(args.out).expanduser()
        try:
            report.save(args.report, out_path)
            console.ok(f"Report written: {out_path}")
        except OSError as e:
            console.warn(f"Could not write report: {e}")
    return EXIT_APP_FAILED if report.any_failed else EXIT_OK

def run_cli(argv=None, cfg: ConfigStore | None = None, registry: RegistryReader | None = None,
            picker=None, prompt=input) -> int:
    args = _build_parser().parse_args(argv)
    console = Console(debug=args.debug)
    console.enable_windows_ansi_utf8()
    cfg = cfg or ConfigStore()
    _apply_defaults(args, cfg.get_defaults())

    log_dir = Path(args.log_dir).expanduser() if args.log_dir else LOG_DIR
    try:
        log_path = console.open_log(log_dir)
        console.debug(f"Logging to {log_path}")
    except OSError as e:
        console.warn(f"Could not open log file in {log_dir}: {e}")
    try:
        return _run(args, console, cfg, registry, picker, prompt)
    except ReinstallerError as e:
        console.err(str(e))
        return EXIT_FATAL
    finally:
        console.close()

def run() -> int:
    return run_cli(sys.argv[1:])

if __name__ == "__main__":
    sys.exit(run())
