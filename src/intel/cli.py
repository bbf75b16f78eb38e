"""Command-line interface for the intel hub."""

import argparse
import asyncio
import logging
import sys
from datetime import date
from typing import List, Optional

from rich.console import Console
from rich.markdown import Markdown
from rich.table import Table

from src.core.config import settings
from src.core.database import init_db
from src.core.models import FindingStatus
from src.intel.discovery import run_discovery
from src.intel.models import Finding, Report
from src.intel.reports import generate_report
from src.intel.service import dashboard_summary, filter_findings, findings_to_csv
from src.intel.state import IntelState
from src.intel.storage import KeyValueStore

logger = logging.getLogger(__name__)

STATUS_STYLES = {
    FindingStatus.APPROVED: "green",
    FindingStatus.FLAGGED: "yellow",
    FindingStatus.DISMISSED: "dim",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m src.intel",
        description="Track competitors, run AI content discovery and generate monthly reports",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m src.intel competitors add "Acme Corp"
  python -m src.intel discover
  python -m src.intel findings list --status flagged
  python -m src.intel findings approve <finding-id>
  python -m src.intel report generate --month 2 --year 2026
  python -m src.intel serve --port 8000
        """
    )
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("dashboard", help="Show pipeline overview")

    competitors = sub.add_parser("competitors", help="Manage tracked competitors")
    comp_sub = competitors.add_subparsers(dest="action", required=True)
    comp_sub.add_parser("list", help="List competitors")
    add = comp_sub.add_parser("add", help="Add a competitor")
    add.add_argument("name")
    rename = comp_sub.add_parser("rename", help="Rename a competitor")
    rename.add_argument("id")
    rename.add_argument("name")
    remove = comp_sub.add_parser("remove", help="Remove a competitor (findings are kept)")
    remove.add_argument("id")

    sub.add_parser("discover", help="Run a discovery cycle over all competitors")

    findings = sub.add_parser("findings", help="Review findings")
    find_sub = findings.add_subparsers(dest="action", required=True)
    listing = find_sub.add_parser("list", help="List findings")
    listing.add_argument("--competitor", help="Exact competitor name")
    listing.add_argument("--site-type", help="Exact site type")
    listing.add_argument("--status", choices=[s.value for s in FindingStatus])
    for action in ("approve", "dismiss"):
        review = find_sub.add_parser(action, help=f"{action.capitalize()} a flagged finding")
        review.add_argument("id")
    export = find_sub.add_parser("export", help="Write findings as CSV")
    export.add_argument("--output", default="-", help="File path, or - for stdout (default: -)")

    report = sub.add_parser("report", help="Monthly reports")
    rep_sub = report.add_subparsers(dest="action", required=True)
    today = date.today()
    gen = rep_sub.add_parser("generate", help="Generate a report from approved findings")
    gen.add_argument("--month", type=int, choices=range(1, 13), default=today.month)
    gen.add_argument("--year", type=int, default=today.year)
    rep_sub.add_parser("list", help="List reports")
    show = rep_sub.add_parser("show", help="Print a report")
    show.add_argument("id")

    serve = sub.add_parser("serve", help="Run the API server")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=8000)

    return parser


# --- Rendering ---

def print_dashboard(console: Console, state: IntelState) -> None:
    stats = dashboard_summary(state)
    console.print("\n[bold]COMPETITOR INTEL DASHBOARD[/bold]")
    if stats["sample_mode"]:
        console.print("[magenta]Sample data mode[/magenta]")
    console.print(f"Competitors tracked: {stats['total_competitors']}"
                  + (f" (latest: {stats['latest_competitor']})" if stats["latest_competitor"] else ""))
    console.print(f"Findings: {stats['total_findings']} ([yellow]{stats['flagged_count']} flagged[/yellow])")
    console.print(f"Reports: {stats['total_reports']}"
                  + (f" (last: {stats['latest_report_period']})" if stats["latest_report_period"] else ""))

    last_run = stats["last_discovery_run"]
    if last_run:
        console.print(f"Last discovery: {last_run['date']} - {last_run['totalFindings']} findings, "
                      f"{last_run['flaggedCount']} flagged")
    if stats["latest_xlsx_url"]:
        console.print(f"Latest export: {stats['latest_xlsx_url']}")

    console.print("\n[bold]Active agents[/bold]")
    for agent in stats["agents"]:
        console.print(f"  [green]●[/green] {agent['name']} - {agent['purpose']}")


def print_competitors(console: Console, state: IntelState) -> None:
    if not state.competitors:
        console.print("[yellow]No competitors yet. Add one with 'competitors add NAME'.[/yellow]")
        return
    table = Table(title="Competitors")
    table.add_column("ID", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Added")
    for c in state.competitors:
        table.add_row(c.id, c.name, c.date_added)
    console.print(table)


def print_findings(console: Console, findings: List[Finding]) -> None:
    if not findings:
        console.print("[yellow]No findings match.[/yellow]")
        return
    table = Table(title=f"Findings ({len(findings)})")
    table.add_column("ID", style="dim")
    table.add_column("Competitor", style="cyan")
    table.add_column("Title")
    table.add_column("Site")
    table.add_column("Engagement")
    table.add_column("Source")
    table.add_column("Conf.", justify="right")
    table.add_column("Status")
    for f in findings:
        style = STATUS_STYLES.get(f.status, "")
        table.add_row(
            f.id, f.competitor, f.title, f.site_type, f.engagement_type, f.owned_earned,
            f"{f.confidence_score}%", f"[{style}]{f.status.value}[/{style}]",
        )
    console.print(table)


def print_reports(console: Console, reports: List[Report]) -> None:
    if not reports:
        console.print("[yellow]No reports yet.[/yellow]")
        return
    table = Table(title="Reports")
    table.add_column("ID", style="dim")
    table.add_column("Title", style="cyan")
    table.add_column("Period")
    table.add_column("Findings", justify="right")
    table.add_column("Competitors", justify="right")
    table.add_column("PDF")
    for r in reports:
        table.add_row(r.id, r.report_title, r.report_period, str(r.total_findings),
                      str(r.competitors_covered), r.pdf_url or "-")
    console.print(table)


def print_report(console: Console, report: Report) -> None:
    console.print(f"\n[bold]{report.report_title}[/bold]")
    console.print(f"Period: {report.report_period}  |  Findings: {report.total_findings}  |  "
                  f"Competitors: {report.competitors_covered}  |  Generated: {report.generated_at}")
    if report.pdf_url:
        console.print(f"PDF: {report.pdf_url}")
    for heading, attr in Report.SECTIONS:
        text = getattr(report, attr)
        if text:
            console.rule(heading)
            console.print(Markdown(text))


# --- Commands ---

async def run_command(args: argparse.Namespace, state: IntelState, console: Console, gateway=None) -> int:
    """Execute one parsed command against a loaded state. Returns an exit code."""
    if args.command == "dashboard":
        print_dashboard(console, state)

    elif args.command == "competitors":
        if args.action == "list":
            print_competitors(console, state)
        elif args.action == "add":
            competitor = state.add_competitor(args.name)
            console.print(f"[green]Added {competitor.name} ({competitor.id})[/green]")
        elif args.action == "rename":
            if state.edit_competitor(args.id, args.name) is None:
                console.print(f"[red]No competitor with id {args.id}[/red]")
                return 1
            console.print(f"[green]Renamed to {args.name}[/green]")
        elif args.action == "remove":
            if not state.delete_competitor(args.id):
                console.print(f"[red]No competitor with id {args.id}[/red]")
                return 1
            console.print("[green]Competitor removed[/green]")

    elif args.command == "discover":
        if not state.competitors:
            console.print("[yellow]Add competitors before running discovery.[/yellow]")
            return 1
        console.print(f"[blue]Running discovery for {len(state.competitors)} competitors...[/blue]")
        known = len(state.findings)
        run = await run_discovery(state, gateway)
        colour = "red" if run is None else "green"
        console.print(f"[{colour}]{state.discovery_status}[/{colour}]")
        if run is None:
            return 1
        print_findings(console, state.findings[:len(state.findings) - known])

    elif args.command == "findings":
        if args.action == "list":
            print_findings(console, filter_findings(
                state.findings, competitor=args.competitor, site_type=args.site_type, status=args.status
            ))
        elif args.action in ("approve", "dismiss"):
            status = FindingStatus.APPROVED if args.action == "approve" else FindingStatus.DISMISSED
            finding = state.update_finding_status(args.id, status)
            if finding is None:
                console.print(f"[red]No finding with id {args.id}[/red]")
                return 1
            console.print(f"[green]{finding.title}: {finding.status.value}[/green]")
        elif args.action == "export":
            csv_text = findings_to_csv(state.findings)
            if args.output == "-":
                sys.stdout.write(csv_text)
            else:
                with open(args.output, "w", encoding="utf-8", newline="") as fh:
                    fh.write(csv_text)
                console.print(f"[green]Wrote {len(state.findings)} findings to {args.output}[/green]")

    elif args.command == "report":
        if args.action == "generate":
            if not state.approved_findings():
                console.print("[yellow]Approve at least one finding before generating a report.[/yellow]")
                return 1
            console.print("[blue]Generating monthly report...[/blue]")
            report = await generate_report(state, args.month, args.year, gateway)
            colour = "red" if report is None else "green"
            console.print(f"[{colour}]{state.report_status}[/{colour}]")
            if report is None:
                return 1
            print_report(console, report)
        elif args.action == "list":
            print_reports(console, state.reports)
        elif args.action == "show":
            report = state.get_report(args.id)
            if report is None:
                console.print(f"[red]No report with id {args.id}[/red]")
                return 1
            print_report(console, report)

    return 0


async def _main(args: argparse.Namespace) -> int:
    console = Console()
    await init_db()
    state = IntelState(store=KeyValueStore())
    await state.load()
    try:
        return await run_command(args, state, console)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        return 1
    finally:
        await state.flush()


def main(argv: Optional[List[str]] = None) -> int:
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    args = build_parser().parse_args(argv)

    if args.command == "serve":
        import uvicorn
        uvicorn.run("src.web.app:app", host=args.host, port=args.port)
        return 0

    try:
        return asyncio.run(_main(args))
    except KeyboardInterrupt:
        print("\n\nCancelled.")
        return 1
