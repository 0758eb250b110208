from __future__ import annotations

import argparse
import logging
from typing import List, Optional

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from .algorithms import ALGORITHM_INFO, ALGORITHMS
from .errors import MissingSegmentsError, SchedulerError
from .gantt import build_rich_gantt
from .models import ScheduleResult, SchedulerConfig
from .registry import ProcessRegistry
from .workload_io import load_workload

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="schedsim",
        description="CPU scheduling simulator (FCFS, SJF, SRTF, RR, Priority, Multilevel Queue).",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="count",
        default=0,
        help="Increase log output (-v for info, -vv for every scheduling decision).",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Run a scheduling algorithm on a workload file.")
    run_parser.add_argument(
        "--algorithm",
        "-a",
        required=True,
        choices=list(ALGORITHMS),
        help="Algorithm to use.",
    )
    _add_workload_options(run_parser)
    run_parser.add_argument(
        "--width",
        type=int,
        default=60,
        help="Width of the Gantt chart in characters (default: 60).",
    )

    compare_parser = subparsers.add_parser(
        "compare",
        help="Run multiple algorithms on the same workload and compare average metrics.",
    )
    compare_parser.add_argument(
        "--algorithms",
        "-a",
        nargs="+",
        choices=list(ALGORITHMS),
        default=list(ALGORITHMS),
        help="Algorithms to compare (default: all).",
    )
    _add_workload_options(compare_parser)

    subparsers.add_parser("algorithms", help="List the available algorithms.")

    return parser


def _add_workload_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--workload",
        "-w",
        default=None,
        help="Path to JSON or CSV workload file (default: built-in sample workload).",
    )
    parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=2,
        help="Time quantum for round robin (default: 2).",
    )
    parser.add_argument(
        "--allow-duplicates",
        action="store_true",
        help="Let the multilevel queue enqueue a waiting process more than once, as the reference simulator does.",
    )


def configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _load_registry(workload: Optional[str]) -> ProcessRegistry:
    registry = ProcessRegistry()
    if workload is None:
        registry.load_sample()
    else:
        for p in load_workload(workload):
            registry.add(p)
    return registry


def _print_result(result: ScheduleResult, console: Console, width: int = 60) -> None:
    console.print(f"[bold]Algorithm:[/bold] {result.algorithm}")
    if result.quantum is not None:
        console.print(f"[bold]Quantum:[/bold] {result.quantum}")

    console.print()

    panel, time_marks = build_rich_gantt(result.timeline, width=width)
    console.print(panel)
    if time_marks:
        console.print(time_marks, highlight=False)

    console.print()

    headers = [
        "PID",
        "Arrive",
        "Burst",
        "Priority",
        "Start",
        "Complete",
        "Turnaround",
        "Wait",
        "Response",
    ]

    proc_table = Table(title="Per-process metrics", box=box.SIMPLE_HEAVY)
    for h in headers:
        justify = "center" if h in {"PID", "Priority"} else "right"
        proc_table.add_column(h, justify=justify)

    for p in result.processes:
        proc_table.add_row(
            p.pid,
            str(p.arrival_time),
            str(p.burst_time),
            str(p.priority),
            str(p.start_time),
            str(p.completion_time),
            str(p.turnaround_time),
            str(p.waiting_time),
            str(p.response_time),
        )

    console.print(proc_table)
    console.print()

    sys = result.system
    sys_table = Table(title="System metrics", box=box.SIMPLE_HEAVY)
    sys_table.add_column("Metric")
    sys_table.add_column("Value", justify="right")

    sys_table.add_row("Avg turnaround", f"{sys.avg_turnaround:.2f}")
    sys_table.add_row("Avg waiting", f"{sys.avg_waiting:.2f}")
    sys_table.add_row("Avg response", f"{sys.avg_response:.2f}")
    sys_table.add_row("CPU utilization", f"{sys.cpu_utilization:.1f}%")
    sys_table.add_row("Throughput (proc/time)", f"{sys.throughput:.2f}")
    sys_table.add_row("Total time", str(sys.total_time))
    sys_table.add_row("Starvation count", str(sys.starvation_count))

    console.print(sys_table)


def _print_comparison(registry: ProcessRegistry, algorithms: List[str], config: SchedulerConfig, console: Console) -> None:
    summary_table = Table(title="Algorithm comparison", box=box.SIMPLE_HEAVY)
    summary_table.add_column("Algorithm")
    summary_table.add_column("Quantum", justify="right")
    summary_table.add_column("Avg turnaround", justify="right")
    summary_table.add_column("Avg waiting", justify="right")
    summary_table.add_column("Avg response", justify="right")
    summary_table.add_column("CPU util.", justify="right")
    summary_table.add_column("Throughput", justify="right")

    for alg in algorithms:
        result = registry.run(alg, config)
        sys = result.system
        summary_table.add_row(
            result.algorithm,
            "" if result.quantum is None else str(result.quantum),
            f"{sys.avg_turnaround:.2f}",
            f"{sys.avg_waiting:.2f}",
            f"{sys.avg_response:.2f}",
            f"{sys.cpu_utilization:.1f}%",
            f"{sys.throughput:.2f}",
        )

    console.print(summary_table)


def _print_algorithms(console: Console) -> None:
    table = Table(title="Algorithms", box=box.SIMPLE_HEAVY)
    table.add_column("Key")
    table.add_column("Name")
    table.add_column("Preemptive", justify="center")
    table.add_column("Description")
    for key, info in ALGORITHM_INFO.items():
        table.add_row(key, info.name, "yes" if info.preemptive else "no", info.description)
    console.print(table)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.verbose)
    console = Console()

    if args.command == "algorithms":
        _print_algorithms(console)
        return 0

    try:
        config = SchedulerConfig(quantum=args.quantum, strict_no_duplicate=not args.allow_duplicates)
        registry = _load_registry(args.workload)

        if args.command == "run":
            result = registry.run(args.algorithm, config)
            _print_result(result, console, width=args.width)
            return 0

        if args.command == "compare":
            _print_comparison(registry, args.algorithms, config, console)
            return 0
    except MissingSegmentsError:
        raise
    except (SchedulerError, ValueError, OSError) as exc:
        logger.debug("Command failed", exc_info=True)
        console.print(f"[red]Error: {escape(str(exc))}[/red]")
        return 2

    parser.error(f"Unknown command: {args.command}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
