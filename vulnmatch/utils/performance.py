"""Performance monitoring utilities for vulnmatch."""

import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional

from rich.console import Console
from rich.table import Table


@dataclass
class PerformanceMetrics:
    """Timing of one measured operation."""

    operation: str
    execution_time: float
    failed: bool = False


class PerformanceMonitor:
    """Records wall-clock timings of client operations."""

    def __init__(self, console: Optional[Console] = None) -> None:
        self.metrics: List[PerformanceMetrics] = []
        self.console = console or Console()

    @contextmanager
    def measure(self, name: str) -> Iterator[None]:
        """Context manager for measuring an operation.

        Args:
            name: Name of the operation being measured

        Yields:
            None
        """
        start_time = time.perf_counter()
        failed = False
        try:
            yield
        except BaseException:
            failed = True
            raise
        finally:
            self.metrics.append(PerformanceMetrics(
                operation=name,
                execution_time=time.perf_counter() - start_time,
                failed=failed,
            ))

    def get_summary(self) -> Dict[str, Any]:
        """Get performance summary.

        Returns:
            Totals plus per-operation call counts and times, or an empty
            dict if nothing was measured
        """
        if not self.metrics:
            return {}

        operations: Dict[str, Dict[str, Any]] = {}
        for metric in self.metrics:
            stats = operations.setdefault(
                metric.operation, {"calls": 0, "failures": 0, "total_time": 0.0}
            )
            stats["calls"] += 1
            stats["total_time"] += metric.execution_time
            if metric.failed:
                stats["failures"] += 1

        total_time = sum(m.execution_time for m in self.metrics)
        return {
            "total_executions": len(self.metrics),
            "total_time": total_time,
            "average_time": total_time / len(self.metrics),
            "operations": operations,
        }

    def print_summary(self) -> None:
        """Print performance summary to console."""
        summary = self.get_summary()
        if not summary:
            return

        table = Table(title="Performance Summary")
        table.add_column("Operation", style="cyan")
        table.add_column("Calls", style="green", justify="right")
        table.add_column("Failures", style="red", justify="right")
        table.add_column("Total Time", style="green", justify="right")

        for name, stats in sorted(summary["operations"].items()):
            table.add_row(
                name,
                str(stats["calls"]),
                str(stats["failures"]),
                f"{stats['total_time']:.4f}s",
            )

        self.console.print(table)

    def reset(self) -> None:
        self.metrics.clear()
