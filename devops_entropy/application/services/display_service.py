"""
Display Service

Terminal output for simulation summaries, tick runs and defect reports.
"""

from __future__ import annotations
from typing import Any, Dict, List, Tuple

from devops_entropy.domain.models import (
    ArchitectureType,
    HealthBand,
    SystemGraph,
    SystemSummary,
    TickResult,
)


class Colors:
    """ANSI color codes for terminal output."""
    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    BLUE = "\033[94m"
    CYAN = "\033[96m"
    WHITE = "\033[97m"
    GRAY = "\033[90m"
    BOLD = "\033[1m"
    RESET = "\033[0m"


class DisplayService:
    """
    Service for formatting and displaying simulation results in the terminal.
    """
    Colors = Colors

    @staticmethod
    def colored(text: str, color: str, bold: bool = False) -> str:
        """Apply color to text."""
        style = Colors.BOLD if bold else ""
        return f"{style}{color}{text}{Colors.RESET}"

    @staticmethod
    def band_color(band: HealthBand) -> str:
        return {
            HealthBand.GOOD: Colors.GREEN,
            HealthBand.WARNING: Colors.YELLOW,
            HealthBand.CRITICAL: Colors.RED,
        }.get(band, Colors.RESET)

    def print_header(self, title: str, char: str = "=", width: int = 78) -> None:
        """Print a formatted header."""
        print(f"\n{self.colored(char * width, Colors.CYAN)}")
        print(f"{self.colored(f' {title} '.center(width), Colors.CYAN, bold=True)}")
        print(f"{self.colored(char * width, Colors.CYAN)}")

    def print_subheader(self, title: str, char: str = "-", width: int = 78) -> None:
        """Print a formatted subheader."""
        print(f"\n{self.colored(f' {title} ', Colors.WHITE, bold=True)}")
        print(f"{self.colored(char * width, Colors.GRAY)}")

    # --- Simulation Display ---

    def display_summary(self, summary: SystemSummary) -> None:
        """Display resources, overview and per-component status."""
        self.print_header(f"System Status: {summary.architecture}")

        self.print_subheader("Resources")
        print(f"  {'Money:':<20} {self.colored(f'${summary.money:,.2f}', Colors.GREEN)}")
        print(f"  {'Sprint:':<20} {summary.sprint}")
        print(f"  {'Reputation:':<20} {self.colored(f'{summary.reputation:.1f}%', Colors.YELLOW)}")
        print(f"  {'Phase:':<20} {summary.phase}")

        self.print_subheader("System Overview")
        print(f"  {'Components:':<20} {summary.components}")
        print(f"  {'Dependencies:':<20} {summary.dependencies}")
        print(f"  {'Avg Tech Debt:':<20} {summary.average_tech_debt:.1f}%")
        print(f"  {'Total Complexity:':<20} {summary.total_complexity}")

        self.print_subheader("System Components")
        print(f"\n  {'Component':<22} {'Type':<12} {'Health':<10} {'Tech Debt':<11} {'Cplx':<6} {'Critical':<8}")
        print(f"  {'-' * 72}")
        for n in summary.nodes:
            health = self.colored(f"{n.health:<10.1f}", self.band_color(n.health_band))
            debt = self.colored(f"{n.tech_debt:<11.1f}", self.band_color(n.debt_band))
            critical = self.colored("yes", Colors.RED, bold=True) if n.critical_path else "no"
            print(f"  {n.name:<22} {n.node_type:<12} {health} {debt} {n.complexity:<6} {critical}")

        if summary.unhealthy_critical:
            names = ", ".join(summary.unhealthy_critical)
            print(f"\n  {self.colored('Critical path at risk:', Colors.RED, bold=True)} {names}")

        self.display_defects(summary.defects)

    def display_tick_results(self, results: List[TickResult]) -> None:
        """Display aggregate effects of a run of ticks."""
        self.print_subheader(f"Simulation Run ({len(results)} ticks)")
        ran = [r for r in results if not r.skipped]
        print(f"  {'Ticks Applied:':<20} {len(ran)}")
        print(f"  {'Elapsed:':<20} {sum(r.delta for r in ran):.2f}s")
        print(f"  {'Money Spent:':<20} ${sum(r.money_spent for r in ran):,.2f}")
        lost = sum(r.reputation_lost for r in ran)
        color = Colors.RED if lost > 0 else Colors.GRAY
        print(f"  {'Reputation Lost:':<20} {self.colored(f'{lost:.2f}', color)}")
        print(f"  {'Debt Spread:':<20} {sum(r.debt_spread for r in ran):.2f}")

    def display_defects(self, defects: List[Tuple[str, int]]) -> None:
        self.print_subheader("Defects")
        if not defects:
            print(f"  {self.colored('No defects this tick', Colors.GREEN)}")
            return
        for name, count in sorted(defects, key=lambda d: d[1], reverse=True):
            print(f"  {name:<22} {self.colored(str(count), Colors.RED)}")

    def display_sprint_report(self, report: Dict[str, Any]) -> None:
        self.print_subheader(f"Sprint {report['sprint']} Review")
        print(f"  {'Avg Tech Debt:':<20} "
              f"{report['average_tech_debt_before']:.1f}% -> {report['average_tech_debt_after']:.1f}%")
        self.display_defects(list(report["defects"].items()))

    def display_architecture(self, arch_type: ArchitectureType, graph: SystemGraph) -> None:
        """Display an archetype's topology."""
        self.print_subheader(f"{arch_type.display_name} ({arch_type.value})")
        for node in graph.nodes():
            print(f"  {node.name:<22} {node.node_type:<12} debt={node.tech_debt:<6.1f} "
                  f"cost={node.operating_cost:<8.1f} {', '.join(node.attributes)}")
        for source, target, edge in graph.edges():
            print(f"  {self.colored(f'{source.name} -> {target.name}', Colors.BLUE)} "
                  f"[{edge.name}] spread={edge.tech_debt_spread} reliability={edge.reliability}")
