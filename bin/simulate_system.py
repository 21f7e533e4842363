#!/usr/bin/env python3
"""
System Simulation CLI

Runs the architecture graph simulation headless: ticks of health decay,
operating cost and debt spread, discrete contagion steps between sprints,
and defect reports.

Usage Examples:
    # Run 20 one-second ticks on the monolith
    python simulate_system.py run --arch monolith --ticks 20 --delta 1.0

    # Apply three discrete contagion steps to the microservices archetype
    python simulate_system.py spread --arch microservices --steps 3

    # Defects after two sprints of contagion
    python simulate_system.py defects --arch event-driven --spread-steps 2 --json

    # List the archetypes
    python simulate_system.py archetypes
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import argparse
import json
import logging

from devops_entropy.application.services import DisplayService, SimulationService
from devops_entropy.config import Settings
from devops_entropy.domain.models import ArchitectureType
from devops_entropy.domain.services import create_architecture, list_architectures


ARCH_HELP = {a.value: a.display_name for a in ArchitectureType}


# =============================================================================
# Argument Parsing
# =============================================================================

def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser with subcommands."""
    common_parser = argparse.ArgumentParser(add_help=False)

    sim_group = common_parser.add_argument_group("Simulation")
    sim_group.add_argument("--arch", "-a", default=None, help="Architecture archetype")
    sim_group.add_argument("--seed", type=int, default=None, help="Random seed for distribution sampling")
    sim_group.add_argument("--money", type=float, default=None, help="Starting money")
    sim_group.add_argument("--reputation", type=float, default=None, help="Starting reputation (0-100)")

    output_group = common_parser.add_argument_group("Output")
    output_group.add_argument("--output", "-o", metavar="FILE", help="Export results to JSON")
    output_group.add_argument("--json", action="store_true", help="Print JSON to stdout")
    output_group.add_argument("--quiet", "-q", action="store_true", help="Minimal output")
    output_group.add_argument("--verbose", "-v", action="store_true", help="Debug logging")

    parser = argparse.ArgumentParser(
        prog="simulate_system.py",
        description="Technical debt contagion simulation for architecture graphs.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="\n".join(f"  {k:<14} {v}" for k, v in ARCH_HELP.items()),
    )

    subs = parser.add_subparsers(dest="command", help="Simulation command")

    # run
    rn = subs.add_parser("run", help="Run continuous ticks", parents=[common_parser])
    rn.add_argument("--ticks", "-t", type=int, default=10, help="Number of ticks")
    rn.add_argument("--delta", "-d", type=float, default=None, help="Seconds per tick")
    rn.add_argument("--sprints", type=int, default=0, help="Close N sprints after the ticks")

    # spread
    sp = subs.add_parser("spread", help="Apply discrete tech debt contagion", parents=[common_parser])
    sp.add_argument("--steps", "-s", type=int, default=1, help="Number of contagion steps")

    # defects
    df = subs.add_parser("defects", help="Report defects for the current state", parents=[common_parser])
    df.add_argument("--spread-steps", type=int, default=0, help="Contagion steps to apply first")

    # archetypes
    subs.add_parser("archetypes", help="Describe the architecture archetypes", parents=[common_parser])

    return parser


def build_settings(args) -> Settings:
    """Environment settings overridden by command-line flags."""
    settings = Settings.from_env()
    if args.arch:
        settings.architecture = ArchitectureType.from_string(args.arch)
    if args.seed is not None:
        settings.seed = args.seed
    if args.money is not None:
        settings.starting_money = args.money
    if args.reputation is not None:
        settings.starting_reputation = args.reputation
    return settings


# =============================================================================
# Command Handlers
# =============================================================================

def handle_run(args, sim, display) -> dict:
    """Handle the 'run' subcommand."""
    results = sim.run(ticks=args.ticks, delta=args.delta)
    sprints = [sim.end_sprint() for _ in range(args.sprints)]
    summary = sim.summary()
    if not args.quiet:
        display.display_tick_results(results)
        for report in sprints:
            display.display_sprint_report(report)
        display.display_summary(summary)
    return {
        "ticks": [r.to_dict() for r in results],
        "sprints": sprints,
        "summary": summary.to_dict(),
    }


def handle_spread(args, sim, display) -> dict:
    """Handle the 'spread' subcommand."""
    before = sim.graph.average_tech_debt()
    after = sim.spread_tech_debt(steps=args.steps)
    summary = sim.summary()
    if not args.quiet:
        display.print_subheader(f"Tech Debt Contagion ({args.steps} steps)")
        print(f"  {'Avg Tech Debt:':<20} {before:.1f}% -> {after:.1f}%")
        display.display_summary(summary)
    return {
        "steps": args.steps,
        "average_tech_debt_before": round(before, 2),
        "average_tech_debt_after": round(after, 2),
        "summary": summary.to_dict(),
    }


def handle_defects(args, sim, display) -> dict:
    """Handle the 'defects' subcommand."""
    if args.spread_steps:
        sim.spread_tech_debt(steps=args.spread_steps)
    defects = sim.collect_defects()
    if not args.quiet:
        display.display_defects(defects)
    return {name: count for name, count in defects}


def handle_archetypes(args, sim, display) -> dict:
    """Handle the 'archetypes' subcommand."""
    data = {}
    for arch_type in list_architectures():
        graph = create_architecture(arch_type)
        if not args.quiet:
            display.display_architecture(arch_type, graph)
        data[arch_type.value] = graph.to_dict()
    return data


# =============================================================================
# Main Entry Point
# =============================================================================

def main(argv=None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    display = DisplayService()

    try:
        settings = build_settings(args)
    except ValueError as e:
        print(display.colored(f"Error: {e}", display.Colors.RED), file=sys.stderr)
        return 1

    # Logging
    log_level = (
        logging.WARNING if args.quiet
        else logging.DEBUG if args.verbose
        else getattr(logging, settings.log_level, logging.INFO)
    )
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    try:
        sim = SimulationService(settings=settings)

        handlers = {
            "run": handle_run,
            "spread": handle_spread,
            "defects": handle_defects,
            "archetypes": handle_archetypes,
        }
        handler = handlers[args.command]
        result_data = handler(args, sim, display)

        # JSON stdout
        if args.json:
            print(json.dumps(result_data, indent=2))

        # File export
        if args.output:
            with open(args.output, "w") as f:
                json.dump(result_data, f, indent=2)
            if not args.quiet:
                print(f"\n{display.colored(f'Results saved to: {args.output}', display.Colors.GREEN)}")

        return 0

    except KeyboardInterrupt:
        print("\nSimulation interrupted.")
        return 130
    except Exception as e:
        print(display.colored(f"Error: {e}", display.Colors.RED), file=sys.stderr)
        if args.verbose:
            logging.exception("Simulation failed")
        return 1


if __name__ == "__main__":
    sys.exit(main())
