"""
Boiler Control View - Console reporting of controller cycles

Formats cycle results for the replay tool. No computation happens here.

Author: Steam Boiler Control Project
Date: 2026-10-19
"""

from typing import Iterable

from steam_boiler.core.mailbox import Message
from steam_boiler.modules.boiler_control.model import CycleResult


class BoilerView:
    """
    View component for controller cycles.

    Responsible for formatting and displaying cycle results.
    """

    @staticmethod
    def display_cycle(
        result: CycleResult,
        incoming: Iterable[Message],
        outgoing: Iterable[Message],
        verbose: bool = True,
    ) -> None:
        """
        Display one cycle.

        Args:
            result: Cycle result to display
            incoming: Messages the controller received
            outgoing: Messages the controller sent
            verbose: If True, list the inbound messages and diagnostic flags
        """
        print("=" * 60)
        print(f"CYCLE {result.cycle}: {result.entry_mode.name} -> {result.mode.name}")
        print("=" * 60)

        if verbose:
            print("\nInbound:")
            for message in incoming:
                print(f"  {message}")

        print("\nOutbound:")
        for message in outgoing:
            print(f"  {message}")

        if result.pump_count is not None:
            print(f"\nPumps selected: {result.pump_count}")

        if verbose:
            print("\nDiagnostic Flags:")
            for flag_name, flag_value in result.flags.items():
                status = "ACTIVE" if flag_value else "OK"
                print(f"  {flag_name}: {status}")

        print("=" * 60)

    @staticmethod
    def display_summary(result: CycleResult, outgoing: Iterable[Message]) -> None:
        """
        Display a one-line summary of a cycle.

        Args:
            result: Cycle result to summarize
            outgoing: Messages the controller sent
        """
        sent = ", ".join(str(m) for m in outgoing)
        print(f"[{result.cycle:>3}] {result.mode.name:<14} {sent}", end="")

        active_flags = [k for k, v in result.flags.items() if v]
        if active_flags:
            print(f" [FLAGS: {', '.join(active_flags)}]")
        else:
            print()
