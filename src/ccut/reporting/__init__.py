from ccut.reporting.console import ConsoleReporter

__all__ = ["ConsoleReporter"]
