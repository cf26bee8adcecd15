from testy.reporting.console import ConsoleReporter
from testy.reporting.formatter import Formatter
from testy.reporting.junit import JUnitReporter, write_junit

__all__ = ["ConsoleReporter", "Formatter", "JUnitReporter", "write_junit"]
