"""Command line tooling for inspecting generated scenario tests."""

from __future__ import annotations

import argparse
import fnmatch
import logging
import re
from collections.abc import Callable, Sequence

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from nested_scenarios.discovery import find_suites, load_module
from nested_scenarios.errors import NestedScenariosError
from nested_scenarios.naming import render_value
from nested_scenarios.suite import GeneratedTest, ScenarioSuite
from nested_scenarios.version import __version__


EXIT_OK = 0
EXIT_NOTHING_FOUND = 1
EXIT_USAGE = 2


def main(argv: Sequence[str] | None = None) -> None:
    """Entry point for the nested-scenarios CLI."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command == "list":
        _configure_logging(args.verbose)
        raise SystemExit(_run_list(args, Console()))

    parser.print_help()
    raise SystemExit(EXIT_OK)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nested-scenarios", description="Inspect tests generated from nested scenarios"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command")

    list_parser = subparsers.add_parser("list", help="List generated test names")
    list_parser.add_argument(
        "targets", nargs="+", help="Test files (.py) or dotted module names"
    )
    list_parser.add_argument("-k", "--keyword", help="Filter test names by keyword expression")
    list_parser.add_argument(
        "--scope", action="store_true", help="Show the scenario options of every test"
    )
    list_parser.add_argument(
        "-v", "--verbose", action="count", default=0, help="Increase logging output"
    )
    return parser


def _configure_logging(verbosity: int) -> None:
    if verbosity <= 0:
        return
    level = logging.INFO if verbosity == 1 else logging.DEBUG
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _collect(targets: Sequence[str]) -> list[tuple[str, ScenarioSuite]]:
    suites: list[tuple[str, ScenarioSuite]] = []
    for target in targets:
        module = load_module(target)
        suites.extend(find_suites(module))
    return suites


def _filter_tests(tests: Sequence[GeneratedTest], keyword: str | None) -> list[GeneratedTest]:
    if not keyword:
        return list(tests)
    matcher = KeywordMatcher(keyword)
    return [test for test in tests if matcher.match(test.test_name)]


def _format_scope(test: GeneratedTest) -> str:
    scope = test.record.scope
    items = sorted(scope.items(), key=lambda pair: str(pair[0]))
    return ", ".join(f"{key}={render_value(value)}" for key, value in items)


def _run_list(args: argparse.Namespace, console: Console) -> int:
    try:
        suites = _collect(args.targets)
    except NestedScenariosError as exc:
        console.print(f"[red]Invalid scenario declaration: {exc}[/red]")
        return EXIT_USAGE
    except Exception as exc:
        console.print(f"[red]Cannot load test module: {exc}[/red]")
        return EXIT_USAGE

    if not suites:
        console.print("[yellow]No scenario suites found.[/yellow]")
        return EXIT_NOTHING_FOUND

    try:
        listings = [(label, _filter_tests(suite.tests, args.keyword)) for label, suite in suites]
    except ValueError as exc:
        console.print(f"[red]{exc}[/red]")
        return EXIT_USAGE

    total = 0
    for label, tests in listings:
        if not tests:
            continue
        table = Table(title=label, show_header=True, header_style="bold")
        table.add_column("Test")
        if args.scope:
            table.add_column("Scenario")
        for test in tests:
            row = [test.test_name, _format_scope(test)] if args.scope else [test.test_name]
            table.add_row(*row)
        console.print(table)
        total += len(tests)

    if total == 0:
        console.print("[yellow]No scenario tests matched.[/yellow]")
        return EXIT_NOTHING_FOUND

    console.print(f"{total} scenario test(s)")
    return EXIT_OK


class KeywordMatcher:
    """Evaluate pytest-style ``-k`` expressions against test names.

    Terms are combined with ``and``, ``or``, ``not`` and parentheses. A term
    containing ``*``, ``?`` or ``[`` is a glob matched against the whole name;
    any other term matches as a case-insensitive substring.
    """

    _TOKEN = re.compile(r"\(|\)|[^\s()]+")
    _GLOB_CHARS = frozenset("*?[")

    def __init__(self, expression: str) -> None:
        self.tokens = self._TOKEN.findall(expression)
        self.pos = 0
        if not self.tokens:
            msg = "Empty keyword expression"
            raise ValueError(msg)
        self.predicate = self._expr()
        if self.pos != len(self.tokens):
            msg = f"Unexpected {self.tokens[self.pos]!r} in keyword expression"
            raise ValueError(msg)

    def match(self, name: str) -> bool:
        return self.predicate(name.lower())

    def _expr(self) -> Callable[[str], bool]:
        terms = [self._conjunction()]
        while self._accept("or"):
            terms.append(self._conjunction())
        if len(terms) == 1:
            return terms[0]
        return lambda name: any(term(name) for term in terms)

    def _conjunction(self) -> Callable[[str], bool]:
        factors = [self._negation()]
        while self._accept("and"):
            factors.append(self._negation())
        if len(factors) == 1:
            return factors[0]
        return lambda name: all(factor(name) for factor in factors)

    def _negation(self) -> Callable[[str], bool]:
        if self._accept("not"):
            inner = self._negation()
            return lambda name: not inner(name)
        return self._atom()

    def _atom(self) -> Callable[[str], bool]:
        if self.pos >= len(self.tokens):
            msg = "Unexpected end of keyword expression"
            raise ValueError(msg)
        token = self.tokens[self.pos]
        self.pos += 1

        if token == "(":
            inner = self._expr()
            if not self._accept(")"):
                msg = "Unmatched '(' in keyword expression"
                raise ValueError(msg)
            return inner
        if token == ")" or token.lower() in {"and", "or", "not"}:
            msg = f"Unexpected {token!r} in keyword expression"
            raise ValueError(msg)

        term = token.lower()
        if self._GLOB_CHARS & set(term):
            return lambda name: fnmatch.fnmatchcase(name, term)
        return lambda name: term in name

    def _accept(self, word: str) -> bool:
        if self.pos < len(self.tokens) and self.tokens[self.pos].lower() == word:
            self.pos += 1
            return True
        return False


__all__ = ["KeywordMatcher", "main"]
