"""Validate message catalogues and report issues helpful to translators."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Iterable, Mapping, Sequence

from polymsg.catalogues import MessageCatalogue
from polymsg.formatting.parser import (
    Message,
    PluralNode,
    SelectNode,
    TextNode,
    argument_names,
    parse_pattern,
)
from polymsg.version import get_project_version

from .loader import build_catalogue, load_translator_config, resolve_config_path
from .schema import ConfigurationError, TranslatorConfig


def _format_scope(scope: str, message: str) -> str:
    return f"{scope}: {message}"


def _has_literal_braces(message: Message) -> bool:
    for node in message:
        if isinstance(node, TextNode) and ("{" in node.text or "}" in node.text):
            return True
        if isinstance(node, PluralNode):
            branches: Iterable[Message] = (*node.exact.values(), *node.branches.values())
        elif isinstance(node, SelectNode):
            branches = node.branches.values()
        else:
            continue
        if any(_has_literal_braces(branch) for branch in branches):
            return True
    return False


def validate_catalogue_table(scope: str, table: Mapping[str, str]) -> list[str]:
    """Return issues found in a single ``source -> translation`` table."""

    errors: list[str] = []

    for source, translation in table.items():
        if not translation:
            continue

        if _has_literal_braces(parse_pattern(translation)):
            errors.append(
                _format_scope(scope, f"translation of '{source}' has malformed placeholders")
            )
            continue

        expected = argument_names(source)
        found = argument_names(translation)

        missing = sorted(expected - found)
        if missing:
            errors.append(
                _format_scope(
                    scope,
                    f"translation of '{source}' drops argument(s): {', '.join(missing)}",
                )
            )

        unexpected = sorted(found - expected)
        if unexpected:
            errors.append(
                _format_scope(
                    scope,
                    (
                        f"translation of '{source}' introduces unknown argument(s): "
                        f"{', '.join(unexpected)}"
                    ),
                )
            )

    return errors


def validate_catalogue(binding: str, catalogue: MessageCatalogue) -> list[str]:
    """Validate every table stored by ``catalogue``."""

    errors: list[str] = []
    for category, locale in catalogue.storage_units():
        scope = f"{binding}/{category}/{locale}"
        try:
            table = catalogue.load_messages(category, locale)
        except ConfigurationError as error:
            errors.append(_format_scope(scope, str(error)))
            continue
        if table is not None:
            errors.extend(validate_catalogue_table(scope, table))
    return errors


def validate_configuration(
    config: TranslatorConfig,
    root: Path | None = None,
) -> dict[str, list[str]]:
    """Validate all configured catalogues and return issues keyed by binding."""

    return {
        binding: validate_catalogue(binding, build_catalogue(catalogue_config, root))
        for binding, catalogue_config in config.catalogues.items()
    }


def _build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Validate configured message catalogues and report placeholder issues."
    )
    parser.add_argument(
        "config",
        nargs="?",
        help="Path to the translator configuration (defaults to $POLYMSG_CONFIG)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {get_project_version()}",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point for running validations from the command line."""

    parser = _build_argument_parser()
    args = parser.parse_args(argv)

    try:
        config_file = resolve_config_path(args.config)
        config = load_translator_config(config_file)
    except (ConfigurationError, FileNotFoundError) as error:
        print(f"failed to load configuration: {error}")
        return 1

    if not config.catalogues:
        print("no catalogues configured")
        return 1

    exit_code = 0
    results = validate_configuration(config, config_file.resolve().parent)
    for binding, issues in results.items():
        if issues:
            exit_code = 1
            print(f"[{binding}] {len(issues)} issue(s) detected:")
            for issue in issues:
                print(f"  - {issue}")
        else:
            print(f"[{binding}] OK")

    return exit_code


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    raise SystemExit(main())
