"""File-backed catalogues storing one JSON or YAML mapping per category/locale."""

from __future__ import annotations

import json
import os
import re
from abc import abstractmethod
from pathlib import Path
from typing import Any, Iterator, Mapping

import yaml

from polymsg.config.schema import ConfigurationError
from polymsg.localization.locale import Locale, LocaleLike

from .base import MessageCatalogue, MessageTable


class FileMessageCatalogue(MessageCatalogue):
    """Read ``<base_path>/<locale>/<file>`` where ``file`` defaults to the category.

    ``file_map`` lets several categories share one file, or a category use a
    file with a different name.
    """

    extension = ""

    def __init__(
        self,
        base_path: str | os.PathLike[str],
        *,
        file_map: Mapping[str, str] | None = None,
        source_language: LocaleLike | None = None,
        force_translation: bool = False,
    ) -> None:
        super().__init__(
            source_language=source_language,
            force_translation=force_translation,
        )
        self.base_path = Path(base_path)
        self.file_map = dict(file_map or {})

    def file_name(self, category: str) -> str:
        mapped = self.file_map.get(category)
        if mapped:
            return mapped
        return category.replace("\\", "/") + self.extension

    def resolve_path(self, category: str, locale: Locale) -> Path | None:
        """Return the file holding ``category`` for ``locale`` if it exists."""

        name = self.file_name(category)
        canonical = str(locale)
        for directory in dict.fromkeys((canonical, canonical.replace("-", "_"))):
            path = self.base_path / directory / name
            if path.is_file():
                return path
        return None

    def load_messages(self, category: str, locale: Locale) -> MessageTable | None:
        path = self.resolve_path(category, locale)
        if path is None:
            return None

        with path.open("r", encoding="utf-8") as handle:
            payload = self.parse(handle.read(), path)

        if payload is None:
            return {}
        if not isinstance(payload, dict):
            raise ConfigurationError(
                f"Message file must define a mapping at the top level: {path}"
            )
        return {
            str(key): "" if value is None else str(value)
            for key, value in payload.items()
        }

    def storage_units(self) -> Iterator[tuple[str, Locale]]:
        if not self.base_path.is_dir():
            return

        mapped: dict[str, list[str]] = {}
        for category, file_name in self.file_map.items():
            mapped.setdefault(file_name, []).append(category)

        for directory in sorted(self.base_path.iterdir()):
            if not directory.is_dir():
                continue
            try:
                locale = Locale.parse(directory.name)
            except ValueError:
                continue

            for path in sorted(directory.rglob("*")):
                if not path.is_file():
                    continue
                relative = path.relative_to(directory).as_posix()
                if relative in mapped:
                    for category in mapped[relative]:
                        yield category, locale
                elif path.suffix == self.extension:
                    yield relative[: -len(self.extension)], locale

    @abstractmethod
    def parse(self, text: str, path: Path) -> Any:
        """Decode the raw file contents."""


class JsonMessageCatalogue(FileMessageCatalogue):
    extension = ".json"

    def parse(self, text: str, path: Path) -> Any:
        try:
            return json.loads(text) if text.strip() else None
        except json.JSONDecodeError as error:
            raise ConfigurationError(f"Invalid JSON in message file {path}: {error}") from error


class _MessageLoader(yaml.SafeLoader):
    """Safe loader that keeps plain scalars such as ``Yes`` or ``1.0`` as strings.

    Only ``~`` and empty values resolve to null, so untranslated entries can
    still be written as ``message: ~``.
    """


_MessageLoader.yaml_implicit_resolvers = {}
_MessageLoader.add_implicit_resolver(
    "tag:yaml.org,2002:null", re.compile(r"^(?:~|)$"), ["~", ""]
)


class YamlMessageCatalogue(FileMessageCatalogue):
    extension = ".yaml"

    def parse(self, text: str, path: Path) -> Any:
        try:
            return yaml.load(text, Loader=_MessageLoader)
        except yaml.YAMLError as error:
            raise ConfigurationError(f"Invalid YAML in message file {path}: {error}") from error


__all__ = ["FileMessageCatalogue", "JsonMessageCatalogue", "YamlMessageCatalogue"]
