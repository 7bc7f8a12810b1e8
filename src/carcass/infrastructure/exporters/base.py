"""Exporter interface, format lookup and multi-format writes."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar, Protocol, runtime_checkable

if TYPE_CHECKING:
    from carcass.application.dtos import ConfigurationOutput


logger = logging.getLogger(__name__)


class UnknownFormatError(KeyError):
    """Raised when one or more requested formats have no exporter.

    Attributes:
        unknown: The requested names that matched nothing.
        available: Every registered format, sorted.
    """

    def __init__(self, unknown: list[str], available: list[str]) -> None:
        self.unknown = unknown
        self.available = available
        super().__init__(
            f"Unknown export format(s): {', '.join(unknown) or '(none given)'}. "
            f"Available formats: {', '.join(available) or 'none'}"
        )

    def __str__(self) -> str:
        return self.args[0]


@runtime_checkable
class Exporter(Protocol):
    """What every exporter provides.

    An exporter reads the segments of a resolved ``ConfigurationOutput``
    and never solves geometry itself. ``render`` returns the whole file
    content in memory; ``export`` writes it to ``path``.
    """

    format_name: ClassVar[str]
    file_extension: ClassVar[str]
    media_type: ClassVar[str]

    def render(self, output: ConfigurationOutput) -> bytes: ...

    def export(self, output: ConfigurationOutput, path: Path) -> None: ...


class ExporterRegistry:
    """Format name to exporter class lookup.

    Exporter modules register their class on import with
    ``@ExporterRegistry.register``; the class's ``format_name`` is the key.
    """

    _exporters: ClassVar[dict[str, type[Exporter]]] = {}

    @classmethod
    def register(cls, exporter_class: type[Exporter]) -> type[Exporter]:
        """Class decorator adding an exporter under its ``format_name``.

        Raises:
            ValueError: If another class already owns the format name.
        """
        name = exporter_class.format_name
        current = cls._exporters.get(name)
        if current is not None and current is not exporter_class:
            raise ValueError(
                f"Format '{name}' is already exported by {current.__name__}"
            )
        cls._exporters[name] = exporter_class
        logger.debug(f"Registered exporter '{name}': {exporter_class.__name__}")
        return exporter_class

    @classmethod
    def get(cls, format_name: str) -> type[Exporter]:
        """Exporter class for ``format_name``.

        Raises:
            UnknownFormatError: If nothing exports that format.
        """
        try:
            return cls._exporters[format_name]
        except KeyError:
            raise UnknownFormatError([format_name], cls.available_formats()) from None

    @classmethod
    def select(cls, formats: str | Iterable[str]) -> list[str]:
        """Turn a format request into a list of registered format names.

        ``formats`` is either ``"all"``, a comma separated string, or an
        iterable of names. Names are stripped, lowercased and deduplicated
        in request order.

        Raises:
            UnknownFormatError: If a name is not registered or the request
                names no format at all.
        """
        if isinstance(formats, str):
            if formats.strip().lower() == "all":
                return cls.available_formats()
            formats = formats.split(",")

        names = list(dict.fromkeys(f.strip().lower() for f in formats if f.strip()))
        unknown = [name for name in names if name not in cls._exporters]
        if unknown or not names:
            raise UnknownFormatError(unknown, cls.available_formats())
        return names

    @classmethod
    def available_formats(cls) -> list[str]:
        return sorted(cls._exporters)

    @classmethod
    def is_registered(cls, format_name: str) -> bool:
        return format_name in cls._exporters

    @classmethod
    def clear(cls) -> None:
        cls._exporters.clear()


class ExportManager:
    """Writes one resolved configuration in several formats.

    Every requested format is rendered before the first file is written,
    so an unknown format or a failing exporter leaves the output directory
    untouched.

    Attributes:
        output_dir: Directory receiving ``<project_name>.<extension>`` files.
    """

    def __init__(self, output_dir: Path) -> None:
        self.output_dir = Path(output_dir)

    def export_all(
        self,
        formats: str | Iterable[str],
        output: ConfigurationOutput,
        project_name: str = "carcass",
    ) -> dict[str, Path]:
        """Render and write every requested format.

        Args:
            formats: Anything ``ExporterRegistry.select`` accepts.
            output: The resolved configuration.
            project_name: Base name of the written files.

        Returns:
            Format name to written path, in request order.

        Raises:
            UnknownFormatError: If a format is not registered.
            ValueError: If an exporter rejects the configuration.
            OSError: If a file cannot be written.
        """
        rendered: dict[str, tuple[Path, bytes]] = {}
        for name in ExporterRegistry.select(formats):
            exporter = ExporterRegistry.get(name)()
            path = self.output_dir / f"{project_name}.{exporter.file_extension}"
            rendered[name] = (path, exporter.render(output))

        self.output_dir.mkdir(parents=True, exist_ok=True)
        for name, (path, content) in rendered.items():
            path.write_bytes(content)
            logger.info(f"Wrote {name} export ({len(content)} bytes) to {path}")
        return {name: path for name, (path, _) in rendered.items()}

    def export_single(
        self,
        format_name: str,
        output: ConfigurationOutput,
        project_name: str = "carcass",
    ) -> Path:
        return self.export_all([format_name], output, project_name)[format_name]
