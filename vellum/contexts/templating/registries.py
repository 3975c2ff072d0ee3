"""
Templating Registries

Registry of named partial templates discovered from theme directories.
"""

import re
from pathlib import Path
from typing import Dict, List

from jinja2 import DictLoader

from vellum.contexts.templating.logger import _log_debug, _log_error, log_partials_loaded

TEMPLATE_EXTENSION = ".html.jinja"

# "<name>.html.jinja" where name has no dots
PARTIAL_FILENAME_PATTERN = re.compile(rf"^([^.]+){re.escape(TEMPLATE_EXTENSION)}$")


class PartialRegistry:
    """
    Registry mapping partial names to template sources.

    A partial's name is its filename stem before the template extension
    (partials/work.html.jinja -> "work"). Registration is last-write-wins,
    so directories loaded later override same-named partials from earlier ones.

    A registry is built per render call and never shared between calls.
    """

    def __init__(self):
        self._sources: Dict[str, str] = {}

    def register(self, name: str, source: str) -> None:
        """Register a partial, replacing any existing partial of the same name."""
        if name in self._sources:
            _log_debug(f"Partial '{name}' overridden")
        self._sources[name] = source

    def load_directory(self, directory: Path) -> int:
        """
        Register every partial template file in a directory.

        Files are processed in sorted name order; files not matching
        <name>.html.jinja are ignored.

        Args:
            directory: Directory to scan

        Returns:
            Number of partials registered

        Raises:
            FileNotFoundError: If the directory doesn't exist
            OSError: If the directory or a partial file can't be read
        """
        count = 0
        for path in sorted(Path(directory).iterdir()):
            match = PARTIAL_FILENAME_PATTERN.match(path.name)
            if not match or not path.is_file():
                continue
            self.register(match.group(1), path.read_text(encoding="utf-8"))
            count += 1

        log_partials_loaded(directory, count)
        return count

    def load_optional_directory(self, directory: Path) -> int:
        """
        Register partials from a directory that may be absent.

        A missing directory is skipped. Any other failure (unreadable or
        undecodable file) is logged and ignored; partials registered before the
        failure are kept.

        Returns:
            Number of partials registered (0 if skipped or failed)
        """
        directory = Path(directory)
        if not directory.exists():
            _log_debug(f"Optional partial directory not found, skipping: {directory}")
            return 0

        try:
            count = self.load_directory(directory)
        except (OSError, UnicodeDecodeError) as e:
            _log_error(f"Error loading partial directory {directory}: {e}")
            return 0

        return count

    def get(self, name: str) -> str:
        """
        Get a partial's template source.

        Raises:
            KeyError: If no partial is registered under the name
        """
        return self._sources[name]

    def names(self) -> List[str]:
        """Registered partial names, sorted."""
        return sorted(self._sources)

    def loader(self) -> DictLoader:
        """Jinja2 loader resolving {% include "<name>" %} to registered partials."""
        return DictLoader(dict(self._sources))

    def __contains__(self, name: str) -> bool:
        return name in self._sources

    def __len__(self) -> int:
        return len(self._sources)
