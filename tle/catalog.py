"""
Collections of element sets loaded from multi-record TLE text.
"""

import logging
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Union

from .elements import OrbitalElementSet
from .errors import TLEParseError
from .parser import parse_tle

logger = logging.getLogger(__name__)


class TLECatalog:
    """Ordered name -> OrbitalElementSet mapping."""

    def __init__(self, element_sets: Iterable[OrbitalElementSet] = ()):
        self._sets: Dict[str, OrbitalElementSet] = {}
        for element_set in element_sets:
            if element_set.name in self._sets:
                logger.warning(f"Duplicate TLE name {element_set.name!r}, keeping the later record")
            self._sets[element_set.name] = element_set

    @classmethod
    def from_text(cls, text: str, reference_year: int) -> "TLECatalog":
        """
        Parse every three-line record in ``text``.

        Blank lines are ignored. Records that fail validation are logged and
        skipped; the scan then resynchronises on the next "1 "/"2 " pair.

        Args:
            text: Concatenated TLE records
            reference_year: Passed through to parse_tle()

        Returns:
            TLECatalog with the valid records
        """
        lines = [line.rstrip() for line in text.splitlines() if line.strip()]

        parsed: List[OrbitalElementSet] = []
        skipped = 0
        i = 0
        while i < len(lines) - 2:
            name = lines[i]
            line1 = lines[i + 1]
            line2 = lines[i + 2]

            if not (line1.startswith('1 ') and line2.startswith('2 ')):
                logger.debug(f"No TLE record at line {i}, resynchronising")
                i += 1
                continue

            try:
                parsed.append(parse_tle("\n".join((name, line1, line2)), reference_year))
            except TLEParseError as e:
                skipped += 1
                logger.warning(f"Failed to parse TLE for {name.strip()}: {e}")

            i += 3

        catalog = cls(parsed)
        logger.info(f"Loaded {len(catalog)} TLE records ({skipped} skipped)")
        return catalog

    @classmethod
    def from_file(cls, tle_file: Union[str, Path], reference_year: int) -> "TLECatalog":
        """Read and parse a TLE file."""
        tle_path = Path(tle_file)
        if not tle_path.exists():
            logger.error(f"TLE file not found: {tle_path}")
            raise FileNotFoundError(f"TLE file not found: {tle_path}")

        return cls.from_text(tle_path.read_text(encoding="utf-8"), reference_year)

    def get(self, name: str) -> Optional[OrbitalElementSet]:
        """Element set by exact name."""
        return self._sets.get(name)

    def find(self, fragment: str) -> List[OrbitalElementSet]:
        """Element sets whose name contains ``fragment`` (case-insensitive)."""
        needle = fragment.upper()
        return [s for s in self._sets.values() if needle in s.name.upper()]

    def by_catalog_number(self, catalog_number: int) -> Optional[OrbitalElementSet]:
        for element_set in self._sets.values():
            if element_set.catalog_number == catalog_number:
                return element_set
        return None

    def names(self) -> List[str]:
        return list(self._sets.keys())

    def __len__(self) -> int:
        return len(self._sets)

    def __iter__(self) -> Iterator[OrbitalElementSet]:
        return iter(self._sets.values())

    def __contains__(self, name: object) -> bool:
        return name in self._sets
