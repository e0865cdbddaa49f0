"""Configuration classes for bidijkstra components."""

from dataclasses import dataclass
from typing import Optional, Union

from bidijkstra.lib.algorithms.base import SearchMode


@dataclass
class SearchConfig:
    """Defaults applied by `search_path` and the graph helpers."""

    # Mode used when the caller does not pass one
    default_mode: SearchMode = SearchMode.BIDIR

    # Upper bound on closed candidates per search; None means unbounded
    max_expansions: Optional[int] = None

    # Edge attribute holding the weight
    weight_attr: str = "weight"

    # Weight of an edge that carries no weight attribute
    default_weight: float = 1.0

    def resolve_mode(self, mode: Union[SearchMode, str, None]) -> SearchMode:
        """Return a SearchMode from an enum member, its name, or None.

        Names are matched case-insensitively ("bidir", "VANILLA").

        Raises:
            ValueError: If the value does not name a known mode.
        """
        if mode is None:
            return self.default_mode
        if isinstance(mode, SearchMode):
            return mode
        if isinstance(mode, str):
            try:
                return SearchMode[mode.strip().upper()]
            except KeyError:
                pass
        raise ValueError(f"Unknown search mode: {mode!r}")


# Global configuration instance
SEARCH_CONFIG = SearchConfig()
