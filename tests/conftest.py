"""Global pytest configuration.

Registers the sample graph fixtures from `tests.lib.algorithms.sample_graphs`.
Listing the plugin instead of importing it lets pytest apply assertion
rewriting to the module.
"""

from __future__ import annotations

from importlib.util import find_spec

pytest_plugins: list[str] = []
if find_spec("tests.lib.algorithms.sample_graphs") is not None:
    pytest_plugins = ["tests.lib.algorithms.sample_graphs"]
