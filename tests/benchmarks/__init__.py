"""Performance benchmarks for parsecomb.

Benchmarks use pytest-benchmark to measure the per-element cost of the core
combinators and a recursive grammar. Disabled by default; run with
``pytest tests/benchmarks --benchmark-enable``.

Python 3.13+.
"""

from __future__ import annotations

__all__: list[str] = []
