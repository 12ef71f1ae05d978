"""CLI entry point.

Usage:
    python3 -m ArticleGate https://example.com/story
    python3 -m ArticleGate --max-concurrency 2 URL [URL ...]
"""
from __future__ import annotations

from .cli import main

raise SystemExit(main())
