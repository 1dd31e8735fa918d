from __future__ import annotations

from dataclasses import dataclass, field

from geocss.cql import EcqlEngine, ExpressionEngine


@dataclass(frozen=True)
class ParserConfig:
    engine: ExpressionEngine = field(default_factory=EcqlEngine)
    encoding: str = "utf-8"  # used by parse_file
