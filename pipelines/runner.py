from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Protocol, List

from utils.logging_setup import init_logging


# abort: re-raise the first failure; skip: record it on the context and carry on
ErrorPolicy = Literal["abort", "skip"]


@dataclass
class RunContext:
    animals: list = field(default_factory=list)
    errors: list = field(default_factory=list)
    meta: dict = field(default_factory=dict)

    def record_error(self, step: str, url: str, error: Exception) -> None:
        self.errors.append({"step": step, "url": url, "error": str(error)})


class Step(Protocol):
    def run(self, ctx: RunContext) -> RunContext:
        ...


class Pipeline:
    def __init__(self, steps: List[Step]):
        self.steps = steps

    def run(self, ctx: RunContext) -> RunContext:
        # Make logging idempotent for any direct runner use
        init_logging()
        for step in self.steps:
            ctx = step.run(ctx)
        return ctx
