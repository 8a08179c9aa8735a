"""Recompiles the pattern and rebuilds the match report."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Literal, Optional

from regex_tester.runtime import telemetry
from regex_tester.session import ApplicationState

from .formatting import UNMATCHED, format_error, format_matches

Outcome = Literal["cleared", "error", "matched", "idle"]


@dataclass(frozen=True, slots=True)
class EvaluationResult:
    outcome: Outcome
    match_count: int = 0
    error: Optional[str] = None


class Evaluator:
    """Owns every wholesale write to the output buffer.

    The pattern is only recompiled while the pattern field has focus; edits
    elsewhere re-run the last successfully compiled pattern. A compile error
    leaves that pattern in place.
    """

    def __init__(self, *, unmatched_placeholder: str = UNMATCHED, flags: int = 0) -> None:
        self.unmatched_placeholder = unmatched_placeholder
        self.flags = flags
        self.logger = telemetry.get_logger("regex_tester.evaluation")

    def evaluate(self, state: ApplicationState) -> EvaluationResult:
        with telemetry.span(
            "evaluation::run",
            component="evaluation",
            metadata={"focus": state.focus.value},
        ) as handle:
            result = self._evaluate(state)
            handle.add_metadata("outcome", result.outcome)
            handle.add_metadata("matches", result.match_count)
            return result

    def _evaluate(self, state: ApplicationState) -> EvaluationResult:
        if state.focus.is_pattern:
            pattern = state.pattern
            if not pattern:
                state.compiled_pattern = None
                state.output_buffer.replace_lines([""])
                return EvaluationResult(outcome="cleared")
            try:
                state.compiled_pattern = re.compile(pattern, self.flags)
            except re.error as exc:
                message = format_error(exc)
                state.output_buffer.replace_lines([message])
                telemetry.record_event(
                    "evaluation.compile_error",
                    level="warning",
                    data={"pattern": pattern, "error": message},
                    logger_name="regex_tester.evaluation",
                )
                return EvaluationResult(outcome="error", error=message)

        compiled = state.compiled_pattern
        if compiled is None:
            state.output_buffer.replace_lines([""])
            return EvaluationResult(outcome="idle")

        matches = list(compiled.finditer(state.text_buffer.text))
        state.output_buffer.replace_lines(
            format_matches(compiled, matches, unmatched=self.unmatched_placeholder)
        )
        return EvaluationResult(outcome="matched", match_count=len(matches))


__all__ = ["EvaluationResult", "Evaluator"]
