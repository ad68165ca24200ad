from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Generic, TypeVar

from semrel.core.result import Err, Ok, Result
from semrel.release.errors import ReleaseError

S = TypeVar("S")
K = TypeVar("K")


@dataclass(frozen=True, slots=True)
class StepAdvance(Generic[S]):
    state: S


@dataclass(frozen=True, slots=True)
class StepFinish(Generic[S]):
    state: S


StepOutcome = StepAdvance[S] | StepFinish[S]
StepHandler = Callable[[S], Result[StepOutcome[S], ReleaseError]]
GetStep = Callable[[S], K]
OnAdvance = Callable[[S], None]


def advance(state: S) -> StepAdvance[S]:
    return StepAdvance(state=state)


def finish(state: S) -> StepFinish[S]:
    return StepFinish(state=state)


def run_state_machine(
    *,
    initial_state: S,
    get_step: GetStep[S, K],
    handlers: Mapping[K, StepHandler[S]],
    on_advance: OnAdvance[S] | None = None,
) -> Result[S, ReleaseError]:
    """Run handlers until one finishes; the first Err stops the machine."""
    current = initial_state

    while True:
        step = get_step(current)
        handler = handlers.get(step)
        if handler is None:
            raise AssertionError(f"no handler for release step: {step}")

        outcome = handler(current)
        if isinstance(outcome, Err):
            return outcome

        current = outcome.value.state
        if on_advance is not None:
            on_advance(current)

        if isinstance(outcome.value, StepFinish):
            return Ok(current)
