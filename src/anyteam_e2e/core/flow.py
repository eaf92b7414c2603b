"""
Sequencing of named steps into multi-step flows.

A flow runs its steps one at a time in declaration order. Each step is either
mandatory (a failure aborts the flow) or explicitly optional (a failure is
logged and the flow continues with the step's output marked absent).
"""

import asyncio
import enum
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Optional, Sequence

from playwright.async_api import Page

from ..exceptions import CompletionTimeout, FlowStepFailed, InvalidConfiguration
from .session import SessionBridge

logger = logging.getLogger(__name__)


class FlowTimeout(CompletionTimeout):
    """The flow-level budget ran out while a step was running."""


class FlowStatus(enum.Enum):
    NOT_STARTED = "not_started"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


class FlowState:
    """Values produced by steps; every key can be written only once."""

    def __init__(self) -> None:
        self._values: dict[str, Any] = {}
        self._absent: set[str] = set()

    def set(self, key: str, value: Any) -> None:
        if key in self._values or key in self._absent:
            raise InvalidConfiguration(f"Flow state key '{key}' already written")
        self._values[key] = value

    def mark_absent(self, key: str) -> None:
        """Record that an optional step did not produce ``key``."""
        if key in self._values or key in self._absent:
            raise InvalidConfiguration(f"Flow state key '{key}' already written")
        self._absent.add(key)

    def get(self, key: str, default: Any = None) -> Any:
        return self._values.get(key, default)

    def is_absent(self, key: str) -> bool:
        return key in self._absent

    def __contains__(self, key: str) -> bool:
        return key in self._values

    def __getitem__(self, key: str) -> Any:
        return self._values[key]

    def as_dict(self) -> dict[str, Any]:
        return dict(self._values)


@dataclass
class FlowContext:
    """What a step sees while it runs."""

    flow_name: str
    session: SessionBridge
    state: FlowState

    @property
    def page(self) -> Page:
        return self.session.current()


StepRunner = Callable[[FlowContext], Awaitable[Any]]
FailureHook = Callable[[str, Page], Awaitable[Any]]


@dataclass(frozen=True)
class FlowStep:
    """
    One named step of a flow.

    Attributes:
        name: Step name used in logs, results and errors.
        run: Coroutine function receiving the FlowContext.
        optional: Whether a failure degrades the flow instead of failing it.
        output: State key the step's return value is stored under.
        when: Guard; the step is skipped when it returns False.
        settle: Delay after the step in ms, overriding the flow default.
    """

    name: str
    run: StepRunner
    optional: bool = False
    output: Optional[str] = None
    when: Optional[Callable[[FlowContext], bool]] = None
    settle: Optional[float] = None


@dataclass
class FlowResult:
    name: str
    status: FlowStatus
    executed: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    degraded: list[str] = field(default_factory=list)
    state: FlowState = field(default_factory=FlowState)


class Flow:
    """A named, ordered sequence of steps sharing a session and state."""

    def __init__(
        self,
        name: str,
        steps: Sequence[FlowStep],
        session: SessionBridge,
        timeout: Optional[float] = None,
        settle: float = 0,
        on_failure: Optional[FailureHook] = None,
        state: Optional[FlowState] = None,
    ) -> None:
        names = [s.name for s in steps]
        if len(set(names)) != len(names):
            raise InvalidConfiguration(f"Duplicate step names in flow '{name}': {names}")
        self.name = name
        self.steps = list(steps)
        self.session = session
        self.timeout = timeout
        self.settle = settle
        self.on_failure = on_failure
        self.state = state if state is not None else FlowState()
        self.status = FlowStatus.NOT_STARTED
        self.current_step: Optional[str] = None

    async def run(self) -> FlowResult:
        """
        Run all steps in order.

        Returns:
            FlowResult describing executed, skipped and degraded steps.

        Raises:
            FlowStepFailed: If a mandatory step failed or the flow timed out.
        """
        if self.status is not FlowStatus.NOT_STARTED:
            raise InvalidConfiguration(f"Flow '{self.name}' has already run")

        result = FlowResult(self.name, FlowStatus.RUNNING, state=self.state)
        ctx = FlowContext(self.name, self.session, self.state)
        deadline = (time.monotonic() + self.timeout / 1000
                    if self.timeout is not None else None)
        self.status = FlowStatus.RUNNING
        logger.info("Flow '%s' started (%d steps)", self.name, len(self.steps))

        for position, step in enumerate(self.steps):
            self.current_step = step.name

            if step.when is not None and not step.when(ctx):
                logger.info("[%s] skip %s", self.name, step.name)
                result.skipped.append(step.name)
                continue

            logger.info("[%s] step %s", self.name, step.name)
            try:
                value = await self._run_step(step, ctx, deadline)
            except FlowTimeout as e:
                await self._fail(step, e, result)
            except Exception as e:
                if not step.optional:
                    await self._fail(step, e, result)
                self._degrade(step, e, result)
                continue

            result.executed.append(step.name)
            if step.output is not None:
                self.state.set(step.output, value)

            if position < len(self.steps) - 1:
                await self._settle(step)

        self.status = FlowStatus.COMPLETED
        self.current_step = None
        result.status = FlowStatus.COMPLETED
        logger.info("Flow '%s' completed; degraded=%s skipped=%s",
                    self.name, result.degraded, result.skipped)
        return result

    async def _run_step(self, step: FlowStep, ctx: FlowContext,
                        deadline: Optional[float]) -> Any:
        if deadline is None:
            return await step.run(ctx)
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            raise FlowTimeout([f"flow:{self.name}"], self.timeout)
        scope = asyncio.timeout(remaining)
        try:
            async with scope:
                return await step.run(ctx)
        except TimeoutError as e:
            if not scope.expired():
                raise
            raise FlowTimeout([f"flow:{self.name}"], self.timeout) from e

    def _degrade(self, step: FlowStep, error: BaseException,
                 result: FlowResult) -> None:
        logger.warning("[%s] optional step %s failed, continuing: %s",
                       self.name, step.name, error)
        result.degraded.append(step.name)
        if step.output is not None:
            self.state.mark_absent(step.output)

    async def _fail(self, step: FlowStep, error: BaseException,
                    result: FlowResult) -> None:
        self.status = FlowStatus.FAILED
        result.status = FlowStatus.FAILED
        logger.error("[%s] step %s failed: %s", self.name, step.name, error)
        if self.on_failure is not None:
            try:
                await self.on_failure(f"{self.name}-{step.name}",
                                      self.session.current())
            except Exception as hook_error:
                logger.warning("Failure hook for %s raised: %s",
                               step.name, hook_error)
        raise FlowStepFailed(step.name, cause=error,
                             flow_name=self.name) from error

    async def _settle(self, step: FlowStep) -> None:
        delay = self.settle if step.settle is None else step.settle
        if delay > 0:
            await asyncio.sleep(delay / 1000)
