"""
Eventual-consistency helpers.

Every probe returns an Observation, a tagged outcome which tells apart a real value from an object or record
that is not there yet and from an infrastructure hiccup (failing kubectl, unreachable API server).
The poller keeps retrying on the latter two, but reports which one it saw last.
"""

import enum
import logging
from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar

import backoff

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ObservationKind(enum.Enum):
    """Kinds of the probe outcome"""

    VALUE = "value"
    NOT_READY = "not ready"
    TRANSPORT_ERROR = "transport error"


@dataclass(frozen=True)
class Observation(Generic[T]):
    """Outcome of a single probe invocation"""

    kind: ObservationKind
    result: T | None = None
    error: str | None = None

    @classmethod
    def value(cls, result: T) -> "Observation[T]":
        """Probe observed a value"""
        return cls(ObservationKind.VALUE, result=result)

    @classmethod
    def not_ready(cls, reason: str = None) -> "Observation[T]":
        """Observed object does not exist yet"""
        return cls(ObservationKind.NOT_READY, error=reason)

    @classmethod
    def transport_error(cls, error: str) -> "Observation[T]":
        """Probe failed to reach the cluster"""
        return cls(ObservationKind.TRANSPORT_ERROR, error=error)

    @property
    def ready(self) -> bool:
        """True if this observation carries a value"""
        return self.kind is ObservationKind.VALUE

    def __str__(self):
        if self.ready:
            return repr(self.result)
        if self.error:
            return f"<{self.kind.value}: {self.error}>"
        return f"<{self.kind.value}>"


@dataclass(frozen=True)
class PollPolicy:
    """How long and how often to poll, both in seconds"""

    timeout: float = 20
    interval: float = 1

    def __post_init__(self):
        if self.timeout <= 0 or self.interval <= 0:
            raise ValueError(f"Timeout and interval must be positive, got {self.timeout} and {self.interval}")
        if self.interval > self.timeout:
            raise ValueError(f"Interval {self.interval} is longer than the timeout {self.timeout}")


@dataclass(frozen=True)
class ExpectationResult(Generic[T]):
    """Outcome of the whole polling, either satisfied value or the last unsatisfying observation"""

    satisfied: bool
    last: Observation[T]
    attempts: int
    message: str = ""

    @property
    def value(self) -> T | None:
        """Value of the last observation"""
        return self.last.result

    def describe(self) -> str:
        """Human-readable diagnostic showing what was actually seen"""
        if self.satisfied:
            return f"{self.message}: satisfied by {self.last} after {self.attempts} attempt(s)"
        return f"{self.message}: last observed {self.last} after {self.attempts} attempt(s)"


class Eventually:
    """
    Repeatedly invokes a probe until a predicate over its value holds or the policy timeout elapses.
    The probe is invoked immediately and then after every interval, nothing is cached between attempts.
    """

    def __init__(self, probe: Callable[[], Observation], policy: PollPolicy = PollPolicy()):
        self.probe = probe
        self.policy = policy

    def until(self, predicate: Callable[[Any], bool], message: str = "") -> ExpectationResult:
        """Polls the probe, returns as soon as the predicate holds for an observed value"""
        attempts = 0

        def _satisfied(observation: Observation) -> bool:
            return observation.ready and bool(predicate(observation.result))

        def _log_retry(details):
            logger.debug(
                "%s: attempt %d observed %s, retrying in %.1fs",
                message,
                details["tries"],
                details["value"],
                details["wait"],
            )

        @backoff.on_predicate(
            backoff.constant,
            lambda x: not _satisfied(x),
            interval=self.policy.interval,
            max_time=self.policy.timeout,
            jitter=None,
            on_backoff=_log_retry,
        )
        def _poll():
            nonlocal attempts
            attempts += 1
            return self.probe()

        last = _poll()
        result = ExpectationResult(_satisfied(last), last, attempts, message)
        if not result.satisfied:
            logger.info(result.describe())
        return result
