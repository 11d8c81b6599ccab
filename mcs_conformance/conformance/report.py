"""Outcomes of conformance checks"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ClusterOutcome:
    """Outcome of a check on a single cluster"""

    cluster: str
    passed: bool
    diagnostic: str = ""

    def __str__(self):
        status = "conformant" if self.passed else "non-conformant"
        if self.diagnostic:
            return f"[{self.cluster}] {status}: {self.diagnostic}"
        return f"[{self.cluster}] {status}"


@dataclass
class CheckReport:
    """Collects per-cluster outcomes of one check, the check passes only if every outcome passed"""

    check: str
    spec_ref: str
    outcomes: list[ClusterOutcome] = field(default_factory=list)

    def add(self, cluster: str, passed: bool, diagnostic: str = "") -> ClusterOutcome:
        """Records outcome for a cluster"""
        outcome = ClusterOutcome(cluster, passed, diagnostic)
        self.outcomes.append(outcome)
        return outcome

    @property
    def passed(self) -> bool:
        """True if the check was evaluated and no cluster failed"""
        return len(self.outcomes) > 0 and all(outcome.passed for outcome in self.outcomes)

    @property
    def failures(self) -> list[ClusterOutcome]:
        """Outcomes of clusters that failed the check"""
        return [outcome for outcome in self.outcomes if not outcome.passed]

    @property
    def clusters(self) -> list[str]:
        """Names of the clusters that were checked, in order"""
        return [outcome.cluster for outcome in self.outcomes]

    def describe(self) -> str:
        """Diagnostic listing all failures together with the reference to the specification"""
        if self.passed:
            return f"{self.check}: conformant on {', '.join(self.clusters)}"
        lines = [f"Non-conformant: {self.check} (see {self.spec_ref})"]
        if not self.outcomes:
            lines.append("No cluster was checked")
        lines.extend(str(outcome) for outcome in self.failures)
        return "\n".join(lines)


def spec_ref_url(marker, default: str) -> str:
    """Returns URL of the `spec_ref` marker, marker without arguments refers to the configured specification"""
    if marker.args:
        return marker.args[0]
    return default
