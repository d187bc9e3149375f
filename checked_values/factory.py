"""
The clamp factory.

The factory does NOT just build clamp types - it *verifies* them against
their contracts before releasing them.

Flow:
  1. Caller requests a clamp type for a kind, limits and behavior.
  2. Factory builds a named HardClamp or SoftClamp subclass.
  3. Factory runs every contract against the new type.
  4. If verification passes  -> return the type.
     If verification fails   -> raise, never hand out a broken type.

The factory only talks to the capability surface (bounds, behavior,
conversion), which is the same surface an external code generator uses.
"""

from __future__ import annotations

import itertools
import logging
import random
from dataclasses import dataclass, field

from checked_values.bounds import Behavior, IntKind, Panicking
from checked_values.capabilities import Bounded, Convertible, HasBehavior
from checked_values.clamp import Clamp
from checked_values.contracts import Contract, Property, all_contracts
from checked_values.errors import CheckedError, MachineOverflow
from checked_values.hard import HardClamp
from checked_values.soft import SoftClamp

logger = logging.getLogger(__name__)


@dataclass
class VerificationResult:
    """Outcome of verifying one property against one clamp type.

    ``skipped`` counts operand combinations whose raw result leaves the
    128-bit working width; those overflow under every Behavior.
    """

    property_name: str
    passed: bool
    operands: tuple[int, ...] | None = None
    tests_run: int = 0
    skipped: int = 0

    def __repr__(self) -> str:
        status = "PASS" if self.passed else "FAIL"
        at = f"  operands={self.operands}" if self.operands is not None else ""
        skip = f", {self.skipped} beyond working width" if self.skipped else ""
        return f"[{status}] {self.property_name} ({self.tests_run} tests{skip}){at}"


@dataclass
class VerificationReport:
    """Every property of one contract, checked against one clamp type."""

    clamp_type: type
    contract_name: str
    results: list[VerificationResult] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return all(r.passed for r in self.results)

    @property
    def failures(self) -> list[VerificationResult]:
        return [r for r in self.results if not r.passed]

    def summary(self) -> str:
        t = self.clamp_type
        lines = [
            f"--- {t.__name__}: {self.contract_name} "
            f"({t.kind} {t.limits}, {t.behavior.name.lower()}) ---"
        ]
        lines.extend(f"  {r}" for r in self.results)
        lines.append(f"  => {'ALL PASSED' if self.passed else 'FAILED'}")
        return "\n".join(lines)


class VerificationError(CheckedError):
    """A generated clamp type broke one of its contracts."""

    def __init__(self, report: VerificationReport):
        self.report = report
        self.clamp_type = report.clamp_type
        super().__init__(
            f"{report.clamp_type.__name__} failed verification:\n{report.summary()}"
        )


# ---------------------------------------------------------------------------
# The factory
# ---------------------------------------------------------------------------

class ClampFactory:
    """
    Produces clamp types that are verified against their contracts.

    For narrow limits the factory checks every input combination.  Wider
    limits fall back to edge values plus random samples.
    """

    EXHAUSTIVE_THRESHOLD = 64  # max limits width for brute-force check
    SAMPLE_COUNT = 2_000

    @classmethod
    def create(
        cls,
        name: str,
        kind: IntKind,
        lower: int | None = None,
        upper: int | None = None,
        behavior: Behavior = Panicking,
        *,
        soft: bool = False,
    ) -> type[Clamp]:
        """Build, verify, and return a clamp type."""
        base = SoftClamp if soft else HardClamp
        clamp_type = type(
            name,
            (base,),
            {"__module__": __name__},
            kind=kind,
            behavior=behavior,
            lower=lower,
            upper=upper,
        )
        cls.verify(clamp_type)
        return clamp_type

    @classmethod
    def verify(cls, clamp_type: type[Clamp]) -> None:
        """Raise VerificationError unless ``clamp_type`` meets every contract."""
        for capability in (Bounded, HasBehavior, Convertible):
            if not isinstance(clamp_type, capability):
                raise TypeError(
                    f"{clamp_type.__name__} lacks the {capability.__name__} capability"
                )
        for contract in all_contracts():
            report = cls._verify_contract(contract, clamp_type)
            logger.debug("%s\n%s", clamp_type.__name__, report.summary())
            if not report.passed:
                raise VerificationError(report)

    # -- internal ---------------------------------------------------------

    @classmethod
    def _verify_contract(
        cls, contract: Contract, clamp_type: type[Clamp]
    ) -> VerificationReport:
        report = VerificationReport(clamp_type=clamp_type, contract_name=contract.name)
        for prop in contract:
            report.results.append(cls._verify_property(prop, clamp_type))
        return report

    @classmethod
    def _verify_property(
        cls, prop: Property, clamp_type: type[Clamp]
    ) -> VerificationResult:
        limits = clamp_type.limits
        if limits.width <= cls.EXHAUSTIVE_THRESHOLD:
            domain = range(limits.lower, limits.upper + 1)
            combos = itertools.product(domain, repeat=prop.arity)
        else:
            combos = _generate_samples(clamp_type, prop.arity, cls.SAMPLE_COUNT)

        tests_run = skipped = 0
        for combo in combos:
            tests_run += 1
            try:
                passed = prop.check(clamp_type, *combo)
            except MachineOverflow:
                if prop.exceeds_working_width(*combo):
                    skipped += 1
                    continue
                passed = False
            if not passed:
                return VerificationResult(
                    property_name=prop.name,
                    passed=False,
                    operands=combo,
                    tests_run=tests_run,
                    skipped=skipped,
                )

        return VerificationResult(
            property_name=prop.name,
            passed=True,
            tests_run=tests_run,
            skipped=skipped,
        )


def clamped(
    kind: IntKind,
    lower: int | None = None,
    upper: int | None = None,
    behavior: Behavior = Panicking,
    *,
    soft: bool = False,
    name: str | None = None,
) -> type[Clamp]:
    """Shorthand for ClampFactory.create with a generated name."""
    if name is None:
        family = "SoftClamp" if soft else "HardClamp"
        name = f"{family}_{kind}_{behavior.name.lower()}"
    return ClampFactory.create(name, kind, lower, upper, behavior, soft=soft)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _generate_samples(
    clamp_type: type[Clamp], arity: int, count: int
) -> list[tuple[int, ...]]:
    """Edge-case combinations followed by random fill."""
    lo, hi = clamp_type.lower, clamp_type.upper

    edge_values = [lo, lo + 1, -1, 0, 1, 2, hi - 1, hi]
    edge_values = sorted({v for v in edge_values if lo <= v <= hi})

    samples: list[tuple[int, ...]] = list(
        itertools.product(edge_values, repeat=arity)
    )

    while len(samples) < count:
        samples.append(tuple(random.randint(lo, hi) for _ in range(arity)))

    return samples
