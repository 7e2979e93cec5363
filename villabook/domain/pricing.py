"""Seasonal price table and stay pricing.

This module contains the functional core for pricing:
- SeasonalPriceTable holds a snapshot of non-overlapping rate cards
- compute_amount prices a stay night by night
- No database, no console

All monetary amounts are in cents (Money type).
"""

import logging
import threading
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from datetime import date
from enum import Enum

from villabook.dates import iter_nights, weekday_index
from villabook.domain.errors import OverlapError, PricingGapError
from villabook.domain.models import DateRange, Money, RuleId, SeasonalPriceRule
from villabook.domain.validation import validate_rule

logger = logging.getLogger(__name__)


class GapPolicy(Enum):
    """What to do with a night that no seasonal rule covers."""

    # Uncovered nights are free. This undercounts revenue if a season is missing.
    ZERO_FILL = "zero_fill"
    FAIL = "fail"


DEFAULT_GAP_POLICY = GapPolicy.ZERO_FILL


@dataclass(frozen=True)
class NightlyRate:
    """Immutable price of a single night of a stay."""

    night: date
    weekday: int
    price: Money
    rule_id: RuleId | None
    covered: bool


class SeasonalPriceTable:
    """Ordered set of non-overlapping seasonal price rules.

    Rules are kept sorted by start date. Mutations and lookups are
    serialized by a lock, so one table can be shared between threads.
    """

    def __init__(self, rules: Iterable[SeasonalPriceRule] = ()) -> None:
        self._lock = threading.RLock()
        self._rules: list[SeasonalPriceRule] = []
        for rule in rules:
            self.upsert(rule)

    @classmethod
    def from_snapshot(cls, rules: Iterable[SeasonalPriceRule]) -> "SeasonalPriceTable":
        """Build a table from already-stored rules without re-checking overlap.

        Overlapping rules are kept (and logged); lookups then fall back to
        the first rule by start date.
        """
        table = cls()
        ordered = sorted(rules, key=lambda r: r.date_range.start)
        for earlier, later in zip(ordered, ordered[1:]):
            if earlier.date_range.intersects(later.date_range):
                logger.warning("Seasonal rules %s and %s overlap; first match wins", earlier.id, later.id)
        table._rules = ordered
        return table

    @property
    def rules(self) -> tuple[SeasonalPriceRule, ...]:
        """Snapshot of the rules in ascending start-date order."""
        with self._lock:
            return tuple(self._rules)

    def __len__(self) -> int:
        with self._lock:
            return len(self._rules)

    def __iter__(self) -> Iterator[SeasonalPriceRule]:
        return iter(self.rules)

    def get(self, rule_id: RuleId) -> SeasonalPriceRule | None:
        with self._lock:
            return next((r for r in self._rules if r.id == rule_id), None)

    def find_overlap(self, rule: SeasonalPriceRule) -> SeasonalPriceRule | None:
        """First stored rule (other than rule itself, by id) that rule intersects."""
        with self._lock:
            for existing in self._rules:
                if rule.id is not None and existing.id == rule.id:
                    continue
                if existing.date_range.intersects(rule.date_range):
                    return existing
            return None

    def upsert(self, rule: SeasonalPriceRule) -> None:
        """Add a rule, or replace the stored rule with the same id.

        Raises:
            InvalidRangeError: If the rule ends on or before its start.
            InvalidPriceError: If any weekday price is negative.
            OverlapError: If the rule intersects another stored rule.
        """
        validate_rule(rule)

        with self._lock:
            clash = self.find_overlap(rule)
            if clash is not None:
                raise OverlapError(rule, clash)

            kept = [r for r in self._rules if rule.id is None or r.id != rule.id]
            kept.append(rule)
            kept.sort(key=lambda r: r.date_range.start)
            self._rules = kept

        logger.debug("Upserted seasonal rule %s (%s to %s)", rule.id, rule.date_range.start, rule.date_range.end)

    def remove(self, rule_id: RuleId) -> None:
        """Remove a rule by id. Removing an unknown id is a no-op."""
        with self._lock:
            self._rules = [r for r in self._rules if r.id != rule_id]

    def rule_for(self, day: date) -> SeasonalPriceRule | None:
        """First rule, by start date, whose inclusive range contains day."""
        with self._lock:
            for rule in self._rules:
                if rule.date_range.contains(day):
                    return rule
            return None

    def price_for(self, day: date) -> Money:
        """Nightly price for day, or 0 when no rule covers it."""
        rule = self.rule_for(day)
        if rule is None:
            return Money(0)
        return rule.price_for_weekday(weekday_index(day))


def nightly_breakdown(date_range: DateRange, table: SeasonalPriceTable) -> list[NightlyRate]:
    """Price every night of a stay [start, end).

    Args:
        date_range: Stay range, half-open.
        table: Seasonal price table snapshot.

    Returns:
        One NightlyRate per night; empty for a zero-length stay.
    """
    rates: list[NightlyRate] = []
    for night in iter_nights(date_range.start, date_range.end):
        rule = table.rule_for(night)
        weekday = weekday_index(night)
        if rule is None:
            rates.append(NightlyRate(night=night, weekday=weekday, price=Money(0), rule_id=None, covered=False))
        else:
            rates.append(
                NightlyRate(
                    night=night,
                    weekday=weekday,
                    price=rule.price_for_weekday(weekday),
                    rule_id=rule.id,
                    covered=True,
                )
            )
    return rates


def find_uncovered_nights(date_range: DateRange, table: SeasonalPriceTable) -> list[date]:
    """Nights of a stay that no seasonal rule covers."""
    return [night for night in iter_nights(date_range.start, date_range.end) if table.rule_for(night) is None]


def compute_amount(
    date_range: DateRange,
    table: SeasonalPriceTable,
    gap_policy: GapPolicy = DEFAULT_GAP_POLICY,
) -> Money:
    """Compute the price of a stay from seasonal weekday rates.

    Each night from start (inclusive) to end (exclusive) is priced with the
    rule covering that night, using the night's weekday.

    Args:
        date_range: Stay range, half-open.
        table: Seasonal price table snapshot.
        gap_policy: Handling of nights without a rule.

    Returns:
        Total amount in cents; 0 for a zero or negative length range.

    Raises:
        PricingGapError: If gap_policy is FAIL and some night is uncovered.
    """
    rates = nightly_breakdown(date_range, table)

    if gap_policy is GapPolicy.FAIL:
        missing = [rate.night for rate in rates if not rate.covered]
        if missing:
            raise PricingGapError(missing)

    return Money(sum(rate.price for rate in rates))
