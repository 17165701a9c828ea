"""
Activity scheduler using a two-pass greedy placement.

Strategy:
1. Build the candidate date pool (allowed weekdays, minus blocked dates)
2. Strict pass: give each store, in input order, the first date that
   passes weekday rules, capacity and supervisor spreading
3. Relaxed pass: retry the leftovers with supervisor rules dropped
4. Report anything still unplaced with the most specific reason

There is no backtracking. Earlier stores get first pick of dates, so a
globally better placement may exist when stores end up unplaced.
"""

import logging
from datetime import date
from typing import Iterable, Mapping, Optional

from .types import (
    BlockedDateEvent,
    FailureReason,
    Rejection,
    ScheduleAssignment,
    ScheduleContext,
    ScheduleInputError,
    ScheduleResult,
    Store,
    StoreActivitySetting,
    UnplacedStore,
    UNASSIGNED_SUPERVISOR,
)
from .constraints import check_placement
from .dates import build_candidate_dates, weekday_name


logger = logging.getLogger(__name__)


ALLOWED_WEEKDAYS = frozenset({3, 6, 7})  # Wednesday, Saturday, Sunday
MAX_PER_DAY = 2

RELAXED_FAILURE_REASON = (
    "could not be placed even after relaxing adjacency/same-day supervisor constraints"
)
NO_DATE_AVAILABLE_REASON = "no date available"

# Most specific first
REASON_PRECEDENCE = [
    FailureReason.WEEKDAY_RESTRICTION,
    FailureReason.CAPACITY,
    FailureReason.SUPERVISOR_CONFLICT,
    FailureReason.NO_DATE_AVAILABLE,
]


def empty_pool_message(allowed_weekdays: Iterable[int]) -> str:
    days = ", ".join(weekday_name(d) for d in sorted(allowed_weekdays))
    return f"No schedulable dates in the campaign period (must fall on {days} and not be blocked)"


def most_specific_rejection(rejections: list[Rejection]) -> Rejection:
    """Pick the highest-precedence rejection, latest one within a code."""
    for code in REASON_PRECEDENCE:
        matching = [r for r in rejections if r.code == code]
        if matching:
            return matching[-1]
    return Rejection(FailureReason.NO_DATE_AVAILABLE, NO_DATE_AVAILABLE_REASON)


class ActivityScheduler:
    """
    Assigns each store of a campaign to one activity date.
    """

    def __init__(
        self,
        context: ScheduleContext,
        allowed_weekdays: Iterable[int] = ALLOWED_WEEKDAYS,
        max_per_day: int = MAX_PER_DAY,
        group_unassigned: bool = True,
    ):
        self.context = context
        self.allowed_weekdays = frozenset(allowed_weekdays)
        self.max_per_day = max_per_day
        self.group_unassigned = group_unassigned

        self._validate_inputs()

        self.candidate_dates: list[date] = build_candidate_dates(
            context.campaign_start,
            context.campaign_end,
            self.allowed_weekdays,
            context.blocked_events,
        )
        # Bookkeeping only exists for pool dates
        self.date_count: dict[date, int] = {d: 0 for d in self.candidate_dates}
        self.date_supervisors: dict[date, set[str]] = {d: set() for d in self.candidate_dates}
        self.placed: list[ScheduleAssignment] = []

    def _validate_inputs(self):
        ctx = self.context
        if ctx.campaign_end < ctx.campaign_start:
            raise ScheduleInputError(
                f"campaign_end ({ctx.campaign_end}) is before campaign_start ({ctx.campaign_start})"
            )
        if self.max_per_day < 1:
            raise ScheduleInputError(f"max_per_day must be at least 1, got {self.max_per_day}")

        bad_policy = [d for d in self.allowed_weekdays if not 1 <= d <= 7]
        if bad_policy:
            raise ScheduleInputError(f"allowed weekdays must be 1-7, got {sorted(bad_policy)}")

        seen: set[int] = set()
        for store in ctx.stores:
            if store.id in seen:
                raise ScheduleInputError(f"Store {store.id} appears more than once")
            seen.add(store.id)

        for store_id, setting in ctx.settings.items():
            bad = [d for d in (*setting.allowed_days, *setting.forbidden_days) if not 1 <= d <= 7]
            if bad:
                raise ScheduleInputError(
                    f"Store {store_id} has weekday values outside 1-7: {sorted(bad)}"
                )

    def solve(self) -> ScheduleResult:
        """
        Main solving method.

        Returns:
            ScheduleResult with placements and any unplaced stores
        """
        stores = self.context.stores
        logger.info(
            f"Auto-scheduling {len(stores)} stores over {len(self.candidate_dates)} candidate dates "
            f"({self.context.campaign_start} to {self.context.campaign_end})"
        )

        if not self.candidate_dates:
            return self._empty_pool_result()

        #1: Strict pass
        strict_failures = self._strict_pass()
        logger.info(f"Strict pass placed {len(self.placed)}/{len(stores)} stores")

        #2: Relaxed pass
        unplaced = self._relaxed_pass(strict_failures)
        logger.info(
            f"Final result: {len(self.placed)}/{len(stores)} stores placed, "
            f"{len(unplaced)} unplaced"
        )

        #3: Result
        return ScheduleResult(
            success=not unplaced,
            placed=list(self.placed),
            unplaced=unplaced,
            candidate_dates=list(self.candidate_dates),
        )

    def _empty_pool_result(self) -> ScheduleResult:
        message = empty_pool_message(self.allowed_weekdays)
        logger.warning(message)
        return ScheduleResult(
            success=False,
            placed=[],
            unplaced=[
                UnplacedStore(store=s, reason=message, reason_code=FailureReason.EMPTY_POOL)
                for s in self.context.stores
            ],
            candidate_dates=[],
            error=message,
        )

    def _strict_pass(self) -> list[tuple[Store, Optional[Rejection]]]:
        """1: Place stores with every constraint enforced."""
        failures = []
        for store in self.context.stores:
            placed_on, rejections = self._try_place(store, strict=True)
            if placed_on is None:
                last = rejections[-1] if rejections else None
                logger.debug(
                    f"Store {store.id} ({store.name}) not placed in strict pass: "
                    f"{last.message if last else NO_DATE_AVAILABLE_REASON} "
                    f"(tried {len(self.candidate_dates)} dates)"
                )
                failures.append((store, last))
        return failures

    def _relaxed_pass(
        self,
        strict_failures: list[tuple[Store, Optional[Rejection]]]
    ) -> list[UnplacedStore]:
        """2: Retry strict-pass failures without supervisor constraints."""
        unplaced = []
        for store, strict_rejection in strict_failures:
            placed_on, rejections = self._try_place(store, strict=False)
            if placed_on is not None:
                continue

            specific = most_specific_rejection(rejections)
            logger.debug(f"Store {store.id} ({store.name}) still unplaced: {specific.message}")
            unplaced.append(UnplacedStore(
                store=store,
                reason=f"{RELAXED_FAILURE_REASON}: {specific.message}",
                reason_code=specific.code,
                strict_reason=strict_rejection.message if strict_rejection else None,
            ))
        return unplaced

    def _try_place(self, store: Store, strict: bool) -> tuple[Optional[date], list[Rejection]]:
        """
        Scan the pool in order and take the first acceptable date.
        Returns the chosen date (or None) and every rejection seen on the way.
        """
        setting = self.context.settings.get(store.id)
        supervisor_id = self._supervisor_key(store)
        rejections: list[Rejection] = []

        for day in self.candidate_dates:
            rejection = check_placement(
                day,
                setting,
                supervisor_id,
                self.date_count,
                self.date_supervisors,
                self.max_per_day,
                strict=strict,
            )
            if rejection:
                rejections.append(rejection)
                continue

            self._assign(store, supervisor_id, day, relaxed=not strict)
            return day, rejections

        return None, rejections

    def _assign(self, store: Store, supervisor_id: Optional[str], day: date, relaxed: bool):
        self.placed.append(ScheduleAssignment(store_id=store.id, activity_date=day, relaxed=relaxed))
        self.date_count[day] += 1
        if supervisor_id is not None:
            self.date_supervisors[day].add(supervisor_id)
        logger.debug(
            f"Store {store.id} ({store.name}) placed on {day.isoformat()}"
            f"{' (relaxed)' if relaxed else ''}"
        )

    def _supervisor_key(self, store: Store) -> Optional[str]:
        if store.supervisor_id:
            return store.supervisor_id
        return UNASSIGNED_SUPERVISOR if self.group_unassigned else None


def solve_schedule(
    context: ScheduleContext,
    allowed_weekdays: Iterable[int] = ALLOWED_WEEKDAYS,
    max_per_day: int = MAX_PER_DAY,
    group_unassigned: bool = True,
) -> ScheduleResult:
    """Convenience function to solve a schedule."""
    solver = ActivityScheduler(
        context,
        allowed_weekdays=allowed_weekdays,
        max_per_day=max_per_day,
        group_unassigned=group_unassigned,
    )
    return solver.solve()


def schedule(
    campaign_start: date,
    campaign_end: date,
    stores: list[Store],
    settings: Optional[Mapping[int, StoreActivitySetting]] = None,
    blocked_events: Optional[Mapping[date, BlockedDateEvent]] = None,
) -> ScheduleResult:
    """
    Schedule stores for a campaign from plain inputs.

    Raises:
        ScheduleInputError: if campaign_end is before campaign_start or
            the store list / settings are malformed
    """
    context = ScheduleContext(
        campaign_start=campaign_start,
        campaign_end=campaign_end,
        stores=list(stores),
        settings=dict(settings or {}),
        blocked_events=dict(blocked_events or {}),
    )
    return solve_schedule(context)
