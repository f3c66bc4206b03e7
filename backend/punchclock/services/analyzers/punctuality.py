from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Optional

from punchclock.core.enums import RankingCategory
from punchclock.schemas.attendance import ClassifiedDay, Employee
from punchclock.schemas.report import PunctualityRecord, PunctualitySummary, RankedEmployee
from punchclock.services.analyzers.base import IssueDetector, employee_ref
from punchclock.services.calculations import distribution, round_int, standard_deviation

logger = logging.getLogger(__name__)

NEEDS_IMPROVEMENT_BELOW = 70


def _score_band(score: int) -> str:
    if score >= 90:
        return "excellent"
    if score >= 75:
        return "good"
    if score >= 60:
        return "average"
    return "needs_work"


def _consistency_band(score: int) -> str:
    if score >= 80:
        return "high"
    if score >= 60:
        return "medium"
    return "low"


def ranking_category(rank: int, total: int) -> RankingCategory:
    percentile = rank / total * 100
    if percentile <= 10:
        return RankingCategory.TOP_PERFORMER
    if percentile <= 25:
        return RankingCategory.EXCELLENT
    if percentile <= 50:
        return RankingCategory.GOOD
    if percentile <= 75:
        return RankingCategory.AVERAGE
    return RankingCategory.NEEDS_IMPROVEMENT


class PunctualityAnalyzer(IssueDetector[PunctualityRecord, PunctualitySummary]):
    name = "punctuality"

    def day_score(self, day: ClassifiedDay) -> int:
        if not day.is_present:
            return 0
        if day.late_minutes == 0:
            return 100
        return max(0, 100 - day.late_minutes * self.config.late_score_per_minute)

    def analyze(self, employee: Employee) -> PunctualityRecord:
        working_days = employee.working_days
        scores = [self.day_score(d) for d in working_days]
        absent = sum(1 for d in working_days if d.is_absent)
        late = sum(1 for d in working_days if d.is_present and d.late_minutes > 0)

        average_score = round_int(sum(scores) / len(scores)) if scores else 0
        penalty = min(absent * self.config.absence_penalty_per_day, self.config.absence_penalty_cap)
        consistency = 100
        if len(scores) > 1:
            consistency = round_int(max(0.0, 100 - 2 * standard_deviation(scores)))

        return PunctualityRecord(
            punctuality_score=max(0, average_score - penalty),
            consistency_score=consistency,
            working_days=len(working_days),
            punctual_days=len(working_days) - absent - late,
            late_days=late,
            absent_days=absent,
            absence_penalty=penalty,
        )

    def rank(self, employees: Sequence[Employee]) -> list[RankedEmployee]:
        scored = [(employee, self.analyze(employee)) for employee in employees]
        # sorted() is stable, so input order breaks exact ties.
        scored.sort(key=lambda pair: (pair[1].punctuality_score, pair[1].consistency_score), reverse=True)
        total = len(scored)
        return [
            RankedEmployee(
                **employee_ref(employee),
                **record.model_dump(),
                rank=position,
                ranking=ranking_category(position, total),
            )
            for position, (employee, record) in enumerate(scored, start=1)
        ]

    def summarize(
        self,
        employees: Sequence[Employee],
        ranking: Optional[list[RankedEmployee]] = None,
    ) -> PunctualitySummary:
        """Population summary; pass a ranking from `rank` to skip re-scoring."""
        if ranking is None:
            ranking = self.rank(employees)
        if not ranking:
            return PunctualitySummary()

        top_n = self.config.punctuality_top_n
        needs_improvement = [e for e in ranking if e.punctuality_score < NEEDS_IMPROVEMENT_BELOW]
        needs_improvement = list(reversed(needs_improvement[-top_n:]))

        summary = PunctualitySummary(
            total_employees=len(ranking),
            average_punctuality_score=round_int(sum(e.punctuality_score for e in ranking) / len(ranking)),
            top_performers=ranking[:top_n],
            needs_improvement=needs_improvement,
            perfect_attendance=[e for e in ranking if e.late_days == 0 and e.absence_penalty == 0],
            score_distribution={
                band: 0 for band in ("excellent", "good", "average", "needs_work")
            } | distribution(ranking, lambda e: _score_band(e.punctuality_score)),
            consistency_distribution={
                band: 0 for band in ("high", "medium", "low")
            } | distribution(ranking, lambda e: _consistency_band(e.consistency_score)),
            ranking_distribution=distribution(ranking, lambda e: e.ranking.value),
        )
        logger.debug(
            "Punctuality: %d ranked, average score %d",
            summary.total_employees, summary.average_punctuality_score,
        )
        return summary
