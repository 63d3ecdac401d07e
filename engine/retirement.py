"""
Retirement projection — a guardian's own corpus, alongside the education plan.

  accumulation (yearly): corpus = corpus * (1 + r_pre) + monthly * 12
  drawdown (yearly):     corpus = corpus * (1 + r_post) - expense_y * 12
                         expense_y = expense_at_retirement * (1 + inflation) ** (y - 1)

The shortfall year is the first drawdown year the corpus reaches 0; a
depleted corpus stays at 0. The suggested corpus is the first-year need
divided by the real return (r_post - inflation), undefined when that is <= 0.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, List, Literal, Mapping, Optional, Tuple

import pandas as pd

from core.utils import coerce_number, currency_round

logger = logging.getLogger(__name__)


Phase = Literal["pre", "post"]


@dataclass(frozen=True)
class RetirementParams:
    current_age: int = 30
    retirement_age: int = 60
    life_expectancy: int = 85
    current_corpus: float = 300000.0
    monthly_contribution: float = 15000.0
    return_pre: float = 0.10
    return_post: float = 0.06
    inflation: float = 0.05
    monthly_expense: float = 40000.0

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "RetirementParams":
        """Form-style record: camelCase keys, rates in percent, text values."""
        d = cls()

        def num(key: str, default: float) -> float:
            return coerce_number(raw.get(key), default=default)

        return cls(
            current_age=int(num("currentAge", d.current_age)),
            retirement_age=int(num("retirementAge", d.retirement_age)),
            life_expectancy=int(num("lifeExpectancy", d.life_expectancy)),
            current_corpus=num("currentCorpus", d.current_corpus),
            monthly_contribution=num("monthlyContribution", d.monthly_contribution),
            return_pre=coerce_number(raw.get("expectedReturnPre"), default=d.return_pre * 100, minimum=None) / 100,
            return_post=coerce_number(raw.get("expectedReturnPost"), default=d.return_post * 100, minimum=None) / 100,
            inflation=coerce_number(raw.get("inflationRate"), default=d.inflation * 100, minimum=None) / 100,
            monthly_expense=num("currentMonthlyExpense", d.monthly_expense),
        )


@dataclass(frozen=True)
class RetirementYear:
    year: int
    age: int
    corpus: float
    phase: Phase


@dataclass(frozen=True)
class RetirementProjection:
    history: Tuple[RetirementYear, ...]
    years_to_retirement: int
    years_in_retirement: int
    corpus_at_retirement: float
    expense_at_retirement: float       # monthly, inflated to the retirement year
    annual_need_at_retirement: float
    suggested_corpus: Optional[float]  # None when the real return is not positive
    corpus_gap: Optional[float]
    shortfall_year: Optional[int]      # drawdown year 1..n, None if the corpus lasts
    final_corpus: float

    @property
    def shortfall_age(self) -> Optional[int]:
        if self.shortfall_year is None:
            return None
        return self.history[0].age + self.years_to_retirement + self.shortfall_year

    def phase(self, phase: Phase) -> Tuple[RetirementYear, ...]:
        return tuple(h for h in self.history if h.phase == phase)

    def to_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame(
            [{"year": h.year, "age": h.age, "corpus": h.corpus, "phase": h.phase} for h in self.history],
            columns=["year", "age", "corpus", "phase"],
        )


def project_retirement(
    params: RetirementParams,
    *,
    start_year: Optional[int] = None,
) -> RetirementProjection:
    """
    Project the corpus through accumulation and drawdown.

    Parameters
    ----------
    params : RetirementParams
        Ages, balances and decimal rates.
    start_year : int, optional
        Calendar year of the current age; defaults to this year.
    """
    p = params
    year0 = date.today().year if start_year is None else start_year
    years_to_retirement = max(0, p.retirement_age - p.current_age)
    years_in_retirement = max(0, p.life_expectancy - p.retirement_age)

    history: List[RetirementYear] = []

    corpus = float(p.current_corpus)
    for y in range(years_to_retirement + 1):
        if y > 0:
            corpus = corpus * (1.0 + p.return_pre) + p.monthly_contribution * 12
        history.append(
            RetirementYear(year0 + y, p.current_age + y, max(0.0, currency_round(corpus)), "pre")
        )

    expense_at_retirement = p.monthly_expense * (1.0 + p.inflation) ** years_to_retirement
    corpus_at_retirement = history[-1].corpus

    shortfall_year: Optional[int] = None
    for y in range(1, years_in_retirement + 1):
        withdrawal = expense_at_retirement * (1.0 + p.inflation) ** (y - 1) * 12
        corpus = corpus * (1.0 + p.return_post) - withdrawal
        if corpus <= 0:
            if shortfall_year is None:
                shortfall_year = y
            corpus = 0.0
        history.append(
            RetirementYear(
                year0 + years_to_retirement + y,
                p.retirement_age + y,
                currency_round(corpus),
                "post",
            )
        )

    annual_need = expense_at_retirement * 12
    real_return = p.return_post - p.inflation
    if real_return > 0:
        suggested: Optional[float] = currency_round(annual_need / real_return)
        gap: Optional[float] = max(0.0, suggested - corpus_at_retirement)
    else:
        suggested = gap = None

    logger.debug(
        "retirement: %d years to retirement, %d in retirement, shortfall_year=%s",
        years_to_retirement, years_in_retirement, shortfall_year,
    )

    return RetirementProjection(
        history=tuple(history),
        years_to_retirement=years_to_retirement,
        years_in_retirement=years_in_retirement,
        corpus_at_retirement=corpus_at_retirement,
        expense_at_retirement=currency_round(expense_at_retirement),
        annual_need_at_retirement=currency_round(annual_need),
        suggested_corpus=suggested,
        corpus_gap=gap,
        shortfall_year=shortfall_year,
        final_corpus=currency_round(corpus),
    )
