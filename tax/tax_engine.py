from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from config import TaxBracket, TaxConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BracketTax:
    index: int                  # position in the sorted bracket list
    rate: float
    up_to: Optional[float]
    taxable_amount: float
    tax: float


@dataclass
class TaxResult:
    total_tax: float = 0.0
    # rate -> tax for that rate. Brackets sharing a rate overwrite each
    # other here (last one wins); use `brackets` for per-bracket amounts.
    breakdown: dict[float, float] = field(default_factory=dict)
    brackets: list[BracketTax] = field(default_factory=list)


def calculate_tax(income: float, brackets: list[TaxBracket]) -> TaxResult:
    """
    Apply marginal brackets, sorted ascending by upper bound, to ``income``.

    Processing stops after the open-ended bracket, or after the first
    bracket whose bound is at or above the income. Income above the highest
    bound of a schedule with no open-ended bracket is not taxed.
    """
    result = TaxResult()
    previous_limit = 0.0

    for i, bracket in enumerate(brackets):
        taxable_amount = income - previous_limit
        if bracket.up_to is not None:
            taxable_amount = min(taxable_amount, bracket.up_to - previous_limit)

        if taxable_amount > 0:
            tax_for_bracket = taxable_amount * (bracket.rate / 100)
            result.total_tax += tax_for_bracket
            result.breakdown[bracket.rate] = tax_for_bracket
            result.brackets.append(BracketTax(
                index=i,
                rate=bracket.rate,
                up_to=bracket.up_to,
                taxable_amount=taxable_amount,
                tax=tax_for_bracket,
            ))

        if bracket.up_to is None:
            break
        previous_limit = bracket.up_to
        if income <= previous_limit:
            break

    return result


class TaxEngine:
    def __init__(self, config: Optional[TaxConfig] = None) -> None:
        if config is None:
            config = TaxConfig()
        self.config = config

    def calculate(self, income: float) -> TaxResult:
        result = calculate_tax(income, self.config.brackets)
        logger.debug(
            "Tax on %.2f: total=%.6f across %d bracket(s)",
            income,
            result.total_tax,
            len(result.brackets),
        )
        return result

    def tax_due(self, income: float) -> float:
        return self.calculate(income).total_tax
