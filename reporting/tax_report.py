# reporting/tax_report.py

"""
Human-readable tax report for the CLI.

Kept out of main.py so the formatting can be reused and tested without
going through argument parsing or stdin.
"""

import pandas as pd

from tax.tax_engine import TaxResult


def effective_rate(result: TaxResult, income: float) -> float:
    """Total tax as a percentage of income; 0.0 when income is not positive."""
    if income <= 0:
        return 0.0
    return result.total_tax / income * 100


def breakdown_frame(result: TaxResult) -> pd.DataFrame:
    """Rate-keyed breakdown as a DataFrame sorted by ascending rate."""
    df = pd.DataFrame(
        list(result.breakdown.items()),
        columns=["rate", "tax"],
    )
    return df.sort_values("rate", kind="stable").reset_index(drop=True)


def bracket_frame(result: TaxResult) -> pd.DataFrame:
    """One row per contributing bracket, in bracket order."""
    columns = ["bracket", "rate", "up_to", "taxable_amount", "tax"]
    rows = [
        {
            "bracket": b.index,
            "rate": b.rate,
            "up_to": b.up_to,
            "taxable_amount": b.taxable_amount,
            "tax": b.tax,
        }
        for b in result.brackets
    ]
    return pd.DataFrame(rows, columns=columns)


def _format_bound(value) -> str:
    if value is None or pd.isna(value):
        return "no limit"
    return f"${value:,.2f}"


def format_rate(rate) -> str:
    """Shortest exact form of a rate: 22.0 -> "22", 12.3456789 -> "12.3456789"."""
    text = repr(float(rate))
    return text[:-2] if text.endswith(".0") else text


def format_tax_report(result: TaxResult, income: float, detailed: bool = False) -> str:
    lines = ["Tax Breakdown:"]
    for row in breakdown_frame(result).itertuples(index=False):
        lines.append(f"- {format_rate(row.rate)}%: ${row.tax:.2f}")

    if detailed:
        lines.append("")
        lines.append("Per-bracket detail:")
        df = bracket_frame(result)
        if df.empty:
            lines.append("  (no bracket applies)")
        else:
            df["up_to"] = df["up_to"].map(_format_bound)
            df["rate"] = df["rate"].map(lambda r: f"{format_rate(r)}%")
            df["taxable_amount"] = df["taxable_amount"].map(lambda x: f"${x:,.2f}")
            df["tax"] = df["tax"].map(lambda x: f"${x:,.2f}")
            lines.append(df.to_string(index=False))

    lines.append("")
    lines.append(f"Total Tax Owed: ${result.total_tax:.2f}")
    lines.append(f"Effective Tax Rate: {effective_rate(result, income):.2f}%")
    return "\n".join(lines)


def print_tax_report(result: TaxResult, income: float, detailed: bool = False) -> None:
    """Print the breakdown, total and effective rate block to stdout."""
    print()
    print(format_tax_report(result, income, detailed=detailed))
