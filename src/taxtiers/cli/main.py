"""CLI entry point for taxtiers."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import click
from pydantic import ValidationError

from taxtiers.config.schema import EMPLOYMENT_TYPES, FILING_STATUSES, FilingInput
from taxtiers.core.estimator import TaxEstimator
from taxtiers.io.serialize import dump_impact_csv, dump_result, load_input
from taxtiers.taxes.brackets import bracket_breakdown
from taxtiers.taxes.us_federal import DEFAULT_TAX_YEAR, load_tax_year
from taxtiers.utils.exceptions import TaxTiersError


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(format="%(levelname)s %(name)s: %(message)s")
    logging.getLogger().setLevel(logging.DEBUG if verbose else logging.WARNING)


def _load_filing(input_path: Path) -> FilingInput:
    try:
        return load_input(input_path.read_text())
    except (json.JSONDecodeError, ValidationError) as exc:
        raise click.ClickException(f"invalid input file {input_path}: {exc}") from exc


def _make_estimator(tax_year: int) -> TaxEstimator:
    try:
        return TaxEstimator(load_tax_year(tax_year))
    except TaxTiersError as exc:
        raise click.ClickException(str(exc)) from exc


@click.group()
@click.version_option(package_name="taxtiers")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """taxtiers: US federal tax estimator with strategy tiers."""
    _configure_logging(verbose)


@cli.command()
@click.option(
    "--input",
    "input_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to JSON filer input. Options below override its fields.",
)
@click.option("--status", type=click.Choice(FILING_STATUSES), default=None)
@click.option("--employment", type=click.Choice(EMPLOYMENT_TYPES), default=None)
@click.option("--income", default=None, type=float, help="Gross annual income.")
@click.option("--pre-tax", default=None, type=float, help="Annual pre-tax contributions.")
@click.option("--children", default=None, type=int, help="Children under 17.")
@click.option("--other-dependents", default=None, type=int, help="Other dependents.")
@click.option(
    "--custom-withholding",
    default=None,
    type=float,
    help="Withholding per paycheck (W-2) or estimated payment per quarter.",
)
@click.option(
    "--output",
    "output_path",
    type=click.Path(path_type=Path),
    default=None,
    help="Path to write results JSON.",
)
@click.option("--tax-year", default=DEFAULT_TAX_YEAR, show_default=True, type=int)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def estimate(
    input_path: Path | None,
    status: str | None,
    employment: str | None,
    income: float | None,
    pre_tax: float | None,
    children: int | None,
    other_dependents: int | None,
    custom_withholding: float | None,
    output_path: Path | None,
    tax_year: int,
    verbose: bool,
) -> None:
    """Estimate current tax and the three strategy tiers."""
    if verbose:
        _configure_logging(verbose)
    filing = _load_filing(input_path) if input_path is not None else FilingInput()

    # CLI overrides
    overrides = {
        "filing_status": status,
        "employment_type": employment,
        "annual_income": income,
        "pre_tax_contributions": pre_tax,
        "children_under_17": children,
        "other_dependents": other_dependents,
        "custom_withholding": custom_withholding,
    }
    update = {key: value for key, value in overrides.items() if value is not None}
    if custom_withholding is not None:
        update["use_advanced"] = True
    if update:
        filing = FilingInput.model_validate({**filing.model_dump(), **update})

    result = _make_estimator(tax_year).estimate(filing)
    current = result.current
    period = "paycheck" if filing.employment_type == "w2" else "quarter"

    click.echo(
        f"Tax year {result.tax_year}: {filing.filing_status}, {filing.employment_type}, "
        f"income ${filing.annual_income:,.0f}"
    )
    click.echo(f"\nTaxable income: ${current.taxable_income:,.2f}")
    click.echo(f"Tax before credits: ${current.tax_before_credits:,.2f}")
    if current.total_credits > 0:
        click.echo(f"Credits: -${current.total_credits:,.2f}")
    if current.se_tax > 0:
        click.echo(f"Self-employment tax: ${current.se_tax:,.2f}")
    click.echo(f"Tax owed: ${current.actual_tax:,.2f}")
    click.echo(f"Estimated payments: ${result.withholding.estimated:,.2f}")
    if result.withholding.overpayment_notable:
        click.echo(f"Overpaying by: ${result.withholding.overpayment:,.2f}")

    click.echo("\nScenarios:")
    for scenario in (result.optimize, result.redirect):
        click.echo(
            f"  {scenario.kind}: tax ${scenario.tax:,.2f}, keep ${scenario.savings:,.2f}/yr "
            f"(${scenario.savings_per_period:,.2f}/{period})"
        )
    withhold = result.withhold
    click.echo(
        f"  withhold: ${withhold.savings:,.2f}/yr "
        f"(${withhold.savings_per_period:,.2f}/{period})"
    )
    if withhold.risk is not None:
        click.echo(
            f"    penalty risk ${withhold.risk.total:,.2f}, "
            f"worst case ${withhold.risk.worst_case:,.2f}"
        )

    if output_path is not None:
        output_path.write_text(dump_result(result))
        click.echo(f"\nResults written to {output_path}")


@cli.command()
@click.option("--csv", "as_csv", is_flag=True, help="Print CSV instead of a table.")
@click.option("--tax-year", default=DEFAULT_TAX_YEAR, show_default=True, type=int)
def impact(as_csv: bool, tax_year: int) -> None:
    """Show collective impact projections by population share."""
    tiers = _make_estimator(tax_year).derive_collective_impact()
    if as_csv:
        click.echo(dump_impact_csv(tiers), nl=False)
        return
    for tier in tiers:
        click.echo(f"{tier.label} (${tier.per_capita:,.2f} per person)")
        for row in tier.rows:
            click.echo(
                f"  {row.fraction:.0%} ({row.people / 1e6:.1f}M people): "
                f"${row.annual / 1e9:,.1f}B/yr, ${row.biweekly / 1e9:,.2f}B every two weeks"
            )


@cli.command()
@click.option("--status", type=click.Choice(FILING_STATUSES), default="single", show_default=True)
@click.option(
    "--income", default=None, type=float, help="Show the per-bracket math at this taxable income."
)
@click.option("--tax-year", default=DEFAULT_TAX_YEAR, show_default=True, type=int)
def brackets(status: str, income: float | None, tax_year: int) -> None:
    """Print the bracket table for a filing status."""
    config = _make_estimator(tax_year).config
    table = config.brackets_for(status)
    std_ded = config.standard_deduction_for(status)
    click.echo(f"{tax_year} {status} (standard deduction ${std_ded:,.0f})")
    for bracket in table:
        upper = "and up" if bracket.max is None else f"to ${bracket.max:,.0f}"
        click.echo(f"  {bracket.rate:.0%}: ${bracket.min:,.0f} {upper}")

    if income is not None:
        click.echo(f"\nTax on ${income:,.2f}:")
        total = 0.0
        for piece in bracket_breakdown(income, table):
            total += piece.tax
            click.echo(
                f"  {piece.bracket.rate:.0%} x ${piece.taxed_amount:,.2f} = ${piece.tax:,.2f}"
            )
        click.echo(f"  total ${total:,.2f}")


if __name__ == "__main__":
    cli()
