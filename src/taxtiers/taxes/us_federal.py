"""US federal tax-year tables, loaded from YAML data files."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from taxtiers.config.schema import Bracket, TaxYearConfig
from taxtiers.io.yaml_loader import load_package_yaml, package_path
from taxtiers.utils.exceptions import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_TAX_YEAR = 2024


def _table_path(tax_year: int) -> str:
    return f"taxes/tables/us_federal_{tax_year}.yaml"


def available_tax_years() -> list[int]:
    """Tax years that ship a table file, ascending."""
    tables_dir = package_path("taxes/tables")
    years = []
    for path in tables_dir.glob("us_federal_*.yaml"):
        suffix = path.stem.rsplit("_", 1)[-1]
        if suffix.isdigit():
            years.append(int(suffix))
    return sorted(years)


def _build_brackets(rows: list[list[Any]]) -> tuple[Bracket, ...]:
    """Turn ``[upper_bound, rate]`` rows into contiguous brackets."""
    brackets = []
    prev_bound = 0.0
    for upper_bound, rate in rows:
        brackets.append(Bracket(min=prev_bound, max=upper_bound, rate=rate))
        if upper_bound is not None:
            prev_bound = float(upper_bound)
    return tuple(brackets)


def tax_year_from_tables(data: dict[str, Any]) -> TaxYearConfig:
    """Build a validated :class:`TaxYearConfig` from parsed table data.

    Raises:
        ConfigError: If a section is missing or the tables are malformed.
    """
    try:
        se = data["self_employment"]
        caps = data["pre_tax_caps"]
        penalties = data["penalties"]
        withholding = data["withholding"]
        return TaxYearConfig.model_validate(
            {
                "tax_year": data["tax_year"],
                "brackets_by_status": {
                    status: _build_brackets(rows)
                    for status, rows in data["ordinary_brackets"].items()
                },
                "standard_deduction_by_status": data["standard_deduction"],
                "child_credit_per_child": data["credits"]["child_under_17"],
                "other_dependent_credit": data["credits"]["other_dependent"],
                "se_tax_rate": se["tax_rate"],
                "se_net_income_factor": se["net_income_factor"],
                "se_deductible_fraction": se["deductible_fraction"],
                "pre_tax_cap_w2": caps["w2"],
                "pre_tax_cap_se": caps["self"],
                "charitable_pct": data["charitable_pct"],
                "underpayment_penalty_rate": penalties["underpayment_rate"],
                "false_exemption_penalty": penalties["false_exemption"],
                "default_withholding_multiplier": withholding["default_multiplier"],
                "paychecks_per_year": withholding["paychecks_per_year"],
                "quarters_per_year": withholding["quarters_per_year"],
                "overpayment_notice_threshold": withholding["overpayment_notice_threshold"],
                "impact": data["impact"],
            }
        )
    except KeyError as exc:
        raise ConfigError(f"tax tables missing section {exc}") from exc
    except (TypeError, ValueError, ValidationError) as exc:
        raise ConfigError(f"invalid tax tables: {exc}") from exc


def load_tax_year(tax_year: int = DEFAULT_TAX_YEAR) -> TaxYearConfig:
    """Load the shipped tables for ``tax_year``.

    Raises:
        ConfigError: If no table file exists for the year or it is malformed.
    """
    try:
        data = load_package_yaml(_table_path(tax_year))
    except FileNotFoundError as exc:
        raise ConfigError(
            f"no tax tables for {tax_year}; available: {available_tax_years()}"
        ) from exc
    if not isinstance(data, dict):
        raise ConfigError(f"tax tables for {tax_year} must be a mapping")
    config = tax_year_from_tables(data)
    if config.tax_year != tax_year:
        raise ConfigError(
            f"table file for {tax_year} declares tax_year {config.tax_year}"
        )
    logger.info("Loaded US federal tax tables for %d", tax_year)
    return config
