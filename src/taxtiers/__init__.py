"""taxtiers: US federal tax estimator with optimize, redirect and withhold tiers."""

__version__ = "0.2.0"

from taxtiers.analytics.sweep import IncomeSweep as IncomeSweep
from taxtiers.analytics.sweep import income_sweep as income_sweep
from taxtiers.config.defaults import default_input as default_input
from taxtiers.config.defaults import default_tax_year as default_tax_year
from taxtiers.config.schema import Bracket as Bracket
from taxtiers.config.schema import FilingInput as FilingInput
from taxtiers.config.schema import TaxYearConfig as TaxYearConfig
from taxtiers.core.coerce import filing_input_from_form as filing_input_from_form
from taxtiers.core.estimator import TaxEstimator as TaxEstimator
from taxtiers.core.results import DerivedResult as DerivedResult
from taxtiers.core.results import Scenario as Scenario
from taxtiers.taxes.brackets import calc_bracket_tax as calc_bracket_tax
from taxtiers.taxes.us_federal import load_tax_year as load_tax_year
