"""Serialization for filer inputs and derived results."""

from __future__ import annotations

import csv
import hashlib
import io
import json
from dataclasses import asdict
from typing import Any

from taxtiers.config.schema import FilingInput
from taxtiers.core.results import DerivedResult, ImpactTier


def compute_input_hash(filing: FilingInput) -> str:
    """Compute a deterministic SHA-256 hash of a filer input.

    Uses canonical JSON (sorted keys, no whitespace) so the same
    logical input always produces the same hash.
    """
    canonical = json.dumps(filing.model_dump(), sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(canonical.encode()).hexdigest()


def dump_input(filing: FilingInput) -> str:
    """Serialize a filer input to a JSON string."""
    return json.dumps(filing.model_dump(), indent=2)


def load_input(json_str: str) -> FilingInput:
    """Deserialize a filer input from a JSON string.

    Values are coerced the same way form fields are, so a hand-edited
    file with a typo in a number loads with that number as 0.
    """
    data: dict[str, Any] = json.loads(json_str)
    return FilingInput.model_validate(data)


def result_to_dict(result: DerivedResult) -> dict[str, Any]:
    """Plain-dict form of a result, suitable for JSON."""
    data = asdict(result)
    data["input"] = result.input.model_dump()
    return data


def dump_result(result: DerivedResult) -> str:
    """Serialize a derived result to JSON."""
    return json.dumps(result_to_dict(result), indent=2)


def dump_impact_csv(tiers: tuple[ImpactTier, ...]) -> str:
    """Export collective impact projections as CSV.

    Returns:
        CSV string with Tier, Fraction, People, Annual, Biweekly columns.
    """
    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(["Tier", "Fraction", "People", "Annual", "Biweekly"])
    for tier in tiers:
        for row in tier.rows:
            writer.writerow(
                [
                    tier.label,
                    f"{row.fraction:.4f}",
                    f"{row.people:.0f}",
                    f"{row.annual:.2f}",
                    f"{row.biweekly:.2f}",
                ]
            )
    return output.getvalue()
