"""Schema validation for uploaded roster files."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional
import pandas as pd

from config.defaults import COLUMN_ALIASES


@dataclass
class ValidationResult:
    is_valid: bool = True
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


def match_columns(columns) -> Dict[str, Optional[str]]:
    """Map each roster field to the matching DataFrame column (case-insensitive)."""
    lower_map = {str(c).lower().strip(): c for c in columns}
    matched = {}
    for key, aliases in COLUMN_ALIASES.items():
        matched[key] = next((lower_map[a] for a in aliases if a in lower_map), None)
    return matched


def validate_roster(df: pd.DataFrame) -> ValidationResult:
    result = ValidationResult()
    columns = match_columns(df.columns)

    if columns["name"] is None:
        result.is_valid = False
        result.errors.append(
            f"Roster: Missing a name column. Expected one of: {COLUMN_ALIASES['name']}. "
            f"Found columns: {[str(c) for c in df.columns]}"
        )
        return result
    if df.empty:
        result.is_valid = False
        result.errors.append("Roster: File contains no data rows.")
        return result

    names = df[columns["name"]].astype(str).str.strip()
    blank = names.eq("") | df[columns["name"]].isna()
    if blank.any():
        result.warnings.append(f"Roster: {int(blank.sum())} rows without a name will be skipped.")

    dupes = names[~blank & names.duplicated(keep=False)].unique().tolist()
    if dupes:
        result.warnings.append(f"Roster: Duplicate names, only the first row is imported: {', '.join(dupes)}")

    if columns["height"] is not None:
        heights = pd.to_numeric(df[columns["height"]], errors="coerce")
        bad = df[columns["height"]].notna() & heights.isna()
        if bad.any():
            result.warnings.append(f"Roster: {int(bad.sum())} non-numeric heights will be ignored.")

    return result
