"""Final result set assembly and the tabular export."""

import io
from collections import Counter
from typing import Dict, List, Sequence, Tuple

import pandas as pd

from models.allocation import AllocationResult
from models.housing import HousingUnit
from config.defaults import EXPORT_HEADER, EXPORT_CSV_ENCODING, EXPORT_SHEET_NAME


def aggregate_results(results: Sequence[AllocationResult]) -> Tuple[AllocationResult, ...]:
    """Freeze the run's results in rank order."""
    return tuple(sorted(results, key=lambda r: r.rank))


def _unit_columns(unit: HousingUnit) -> List[str]:
    return [
        unit.housing_type,
        unit.district,
        unit.building,
        unit.floor,
        unit.room_number,
        unit.area,
        unit.construction_area,
    ]


def build_export_rows(results: Sequence[AllocationResult]) -> List[List[str]]:
    """Header plus one row per allocated unit.

    Rank, name and count appear only on a participant's first row so the units
    group visually under their owner. A participant who received nothing still
    gets a row with a count of 0.
    """
    rows = [list(EXPORT_HEADER)]
    blank_unit = [""] * 7
    for result in aggregate_results(results):
        owner = [str(result.rank), result.participant_name, str(result.unit_count)]
        if not result.allocated_units:
            rows.append(owner + blank_unit)
            continue
        for i, unit in enumerate(result.allocated_units):
            lead = owner if i == 0 else ["", "", ""]
            rows.append(lead + _unit_columns(unit))
    return rows


def build_export_df(results: Sequence[AllocationResult]) -> pd.DataFrame:
    rows = build_export_rows(results)
    return pd.DataFrame(rows[1:], columns=rows[0])


def export_csv_bytes(results: Sequence[AllocationResult]) -> bytes:
    df = build_export_df(results)
    return df.to_csv(index=False).encode(EXPORT_CSV_ENCODING)


def export_excel_bytes(results: Sequence[AllocationResult]) -> bytes:
    buffer = io.BytesIO()
    with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
        build_export_df(results).to_excel(writer, sheet_name=EXPORT_SHEET_NAME, index=False)
    return buffer.getvalue()


def summarize_by_type(results: Sequence[AllocationResult]) -> Dict[str, int]:
    """Allocated unit count per housing type."""
    counts: Dict[str, int] = {}
    for result in results:
        for unit in result.allocated_units:
            counts[unit.housing_type] = counts.get(unit.housing_type, 0) + 1
    return counts


def check_conservation(
    results: Sequence[AllocationResult],
    units: Sequence[HousingUnit],
) -> List[str]:
    """Audit a finished run against the original supply.

    Returns a list of problems; an empty list means no unit was granted twice,
    every granted unit came from the supply, and no type was over-allocated.
    """
    problems = []
    known = {u.unit_id for u in units}
    granted_ids = Counter(u.unit_id for r in results for u in r.allocated_units)

    for unit_id, count in granted_ids.items():
        if count > 1:
            problems.append(f"Unit {unit_id} was allocated {count} times.")
        if unit_id not in known:
            problems.append(f"Unit {unit_id} is not part of the imported supply.")

    supply = Counter(u.housing_type for u in units)
    for housing_type, allocated in summarize_by_type(results).items():
        if allocated > supply.get(housing_type, 0):
            problems.append(
                f"Type '{housing_type}' allocated {allocated} units but only "
                f"{supply.get(housing_type, 0)} exist."
            )
    return problems
