"""File upload parsing — CSV/XLSX into participant and housing records."""

import uuid
import zipfile
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import pandas as pd

from models.housing import HousingUnit
from models.participant import Participant, ParticipantNeed
from utils.logger import get_logger


logger = get_logger(__name__)


@dataclass
class ParticipantImport:
    participants: List[Participant] = field(default_factory=list)
    dropped_rows: int = 0


@dataclass
class HousingImport:
    units: List[HousingUnit] = field(default_factory=list)
    dropped_rows: int = 0


def _new_id() -> str:
    return uuid.uuid4().hex


def _cell(row: pd.Series, position: int) -> str:
    """Stripped text of a positional cell, empty if the column is absent."""
    if position >= len(row):
        return ""
    value = row.iloc[position]
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return ""
    return str(value).strip()


def parse_quantity(text: str) -> Optional[int]:
    """Parse a positive whole quantity; None for anything else.

    Spreadsheets often hand back whole numbers as "2.0", which is accepted.
    """
    text = text.strip()
    if not text:
        return None
    try:
        quantity = int(text)
    except ValueError:
        try:
            as_float = float(text)
        except ValueError:
            return None
        if not as_float.is_integer():
            return None
        quantity = int(as_float)
    return quantity if quantity > 0 else None


def parse_participants(df: pd.DataFrame) -> ParticipantImport:
    """Convert participant rows (name, housing type, quantity) into Participants.

    Rows sharing a name are merged into one participant whose needs keep row
    order. Incomplete rows and non-positive or non-numeric quantities are
    dropped and counted.
    """
    needs_by_name: Dict[str, List[ParticipantNeed]] = {}
    dropped = 0
    for _, row in df.iterrows():
        name = _cell(row, 0)
        housing_type = _cell(row, 1)
        quantity = parse_quantity(_cell(row, 2))
        if not name or not housing_type or quantity is None:
            dropped += 1
            continue
        needs_by_name.setdefault(name, []).append(ParticipantNeed(housing_type, quantity))

    participants = [
        Participant(participant_id=_new_id(), name=name, needs=tuple(needs))
        for name, needs in needs_by_name.items()
    ]
    logger.info(
        "Parsed %d participants from %d rows (%d dropped)",
        len(participants), len(df), dropped,
    )
    return ParticipantImport(participants=participants, dropped_rows=dropped)


def parse_housing(df: pd.DataFrame) -> HousingImport:
    """Convert housing rows (type, district, building, floor, room, area,
    construction area) into HousingUnits. Rows without a type are dropped."""
    units = []
    dropped = 0
    for _, row in df.iterrows():
        housing_type = _cell(row, 0)
        if not housing_type:
            dropped += 1
            continue
        units.append(HousingUnit(
            unit_id=_new_id(),
            housing_type=housing_type,
            district=_cell(row, 1),
            building=_cell(row, 2),
            floor=_cell(row, 3),
            room_number=_cell(row, 4),
            area=_cell(row, 5),
            construction_area=_cell(row, 6),
        ))
    logger.info("Parsed %d housing units from %d rows (%d dropped)", len(units), len(df), dropped)
    return HousingImport(units=units, dropped_rows=dropped)


def _fit_columns(df: pd.DataFrame, columns: int) -> pd.DataFrame:
    """Trim or pad to exactly ``columns`` positional columns of text."""
    df = df.iloc[:, :columns].copy()
    for position in range(len(df.columns), columns):
        df[position] = ""
    df.columns = range(columns)
    return df.fillna("").reset_index(drop=True)


def load_file(uploaded_file, columns: int) -> pd.DataFrame:
    """Load an uploaded file (CSV or XLSX) as positional text cells.

    The first row is a header and is skipped. Cells are read by position, so
    data rows wider than the header keep their trailing fields.
    """
    name = uploaded_file.name.lower()
    if name.endswith(".csv"):
        df = pd.read_csv(
            uploaded_file,
            header=None,
            skiprows=1,
            names=range(columns),
            dtype=str,
            keep_default_na=False,
            index_col=False,
            encoding="utf-8-sig",
        )
    elif name.endswith(".xlsx"):
        try:
            df = pd.read_excel(
                uploaded_file, header=None, dtype=str, keep_default_na=False, engine="openpyxl",
            )
        except (zipfile.BadZipFile, KeyError) as e:
            raise ValueError(f"Could not read {name} as an Excel workbook") from e
        df = df.iloc[1:]
    else:
        raise ValueError(f"Unsupported file format: {name}. Use CSV or XLSX.")
    return _fit_columns(df, columns)
