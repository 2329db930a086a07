from dataclasses import dataclass


@dataclass(frozen=True)
class HousingUnit:
    unit_id: str
    housing_type: str        # Matching key against participant needs, e.g. "2BR"
    district: str = ""
    building: str = ""
    floor: str = ""
    room_number: str = ""
    area: str = ""
    construction_area: str = ""
