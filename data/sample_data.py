"""Generate synthetic participant and housing tables for demos and tests."""

import pandas as pd
import random
import os

from config.defaults import HOUSING_COLUMNS, PARTICIPANT_COLUMNS


SAMPLE_REQUESTS = [
    ("Zhang Wei", "2BR", 1),
    ("Li Na", "1BR", 1),
    ("Wang Fang", "3BR", 1),
    ("Liu Yang", "2BR", 2),
    ("Chen Jie", "1BR", 1),
    ("Chen Jie", "2BR", 1),
    ("Zhao Lei", "3BR", 1),
    ("Huang Min", "1BR", 2),
    ("Zhou Tao", "2BR", 1),
    ("Wu Xia", "1BR", 1),
]

# Housing type -> (units, usable area range, construction area factor)
SAMPLE_STOCK = {
    "1BR": (7, (38, 52), 1.25),
    "2BR": (6, (62, 78), 1.22),
    "3BR": (3, (88, 105), 1.20),
}


def generate_participants_df() -> pd.DataFrame:
    """Participant requests for 9 households, one of them with two needs."""
    return pd.DataFrame(
        [(name, t, str(q)) for name, t, q in SAMPLE_REQUESTS],
        columns=PARTICIPANT_COLUMNS,
    )


def generate_housing_df() -> pd.DataFrame:
    """Housing stock across two districts with a little spare supply per type."""
    random.seed(42)
    rows = []
    room_counter = {}
    for housing_type, (count, (low, high), factor) in SAMPLE_STOCK.items():
        for _ in range(count):
            district = random.choice(["East District", "West District"])
            building = f"Bldg {random.randint(1, 4)}"
            floor = random.randint(2, 18)
            key = (district, building, floor)
            room_counter[key] = room_counter.get(key, 0) + 1
            area = round(random.uniform(low, high), 1)
            rows.append([
                housing_type,
                district,
                building,
                str(floor),
                f"{floor}{room_counter[key]:02d}",
                str(area),
                str(round(area * factor, 1)),
            ])
    return pd.DataFrame(rows, columns=HOUSING_COLUMNS)


def generate_sample_csvs(output_dir: str):
    """Write sample CSV files to the given directory."""
    os.makedirs(output_dir, exist_ok=True)
    generate_participants_df().to_csv(os.path.join(output_dir, "participants.csv"), index=False)
    generate_housing_df().to_csv(os.path.join(output_dir, "housing.csv"), index=False)


if __name__ == "__main__":
    out = os.path.join(os.path.dirname(__file__), "..", "sample_files")
    generate_sample_csvs(out)
    print("Sample CSV files generated in sample_files/")
