"""Default configuration constants for the Housing Lottery app."""

APP_TITLE = "Housing Allocation Assistant"
APP_SUBTITLE = "A fair, transparent, randomized allocation tool"

# Logging
LOG_LEVEL = "INFO"
LOG_LEVEL_ENV_VAR = "HOUSING_LOTTERY_LOG_LEVEL"

# Participant file: name, housing type, quantity (positional, header row skipped)
PARTICIPANT_COLUMNS = ["Name", "Housing Type", "Quantity"]
PARTICIPANT_MIN_COLUMNS = 3

# Housing file: type first (used for matching), the rest are display-only
HOUSING_COLUMNS = [
    "Housing Type",
    "District",
    "Building",
    "Floor",
    "Room Number",
    "Area",
    "Construction Area",
]
HOUSING_MIN_COLUMNS = 1

# Export table, one row per allocated unit
EXPORT_HEADER = [
    "顺序号",
    "参与者",
    "分配房源数量",
    "房源类型",
    "区",
    "栋",
    "层",
    "房号",
    "面积(m²)",
    "建筑面积(m²)",
]
EXPORT_CSV_ENCODING = "utf-8-sig"  # BOM so spreadsheet tools detect UTF-8
EXPORT_SHEET_NAME = "Allocation"
EXPORT_FILE_STEM = "housing_allocation"

SUPPORTED_UPLOAD_TYPES = ["csv", "xlsx"]

# Stage labels shown in the sidebar progress list
STAGE_LABELS = {
    "importing": "1. Data Import",
    "sequencing": "2. Draw Sequence",
    "allocating": "3. Allocate Units",
    "showing_results": "4. Results",
}
