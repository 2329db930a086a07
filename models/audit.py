from dataclasses import dataclass
from datetime import datetime


@dataclass
class AuditEntry:
    timestamp: datetime
    action: str              # "import", "draw_sequence", "allocate", "export", "reset"
    detail: str = ""
