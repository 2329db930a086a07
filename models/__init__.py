from models.housing import HousingUnit
from models.participant import Participant, ParticipantNeed
from models.allocation import AllocationResult, NeedShortfall
from models.audit import AuditEntry
