import enum

class UserRole(str, enum.Enum):
    user = "user"
    authority = "authority"

class PrincipalKind(str, enum.Enum):
    # which credential table a principal was loaded from
    citizen = "citizen"
    authority = "authority"

class ReportType(str, enum.Enum):
    garbage = "garbage"
    drainage = "drainage"
    stagnant_water = "stagnant_water"
    other = "other"

class Severity(str, enum.Enum):
    low = "low"
    medium = "medium"
    high = "high"
    critical = "critical"

class ReportStatus(str, enum.Enum):
    submitted = "submitted"
    in_progress = "in_progress"
    resolved = "resolved"
