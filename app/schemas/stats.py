from pydantic import BaseModel

class StatsOut(BaseModel):
    totalReports: int
    resolvedReports: int
    inProgress: int
    uniqueCitizens: int
    responseTime: str
