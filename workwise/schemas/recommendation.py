from typing import List
from pydantic import BaseModel

from workwise.schemas.job import JobWithCompanyResponse


class JobRecommendation(BaseModel):
    job: JobWithCompanyResponse
    score: float
    reasons: List[str]
