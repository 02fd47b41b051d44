from typing import List
from pydantic import BaseModel


class CompanyCard(BaseModel):
    company_id: int
    name: str
    total_clients: int = 0
    done: int = 0
    pending: int = 0
    reached_out: int = 0
    overdue: int = 0
    completion_pct: int = 0


class SummaryTotals(BaseModel):
    total_clients: int = 0
    done: int = 0
    pending: int = 0
    reached_out: int = 0
    overdue: int = 0
    completion_pct: int = 0


class SummaryResponse(BaseModel):
    companies: List[CompanyCard]
    totals: SummaryTotals
