from pydantic import BaseModel


class CompanyOut(BaseModel):
    company_id: int
    name: str

    class Config:
        from_attributes = True
