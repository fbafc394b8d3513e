"""
Department daily record Pydantic schemas.
"""
from pydantic import BaseModel
from datetime import date


class DepartmentDailyRecord(BaseModel):
    """Test counts of one department, one day and one age category."""
    department: str
    day: date
    age_category: int
    tests_total: int
    tests_positive: int
    population: int
    
    class Config:
        from_attributes = True
    
    @property
    def key(self) -> tuple:
        """Natural key (department, day, age_category)."""
        return (self.department, self.day, self.age_category)
