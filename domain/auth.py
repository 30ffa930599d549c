"""Domain Entities - Front-desk staff accounts"""
from pydantic import BaseModel
from typing import Optional


class StaffUser(BaseModel):
    """Staff member allowed to book and cancel"""
    username: str
    full_name: Optional[str] = None
    disabled: bool = False

    class Config:
        from_attributes = True


class StaffUserInDB(StaffUser):
    """Staff member with hashed password"""
    hashed_password: str
