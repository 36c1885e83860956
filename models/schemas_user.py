from typing import Annotated
from pydantic import BaseModel, EmailStr, AfterValidator, constr, conlist
from datetime import date, datetime


def _in_future(value: date) -> date:
    if value <= date.today():
        raise ValueError("Availability date must be in the future")
    return value

FutureDate = Annotated[date, AfterValidator(_in_future)]
Name = constr(strip_whitespace=True, min_length=2, max_length=100)
Interest = constr(strip_whitespace=True, min_length=2, max_length=500)
ProjectIdea = constr(strip_whitespace=True, min_length=10, max_length=1000)
Skills = conlist(constr(strip_whitespace=True, min_length=1, max_length=50), min_length=1)

class UserRegister(BaseModel):
    name: Name
    email: EmailStr
    program_of_study: Name
    interest: Interest
    skills: Skills
    project_idea: ProjectIdea
    availability_date: FutureDate
    password: constr(min_length=6, max_length=128)

class UserLogin(BaseModel):
    email: EmailStr
    password: str

class UserUpdate(BaseModel):
    name: Name | None = None
    email: EmailStr | None = None
    program_of_study: Name | None = None
    interest: Interest | None = None
    skills: Skills | None = None
    project_idea: ProjectIdea | None = None
    availability_date: FutureDate | None = None
    # current password, checked before anything is written
    password: str

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True, exclude_none=True, exclude={"password"})

class UserOut(BaseModel):
    id: str
    name: str
    email: EmailStr
    program_of_study: str
    interest: str
    skills: list[str]
    project_idea: str
    availability_date: date
    role: str
    is_active: bool
    last_login: datetime | None
    created_at: datetime
    class Config:
        from_attributes = True

class ProfileOut(UserOut):
    connections: list[str] = []
    pending_connections: list[str] = []

class ConnectionRequestIn(BaseModel):
    target_user_id: constr(strip_whitespace=True, min_length=1)

class ConnectionRespondIn(BaseModel):
    connection_id: constr(strip_whitespace=True, min_length=1)
    status: str

class AuthData(BaseModel):
    user: UserOut
    token: str
    token_type: str = "bearer"
