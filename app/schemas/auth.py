from typing import Optional
from pydantic import BaseModel, constr

Email = constr(pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$", max_length=255)


class RegisterRequest(BaseModel):
    email: Email
    password: constr(min_length=8)
    first_name: constr(min_length=1, max_length=100)
    last_name: constr(min_length=1, max_length=100)
    phone_no: Optional[constr(pattern=r"^[\d\-\+ ]{7,20}$")] = None
    address: Optional[str] = None


class LoginRequest(BaseModel):
    email: Email
    password: str


class RefreshRequest(BaseModel):
    refresh_token: str
