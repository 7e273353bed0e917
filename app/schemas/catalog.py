from datetime import time
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field, constr
from app.schemas.auth import Email


class FoodTruckCreateRequest(BaseModel):
    name: constr(min_length=1, max_length=100)
    description: Optional[str] = None
    image: Optional[str] = None
    location: constr(min_length=1)
    phone_no: constr(min_length=7, max_length=20)
    manager_email: Email
    manager_password: constr(min_length=8)
    manager_phone_no: Optional[str] = None


class ScheduleEntryRequest(BaseModel):
    day: int = Field(ge=0, le=6)
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    closed: bool = False


class ScheduleRequest(BaseModel):
    schedule: List[ScheduleEntryRequest] = Field(min_length=1)


class ItemRequest(BaseModel):
    item_id: Optional[int] = None
    name: constr(min_length=1, max_length=100)
    description: Optional[str] = None
    image: Optional[str] = None
    price: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    categories: List[int] = []


class CategoryRequest(BaseModel):
    name: constr(min_length=1, max_length=50)


class EmployeeRequest(BaseModel):
    email: Email
    password: constr(min_length=8)
    first_name: constr(min_length=1, max_length=100)
    last_name: constr(min_length=1, max_length=100)
    phone_no: Optional[str] = None
