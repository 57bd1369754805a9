"""
Pydantic models for the car rental service
"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


def to_naive_local(value: datetime) -> datetime:
    """Aware datetimes become naive local time so all comparisons agree."""
    if value.tzinfo is not None:
        try:
            return value.astimezone().replace(tzinfo=None)
        except OverflowError:
            raise ValueError(f"Date out of range: {value.isoformat()}")
    return value


class CamelModel(BaseModel):
    """camelCase on the wire and on disk, snake_case in Python"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Car(CamelModel):
    """A rentable vehicle"""
    plate: str = ""
    make_model: str = ""
    daily_rate: float = 0.0
    image_url: str = ""
    category: str = "Sedan"  # Sedan, SUV, Hatchback
    active: bool = True


class Reservation(CamelModel):
    """One car booked by one customer over [start_date, end_date)"""
    customer_name: str = ""
    plate: str = ""
    # legacy records without dates load as datetime.min
    start_date: datetime = datetime.min
    end_date: datetime = datetime.min
    total_charge: float = 0.0
    created_at: datetime = Field(default_factory=datetime.now)

    @field_validator("start_date", "end_date", "created_at")
    @classmethod
    def _naive_local(cls, value: datetime) -> datetime:
        return to_naive_local(value)


class DataContainer(CamelModel):
    """The persisted envelope"""
    cars: Optional[List[Car]] = None
    reservations: Optional[List[Reservation]] = None


class DateRangeRequest(CamelModel):
    start_date: str = ""
    end_date: str = ""


class PriceRequest(DateRangeRequest):
    plate: str = ""


class BookingRequest(DateRangeRequest):
    customer_name: str = ""
    plate: str = ""


class RentalReport(CamelModel):
    """Aggregate figures over the whole ledger"""
    success: bool = True
    total_income: float
    top_car: str
    total_bookings: int
