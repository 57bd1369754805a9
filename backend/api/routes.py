"""
HTTP routes for the car rental service.

Provides endpoints for:
- Listing cars and checking availability for a date range
- Price quotes and bookings
- Reservation listing/cancellation and the income report

Dates arrive as ISO-8601 strings and are parsed here; the engine only ever
sees datetimes.
"""
from datetime import datetime
from typing import List, Tuple

from fastapi import APIRouter, Depends, HTTPException

from models import (
    BookingRequest, Car, DateRangeRequest, PriceRequest, RentalReport,
    Reservation, to_naive_local,
)
from rental_engine import RentalManager, ReservationError, get_rental_manager

router = APIRouter(prefix="/api")


def parse_date(value: str) -> datetime:
    try:
        return to_naive_local(datetime.fromisoformat(value.strip()))
    except (AttributeError, ValueError):
        raise ReservationError("Invalid date format.")


def parse_range(request: DateRangeRequest) -> Tuple[datetime, datetime]:
    return parse_date(request.start_date), parse_date(request.end_date)


@router.get("/cars", response_model=List[Car])
async def list_cars(manager: RentalManager = Depends(get_rental_manager)):
    """Active cars"""
    return manager.list_cars()


@router.get("/cars/{plate}", response_model=Car)
async def get_car(plate: str, manager: RentalManager = Depends(get_rental_manager)):
    car = manager.find_car(plate)
    if not car:
        raise HTTPException(status_code=404, detail="Car not found")
    return car


@router.post("/availability")
async def check_availability(
    request: DateRangeRequest,
    manager: RentalManager = Depends(get_rental_manager),
):
    """Cars free for the whole requested range"""
    start, end = parse_range(request)
    return {"success": True, "cars": manager.list_available(start, end)}


@router.post("/availability/{plate}")
async def check_car_availability(
    plate: str,
    request: DateRangeRequest,
    manager: RentalManager = Depends(get_rental_manager),
):
    start, end = parse_range(request)
    return {"success": True, "available": manager.is_available(plate, start, end)}


@router.post("/price")
async def calculate_price(
    request: PriceRequest,
    manager: RentalManager = Depends(get_rental_manager),
):
    start, end = parse_range(request)
    return {"success": True, "price": manager.quote(request.plate, start, end)}


@router.post("/reservations")
async def book_car(
    request: BookingRequest,
    manager: RentalManager = Depends(get_rental_manager),
):
    """
    Create a reservation.
    The engine re-checks availability under its lock, so a booking that races
    another one still fails cleanly.
    """
    if not request.customer_name.strip() or not request.plate.strip():
        raise ReservationError("Customer name and plate are required.")

    start, end = parse_range(request)
    if start >= end:
        raise ReservationError("End date must be after start date.")

    reservation = manager.book(request.customer_name, request.plate, start, end)
    return {
        "success": True,
        "message": "Reservation created successfully!",
        "price": reservation.total_charge,
        "reservation": reservation,
    }


@router.get("/reservations", response_model=List[Reservation])
async def list_reservations(manager: RentalManager = Depends(get_rental_manager)):
    return manager.list_reservations()


@router.get("/reservations/customer/{customer_name}", response_model=List[Reservation])
async def list_customer_reservations(
    customer_name: str,
    manager: RentalManager = Depends(get_rental_manager),
):
    return manager.list_for_customer(customer_name)


@router.delete("/reservations/{plate}/latest")
async def cancel_latest_reservation(
    plate: str,
    manager: RentalManager = Depends(get_rental_manager),
):
    removed = manager.cancel_latest(plate)
    return {"success": True, "removed": removed is not None, "reservation": removed}


@router.get("/report", response_model=RentalReport)
async def get_report(manager: RentalManager = Depends(get_rental_manager)):
    """Total income, most rented car and booking count"""
    return manager.report()
