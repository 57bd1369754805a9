"""
Rental Engine
Availability, pricing, the reservation ledger and reporting over the car fleet
"""
import logging
import threading
from collections import Counter
from datetime import datetime
from typing import List, Optional

from database import JsonDataStore, SOURCE_SEED
from models import Car, Reservation, RentalReport

logger = logging.getLogger(__name__)

NO_DATA = "No Data"


class ReservationError(ValueError):
    """A booking request the engine refuses. The message is user-facing."""


class RentalManager:
    """
    Owns the car registry and reservation ledger for the process.
    Both are loaded once from the data store; ledger changes are written back
    immediately, best effort.
    """

    def __init__(self, store: JsonDataStore):
        self.store = store
        self._lock = threading.RLock()

        result = store.load()
        self._cars: List[Car] = result.cars
        self._reservations: List[Reservation] = result.reservations

        if result.source == SOURCE_SEED:
            logger.warning("Using seed data for %s (%s)", store.data_path,
                           result.error or "no data file")
        else:
            logger.info("Loaded %d cars and %d reservations from %s",
                        len(self._cars), len(self._reservations), store.data_path)

    # Car registry

    def list_cars(self) -> List[Car]:
        """Active cars, in registry order"""
        return [car for car in self._cars if car.active]

    def find_car(self, plate: str) -> Optional[Car]:
        return next((car for car in self._cars if car.plate == plate), None)

    def daily_rate(self, plate: str) -> float:
        car = self.find_car(plate)
        return car.daily_rate if car else 0.0

    # Availability

    def is_available(self, plate: str, start: datetime, end: datetime) -> bool:
        """
        True when the car exists, is active and has no reservation overlapping
        [start, end). A booking ending exactly at start is not a conflict.
        """
        if start >= end:
            return False

        car = self.find_car(plate)
        if car is None or not car.active:
            return False

        return not any(
            r.plate == plate and not (r.end_date <= start or r.start_date >= end)
            for r in self._reservations
        )

    def list_available(self, start: datetime, end: datetime) -> List[Car]:
        if start >= end:
            return []
        return [car for car in self.list_cars() if self.is_available(car.plate, start, end)]

    # Pricing

    def quote(self, plate: str, start: datetime, end: datetime) -> float:
        """Daily rate times whole days, with same-day rentals charged as one day"""
        if start >= end:
            return 0.0

        rate = self.daily_rate(plate)
        if rate <= 0:
            return 0.0

        days = (end - start).days
        if days == 0:
            days = 1
        return rate * days

    # Reservation ledger

    def book(self, customer_name: str, plate: str, start: datetime, end: datetime) -> Reservation:
        with self._lock:
            if not self.is_available(plate, start, end):
                raise ReservationError("Car is not available for the selected dates.")
            if start >= end:
                raise ReservationError("End date must be after start date.")
            if self.find_car(plate) is None:
                raise ReservationError("Car not found.")

            reservation = Reservation(
                customer_name=customer_name,
                plate=plate,
                start_date=start,
                end_date=end,
                total_charge=self.quote(plate, start, end),
            )
            self._reservations.append(reservation)
            self._persist()

        logger.info("Booked %s for %s from %s to %s (%.2f)",
                    plate, customer_name, start, end, reservation.total_charge)
        return reservation

    def cancel_latest(self, plate: str) -> Optional[Reservation]:
        """Remove the most recently added reservation for plate, if any."""
        with self._lock:
            for index in range(len(self._reservations) - 1, -1, -1):
                if self._reservations[index].plate == plate:
                    removed = self._reservations.pop(index)
                    self._persist()
                    break
            else:
                return None

        logger.info("Cancelled reservation of %s for %s", plate, removed.customer_name)
        return removed

    def list_reservations(self) -> List[Reservation]:
        return list(self._reservations)

    def list_for_customer(self, customer_name: str) -> List[Reservation]:
        wanted = customer_name.casefold()
        return [r for r in self._reservations if r.customer_name.casefold() == wanted]

    # Reporting

    def total_revenue(self) -> float:
        return sum(r.total_charge for r in self._reservations)

    def top_rented_car(self) -> str:
        """
        Plate with the most reservations. Ties go to the plate seen first in
        the ledger, since Counter keeps first-insertion order.
        """
        counts = Counter(r.plate for r in self._reservations)
        if not counts:
            return NO_DATA

        top_plate, top_count = None, 0
        for plate, count in counts.items():
            if count > top_count:
                top_plate, top_count = plate, count
        return top_plate

    def report(self) -> RentalReport:
        return RentalReport(
            total_income=self.total_revenue(),
            top_car=self.top_rented_car(),
            total_bookings=len(self._reservations),
        )

    def _persist(self) -> None:
        result = self.store.save(self._cars, self._reservations)
        if not result.ok:
            logger.error("Could not save rental data to %s: %s",
                         self.store.data_path, result.error)


# Singleton instance
_manager_instance = None

def get_rental_manager() -> RentalManager:
    """Get or create the rental manager singleton"""
    global _manager_instance
    if _manager_instance is None:
        _manager_instance = RentalManager(JsonDataStore())
    return _manager_instance
