"""
Data store for the car rental service
Loads and saves the cars/reservations envelope as a single JSON file
"""
import json
from datetime import datetime, timedelta
from typing import Dict, List, Optional, Tuple, Type

from pydantic import BaseModel, Field

from config import resolve_data_path
from models import Car, DataContainer, Reservation

SOURCE_FILE = "file"
SOURCE_SEED = "seed"

IMAGE_BASE = "https://images.unsplash.com"


class LoadResult(BaseModel):
    """What load() found. error is set when the file was unusable."""
    cars: List[Car] = Field(default_factory=list)
    reservations: List[Reservation] = Field(default_factory=list)
    source: str = SOURCE_FILE
    error: Optional[str] = None


class SaveResult(BaseModel):
    ok: bool = True
    error: Optional[str] = None


def seed_data(now: Optional[datetime] = None) -> Tuple[List[Car], List[Reservation]]:
    """The fixed fleet and two historical bookings used when no data file is usable"""
    now = now or datetime.now()
    cars = [
        Car(plate="34ABC123", make_model="Toyota Corolla 2024", daily_rate=2500,
            image_url=f"{IMAGE_BASE}/photo-1621007947382-bb3c3994e3fb?w=800&h=600&fit=crop",
            category="Sedan"),
        Car(plate="34DEF456", make_model="Renault Clio 5", daily_rate=2650,
            image_url=f"{IMAGE_BASE}/photo-1617814076367-b759c7d7e738?w=800&h=600&fit=crop",
            category="Hatchback"),
        Car(plate="34GHI789", make_model="BMW 3 Series", daily_rate=3800,
            image_url=f"{IMAGE_BASE}/photo-1555215695-3004980ad54e?w=800&h=600&fit=crop",
            category="Sedan"),
        Car(plate="34JKL012", make_model="Ford EcoSport", daily_rate=2700,
            image_url=f"{IMAGE_BASE}/photo-1611859266238-4b98091d9d9b?w=800&h=600&fit=crop",
            category="SUV"),
        Car(plate="34VWX234", make_model="Hyundai i20", daily_rate=2550,
            image_url=f"{IMAGE_BASE}/photo-1619767886558-efdc259cde1a?w=800&h=600&fit=crop",
            category="Hatchback"),
    ]
    # Charges are historical figures, not recomputed from the current rates
    reservations = [
        Reservation(customer_name="Ahmet Yılmaz", plate="34ABC123",
                    start_date=now - timedelta(days=5), end_date=now - timedelta(days=2),
                    total_charge=750, created_at=now),
        Reservation(customer_name="Fatma Özdemir", plate="34DEF456",
                    start_date=now - timedelta(days=3), end_date=now,
                    total_charge=1050, created_at=now),
    ]
    return cars, reservations


def _match_fields(data: object, model: Type[BaseModel]) -> Dict:
    """Map keys onto the model's field names, ignoring case."""
    if not isinstance(data, dict):
        raise ValueError(f"Expected an object for {model.__name__}, got {type(data).__name__}")

    lookup = {}
    for name, field in model.model_fields.items():
        lookup[name.lower()] = name
        lookup[name.replace("_", "").lower()] = name
        if field.alias:
            lookup[field.alias.lower()] = name
    return {lookup.get(str(key).lower(), key): value for key, value in data.items()}


def parse_envelope(text: str) -> Tuple[List[Car], List[Reservation]]:
    """Parse the JSON document. Raises ValueError on anything malformed."""
    document = json.loads(text)
    if document is None:
        return [], []
    envelope = _match_fields(document, DataContainer)
    cars = [Car.model_validate(_match_fields(item, Car))
            for item in envelope.get("cars") or []]
    reservations = [Reservation.model_validate(_match_fields(item, Reservation))
                    for item in envelope.get("reservations") or []]
    return cars, reservations


class JsonDataStore:
    """Reads and writes the cars/reservations envelope. Never raises on I/O."""

    def __init__(self, data_path: str = None):
        self.data_path = resolve_data_path(str(data_path) if data_path else None)

    def load(self) -> LoadResult:
        """
        Load cars and reservations from the data file.
        A missing file is replaced by the seed dataset, which is then written out.
        An unreadable file falls back to the seed and is left untouched.
        """
        if not self.data_path.is_file():
            cars, reservations = seed_data()
            saved = self.save(cars, reservations)
            return LoadResult(cars=cars, reservations=reservations,
                              source=SOURCE_SEED, error=saved.error)

        try:
            text = self.data_path.read_text(encoding="utf-8")
            cars, reservations = parse_envelope(text)
        except (OSError, ValueError, RecursionError) as e:
            cars, reservations = seed_data()
            return LoadResult(cars=cars, reservations=reservations,
                              source=SOURCE_SEED, error=f"{type(e).__name__}: {e}")

        return LoadResult(cars=cars, reservations=reservations, source=SOURCE_FILE)

    def save(self, cars: List[Car], reservations: List[Reservation]) -> SaveResult:
        """Overwrite the data file with indented JSON."""
        container = DataContainer(cars=list(cars), reservations=list(reservations))
        payload = container.model_dump(mode="json", by_alias=True)
        try:
            self.data_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.data_path, "w", encoding="utf-8") as file:
                json.dump(payload, file, indent=2, ensure_ascii=False)
        except (OSError, TypeError, ValueError) as e:
            return SaveResult(ok=False, error=f"{type(e).__name__}: {e}")
        return SaveResult()
