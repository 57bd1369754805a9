import json

import pytest
from fastapi.testclient import TestClient

from database import JsonDataStore
from rental_engine import RentalManager, get_rental_manager

FLEET = [
    {"plate": "34ABC123", "makeModel": "Toyota Corolla 2024", "dailyRate": 2500,
     "imageUrl": "", "category": "Sedan", "active": True},
    {"plate": "34DEF456", "makeModel": "Renault Clio 5", "dailyRate": 2650,
     "imageUrl": "", "category": "Hatchback", "active": True},
    {"plate": "06OLD001", "makeModel": "Fiat Tipo", "dailyRate": 1800,
     "imageUrl": "", "category": "Sedan", "active": False},
]


def write_data(path, cars=None, reservations=None):
    path.write_text(
        json.dumps({"cars": FLEET if cars is None else cars, "reservations": reservations or []}),
        encoding="utf-8",
    )
    return path


@pytest.fixture
def data_path(tmp_path):
    return write_data(tmp_path / "data.json")


@pytest.fixture
def manager(data_path):
    return RentalManager(JsonDataStore(data_path))


@pytest.fixture
def client(manager):
    from main import app

    app.dependency_overrides[get_rental_manager] = lambda: manager
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
