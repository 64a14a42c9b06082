"""Tests for app.services.plants: input validation and the plant store."""

import asyncio
import os
import tempfile
import unittest
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from unittest.mock import MagicMock

from app.core.config import Settings
from app.core.context import AppContext
from app.core.errors import NotFoundError, ValidationError
from app.models.base import as_utc
from app.services.plants import (
    create_plant,
    delete_plant,
    get_plant,
    list_plants,
    parse_plant_create,
    parse_plant_update,
    update_plant,
)


class TestParsePlantCreate(unittest.TestCase):
    def test_name_length_bounds(self) -> None:
        with self.assertRaises(ValidationError) as cm:
            parse_plant_create({"name": "Ab", "location": "Kitchen"})
        self.assertIn("name", cm.exception.errors)
        self.assertEqual(parse_plant_create({"name": "Abc", "location": "Kitchen"}).name, "Abc")
        self.assertEqual(len(parse_plant_create({"name": "x" * 20, "location": "Hall"}).name), 20)
        with self.assertRaises(ValidationError):
            parse_plant_create({"name": "x" * 21, "location": "Hall"})

    def test_location_required(self) -> None:
        with self.assertRaises(ValidationError) as cm:
            parse_plant_create({"name": "Fern"})
        self.assertIn("location", cm.exception.errors)

    def test_notes_max_length(self) -> None:
        parse_plant_create({"name": "Fern", "location": "Hall", "notes": "n" * 150})
        with self.assertRaises(ValidationError) as cm:
            parse_plant_create({"name": "Fern", "location": "Hall", "notes": "n" * 151})
        self.assertIn("notes", cm.exception.errors)

    def test_camel_case_dates_parsed(self) -> None:
        fields = parse_plant_create(
            {"name": "Fern", "location": "Hall", "acquiredAt": "2020-05-01T10:00:00Z"}
        )
        self.assertEqual(fields.acquired_at, datetime(2020, 5, 1, 10, tzinfo=timezone.utc))
        self.assertIsNone(fields.water_at)

    def test_invalid_date_reported_under_wire_name(self) -> None:
        with self.assertRaises(ValidationError) as cm:
            parse_plant_create({"name": "Fern", "location": "Hall", "waterAt": "soon"})
        self.assertIn("waterAt", cm.exception.errors)


class TestParsePlantUpdate(unittest.TestCase):
    def test_only_given_fields_are_set(self) -> None:
        changes = parse_plant_update({"location": "Balcony"})
        self.assertEqual(changes.model_dump(exclude_unset=True), {"location": "Balcony"})

    def test_required_fields_cannot_be_nulled(self) -> None:
        with self.assertRaises(ValidationError) as cm:
            parse_plant_update({"name": None})
        self.assertIn("name", cm.exception.errors)

    def test_optional_fields_can_be_cleared(self) -> None:
        changes = parse_plant_update({"notes": None, "image": None})
        self.assertEqual(changes.model_dump(exclude_unset=True), {"notes": None, "image": None})

    def test_non_object_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            parse_plant_update(["name", "Fern"])


class TestPlantStore(unittest.TestCase):
    """Runs against an in-memory SQLite database."""

    def setUp(self) -> None:
        settings = Settings(_env_file=None, DATABASE_URL="sqlite://", AUTO_CREATE_TABLES=True)
        self.ctx = AppContext(settings, image_store=MagicMock())
        self.ctx.startup()
        self.addCleanup(lambda: asyncio.run(self.ctx.shutdown()))
        self.db = self.ctx.new_session()
        self.addCleanup(self.db.close)

    def _create(self, **fields: object):
        data = {"name": "Fern", "location": "Kitchen", **fields}
        return create_plant(self.db, parse_plant_create(data))

    def test_create_defaults_dates(self) -> None:
        plant = self._create()
        self.assertIsNotNone(plant.acquired_at)
        self.assertIsNotNone(plant.water_at)
        self.assertIsNone(plant.image)

    def test_create_attaches_image_reference(self) -> None:
        plant = create_plant(
            self.db,
            parse_plant_create({"name": "Fern", "location": "Kitchen"}),
            image="https://res.cloudinary.com/demo/image/upload/fern.png",
        )
        self.assertEqual(plant.image, "https://res.cloudinary.com/demo/image/upload/fern.png")

    def test_identical_plants_get_distinct_ids(self) -> None:
        a = self._create()
        b = self._create()
        self.assertNotEqual(a.id, b.id)
        self.assertEqual([p.id for p in list_plants(self.db)], [a.id, b.id])

    def test_get_unknown_or_malformed_id_raises_not_found(self) -> None:
        with self.assertRaises(NotFoundError):
            get_plant(self.db, "0" * 32)
        with self.assertRaises(NotFoundError):
            get_plant(self.db, "not a valid id")

    def test_update_replaces_only_given_fields(self) -> None:
        plant = self._create(type="tropical", notes="Likes humidity")
        update_plant(self.db, plant.id, parse_plant_update({"location": "Bathroom"}))
        fetched = get_plant(self.db, plant.id)
        self.assertEqual(fetched.location, "Bathroom")
        self.assertEqual(fetched.name, "Fern")
        self.assertEqual(fetched.type, "tropical")
        self.assertEqual(fetched.notes, "Likes humidity")

    def test_update_unknown_id_raises_not_found(self) -> None:
        with self.assertRaises(NotFoundError):
            update_plant(self.db, "missing", parse_plant_update({"location": "Hall"}))

    def test_delete(self) -> None:
        plant = self._create()
        delete_plant(self.db, plant.id)
        with self.assertRaises(NotFoundError):
            get_plant(self.db, plant.id)
        with self.assertRaises(NotFoundError):
            delete_plant(self.db, plant.id)

    def test_offset_dates_stored_as_utc(self) -> None:
        plant = self._create(acquiredAt="2020-05-01T02:00:00+02:00")
        self.db.expire_all()
        fetched = get_plant(self.db, plant.id)
        self.assertEqual(as_utc(fetched.acquired_at), datetime(2020, 5, 1, tzinfo=timezone.utc))

        update_plant(
            self.db, plant.id, parse_plant_update({"waterAt": "2020-06-01T08:30:00-04:00"})
        )
        self.db.expire_all()
        fetched = get_plant(self.db, plant.id)
        self.assertEqual(
            as_utc(fetched.water_at), datetime(2020, 6, 1, 12, 30, tzinfo=timezone.utc)
        )


class TestConcurrentPlantCreation(unittest.TestCase):
    """Two writers on a file-backed SQLite database, each with its own session."""

    def setUp(self) -> None:
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        url = "sqlite:///" + os.path.join(tmp.name, "plants.db")
        settings = Settings(_env_file=None, DATABASE_URL=url, AUTO_CREATE_TABLES=True)
        self.ctx = AppContext(settings, image_store=MagicMock())
        self.ctx.startup()
        self.addCleanup(lambda: asyncio.run(self.ctx.shutdown()))

    def _create_in_own_session(self, _: int) -> str:
        db = self.ctx.new_session()
        try:
            plant = create_plant(db, parse_plant_create({"name": "Fern", "location": "Kitchen"}))
            return plant.id
        finally:
            db.close()

    def test_concurrent_identical_creates_get_distinct_ids(self) -> None:
        with ThreadPoolExecutor(max_workers=2) as pool:
            ids = list(pool.map(self._create_in_own_session, range(2)))
        self.assertEqual(len(set(ids)), 2)
        with self.ctx.session() as db:
            self.assertEqual(sorted(p.id for p in list_plants(db)), sorted(ids))


if __name__ == "__main__":
    unittest.main()
