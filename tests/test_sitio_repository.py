from __future__ import annotations

import unittest
from dataclasses import replace

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from db.base import Base
from db.models import SitioRecord
from db.repositories import SitioRepository
from sitio_tracker.domain.serialization import sitio_from_dict, sitio_to_dict
from sitio_tracker.domain.sitio import Demographics, Employment, Sitio, create_default_sitio


class TestSitioRepository(unittest.TestCase):
    def setUp(self) -> None:
        self.engine = create_engine("sqlite://")
        Base.metadata.create_all(self.engine)
        self.session: Session = sessionmaker(bind=self.engine, expire_on_commit=False)()

    def tearDown(self) -> None:
        self.session.close()
        self.engine.dispose()

    def _sitio(self, name: str) -> Sitio:
        sitio = replace(
            create_default_sitio(),
            municipality="Banga",
            barangay="Liwanay",
            name=name,
            population=412,
            demographics=Demographics(male=224, female=188, total=412),
            ethnicities=("Blaan",),
        )
        economic = sitio.economic_condition.with_tagged_entry("employments", "Farming")
        return sitio.assign("economic_condition", economic)

    def test_empty_store(self) -> None:
        repository = SitioRepository(self.session)

        self.assertEqual(repository.load(), [])
        self.assertEqual(repository.next_id(), 1)

    def test_save_all_assigns_ids_and_load_round_trips(self) -> None:
        repository = SitioRepository(self.session)
        first = self._sitio("Proper Lampaco")
        second = self._sitio("Purok Maligaya")

        saved = repository.save_all([first, second])
        self.session.commit()

        self.assertEqual([sitio.id for sitio in saved], [1, 2])
        loaded = repository.load()
        self.assertEqual(loaded, saved)
        self.assertEqual(loaded[0].economic_condition.employments, (Employment("Farming", 0),))
        self.assertEqual(self.session.get(SitioRecord, 2).name, "Purok Maligaya")

    def test_explicit_ids_advance_the_sequence(self) -> None:
        repository = SitioRepository(self.session)

        repository.save_all([replace(self._sitio("A"), id=10), self._sitio("B")])

        self.assertEqual([sitio.id for sitio in repository.load()], [10, 11])
        self.assertEqual(repository.next_id(), 12)

    def test_save_nothing(self) -> None:
        self.assertEqual(SitioRepository(self.session).save_all([]), [])


class TestSitioSerialization(unittest.TestCase):
    def test_dict_round_trip(self) -> None:
        sitio = replace(create_default_sitio(), name="Centro", religions=("Catholic", "Islam"))

        payload = sitio_to_dict(sitio)

        self.assertEqual(payload["religions"], ["Catholic", "Islam"])
        self.assertEqual(sitio_from_dict(payload), sitio)

    def test_drop_absent_omits_missing_top_level_fields(self) -> None:
        payload = sitio_to_dict(Sitio(name="Centro"), drop_absent=True)

        self.assertEqual(payload, {"name": "Centro"})

    def test_unknown_keys_are_ignored(self) -> None:
        self.assertEqual(sitio_from_dict({"name": "Centro", "legacy": 1}), Sitio(name="Centro"))


if __name__ == "__main__":
    unittest.main()
