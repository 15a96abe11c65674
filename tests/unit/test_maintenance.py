from app.db import crud
from app.models.admin import BatchAction, BatchRequest
from app.services.maintenance import (DUPLICATE_SUFFIX, delete_duplicate_plans,
                                      duplicate_plan, migrate_plan, run_batch)
from app.utils.seed import SAMPLE_COUNTRIES, seed_catalog


class TestDuplicateAndMigrate:
    def test_duplicate_records_origin(self, store, plan):
        new_id = duplicate_plan(store, plan, changes={"price": 650})
        copy = crud.get_plan(store, new_id)
        assert copy["duplicatedFrom"] == plan["id"]
        assert copy["price"] == 650
        assert copy["title"] == plan["title"]

    def test_migrate_keeps_original(self, store, plan):
        new_id = migrate_plan(store, plan, "kr-id", "Korea")
        moved = crud.get_plan(store, new_id)
        assert moved["countryId"] == "kr-id"
        assert moved["country"] == "Korea"
        assert moved["migratedFrom"] == plan["id"]
        assert crud.get_plan(store, plan["id"])["countryId"] == plan["countryId"]


class TestRunBatch:
    def test_duplicate_appends_suffix(self, store, plan):
        result = run_batch(store, BatchRequest(action=BatchAction.duplicate, planIds=[plan["id"]]))
        assert result.success
        assert result.processed == 1
        copy = crud.get_plan(store, result.newIds[0])
        assert copy["title"] == plan["title"] + DUPLICATE_SUFFIX

    def test_missing_plan_counted_as_failed(self, store, plan):
        result = run_batch(store, BatchRequest(action=BatchAction.duplicate, planIds=[plan["id"], "nope"]))
        assert not result.success
        assert result.processed == 1
        assert result.failed == 1
        assert result.errors == ["Plan nope not found"]

    def test_delete(self, store, plan):
        result = run_batch(store, BatchRequest(action=BatchAction.delete, planIds=[plan["id"]]))
        assert result.processed == 1
        assert crud.get_plan(store, plan["id"]) is None


class TestDeleteDuplicates:
    def test_keeps_first_of_each_group(self, store, plan):
        duplicate_plan(store, plan)
        duplicate_plan(store, plan, changes={"price": 999})

        result = delete_duplicate_plans(store)

        assert result.stats.plansChecked == 3
        assert result.stats.duplicatesFound == 1
        assert result.stats.duplicatesDeleted == 1
        assert len(crud.get_plans(store)) == 2
        assert "找到 1 個重複項目" in result.message

    def test_other_carrier_is_not_a_duplicate(self, store, plan):
        duplicate_plan(store, plan, changes={"carrier": "SoftBank"})
        result = delete_duplicate_plans(store)
        assert result.stats.duplicatesFound == 0

    def test_same_carrier_in_another_country_is_kept(self, store, plan):
        duplicate_plan(store, plan, changes={"countryId": "kr-id", "country": "Korea"})

        result = delete_duplicate_plans(store)

        assert result.stats.duplicatesFound == 0
        assert sorted(p["country"] for p in crud.get_plans(store)) == ["Japan", "Korea"]

    def test_daily_and_total_plans_are_distinct(self, store, plan):
        duplicate_plan(store, plan, changes={"plan_type": "total", "total_data": "1GB", "data_per_day": None})
        duplicate_plan(store, plan, changes={"plan_type": "daily", "total_data": None, "data_per_day": "1GB"})

        result = delete_duplicate_plans(store)

        assert result.stats.duplicatesFound == 0
        assert len(crud.get_plans(store)) == 3


class TestSeed:
    def test_seed_counts(self, store):
        counts = seed_catalog(store)
        assert counts["countries"] == len(SAMPLE_COUNTRIES)
        assert counts["carriers"] == len(crud.get_carriers(store))
        assert counts["plans"] == len(crud.get_plans(store))
        japan = crud.get_country_by_code(store, "jp")
        assert all(p["country"] == "日本" for p in crud.get_plans_by_country(store, japan["id"]))
