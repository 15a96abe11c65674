"""
Bulk catalog import.

Merges an externally supplied batch of countries and plans into the store.
Countries are always inserted as new documents. Plans are resolved against
the stored countries (explicit ``countryId`` first, then country name, then
country code, both case-insensitive), stripped down to the known plan
fields, and either inserted or, when asked to, written over an existing plan
with the same id.

Every record is handled on its own: a failing record is counted as skipped
with a readable message and the batch moves on. Nothing is rolled back.
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from app.db import crud
from app.db.store import DocumentStore, Record
from app.models.imports import ImportReport
from app.models.plan import PLAN_FIELDS

logger = logging.getLogger("esimshop.importer")


class ImportPayloadError(ValueError):
    """The request body is not an import batch at all."""


def parse_payload(payload: Any) -> Tuple[List[Any], List[Any], bool]:
    if not isinstance(payload, dict):
        raise ImportPayloadError("Import payload must be a JSON object")

    countries = payload.get("countries")
    plans = payload.get("plans")
    return (
        countries if isinstance(countries, list) else [],
        plans if isinstance(plans, list) else [],
        payload.get("updateExisting") is True,
    )


def sanitize_plan(plan: Dict[str, Any]) -> Dict[str, Any]:
    return {field: plan[field] for field in PLAN_FIELDS if field in plan}


class CountryIndex:
    """Stored countries keyed by lower-cased name and by lower-cased code."""

    def __init__(self, countries: List[Record]):
        self.by_name: Dict[str, Record] = {}
        self.by_code: Dict[str, Record] = {}
        for country in countries:
            name = country.get("name")
            code = country.get("code")
            # first stored country wins when names or codes repeat
            if name:
                self.by_name.setdefault(str(name).lower(), country)
            if code:
                self.by_code.setdefault(str(code).lower(), country)

    def resolve(self, key: str) -> Optional[Record]:
        key = key.strip().lower()
        return self.by_name.get(key) or self.by_code.get(key)


class CatalogImporter:
    def __init__(self, store: DocumentStore):
        self.store = store

    def run(self, countries: List[Any], plans: List[Any], update_existing: bool = False) -> ImportReport:
        report = ImportReport()
        logger.info(
            f"Import started: {len(countries)} countries, {len(plans)} plans, update_existing={update_existing}"
        )

        for country in countries:
            self._import_country(country, report)

        # Re-read after writing so the countries just added resolve too
        index = CountryIndex(crud.get_countries(self.store))

        for plan in plans:
            try:
                self._import_plan(plan, index, update_existing, report)
            except Exception as e:
                logger.error(f"Error importing plan {_title_of(plan)!r}: {e}", exc_info=True)
                report.plans.errors.append(f"Error adding plan: {e}")
                report.plans.skipped += 1

        logger.info(
            f"Import finished: countries added={report.countries.added} skipped={report.countries.skipped}; "
            f"plans added={report.plans.added} updated={report.plans.updated} skipped={report.plans.skipped}"
        )
        return report

    def _import_country(self, country: Any, report: ImportReport) -> None:
        if not isinstance(country, dict) or not country.get("name") or not country.get("code"):
            report.countries.skipped += 1
            report.countries.errors.append("Skipped country: Missing required fields (name or code)")
            return

        data = {k: v for k, v in country.items() if k != "id"}
        now = datetime.utcnow()
        try:
            new_id = self.store.insert(crud.COUNTRIES, {**data, "createdAt": now, "updatedAt": now})
        except Exception as e:
            logger.error(f"Error adding country {country.get('name')!r}: {e}", exc_info=True)
            report.countries.errors.append(f"Error adding country: {e}")
            report.countries.skipped += 1
            return

        logger.debug(f"Country {data['name']!r} imported as {new_id}")
        report.countries.added += 1

    def _skip_plan(self, report: ImportReport, message: str) -> None:
        logger.warning(message)
        report.plans.skipped += 1
        report.plans.errors.append(message)

    def _import_plan(self, plan: Any, index: CountryIndex, update_existing: bool, report: ImportReport) -> None:
        if not isinstance(plan, dict) or not plan.get("title") or not plan.get("carrier"):
            self._skip_plan(report, "Skipped plan: Missing required fields (title or carrier)")
            return

        title = plan["title"]
        clean = sanitize_plan(plan)

        if not clean.get("countryId") and plan.get("country"):
            country = index.resolve(str(plan["country"]))
            if country is None:
                self._skip_plan(report, f'Skipped plan "{title}": Country "{plan["country"]}" not found')
                return
            clean["countryId"] = country["id"]
            clean["country"] = country["name"]
        elif not clean.get("countryId"):
            self._skip_plan(report, f'Skipped plan "{title}": No country specified')
            return
        else:
            country = crud.get_country(self.store, str(clean["countryId"]))
            if country is None:
                self._skip_plan(report, f'Skipped plan "{title}": Country with ID "{clean["countryId"]}" not found')
                return
            clean["country"] = country.get("name", "")

        plan_id = plan.get("id")
        if update_existing and plan_id and crud.get_plan(self.store, str(plan_id)):
            crud.update_plan(self.store, str(plan_id), clean)
            report.plans.updated += 1
            logger.debug(f"Plan {plan_id} updated from import")
        else:
            new_id = crud.create_plan(self.store, clean)
            report.plans.added += 1
            logger.debug(f"Plan {title!r} imported as {new_id}")


def _title_of(plan: Any) -> Optional[str]:
    return plan.get("title") if isinstance(plan, dict) else None


def import_catalog(store: DocumentStore, payload: Any) -> ImportReport:
    countries, plans, update_existing = parse_payload(payload)
    return CatalogImporter(store).run(countries, plans, update_existing)
