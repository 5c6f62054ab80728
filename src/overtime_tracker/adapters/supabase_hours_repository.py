"""Supabase repository for monthly hour records."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from overtime_tracker.domain.hours import DayEntry, MonthlyRecord, StoredDayEntry
from overtime_tracker.services.hours import HoursRepository


@dataclass
class SupabaseHoursRepository(HoursRepository):
    """Supabase implementation for month records and their day entries."""

    client: Client

    def get_month(self, user_id: UUID, month: str) -> MonthlyRecord | None:
        """Return the month record with entries ordered by date."""
        response = (
            self.client.table("monthly_records")
            .select("id, salary")
            .eq("user_id", str(user_id))
            .eq("month", month)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        record = response.data[0]
        entries = (
            self.client.table("day_entries")
            .select(
                "id, date, start_time, end_time, project_worked, calculation_model_id"
            )
            .eq("monthly_record_id", str(record["id"]))
            .order("date", desc=False)
            .execute()
        )
        return MonthlyRecord(
            month=month,
            salary=float(record.get("salary") or 0.0),
            days=[_parse_entry(row) for row in entries.data or []],
        )

    def replace_month(
        self,
        user_id: UUID,
        month: str,
        salary: float,
        days: list[StoredDayEntry],
    ) -> None:
        """Upsert the month record and its entries, then drop stale entries.

        New rows are written before anything is deleted, so a failed write
        leaves the previously saved entries in place.
        """
        response = (
            self.client.table("monthly_records")
            .upsert(
                {"user_id": str(user_id), "month": month, "salary": salary},
                on_conflict="user_id,month",
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to save monthly record")
        record_id = str(response.data[0]["id"])
        if days:
            written = (
                self.client.table("day_entries")
                .upsert(
                    [_serialize_entry(record_id, stored) for stored in days],
                    on_conflict="id",
                )
                .execute()
            )
            if not written.data:
                raise RuntimeError("Failed to save day entries")
        stale = (
            self.client.table("day_entries")
            .delete()
            .eq("monthly_record_id", record_id)
        )
        if days:
            stale = stale.not_.in_("id", [stored.entry.id for stored in days])
        stale.execute()


def _serialize_entry(record_id: str, stored: StoredDayEntry) -> dict[str, object]:
    entry = stored.entry
    return {
        "id": entry.id,
        "monthly_record_id": record_id,
        "date": entry.date,
        "start_time": entry.start_time,
        "end_time": entry.end_time,
        "project_worked": entry.project_worked,
        "calculation_model_id": entry.calculation_model_id,
        "worked_hours": stored.worked_hours,
    }


def _parse_entry(row: dict[str, object]) -> DayEntry:
    return DayEntry(
        id=str(row["id"]),
        date=str(row.get("date") or "")[:10],
        start_time=str(row.get("start_time") or ""),
        end_time=str(row.get("end_time") or ""),
        project_worked=str(row.get("project_worked") or ""),
        calculation_model_id=str(row.get("calculation_model_id") or ""),
    )
