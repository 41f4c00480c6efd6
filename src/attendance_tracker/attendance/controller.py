from __future__ import annotations

from flask import Flask, request, session

from ..common.datetime_utils import parse_iso_date, today_local
from ..common.web import json_response, login_required, request_data
from ..container import Container
from .stats import format_percentage


def register(app: Flask, container: Container) -> None:
    def current_store():
        return container.stores.get(session["user_id"])

    @app.route("/api/attendance", methods=["GET"], endpoint="attendance_list")
    @login_required
    def attendance_list():
        records = container.attendance_service.search(
            current_store(),
            day=request.args.get("date"),
            status=request.args.get("status"),
            subject_id=request.args.get("subject_id"),
        )
        return json_response({"attendance": [r.to_dict() for r in records]})

    @app.route("/api/attendance", methods=["POST"], endpoint="attendance_mark")
    @login_required
    def attendance_mark():
        data = request_data()
        record = container.attendance_service.mark(
            current_store(),
            subject_id=data.get("subject_id", ""),
            day=data.get("date"),
            status=data.get("status"),
            hours=data.get("hours"),
            note=data.get("note"),
        )
        return json_response({"record": record.to_dict()}, 201)

    @app.route("/api/attendance/<record_id>", methods=["PUT"], endpoint="attendance_edit")
    @login_required
    def attendance_edit(record_id: str):
        data = request_data()
        store = current_store()
        saved = container.attendance_service.edit(
            store,
            record_id,
            subject_id=data.get("subject_id", ""),
            day=data.get("date"),
            status=data.get("status"),
            hours=data.get("hours"),
            note=data.get("note"),
        )
        if not saved:
            return json_response({"error": "Attendance could not be saved"}, 502)
        return json_response({"record": store.get_attendance_record(record_id).to_dict()})

    @app.route("/api/attendance/<record_id>", methods=["DELETE"], endpoint="attendance_delete")
    @login_required
    def attendance_delete(record_id: str):
        if not container.attendance_service.delete(current_store(), record_id):
            return json_response({"error": "Attendance could not be deleted"}, 502)
        return json_response({"deleted": record_id})

    @app.route("/api/stats", endpoint="attendance_stats")
    @login_required
    def attendance_stats():
        return json_response({"stats": current_store().stats().to_dict()})

    @app.route("/api/dashboard", endpoint="dashboard")
    @login_required
    def dashboard():
        store = current_store()
        day_s = request.args.get("date")
        day = parse_iso_date(day_s) if day_s else today_local()

        stats = store.stats()
        classes = [
            {
                "subject_id": subject.id,
                "subject": subject.name,
                "day": slot.day,
                "start_time": slot.start_time,
                "end_time": slot.end_time,
            }
            for subject, slot in store.classes_for_day(day)
        ]
        low = [
            {"subject_id": sid, "name": s.name, "percentage": s.percentage}
            for sid, s in stats.per_subject.items()
            if s.total > 0 and s.percentage < container.low_attendance_threshold
        ]
        return json_response(
            {
                "date": day.strftime("%Y-%m-%d"),
                "total_subjects": len(store.subjects),
                "attendance_rate": stats.percentage,
                "attendance_rate_label": format_percentage(stats.percentage),
                "classes_today": classes,
                "low_attendance": low,
            }
        )
