from __future__ import annotations

from typing import Tuple

from flask import Flask, session

from ..common.web import json_response, login_required, request_data
from ..container import Container
from ..core.exceptions import ValidationError
from ..schedules.draft import ScheduleDraft
from ..schedules.model import ScheduleSlot
from ..schedules.parser import format_schedule


def schedule_from_payload(data: dict) -> Tuple[ScheduleSlot, ...]:
    """Slots from either a 'slots' list (form builder) or a 'schedule' string."""
    slots = data.get("slots")
    if slots is None:
        return ScheduleDraft.from_string(data.get("schedule")).slots

    if not isinstance(slots, list):
        raise ValidationError("slots must be a list")

    draft = ScheduleDraft()
    for item in slots:
        if not isinstance(item, dict):
            raise ValidationError("Invalid time slot")
        draft.add_slot(item.get("day"), item.get("start_time"), item.get("end_time"))
    return draft.slots


def register(app: Flask, container: Container) -> None:
    def current_store():
        return container.stores.get(session["user_id"])

    @app.route("/api/subjects", methods=["GET"], endpoint="subjects_list")
    @login_required
    def subjects_list():
        store = current_store()
        stats = store.stats()
        items = []
        for subject in store.subjects:
            item = subject.to_dict()
            item["stats"] = stats.per_subject[subject.id].to_dict()
            items.append(item)
        return json_response({"subjects": items})

    @app.route("/api/subjects", methods=["POST"], endpoint="subjects_create")
    @login_required
    def subjects_create():
        data = request_data()
        outcome = container.subject_service.create(
            current_store(),
            name=data.get("name", ""),
            code=data.get("code", ""),
            schedule=schedule_from_payload(data),
            description=data.get("description"),
        )
        if outcome.conflict.has_conflict:
            return json_response({"error": "Schedule conflict", "conflict": outcome.conflict.to_dict()}, 409)
        return json_response({"subject": outcome.subject.to_dict()}, 201)

    @app.route("/api/subjects/<subject_id>", methods=["GET"], endpoint="subjects_detail")
    @login_required
    def subjects_detail(subject_id: str):
        store = current_store()
        subject = container.subject_service.get(store, subject_id)
        records = store.get_attendance_by_subject(subject_id)
        return json_response(
            {
                "subject": subject.to_dict(),
                "stats": store.stats().per_subject[subject_id].to_dict(),
                "attendance": [r.to_dict() for r in records],
            }
        )

    @app.route("/api/subjects/<subject_id>", methods=["PUT"], endpoint="subjects_update")
    @login_required
    def subjects_update(subject_id: str):
        data = request_data()
        outcome = container.subject_service.update(
            current_store(),
            subject_id,
            name=data.get("name", ""),
            code=data.get("code", ""),
            schedule=schedule_from_payload(data),
            description=data.get("description"),
        )
        if outcome.conflict.has_conflict:
            return json_response({"error": "Schedule conflict", "conflict": outcome.conflict.to_dict()}, 409)
        if not outcome.saved:
            return json_response({"error": "Subject could not be saved"}, 502)
        return json_response({"subject": outcome.subject.to_dict()})

    @app.route("/api/subjects/<subject_id>", methods=["DELETE"], endpoint="subjects_delete")
    @login_required
    def subjects_delete(subject_id: str):
        if not container.subject_service.delete(current_store(), subject_id):
            return json_response({"error": "Subject could not be deleted"}, 502)
        return json_response({"deleted": subject_id})

    @app.route("/api/schedule/check", methods=["POST"], endpoint="schedule_check")
    @login_required
    def schedule_check():
        data = request_data()
        slots = schedule_from_payload(data)
        conflict = current_store().check_conflict(slots, exclude_subject_id=data.get("exclude_subject_id"))
        return json_response({"schedule": format_schedule(slots), "conflict": conflict.to_dict()})
