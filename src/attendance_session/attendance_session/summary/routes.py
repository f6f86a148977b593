from __future__ import annotations

from dataclasses import asdict

from flask import Flask, request

from ..common.datetime_utils import parse_iso_date
from ..common.responses import ok
from ..container import Container
from ..core.exceptions import ValidationError


def _parse_date(value):
    if not value:
        return None
    try:
        return parse_iso_date(value)
    except ValueError:
        raise ValidationError("Dates must be YYYY-MM-DD")


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance/summary", methods=["GET"], endpoint="attendance_summary")
    def attendance_summary():
        rows = container.summary_service.history(
            from_date=_parse_date(request.args.get("fromDate")),
            to_date=_parse_date(request.args.get("toDate")),
        )
        return ok({"records": [asdict(r) for r in rows]})
