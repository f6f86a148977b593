from __future__ import annotations

from flask import Flask, request

from ..common.responses import ok
from ..container import Container
from ..location.model import Location


def _location_from(payload: dict):
    if payload.get("latitude") is None or payload.get("longitude") is None:
        return None
    return Location.from_payload(payload)


def register(app: Flask, container: Container) -> None:
    controller = container.session_controller

    @app.route("/api/session/activate", methods=["POST"], endpoint="session_activate")
    def activate():
        payload = request.get_json(silent=True) or {}
        view = controller.activate(payload.get("userId"))
        return ok({"session": view.as_dict()})

    @app.route("/api/session/resume", methods=["POST"], endpoint="session_resume")
    def resume():
        return ok({"session": controller.resume().as_dict()})

    @app.route("/api/session/deactivate", methods=["POST"], endpoint="session_deactivate")
    def deactivate():
        controller.deactivate()
        return ok({"session": controller.current_status().as_dict()})

    @app.route("/api/session/logout", methods=["POST"], endpoint="session_logout")
    def logout():
        controller.reset()
        return ok()

    @app.route("/api/session/status", methods=["GET"], endpoint="session_status")
    def status():
        return ok({"session": controller.current_status().as_dict()})

    @app.route("/api/session/check-in", methods=["POST"], endpoint="session_check_in")
    def check_in():
        payload = request.get_json(silent=True) or {}
        view = controller.request_check_in(_location_from(payload))
        return ok({"message": "Checked In Successfully!", "session": view.as_dict()})

    @app.route("/api/session/check-out", methods=["POST"], endpoint="session_check_out")
    def check_out():
        payload = request.get_json(silent=True) or {}
        view = controller.request_check_out(_location_from(payload), confirmed=bool(payload.get("confirmed")))
        return ok({"message": "Checked Out Successfully!", "session": view.as_dict()})
