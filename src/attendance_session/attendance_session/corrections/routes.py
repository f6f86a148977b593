from __future__ import annotations

from flask import Flask, request
from werkzeug.utils import secure_filename

from ..common.responses import ok
from ..container import Container
from .model import CorrectionDraft, ProofFile


def register(app: Flask, container: Container) -> None:
    service = container.correction_service

    @app.route("/api/corrections", methods=["GET"], endpoint="correction_form")
    def correction_form():
        draft = service.load(request.args.get("employeeId"))
        return ok({"employeeId": draft.employee_id, "token": draft.token, "details": draft.details})

    @app.route("/api/corrections", methods=["POST"], endpoint="correction_submit")
    def correction_submit():
        form = request.form
        draft = CorrectionDraft(employee_id=form.get("employeeId", ""), token=form.get("token") or None)

        proof = None
        upload = request.files.get("proofFile")
        if upload is not None and upload.filename:
            proof = ProofFile(
                filename=secure_filename(upload.filename) or "proof.jpg",
                content=upload.read(),
                mime_type=upload.mimetype or "image/jpeg",
            )

        message = service.submit(draft, form.get("correctionRemark", ""), proof)
        return ok({"message": message})
