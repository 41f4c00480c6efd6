from __future__ import annotations

import logging

from flask import Flask, flash, session

from ..common.web import json_response, login_required, request_data
from ..container import Container
from .service import SessionUser

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def start_session(s_user: SessionUser) -> None:
        session.clear()
        session["user_id"] = s_user.user_id
        session["name"] = s_user.name
        session["email"] = s_user.email
        # Fresh mirror for every login.
        container.stores.open(s_user.user_id)

    def user_payload(s_user: SessionUser) -> dict:
        return {"id": s_user.user_id, "name": s_user.name, "email": s_user.email}

    @app.route("/signup", methods=["POST"], endpoint="signup")
    def signup():
        data = request_data()
        s_user = container.auth_service.signup(
            name=data.get("name", ""),
            email=data.get("email", ""),
            password=data.get("password", ""),
        )
        start_session(s_user)
        flash("Account created successfully!", "success")
        return json_response({"user": user_payload(s_user)}, 201)

    @app.route("/login", methods=["POST"], endpoint="login")
    def login():
        data = request_data()
        s_user = container.auth_service.authenticate(data.get("email", ""), data.get("password", ""))
        start_session(s_user)
        logger.info("user %s logged in", s_user.user_id)
        flash("Login successful!", "success")
        return json_response({"user": user_payload(s_user)})

    @app.route("/logout", methods=["POST"], endpoint="logout")
    def logout():
        user_id = session.get("user_id")
        if user_id:
            container.stores.close(user_id)
        session.clear()
        flash("Logged out successfully", "info")
        return json_response({"logged_out": True})

    @app.route("/me", endpoint="me")
    @login_required
    def me():
        store = container.stores.get(session["user_id"])
        return json_response(
            {
                "user": {"id": session["user_id"], "name": session.get("name"), "email": session.get("email")},
                "subjects": len(store.subjects),
                "records": len(store.attendance),
            }
        )
