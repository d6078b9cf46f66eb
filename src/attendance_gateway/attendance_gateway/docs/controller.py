from __future__ import annotations

from flask import Flask, jsonify

from ..container import Container
from .catalog import api_document, root_document


def register(app: Flask, container: Container) -> None:
    configuration = {
        "apiHost": container.api_host,
        "apiPort": container.api_port,
        **container.registry.configuration_summary(),
    }

    @app.route("/", methods=["GET"], endpoint="root_docs")
    def root_docs():
        return jsonify(root_document(dict(configuration)))

    @app.route("/api-docs", methods=["GET"], endpoint="api_docs")
    def api_docs():
        return jsonify(api_document())
