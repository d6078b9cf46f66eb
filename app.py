"""Entrypoint: ``python app.py`` serves the gateway on API_HOST:API_PORT."""

from src.attendance_gateway.attendance_gateway.main import create_app

app = create_app()


if __name__ == "__main__":
    container = app.extensions["attendance_gateway"]
    app.run(host=container.api_host, port=container.api_port, debug=app.config["DEBUG"], use_reloader=False)
