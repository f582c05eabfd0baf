"""Simple test to verify pytest setup."""


def test_import_app():
    """The application module imports and builds an app."""
    from cab_booking.main import create_app
    app = create_app()
    assert app is not None


def test_app_registers_site_routes():
    from cab_booking.main import app

    paths = set(app.openapi()["paths"])
    assert {"/api/contact", "/api/booking/estimate", "/api/booking/submit", "/api/routes"} <= paths
