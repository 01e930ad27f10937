"""
Pytest markers and configuration for the hospital backend tests.

Markers are registered here and added automatically from the test file
location, so ``pytest -m services`` or ``pytest -m integration`` select
consistent subsets of the suite.
"""

import pytest


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")
    config.addinivalue_line("markers", "api: mark test as API endpoint test")
    config.addinivalue_line("markers", "slow: mark test as slow running")
    config.addinivalue_line("markers", "controllers: mark test as controller-related")
    config.addinivalue_line("markers", "database: mark test as database-related")
    config.addinivalue_line("markers", "services: mark test as service layer test")
    config.addinivalue_line("markers", "repositories: mark test as repository test")
    config.addinivalue_line("markers", "validation: mark test as validation-related")
    config.addinivalue_line("markers", "consulta: mark test as appointment-related")
    config.addinivalue_line(
        "markers", "clinical: mark test as related to prontuarios, receitas or exames"
    )


def pytest_collection_modifyitems(config, items):
    """Modify test items during collection."""
    for item in items:
        path = str(item.fspath)

        # Add markers based on test file location
        if "unit" in path:
            item.add_marker(pytest.mark.unit)

        if "integration" in path:
            item.add_marker(pytest.mark.integration)
            item.add_marker(pytest.mark.database)

        if "controller" in path:
            item.add_marker(pytest.mark.controllers)

        if "service" in path or "service" in item.name:
            item.add_marker(pytest.mark.services)

        if "repo" in path or "repository" in path:
            item.add_marker(pytest.mark.repositories)

        if "validation" in path:
            item.add_marker(pytest.mark.validation)

        if "consulta" in path or "consulta" in item.name:
            item.add_marker(pytest.mark.consulta)

        for clinical in ("prontuario", "receita", "exame"):
            if clinical in path:
                item.add_marker(pytest.mark.clinical)
                break


@pytest.fixture
def response_helper():
    """Simple response helper for API tests."""

    class ResponseHelper:
        @staticmethod
        def assert_json_response(response, expected_status=200):
            assert response.status_code == expected_status, response.get_data(
                as_text=True
            )
            return response.get_json()

        @staticmethod
        def assert_error_response(response, expected_status, message=None):
            assert response.status_code == expected_status, response.get_data(
                as_text=True
            )
            body = response.get_json()
            assert set(body) == {"timestamp", "status", "message", "path", "errors"}
            assert body["status"] == expected_status
            assert body["path"] == response.request.path
            if message is not None:
                assert body["message"] == message
            return body

    return ResponseHelper()
