# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the User API:
# - test_models.py: Unit tests for Pydantic model validation
# - test_user_repository.py: Repository against an in-memory database
# - test_user_service.py: Service logic with a mocked repository
# - test_users_api.py: Endpoint tests through TestClient
# - test_error_handling.py: Error middleware and exception handlers
# - test_app.py: Startup, health checks and settings
#
# Run tests with: pytest
# =============================================================================
