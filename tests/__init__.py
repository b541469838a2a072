# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Portfolio API:
# - test_models.py: Unit tests for Pydantic model validation
# - test_auth.py: Password hashing, sessions and the admin auth endpoints
# - test_ordering.py: Display order and strict reorder
# - test_blocks.py: Block document parsing and HTML rendering
# - test_network.py: SSRF guard and link previews
# - test_content_api.py / test_case_studies.py / test_media.py: API tests
#
# Run tests with: pytest
# =============================================================================
