# =============================================================================
# tests/test_models.py - Pydantic Model Tests
# =============================================================================
# Unit tests for the request/response schemas:
# - Valid data is accepted and parsed correctly
# - Invalid data raises ValidationError
# - JSON uses camelCase names
#
# Run with: pytest tests/test_models.py -v
# =============================================================================

import pytest
from pydantic import ValidationError

from core.models import (
    AdminUserSummary,
    CaseStudyCreate,
    CaseStudyUpdate,
    EducationCreate,
    ExperienceCreate,
    ExperienceUpdate,
    ProfileUpdate,
    ReorderRequest,
    SetupRequest,
)
from lib.utils import slugify, unique_in_order

EXPERIENCE = {
    "job_title": "Analyst",
    "company": "Acme",
    "industry": "Retail",
    "start_date": "2019-01",
    "description": "Reporting",
    "accomplishments": "Dashboards",
}


# =============================================================================
# Alias Tests
# =============================================================================

class TestCamelCase:
    """Schemas accept both spellings and serialize camelCase."""

    def test_accepts_camel_and_snake(self):
        camel = ExperienceCreate(**{**EXPERIENCE, "jobTitle": "PM"})
        snake = ExperienceCreate(**EXPERIENCE)

        assert camel.job_title == "PM"
        assert snake.job_title == "Analyst"

    def test_dumps_camel_case(self):
        dumped = ExperienceCreate(**EXPERIENCE).model_dump(by_alias=True)

        assert "jobTitle" in dumped
        assert "isCurrentJob" in dumped
        assert "job_title" not in dumped


# =============================================================================
# Experience
# =============================================================================

class TestExperienceModels:
    """Tests for experience schemas."""

    def test_tool_strings_coerced(self):
        experience = ExperienceCreate(**EXPERIENCE, tools=["SQL", {"name": "dbt", "usage": "Models"}])

        assert [(tool.name, tool.usage) for tool in experience.tools] == [("SQL", ""), ("dbt", "Models")]

    def test_current_job_drops_end_date(self):
        experience = ExperienceCreate(**EXPERIENCE, end_date="2020-01", is_current_job=True)

        assert experience.end_date is None

    def test_blank_end_date_is_none(self):
        assert ExperienceCreate(**EXPERIENCE, end_date="  ").end_date is None

    def test_missing_required_field(self):
        data = dict(EXPERIENCE)
        del data["company"]

        with pytest.raises(ValidationError):
            ExperienceCreate(**data)

    def test_update_tracks_set_fields(self):
        update = ExperienceUpdate(company="Globex")

        assert update.model_dump(exclude_unset=True) == {"company": "Globex"}

    def test_negative_sort_order_rejected(self):
        with pytest.raises(ValidationError):
            ExperienceCreate(**EXPERIENCE, sort_order=-1)


# =============================================================================
# Education / Profile / Ordering
# =============================================================================

class TestEducationModels:
    """Tests for education schemas."""

    def test_link_trimmed(self):
        education = EducationCreate(name="Course", category="ML", link="  https://coursera.org/x ")

        assert education.link == "https://coursera.org/x"

    @pytest.mark.parametrize("link", ["javascript:alert(1)", "www.example.com", "mailto:a@b.c"])
    def test_link_rejected(self, link):
        with pytest.raises(ValidationError):
            EducationCreate(name="Course", category="ML", link=link)


class TestProfileModels:
    """Tests for ProfileUpdate."""

    def test_order_lists_cleaned(self):
        update = ProfileUpdate(industries_order=[" Fintech ", "Health", "Fintech", ""])

        assert update.industries_order == ["Fintech", "Health"]

    def test_unset_lists_stay_unset(self):
        assert ProfileUpdate(name="Ada").model_dump(exclude_unset=True) == {"name": "Ada"}


class TestReorderRequest:
    """Tests for ReorderRequest."""

    def test_ids_required(self):
        with pytest.raises(ValidationError):
            ReorderRequest()

    def test_ids_must_be_integers(self):
        with pytest.raises(ValidationError):
            ReorderRequest(ids=["first"])


# =============================================================================
# Case Study
# =============================================================================

class TestCaseStudyModels:
    """Tests for case study schemas."""

    @pytest.mark.parametrize("slug", ["churn-model", "v2", "a-b-c"])
    def test_valid_slugs(self, slug):
        assert CaseStudyCreate(title="T", slug=slug).slug == slug

    @pytest.mark.parametrize("slug", ["Upper", "two--hyphens", "-leading", "trailing-", "white space", "ümlaut"])
    def test_invalid_slugs(self, slug):
        with pytest.raises(ValidationError):
            CaseStudyCreate(title="T", slug=slug)

    def test_blank_slug_means_derive(self):
        assert CaseStudyCreate(title="T", slug="  ").slug is None

    def test_tags_deduplicated(self):
        case_study = CaseStudyCreate(title="T", tags=["ML", "ml", " ML", "", "Data"])

        assert case_study.tags == ["ML", "ml", "Data"]

    def test_featured_image_must_be_http(self):
        with pytest.raises(ValidationError):
            CaseStudyUpdate(featured_image="javascript:alert(1)")


# =============================================================================
# Auth
# =============================================================================

class TestAuthModels:
    """Tests for auth schemas."""

    def test_summary_has_no_secret_fields(self):
        summary = AdminUserSummary(id="abc", username="admin")

        assert set(summary.model_dump()) == {"id", "username"}

    @pytest.mark.parametrize("password", ["short", "x" * 73, "é" * 37])
    def test_setup_password_bounds(self, password):
        with pytest.raises(ValidationError):
            SetupRequest(username="admin", password=password)

    def test_setup_username_without_spaces(self):
        with pytest.raises(ValidationError):
            SetupRequest(username="the admin", password="long-enough-password")


# =============================================================================
# Utilities
# =============================================================================

class TestSlugify:
    """Tests for lib.utils.slugify."""

    @pytest.mark.parametrize("value,expected", [
        ("Churn Model Rebuild", "churn-model-rebuild"),
        ("Café Redesign: Phase 2", "cafe-redesign-phase-2"),
        ("  --Hello__World--  ", "hello-world"),
        ("!!!", ""),
    ])
    def test_slugify(self, value, expected):
        assert slugify(value) == expected

    def test_max_length_has_no_trailing_hyphen(self):
        slug = slugify("alpha beta gamma", max_length=11)

        assert slug == "alpha-beta"


class TestUniqueInOrder:
    def test_keeps_first_occurrence(self):
        assert unique_in_order(["b", "a", "b", "c", "a"]) == ["b", "a", "c"]
