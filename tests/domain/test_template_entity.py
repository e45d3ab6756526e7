"""Tests for the notification template entity"""

import pytest

from src.domain.entities.template import TemplateEntity, extract_variables
from src.domain.enums import (TemplateReviewStatus, TemplateStatus,
                              TemplateType)
from src.domain.events import (TemplateCreated, TemplateDeleted,
                               TemplateReviewed, TemplateStatusChanged,
                               TemplateUpdated)
from src.domain.exceptions import (ResourceNotFoundException,
                                   StateConflictException, ValidationException)
from tests.fakes import TENANT_ID


def make_template(**overrides) -> TemplateEntity:
    fields = {
        "tenant_id": TENANT_ID,
        "name": "Welcome email",
        "template_type": "email",
        "content": "Hello {{ first_name }}, welcome to {{company}}",
        "category": "onboarding",
        "subject": "Welcome",
    }
    fields.update(overrides)
    return TemplateEntity.create(**fields)


def approved_template(**overrides) -> TemplateEntity:
    template = make_template(**overrides)
    template.submit_for_review()
    template.approve("reviewer-1")
    template.collect_domain_events()
    return template


def test_extract_variables_in_order_of_first_use():
    assert extract_variables("{{a}} {{ b }} {{a}}") == ["a", "b"]
    assert extract_variables("") == []


class TestCreate:
    def test_starts_as_pending_draft(self):
        """Test new templates are DRAFT with review PENDING and variables extracted"""
        template = make_template()

        assert template.status == TemplateStatus.DRAFT
        assert template.review_status == TemplateReviewStatus.PENDING
        assert template.type == TemplateType.EMAIL
        assert template.variables == ["first_name", "company"]
        assert template.template_version == 1
        (event,) = template.collect_domain_events()
        assert isinstance(event, TemplateCreated)
        assert event.name == "Welcome email"

    def test_rejects_unknown_type(self):
        with pytest.raises(ValidationException) as exc_info:
            make_template(template_type="fax")
        assert exc_info.value.field == "type"

    def test_rejects_empty_content(self):
        with pytest.raises(ValidationException) as exc_info:
            make_template(content="  ")
        assert exc_info.value.field == "content"


class TestContent:
    def test_unused_declared_variables_are_errors(self):
        template = make_template(variables=["first_name", "company", "plan"])

        assert not template.validate_content()
        assert "plan" in template.content_errors()[0]

    def test_sms_content_length(self):
        """Test SMS templates longer than one segment are invalid"""
        template = make_template(template_type="sms", content="x" * 161, subject=None)

        assert template.content_errors() == ["SMS templates must not exceed 160 characters"]

    def test_render_substitutes_declared_variables(self):
        template = make_template(content="Hi {{name}}, {{ count }} items {{unknown}}", variables=["name", "count"])

        rendered = template.render({"name": "Jane", "count": 3})

        assert rendered == "Hi Jane, 3 items {{unknown}}"

    def test_render_missing_value_is_empty(self):
        template = make_template(content="Hi {{name}}!")

        assert template.render({}) == "Hi !"


class TestVersions:
    def test_update_content_starts_new_version(self):
        """Test a content change snapshots the old version and resets review"""
        template = approved_template()
        template.activate()
        template.collect_domain_events()

        changes = template.update_content("Hi {{first_name}}", updated_by="editor")

        assert set(changes) == {"content", "variables"}
        assert template.template_version == 2
        assert template.status == TemplateStatus.DRAFT
        assert template.review_status == TemplateReviewStatus.PENDING
        assert template.get_version(1).content.startswith("Hello")
        updated, status_changed = template.collect_domain_events()
        assert isinstance(updated, TemplateUpdated)
        assert updated.template_version == 2
        assert isinstance(status_changed, TemplateStatusChanged)
        assert status_changed.previous_status == TemplateStatus.ACTIVE

    def test_unchanged_content_is_noop(self):
        template = make_template()
        template.collect_domain_events()

        assert template.update_content(template.content) == {}
        assert template.template_version == 1
        assert template.collect_domain_events() == []

    def test_revert_to_version(self):
        """Test reverting restores old content as a new version"""
        template = make_template()
        original = template.content
        template.update_content("Bye {{first_name}}")

        template.revert_to_version(1)

        assert template.content == original
        assert template.template_version == 3
        assert [v.version for v in template.version_history] == [1, 2]
        assert template.review_status == TemplateReviewStatus.PENDING

    def test_revert_unknown_or_current_version(self):
        template = make_template()
        with pytest.raises(ResourceNotFoundException):
            template.revert_to_version(7)
        with pytest.raises(StateConflictException):
            template.revert_to_version(1)


class TestReviewAndStatus:
    def test_review_flow(self):
        template = make_template()
        template.submit_for_review()
        template.approve("reviewer-1", "Looks good")

        assert template.review_status == TemplateReviewStatus.APPROVED
        assert template.reviewer_id == "reviewer-1"
        assert template.reviewed_at is not None
        reviews = [e for e in template.collect_domain_events() if isinstance(e, TemplateReviewed)]
        assert [e.review_status for e in reviews] == [
            TemplateReviewStatus.UNDER_REVIEW,
            TemplateReviewStatus.APPROVED,
        ]

    def test_cannot_submit_twice(self):
        template = make_template()
        template.submit_for_review()
        with pytest.raises(StateConflictException):
            template.submit_for_review()

    def test_reject_requires_comments(self):
        template = make_template()
        template.submit_for_review()
        with pytest.raises(ValidationException):
            template.reject("reviewer-1", " ")
        template.reject("reviewer-1", "Wrong tone")
        assert template.review_status == TemplateReviewStatus.REJECTED

    def test_approve_requires_review(self):
        with pytest.raises(StateConflictException):
            make_template().approve("reviewer-1")

    def test_activation_requires_approval(self):
        with pytest.raises(StateConflictException):
            make_template().activate()

    def test_activation_requires_valid_content(self):
        template = approved_template(variables=["first_name", "company", "plan"])
        with pytest.raises(ValidationException):
            template.activate()

    def test_activate_deactivate_archive(self):
        template = approved_template()
        template.activate()
        template.activate()

        with pytest.raises(StateConflictException):
            template.archive()
        template.deactivate()
        template.archive()

        assert template.status == TemplateStatus.ARCHIVED
        transitions = [
            (e.previous_status, e.new_status)
            for e in template.collect_domain_events()
            if isinstance(e, TemplateStatusChanged)
        ]
        assert transitions == [
            (TemplateStatus.DRAFT, TemplateStatus.ACTIVE),
            (TemplateStatus.ACTIVE, TemplateStatus.INACTIVE),
            (TemplateStatus.INACTIVE, TemplateStatus.ARCHIVED),
        ]

    def test_archived_template_is_read_only(self):
        template = make_template()
        template.archive()
        with pytest.raises(StateConflictException):
            template.update_content("New {{x}}")
        with pytest.raises(StateConflictException):
            template.update_details(name="Renamed")

    def test_usage_requires_active(self):
        template = approved_template()
        with pytest.raises(StateConflictException):
            template.increment_usage()
        template.activate()
        template.increment_usage()
        assert template.usage_count == 1
        assert template.last_used_at is not None

    def test_delete_refused_while_active(self):
        template = approved_template()
        template.activate()
        with pytest.raises(StateConflictException):
            template.delete()
        template.deactivate()
        template.collect_domain_events()

        template.delete(deleted_by="admin")

        (event,) = template.collect_domain_events()
        assert isinstance(event, TemplateDeleted)
        assert event.deleted_by == "admin"


def test_update_details_reports_changes():
    template = make_template(tags=["b", "a", "a"])
    template.collect_domain_events()

    changes = template.update_details(name="Welcome  mail", tags=["a", "b"], language="fr")

    assert template.tags == ["a", "b"]
    assert set(changes) == {"name", "language"}
    assert template.name.value == "Welcome mail"
    (event,) = template.collect_domain_events()
    assert isinstance(event, TemplateUpdated)
