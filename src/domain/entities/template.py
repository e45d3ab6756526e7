"""
Notification template entity.

A template is tenant-owned content with {{variable}} placeholders. Content
changes always produce a new template version and send the template back
to DRAFT / review PENDING; only approved templates with valid content can
be activated.

    DRAFT -> ACTIVE (review APPROVED) <-> INACTIVE
    DRAFT | INACTIVE -> ARCHIVED
"""

import json
import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from src.domain.entities.base import AggregateRoot, utcnow
from src.domain.entities.notification import SMS_MAX_LENGTH
from src.domain.enums import (TemplateReviewStatus, TemplateStatus,
                              TemplateType)
from src.domain.events.template import (TemplateCreated, TemplateDeleted,
                                        TemplateReviewed,
                                        TemplateStatusChanged,
                                        TemplateUpdated)
from src.domain.exceptions import (ResourceNotFoundException,
                                   StateConflictException, ValidationException)
from src.domain.value_objects.core import new_id
from src.domain.value_objects.messaging import TemplateName

VARIABLE_PATTERN = re.compile(r"\{\{\s*([^{}]+?)\s*\}\}")


def extract_variables(content: str) -> list[str]:
    """Placeholder names in order of first use"""
    found: list[str] = []
    for match in VARIABLE_PATTERN.finditer(content or ""):
        if match.group(1) not in found:
            found.append(match.group(1))
    return found


@dataclass(frozen=True)
class TemplateVersion:
    """Snapshot of a template's content kept in its version history"""

    version: int
    content: str
    subject: str | None
    variables: tuple[str, ...]
    updated_by: str
    updated_at: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": self.version,
            "content": self.content,
            "subject": self.subject,
            "variables": list(self.variables),
            "updated_by": self.updated_by,
            "updated_at": self.updated_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TemplateVersion":
        return cls(
            version=data["version"],
            content=data["content"],
            subject=data.get("subject"),
            variables=tuple(data.get("variables") or ()),
            updated_by=data.get("updated_by") or "system",
            updated_at=datetime.fromisoformat(data["updated_at"]),
        )


@dataclass
class TemplateEntity(AggregateRoot):
    id: str
    tenant_id: str
    name: TemplateName
    type: TemplateType
    content: str
    category: str
    subject: str | None = None
    variables: list[str] = field(default_factory=list)
    language: str = "en"
    tags: list[str] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    status: TemplateStatus = TemplateStatus.DRAFT
    review_status: TemplateReviewStatus = TemplateReviewStatus.PENDING
    reviewer_id: str | None = None
    reviewed_at: datetime | None = None
    review_comments: str | None = None
    template_version: int = 1
    version_history: list[TemplateVersion] = field(default_factory=list)
    usage_count: int = 0
    last_used_at: datetime | None = None
    created_by: str = "system"
    updated_by: str | None = None
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)
    revision: int = 1

    @classmethod
    def create(
        cls,
        tenant_id: str,
        name: str,
        template_type: str | TemplateType,
        content: str,
        category: str,
        created_by: str = "system",
        subject: str | None = None,
        variables: list[str] | None = None,
        language: str = "en",
        tags: list[str] | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> "TemplateEntity":
        try:
            resolved_type = TemplateType(template_type)
        except ValueError as e:
            raise ValidationException(
                f"Template type must be one of {TemplateType.values()}", field="type"
            ) from e
        cls._require_text(content, "content")
        cls._require_text(category, "category")

        template = cls(
            id=new_id(),
            tenant_id=tenant_id,
            name=TemplateName(name),
            type=resolved_type,
            content=content,
            category=category.strip(),
            subject=subject,
            variables=list(variables) if variables is not None else extract_variables(content),
            language=language,
            tags=sorted(set(tags or [])),
            metadata=dict(metadata or {}),
            created_by=created_by,
        )
        template.raise_event(
            TemplateCreated(
                tenant_id=tenant_id,
                name=template.name.value,
                template_type=resolved_type,
                category=template.category,
                created_by=created_by,
            )
        )
        return template

    # Content and versions

    def content_errors(self) -> list[str]:
        errors = []
        if not self.content or not self.content.strip():
            errors.append("Template content must not be empty")
        used = extract_variables(self.content)
        unused = [v for v in self.variables if v not in used]
        if unused:
            errors.append(f"Declared variables are not used in the content: {', '.join(unused)}")
        if self.type == TemplateType.SMS and len(self.content) > SMS_MAX_LENGTH:
            errors.append(f"SMS templates must not exceed {SMS_MAX_LENGTH} characters")
        return errors

    def validate_content(self) -> bool:
        return not self.content_errors()

    def render(self, data: dict[str, Any]) -> str:
        """Substitute declared variables; missing values render empty"""

        def substitute(match: re.Match) -> str:
            name = match.group(1)
            if name not in self.variables:
                return match.group(0)
            value = data.get(name)
            if value is None:
                return ""
            return value if isinstance(value, str) else json.dumps(value)

        return VARIABLE_PATTERN.sub(substitute, self.content)

    def update_content(
        self,
        content: str,
        variables: list[str] | None = None,
        subject: str | None = None,
        updated_by: str = "system",
    ) -> dict[str, dict[str, Any]]:
        """Start a new version; returns the {field: {old, new}} diff"""
        self._ensure_not_archived()
        self._require_text(content, "content")
        new_variables = list(variables) if variables is not None else extract_variables(content)

        changes: dict[str, dict[str, Any]] = {}
        if content != self.content:
            changes["content"] = {"old": self.content, "new": content}
        if new_variables != self.variables:
            changes["variables"] = {"old": self.variables, "new": new_variables}
        if subject is not None and subject != self.subject:
            changes["subject"] = {"old": self.subject, "new": subject}
        if not changes:
            return changes

        self._save_version()
        self.content = content
        self.variables = new_variables
        if subject is not None:
            self.subject = subject
        self._start_new_version(updated_by, changes)
        return changes

    def get_version(self, version: int) -> TemplateVersion | None:
        if version == self.template_version:
            return self._snapshot()
        return next((v for v in self.version_history if v.version == version), None)

    def revert_to_version(self, version: int, updated_by: str = "system") -> None:
        """Restore an earlier version's content as a new version needing review"""
        self._ensure_not_archived()
        target = self.get_version(version)
        if target is None:
            raise ResourceNotFoundException("Template version", str(version))
        if version == self.template_version:
            raise StateConflictException(f"Version {version} is already current", self.status.value)

        changes = {
            "content": {"old": self.content, "new": target.content},
            "reverted_to": {"old": self.template_version, "new": version},
        }
        self._save_version()
        self.content = target.content
        self.subject = target.subject
        self.variables = list(target.variables)
        self._start_new_version(updated_by, changes)

    # Review

    def submit_for_review(self, updated_by: str = "system") -> None:
        if self.status != TemplateStatus.DRAFT:
            raise StateConflictException(
                "Only draft templates can be submitted for review", self.status.value
            )
        if self.review_status == TemplateReviewStatus.UNDER_REVIEW:
            raise StateConflictException("Template is already under review", self.status.value)
        self._review(TemplateReviewStatus.UNDER_REVIEW, None, None, updated_by)

    def approve(self, reviewer_id: str, comments: str | None = None) -> None:
        self._ensure_under_review()
        self._review(TemplateReviewStatus.APPROVED, reviewer_id, comments, reviewer_id)

    def reject(self, reviewer_id: str, comments: str) -> None:
        self._ensure_under_review()
        if not comments or not comments.strip():
            raise ValidationException("Rejecting a template requires comments", field="comments")
        self._review(TemplateReviewStatus.REJECTED, reviewer_id, comments, reviewer_id)

    # Status

    def activate(self, updated_by: str = "system") -> None:
        if self.status == TemplateStatus.ACTIVE:
            return
        self._ensure_not_archived()
        if self.review_status != TemplateReviewStatus.APPROVED:
            raise StateConflictException(
                "Only approved templates can be activated", self.status.value
            )
        errors = self.content_errors()
        if errors:
            raise ValidationException("; ".join(errors), field="content")
        self._change_status(TemplateStatus.ACTIVE, updated_by)

    def deactivate(self, updated_by: str = "system") -> None:
        if self.status != TemplateStatus.ACTIVE:
            raise StateConflictException(
                "Only active templates can be deactivated", self.status.value
            )
        self._change_status(TemplateStatus.INACTIVE, updated_by)

    def archive(self, updated_by: str = "system") -> None:
        if self.status == TemplateStatus.ACTIVE:
            raise StateConflictException(
                "Active templates must be deactivated before archiving", self.status.value
            )
        self._ensure_not_archived()
        self._change_status(TemplateStatus.ARCHIVED, updated_by)

    def delete(self, deleted_by: str = "system") -> None:
        if self.status == TemplateStatus.ACTIVE:
            raise StateConflictException(
                "Active templates must be deactivated before deletion", self.status.value
            )
        self.raise_event(
            TemplateDeleted(tenant_id=self.tenant_id, name=self.name.value, deleted_by=deleted_by)
        )

    def increment_usage(self) -> None:
        if self.status != TemplateStatus.ACTIVE:
            raise StateConflictException("Only active templates can be used", self.status.value)
        self.usage_count += 1
        self.last_used_at = utcnow()

    # Descriptive data

    def update_details(
        self,
        updated_by: str = "system",
        name: str | None = None,
        category: str | None = None,
        language: str | None = None,
        tags: list[str] | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> dict[str, dict[str, Any]]:
        self._ensure_not_archived()
        changes: dict[str, dict[str, Any]] = {}
        if name is not None:
            new_name = TemplateName(name)
            if new_name != self.name:
                changes["name"] = {"old": self.name.value, "new": new_name.value}
                self.name = new_name
        if category is not None:
            self._require_text(category, "category")
            if category.strip() != self.category:
                changes["category"] = {"old": self.category, "new": category.strip()}
                self.category = category.strip()
        if language is not None and language != self.language:
            changes["language"] = {"old": self.language, "new": language}
            self.language = language
        if tags is not None and sorted(set(tags)) != self.tags:
            changes["tags"] = {"old": self.tags, "new": sorted(set(tags))}
            self.tags = sorted(set(tags))
        if metadata is not None and metadata != self.metadata:
            changes["metadata"] = {"old": self.metadata, "new": dict(metadata)}
            self.metadata = dict(metadata)

        if changes:
            self._touch(updated_by)
            self.raise_event(
                TemplateUpdated(
                    tenant_id=self.tenant_id,
                    template_version=self.template_version,
                    changes=changes,
                    updated_by=updated_by,
                )
            )
        return changes

    def _snapshot(self) -> TemplateVersion:
        return TemplateVersion(
            version=self.template_version,
            content=self.content,
            subject=self.subject,
            variables=tuple(self.variables),
            updated_by=self.updated_by or self.created_by,
            updated_at=self.updated_at,
        )

    def _save_version(self) -> None:
        self.version_history.append(self._snapshot())

    def _start_new_version(self, updated_by: str, changes: dict[str, dict[str, Any]]) -> None:
        previous = self.status
        self.template_version += 1
        self.status = TemplateStatus.DRAFT
        self.review_status = TemplateReviewStatus.PENDING
        self._touch(updated_by)
        self.raise_event(
            TemplateUpdated(
                tenant_id=self.tenant_id,
                template_version=self.template_version,
                changes=changes,
                updated_by=updated_by,
            )
        )
        if previous != TemplateStatus.DRAFT:
            self.raise_event(
                TemplateStatusChanged(
                    tenant_id=self.tenant_id,
                    previous_status=previous,
                    new_status=self.status,
                    updated_by=updated_by,
                )
            )

    def _review(
        self,
        review_status: TemplateReviewStatus,
        reviewer_id: str | None,
        comments: str | None,
        updated_by: str,
    ) -> None:
        self.review_status = review_status
        if review_status != TemplateReviewStatus.UNDER_REVIEW:
            self.reviewer_id = reviewer_id
            self.reviewed_at = utcnow()
            self.review_comments = comments
        self._touch(updated_by)
        self.raise_event(
            TemplateReviewed(
                tenant_id=self.tenant_id,
                review_status=review_status,
                reviewer_id=reviewer_id,
                comments=comments,
            )
        )

    def _change_status(self, target: TemplateStatus, updated_by: str) -> None:
        previous = self.status
        self.status = target
        self._touch(updated_by)
        self.raise_event(
            TemplateStatusChanged(
                tenant_id=self.tenant_id,
                previous_status=previous,
                new_status=target,
                updated_by=updated_by,
            )
        )

    def _ensure_under_review(self) -> None:
        if self.review_status != TemplateReviewStatus.UNDER_REVIEW:
            raise StateConflictException(
                "Only templates under review can be approved or rejected",
                self.review_status.value,
            )

    def _ensure_not_archived(self) -> None:
        if self.status == TemplateStatus.ARCHIVED:
            raise StateConflictException(
                "Archived templates cannot be modified", self.status.value
            )

    def _touch(self, updated_by: str) -> None:
        self.updated_by = updated_by
        self.updated_at = utcnow()

    @staticmethod
    def _require_text(value: str | None, field_name: str) -> None:
        if not value or not value.strip():
            raise ValidationException(f"Template {field_name} must not be empty", field=field_name)
