"""Tests for ListServicesOptions and the flag rules."""

from __future__ import annotations

import pytest

from deployctl.domain.options import (
    PROJECT_REQUIRED_MESSAGE,
    PROJECT_WITH_ALL_MESSAGE,
    ListServicesOptions,
    validate_list_options,
)


class TestListServicesOptions:
    def test_defaults(self) -> None:
        opts = ListServicesOptions()
        assert opts.project is None
        assert opts.all_projects is False

    def test_all_alias(self) -> None:
        assert ListServicesOptions.model_validate({"all": True}).all_projects is True

    def test_field_name(self) -> None:
        assert ListServicesOptions(all_projects=True).all_projects is True


class TestValidateListOptions:
    @pytest.mark.parametrize(
        ("project", "all_projects", "code", "message"),
        [
            ("api-1", True, "FLAG_CONFLICT", PROJECT_WITH_ALL_MESSAGE),
            (None, False, "MISSING_FLAG", PROJECT_REQUIRED_MESSAGE),
            ("", False, "MISSING_FLAG", PROJECT_REQUIRED_MESSAGE),
        ],
    )
    def test_rejections(
        self, project: str | None, all_projects: bool, code: str, message: str
    ) -> None:
        vr = validate_list_options(ListServicesOptions(project=project, all_projects=all_projects))
        assert vr.valid is False
        assert vr.code == code
        assert vr.errors == [message]

    def test_conflict_checked_first(self) -> None:
        vr = validate_list_options(ListServicesOptions(project="x", all_projects=True))
        assert vr.errors == ["project flag cannot be used with --all"]

    @pytest.mark.parametrize(
        "opts",
        [ListServicesOptions(project="api-1"), ListServicesOptions(all_projects=True)],
    )
    def test_accepts(self, opts: ListServicesOptions) -> None:
        vr = validate_list_options(opts)
        assert vr.valid is True
        assert vr.errors == []
