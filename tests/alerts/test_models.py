"""Tests for alert payload and argument models."""

import pytest
from pydantic import ValidationError

from incidentio_mcp.alerts.models import DEFAULT_STATUS, AlertPayload, SendAlertArguments


class TestAlertPayload:
    def test_defaults(self) -> None:
        payload = AlertPayload(title="DB down", deduplication_key="db-1")
        assert payload.status == "firing"
        assert payload.description is None
        assert payload.metadata is None

    def test_wire_omits_unset_fields(self) -> None:
        payload = AlertPayload(title="DB down", deduplication_key="db-1")
        assert payload.to_wire() == {
            "title": "DB down",
            "deduplication_key": "db-1",
            "status": "firing",
        }

    def test_wire_includes_metadata(self) -> None:
        payload = AlertPayload(
            title="t",
            deduplication_key="k",
            status="resolved",
            metadata={"team": "db", "severity": 2},
        )
        assert payload.to_wire()["metadata"] == {"team": "db", "severity": 2}
        assert payload.to_wire()["status"] == "resolved"

    def test_empty_title_rejected(self) -> None:
        with pytest.raises(ValidationError):
            AlertPayload(title="", deduplication_key="k")


class TestSendAlertArguments:
    def test_status_left_unset(self) -> None:
        args = SendAlertArguments.model_validate({"title": "t", "deduplication_key": "k"})
        assert args.status is None
        assert args.to_payload().status == DEFAULT_STATUS

    def test_blank_status_counts_as_unset(self) -> None:
        args = SendAlertArguments.model_validate(
            {"title": "t", "deduplication_key": "k", "status": ""}
        )
        assert args.to_payload().status == "firing"

    def test_resolved_kept(self) -> None:
        args = SendAlertArguments.model_validate(
            {"title": "t", "deduplication_key": "k", "status": "resolved"}
        )
        assert args.to_payload().status == "resolved"

    @pytest.mark.parametrize(
        "arguments",
        [
            {"deduplication_key": "k"},
            {"title": "t"},
            {"title": "", "deduplication_key": "k"},
            {"title": "t", "deduplication_key": ""},
            {"title": "t", "deduplication_key": "k", "status": "FIRING"},
            {"title": "t", "deduplication_key": "k", "metadata": "not-a-map"},
            {"title": ["t"], "deduplication_key": "k"},
        ],
    )
    def test_invalid(self, arguments: dict) -> None:
        with pytest.raises(ValidationError):
            SendAlertArguments.model_validate(arguments)

    def test_unknown_fields_ignored(self) -> None:
        args = SendAlertArguments.model_validate(
            {"title": "t", "deduplication_key": "k", "priority": "P1"}
        )
        assert "priority" not in args.to_payload().to_wire()
