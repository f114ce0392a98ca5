"""Tests for identifier selection."""

import pytest
from nit_cli.sources.errors import AmbiguousOrMissingError
from nit_cli.sources.errors import FetchError
from nit_cli.sources.models import OutcomeStatus
from nit_cli.sources.models import ResolutionReport
from nit_cli.sources.models import ShadowedEntry
from nit_cli.sources.models import SourceOutcome
from nit_cli.sources.models import SourceSpec
from nit_cli.sources.models import TemplateEntry
from nit_cli.sources.selection import select_template


@pytest.fixture
def report():
    a = SourceSpec(uri="a")
    b = SourceSpec(uri="b", name="extra", includes=["rust", "zig"])
    c = SourceSpec(uri="c")
    return ResolutionReport(
        catalog=(
            TemplateEntry(identifier="default", source_name="a", uri="a"),
            TemplateEntry(identifier="rust", source_name="a", uri="a"),
        ),
        outcomes=(
            SourceOutcome(0, a, OutcomeStatus.OK, fetched=2, kept=2),
            SourceOutcome(1, b, OutcomeStatus.OK, fetched=3, kept=1, requested_but_missing=("zig",)),
            SourceOutcome(2, c, OutcomeStatus.FETCH_FAILED, cause=FetchError("c", "offline")),
        ),
        shadowed=(ShadowedEntry(identifier="rust", source_name="extra", winner="a"),),
    )


def test_select_owner(report):
    assert select_template(report, "rust") == TemplateEntry(identifier="rust", source_name="a", uri="a")


def test_missing_identifier_raises(report):
    with pytest.raises(AmbiguousOrMissingError) as exc_info:
        select_template(report, "haskell")

    assert exc_info.value.identifier == "haskell"
    assert "not found" in str(exc_info.value)


def test_missing_explains_requested_but_missing(report):
    with pytest.raises(AmbiguousOrMissingError) as exc_info:
        select_template(report, "zig")

    message = str(exc_info.value)
    assert "extra" in message
    assert "does not offer it" in message


def test_missing_mentions_failed_sources(report):
    with pytest.raises(AmbiguousOrMissingError) as exc_info:
        select_template(report, "haskell")

    assert "offline" in str(exc_info.value)


def test_missing_lists_available_when_nothing_else_explains():
    report = ResolutionReport(
        catalog=(TemplateEntry(identifier="rust", source_name="a", uri="a"),),
        outcomes=(SourceOutcome(0, SourceSpec(uri="a"), OutcomeStatus.OK, fetched=1, kept=1),),
    )
    with pytest.raises(AmbiguousOrMissingError, match="Available: rust"):
        select_template(report, "go")


def test_empty_catalog():
    with pytest.raises(AmbiguousOrMissingError):
        select_template(ResolutionReport(), "rust")
