"""Tests for source value types."""

import pytest
from nit_cli.sources.errors import InvalidSourceError
from nit_cli.sources.models import OutcomeStatus
from nit_cli.sources.models import ResolutionReport
from nit_cli.sources.models import ResolutionStatus
from nit_cli.sources.models import SourceOutcome
from nit_cli.sources.models import SourceSpec
from nit_cli.sources.models import TemplateEntry


class TestSourceSpec:
    def test_label_defaults_to_uri(self):
        spec = SourceSpec(uri="github:NixOS/templates")
        assert spec.label == "github:NixOS/templates"

    def test_label_uses_name(self):
        spec = SourceSpec(uri="github:NixOS/templates", name="official")
        assert spec.label == "official"

    @pytest.mark.parametrize("uri", ["", "   "])
    def test_empty_uri_rejected(self, uri):
        with pytest.raises(InvalidSourceError):
            SourceSpec(uri=uri)

    def test_filters_frozen(self):
        spec = SourceSpec(uri="a", includes=["rust", "go"], excludes=("go",))
        assert spec.includes == frozenset({"rust", "go"})
        assert spec.excludes == frozenset({"go"})

    def test_absent_filters_stay_none(self):
        spec = SourceSpec(uri="a")
        assert spec.includes is None
        assert spec.excludes is None

    def test_empty_include_list_is_not_absent(self):
        """An explicit empty list keeps nothing; it does not mean 'no filter'."""
        spec = SourceSpec(uri="a", includes=[])
        assert spec.includes == frozenset()

    def test_hashable(self):
        assert len({SourceSpec(uri="a", includes=["x"]), SourceSpec(uri="a", includes=["x"])}) == 1


def test_template_entry_reference():
    entry = TemplateEntry(identifier="rust", source_name="official", uri="github:NixOS/templates")
    assert entry.reference == "github:NixOS/templates#rust"


class TestResolutionReport:
    def _outcome(self, position, status):
        return SourceOutcome(position=position, source=SourceSpec(uri=f"s{position}"), status=status)

    def test_status_complete(self):
        report = ResolutionReport(
            outcomes=(self._outcome(0, OutcomeStatus.OK), self._outcome(1, OutcomeStatus.EMPTY_AFTER_FILTER))
        )
        assert report.status == ResolutionStatus.COMPLETE

    def test_status_partial(self):
        report = ResolutionReport(
            outcomes=(self._outcome(0, OutcomeStatus.OK), self._outcome(1, OutcomeStatus.FETCH_FAILED))
        )
        assert report.status == ResolutionStatus.PARTIAL
        assert not report.all_sources_failed

    def test_status_all_failed(self):
        report = ResolutionReport(outcomes=(self._outcome(0, OutcomeStatus.FETCH_FAILED),))
        assert report.status == ResolutionStatus.ALL_SOURCES_FAILED
        assert report.all_sources_failed

    def test_lookup(self):
        entry = TemplateEntry(identifier="rust", source_name="a", uri="a")
        report = ResolutionReport(catalog=(entry,))
        assert report.lookup("rust") is entry
        assert report.lookup("go") is None
        assert report.identifiers() == ["rust"]

    def test_immutable(self):
        report = ResolutionReport()
        with pytest.raises(AttributeError):
            report.catalog = ()  # type: ignore[misc]


def test_outcome_describe():
    source = SourceSpec(uri="a")
    assert SourceOutcome(0, source, OutcomeStatus.OK, fetched=3, kept=1).describe() == "1 of 3 kept"
    failed = SourceOutcome(0, source, OutcomeStatus.FETCH_FAILED, cause=RuntimeError("boom"))
    assert failed.describe() == "fetch failed: boom"
    assert "nothing left" in SourceOutcome(0, source, OutcomeStatus.EMPTY_AFTER_FILTER, fetched=2).describe()
