from __future__ import annotations

import logging

import pytest

from plaindom.dnm.parameters import DNMParameters, check, log_diagnostics


def _codes(params: DNMParameters) -> list[str]:
    return [diagnostic.code for diagnostic in check(params)]


def test_presets_produce_no_diagnostics() -> None:
    assert check(DNMParameters.default()) == []
    assert check(DNMParameters.llamapun_normalization()) == []


def test_both_stemming_modes_reported() -> None:
    params = DNMParameters(stem_words_once=True, stem_words_full=True, support_back_mapping=False)

    assert _codes(params) == ["redundant-stemming"]


@pytest.mark.parametrize("stem_flag", ["stem_words_once", "stem_words_full"])
def test_lowercase_with_stemming_reported(stem_flag: str) -> None:
    params = DNMParameters(convert_to_lowercase=True, support_back_mapping=False, **{stem_flag: True})

    assert _codes(params) == ["redundant-lowercase"]


@pytest.mark.parametrize("stem_flag", ["stem_words_once", "stem_words_full"])
def test_back_mapping_with_stemming_reported(stem_flag: str) -> None:
    params = DNMParameters(**{stem_flag: True})

    assert _codes(params) == ["unsupported-back-mapping"]


def test_lowercase_without_stemming_is_fine() -> None:
    assert check(DNMParameters(convert_to_lowercase=True)) == []


def test_all_rules_reported_in_order() -> None:
    params = DNMParameters(stem_words_once=True, stem_words_full=True, convert_to_lowercase=True)

    assert _codes(params) == [
        "redundant-stemming",
        "redundant-lowercase",
        "unsupported-back-mapping",
    ]


def test_check_is_repeatable_and_does_not_mutate() -> None:
    params = DNMParameters.default().with_overrides(stem_words_full=True, convert_to_lowercase=True)

    first = check(params)
    second = params.check()

    assert first == second
    assert params.stem_words_full is True
    assert params.convert_to_lowercase is True


def test_log_diagnostics_emits_warnings(caplog: pytest.LogCaptureFixture) -> None:
    params = DNMParameters(stem_words_once=True)

    with caplog.at_level(logging.WARNING, logger="plaindom.dnm.parameters"):
        count = log_diagnostics(check(params))

    assert count == 1
    assert len(caplog.records) == 1
    assert caplog.records[0].levelno == logging.WARNING
    assert "unsupported-back-mapping" in caplog.records[0].getMessage()


def test_log_diagnostics_with_nothing_to_report(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING):
        assert log_diagnostics([]) == 0

    assert caplog.records == []


def test_log_diagnostics_uses_given_logger(caplog: pytest.LogCaptureFixture) -> None:
    custom = logging.getLogger("plaindom.tests.custom")
    params = DNMParameters(stem_words_once=True, stem_words_full=True, support_back_mapping=False)

    with caplog.at_level(logging.WARNING, logger="plaindom.tests.custom"):
        count = log_diagnostics(check(params), log=custom)

    assert count == 1
    assert [record.name for record in caplog.records] == ["plaindom.tests.custom"]
