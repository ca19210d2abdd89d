import logging

from http_errors import ApiError
from http_errors.config import ErrorDefaults
from http_errors.options import (
    CanonicalInput,
    CauseInput,
    ErrnoInput,
    FieldsInput,
    MessageInput,
    OptionsNormalizer,
    StatusCodeInput,
    UnrecognizedInput,
)
from http_errors.registry import HTTP_STATUS_CODES, ErrnoMessageRegistry, StatusCodeRegistry


def _normalizer(**kwargs):
    return OptionsNormalizer(canonical_type=ApiError, **kwargs)


def test_classify_picks_one_variant_per_shape():
    normalizer = _normalizer()
    error = ApiError.new(404)
    cause = KeyError("missing")
    assert normalizer.classify(404) == StatusCodeInput(404)
    assert normalizer.classify(40412) == ErrnoInput(40412)
    assert normalizer.classify("boom") == MessageInput("boom")
    assert normalizer.classify(error) == CanonicalInput(error)
    assert normalizer.classify(cause) == CauseInput(cause)
    assert normalizer.classify({"errno": 1}) == FieldsInput({"errno": 1})
    assert normalizer.classify(None) == UnrecognizedInput(None)
    assert normalizer.classify(True) == UnrecognizedInput(True)
    assert normalizer.classify(404.0) == UnrecognizedInput(404.0)


def test_every_registered_status_is_status_first():
    normalizer = _normalizer()
    for status, phrase in HTTP_STATUS_CODES.items():
        fields = normalizer.normalize(status)
        assert fields.status == status
        assert fields.errno == status * 100
        assert fields.message == phrase


def test_errno_prefers_registered_message():
    fields = _normalizer().normalize(40100)
    assert fields.status == 401
    assert fields.errno == 40100
    assert fields.message == "User Require Login"


def test_errno_falls_back_to_status_phrase_then_default():
    normalizer = _normalizer()
    fields = normalizer.normalize(40412)
    assert fields.status == 404
    assert fields.message == "Not Found"

    fields = normalizer.normalize(49912)
    assert fields.status == 499
    assert fields.errno == 49912
    assert fields.message == "UnknownError"


def test_string_sets_only_the_message():
    fields = _normalizer().normalize("boom")
    assert fields.message == "boom"
    assert fields.status == 400
    assert fields.errno == 40000
    assert fields.track_error is None


def test_mapping_fields_and_aliases():
    normalizer = _normalizer()
    fields = normalizer.normalize({"errno": 40102, "message": "require re-login"})
    assert fields.errno == 40102
    assert fields.status == 400
    assert fields.message == "require re-login"

    cause = RuntimeError("db down")
    fields = normalizer.normalize(
        {"code": 50301, "status_code": 503, "error_msg": "later", "track_error": cause}
    )
    assert fields.errno == 50301
    assert fields.status == 503
    assert fields.message == "later"
    assert fields.track_error is cause


def test_canonical_name_wins_over_alias():
    fields = _normalizer().normalize({"errno": 40001, "code": 40002, "name": "AuthError"})
    assert fields.errno == 40001
    assert fields.name == "AuthError"


def test_mapping_coerces_numeric_strings_and_drops_garbage(caplog):
    normalizer = _normalizer()
    fields = normalizer.normalize({"errno": "40404", "status": "404"})
    assert fields.errno == 40404
    assert fields.status == 404

    with caplog.at_level(logging.WARNING, logger="http_errors"):
        fields = normalizer.normalize({"errno": "abc", "status": True})
    assert fields.errno == 40000
    assert fields.status == 400
    assert "abc" in caplog.text


def test_mapping_keeps_supplied_request_id():
    fields = _normalizer().normalize({"request_id": "X0101000000TABCD"})
    assert fields.request_id == "X0101000000TABCD"


def test_foreign_exception_is_only_tracked():
    cause = ValueError("bad value")
    fields = _normalizer().normalize(cause)
    assert fields.track_error is cause
    assert fields.message == "UnknownError"
    assert fields.status == 400
    assert fields.errno == 40000


def test_unrecognized_input_is_logged_and_tracked(caplog):
    marker = object()
    with caplog.at_level(logging.WARNING, logger="http_errors"):
        fields = _normalizer().normalize(marker)
    assert fields.track_error is marker
    assert "Unrecognized" in caplog.text

    fields = _normalizer().normalize(None)
    assert fields.track_error is None
    assert fields.errno == 40000


def test_injected_registries_and_defaults_are_used():
    status_codes = StatusCodeRegistry({499: "Client Closed Request"})
    normalizer = _normalizer(
        status_codes=status_codes,
        errno_messages=ErrnoMessageRegistry({49901: "Client Went Away"}, status_codes=status_codes),
        defaults=ErrorDefaults(errno=50000, status=500, message="Server Fault", request_id_length=20),
    )
    assert normalizer.normalize(499).message == "Client Closed Request"
    assert normalizer.normalize(49901).message == "Client Went Away"

    fields = normalizer.normalize("x")
    assert fields.errno == 50000
    assert fields.status == 500
    assert len(fields.request_id) == 20
    assert normalizer.normalize(None).message == "Server Fault"


def test_name_defaults_to_caller_supplied_type_name():
    assert _normalizer().normalize(404, name="NotFoundError").name == "NotFoundError"


def test_malformed_numeric_strings_never_raise(caplog):
    normalizer = _normalizer()
    with caplog.at_level(logging.WARNING, logger="http_errors"):
        fields = normalizer.normalize({"errno": "--5", "status": "²", "code": "4.5"})
    assert fields.errno == 40000
    assert fields.status == 400
    assert "--5" in caplog.text


def test_integers_too_long_to_render_fall_back_to_defaults():
    normalizer = _normalizer()
    huge = 10**5000

    fields = normalizer.normalize(huge)
    assert fields.errno == 40000
    assert fields.status == 400
    assert fields.message == "UnknownError"

    fields = normalizer.normalize({"errno": huge, "status": huge})
    assert fields.errno == 40000
    assert fields.status == 400
