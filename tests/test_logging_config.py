import logging

from multichat.logging_config import SecretRedactingFilter, redact


def test_redact_masks_every_secret():
    assert redact("key=abc and abc again, xyz", ["abc", "xyz", ""]) == "key=*** and *** again, ***"


def test_filter_rewrites_records_containing_secrets():
    record = logging.LogRecord("multichat", logging.INFO, __file__, 1, "calling with %s", ("sk-secret",), None)

    assert SecretRedactingFilter(["sk-secret"]).filter(record)

    assert record.getMessage() == "calling with ***"


def test_filter_leaves_clean_records_alone():
    record = logging.LogRecord("multichat", logging.INFO, __file__, 1, "hello %s", ("world",), None)

    SecretRedactingFilter(["sk-secret"]).filter(record)

    assert record.args == ("world",)
