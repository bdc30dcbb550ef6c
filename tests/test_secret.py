"""
Tests for SecretString.
"""

import copy
import logging
import pickle

import pytest

from dbpools.secret import REDACTED, SecretString

URL = "postgres://user:s3cr3t@db:5432/app"


@pytest.mark.unit
class TestSecretString:
    def test_expose_secret(self):
        assert SecretString(URL).expose_secret() == URL

    def test_str_and_repr_redacted(self):
        secret = SecretString(URL)
        assert str(secret) == REDACTED
        assert "s3cr3t" not in repr(secret)
        assert "s3cr3t" not in f"{secret}"
        assert "s3cr3t" not in f"{secret!r:>80}"
        assert "s3cr3t" not in "%s" % secret

    def test_logging_redacted(self, caplog):
        caplog.set_level(logging.INFO, logger="dbpools.test")
        logging.getLogger("dbpools.test").info("connecting to %s", SecretString(URL))
        assert "s3cr3t" not in caplog.text
        assert REDACTED in caplog.text

    def test_equality(self):
        assert SecretString(URL) == SecretString(URL)
        assert SecretString(URL) != SecretString("postgres://other")
        # Never equal to the plain string
        assert SecretString(URL) != URL

    def test_hashable(self):
        assert len({SecretString(URL), SecretString(URL)}) == 1

    def test_immutable(self):
        secret = SecretString(URL)
        with pytest.raises(AttributeError):
            secret._value = "other"

    def test_rejects_non_string(self):
        with pytest.raises(TypeError):
            SecretString(42)

    def test_wraps_secret_string(self):
        assert SecretString(SecretString(URL)).expose_secret() == URL

    def test_bool(self):
        assert SecretString(URL)
        assert not SecretString("")

    def test_copy_and_pickle_stay_wrapped(self):
        secret = SecretString(URL)
        assert copy.deepcopy(secret) == secret
        restored = pickle.loads(pickle.dumps(secret))
        assert isinstance(restored, SecretString)
        assert restored.expose_secret() == URL
