import logging

import pytest
from flask import Flask

from automark import load
from automark.lang import get_string
from automark.params import PARAM_INT, PARAM_RAW, PARAM_TEXT, ExternalValue, clean_param
from automark.version import MATURITY_STABLE, plugin


def test_version_descriptor():
    assert plugin.component == "assignsubmission_automark"
    assert plugin.release == "1.0"
    assert plugin.version == 2024031700
    assert plugin.requires == 2023100900
    assert plugin.supported == (403, 404)
    assert plugin.maturity == MATURITY_STABLE
    assert plugin.is_supported(404)
    assert not plugin.is_supported(402)


def test_load_refuses_old_host():
    app = Flask(__name__)
    app.config.update(
        SQLALCHEMY_DATABASE_URI="sqlite:///:memory:",
        AUTOMARK_HOST_VERSION=2022041900,
    )
    with pytest.raises(RuntimeError):
        load(app)


def test_get_string():
    assert get_string("pluginname") == "Automark"
    assert get_string("numwords", a="B+") == "Automark: B+"


def test_missing_string(caplog):
    with caplog.at_level(logging.WARNING, logger="automark.lang"):
        assert get_string("nosuchstring") == "[[nosuchstring]]"
    assert "nosuchstring" in caplog.text


def test_clean_param():
    assert clean_param("<p>B+</p>", PARAM_TEXT) == "B+"
    assert clean_param("<p>B+</p>", PARAM_RAW) == "<p>B+</p>"
    assert clean_param("12", PARAM_INT) == 12
    assert clean_param(None, PARAM_TEXT) is None
    with pytest.raises(ValueError):
        clean_param("x", "html")


@pytest.mark.parametrize(
    "value",
    ["a  b", "x &lt; y", "5 < 6 and 7 > 3", "line one\n  line two", "a<b"],
)
def test_clean_text_keeps_plain_text(value):
    assert clean_param(value, PARAM_TEXT) == value


def test_clean_text_removes_tags_only():
    assert clean_param("<b>5 < 6</b> &amp; <br/>done", PARAM_TEXT) == "5 < 6 &amp; done"
    assert clean_param("A<!-- note -->B", PARAM_TEXT) == "AB"


def test_external_value():
    value = ExternalValue(PARAM_RAW, "The value for this submission.")
    assert value.clean("<b>x</b>") == "<b>x</b>"
    with pytest.raises(ValueError):
        ExternalValue("html", "bad")


def test_string_table_only_holds_used_strings():
    from automark.lang import COMPONENT, STRINGS

    assert set(STRINGS[COMPONENT]) == {"pluginname", "numwords"}
