"""Tests for parameter block decoding and variables."""

from __future__ import annotations

from dataclasses import dataclass, field

import pytest

from collected.commands import ParamsError, ParamVariables, decode_params, variables_preprocessor
from collected.commands.params import require_http_url


@dataclass(frozen=True)
class Sample:
    name: str
    note: str | None = None
    headers: dict[str, str] = field(default_factory=dict)


class TestDecodeParams:
    def test_required_and_optional(self):
        sample = decode_params('name = "x"\nnote = "y"', Sample)
        assert sample == Sample(name="x", note="y")

    def test_defaults(self):
        sample = decode_params('name = "x"', Sample)
        assert sample.note is None
        assert sample.headers == {}

    def test_table(self):
        sample = decode_params('name = "x"\n[headers]\nAccept = "application/json"', Sample)
        assert sample.headers == {"Accept": "application/json"}

    def test_multiline_string(self):
        sample = decode_params('name = """\nline one\nline two"""', Sample)
        assert sample.name == "line one\nline two"

    def test_missing_required(self):
        with pytest.raises(ParamsError, match="Missing required parameter 'name'"):
            decode_params('note = "y"', Sample)

    def test_wrong_type(self):
        with pytest.raises(ParamsError, match="must be a string"):
            decode_params("name = 3", Sample)

    def test_table_values_must_be_strings(self):
        with pytest.raises(ParamsError, match="table of strings"):
            decode_params('name = "x"\n[headers]\nRetries = 2', Sample)

    def test_malformed_toml(self):
        with pytest.raises(ParamsError, match="Invalid parameters"):
            decode_params('name = "unterminated', Sample)

    def test_unknown_keys_ignored(self):
        sample = decode_params('name = "x"\nextra = "ignored"', Sample)
        assert sample == Sample(name="x")


class TestRequireHttpURL:
    @pytest.mark.parametrize("url", ["http://example.com", "https://example.com/a?b=c"])
    def test_valid(self, url):
        assert require_http_url("url", url) == url

    @pytest.mark.parametrize("url", ["example.com", "/relative", "file:///etc/passwd", "javascript:alert(1)"])
    def test_invalid(self, url):
        with pytest.raises(ParamsError):
            require_http_url("url", url)


class TestVariables:
    def test_substitution(self):
        preprocess = variables_preprocessor(ParamVariables(github_oauth_token="gho_abc"))
        assert preprocess('Authorization = "bearer {{ github_oauth_token }}"') == 'Authorization = "bearer gho_abc"'

    def test_no_placeholders(self):
        preprocess = variables_preprocessor(ParamVariables())
        assert preprocess('url = "http://example.com"') == 'url = "http://example.com"'

    def test_unset_variable(self):
        preprocess = variables_preprocessor(ParamVariables())
        with pytest.raises(ParamsError, match="github_oauth_token"):
            preprocess("{{github_oauth_token}}")

    def test_unknown_variable(self):
        preprocess = variables_preprocessor(ParamVariables(github_oauth_token="x"))
        with pytest.raises(ParamsError, match="trello_token"):
            preprocess("{{ trello_token }}")
