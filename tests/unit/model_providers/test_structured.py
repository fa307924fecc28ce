"""Tests for structured model output parsing."""

import pytest
from pydantic import BaseModel, Field

from seaquote.core.exceptions import ModelResponseError
from seaquote.model_providers.structured import extract_json, parse_structured_response


class Reply(BaseModel):
    subject: str = Field(min_length=3)
    body: str


class TestExtractJson:
    def test_plain_object(self):
        assert extract_json('{"a": 1}') == '{"a": 1}'

    def test_fenced_block(self):
        assert extract_json('```json\n{"a": 1}\n```') == '{"a": 1}'

    def test_surrounding_prose(self):
        text = 'Here is the draft:\n{"a": {"b": 2}}\nLet me know.'
        assert extract_json(text) == '{"a": {"b": 2}}'

    def test_no_object(self):
        with pytest.raises(ModelResponseError):
            extract_json("no braces here")


class TestParseStructuredResponse:
    def test_valid(self):
        reply = parse_structured_response('{"subject": "RFQ", "body": "Hello"}', Reply)
        assert reply == Reply(subject="RFQ", body="Hello")

    def test_empty(self):
        with pytest.raises(ModelResponseError, match="Empty"):
            parse_structured_response("   ", Reply)

    def test_malformed_json(self):
        with pytest.raises(ModelResponseError, match="not valid JSON"):
            parse_structured_response('{"subject": "RFQ",}', Reply)

    def test_schema_violation(self):
        with pytest.raises(ModelResponseError, match="Reply validation"):
            parse_structured_response('{"subject": "x", "body": "Hello"}', Reply)
