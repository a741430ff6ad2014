"""
Tests for JSON recovery from model output.
"""

from gateway.parsing import recover_json


class TestRecoverJson:
    """Test tolerant JSON object extraction."""

    def test_plain_object(self):
        assert recover_json('{"a": 1}') == {"a": 1}

    def test_object_surrounded_by_prose(self):
        text = 'Sure! Here is the analysis:\n{"score": 80, "tags": ["x"]}\nHope that helps.'
        assert recover_json(text) == {"score": 80, "tags": ["x"]}

    def test_fenced_object(self):
        text = '```json\n{"normal_skills": []}\n```'
        assert recover_json(text) == {"normal_skills": []}

    def test_nested_braces_use_outermost_block(self):
        text = 'x {"outer": {"inner": 1}} y'
        assert recover_json(text) == {"outer": {"inner": 1}}

    def test_two_objects_is_unparseable(self):
        """Greedy block spans both objects and is not valid JSON."""
        assert recover_json('{"a": 1} and {"b": 2}') is None

    def test_no_json(self):
        assert recover_json("I cannot help with that.") is None

    def test_empty_and_none(self):
        assert recover_json("") is None
        assert recover_json(None) is None

    def test_array_is_not_an_object(self):
        assert recover_json("[1, 2, 3]") is None

    def test_truncated_object(self):
        assert recover_json('{"a": 1, "b": ') is None
