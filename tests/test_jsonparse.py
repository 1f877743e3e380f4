"""
extract_json_object：从模型自由文本中取第一个完整 JSON 对象。
"""
import pytest

from jobdesk.core.jsonparse import extract_json_object


class TestExtractJsonObject:
    def test_plain_object(self):
        assert extract_json_object('{"a": 1}') == {"a": 1}

    def test_surrounding_prose(self):
        text = 'Sure! Here is the JSON:\n{"role": "frontend", "skills": null}\nHope this helps.'
        assert extract_json_object(text) == {"role": "frontend", "skills": None}

    def test_markdown_fence(self):
        text = '```json\n{"score": 80}\n```'
        assert extract_json_object(text) == {"score": 80}

    def test_first_of_two_objects(self):
        # 贪婪匹配会把两个对象连成非法 JSON；按括号配对只取第一个
        text = '{"score": 55} and also {"score": 90}'
        assert extract_json_object(text) == {"score": 55}

    def test_nested_and_braces_inside_strings(self):
        text = 'x {"reasoning": "uses {curly} and \\"quotes\\"", "inner": {"k": [1, 2]}} y'
        data = extract_json_object(text)
        assert data["reasoning"] == 'uses {curly} and "quotes"'
        assert data["inner"] == {"k": [1, 2]}

    @pytest.mark.parametrize("text", [
        "",
        "no json here",
        '{"unterminated": 1',
        "{not: valid json}",
        None,
    ])
    def test_invalid_raises_value_error(self, text):
        with pytest.raises(ValueError):
            extract_json_object(text)
