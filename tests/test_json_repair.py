import pytest

from esoteric_planner.shared.utils.json_repair import (
    JSONRepairError,
    clean_json_response,
    fix_hashtags_array,
    parse_json_array,
    parse_json_object,
)


class TestParseJsonArray:
    def test_plain_array(self):
        assert parse_json_array('[{"day": 1, "idea": "x"}]') == [{"day": 1, "idea": "x"}]

    def test_array_wrapped_in_chatter_and_fences(self):
        text = 'Вот ваш план:\n```json\n[{"day": 1, "idea": "Луна"}]\n```\nУдачи!'
        assert parse_json_array(text) == [{"day": 1, "idea": "Луна"}]

    def test_unquoted_hashtags_are_repaired(self):
        text = '[{"day": 1, "post": {"content": "Текст", "hashtags": [#таро, #эзотерика]}}]'
        result = parse_json_array(text)
        assert result[0]["post"]["hashtags"] == ["#таро", "#эзотерика"]

    def test_trailing_commas_are_removed(self):
        assert parse_json_array('[{"day": 1, "idea": "x",},]') == [{"day": 1, "idea": "x"}]

    def test_no_array_raises(self):
        with pytest.raises(JSONRepairError):
            parse_json_array("Извините, не могу помочь")

    def test_empty_input_raises(self):
        with pytest.raises(JSONRepairError):
            parse_json_array("")

    def test_hopeless_input_raises(self):
        with pytest.raises(JSONRepairError):
            parse_json_array('[{"day": 1, "idea": }]')


class TestParseJsonObject:
    def test_object_in_fences(self):
        text = '```json\n{"content": "Пост", "hashtags": ["#таро"]}\n```'
        assert parse_json_object(text) == {"content": "Пост", "hashtags": ["#таро"]}

    def test_single_quoted_hashtags(self):
        text = "{\"content\": \"Пост\", \"hashtags\": ['#таро', '#луна']}"
        assert parse_json_object(text)["hashtags"] == ["#таро", "#луна"]

    def test_no_object_raises(self):
        with pytest.raises(JSONRepairError):
            parse_json_object("просто текст")


def test_fix_hashtags_array_quotes_every_item():
    text = '"hashtags": [#таро, \'#луна\', "#ok"]'
    assert fix_hashtags_array(text) == '"hashtags": ["#таро", "#луна", "#ok"]'


def test_clean_json_response_strips_fences_and_commas():
    assert clean_json_response('```json\n{"a": [1, 2,],}\n```') == '{"a": [1, 2]}\n'
