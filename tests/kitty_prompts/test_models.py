"""Tests for question parsing and the closed set of question kinds."""

import pytest

from kitty_prompts.exceptions import InvalidQuestion, UnsupportedQuestionType
from kitty_prompts.models import (
    AutocompleteMultiSelectQuestion,
    AutocompleteQuestion,
    Choice,
    ConfirmQuestion,
    Dialect,
    ExpandQuestion,
    MultiSelectQuestion,
    NumberQuestion,
    PasswordQuestion,
    Question,
    QuestionType,
    SelectQuestion,
    TextQuestion,
    coerce_question,
    parse_questions,
    question_from_dict,
    resolve_kind,
)


@pytest.mark.parametrize(
    "declared,expected",
    [
        ("input", TextQuestion),
        ("text", TextQuestion),
        ("password", PasswordQuestion),
        ("confirm", ConfirmQuestion),
        ("number", NumberQuestion),
    ],
)
def test_scalar_types_map_to_kinds(declared, expected):
    question = question_from_dict({"name": "q", "type": declared})
    assert type(question) is expected
    assert question.type == declared


@pytest.mark.parametrize(
    "declared,expected",
    [
        ("list", SelectQuestion),
        ("rawlist", SelectQuestion),
        ("select", SelectQuestion),
        ("checkbox", MultiSelectQuestion),
        ("multiselect", MultiSelectQuestion),
        ("autocomplete", AutocompleteQuestion),
        ("autocompleteMultiselect", AutocompleteMultiSelectQuestion),
        ("expand", ExpandQuestion),
    ],
)
def test_list_types_map_to_kinds(declared, expected):
    question = question_from_dict({"name": "q", "type": declared, "choices": ["a"]})
    assert type(question) is expected


def test_missing_type_defaults_to_input():
    question = question_from_dict({"name": "projectName", "message": "Name?"})
    assert isinstance(question, TextQuestion)
    assert question.type == "input"
    assert question.kind is QuestionType.TEXT


def test_unknown_type_raises_unsupported():
    with pytest.raises(UnsupportedQuestionType, match="editor") as excinfo:
        question_from_dict({"name": "body", "type": "editor"})
    assert excinfo.value.question_type == "editor"
    assert excinfo.value.name == "body"


def test_non_string_type_is_unsupported():
    with pytest.raises(UnsupportedQuestionType):
        resolve_kind(42)


def test_camel_case_fields_are_read():
    question = question_from_dict(
        {
            "name": "framework",
            "type": "multiselect",
            "options": [{"value": "react", "label": "React"}],
            "initialValues": ["react"],
            "cursorAt": "react",
            "maxItems": 5,
        }
    )
    assert question.initial_values == ["react"]
    assert question.cursor_at == "react"
    assert question.max_items == 5


def test_snake_case_fields_are_read():
    question = question_from_dict({"name": "t", "type": "text", "initial_value": "x", "default_value": "y"})
    assert question.initial_value == "x"
    assert question.default_value == "y"


def test_page_size_reads_as_max_items():
    question = question_from_dict({"name": "q", "type": "list", "choices": ["a"], "pageSize": 7})
    assert question.max_items == 7


def test_max_items_wins_over_page_size():
    question = question_from_dict(
        {"name": "q", "type": "list", "choices": ["a"], "pageSize": 7, "maxItems": 3}
    )
    assert question.max_items == 3


def test_unknown_fields_are_ignored():
    question = question_from_dict({"name": "q", "type": "input", "prefix": "?"})
    assert not hasattr(question, "prefix")


def test_missing_name_is_invalid():
    with pytest.raises(InvalidQuestion, match="name must be a non-empty string"):
        question_from_dict({"type": "input"})


def test_blank_name_is_invalid():
    with pytest.raises(InvalidQuestion):
        TextQuestion(name="  ")


def test_non_mapping_is_invalid():
    with pytest.raises(InvalidQuestion, match="expected a mapping"):
        coerce_question("projectName")


def test_list_question_requires_choices():
    with pytest.raises(InvalidQuestion, match="choices or options are required"):
        question_from_dict({"name": "q", "type": "list"})


def test_choices_must_be_a_list():
    with pytest.raises(InvalidQuestion, match="choices must be a list"):
        question_from_dict({"name": "q", "type": "select", "choices": "abc"})


def test_when_must_be_bool_or_callable():
    with pytest.raises(InvalidQuestion, match="when must be"):
        question_from_dict({"name": "q", "when": "yes"})


def test_coerce_question_passes_questions_through():
    question = TextQuestion(name="q")
    assert coerce_question(question) is question


def test_parse_questions_rejects_duplicate_names():
    with pytest.raises(InvalidQuestion, match="used by another question"):
        parse_questions([{"name": "a"}, {"name": "a", "type": "confirm"}])


def test_parse_questions_keeps_order():
    parsed = parse_questions([{"name": "b"}, {"name": "a"}, {"name": "c"}])
    assert [q.name for q in parsed] == ["b", "a", "c"]


def test_questions_are_immutable():
    question = TextQuestion(name="q")
    with pytest.raises(AttributeError):
        question.name = "other"  # type: ignore[misc]


def test_choice_display_prefers_label_over_name():
    assert Choice(value="v", label="Label", name="Name").display == "Label"
    assert Choice(value="v", name="Name").display == "Name"
    assert Choice(value=3).display == "3"


def test_bare_question_has_no_kind():
    with pytest.raises(UnsupportedQuestionType):
        coerce_question(Question(name="q"))


@pytest.mark.parametrize(
    "data,expected",
    [
        ({"name": "q", "type": "input"}, Dialect.LEGACY),
        ({"name": "q"}, Dialect.LEGACY),
        ({"name": "q", "type": "list", "choices": ["a"], "pageSize": 5}, Dialect.LEGACY),
        ({"name": "q", "type": "confirm", "default": True}, Dialect.LEGACY),
        ({"name": "q", "type": "text"}, Dialect.NATIVE),
        ({"name": "q", "type": "select", "options": [{"value": "a"}]}, Dialect.NATIVE),
        ({"name": "q", "type": "confirm", "initialValue": True}, Dialect.NATIVE),
        ({"name": "q", "type": "input", "dialect": "native"}, Dialect.NATIVE),
    ],
)
def test_dialect_is_detected(data, expected):
    assert question_from_dict(data).dialect is expected


def test_questions_built_in_code_default_to_legacy():
    assert TextQuestion(name="q").dialect is Dialect.LEGACY


def test_unknown_dialect_is_invalid():
    with pytest.raises(InvalidQuestion, match="unknown dialect"):
        TextQuestion(name="q", dialect="yaml")
