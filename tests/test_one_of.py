from payload_lint.engine.validator import PayloadValidator
from payload_lint.options import ValidateOptions

DOCUMENT = {
    "definitions": {
        "Choice": {
            "oneOf": [
                {"type": "object", "required": ["a"], "properties": {"a": {"type": "string"}}},
                {"type": "object", "required": ["b"], "properties": {"b": {"type": "integer"}}},
            ]
        },
        "Loose": {"oneOf": [{"type": "object"}, {"type": "object"}]},
        "Bad": {"oneOf": "not-a-list"},
    }
}


def _report(payload, pointer="/definitions/Choice", options=None):
    return PayloadValidator(DOCUMENT).validate(payload, pointer, options)


def test_exactly_one_alternative_matches():
    assert _report({"a": "x"}).ok
    assert _report({"b": 1}).ok


def test_several_matching_alternatives():
    report = _report({"a": "x", "b": 1})
    assert report.codes() == ["ONE_OF_MULTIPLE"]
    assert report.issues[0].message == "Data is valid against more than one schema from 'oneOf'"
    assert report.issues[0].inner == []


def test_no_matching_alternative_keeps_first_error_of_each():
    report = _report({"a": 1, "b": "x"})
    assert report.codes() == ["ONE_OF_MISSING"]
    issue = report.issues[0]
    assert issue.message == "Data does not match any schemas from 'oneOf'"
    assert len(issue.inner) == 2
    assert [inner.code for inner in issue.inner] == ["INVALID_TYPE", "INVALID_TYPE"]
    assert issue.inner[0].path == "/a"
    assert issue.inner[1].path == "/b"


def test_one_of_ignores_the_error_allow_list():
    options = ValidateOptions(include_errors="ENUM_MISMATCH")
    assert _report({}, "/definitions/Loose", options).codes() == ["ONE_OF_MULTIPLE"]


def test_malformed_one_of_is_ignored():
    assert _report({}, "/definitions/Bad").ok


def test_repeated_validation_gives_the_same_report():
    validator = PayloadValidator(DOCUMENT)
    first = validator.validate({"a": 1, "b": "x"}, "/definitions/Choice")
    second = validator.validate({"a": 1, "b": "x"}, "/definitions/Choice")
    assert first.to_dict() == second.to_dict()
