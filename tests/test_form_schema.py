from app.services.form_schema import get_field_label, iter_form_fields, validate_answers

FORM = {
    "title": "Registration",
    "general_info": {"collect_name": True, "collect_email": True, "collect_phone": True},
    "fields": [{"id": "legacy", "type": "text", "label": "Legacy"}],
    "sections": [
        {
            "id": "b", "title": "B", "order": 2,
            "fields": [{"id": "b1", "type": "text", "label": "B one"}],
        },
        {
            "id": "a", "title": "A", "order": 1,
            "fields": [{"id": "a1", "type": "number", "label": "Age", "validation": {"min": 18, "max": 99}}],
            "subsections": [
                {"id": "a-2", "title": "A2", "order": 2, "fields": [{"id": "a22", "type": "url", "label": "Site"}]},
                {"id": "a-1", "title": "A1", "order": 1, "fields": [
                    {"id": "a11", "type": "radio", "label": "Diet", "options": ["Vegan", "None"]},
                ]},
            ],
        },
    ],
}

GENERAL = {"name": "Grace Hopper", "email": "grace@example.com"}


def _ids(errors):
    return [error["field_id"] for error in errors]


def test_fields_are_walked_in_display_order():
    assert [f["id"] for f in iter_form_fields(FORM)] == ["legacy", "a1", "a11", "a22", "b1"]


def test_labels_for_general_and_regular_fields():
    assert get_field_label(FORM, "general_email") == "Email"
    assert get_field_label(FORM, "general_address") == "general_address"
    assert get_field_label(FORM, "a1") == "Age"
    assert get_field_label(FORM, "missing") == "missing"


def test_valid_answers_have_no_errors():
    answers = {"a1": 30, "a11": "Vegan", "a22": "https://example.com/me", "b1": "x"}
    assert validate_answers(FORM, GENERAL, answers) == []


def test_name_and_email_required_when_collected():
    errors = validate_answers(FORM, {}, {})
    assert _ids(errors) == ["general_name", "general_email"]


def test_general_values_fall_back_to_answers():
    answers = {"general_name": "Grace", "general_email": "grace@example.com"}
    assert validate_answers(FORM, {}, answers) == []


def test_invalid_general_email():
    errors = validate_answers(FORM, {"name": "G", "email": "not-an-email"}, {})
    assert errors == [{"field_id": "general_email", "message": "Email must be a valid email address"}]


def test_number_bounds_and_options():
    errors = validate_answers(FORM, GENERAL, {"a1": 12, "a11": "Paleo", "a22": "ftp:/x"})
    assert _ids(errors) == ["a1", "a11", "a22"]
    assert errors[0]["message"] == "Age must be at least 18"


def test_required_field_and_single_value():
    form = {"fields": [
        {"id": "topic", "type": "text", "label": "Topic", "required": True},
        {"id": "tags", "type": "select", "label": "Tags", "options": ["x", "y"], "multiple": True},
        {"id": "one", "type": "select", "label": "One", "options": ["x", "y"]},
    ]}
    errors = validate_answers(form, {}, {"topic": "  ", "tags": ["x", "y"], "one": ["x"]})
    assert errors == [
        {"field_id": "topic", "message": "Topic is required"},
        {"field_id": "one", "message": "One accepts a single value"},
    ]


def test_sub_field_rows_report_paths():
    form = {"fields": [{
        "id": "authors", "type": "text", "label": "Authors", "required": True,
        "has_sub_fields": True,
        "sub_fields": [
            {"id": "name", "type": "text", "label": "Name", "required": True},
            {"id": "email", "type": "email", "label": "Email"},
        ],
    }]}
    answers = {"authors": [{"name": "A", "email": "a@example.com"}, {"name": "", "email": "nope"}]}
    assert _ids(validate_answers(form, {}, answers)) == ["authors[1].name", "authors[1].email"]


def test_text_length_and_pattern():
    form = {"fields": [{
        "id": "code", "type": "text", "label": "Code",
        "validation": {"min_length": 3, "max_length": 5, "pattern": "[A-Z]+"},
    }]}
    assert validate_answers(form, {}, {"code": "ABCD"}) == []
    assert validate_answers(form, {}, {"code": "AB"})[0]["message"] == "Code must be at least 3 characters"
    assert validate_answers(form, {}, {"code": "abcd"})[0]["message"] == "Code has an invalid format"
