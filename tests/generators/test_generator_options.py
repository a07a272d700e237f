import pytest
from generators.generator_options import GeneratorOptions, OutputMode, options_from_parameter, parse_bool, \
    parse_output_mode


def test_defaults():
    options = GeneratorOptions()
    assert options.mode == OutputMode.HTML_PAGE
    assert options.emit_front_matter_extras
    assert not options.gen_warnings
    assert not options.warnings_as_errors
    assert not options.per_file
    assert not options.camel_case_fields


def test_parameter_string():
    options = options_from_parameter(
        "mode=html_fragment_with_front_matter, warnings=true,per_file=1,"
        "camel_case_fields=yes,emit_yaml=false,custom_style_sheet=/css/docs.css,dictionary=words.dic,"
    )
    assert options.mode == OutputMode.HTML_FRAGMENT_WITH_FRONT_MATTER
    assert options.gen_warnings
    assert options.per_file
    assert options.camel_case_fields
    assert not options.emit_front_matter_extras
    assert options.custom_style_sheet == "/css/docs.css"
    assert options.dictionary == "words.dic"


def test_parameter_string_updates_existing_options():
    options = GeneratorOptions(gen_warnings=True)
    assert options_from_parameter("warnings_as_errors=true", options) is options
    assert options.gen_warnings and options.warnings_as_errors


@pytest.mark.parametrize("parameter,message", [
    ("mode=pdf", "unknown mode 'pdf'"),
    ("warnings=maybe", "invalid boolean value 'maybe'"),
    ("colour=blue", "unknown parameter 'colour'"),
])
def test_bad_parameters(parameter, message):
    with pytest.raises(ValueError, match=message):
        options_from_parameter(parameter)


@pytest.mark.parametrize("value,expected", [
    ("true", True), ("TRUE", True), ("1", True), ("on", True),
    ("false", False), ("0", False), ("", False), ("no", False),
])
def test_parse_bool(value, expected):
    assert parse_bool(value) == expected


def test_parse_output_mode():
    assert parse_output_mode(" html_fragment ") == OutputMode.HTML_FRAGMENT


if __name__ == "__main__":
    pytest.main([__file__])
