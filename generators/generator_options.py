"""
generator_options.py
Options controlling one documentation run, and parsing of the protoc style parameter string
(e.g. "mode=html_fragment,warnings=true,per_file=true").
"""
from enum import Enum
from typing import Optional


class OutputMode(Enum):
    HTML_PAGE = "html_page"  # stand-alone HTML page
    HTML_FRAGMENT = "html_fragment"  # body content only
    HTML_FRAGMENT_WITH_FRONT_MATTER = "html_fragment_with_front_matter"  # fragment with YAML front matter


class GeneratorOptions:
    def __init__(self, mode: OutputMode = OutputMode.HTML_PAGE, gen_warnings: bool = False,
                 warnings_as_errors: bool = False, emit_front_matter_extras: bool = True,
                 camel_case_fields: bool = False, custom_style_sheet: str = "", per_file: bool = False,
                 dictionary: str = "", custom_word_list: str = ""):
        self.mode = mode
        self.gen_warnings = gen_warnings
        self.warnings_as_errors = warnings_as_errors
        self.emit_front_matter_extras = emit_front_matter_extras
        self.camel_case_fields = camel_case_fields
        self.custom_style_sheet = custom_style_sheet
        self.per_file = per_file
        self.dictionary = dictionary
        self.custom_word_list = custom_word_list


BOOL_OPTIONS = {
    "warnings": "gen_warnings",
    "warnings_as_errors": "warnings_as_errors",
    "emit_yaml": "emit_front_matter_extras",
    "emit_front_matter_extras": "emit_front_matter_extras",
    "camel_case_fields": "camel_case_fields",
    "per_file": "per_file",
}

STRING_OPTIONS = {
    "custom_style_sheet": "custom_style_sheet",
    "dictionary": "dictionary",
    "custom_word_list": "custom_word_list",
}


def parse_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in ("true", "1", "yes", "on"):
        return True
    if lowered in ("false", "0", "no", "off", ""):
        return False
    raise ValueError(f"invalid boolean value '{value}'")


def parse_output_mode(value: str) -> OutputMode:
    try:
        return OutputMode(value.strip())
    except ValueError:
        choices = ", ".join(m.value for m in OutputMode)
        raise ValueError(f"unknown mode '{value}' (choose from {choices})")


def options_from_parameter(parameter: str, options: Optional[GeneratorOptions] = None) -> GeneratorOptions:
    """Apply a comma separated key=value parameter string on top of options."""
    options = options or GeneratorOptions()
    for item in parameter.split(","):
        item = item.strip()
        if not item:
            continue
        key, _, value = item.partition("=")
        key = key.strip()
        if key == "mode":
            options.mode = parse_output_mode(value)
        elif key in BOOL_OPTIONS:
            setattr(options, BOOL_OPTIONS[key], parse_bool(value))
        elif key in STRING_OPTIONS:
            setattr(options, STRING_OPTIONS[key], value.strip())
        else:
            raise ValueError(f"unknown parameter '{key}'")
    return options
