#!/usr/bin/env python3
"""
protoc-gen-docs

Generates cross-linked HTML reference documentation from .proto files. Messages, enums and services are
rendered together with their leading comments; each package is documented as one page per file or as a
single page, as chosen by the $mode directive in its files.

Usage:
    python protoc_gen_docs.py <file.proto>... [--proto_path <dir>] [--output <dir>] [--mode <mode>]
                              [--parameter <k=v,...>] [--warnings] [--warnings_as_errors] [--per_file]
                              [--camel_case_fields] [--no_front_matter_extras] [--custom_style_sheet <url>]
                              [--dictionary <file>] [--custom_word_list <file>] [--verbose]

Arguments:
    files                     : .proto files to document, relative to a --proto_path entry
    --proto_path, -I          : Directory searched for the files and their imports (repeatable, default: .)
    --output, -o              : Directory where the .pb.html files are written (default: .)
    --mode, -m                : html_page, html_fragment or html_fragment_with_front_matter
    --parameter, -p           : protoc style option string, e.g. mode=html_fragment,warnings=true
    --warnings                : Print warnings about missing comments, bad type links and misspellings
    --warnings_as_errors      : Fail, writing nothing, when any warning was produced
    --per_file                : Header comment and front matter extras come from each file
    --camel_case_fields       : Show field names in camelCase
    --no_front_matter_extras  : Leave $front_matter lines out of the YAML block
    --custom_style_sheet      : Link this stylesheet URL instead of the inline default style
    --dictionary              : Word list enabling the spell checker
    --custom_word_list        : Additional accepted words
    --verbose, -v             : Enable verbose output for debugging

Environment:
    PGD_OUTPUT_DIR, PGD_MODE, PGD_WARNINGS and PGD_VERBOSE override the matching arguments.

Example:
    python protoc_gen_docs.py -I protos mesh/v1/config.proto --output ./docs --mode html_fragment_with_front_matter
"""

import argparse
import os
import sys
from typing import List, Optional, Tuple

from generators.doc_context import Diagnostics, GenerationError
from generators.generator_options import GeneratorOptions, OutputMode, options_from_parameter, parse_bool, \
    parse_output_mode
from generators.html_generator import HtmlGenerator
from doc_transforms.package_mode_resolver import ModeConflictError
from proto_file_loader import ProtoLoadError, ProtoFileLoader
from proto_model_builder import ProtoModelError
from speller import SpellerError, load_speller


class ProtoDocsConverter:
    """
    Loads .proto files and writes their HTML documentation.
    """

    def __init__(self, inputs: List[str], include_dirs: List[str], output_dir: str, options: GeneratorOptions,
                 verbose: bool = False):
        self.inputs = inputs
        self.include_dirs = include_dirs
        self.output_dir = output_dir
        self.options = options
        self.verbose = verbose
        self.model = None
        self.files_to_gen = []

    def debug_print(self, msg: str):
        if self.verbose:
            print(f"[DEBUG] {msg}")

    def import_path(self, path: str) -> str:
        """Input path as an import path: relative to the first include dir that contains it."""
        abs_path = os.path.abspath(path)
        for include_dir in self.include_dirs:
            abs_dir = os.path.abspath(include_dir)
            if abs_path.startswith(abs_dir + os.sep) and os.path.isfile(abs_path):
                return os.path.relpath(abs_path, abs_dir).replace(os.sep, "/")
        return path.replace(os.sep, "/")

    def load(self) -> bool:
        """
        Parse the input files and their imports.

        Returns:
            bool: True if loading was successful, False otherwise
        """
        names = [self.import_path(p) for p in self.inputs]
        self.debug_print(f"Loading {names} from {self.include_dirs}")
        try:
            self.model = ProtoFileLoader(self.include_dirs, verbose=self.verbose).load(names)
        except (ProtoLoadError, ProtoModelError) as e:
            print(f"Error: {e}")
            return False
        self.files_to_gen = names
        return True

    def generate(self) -> Tuple[bool, List[Tuple[str, str]]]:
        """
        Render the documentation.

        Returns:
            (success, outputs): outputs holds the documents to write, which is the documents finished
            before a mode conflict when generation failed on one
        """
        if not self.model:
            print("Error: No proto model available. Load input files first.")
            return False, []
        try:
            speller = load_speller(self.options.dictionary, self.options.custom_word_list)
        except SpellerError as e:
            print(f"Error: {e}")
            return False, []
        generator = HtmlGenerator(self.model, self.options, Diagnostics(self.options.gen_warnings), speller,
                                  self.verbose)
        try:
            return True, generator.generate_output(self.files_to_gen)
        except ModeConflictError as e:
            print(f"Error: {e}")
            return False, e.outputs
        except GenerationError as e:
            print(f"Error: {e}")
            return False, []

    def write_outputs(self, outputs: List[Tuple[str, str]]) -> bool:
        for name, content in outputs:
            out_path = os.path.join(self.output_dir, name)
            os.makedirs(os.path.dirname(out_path) or ".", exist_ok=True)
            with open(out_path, "w", encoding="utf-8") as f:
                f.write(content)
            print(f"Generated {out_path}")
        return True


def parse_arguments(argv: Optional[List[str]] = None):
    """
    Parse command line arguments.

    Returns:
        argparse.Namespace: Parsed command line arguments
    """
    parser = argparse.ArgumentParser(
        description="Generate HTML documentation from .proto files",
        formatter_class=argparse.RawTextHelpFormatter
    )

    parser.add_argument('files', nargs='+', help='.proto files to document')
    parser.add_argument('--proto_path', '-I', action='append', default=None,
                        help='Directory searched for the files and their imports')
    parser.add_argument('--output', '-o', default='.', help='Directory where output files will be generated')
    parser.add_argument('--mode', '-m', choices=[m.value for m in OutputMode], default=None,
                        help='Output mode (html_page, html_fragment or html_fragment_with_front_matter)')
    parser.add_argument('--parameter', '-p', default='', help='protoc style option string, e.g. warnings=true')
    parser.add_argument('--warnings', action='store_true', help='Print warnings')
    parser.add_argument('--warnings_as_errors', action='store_true', help='Treat warnings as errors')
    parser.add_argument('--per_file', action='store_true', help='Take header comment and extras from each file')
    parser.add_argument('--camel_case_fields', action='store_true', help='Show field names in camelCase')
    parser.add_argument('--no_front_matter_extras', action='store_true',
                        help='Leave $front_matter lines out of the YAML block')
    parser.add_argument('--custom_style_sheet', default='', help='Stylesheet URL for html_page mode')
    parser.add_argument('--dictionary', default='', help='Word list enabling the spell checker')
    parser.add_argument('--custom_word_list', default='', help='Additional accepted words')
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable verbose output for debugging')

    args = parser.parse_args(argv)
    if not args.proto_path:
        args.proto_path = ['.']
    return args


def build_options(args) -> GeneratorOptions:
    """Flags first, then the parameter string, then environment overrides."""
    options = GeneratorOptions(
        gen_warnings=args.warnings,
        warnings_as_errors=args.warnings_as_errors,
        emit_front_matter_extras=not args.no_front_matter_extras,
        camel_case_fields=args.camel_case_fields,
        custom_style_sheet=args.custom_style_sheet,
        per_file=args.per_file,
        dictionary=args.dictionary,
        custom_word_list=args.custom_word_list,
    )
    if args.mode:
        options.mode = OutputMode(args.mode)
    if args.parameter:
        options_from_parameter(args.parameter, options)

    # Override with environment variables if set
    if 'PGD_MODE' in os.environ:
        options.mode = parse_output_mode(os.environ['PGD_MODE'])
    if 'PGD_WARNINGS' in os.environ:
        options.gen_warnings = parse_bool(os.environ['PGD_WARNINGS'])
    return options


def main(argv: Optional[List[str]] = None):
    """
    Main entry point of the script.
    """
    args = parse_arguments(argv)

    try:
        options = build_options(args)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    output_dir = os.environ.get('PGD_OUTPUT_DIR', args.output)
    verbose = parse_bool(os.environ['PGD_VERBOSE']) if 'PGD_VERBOSE' in os.environ else args.verbose

    converter = ProtoDocsConverter(args.files, args.proto_path, output_dir, options, verbose)

    if not converter.load():
        sys.exit(1)

    success, outputs = converter.generate()
    converter.write_outputs(outputs)

    if success:
        print("Documentation generation completed successfully.")
    else:
        print("Documentation generation completed with errors.")
        sys.exit(1)


if __name__ == '__main__':
    main()
