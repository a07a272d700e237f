"""
HTML documentation generator for ProtoModel.
Produces one document per file or one per package, as selected by each package's $mode, in one of three
output modes: standalone page, bare fragment, or fragment with YAML front matter.
"""
from typing import Collection, List, Optional, Tuple, Union

from proto_model import FieldType, Mode, ProtoEnum, ProtoField, ProtoFile, ProtoMessage, ProtoModel, ProtoPackage, \
    ProtoService
from comment_transforms.comment_transform_pipeline import render_comment
from doc_transforms.dependency_closure_transform import DocumentContents, collect_file_contents
from doc_transforms.package_mode_resolver import ModeConflictError, files_to_render, resolve_package_mode
from doc_transforms.type_grouping_transform import TypeGroupingTransform, active_then_deprecated, heading_depth
from generators.cross_reference import linkify
from generators.doc_context import Diagnostics, DocumentContext, GenerationError
from generators.generator_options import GeneratorOptions, OutputMode
from generators.generator_utils import SCALAR_DISPLAY_NAMES, camel_case, normalize_id, per_file_name, \
    per_package_name, relative_name
from generators.html_style import HTML_STYLE

DEPRECATED_CLASS = "deprecated "


class HtmlGenerator:
    def __init__(self, model: ProtoModel, options: Optional[GeneratorOptions] = None,
                 diagnostics: Optional[Diagnostics] = None, speller=None, verbose: bool = False):
        self.model = model
        self.options = options or GeneratorOptions()
        self.diagnostics = diagnostics or Diagnostics(self.options.gen_warnings)
        self.speller = speller
        self.verbose = verbose

    def debug_print(self, msg: str):
        if self.verbose:
            print(f"[DEBUG] {msg}")

    def generate_output(self, files_to_gen: Optional[Collection[Union[str, ProtoFile]]] = None) \
            -> List[Tuple[str, str]]:
        """
        Render every package in model order. files_to_gen selects the files to document (names or
        ProtoFile objects, all files by default); other files only contribute referenced types.
        """
        if files_to_gen is None:
            selected = list(self.model.files)
        else:
            selected = [self.model.get_file(f) if isinstance(f, str) else f for f in files_to_gen]
        outputs = []

        for pkg in self.model.packages:
            try:
                mode = resolve_package_mode(pkg)
            except ModeConflictError as e:
                e.outputs = outputs
                raise
            files = files_to_render(pkg, mode, selected)
            if not files:
                continue
            self.debug_print(f"Package '{pkg.name}': mode={mode.value or 'unset'}, files={[f.name for f in files]}")
            if mode in (Mode.FILE, Mode.UNSET):
                outputs.extend(self.generate_per_file_output(pkg, files))
            elif mode == Mode.PACKAGE:
                outputs.append(self.generate_per_package_output(pkg, files))

        if self.options.warnings_as_errors and self.diagnostics.num_warnings > 0:
            raise GenerationError(f"treating {self.diagnostics.num_warnings} warnings as errors")
        return outputs

    def generate_per_file_output(self, pkg: ProtoPackage, files: List[ProtoFile]) -> List[Tuple[str, str]]:
        outputs = []
        for file in files:
            contents = collect_file_contents(file, DocumentContents(), pkg)
            outputs.append((per_file_name(file), self.generate_file(pkg, file, contents)))
        return outputs

    def generate_per_package_output(self, pkg: ProtoPackage, files: List[ProtoFile]) -> Tuple[str, str]:
        contents = DocumentContents()
        for file in files:
            collect_file_contents(file, contents, pkg)
        top = pkg.file_desc()
        return per_package_name(pkg.name, top), self.generate_file(pkg, top, contents)

    def generate_file(self, pkg: ProtoPackage, top: ProtoFile, contents: DocumentContents) -> str:
        """Render one document. top supplies the front matter and the home location of the document."""
        layout = TypeGroupingTransform(pkg).transform(contents)
        ctx = DocumentContext(self.model, pkg, top, self.diagnostics, self.speller, grouping=layout.grouping)

        self.generate_file_header(ctx, top, layout.num_entries)

        if layout.services:
            if ctx.grouping:
                ctx.emit('<h2 id="Services">Services</h2>')
            for name in layout.services:
                self.generate_service(ctx, layout.services_by_name[name])

        if layout.types:
            if ctx.grouping:
                ctx.emit('<h2 id="Types">Types</h2>')
            for name in layout.types:
                desc = layout.type_desc(name)
                if isinstance(desc, ProtoEnum):
                    self.generate_enum(ctx, desc)
                elif isinstance(desc, ProtoMessage):
                    self.generate_message(ctx, desc)

        self.generate_file_footer(ctx)
        return ctx.content()

    def generate_file_header(self, ctx: DocumentContext, top: Optional[ProtoFile], num_entries: int):
        name = ctx.package.name
        matter = top.matter if top is not None else None
        mode = self.options.mode

        if mode == OutputMode.HTML_FRAGMENT_WITH_FRONT_MATTER:
            ctx.emit("---")
            ctx.emit("title: ", matter.title if matter is not None and matter.title else name)
            if matter is not None and matter.overview:
                ctx.emit("overview: ", matter.overview)
            if matter is not None and matter.description:
                ctx.emit("description: ", matter.description)
            if matter is not None and matter.home_location:
                ctx.emit("location: ", matter.home_location)
            ctx.emit("layout: protoc-gen-docs")
            ctx.emit("generator: protoc-gen-docs")
            if self.options.emit_front_matter_extras:
                if self.options.per_file:
                    extras = matter.extra if matter is not None else []
                else:
                    # front matter may be in any of the package's files
                    extras = [fm for f in ctx.package.files for fm in f.matter.extra]
                for fm in extras:
                    ctx.emit(fm)
            ctx.emit("number_of_entries: ", str(num_entries))
            ctx.emit("---")
        elif mode == OutputMode.HTML_PAGE:
            ctx.emit("<!DOCTYPE html>")
            ctx.emit('<html itemscope itemtype="https://schema.org/WebPage">')
            ctx.emit("<!-- Generated by protoc-gen-docs -->")
            ctx.emit("<head>")
            ctx.emit('<meta charset="utf-8">')
            ctx.emit('<meta name="viewport" content="width=device-width, initial-scale=1, shrink-to-fit=no">')
            if matter is not None and matter.title:
                ctx.emit('<meta name="title" content="', matter.title, '">')
                ctx.emit('<meta name="og:title" content="', matter.title, '">')
                ctx.emit("<title>", matter.title, "</title>")
            description = ""
            if matter is not None:
                description = matter.overview or matter.description
            if description:
                ctx.emit('<meta name="description" content="', description, '">')
                ctx.emit('<meta name="og:description" content="', description, '">')
            if self.options.custom_style_sheet:
                ctx.emit('<link rel="stylesheet" href="', self.options.custom_style_sheet, '">')
            else:
                ctx.emit(HTML_STYLE)
            ctx.emit("</head>")
            ctx.emit("<body>")
            if matter is not None and matter.title:
                ctx.emit("<h1>", matter.title, "</h1>")
        elif mode == OutputMode.HTML_FRAGMENT:
            ctx.emit("<!-- Generated by protoc-gen-docs -->")
            if matter is not None and matter.title:
                ctx.emit("<h1>", matter.title, "</h1>")

        if self.options.per_file:
            if top is not None:
                render_comment(ctx, top.matter.location, name)
        else:
            render_comment(ctx, ctx.package.location, name)

    def generate_file_footer(self, ctx: DocumentContext):
        if self.options.mode == OutputMode.HTML_PAGE:
            ctx.emit("</body>")
            ctx.emit("</html>")

    def generate_section_heading(self, ctx: DocumentContext, desc):
        name = relative_name(desc, ctx.package)
        short_name = name[name.rfind(".") + 1:]
        heading = f"h{heading_depth(name, ctx.grouping)}"
        ctx.emit("<", heading, ' id="', normalize_id(name), '">', short_name, "</", heading, ">")
        if desc.css_class:
            ctx.emit('<section class="', desc.css_class, ' ">')
        else:
            ctx.emit("<section>")

    def generate_section_trailing(self, ctx: DocumentContext):
        ctx.emit("</section>")

    def entry_class(self, entry) -> str:
        css = DEPRECATED_CLASS if getattr(entry, 'deprecated', False) else ""
        if entry.css_class:
            css += entry.css_class + " "
        return css

    def emit_row_start(self, ctx: DocumentContext, row_id: str, css: str):
        if css:
            ctx.emit('<tr id="', row_id, '" class="', css, '">')
        else:
            ctx.emit('<tr id="', row_id, '">')

    def generate_message(self, ctx: DocumentContext, message: ProtoMessage):
        self.generate_section_heading(ctx, message)
        render_comment(ctx, message.location, message.name)

        if message.fields:
            ctx.emit('<table class="message-fields">')
            ctx.emit("<thead>")
            ctx.emit("<tr>")
            ctx.emit("<th>Field</th>")
            ctx.emit("<th>Description</th>")
            ctx.emit("</tr>")
            ctx.emit("</thead>")
            ctx.emit("<tbody>")

            # list the active entries first, then the deprecated ones
            for fields in active_then_deprecated(message.fields):
                oneof = None
                for field in fields:
                    field_name = camel_case(field.name) if self.options.camel_case_fields else field.name
                    css = self.entry_class(field)
                    if field.oneof_index is not None:
                        if field.oneof_index != oneof:
                            css += "oneof oneof-start"
                            oneof = field.oneof_index
                        else:
                            css += "oneof"

                    row_id = normalize_id(relative_name(field, ctx.package))
                    self.emit_row_start(ctx, row_id, css)
                    field_link = f'<a href="#{row_id}">{field_name}</a>'
                    ctx.emit('<td><div class="field"><div class="name"><code>', field_link, "</code></div>")
                    ctx.emit('<div class="type">', linkify(ctx, field.type_ref, self.field_type_name(ctx, field), True),
                             "</div>")
                    if field.required:
                        ctx.emit('<div class="required">Required</div>')
                    ctx.emit("</div></td>")
                    ctx.emit("<td>")
                    render_comment(ctx, field.location, field.name)
                    ctx.emit("</td>")
                    ctx.emit("</tr>")

            ctx.emit("</tbody>")
            ctx.emit("</table>")

        self.generate_section_trailing(ctx)

    def generate_enum(self, ctx: DocumentContext, enum: ProtoEnum):
        self.generate_section_heading(ctx, enum)
        render_comment(ctx, enum.location, enum.name)

        if enum.values:
            ctx.emit('<table class="enum-values">')
            ctx.emit("<thead>")
            ctx.emit("<tr>")
            ctx.emit("<th>Name</th>")
            ctx.emit("<th>Description</th>")
            ctx.emit("</tr>")
            ctx.emit("</thead>")
            ctx.emit("<tbody>")

            for values in active_then_deprecated(enum.values):
                for value in values:
                    row_id = normalize_id(relative_name(value, ctx.package))
                    self.emit_row_start(ctx, row_id, self.entry_class(value))
                    ctx.emit("<td><code>", f'<a href="#{row_id}">{value.name}</a>', "</code></td>")
                    ctx.emit("<td>")
                    render_comment(ctx, value.location, value.name)
                    ctx.emit("</td>")
                    ctx.emit("</tr>")

            ctx.emit("</tbody>")
            ctx.emit("</table>")

        self.generate_section_trailing(ctx)

    def generate_service(self, ctx: DocumentContext, service: ProtoService):
        self.generate_section_heading(ctx, service)
        render_comment(ctx, service.location, service.name)

        for methods in active_then_deprecated(service.methods):
            for method in methods:
                css = self.entry_class(method)
                method_id = normalize_id(relative_name(method, ctx.package))
                input_name = relative_name(method.input_ref, ctx.package) if method.input_ref else method.input_type
                output_name = relative_name(method.output_ref, ctx.package) if method.output_ref else method.output_type
                signature = f"rpc {method.name}({input_name}) returns ({output_name})"
                if css:
                    ctx.emit('<pre id="', method_id, '" class="', css, '"><code class="language-proto">', signature)
                else:
                    ctx.emit('<pre id="', method_id, '"><code class="language-proto">', signature)
                ctx.emit("</code></pre>")
                render_comment(ctx, method.location, method.name)

        self.generate_section_trailing(ctx)

    def field_type_name(self, ctx: DocumentContext, field: ProtoField) -> str:
        if field.field_type in SCALAR_DISPLAY_NAMES:
            name = SCALAR_DISPLAY_NAMES[field.field_type]
        elif field.field_type == FieldType.MESSAGE and isinstance(field.type_ref, ProtoMessage) \
                and field.type_ref.map_entry:
            key_field, value_field = field.type_ref.fields[0], field.type_ref.fields[1]
            key_type = self.field_type_name(ctx, key_field)
            value_type = linkify(ctx, value_field.type_ref, self.field_type_name(ctx, value_field), True)
            return f"map&lt;{key_type},&nbsp;{value_type}&gt;"
        elif field.type_ref is not None:
            name = relative_name(field.type_ref, ctx.package)
        else:
            name = "n/a"

        if field.is_repeated:
            name += "[]"
        if field.oneof_index is not None:
            name += " (oneof)"
        return name
