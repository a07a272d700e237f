"""
proto_model_builder.py
Builds ProtoFile descriptors from the lark parse tree of a .proto source, attaches source comments to
declarations the way protoc does, reads the $-directives out of those comments, and resolves field and method
type names across all loaded files.
"""
import re
from typing import Dict, List, Optional, Tuple

from lark import Tree, Token

from proto_model import (
    CoreDesc, FieldType, FrontMatter, LocationDescriptor, Mode, ProtoEnum, ProtoEnumValue, ProtoField,
    ProtoFile, ProtoMessage, ProtoMethod, ProtoModel, ProtoPackage, ProtoService, SCALAR_TYPES,
)


class ProtoModelError(Exception):
    pass


FIELD_BEHAVIOR_OPTION = "(google.api.field_behavior)"

FRONT_MATTER_KEYS = {
    "$title:": "title",
    "$overview:": "overview",
    "$description:": "description",
    "$location:": "home_location",
}


class CommentIndex:
    """
    The comments of one source file, indexed so declarations can look up the comment block directly above
    them (leading) and the comment that follows them on their own line (trailing).
    """
    def __init__(self, comments: List[Token], text: str):
        self.source_lines = text.split("\n")
        self.comments = sorted(comments, key=lambda c: (c.line, c.column))
        self._own_line_by_end = {}
        self._trailing_by_line = {}
        for c in self.comments:
            if self._is_own_line(c):
                self._own_line_by_end[c.end_line] = c
            elif c.line not in self._trailing_by_line:
                self._trailing_by_line[c.line] = c

    def _is_own_line(self, comment: Token) -> bool:
        line = self.source_lines[comment.line - 1]
        return line[:comment.column - 1].strip() == ""

    def leading_block(self, decl_line: int) -> List[Token]:
        """Contiguous own-line comments ending right above decl_line. A block comment stands alone."""
        block = []
        line = decl_line - 1
        while line in self._own_line_by_end:
            c = self._own_line_by_end[line]
            is_block = str(c).startswith("/*")
            if is_block and block:
                break
            block.insert(0, c)
            if is_block:
                break
            line = c.line - 1
        return block

    def trailing(self, line: int) -> Optional[Token]:
        return self._trailing_by_line.get(line)

    def before(self, line: int) -> List[Token]:
        return [c for c in self.comments if c.end_line < line]

    def detached_blocks(self, decl_line: int) -> List[List[Token]]:
        """Own-line comment blocks above decl_line that are not its leading block, in source order."""
        leading = {id(c) for c in self.leading_block(decl_line)}
        blocks = []
        for c in self.before(decl_line):
            if id(c) in leading or not self._is_own_line(c):
                continue
            if blocks and blocks[-1][-1].end_line + 1 == c.line:
                blocks[-1].append(c)
            else:
                blocks.append([c])
        return blocks


def comment_text(tokens: List[Token]) -> str:
    """Strip comment markers the way protoc does; the result ends with a newline unless empty."""
    lines = []
    for tok in tokens:
        value = str(tok)
        if value.startswith("//"):
            lines.append(value[2:])
            continue
        body = value[2:-2]
        if body.startswith("*"):
            body = body[1:]
        block_lines = body.split("\n")
        for i, line in enumerate(block_lines):
            if i > 0:
                line = re.sub(r'^\s*\*', '', line)
            block_lines[i] = line.rstrip()
        while block_lines and not block_lines[0].strip():
            block_lines.pop(0)
        while block_lines and not block_lines[-1].strip():
            block_lines.pop()
        lines.extend(block_lines)
    if not lines:
        return ""
    return "\n".join(lines) + "\n"


def split_directives(text: str) -> Tuple[str, List[str]]:
    """Separate $-directive lines from the comment text that gets rendered."""
    kept = []
    directives = []
    for line in text.split("\n"):
        if line.strip().startswith("$"):
            directives.append(line.strip())
        else:
            kept.append(line)
    clean = "\n".join(kept)
    if not clean.strip():
        clean = ""
    return clean, directives


def _parse_int(text: str) -> int:
    lowered = text.lower()
    if lowered.startswith("0x"):
        return int(text, 16)
    if len(text) > 1 and text.startswith("0") and text.isdigit():
        return int(text, 8)
    return int(text)


def _to_camel_case(name: str) -> str:
    # protoc names map entries after the field: my_field -> MyFieldEntry
    return "".join(part[:1].upper() + part[1:] for part in name.split("_"))


def _tokens(node) -> List[Token]:
    return [c for c in node.children if isinstance(c, Token)]


def _subtrees(node, data: Optional[str] = None) -> List[Tree]:
    return [c for c in node.children if isinstance(c, Tree) and (data is None or c.data == data)]


def _flat_text(node) -> str:
    if isinstance(node, Token):
        return str(node)
    return "".join(_flat_text(c) for c in node.children)


def _option_name_text(node: Tree) -> str:
    parts = []
    for child in node.children:
        if isinstance(child, Tree) and child.data == 'extension_name':
            parts.append("(" + _flat_text(child) + ")")
        else:
            parts.append(str(child))
    return "".join(parts)


def _constant_text(node) -> str:
    if isinstance(node, Token):
        if node.type == 'STRING':
            return str(node)[1:-1]
        return str(node)
    if node.data == 'aggregate_list':
        return "[" + ", ".join(_constant_text(c) for c in node.children) + "]"
    if node.data == 'aggregate':
        return "{...}"
    if node.data == 'constant':
        return "".join(_constant_text(c) for c in node.children)
    return _flat_text(node)


def _options(node: Tree) -> Dict[str, str]:
    """
    Collect [name = value] options of a field or enum value, keyed by option name. A repeated option
    such as field_behavior may appear several times; its values are joined with commas.
    """
    result = {}
    for opts in _subtrees(node, 'field_options'):
        for opt in _subtrees(opts, 'field_option'):
            name = _option_name_text(opt.children[0])
            value = _constant_text(opt.children[1])
            result[name] = result[name] + "," + value if name in result else value
    return result


def _option_statements(node: Tree) -> Dict[str, str]:
    result = {}
    for opt in _subtrees(node, 'option_stmt'):
        result[_option_name_text(opt.children[0])] = _constant_text(opt.children[1])
    return result


def _is_true(value: Optional[str]) -> bool:
    return value == "true"


def _is_required(options: Dict[str, str]) -> bool:
    behavior = options.get(FIELD_BEHAVIOR_OPTION)
    if behavior is None:
        return False
    return "REQUIRED" in re.findall(r'\w+', behavior)


class ProtoFileBuilder:
    """Builds one ProtoFile from its parse tree and comment tokens."""

    def __init__(self, name: str, text: str, comments: List[Token]):
        self.name = name
        self.comments = CommentIndex(comments, text)
        self.file = ProtoFile(name=name)

    def build(self, tree: Tree, packages: Dict[str, ProtoPackage]) -> ProtoFile:
        package_name = ""
        package_node = None
        for node in tree.children:
            if not isinstance(node, Tree):
                continue
            if node.data == 'syntax':
                self.file.syntax = _constant_text(_tokens(node)[0])
            elif node.data == 'edition':
                self.file.syntax = "editions"
            elif node.data == 'package':
                package_name = _flat_text(node.children[0])
                package_node = node
            elif node.data == 'import_stmt':
                path = [t for t in _tokens(node) if t.type == 'STRING'][0]
                self.file.dependencies.append(str(path)[1:-1])
            elif node.data == 'message':
                self.file.messages.append(self._build_message(node, None))
            elif node.data == 'enum':
                self.file.enums.append(self._build_enum(node, None))
            elif node.data == 'service':
                self.file.services.append(self._build_service(node))

        self.file.matter = self._build_front_matter(package_node)

        pkg = packages.get(package_name)
        if pkg is None:
            pkg = ProtoPackage(package_name)
            packages[package_name] = pkg
        pkg.files.append(self.file)
        self.file.package = pkg
        if pkg.file is None and (self.file.matter.location.leading_comments or self.file.matter.home_location):
            pkg.file = self.file
        return self.file

    # --- comments ---

    def _location(self, node: Tree, block_line: Optional[int] = None) -> Tuple[LocationDescriptor, List[str]]:
        """
        Location of a declaration plus the directives found in its comments. block_line is the line of the
        opening brace for block declarations; the trailing comment is looked up on that line.
        """
        meta = node.meta
        leading, leading_directives = split_directives(comment_text(self.comments.leading_block(meta.line)))
        trailing_line = block_line if block_line is not None else meta.end_line
        trailing_tok = self.comments.trailing(trailing_line)
        trailing, trailing_directives = split_directives(comment_text([trailing_tok] if trailing_tok else []))
        span = [meta.line - 1, meta.column - 1, meta.end_line - 1, meta.end_column - 1]
        loc = LocationDescriptor(file=self.file, span=span, leading_comments=leading, trailing_comments=trailing)
        return loc, leading_directives + trailing_directives

    def _core(self, node: Tree, parent: Optional[CoreDesc], block_line: Optional[int] = None) -> dict:
        loc, directives = self._location(node, block_line)
        hidden = any(d.startswith("$hide_from_docs") for d in directives)
        css_class = ""
        for d in directives:
            if d.startswith("$class:"):
                css_class = d[len("$class:"):].strip()
        return dict(file=self.file, parent=parent, location=loc, hidden=hidden, css_class=css_class)

    def _build_front_matter(self, package_node: Optional[Tree]) -> FrontMatter:
        matter = FrontMatter()
        if package_node is None:
            return matter
        loc, _ = self._location(package_node)
        blocks = self.comments.detached_blocks(package_node.meta.line)
        loc.leading_detached_comments = [comment_text(b) for b in blocks]
        matter.location = loc
        above = comment_text(self.comments.before(package_node.meta.line))
        for line in above.split("\n"):
            directive = line.strip()
            for prefix, attr in FRONT_MATTER_KEYS.items():
                if directive.startswith(prefix):
                    setattr(matter, attr, directive[len(prefix):].strip())
            if directive.startswith("$front_matter:"):
                matter.extra.append(directive[len("$front_matter:"):].strip())
            elif directive.startswith("$mode:"):
                value = directive[len("$mode:"):].strip()
                try:
                    matter.mode = Mode(value)
                except ValueError:
                    raise ProtoModelError(f"{self.name}: unknown $mode '{value}', expected file, package or none")
        return matter

    # --- declarations ---

    def _build_message(self, node: Tree, parent: Optional[ProtoMessage]) -> ProtoMessage:
        name_tok = _tokens(node)[0]
        msg = ProtoMessage(str(name_tok), **self._core(node, parent, name_tok.line))
        for child in _subtrees(node):
            if child.data == 'field':
                msg.fields.append(self._build_field(child, msg))
            elif child.data == 'map_field':
                msg.fields.append(self._build_map_field(child, msg))
            elif child.data == 'oneof':
                oneof_index = len(msg.oneofs)
                msg.oneofs.append(str(_tokens(child)[0]))
                for oneof_field in _subtrees(child, 'field'):
                    msg.fields.append(self._build_field(oneof_field, msg, oneof_index))
            elif child.data == 'message':
                msg.messages.append(self._build_message(child, msg))
            elif child.data == 'enum':
                msg.enums.append(self._build_enum(child, msg))
        return msg

    def _build_field(self, node: Tree, msg: ProtoMessage, oneof_index: Optional[int] = None) -> ProtoField:
        label = None
        toks = _tokens(node)
        if toks and toks[0].type in ('REPEATED', 'OPTIONAL', 'REQUIRED'):
            label = str(toks[0])
            toks = toks[1:]
        name_tok, number_tok = toks[0], toks[1]
        type_name = _flat_text(_subtrees(node, 'type_name')[0])
        options = _options(node)
        field_type = SCALAR_TYPES.get(type_name, FieldType.MESSAGE)
        return ProtoField(
            str(name_tok), _parse_int(str(number_tok)), field_type, type_name=type_name, label=label,
            oneof_index=oneof_index, deprecated=_is_true(options.get("deprecated")),
            required=_is_required(options), **self._core(node, msg),
        )

    def _build_map_field(self, node: Tree, msg: ProtoMessage) -> ProtoField:
        key_node, value_node = _subtrees(node, 'type_name')
        name_tok, number_tok = _tokens(node)[0], _tokens(node)[1]
        entry = ProtoMessage(_to_camel_case(str(name_tok)) + "Entry", file=self.file, parent=msg, map_entry=True)
        for entry_name, number, type_node in (("key", 1, key_node), ("value", 2, value_node)):
            type_name = _flat_text(type_node)
            entry.fields.append(ProtoField(
                entry_name, number, SCALAR_TYPES.get(type_name, FieldType.MESSAGE), type_name=type_name,
                label="optional", file=self.file, parent=entry,
            ))
        msg.messages.append(entry)
        options = _options(node)
        return ProtoField(
            str(name_tok), _parse_int(str(number_tok)), FieldType.MESSAGE, type_name=entry.name, type_ref=entry,
            label="repeated", deprecated=_is_true(options.get("deprecated")), required=_is_required(options),
            **self._core(node, msg),
        )

    def _build_enum(self, node: Tree, parent: Optional[ProtoMessage]) -> ProtoEnum:
        name_tok = _tokens(node)[0]
        enum = ProtoEnum(str(name_tok), **self._core(node, parent, name_tok.line))
        for child in _subtrees(node, 'enum_value'):
            toks = _tokens(child)
            number_text = "".join(str(t) for t in toks[1:])
            options = _options(child)
            enum.values.append(ProtoEnumValue(
                str(toks[0]), _parse_int(number_text.lstrip("+-")) * (-1 if number_text.startswith("-") else 1),
                deprecated=_is_true(options.get("deprecated")), **self._core(child, enum),
            ))
        return enum

    def _build_service(self, node: Tree) -> ProtoService:
        name_tok = _tokens(node)[0]
        svc = ProtoService(str(name_tok), **self._core(node, None, name_tok.line))
        for rpc in _subtrees(node, 'rpc'):
            toks = _tokens(rpc)
            type_names = _subtrees(rpc, 'type_name')
            # a STREAM token before the first type_name marks the request side
            client_streaming = server_streaming = False
            seen_input = False
            for child in rpc.children:
                if isinstance(child, Tree) and child.data == 'type_name':
                    seen_input = True
                elif isinstance(child, Token) and child.type == 'STREAM':
                    if seen_input:
                        server_streaming = True
                    else:
                        client_streaming = True
            options = _option_statements(rpc)
            svc.methods.append(ProtoMethod(
                str(toks[0]), _flat_text(type_names[0]), _flat_text(type_names[1]),
                client_streaming=client_streaming, server_streaming=server_streaming,
                deprecated=_is_true(options.get("deprecated")), **self._core(rpc, svc, toks[0].line),
            ))
        return svc


def _resolve_type_name(name: str, scope: str, registry: Dict[str, CoreDesc]) -> Optional[CoreDesc]:
    """Protobuf scoping: try the innermost enclosing scope first, then walk outward. '.'-prefixed is absolute."""
    if name.startswith("."):
        return registry.get(name[1:])
    parts = scope.split(".") if scope else []
    while True:
        candidate = ".".join(parts + [name])
        if candidate in registry:
            return registry[candidate]
        if not parts:
            return None
        parts.pop()


def resolve_references(files: List[ProtoFile]):
    """Point every named field type and method input/output at its descriptor."""
    registry = {}
    for f in files:
        for msg in f.all_messages:
            registry[msg.full_name] = msg
        for enum in f.all_enums:
            registry[enum.full_name] = enum

    def where(desc):
        line = desc.location.span[0] + 1 if desc.location.span else "?"
        return f"{desc.file.name}:{line}"

    for f in files:
        for msg in f.all_messages:
            for field in msg.fields:
                if field.field_type != FieldType.MESSAGE or field.type_ref is not None:
                    continue
                ref = _resolve_type_name(field.type_name, msg.full_name, registry)
                if ref is None:
                    raise ProtoModelError(
                        f"{where(field)}: unresolved type '{field.type_name}' for field '{field.name}' "
                        f"in message '{msg.full_name}'")
                field.type_ref = ref
                field.field_type = FieldType.ENUM if isinstance(ref, ProtoEnum) else FieldType.MESSAGE
        pkg_scope = f.package.name if f.package is not None else ""
        for svc in f.services:
            for method in svc.methods:
                method.input_ref = _resolve_type_name(method.input_type, pkg_scope, registry)
                method.output_ref = _resolve_type_name(method.output_type, pkg_scope, registry)
                for type_name, ref in ((method.input_type, method.input_ref), (method.output_type, method.output_ref)):
                    if not isinstance(ref, ProtoMessage):
                        raise ProtoModelError(
                            f"{where(method)}: unresolved type '{type_name}' for method '{method.name}' "
                            f"in service '{svc.full_name}'")


def build_proto_model(parsed_files: List[Tuple[str, str, Tree, List[Token]]]) -> ProtoModel:
    """
    Build the descriptor graph from (name, text, tree, comments) tuples. The list order is kept as the
    file order; packages are ordered by first appearance.
    """
    packages: Dict[str, ProtoPackage] = {}
    files = []
    for name, text, tree, comments in parsed_files:
        files.append(ProtoFileBuilder(name, text, comments).build(tree, packages))
    resolve_references(files)
    return ProtoModel(files, list(packages.values()))
