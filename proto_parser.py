from lark import Lark


# Grammar for proto2/proto3 sources. Comments are ignored by the parser and collected
# separately through the lexer callback so the model builder can attach them to declarations.
grammar = r"""
    start: statement*

    ?statement: syntax
        | edition
        | package
        | import_stmt
        | option_stmt
        | message
        | enum
        | service
        | extend
        | empty_stmt

    syntax: "syntax" "=" STRING ";"
    edition: "edition" "=" STRING ";"
    package: "package" full_ident ";"
    import_stmt: "import" (PUBLIC | WEAK)? STRING ";"

    option_stmt: "option" option_name "=" constant ";"
    option_name: (IDENT | extension_name) (DOT IDENT)*
    extension_name: "(" DOT? full_ident ")"

    constant: full_ident
        | signed_number
        | STRING+
        | aggregate
    signed_number: SIGN? NUMBER
        | SIGN IDENT
    aggregate: "{" aggregate_field* "}"
    aggregate_field: aggregate_key ":"? aggregate_value ("," | ";")?
    aggregate_key: IDENT
        | "[" full_ident ("/" full_ident)? "]"
    ?aggregate_value: constant
        | aggregate_list
    aggregate_list: "[" (aggregate_value ("," aggregate_value)*)? "]"

    message: "message" IDENT "{" message_element* "}"
    ?message_element: field
        | map_field
        | oneof
        | message
        | enum
        | option_stmt
        | reserved
        | extensions
        | extend
        | empty_stmt

    field: (REPEATED | OPTIONAL | REQUIRED)? type_name IDENT "=" NUMBER field_options? ";"
    map_field: "map" "<" type_name "," type_name ">" IDENT "=" NUMBER field_options? ";"
    oneof: "oneof" IDENT "{" oneof_element* "}"
    ?oneof_element: field
        | option_stmt
        | empty_stmt

    field_options: "[" field_option ("," field_option)* "]"
    field_option: option_name "=" constant

    reserved: "reserved" range_item ("," range_item)* ";"
    extensions: "extensions" range_item ("," range_item)* field_options? ";"
    range_item: NUMBER ("to" (NUMBER | "max"))?
        | STRING
        | IDENT
    extend: "extend" type_name "{" (field | empty_stmt)* "}"

    enum: "enum" IDENT "{" enum_element* "}"
    ?enum_element: enum_value
        | option_stmt
        | reserved
        | empty_stmt
    enum_value: IDENT "=" SIGN? NUMBER field_options? ";"

    service: "service" IDENT "{" service_element* "}"
    ?service_element: rpc
        | option_stmt
        | empty_stmt
    rpc: "rpc" IDENT "(" STREAM? type_name ")" "returns" "(" STREAM? type_name ")" (";" | "{" (option_stmt | empty_stmt)* "}")

    empty_stmt: ";"

    type_name: DOT? IDENT (DOT IDENT)*
    full_ident: IDENT (DOT IDENT)*

    DOT: "."
    SIGN: /[+-]/
    REPEATED: "repeated"
    OPTIONAL: "optional"
    REQUIRED: "required"
    STREAM: "stream"
    PUBLIC: "public"
    WEAK: "weak"
    IDENT: /[A-Za-z_][A-Za-z0-9_]*/
    NUMBER: /0[xX][0-9a-fA-F]+|[0-9]+(\.[0-9]*)?([eE][+-]?[0-9]+)?/
    STRING: /"(\\.|[^"\\\n])*"|'(\\.|[^'\\\n])*'/
    COMMENT: /\/\/[^\n]*|\/\*[\s\S]*?\*\//

    %import common.WS
    %ignore WS
    %ignore COMMENT
"""

_comments = []

parser = Lark(
    grammar,
    start='start',
    parser='lalr',
    propagate_positions=True,
    lexer_callbacks={'COMMENT': _comments.append},
)


def parse_proto(text):
    """
    Parse .proto source text.
    Returns (tree, comments) where comments are the COMMENT tokens in source order, each carrying
    line, column, end_line and end_column.
    """
    del _comments[:]
    tree = parser.parse(text)
    comments = list(_comments)
    del _comments[:]
    return tree, comments
