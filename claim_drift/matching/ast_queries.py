"""AST queries over TypeScript/JavaScript syntax trees.

Purely syntactic: identifiers and callee text are compared as written,
with no type or scope resolution.

Node types (tree-sitter-typescript):
    export_statement     export <declaration> | export default <declaration|value>
    call_expression      <function>(<arguments>) | <function>`template`
"""

from tree_sitter import Node as TSNode

from claim_drift.parsing import AstTree

# Declarations whose `name` field is the exported identifier.
NAMED_DECLARATIONS = frozenset(
    {
        "function_declaration",
        "generator_function_declaration",
        "function_signature",
        "class_declaration",
        "abstract_class_declaration",
        "interface_declaration",
        "type_alias_declaration",
        "enum_declaration",
    }
)

# const/let (lexical_declaration) and var (variable_declaration) bindings.
VARIABLE_DECLARATIONS = frozenset({"lexical_declaration", "variable_declaration"})

# `export default function name() {}` may surface as a named expression.
NAMED_DEFAULT_VALUES = frozenset({"function_expression", "function", "generator_function", "class"})


def declared_names(tree: AstTree, declaration: TSNode) -> list[str]:
    """Identifiers introduced by a declaration node."""
    if declaration.type in NAMED_DECLARATIONS or declaration.type in NAMED_DEFAULT_VALUES:
        name = declaration.child_by_field_name("name")
        return [tree.text(name)] if name is not None else []

    if declaration.type in VARIABLE_DECLARATIONS:
        names = []
        for declarator in declaration.named_children:
            if declarator.type != "variable_declarator":
                continue
            name = declarator.child_by_field_name("name")
            # Destructuring patterns do not export a single named binding
            if name is not None and name.type == "identifier":
                names.append(tree.text(name))
        return names

    if declaration.type == "ambient_declaration":
        # export declare function f(): void;
        names = []
        for child in declaration.named_children:
            names.extend(declared_names(tree, child))
        return names

    return []


def exported_names(tree: AstTree, node: TSNode) -> list[str]:
    """Names exported by an export_statement (export clauses excluded)."""
    if node.type != "export_statement":
        return []

    declaration = node.child_by_field_name("declaration")
    if declaration is not None:
        return declared_names(tree, declaration)

    value = node.child_by_field_name("value")
    if value is not None and value.type in NAMED_DEFAULT_VALUES:
        return declared_names(tree, value)

    return []


def has_exported_identifier(tree: AstTree, identifier: str) -> bool:
    """True if any export declaration declares exactly `identifier`."""
    return tree.any(lambda node: identifier in exported_names(tree, node))


def callee_text(tree: AstTree, node: TSNode) -> str | None:
    """Callee expression text of a call, or None for non-calls."""
    if node.type != "call_expression":
        return None

    # tag`...` is a tagged template, not a call
    arguments = node.child_by_field_name("arguments")
    if arguments is not None and arguments.type == "template_string":
        return None

    function = node.child_by_field_name("function")
    return tree.text(function) if function is not None else None


def has_function_call(tree: AstTree, matcher: str) -> bool:
    """True if a call's callee equals `matcher` or ends with `.matcher`."""
    target = matcher.strip()
    if not target:
        return False
    suffix = f".{target}"

    def is_match(node: TSNode) -> bool:
        text = callee_text(tree, node)
        return text is not None and (text == target or text.endswith(suffix))

    return tree.any(is_match)


def has_route_handler_export(tree: AstTree, method: str) -> bool:
    """True if the HTTP verb (e.g. GET, POST) is exported as a handler."""
    expected = method.upper().strip()
    if not expected:
        return False
    return has_exported_identifier(tree, expected)
