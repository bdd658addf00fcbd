"""
Modelica rule kinds.

This module defines the closed set of syntactic categories produced by the
grammar in ``modelica.lark``. Every tree node the parser builds carries one
of these names, and the formatter's layout tables are keyed on them.

**Usage:**
    from modelicafmt.lang import RuleKind

    kind = RuleKind.of(tree)
    if kind is RuleKind.ANNOTATION:
        ...
"""

from __future__ import annotations

from enum import Enum

from lark import Tree

from modelicafmt.errors import FormatterInvariantError


class RuleKind(str, Enum):
    """Syntactic category of a parse tree node."""

    # ========================================================================
    # Class definitions
    # ========================================================================
    STORED_DEFINITION = "stored_definition"
    CLASS_DEFINITION = "class_definition"
    CLASS_PREFIXES = "class_prefixes"
    CLASS_SPECIFIER = "class_specifier"
    LONG_CLASS_SPECIFIER = "long_class_specifier"
    SHORT_CLASS_SPECIFIER = "short_class_specifier"
    DER_CLASS_SPECIFIER = "der_class_specifier"
    BASE_PREFIX = "base_prefix"
    ENUM_LIST = "enum_list"
    ENUMERATION_LITERAL = "enumeration_literal"
    COMPOSITION = "composition"
    EXTERNAL_CLAUSE = "external_clause"
    LANGUAGE_SPECIFICATION = "language_specification"
    EXTERNAL_FUNCTION_CALL = "external_function_call"
    ELEMENT_LIST = "element_list"
    ELEMENT = "element"
    IMPORT_CLAUSE = "import_clause"
    IMPORT_LIST = "import_list"

    # ========================================================================
    # Extends, components and modifications
    # ========================================================================
    EXTENDS_CLAUSE = "extends_clause"
    CONSTRAINING_CLAUSE = "constraining_clause"
    COMPONENT_CLAUSE = "component_clause"
    TYPE_PREFIX = "type_prefix"
    COMPONENT_LIST = "component_list"
    COMPONENT_DECLARATION = "component_declaration"
    CONDITION_ATTRIBUTE = "condition_attribute"
    DECLARATION = "declaration"
    MODIFICATION = "modification"
    CLASS_MODIFICATION = "class_modification"
    ARGUMENT_LIST = "argument_list"
    ARGUMENT = "argument"
    ELEMENT_MODIFICATION_OR_REPLACEABLE = "element_modification_or_replaceable"
    ELEMENT_MODIFICATION = "element_modification"
    ELEMENT_REDECLARATION = "element_redeclaration"
    ELEMENT_REPLACEABLE = "element_replaceable"
    COMPONENT_CLAUSE1 = "component_clause1"
    COMPONENT_DECLARATION1 = "component_declaration1"
    SHORT_CLASS_DEFINITION = "short_class_definition"

    # ========================================================================
    # Equations and algorithms
    # ========================================================================
    EQUATION_SECTION = "equation_section"
    EQUATIONS = "equations"
    ALGORITHM_SECTION = "algorithm_section"
    ALGORITHM_STATEMENTS = "algorithm_statements"
    EQUATION = "equation"
    STATEMENT = "statement"
    CONTROL_STRUCTURE_BODY = "control_structure_body"
    IF_EQUATION = "if_equation"
    IF_STATEMENT = "if_statement"
    FOR_EQUATION = "for_equation"
    FOR_STATEMENT = "for_statement"
    FOR_INDICES = "for_indices"
    FOR_INDEX = "for_index"
    WHILE_STATEMENT = "while_statement"
    WHEN_EQUATION = "when_equation"
    WHEN_STATEMENT = "when_statement"
    CONNECT_CLAUSE = "connect_clause"

    # ========================================================================
    # Expressions
    # ========================================================================
    EXPRESSION = "expression"
    IF_EXPRESSION = "if_expression"
    IF_EXPRESSION_CONDITION = "if_expression_condition"
    ELSEIF_EXPRESSION_CONDITION = "elseif_expression_condition"
    ELSE_EXPRESSION_CONDITION = "else_expression_condition"
    IF_EXPRESSION_BODY = "if_expression_body"
    SIMPLE_EXPRESSION = "simple_expression"
    LOGICAL_EXPRESSION = "logical_expression"
    LOGICAL_TERM = "logical_term"
    LOGICAL_FACTOR = "logical_factor"
    RELATION = "relation"
    REL_OP = "rel_op"
    ARITHMETIC_EXPRESSION = "arithmetic_expression"
    ADD_OP = "add_op"
    TERM = "term"
    MUL_OP = "mul_op"
    FACTOR = "factor"
    PRIMARY = "primary"
    VECTOR = "vector"
    NAME = "name"
    TYPE_SPECIFIER = "type_specifier"
    COMPONENT_REFERENCE = "component_reference"
    FUNCTION_CALL_ARGS = "function_call_args"
    FUNCTION_ARGUMENTS = "function_arguments"
    NAMED_ARGUMENTS = "named_arguments"
    NAMED_ARGUMENT = "named_argument"
    FUNCTION_ARGUMENT = "function_argument"
    OUTPUT_EXPRESSION_LIST = "output_expression_list"
    EXPRESSION_LIST = "expression_list"
    ARRAY_SUBSCRIPTS = "array_subscripts"
    SUBSCRIPT = "subscript"

    # ========================================================================
    # Comments and annotations
    # ========================================================================
    COMMENT = "comment"
    STRING_COMMENT = "string_comment"
    ANNOTATION = "annotation"

    @classmethod
    def of(cls, node: Tree) -> "RuleKind":
        """Return the kind of ``node``, failing loudly on unknown rule names."""
        try:
            return cls(str(node.data))
        except ValueError:
            raise FormatterInvariantError(
                f"Parse tree contains unknown rule '{node.data}'",
                hint="The grammar and RuleKind are out of sync",
            ) from None


__all__ = ["RuleKind"]
