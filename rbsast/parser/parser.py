"""RBS parser implementation."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import TypeVar

from rbsast.ast.base import (
    Annotation,
    ASTNode,
    Comment,
    Decorated,
    Location,
    NameAndArgs,
    Root,
    TypeName,
)
from rbsast.ast.declarations import (
    ClassDeclaration,
    ConstantDeclaration,
    Declaration,
    GlobalDeclaration,
    InterfaceDeclaration,
    ModuleDeclaration,
    TypeAliasDeclaration,
)
from rbsast.ast.members import (
    AliasMember,
    AttrAccessorMember,
    AttributeMember,
    AttrReaderMember,
    AttrWriterMember,
    ClassInstanceVariableMember,
    ClassVariableMember,
    ExtendMember,
    IncludeMember,
    InstanceVariableMember,
    Member,
    MemberKind,
    MethodDefinitionMember,
    MethodOverload,
    MethodType,
    PrependMember,
    PrivateMember,
    PublicMember,
    Visibility,
)
from rbsast.ast.types import (
    AliasType,
    BaseType,
    BaseTypeKind,
    Block,
    ClassInstanceType,
    ClassSingletonType,
    Function,
    FunctionParam,
    InterfaceType,
    IntersectionType,
    LiteralKind,
    LiteralType,
    OptionalType,
    ProcType,
    RecordField,
    RecordType,
    TupleType,
    Type,
    TypeParam,
    UnionType,
    Variance,
    VariableType,
)
from rbsast.errors import RBSSyntaxError
from rbsast.lexer import Lexer, Token, TokenType

logger = logging.getLogger(__name__)

N = TypeVar("N", bound=ASTNode)


class ParserError(RBSSyntaxError):
    """Parser error exception."""

    kind = "Parser"

    def __init__(self, message: str, token: Token) -> None:
        super().__init__(message, token.line, token.column)
        self.token = token


METHOD_NAME_PATTERN = re.compile(
    r"[A-Za-z_][A-Za-z0-9_]*[?!=]?"
    r"|\[\]=|\[\]|\*\*|<=>|===|==|=~|!=|!~|<<|<=|>>|>=|\+@|-@|~@"
    r"|[!<>+\-*/%&|^~`]"
)

BASE_TYPES = {
    TokenType.UNTYPED: BaseTypeKind.ANY,
    TokenType.BOOL: BaseTypeKind.BOOL,
    TokenType.BOT: BaseTypeKind.BOTTOM,
    TokenType.CLASS: BaseTypeKind.CLASS,
    TokenType.INSTANCE: BaseTypeKind.INSTANCE,
    TokenType.NIL: BaseTypeKind.NIL,
    TokenType.SELF: BaseTypeKind.SELF,
    TokenType.TOP: BaseTypeKind.TOP,
    TokenType.VOID: BaseTypeKind.VOID,
}

ATTRIBUTES = {
    TokenType.ATTR_READER: AttrReaderMember,
    TokenType.ATTR_WRITER: AttrWriterMember,
    TokenType.ATTR_ACCESSOR: AttrAccessorMember,
}

MIXINS = {
    TokenType.INCLUDE: IncludeMember,
    TokenType.EXTEND: ExtendMember,
    TokenType.PREPEND: PrependMember,
}

NAME_TOKENS = frozenset(
    {
        TokenType.IDENTIFIER,
        TokenType.CONSTANT,
        TokenType.INTERFACE_NAME,
        TokenType.QUOTED_IDENTIFIER,
        *Lexer.KEYWORDS.values(),
    }
)


@dataclass
class CommentBlock:
    """Consecutive whole-line comments waiting for a node to attach to."""

    tokens: list[Token]

    @property
    def start_line(self) -> int:
        return self.tokens[0].line

    @property
    def end_line(self) -> int:
        return self.tokens[-1].line

    def to_comment(self) -> Comment:
        first, last = self.tokens[0], self.tokens[-1]
        return Comment(
            string="\n".join(token.value for token in self.tokens),
            location=Location(
                first.line,
                first.column,
                last.end_line,
                last.end_column,
                first.position,
                last.end_position,
            ),
        )


class Parser:
    """RBS parser for building AST from tokens."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.lexer = Lexer(text)
        self.tokens = self.lexer.tokenize()
        self.current = 0
        self._type_var_scopes: list[set[str]] = []
        self._comment_blocks = self._group_comments(self.lexer.comments)

    def parse(self) -> Root:
        """Parse RBS source and return AST."""
        start = self._peek()
        declarations = []

        while not self._is_at_end():
            declarations.append(self._parse_declaration())

        for block in self._comment_blocks.values():
            logger.warning(
                "Dropping comment at line %d: not directly above a declaration or member",
                block.start_line,
            )

        root = Root(declarations=declarations)
        root.location = Location(
            start.line, start.column, self._peek().line, self._peek().column, 0, len(self.text)
        )
        logger.debug("Parsed %d declarations", len(declarations))
        return root

    # Comments

    def _group_comments(self, comments: list[Token]) -> dict[int, CommentBlock]:
        """Group whole-line comments into blocks keyed by their last line."""
        blocks: dict[int, CommentBlock] = {}
        block: CommentBlock | None = None

        for token in comments:
            line_start = self.text.rfind("\n", 0, token.position) + 1
            if self.text[line_start : token.position].strip():
                logger.warning("Dropping trailing comment at line %d", token.line)
                continue

            if block is not None and token.line == block.end_line + 1:
                block.tokens.append(token)
            else:
                block = CommentBlock([token])
            blocks[block.start_line] = block

        return {b.end_line: b for b in blocks.values()}

    def _attach(self, node: Decorated, annotations: list[Token], start: Token) -> None:
        """Attach annotations and the comment block written right above."""
        node.annotations = [self._annotation(token) for token in annotations]
        first_line = annotations[0].line if annotations else start.line
        block = self._comment_blocks.pop(first_line - 1, None)
        if block is not None:
            node.comment = block.to_comment()

    # Declarations

    def _parse_declaration(self) -> Declaration:
        """Parse one top-level or nested declaration."""
        annotations = self._parse_annotations()
        start = self._peek()

        if self._match(TokenType.CLASS):
            declaration = self._parse_class(start)
        elif self._match(TokenType.MODULE):
            declaration = self._parse_module(start)
        elif self._match(TokenType.INTERFACE):
            declaration = self._parse_interface(start)
        elif self._match(TokenType.TYPE):
            declaration = self._parse_type_alias(start)
        elif self._check(TokenType.CONSTANT) or self._check(TokenType.DOUBLE_COLON):
            declaration = self._parse_constant(start)
        elif self._match(TokenType.GVAR):
            declaration = self._parse_global(start)
        else:
            msg = f"Unexpected token: {self._describe(self._peek())}"
            raise ParserError(msg, self._peek())

        self._attach(declaration, annotations, start)
        return declaration

    def _parse_class(self, start: Token) -> ClassDeclaration:
        name = self._parse_type_name(TokenType.CONSTANT, "class name")
        type_params = self._parse_type_params()

        with self._type_vars(type_params):
            super_class = None
            if self._match(TokenType.LT):
                super_class = self._parse_name_and_args(TokenType.CONSTANT, "superclass name")
            members = self._parse_members(nested=True)

        self._consume(TokenType.END, "Expected 'end' to close class")
        return self._finish(
            ClassDeclaration(
                name=name, type_params=type_params, super_class=super_class, members=members
            ),
            start,
        )

    def _parse_module(self, start: Token) -> ModuleDeclaration:
        name = self._parse_type_name(TokenType.CONSTANT, "module name")
        type_params = self._parse_type_params()

        with self._type_vars(type_params):
            self_types = []
            if self._match(TokenType.COLON):
                self_types.append(self._parse_name_and_args(None, "module self type"))
                while self._match(TokenType.COMMA):
                    self_types.append(self._parse_name_and_args(None, "module self type"))
            members = self._parse_members(nested=True)

        self._consume(TokenType.END, "Expected 'end' to close module")
        return self._finish(
            ModuleDeclaration(
                name=name, type_params=type_params, self_types=self_types, members=members
            ),
            start,
        )

    def _parse_interface(self, start: Token) -> InterfaceDeclaration:
        name = self._parse_type_name(TokenType.INTERFACE_NAME, "interface name")
        type_params = self._parse_type_params()

        with self._type_vars(type_params):
            members = self._parse_members(nested=False)

        self._consume(TokenType.END, "Expected 'end' to close interface")
        return self._finish(
            InterfaceDeclaration(name=name, type_params=type_params, members=members), start
        )

    def _parse_type_alias(self, start: Token) -> TypeAliasDeclaration:
        name = self._parse_type_name(TokenType.IDENTIFIER, "type alias name")
        type_params = self._parse_type_params()
        self._consume(TokenType.EQ, "Expected '=' after type alias name")

        with self._type_vars(type_params):
            aliased = self._parse_type()

        return self._finish(
            TypeAliasDeclaration(name=name, type=aliased, type_params=type_params), start
        )

    def _parse_constant(self, start: Token) -> ConstantDeclaration:
        name = self._parse_type_name(TokenType.CONSTANT, "constant name")
        self._consume(TokenType.COLON, "Expected ':' after constant name")
        return self._finish(ConstantDeclaration(name=name, type=self._parse_type()), start)

    def _parse_global(self, start: Token) -> GlobalDeclaration:
        self._consume(TokenType.COLON, "Expected ':' after global name")
        return self._finish(GlobalDeclaration(name=start.value, type=self._parse_type()), start)

    # Members

    def _parse_members(self, nested: bool) -> list[Member | Declaration]:
        """Parse a body up to (not including) its ``end``."""
        members: list[Member | Declaration] = []

        while not self._check(TokenType.END):
            if self._is_at_end():
                msg = "Unexpected end of input, expected 'end'"
                raise ParserError(msg, self._peek())

            annotations = self._parse_annotations()
            start = self._peek()

            if nested and self._check_any(
                TokenType.CLASS,
                TokenType.MODULE,
                TokenType.INTERFACE,
                TokenType.TYPE,
                TokenType.CONSTANT,
                TokenType.DOUBLE_COLON,
            ):
                # Re-enter the declaration path so the annotations are re-read.
                self.current -= len(annotations)
                members.append(self._parse_declaration())
                continue

            member = self._parse_member(start, nested)
            self._attach(member, annotations, start)
            members.append(member)

        return members

    def _parse_member(self, start: Token, nested: bool) -> Member:
        visibility = None
        if self._check_any(TokenType.PUBLIC, TokenType.PRIVATE):
            following = self._peek(1)
            if following.line == start.line and following.type in (
                TokenType.DEF,
                *ATTRIBUTES,
            ):
                visibility = Visibility(self._advance().value)

        if self._match(TokenType.DEF):
            return self._parse_method_definition(start, visibility)

        if self._check_any(*ATTRIBUTES) and nested:
            return self._parse_attribute(start, visibility)

        if self._check_any(*MIXINS) and (nested or self._check(TokenType.INCLUDE)):
            member_class = MIXINS[self._advance().type]
            target = self._parse_name_and_args(None, f"{member_class.keyword} target")
            return self._finish(member_class(name=target.name, args=target.args), start)

        if self._match(TokenType.ALIAS):
            return self._parse_alias(start)

        if nested:
            if self._match(TokenType.PUBLIC):
                return self._finish(PublicMember(), start)
            if self._match(TokenType.PRIVATE):
                return self._finish(PrivateMember(), start)
            if self._match(TokenType.IVAR):
                return self._parse_variable(InstanceVariableMember, start.value, start)
            if self._match(TokenType.CVAR):
                return self._parse_variable(ClassVariableMember, start.value, start)
            if self._check(TokenType.SELF) and self._peek(1).type == TokenType.DOT:
                self._advance()
                self._advance()
                name = self._consume(TokenType.IVAR, "Expected instance variable after 'self.'")
                return self._parse_variable(ClassInstanceVariableMember, name.value, start)

        msg = f"Unexpected token in body: {self._describe(self._peek())}"
        raise ParserError(msg, self._peek())

    def _parse_variable(self, member_class: type[Member], name: str, start: Token) -> Member:
        self._consume(TokenType.COLON, f"Expected ':' after {name}")
        return self._finish(member_class(name=name, type=self._parse_type()), start)

    def _parse_alias(self, start: Token) -> AliasMember:
        kind = MemberKind.INSTANCE
        if self._check(TokenType.SELF) and self._peek(1).type == TokenType.DOT:
            kind = MemberKind.SINGLETON
            self._advance()
            self._advance()
        new_name = self._parse_method_name()

        if kind is MemberKind.SINGLETON:
            self._consume(TokenType.SELF, "Expected 'self.' before aliased singleton method")
            self._consume(TokenType.DOT, "Expected '.' after 'self'")
        old_name = self._parse_method_name()

        return self._finish(AliasMember(new_name=new_name, old_name=old_name, kind=kind), start)

    def _parse_attribute(self, start: Token, visibility: Visibility | None) -> AttributeMember:
        member_class = ATTRIBUTES[self._advance().type]

        kind = MemberKind.INSTANCE
        if self._check(TokenType.SELF) and self._peek(1).type == TokenType.DOT:
            kind = MemberKind.SINGLETON
            self._advance()
            self._advance()

        if not self._check_any(*NAME_TOKENS):
            msg = f"Expected attribute name after '{member_class.keyword}'"
            raise ParserError(msg, self._peek())
        name = self._advance().value

        ivar_name: str | bool | None = None
        if self._match(TokenType.LPAREN):
            if self._match(TokenType.IVAR):
                ivar_name = self._previous().value
            else:
                ivar_name = False
            self._consume(TokenType.RPAREN, "Expected ')' after instance variable name")

        self._consume(TokenType.COLON, f"Expected ':' after attribute {name}")
        return self._finish(
            member_class(
                name=name,
                type=self._parse_type(),
                ivar_name=ivar_name,
                kind=kind,
                visibility=visibility,
            ),
            start,
        )

    def _parse_method_definition(
        self, start: Token, visibility: Visibility | None
    ) -> MethodDefinitionMember:
        kind = MemberKind.INSTANCE
        if self._check(TokenType.SELF):
            if self._peek(1).type == TokenType.DOT:
                kind = MemberKind.SINGLETON
                self._advance()
                self._advance()
            elif self._peek(1).type == TokenType.QUESTION and self._peek(2).type == TokenType.DOT:
                kind = MemberKind.SINGLETON_INSTANCE
                self._advance()
                self._advance()
                self._advance()

        name = self._parse_method_name()
        self._consume(TokenType.COLON, f"Expected ':' after method name {name}")

        overloads = []
        overloading = False
        while True:
            if self._match(TokenType.ELLIPSIS):
                overloading = True
                break

            overload_start = self._peek()
            annotations = [self._annotation(token) for token in self._parse_annotations()]
            method_type = self._parse_method_type()
            overloads.append(
                self._finish(
                    MethodOverload(method_type=method_type, annotations=annotations),
                    overload_start,
                )
            )

            if not self._match(TokenType.PIPE):
                break

        return self._finish(
            MethodDefinitionMember(
                name=name,
                overloads=overloads,
                kind=kind,
                overloading=overloading,
                visibility=visibility,
            ),
            start,
        )

    def _parse_method_name(self) -> str:
        """Read a method name straight from the source text.

        Operator names such as ``[]=`` or ``<=>`` span several tokens, so the
        name is matched on the text and the tokens it covers are skipped.
        """
        token = self._peek()
        if self._match(TokenType.QUOTED_IDENTIFIER):
            return token.value

        match = METHOD_NAME_PATTERN.match(self.text, token.position)
        if self._is_at_end() or match is None:
            msg = f"Expected method name, got {self._describe(token)}"
            raise ParserError(msg, token)

        while not self._is_at_end() and self._peek().position < match.end():
            self._advance()
        return match.group()

    def _parse_method_type(self) -> MethodType:
        start = self._peek()
        type_params = self._parse_type_params()

        with self._type_vars(type_params):
            function, block = self._parse_function_with_block()

        return self._finish(
            MethodType(type=function, type_params=type_params, block=block), start
        )

    def _parse_function_with_block(self) -> tuple[Function, Block | None]:
        """Parse ``(params) ?{ block } -> return`` for methods and procs."""
        start = self._peek()
        function = Function(return_type=BaseType(BaseTypeKind.VOID))
        if self._match(TokenType.LPAREN):
            self._parse_params(function)

        block = None
        if self._check(TokenType.LBRACE) or (
            self._check(TokenType.QUESTION) and self._peek(1).type == TokenType.LBRACE
        ):
            block_start = self._peek()
            required = not self._match(TokenType.QUESTION)
            self._advance()
            block_function = Function(return_type=BaseType(BaseTypeKind.VOID))
            if self._match(TokenType.LPAREN):
                self._parse_params(block_function)
            self._consume(TokenType.ARROW, "Expected '->' in block type")
            block_function.return_type = self._parse_optional_type()
            self._finish(block_function, block_start)
            self._consume(TokenType.RBRACE, "Expected '}' to close block type")
            block = self._finish(Block(type=block_function, required=required), block_start)

        self._consume(TokenType.ARROW, "Expected '->' before return type")
        function.return_type = self._parse_optional_type()
        return self._finish(function, start), block

    def _parse_params(self, function: Function) -> None:
        """Parse a parameter list after its opening parenthesis."""
        state = "required"

        while not self._check(TokenType.RPAREN):
            if self._is_keyword_param():
                optional = self._match(TokenType.QUESTION)
                name = self._advance().value
                self._advance()  # :
                param = self._parse_param()
                keywords = function.optional_keywords if optional else function.required_keywords
                if name in function.required_keywords or name in function.optional_keywords:
                    msg = f"Duplicate keyword parameter: {name}"
                    raise ParserError(msg, self._previous())
                keywords[name] = param
                state = "keywords"
            elif self._match(TokenType.DOUBLE_STAR):
                if function.rest_keywords is not None:
                    msg = "Only one rest keyword parameter is allowed"
                    raise ParserError(msg, self._previous())
                function.rest_keywords = self._parse_param()
                state = "done"
            elif state == "done":
                msg = "Parameters must not follow the rest keyword parameter"
                raise ParserError(msg, self._peek())
            elif self._match(TokenType.QUESTION):
                if state not in ("required", "optional"):
                    msg = "Optional positional parameter out of order"
                    raise ParserError(msg, self._previous())
                function.optional_positionals.append(self._parse_param())
                state = "optional"
            elif self._match(TokenType.STAR):
                if state not in ("required", "optional"):
                    msg = "Rest positional parameter out of order"
                    raise ParserError(msg, self._previous())
                function.rest_positionals = self._parse_param()
                state = "trailing"
            elif state == "required":
                function.required_positionals.append(self._parse_param())
            elif state == "trailing":
                function.trailing_positionals.append(self._parse_param())
            else:
                msg = "Required positional parameter out of order"
                raise ParserError(msg, self._peek())

            if not self._match(TokenType.COMMA):
                break

        self._consume(TokenType.RPAREN, "Expected ')' after parameters")

    def _is_keyword_param(self) -> bool:
        offset = 1 if self._check(TokenType.QUESTION) else 0
        return (
            self._peek(offset).type in NAME_TOKENS
            and self._peek(offset + 1).type == TokenType.COLON
        )

    def _parse_param(self) -> FunctionParam:
        start = self._peek()
        param_type = self._parse_type()
        name = None
        if self._check_any(*NAME_TOKENS):
            name = self._advance().value
        return self._finish(FunctionParam(type=param_type, name=name), start)

    # Types

    def _parse_type(self) -> Type:
        """Parse a full type expression (union level)."""
        start = self._peek()
        types = [self._parse_intersection_type()]
        while self._match(TokenType.PIPE):
            types.append(self._parse_intersection_type())
        if len(types) == 1:
            return types[0]
        return self._finish(UnionType(types=types), start)

    def _parse_intersection_type(self) -> Type:
        start = self._peek()
        types = [self._parse_optional_type()]
        while self._match(TokenType.AMPERSAND):
            types.append(self._parse_optional_type())
        if len(types) == 1:
            return types[0]
        return self._finish(IntersectionType(types=types), start)

    def _parse_optional_type(self) -> Type:
        start = self._peek()
        inner = self._parse_simple_type()
        if self._match(TokenType.QUESTION):
            return self._finish(OptionalType(type=inner), start)
        return inner

    def _parse_simple_type(self) -> Type:
        start = self._peek()

        if self._match(TokenType.LPAREN):
            inner = self._parse_type()
            self._consume(TokenType.RPAREN, "Expected ')' after type")
            return inner

        if start.type in BASE_TYPES:
            self._advance()
            return self._finish(BaseType(BASE_TYPES[start.type]), start)

        if self._match(TokenType.TRUE):
            return self._finish(LiteralType(LiteralKind.TRUE, True), start)
        if self._match(TokenType.FALSE):
            return self._finish(LiteralType(LiteralKind.FALSE, False), start)
        if self._match(TokenType.INTEGER):
            return self._finish(LiteralType(LiteralKind.INTEGER, start.value), start)
        if self._match(TokenType.STRING):
            return self._finish(LiteralType(LiteralKind.STRING, start.value), start)
        if self._match(TokenType.SYMBOL):
            return self._finish(LiteralType(LiteralKind.SYMBOL, start.value), start)

        if self._match(TokenType.SINGLETON):
            self._consume(TokenType.LPAREN, "Expected '(' after 'singleton'")
            name = self._parse_type_name(TokenType.CONSTANT, "class name")
            self._consume(TokenType.RPAREN, "Expected ')' after singleton class name")
            return self._finish(ClassSingletonType(name=name), start)

        if self._match(TokenType.CARET):
            function, block = self._parse_function_with_block()
            return self._finish(ProcType(type=function, block=block), start)

        if self._match(TokenType.LBRACKET):
            types = []
            while not self._check(TokenType.RBRACKET):
                types.append(self._parse_type())
                if not self._match(TokenType.COMMA):
                    break
            self._consume(TokenType.RBRACKET, "Expected ']' after tuple elements")
            return self._finish(TupleType(types=types), start)

        if self._match(TokenType.LBRACE):
            return self._parse_record(start)

        if self._check_any(
            TokenType.CONSTANT,
            TokenType.INTERFACE_NAME,
            TokenType.IDENTIFIER,
            TokenType.DOUBLE_COLON,
        ):
            return self._parse_named_type(start)

        msg = f"Expected type, got {self._describe(start)}"
        raise ParserError(msg, start)

    def _parse_named_type(self, start: Token) -> Type:
        name = self._parse_type_name(None, "type name")

        if (
            name.is_class
            and not name.absolute
            and not name.namespace
            and any(name.name in scope for scope in self._type_var_scopes)
        ):
            return self._finish(VariableType(name=name.name), start)

        args = self._parse_type_args()
        if name.is_interface:
            return self._finish(InterfaceType(name=name, args=args), start)
        if name.is_class:
            return self._finish(ClassInstanceType(name=name, args=args), start)
        return self._finish(AliasType(name=name, args=args), start)

    def _parse_record(self, start: Token) -> RecordType:
        fields = []

        while not self._check(TokenType.RBRACE):
            field_start = self._peek()
            if self._check_any(*NAME_TOKENS) and self._peek(1).type == TokenType.COLON:
                key_token = self._advance()
                key = self._finish(LiteralType(LiteralKind.SYMBOL, key_token.value), key_token)
                self._advance()  # :
            else:
                key = self._parse_simple_type()
                if not isinstance(key, LiteralType):
                    msg = "Expected literal record key"
                    raise ParserError(msg, field_start)
                self._consume(TokenType.FAT_ARROW, "Expected '=>' after record key")

            fields.append(self._finish(RecordField(key=key, type=self._parse_type()), field_start))
            if not self._match(TokenType.COMMA):
                break

        self._consume(TokenType.RBRACE, "Expected '}' after record fields")
        return self._finish(RecordType(fields=fields), start)

    def _parse_type_args(self) -> list[Type]:
        args = []
        if self._match(TokenType.LBRACKET):
            args.append(self._parse_type())
            while self._match(TokenType.COMMA):
                if self._check(TokenType.RBRACKET):
                    break
                args.append(self._parse_type())
            self._consume(TokenType.RBRACKET, "Expected ']' after type arguments")
        return args

    def _parse_type_params(self) -> list[TypeParam]:
        """Parse ``[unchecked out T < Bound, ...]`` if present."""
        if not self._match(TokenType.LBRACKET):
            return []

        params: list[TypeParam] = []
        # A bound may refer to its own parameter and the ones before it.
        with self._type_vars(params) as names:
            while not self._check(TokenType.RBRACKET):
                start = self._peek()
                unchecked = self._match(TokenType.UNCHECKED)
                variance = Variance.INVARIANT
                if self._match(TokenType.OUT):
                    variance = Variance.COVARIANT
                elif self._match(TokenType.IN):
                    variance = Variance.CONTRAVARIANT

                name = self._consume(TokenType.CONSTANT, "Expected type parameter name").value
                names.add(name)
                param = TypeParam(name=name, variance=variance, unchecked=unchecked)
                if self._match(TokenType.LT):
                    param.upper_bound = self._parse_type()
                params.append(self._finish(param, start))

                if not self._match(TokenType.COMMA):
                    break

        self._consume(TokenType.RBRACKET, "Expected ']' after type parameters")
        return params

    # Names

    def _parse_type_name(self, last: TokenType | None, what: str) -> TypeName:
        """Parse ``::A::B::name``; ``last`` restricts the final segment."""
        start = self._peek()
        absolute = self._match(TokenType.DOUBLE_COLON)
        namespace = []

        while self._check(TokenType.CONSTANT) and self._peek(1).type == TokenType.DOUBLE_COLON:
            namespace.append(self._advance().value)
            self._advance()

        allowed = (
            (last,)
            if last is not None
            else (TokenType.CONSTANT, TokenType.INTERFACE_NAME, TokenType.IDENTIFIER)
        )
        if not self._check_any(*allowed):
            msg = f"Expected {what}, got {self._describe(self._peek())}"
            raise ParserError(msg, self._peek())

        name = self._advance().value
        return self._finish(TypeName(name=name, namespace=namespace, absolute=absolute), start)

    def _parse_name_and_args(self, last: TokenType | None, what: str) -> NameAndArgs:
        start = self._peek()
        if last is None:
            name = self._parse_type_name(None, what)
            if not (name.is_class or name.is_interface):
                msg = f"Expected class or interface name for {what}"
                raise ParserError(msg, start)
        else:
            name = self._parse_type_name(last, what)
        return self._finish(NameAndArgs(name=name, args=self._parse_type_args()), start)

    # Helpers

    def _parse_annotations(self) -> list[Token]:
        annotations = []
        while self._match(TokenType.ANNOTATION):
            annotations.append(self._previous())
        return annotations

    def _annotation(self, token: Token) -> Annotation:
        return Annotation(string=token.value, location=self._token_location(token))

    def _type_vars(self, params: list[TypeParam]) -> _TypeVarScope:
        return _TypeVarScope(self._type_var_scopes, {param.name for param in params})

    def _finish(self, node: N, start: Token) -> N:
        """Set the location of ``node`` from ``start`` to the last consumed token."""
        end = self._previous() if self.current > 0 else start
        if end.position < start.position:
            end = start
        node.location = Location(
            start.line,
            start.column,
            end.end_line,
            end.end_column,
            start.position,
            end.end_position,
        )
        return node

    @staticmethod
    def _token_location(token: Token) -> Location:
        return Location(
            token.line,
            token.column,
            token.end_line,
            token.end_column,
            token.position,
            token.end_position,
        )

    @staticmethod
    def _describe(token: Token) -> str:
        if token.type == TokenType.EOF:
            return "end of input"
        return repr(str(token.value))

    def _consume(self, token_type: TokenType, message: str) -> Token:
        if self._check(token_type):
            return self._advance()
        raise ParserError(f"{message}, got {self._describe(self._peek())}", self._peek())

    def _match(self, *types: TokenType) -> bool:
        """Check if current token matches any of the given types."""
        for token_type in types:
            if self._check(token_type):
                self._advance()
                return True
        return False

    def _check(self, token_type: TokenType) -> bool:
        """Check if current token is of given type."""
        if self._is_at_end():
            return False
        return self._peek().type == token_type

    def _check_any(self, *types: TokenType) -> bool:
        """Check if current token matches any of the given types."""
        return any(self._check(t) for t in types)

    def _advance(self) -> Token:
        """Consume current token and return it."""
        if not self._is_at_end():
            self.current += 1
        return self._previous()

    def _is_at_end(self) -> bool:
        """Check if we're at end of tokens."""
        return self._peek().type == TokenType.EOF

    def _peek(self, offset: int = 0) -> Token:
        """Return the token ``offset`` places ahead without advancing."""
        index = min(self.current + offset, len(self.tokens) - 1)
        return self.tokens[index]

    def _previous(self) -> Token:
        """Return previous token."""
        return self.tokens[self.current - 1]


class _TypeVarScope:
    """Context manager pushing type parameter names while a body is parsed."""

    def __init__(self, scopes: list[set[str]], names: set[str]) -> None:
        self.scopes = scopes
        self.names = names

    def __enter__(self) -> set[str]:
        self.scopes.append(self.names)
        return self.names

    def __exit__(self, *exc_info: object) -> None:
        self.scopes.pop()


def parse(source: str) -> Root:
    """Parse RBS source text into a :class:`Root` node."""
    return Parser(source).parse()
