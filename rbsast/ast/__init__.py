"""AST node classes for RBS signatures."""

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
    MixinMember,
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
    VariableType,
    Variance,
)

__all__ = [
    "ASTNode",
    "AliasMember",
    "AliasType",
    "Annotation",
    "AttrAccessorMember",
    "AttrReaderMember",
    "AttrWriterMember",
    "AttributeMember",
    "BaseType",
    "BaseTypeKind",
    "Block",
    "ClassDeclaration",
    "ClassInstanceType",
    "ClassInstanceVariableMember",
    "ClassSingletonType",
    "ClassVariableMember",
    "Comment",
    "ConstantDeclaration",
    "Declaration",
    "Decorated",
    "ExtendMember",
    "Function",
    "FunctionParam",
    "GlobalDeclaration",
    "IncludeMember",
    "InstanceVariableMember",
    "InterfaceDeclaration",
    "InterfaceType",
    "IntersectionType",
    "LiteralKind",
    "LiteralType",
    "Location",
    "Member",
    "MemberKind",
    "MethodDefinitionMember",
    "MethodOverload",
    "MethodType",
    "MixinMember",
    "ModuleDeclaration",
    "NameAndArgs",
    "OptionalType",
    "PrependMember",
    "PrivateMember",
    "ProcType",
    "PublicMember",
    "RecordField",
    "RecordType",
    "Root",
    "TupleType",
    "Type",
    "TypeAliasDeclaration",
    "TypeName",
    "TypeParam",
    "UnionType",
    "VariableType",
    "Variance",
    "Visibility",
]
