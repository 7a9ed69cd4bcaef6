"""
Immutable snapshots of parsed declarations.

The host compiler hands the simplifier one of these per annotated declaration.
Nodes refer to each other by index, never by live reference, so nothing the
host does afterward can disturb a traversal in progress. The class of a node
is its kind-tag, which is also what the visitors dispatch on.

Hosts without a parser of their own can lay out a snapshot with TreeBuilder,
which writes canonical source text while recording the nodes that cover it.
The synthesizer builds its output the same way.
"""
from contextlib import contextmanager
from pathlib import Path
from typing import NamedTuple, Optional, Sequence, Union
from . import query

class Node(NamedTuple):
	index: int
	parent: Optional[int]
	children: tuple[int, ...]
	text: str  # Only tokens have text of their own.
	start: int
	stop: int

	@property
	def kind(self) -> str: return type(self).__name__

# Leaves

class Token(Node): __slots__ = ()
class Name(Token): __slots__ = ()
class Keyword(Token): __slots__ = ()
class Punct(Token): __slots__ = ()
class Comment(Token): __slots__ = ()

# Structure

class SourceFile(Node): __slots__ = ()
class Attribute(Node): __slots__ = ()
class InheritanceClause(Node): __slots__ = ()
class MemberBlock(Node): __slots__ = ()
class CodeBlock(Node): __slots__ = ()

class Declaration(Node): __slots__ = ()
class EnumDecl(Declaration): __slots__ = ()
class StructDecl(Declaration): __slots__ = ()
class ClassDecl(Declaration): __slots__ = ()
class TypeAliasDecl(Declaration): __slots__ = ()
class VarDecl(Declaration): __slots__ = ()
class FuncDecl(Declaration): __slots__ = ()

class CaseDecl(Node): __slots__ = ()
class CaseElement(Node): __slots__ = ()
class ParameterClause(Node): __slots__ = ()
class Parameter(Node): __slots__ = ()

class TypeNode(Node): __slots__ = ()
class IdentifierType(TypeNode): __slots__ = ()
class FunctionType(TypeNode): __slots__ = ()
class TupleType(TypeNode): __slots__ = ()
class OtherType(TypeNode): __slots__ = ()

class SwitchStmt(Node): __slots__ = ()
class SwitchCase(Node): __slots__ = ()
class ReturnStmt(Node): __slots__ = ()


class Tree(NamedTuple):
	""" One declaration (or file) as the host saw it. Never changes. """
	nodes: tuple[Node, ...]
	source: str = ""
	path: Optional[Path] = None
	root_index: int = 0

	@property
	def root(self) -> Node: return self.nodes[self.root_index]

	def parent_of(self, node:Node) -> Optional[Node]:
		return None if node.parent is None else self.nodes[node.parent]

	def children_of(self, node:Node) -> tuple[Node, ...]:
		return tuple(self.nodes[i] for i in node.children)

	def describe(self, node:Node) -> str:
		""" The stretch of source text this node covers """
		return self.source[node.start:node.stop]

	def name_of(self, node:Node) -> Optional[str]:
		for child in self.children_of(node):
			if isinstance(child, Name):
				return child.text

	def name_token(self, node:Node) -> Optional[Name]:
		for child in self.children_of(node):
			if isinstance(child, Name):
				return child

	def attributes_of(self, node:Node) -> list[str]:
		return [
			self.name_of(child)
			for child in self.children_of(node)
			if isinstance(child, Attribute)
		]


# Type-expressions as a builder's caller spells them.
# A plain string is an identifier type; a plain tuple is a tuple type.

class Arrow(NamedTuple):
	params: Sequence["TypeSpec"]
	result: "TypeSpec"

class Raw(NamedTuple):
	""" Anything the simplifier has no particular opinion about, e.g. [Int] or any Comparable """
	text: str

class Labeled(NamedTuple):
	label: str
	type_spec: "TypeSpec"

TypeSpec = Union[str, Arrow, Raw, tuple]


class TreeBuilder:
	"""
	Lays out canonical source text and the nodes that cover it, top-down.

	The context-manager methods open a node, let the caller fill it in,
	and close it again. Everything a builder makes gets an accurate span,
	which is what the diagnostics draw their pictures from.
	"""

	def __init__(self, path:Optional[Path]=None, indentation:str="    "):
		self._path = path
		self._indentation = indentation
		self._depth = 0
		self._pieces = []
		self._offset = 0
		self._records = []  # [class, parent, children, text, start, stop]
		self._stack = []

	def tree(self) -> Tree:
		assert not self._stack, "A node is still open."
		nodes = tuple(
			cls(index, parent, tuple(children), text, start, stop)
			for index, (cls, parent, children, text, start, stop) in enumerate(self._records)
		)
		return Tree(nodes, "".join(self._pieces), self._path)

	# Low-level operations:

	def _emit(self, text:str):
		self._pieces.append(text)
		self._offset += len(text)

	def _open(self, cls, text:str, start:int) -> int:
		index = len(self._records)
		parent = self._stack[-1] if self._stack else None
		self._records.append([cls, parent, [], text, start, start])
		if parent is not None:
			self._records[parent][2].append(index)
		return index

	@contextmanager
	def node(self, cls:type[Node]):
		index = self._open(cls, "", self._offset)
		self._stack.append(index)
		try: yield index
		finally:
			self._stack.pop()
			self._records[index][5] = self._offset

	def token(self, cls:type[Token], text:str) -> int:
		index = self._open(cls, text, self._offset)
		self._emit(text)
		self._records[index][5] = self._offset
		return index

	def space(self, text:str=" "):
		self._emit(text)

	def line_break(self):
		""" Start a fresh line at the current indentation, unless nothing is written yet. """
		if self._offset:
			self._emit("\n" + self._indentation * self._depth)

	@contextmanager
	def indented(self):
		self._depth += 1
		try: yield
		finally: self._depth -= 1

	@contextmanager
	def block(self, cls:type[Node]=MemberBlock, indent:bool=True):
		with self.node(cls):
			self.token(Punct, "{")
			shift = 1 if indent else 0
			self._depth += shift
			try: yield
			finally: self._depth -= shift
			self.line_break()
			self.token(Punct, "}")

	def graft(self, tree:Tree, node:Node) -> int:
		""" Copy a subtree out of another snapshot, text and all. """
		shift = self._offset - node.start
		renumber = {}
		for each in query.all_children(tree, node, lambda n, depth: True):
			if each.index == node.index:
				parent = self._stack[-1] if self._stack else None
			else:
				parent = renumber[each.parent]
			index = renumber[each.index] = len(self._records)
			self._records.append([type(each), parent, [], each.text, each.start + shift, each.stop + shift])
			if parent is not None:
				self._records[parent][2].append(index)
		self._emit(tree.describe(node))
		return renumber[node.index]

	# Declarations:

	@contextmanager
	def source_file(self):
		with self.node(SourceFile) as index:
			yield index

	def attribute(self, name:str):
		with self.node(Attribute):
			self.token(Punct, "@")
			self.token(Name, name)
		self.line_break()

	def inheritance(self, names:Sequence[str]):
		with self.node(InheritanceClause):
			self.token(Punct, ":")
			for i, name in enumerate(names):
				if i: self.token(Punct, ",")
				self.space()
				self.token(Name, name)

	@contextmanager
	def nominal(self, cls:type[Node], keyword:str, name:str, inherits=(), attribute:Optional[str]=None):
		self.line_break()
		with self.node(cls) as index:
			if attribute is not None:
				self.attribute(attribute)
			self.token(Keyword, keyword)
			self.space()
			self.token(Name, name)
			if inherits:
				self.inheritance(inherits)
			self.space()
			with self.block():
				yield index

	def enum(self, name:str, inherits=(), attribute:Optional[str]=None):
		return self.nominal(EnumDecl, "enum", name, inherits, attribute)

	def struct(self, name:str, inherits=(), attribute:Optional[str]=None):
		return self.nominal(StructDecl, "struct", name, inherits, attribute)

	def field(self, keyword:str, name:str, type_spec:TypeSpec):
		self.line_break()
		with self.node(VarDecl):
			self.token(Keyword, keyword)
			self.space()
			self.token(Name, name)
			self.token(Punct, ":")
			self.space()
			self.type_expr(type_spec)

	def typealias(self, name:str, type_spec:TypeSpec=None, *, graft:Optional[tuple[Tree, Node]]=None):
		self.line_break()
		with self.node(TypeAliasDecl):
			self.token(Keyword, "typealias")
			self.space()
			self.token(Name, name)
			self.space()
			self.token(Punct, "=")
			self.space()
			if graft is None: self.type_expr(type_spec)
			else: self.graft(*graft)

	# Cases of a sum type:

	def case(self, name:str, *payload:TypeSpec, comment:Optional[str]=None, pad:int=0):
		self.line_break()
		with self.node(CaseDecl):
			self.token(Keyword, "case")
			self.space()
			self.element(name, payload)
			if comment is not None:
				self.comment(comment, pad)

	def cases(self, *elements):
		""" Several elements in one declaration, like `case a, b(Int)` """
		self.line_break()
		with self.node(CaseDecl):
			self.token(Keyword, "case")
			self.space()
			for i, each in enumerate(elements):
				if i:
					self.token(Punct, ",")
					self.space()
				name, *payload = (each,) if isinstance(each, str) else each
				self.element(name, payload)

	def element(self, name:str, payload:Sequence[TypeSpec]=()):
		with self.node(CaseElement):
			self.token(Name, name)
			if payload:
				self.parameters(payload)

	def parameters(self, payload:Sequence[TypeSpec]):
		with self.node(ParameterClause):
			self.token(Punct, "(")
			for i, spec in enumerate(payload):
				if i:
					self.token(Punct, ",")
					self.space()
				with self.node(Parameter):
					if isinstance(spec, Labeled):
						self.token(Name, spec.label)
						self.token(Punct, ":")
						self.space()
						spec = spec.type_spec
					self.type_expr(spec)
			self.token(Punct, ")")

	def type_expr(self, spec:TypeSpec):
		if isinstance(spec, str):
			with self.node(IdentifierType):
				self.token(Name, spec)
		elif isinstance(spec, Arrow):
			with self.node(FunctionType):
				self.type_expr(tuple(spec.params))
				self.space()
				self.token(Punct, "->")
				self.space()
				self.type_expr(spec.result)
		elif isinstance(spec, Raw):
			with self.node(OtherType):
				self.token(Token, spec.text)
		elif isinstance(spec, tuple):
			with self.node(TupleType):
				self.token(Punct, "(")
				for i, each in enumerate(spec):
					if i:
						self.token(Punct, ",")
						self.space()
					self.type_expr(each)
				self.token(Punct, ")")
		else:
			raise TypeError(spec)

	def comment(self, text:str, pad:int=0):
		self.space(" " * (pad + 1))
		self.token(Comment, "// " + text)

	# Code, as much as the projection needs:

	@contextmanager
	def computed(self, name:str, type_name:str):
		""" A computed property: var name: Type { ... } """
		self.line_break()
		with self.node(VarDecl):
			self.token(Keyword, "var")
			self.space()
			self.token(Name, name)
			self.token(Punct, ":")
			self.space()
			self.type_expr(type_name)
			self.space()
			with self.block(CodeBlock):
				yield

	@contextmanager
	def switch(self, subject:str):
		self.line_break()
		with self.node(SwitchStmt):
			self.token(Keyword, "switch")
			self.space()
			self.token(Name, subject)
			self.space()
			with self.block(CodeBlock, indent=False):
				yield

	def arm(self, tag:str, *result:str, comment:Optional[str]=None, pad:int=0):
		""" case .tag: return result """
		self.line_break()
		with self.node(SwitchCase):
			self.token(Keyword, "case")
			self.space()
			self.token(Punct, ".")
			self.token(Name, tag)
			self.token(Punct, ":")
			with self.indented():
				self.returns(*result)
				if comment is not None:
					self.comment(comment, pad)

	def returns(self, *words:str):
		""" A return statement; words separated by dots are written as member accesses. """
		self.line_break()
		with self.node(ReturnStmt):
			self.token(Keyword, "return")
			self.space()
			for word in words:
				if word == ".":
					self.token(Punct, word)
				elif word == "==":
					self.space()
					self.token(Punct, word)
					self.space()
				else:
					self.token(Name, word)
