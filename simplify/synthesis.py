"""
Build the companion declarations for a declaration that passed the gate.

The output is, in order:
	* one alias declaration per anonymous function payload,
	* the simplified enum: the same cases in the same order, carrying nothing,
	* the projection: a computed property switching over every case,
	* optionally, an equality helper comparing two values by their projections.

Each declaration is a small tree of its own, laid out by a TreeBuilder,
so the host may splice either the nodes or the text.

Alongside the text, SimplifiedType and Projection model the same output
in-process, which is how a host (or a test) can check what the generated
code means without compiling it.
"""
from enum import Enum
from functools import cached_property
from typing import NamedTuple
from . import syntax
from .errors import SynthesisFailed
from .options import Options
from .payload import AliasDecl, note
from .validation import Survey

class SimplifiedVariant(NamedTuple):
	name: str
	note: str

class SimplifiedType(NamedTuple):
	name: str
	variants: tuple[SimplifiedVariant, ...]
	conformances: tuple[str, ...]

	def names(self) -> list[str]:
		return [v.name for v in self.variants]

	def as_enum(self) -> type[Enum]:
		"""
		Equality is the tag and nothing else. So is the hash.
		Each member's value is its case name, which is how to look one up.
		"""
		return Enum(self.name, [(member_name(n), n) for n in self.names()])

def member_name(tag:str) -> str:
	""" Python's enum reserves some names that begin with an underscore, but none that end with three. """
	return tag + "___" if tag.startswith("_") else tag

class Arm(NamedTuple):
	tag: str
	target: str
	note: str

class Value(NamedTuple):
	""" A value of the original sum type: which case, and whatever it carries """
	tag: str
	payload: tuple = ()

class Projection(NamedTuple):
	name: str
	subject: str
	result: str
	arms: tuple[Arm, ...]

	def target_of(self, tag:str) -> str:
		for arm in self.arms:
			if arm.tag == tag:
				return arm.target
		raise ValueError("%r is not a case of %s" % (tag, self.subject))

class Synthesis:
	def __init__(self, simplified:SimplifiedType, projection:Projection, aliases:tuple[AliasDecl, ...], declarations:tuple[syntax.Tree, ...]):
		self.simplified = simplified
		self.projection = projection
		self.aliases = aliases
		self.declarations = declarations

	@cached_property
	def enum(self) -> type[Enum]:
		return self.simplified.as_enum()

	def project(self, value:Value) -> Enum:
		""" The payload goes unexamined. """
		return self.enum(self.projection.target_of(value.tag))


def synthesize(tree:syntax.Tree, survey:Survey, options:Options) -> Synthesis:
	names = [v.name for v in survey.variants]
	if not all(names):
		raise SynthesisFailed(survey.decl, survey.name, "a case has no name")
	if len(set(names)) != len(names):
		raise SynthesisFailed(survey.decl, survey.name, "two cases share a name")

	simplified = SimplifiedType(
		options.type_name,
		tuple(SimplifiedVariant(v.name, note(v.signature)) for v in survey.variants),
		tuple(options.conformances),
	)
	projection = Projection(
		options.projection_name,
		survey.name,
		options.type_name,
		tuple(Arm(v.name, v.name, note(v.signature)) for v in survey.variants),
	)
	width = max(map(len, names)) if options.align else 0
	declarations = [alias_declaration(tree, alias) for alias in survey.aliases]
	declarations.append(simplified_declaration(simplified, options, width))
	declarations.append(projection_declaration(projection, options, width))
	if options.equality_helper:
		declarations.append(helper_declaration(options))
	return Synthesis(simplified, projection, survey.aliases, tuple(declarations))


def _comment(options:Options, name:str, text:str, width:int):
	if options.annotate:
		return {"comment": text, "pad": max(width - len(name), 0)}
	return {}

def alias_declaration(tree:syntax.Tree, alias:AliasDecl) -> syntax.Tree:
	""" typealias AnonymousFunc_0 = (X, Y) -> Bool """
	b = syntax.TreeBuilder()
	b.typealias(alias.name, graft=(tree, alias.function))
	return b.tree()

def simplified_declaration(simplified:SimplifiedType, options:Options, width:int) -> syntax.Tree:
	b = syntax.TreeBuilder()
	with b.enum(simplified.name, inherits=simplified.conformances):
		for v in simplified.variants:
			b.case(v.name, **_comment(options, v.name, v.note, width))
	return b.tree()

def projection_declaration(projection:Projection, options:Options, width:int) -> syntax.Tree:
	b = syntax.TreeBuilder()
	with b.computed(projection.name, projection.result):
		with b.switch("self"):
			for arm in projection.arms:
				b.arm(arm.tag, projection.result, ".", arm.target, **_comment(options, arm.tag, arm.note, width))
	return b.tree()

def helper_declaration(options:Options) -> syntax.Tree:
	""" func isEqualSimplified(_ other: Self) -> Bool { return self.simplified == other.simplified } """
	b = syntax.TreeBuilder()
	with b.node(syntax.FuncDecl):
		b.token(syntax.Keyword, "func")
		b.space()
		b.token(syntax.Name, options.helper_name)
		b.token(syntax.Punct, "(")
		with b.node(syntax.Parameter):
			b.token(syntax.Name, "_")
			b.space()
			b.token(syntax.Name, "other")
			b.token(syntax.Punct, ":")
			b.space()
			b.type_expr("Self")
		b.token(syntax.Punct, ")")
		b.space()
		b.token(syntax.Punct, "->")
		b.space()
		b.type_expr("Bool")
		b.space()
		with b.block(syntax.CodeBlock):
			b.returns("self", ".", options.projection_name, "==", "other", ".", options.projection_name)
	return b.tree()
