"""
The gate a declaration must pass before anything gets synthesized.

Checks run in order and the first failure wins:
	1. It must be an enum.
	2. Nothing declared directly inside it may already have the synthesized name.
	3. At least one case must carry a payload.

Only the third check needs full payload extraction. The extraction it does
is kept, so the synthesizer sees exactly the signatures (and alias numbers)
the gate saw.
"""
from typing import NamedTuple, Optional
from . import syntax
from .errors import NotASumType, AlreadySimplified, NoPayloadedVariant
from .options import Options
from .payload import AliasPool, AliasDecl, PayloadSignature, extract
from .query import first_parent, all_children, first_child

class Variant(NamedTuple):
	name: str
	ordinal: int
	element: syntax.CaseElement
	signature: PayloadSignature

class Survey(NamedTuple):
	decl: syntax.EnumDecl
	name: str
	variants: tuple[Variant, ...]
	aliases: tuple[AliasDecl, ...]

def owner(tree:syntax.Tree, node:syntax.Node) -> Optional[syntax.Declaration]:
	""" The nearest declaration enclosing this node, not counting the node itself """
	return first_parent(tree, node, lambda each, depth: depth > 0 and isinstance(each, syntax.Declaration))

def _owned_by(tree:syntax.Tree, node:syntax.Node, decl:syntax.Node) -> bool:
	found = owner(tree, node)
	return found is not None and found.index == decl.index

def variant_elements(tree:syntax.Tree, decl:syntax.Node) -> list[syntax.CaseElement]:
	""" Every case element of this declaration in source order, but none from nested types """
	return all_children(tree, decl, lambda node, depth: (
		isinstance(node, syntax.CaseElement) and _owned_by(tree, node, decl)
	))

def nested_members(tree:syntax.Tree, decl:syntax.Node) -> list[syntax.Declaration]:
	""" Types, properties and functions declared directly inside this declaration """
	return all_children(tree, decl, lambda node, depth: (
		depth > 0 and isinstance(node, syntax.Declaration) and _owned_by(tree, node, decl)
	))

def nested_member_named(tree:syntax.Tree, decl:syntax.Node, name:str) -> Optional[syntax.Declaration]:
	return first_child(tree, decl, lambda node, depth: (
		depth > 0
		and isinstance(node, syntax.Declaration)
		and tree.name_of(node) == name
		and _owned_by(tree, node, decl)
	))

def survey(tree:syntax.Tree, decl:syntax.Node, options:Options) -> Survey:
	if not isinstance(decl, syntax.EnumDecl):
		raise NotASumType(decl)
	clash = nested_member_named(tree, decl, options.type_name)
	if clash is not None:
		members = nested_members(tree, decl) + variant_elements(tree, decl)
		taken = frozenset(tree.name_of(n) for n in members)
		raise AlreadySimplified(decl, clash, taken)
	pool = AliasPool(options.alias_prefix)
	elements = variant_elements(tree, decl)
	variants = tuple(
		Variant(tree.name_of(element) or "", ordinal, element, extract(tree, element, pool))
		for ordinal, element in enumerate(elements)
	)
	if all(v.signature is None for v in variants):
		raise NoPayloadedVariant(decl, tuple(elements))
	return Survey(decl, tree.name_of(decl) or "", variants, tuple(pool.aliases))
